"""Near-duplicate text detection over a document corpus."""

__version__ = "1.0.0"
