"""Version 1 API routers."""

from . import detect, health, metrics

__all__ = ["detect", "health", "metrics"]
