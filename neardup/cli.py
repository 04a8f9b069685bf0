"""
Command-line entry point: scan a dataset directory and write the HTML report.
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from neardup.core.config import ScoringMode, get_settings
from neardup.core.errors import BaseApplicationError
from neardup.core.logging import configure_logging, get_logger
from neardup.services.detection_pipeline import DetectionPipeline
from neardup.services.report_renderer import write_report
from neardup.tools.readers import load_corpus

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="neardup",
        description="Find the most similar text documents in a directory.",
    )
    parser.add_argument("dataset", help="Directory holding one text document per file.")
    parser.add_argument(
        "-m", "--min-length", type=int, default=settings.min_length,
        help=f"Minimum common substring length (default: {settings.min_length}).",
    )
    parser.add_argument(
        "-k", "--top-k", type=int, default=settings.top_k,
        help=f"Number of pairs to report (default: {settings.top_k}).",
    )
    parser.add_argument(
        "-o", "--output", default=settings.output_path,
        help=f"HTML report path (default: {settings.output_path}).",
    )
    parser.add_argument(
        "--scoring", choices=[mode.value for mode in ScoringMode], default=settings.scoring_mode.value,
        help="Similarity scoring mode.",
    )
    parser.add_argument(
        "-w", "--workers", type=int, default=settings.max_workers,
        help="Threads used to build the similarity matrix.",
    )
    parser.add_argument(
        "--timeout", type=float, default=settings.timeout_seconds,
        help="Abort the run after this many seconds.",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level.")
    parser.add_argument("--json-logs", action="store_true", default=settings.json_logs, help="Emit JSON logs.")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level, json_logs=args.json_logs, log_file=args.log_file)
    settings = get_settings()

    try:
        corpus = load_corpus(
            args.dataset,
            max_documents=settings.max_documents,
            max_document_length=settings.max_document_length,
        )
        documents = [doc.text for doc in corpus]
        report = DetectionPipeline(settings).run(
            documents,
            names=[doc.name for doc in corpus],
            min_length=args.min_length,
            top_k=args.top_k,
            scoring_mode=args.scoring,
            max_workers=args.workers,
            timeout_seconds=args.timeout,
        )
        output = write_report(report, documents, args.output)
    except BaseApplicationError as exc:
        logger.error("cli_failed", error_code=exc.error_code.value, message=exc.message, details=exc.details)
        print(f"error: {exc.message}", file=sys.stderr)
        return 1

    print(f"HTML report written: {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
