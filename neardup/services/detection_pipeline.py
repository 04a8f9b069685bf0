"""Orchestration layer: corpus -> similarity matrix -> ranking -> report entries."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Union
from uuid import uuid4

import numpy as np

from neardup.core.config import ScoringMode, Settings
from neardup.core.deadline import Deadline
from neardup.core.errors import (
    BaseApplicationError,
    DetectionError,
    InvalidInputError,
    ResourceLimitError,
)
from neardup.core.logging import LogEvent
from neardup.services.base_service import BaseService
from neardup.services.containment import containment
from neardup.services.edit_distance import edit_distance
from neardup.services.highlighter import HighlightService
from neardup.services.pipeline_metrics import MetricsCollector, metrics_collector
from neardup.services.ranking import rank_pairs
from neardup.services.sequences import validate_documents, validate_min_length, validate_pair
from neardup.services.similarity import (
    build_score_matrices,
    resolve_scoring_mode,
    score_common_substrings,
)
from neardup.services.substring_extractor import find_common_substrings
from neardup.services.types import DetectionReport, DocumentPair, ReportEntry, Text


@dataclass
class DetectionOptions:
    """Per-run knobs, defaulting to the configured settings."""
    min_length: int
    top_k: int
    scoring_mode: ScoringMode
    max_workers: int
    timeout_seconds: Optional[float]

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        min_length: Optional[int] = None,
        top_k: Optional[int] = None,
        scoring_mode: Union[ScoringMode, str, None] = None,
        max_workers: Optional[int] = None,
        timeout_seconds: Optional[float] = None,
    ) -> "DetectionOptions":
        options = cls(
            min_length=settings.min_length if min_length is None else min_length,
            top_k=settings.top_k if top_k is None else top_k,
            scoring_mode=resolve_scoring_mode(
                settings.scoring_mode if scoring_mode is None else scoring_mode
            ),
            max_workers=settings.max_workers if max_workers is None else max_workers,
            timeout_seconds=settings.timeout_seconds if timeout_seconds is None else timeout_seconds,
        )
        validate_min_length(options.min_length)
        if isinstance(options.top_k, bool) or not isinstance(options.top_k, int) or options.top_k < 0:
            raise InvalidInputError("top_k must be a non-negative integer", field="top_k", value=options.top_k)
        if options.max_workers < 1:
            raise InvalidInputError("max_workers must be >= 1", field="max_workers", value=options.max_workers)
        if options.timeout_seconds is not None and options.timeout_seconds <= 0:
            raise InvalidInputError(
                "timeout_seconds must be positive", field="timeout_seconds", value=options.timeout_seconds
            )
        return options


class DetectionPipeline(BaseService):
    """Facade running a full near-duplicate detection over one corpus."""

    def _initialize(self) -> None:
        self.highlighter = HighlightService()

    # ------------------------------------------------------------------
    # Corpus-wide detection
    # ------------------------------------------------------------------

    def run(
        self,
        documents: Sequence[Text],
        names: Optional[Sequence[str]] = None,
        **overrides,
    ) -> DetectionReport:
        """Score all pairs, rank them and analyse the top K in detail."""
        self._ensure_initialized()

        options = DetectionOptions.from_settings(self.settings, **overrides)
        docs = self._validate_corpus(documents)
        names = self._resolve_names(names, len(docs))

        run_id = uuid4().hex[:12]
        log = self.logger.bind(run_id=run_id)
        deadline = Deadline(options.timeout_seconds)
        collector = MetricsCollector()
        collector.start_pipeline(run_id, document_count=len(docs))
        pair_count = len(docs) * (len(docs) - 1) // 2

        log.info(
            LogEvent.DETECTION_STARTED,
            documents=len(docs),
            pairs=pair_count,
            min_length=options.min_length,
            top_k=options.top_k,
            scoring_mode=options.scoring_mode.value,
            max_workers=options.max_workers,
        )

        stage = "similarity_matrix"
        try:
            collector.start_stage(stage, pair_count)
            matrix, ranking_scores = build_score_matrices(
                docs,
                options.min_length,
                mode=options.scoring_mode,
                max_workers=options.max_workers,
                deadline=deadline,
                max_code_units=self.settings.max_common_substring_code_units,
            )
            collector.end_stage(stage, pair_count)
            log.info(LogEvent.MATRIX_BUILT, size=len(docs), max_score=float(matrix.max(initial=0.0)))

            stage = "ranking"
            collector.start_stage(stage, pair_count)
            pairs = rank_pairs(ranking_scores, options.top_k)
            collector.end_stage(stage, len(pairs))
            log.info(LogEvent.PAIRS_RANKED, selected=len(pairs))

            stage = "pair_analysis"
            collector.start_stage(stage, len(pairs))
            entries = [
                self._analyze_pair(rank, pair, docs, names, matrix, options, deadline)
                for rank, pair in enumerate(pairs, start=1)
            ]
            collector.end_stage(stage, len(entries))
        except BaseApplicationError as exc:
            log.error(
                LogEvent.DETECTION_FAILED,
                error_code=exc.error_code.value,
                message=exc.message,
                details=exc.details,
            )
            raise
        except MemoryError as exc:
            log.error(LogEvent.DETECTION_FAILED, stage=stage, error="out of memory")
            raise DetectionError("not enough memory for the corpus", stage=stage) from exc

        metrics = collector.end_pipeline()
        metrics_collector.record(metrics)
        log.info(
            LogEvent.DETECTION_COMPLETED,
            entries=len(entries),
            execution_time=round(metrics.total_execution_time, 3),
        )

        return DetectionReport(
            document_count=len(docs),
            min_length=options.min_length,
            top_k=options.top_k,
            scoring_mode=options.scoring_mode.value,
            matrix=matrix,
            entries=entries,
            names=names,
            stage_timings=metrics.stage_timings(),
        )

    # ------------------------------------------------------------------
    # Single pair comparison
    # ------------------------------------------------------------------

    def compare(
        self,
        left: Text,
        right: Text,
        *,
        left_name: Optional[str] = None,
        right_name: Optional[str] = None,
        **overrides,
    ) -> ReportEntry:
        """All three metrics plus the highlight for one document pair."""
        self._ensure_initialized()

        options = DetectionOptions.from_settings(self.settings, **overrides)
        validate_pair(left, right)
        self._validate_corpus([left, right])
        deadline = Deadline(options.timeout_seconds)

        common = find_common_substrings(
            left,
            right,
            options.min_length,
            deadline=deadline,
            max_code_units=self.settings.max_common_substring_code_units,
        )
        return self._build_entry(
            rank=1,
            pair=DocumentPair(0, 1),
            left=left,
            right=right,
            similarity=score_common_substrings(common, options.scoring_mode),
            common=common,
            deadline=deadline,
            left_name=left_name,
            right_name=right_name,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _analyze_pair(
        self,
        rank: int,
        pair: DocumentPair,
        docs: List[Text],
        names: List[str],
        matrix: np.ndarray,
        options: DetectionOptions,
        deadline: Deadline,
    ) -> ReportEntry:
        left, right = docs[pair.left], docs[pair.right]
        # computed once and shared with the highlighter
        common = find_common_substrings(
            left,
            right,
            options.min_length,
            deadline=deadline,
            max_code_units=self.settings.max_common_substring_code_units,
        )
        entry = self._build_entry(
            rank=rank,
            pair=pair,
            left=left,
            right=right,
            similarity=float(matrix[pair.left, pair.right]),
            common=common,
            deadline=deadline,
            left_name=names[pair.left],
            right_name=names[pair.right],
        )
        self.logger.debug(
            LogEvent.PAIR_ANALYZED,
            rank=rank,
            left=pair.left,
            right=pair.right,
            similarity=round(entry.similarity, 4),
            edit_distance=entry.edit_distance,
            common_substrings=len(common),
        )
        return entry

    def _build_entry(self, *, rank, pair, left, right, similarity, common, deadline,
                     left_name=None, right_name=None) -> ReportEntry:
        limit = self.settings.max_containment_substrings
        return ReportEntry(
            rank=rank,
            pair=pair,
            similarity=similarity,
            edit_distance=edit_distance(left, right, deadline=deadline),
            containment=containment(left, right, max_substrings=limit, deadline=deadline),
            reverse_containment=containment(right, left, max_substrings=limit, deadline=deadline),
            highlight=self.highlighter.highlight(left, right, common),
            left_name=left_name,
            right_name=right_name,
        )

    def _validate_corpus(self, documents: Sequence[Text]) -> List[Text]:
        docs = validate_documents(documents)
        if len(docs) > self.settings.max_documents:
            raise ResourceLimitError("corpus size", self.settings.max_documents, len(docs))
        for doc in docs:
            if len(doc) > self.settings.max_document_length:
                raise ResourceLimitError("document length", self.settings.max_document_length, len(doc))
        return docs

    @staticmethod
    def _resolve_names(names: Optional[Sequence[str]], count: int) -> List[str]:
        if names is None:
            return [f"document {index}" for index in range(count)]
        names = list(names)
        if len(names) != count:
            raise InvalidInputError(
                f"Expected {count} document names, got {len(names)}", field="names", value=len(names)
            )
        return names
