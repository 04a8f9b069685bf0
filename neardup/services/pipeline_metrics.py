"""Pipeline metrics collection for performance monitoring."""
from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, Dict, List, Optional

from neardup.core.logging import get_logger, LogEvent

logger = get_logger(__name__)


@dataclass
class StageMetrics:
    """Metrics for a single pipeline stage."""
    name: str
    started_at: float = field(default_factory=time.perf_counter)
    execution_time: float = 0.0
    items_before: int = 0
    items_after: int = 0

    @property
    def reduction_rate(self) -> float:
        """Share of items dropped by the stage."""
        if self.items_before == 0:
            return 0.0
        return 1.0 - (self.items_after / self.items_before)


@dataclass
class PipelineMetrics:
    """Aggregated metrics for one detection run."""
    pipeline_id: str
    start_time: float = field(default_factory=time.perf_counter)
    end_time: Optional[float] = None
    stages: Dict[str, StageMetrics] = field(default_factory=dict)
    document_count: int = 0
    pair_count: int = 0

    @property
    def total_execution_time(self) -> float:
        if self.end_time is None:
            return time.perf_counter() - self.start_time
        return self.end_time - self.start_time

    def stage_timings(self) -> Dict[str, float]:
        return {name: round(stage.execution_time, 6) for name, stage in self.stages.items()}

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to dictionary for reporting."""
        return {
            "pipeline_id": self.pipeline_id,
            "total_execution_time": round(self.total_execution_time, 3),
            "document_count": self.document_count,
            "pair_count": self.pair_count,
            "stages": {
                name: {
                    "execution_time": round(stage.execution_time, 3),
                    "items_before": stage.items_before,
                    "items_after": stage.items_after,
                    "reduction_rate": round(stage.reduction_rate, 3),
                }
                for name, stage in self.stages.items()
            }
        }


class MetricsCollector:
    """Collects and aggregates pipeline metrics."""

    def __init__(self, history_size: int = 100):
        # oldest runs are dropped once history_size is reached
        self.metrics_history: Deque[PipelineMetrics] = deque(maxlen=history_size)
        self.current_metrics: Optional[PipelineMetrics] = None

    def start_pipeline(self, pipeline_id: str, document_count: int = 0) -> None:
        """Start tracking a new pipeline execution."""
        self.current_metrics = PipelineMetrics(
            pipeline_id=pipeline_id,
            document_count=document_count,
            pair_count=document_count * (document_count - 1) // 2,
        )

    def start_stage(self, stage_name: str, item_count: int) -> None:
        """Start tracking a stage execution."""
        if not self.current_metrics:
            return

        self.current_metrics.stages[stage_name] = StageMetrics(
            name=stage_name,
            items_before=item_count
        )

    def end_stage(self, stage_name: str, item_count: int) -> None:
        """End tracking a stage execution."""
        if not self.current_metrics or stage_name not in self.current_metrics.stages:
            return

        stage = self.current_metrics.stages[stage_name]
        stage.execution_time = time.perf_counter() - stage.started_at
        stage.items_after = item_count

        logger.debug(
            LogEvent.STAGE_COMPLETED,
            pipeline_id=self.current_metrics.pipeline_id,
            stage=stage_name,
            execution_time=round(stage.execution_time, 3),
            items_before=stage.items_before,
            items_after=item_count,
        )

    def end_pipeline(self) -> PipelineMetrics:
        """End tracking pipeline execution and return metrics."""
        if not self.current_metrics:
            raise ValueError("No active pipeline metrics")

        self.current_metrics.end_time = time.perf_counter()
        self.metrics_history.append(self.current_metrics)

        metrics = self.current_metrics
        self.current_metrics = None
        return metrics

    def record(self, metrics: PipelineMetrics) -> None:
        """Store metrics of a run tracked by another collector."""
        self.metrics_history.append(metrics)

    def get_aggregated_stats(self) -> Dict[str, Any]:
        """Average stage timings over every recorded run."""
        if not self.metrics_history:
            return {}

        totals: Dict[str, List[float]] = {}
        for metrics in self.metrics_history:
            for stage_name, stage in metrics.stages.items():
                totals.setdefault(stage_name, []).append(stage.execution_time)

        total_pipelines = len(self.metrics_history)
        return {
            "total_pipelines": total_pipelines,
            "stage_stats": {
                name: {"avg_execution_time": round(sum(times) / len(times), 3), "count": len(times)}
                for name, times in totals.items()
            },
            "overall_avg_execution_time": round(
                sum(m.total_execution_time for m in self.metrics_history) / total_pipelines, 3
            ),
        }


# Global metrics collector instance
metrics_collector = MetricsCollector()
