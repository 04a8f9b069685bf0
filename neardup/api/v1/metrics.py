"""Metrics API for monitoring detection performance."""
from typing import Any, Dict, Optional

from fastapi import APIRouter
from pydantic import BaseModel

from neardup.services.pipeline_metrics import metrics_collector

router = APIRouter(prefix="/api/v1/metrics", tags=["Metrics"])


class MetricsResponse(BaseModel):
    """Response model for metrics endpoint."""
    pipeline_metrics: Optional[Dict[str, Any]]
    last_run: Optional[Dict[str, Any]]


@router.get("", response_model=MetricsResponse, summary="Get detection metrics")
async def get_metrics() -> MetricsResponse:
    """Aggregated stage timings plus the most recent run."""
    history = metrics_collector.metrics_history
    return MetricsResponse(
        pipeline_metrics=metrics_collector.get_aggregated_stats(),
        last_run=history[-1].to_dict() if history else None,
    )
