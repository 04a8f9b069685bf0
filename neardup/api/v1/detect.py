"""Detection APIs: whole-corpus ranking and single-pair comparison."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from neardup.core.logging import get_logger
from neardup.models.detection import CompareRequest, DetectRequest, DetectResponse, PairResult
from neardup.api.deps import get_detection_pipeline
from neardup.services.detection_pipeline import DetectionPipeline

logger = get_logger(__name__)
router = APIRouter(prefix="/api/v1", tags=["Detection"])


# CPU-bound work: plain def so FastAPI runs it in the threadpool
@router.post("/detect", response_model=DetectResponse, summary="Rank the most similar document pairs")
def detect(
    payload: DetectRequest,
    pipeline: DetectionPipeline = Depends(get_detection_pipeline),
) -> DetectResponse:
    report = pipeline.run(
        payload.documents,
        names=payload.names,
        min_length=payload.min_length,
        top_k=payload.top_k,
        scoring_mode=payload.scoring,
    )
    return DetectResponse.from_report(report)


@router.post("/compare", response_model=PairResult, summary="Compare two documents")
def compare(
    payload: CompareRequest,
    pipeline: DetectionPipeline = Depends(get_detection_pipeline),
) -> PairResult:
    entry = pipeline.compare(
        payload.left,
        payload.right,
        min_length=payload.min_length,
        scoring_mode=payload.scoring,
    )
    return PairResult.from_entry(entry)
