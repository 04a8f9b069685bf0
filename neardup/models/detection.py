"""
检测数据模型 - API 请求与响应
"""
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from neardup.core.config import ScoringMode
from neardup.services.types import DetectionReport, ReportEntry


class DetectionOverrides(BaseModel):
    """可选的单次检测参数，未提供时使用全局配置"""
    min_length: Optional[int] = Field(default=None, ge=1, description="公共子串最小长度")
    scoring: Optional[ScoringMode] = Field(default=None, description="相似度计分方式")


class DetectRequest(DetectionOverrides):
    """语料检测请求"""
    documents: List[str] = Field(..., min_length=2, description="待检测的文档内容")
    names: Optional[List[str]] = Field(default=None, description="文档名称，与 documents 一一对应")
    top_k: Optional[int] = Field(default=None, ge=0, description="返回的最相似文档对数量")


class CompareRequest(DetectionOverrides):
    """双文档对比请求"""
    left: str
    right: str


class PairResult(BaseModel):
    """单个文档对的检测结果"""
    rank: int
    left: int
    right: int
    left_name: Optional[str] = None
    right_name: Optional[str] = None
    similarity: float
    edit_distance: int
    containment: float
    reverse_containment: float
    left_spans: List[Tuple[int, int]]
    right_spans: List[Tuple[int, int]]
    left_marked: str
    right_marked: str

    @classmethod
    def from_entry(cls, entry: ReportEntry) -> "PairResult":
        return cls(
            **entry.to_dict(),
            left_marked=entry.highlight.left_marked,
            right_marked=entry.highlight.right_marked,
        )


class DetectResponse(BaseModel):
    """语料检测响应"""
    document_count: int
    pair_count: int
    min_length: int
    scoring: ScoringMode
    pairs: List[PairResult]
    matrix: List[List[float]]
    stage_timings: dict

    @classmethod
    def from_report(cls, report: DetectionReport) -> "DetectResponse":
        return cls(
            document_count=report.document_count,
            pair_count=report.pair_count,
            min_length=report.min_length,
            scoring=ScoringMode(report.scoring_mode),
            pairs=[PairResult.from_entry(entry) for entry in report.entries],
            matrix=report.matrix.round(4).tolist(),
            stage_timings=report.stage_timings,
        )
