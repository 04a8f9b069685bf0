"""
服务模块 - 相似度计算核心与检测流程
"""

from neardup.services.base_service import BaseService
from neardup.services.containment import containment
from neardup.services.detection_pipeline import DetectionOptions, DetectionPipeline
from neardup.services.edit_distance import edit_distance
from neardup.services.highlighter import HighlightService, highlight
from neardup.services.ranking import rank_pairs
from neardup.services.similarity import (
    build_score_matrices,
    build_similarity_matrix,
    score_common_substrings,
    similarity_score,
)
from neardup.services.substring_extractor import find_common_substrings

__all__ = [
    # 基础类
    'BaseService',

    # 相似度核心
    'find_common_substrings',
    'edit_distance',
    'containment',
    'similarity_score',
    'score_common_substrings',
    'build_score_matrices',
    'build_similarity_matrix',
    'rank_pairs',
    'highlight',
    'HighlightService',

    # 检测流程
    'DetectionOptions',
    'DetectionPipeline',
]
