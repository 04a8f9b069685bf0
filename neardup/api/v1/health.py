from typing import Any, Dict

from fastapi import APIRouter, Depends

from neardup.api.deps import get_app_settings
from neardup.core.config import Settings

router = APIRouter()


@router.get("/")
async def health_check(settings: Settings = Depends(get_app_settings)) -> Dict[str, Any]:
    """
    健康检查

    返回应用状态与当前生效的检测参数和资源上限
    """
    return {
        "status": "healthy",
        "version": settings.version,
        "detection": {
            "min_length": settings.min_length,
            "top_k": settings.top_k,
            "scoring_mode": settings.scoring_mode.value,
            "max_workers": settings.max_workers,
            "parallel": settings.is_parallel,
        },
        "limits": {
            "max_documents": settings.max_documents,
            "max_document_length": settings.max_document_length,
            "max_containment_substrings": settings.max_containment_substrings,
            "max_common_substring_code_units": settings.max_common_substring_code_units,
            "timeout_seconds": settings.timeout_seconds,
        },
    }


@router.get("/live")
async def liveness_check() -> Dict[str, str]:
    """
    存活检查

    简单的存活探针，用于Kubernetes等容器编排工具
    """
    return {"status": "alive"}
