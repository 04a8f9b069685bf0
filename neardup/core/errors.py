"""
错误处理模块 - 定义自定义异常类
清晰的错误分类：输入校验、资源上限、超时、语料缺失、检测失败
"""
from enum import Enum
from typing import Optional, Any, Dict

from fastapi import status


class ErrorCode(str, Enum):
    """错误代码枚举"""
    # 客户端错误
    INVALID_INPUT = "INVALID_INPUT"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    RESOURCE_LIMIT_EXCEEDED = "RESOURCE_LIMIT_EXCEEDED"

    # 服务端错误
    INTERNAL_ERROR = "INTERNAL_ERROR"
    COMPUTATION_TIMEOUT = "COMPUTATION_TIMEOUT"

    # 业务逻辑错误
    DETECTION_FAILED = "DETECTION_FAILED"


class BaseApplicationError(Exception):
    """应用基础异常类"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        return {
            "error_code": self.error_code.value,
            "message": self.message,
            "details": self.details
        }


class InvalidInputError(BaseApplicationError):
    """输入验证错误"""
    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)

        super().__init__(
            message=message,
            error_code=ErrorCode.INVALID_INPUT,
            details=details,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY
        )


class CorpusNotFoundError(BaseApplicationError):
    """语料目录不存在"""
    def __init__(self, path: str):
        super().__init__(
            message=f"Corpus directory '{path}' not found",
            error_code=ErrorCode.RESOURCE_NOT_FOUND,
            details={"path": path},
            status_code=status.HTTP_404_NOT_FOUND
        )


class ResourceLimitError(BaseApplicationError):
    """资源上限错误 - 语料过大、文档过长或子串集合超限"""
    def __init__(self, resource: str, limit: int, actual: int):
        super().__init__(
            message=f"{resource} exceeds the configured limit ({actual} > {limit})",
            error_code=ErrorCode.RESOURCE_LIMIT_EXCEEDED,
            details={"resource": resource, "limit": limit, "actual": actual},
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
        )


class ComputationTimeoutError(BaseApplicationError):
    """计算超时错误"""
    def __init__(self, stage: str, timeout: float):
        super().__init__(
            message=f"Computation exceeded {timeout:.2f}s during {stage}",
            error_code=ErrorCode.COMPUTATION_TIMEOUT,
            details={"stage": stage, "timeout_seconds": timeout},
            status_code=status.HTTP_504_GATEWAY_TIMEOUT
        )


class DetectionError(BaseApplicationError):
    """检测失败错误"""
    def __init__(self, message: str, stage: Optional[str] = None):
        details = {}
        if stage:
            details["stage"] = stage

        super().__init__(
            message=f"Detection failed: {message}",
            error_code=ErrorCode.DETECTION_FAILED,
            details=details,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
