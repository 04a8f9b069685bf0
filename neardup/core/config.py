"""
配置管理 - 使用Pydantic Settings实现环境变量管理
所有检测参数均可通过 NEARDUP_ 前缀的环境变量或 .env 文件覆盖
"""
from enum import Enum
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScoringMode(str, Enum):
    """相似度计分方式"""
    SUM = "sum"  # 公共子串长度之和 / 较长文档长度 (截断到1.0)
    COVERAGE = "coverage"  # 被公共子串覆盖的位置数 / 较长文档长度


class Settings(BaseSettings):
    """应用配置类 - 所有配置项通过环境变量管理"""

    # API配置
    api_v1_prefix: str = Field(default="/api/v1", description="API路由前缀")
    project_name: str = Field(default="Near-Duplicate Detector", description="项目名称")
    version: str = Field(default="1.0.0", description="版本号")

    # 检测配置
    min_length: int = Field(default=5, description="公共子串最小长度")
    top_k: int = Field(default=10, description="报告中输出的最相似文档对数量")
    scoring_mode: ScoringMode = Field(default=ScoringMode.SUM, description="相似度计分方式")

    # 资源上限
    max_documents: int = Field(default=1000, description="单次运行最多文档数")
    max_document_length: int = Field(default=200_000, description="单个文档最大字符数")
    max_containment_substrings: int = Field(
        default=5_000_000,
        description="Broder包含度计算时单侧允许生成的最大子串数量",
    )
    max_common_substring_code_units: int = Field(
        default=200_000_000,
        description="单个文档对的公共子串集合允许保存的最大字符总数",
    )

    # 性能配置
    max_workers: int = Field(default=1, description="相似度矩阵并行计算的线程数 (1为顺序执行)")
    timeout_seconds: Optional[float] = Field(default=None, description="单次检测的超时时间(秒)")

    # 输出配置
    output_path: str = Field(default="similar_texts.html", description="HTML报告输出路径")

    # 日志配置
    log_level: str = Field(default="INFO", description="日志级别")
    json_logs: bool = Field(default=False, description="是否输出JSON格式日志")

    # CORS 配置
    cors_allow_origins: str = Field(default="*", description="允许的跨域来源，逗号分隔")

    model_config = SettingsConfigDict(
        env_prefix="NEARDUP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # 忽略未定义的环境变量
    )

    @field_validator("min_length", "max_documents", "max_document_length",
                     "max_containment_substrings", "max_common_substring_code_units",
                     "max_workers")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be >= 1")
        return value

    @field_validator("top_k")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("must be >= 0")
        return value

    @property
    def is_parallel(self) -> bool:
        """是否启用并行矩阵计算"""
        return self.max_workers > 1

    def get_cors_origins(self) -> list[str]:
        """返回允许的 CORS 来源列表"""
        raw = (self.cors_allow_origins or "").strip()
        if not raw:
            return ["*"]
        return [o.strip() for o in raw.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    """
    获取配置单例
    使用lru_cache确保全局只有一个Settings实例
    """
    return Settings()
