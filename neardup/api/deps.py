from neardup.core.config import Settings, get_settings
from neardup.services.detection_pipeline import DetectionPipeline


def get_app_settings() -> Settings:
    """获取配置单例"""
    return get_settings()


def get_detection_pipeline() -> DetectionPipeline:
    """获取检测流程服务"""
    return DetectionPipeline(get_settings())
