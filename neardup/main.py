from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from neardup.api.v1 import detect, health, metrics
from neardup.core.config import get_settings
from neardup.core.errors import BaseApplicationError
from neardup.core.logging import configure_logging, get_logger, LogEvent
from neardup.core.middleware import application_error_handler, error_handler

settings = get_settings()
configure_logging(level=settings.log_level, json_logs=settings.json_logs)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    logger.info(
        LogEvent.APP_STARTED,
        version=settings.version,
        api_prefix=settings.api_v1_prefix,
        min_length=settings.min_length,
        top_k=settings.top_k,
    )
    try:
        yield
    finally:
        logger.info(LogEvent.APP_STOPPED)

app = FastAPI(
    title=settings.project_name,
    version=settings.version,
    openapi_url=f"{settings.api_v1_prefix}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# 浏览器规范：当 allow_origins 为 "*" 时，不能允许 credentials
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 错误处理
app.add_exception_handler(BaseApplicationError, application_error_handler)
app.add_exception_handler(Exception, error_handler)

# 路由注册
app.include_router(
    health.router,
    prefix=f"{settings.api_v1_prefix}/health",
    tags=["health"]
)
app.include_router(detect.router)
app.include_router(metrics.router)

# Prometheus监控
Instrumentator().instrument(app).expose(app)


@app.get("/")
async def root():
    """根路径"""
    return {
        "name": settings.project_name,
        "version": settings.version,
        "docs": "/docs",
        "api_prefix": settings.api_v1_prefix,
    }


@app.get(f"{settings.api_v1_prefix}")
async def api_root():
    """API根路径"""
    return {
        "version": "v1",
        "endpoints": {
            "health": f"{settings.api_v1_prefix}/health",
            "detect": f"{settings.api_v1_prefix}/detect",
            "compare": f"{settings.api_v1_prefix}/compare",
            "metrics": f"{settings.api_v1_prefix}/metrics",
        }
    }
