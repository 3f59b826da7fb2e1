#!/usr/bin/env python3
"""
Notaps 语言学习服务 - FastAPI 主应用入口
Description: 提供词汇查询、发音评分、单词掌握度追踪、学习会话和整体进度的 REST API
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from notaps.config.settings import settings
from notaps.engine.scorer import InvalidInput
from notaps.utils.logger import setup_logging
from notaps.utils.database import init_db, check_db_connection
from notaps.utils.helpers import format_timestamp
from notaps.api.routes import vocabulary, progress, practice, mastery, sessions

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    应用生命周期管理
    - 启动时初始化日志和数据库
    """
    setup_logging()
    logger.info("初始化语言学习服务...")

    try:
        init_db()
        logger.info("数据库初始化完成")
    except Exception as e:
        logger.error(f"应用启动失败: {e}")
        raise

    logger.info("语言学习服务启动完成")

    yield  # 应用运行期间

    logger.info("语言学习服务已关闭")


def create_application() -> FastAPI:
    """创建并配置FastAPI应用实例"""

    app = FastAPI(
        title=settings.APP_NAME,
        description="词汇学习与发音练习服务",
        version=settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )

    # 配置CORS中间件
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 全局异常处理
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request, exc):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail}
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request, exc):
        return JSONResponse(
            status_code=422,
            content={"error": "请求参数不合法", "details": jsonable_encoder(exc.errors())}
        )

    @app.exception_handler(InvalidInput)
    async def invalid_input_handler(request, exc):
        return JSONResponse(
            status_code=400,
            content={"error": str(exc)}
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request, exc):
        logger.error(f"未处理的异常: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "内部服务器错误"}
        )

    # 注册API路由
    app.include_router(vocabulary.router, prefix="/api/vocabulary", tags=["词汇"])
    app.include_router(progress.router, prefix="/api/progress", tags=["学习进度"])
    app.include_router(practice.router, prefix="/api/practice", tags=["发音练习"])
    app.include_router(mastery.router, prefix="/api/mastery", tags=["单词掌握度"])
    app.include_router(sessions.router, prefix="/api/sessions", tags=["学习会话"])

    return app


# 创建应用实例
app = create_application()


@app.get("/")
async def root():
    """根端点 - 服务状态检查"""
    return {
        "status": "running",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "timestamp": format_timestamp()
    }


@app.get("/health")
async def health_check():
    """健康检查端点"""
    db_status = check_db_connection()

    return {
        "status": "healthy" if db_status else "unhealthy",
        "database": "connected" if db_status else "disconnected",
        "timestamp": format_timestamp()
    }


if __name__ == "__main__":
    """开发环境直接运行"""
    uvicorn.run(
        "notaps.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=True,
        log_level="info",
    )
