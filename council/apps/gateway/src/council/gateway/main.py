"""FastAPI 应用主文件

app 创建 + lifespan 管理：会话存储目录初始化 + 路由注册。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from council.core.store import sessions_path
from fastapi import FastAPI

from .config import load_gateway_config
from .middleware.logging_config import setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .middleware.session_mw import SessionContextMiddleware
from .routes import health, post, sessions, status
from .services.session_service import SessionService

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时确保会话根目录存在"""
    root = sessions_path()
    root.mkdir(parents=True, exist_ok=True)
    log.info("gateway_started", sessions_dir=str(root))

    yield

    log.info("gateway_stopped")


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="Council Gateway",
        version="0.1.0",
        description="Council 会话查看与 Moderator 发言 API",
        lifespan=lifespan,
    )

    app.state.gateway_config = load_gateway_config()
    app.state.session_service = SessionService()

    # 注册中间件（顺序：先 Session 上下文后 Logging）
    app.add_middleware(SessionContextMiddleware)
    app.add_middleware(LoggingMiddleware)

    setup_logging()

    app.include_router(status.router, tags=["status"])
    app.include_router(post.router, tags=["post"])
    app.include_router(sessions.router, tags=["sessions"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
