"""FastAPI 应用主文件

app 创建 + lifespan 管理：DB 初始化/关闭 + dispatcher 恢复 + 路由注册。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from betmanager.core.config import get_db_path
from betmanager.core.dispatcher import CommandDispatcher
from betmanager.core.store import create_store_group
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from .middleware.logging_config import setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .middleware.trace_mw import TraceMiddleware
from .responses import error_response
from .routes import accounts, health, logs, packs, settings, tasks
from .services.sse_hub import SSEHub

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时恢复快照，关闭时清理连接"""
    store_group = await create_store_group(get_db_path())
    app.state.store_group = store_group

    app.state.sse_hub = SSEHub()

    dispatcher = await CommandDispatcher.load(store_group)
    dispatcher.add_listener(app.state.sse_hub.publish_entries)
    app.state.dispatcher = dispatcher

    log.info(
        "gateway_started",
        tasks=len(dispatcher.state.tasks),
        accounts=len(dispatcher.state.accounts),
        packs=len(dispatcher.state.packs),
    )

    yield

    # 关闭：清理数据库连接
    if hasattr(app.state, "store_group") and app.state.store_group:
        await app.state.store_group.close()


async def _validation_error_handler(request: Request, exc: RequestValidationError):
    """请求体 / 参数校验失败统一为 INVALID_INPUT"""
    errors = exc.errors()
    message = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in errors
    )
    return error_response("INVALID_INPUT", message or "Invalid request")


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="BetManager Gateway",
        version="0.1.0",
        description="BetManager 任务 / 账号 / pack 管理 API",
        lifespan=lifespan,
    )

    # 注册中间件（顺序：先 Trace 后 Logging）
    app.add_middleware(TraceMiddleware)
    app.add_middleware(LoggingMiddleware)

    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    # 初始化日志
    setup_logging()

    # 注册路由
    app.include_router(tasks.router, tags=["tasks"])
    app.include_router(accounts.router, tags=["accounts"])
    app.include_router(packs.router, tags=["packs"])
    app.include_router(logs.router, tags=["logs"])
    app.include_router(settings.router, tags=["settings"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
