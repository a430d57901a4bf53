"""FastAPI 应用主文件

app 创建 + lifespan 管理：Store / Loader 初始化、后台引导加载、关闭时取消加载。
"""

import asyncio
import contextlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from salesboard import __version__
from salesboard.core.config import load_loader_config
from salesboard.core.store import TaskStore
from salesboard.loader import build_task_loader

from .middleware.logging_config import setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .routes import health, metrics, tasks, undo

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时后台加载任务，关闭时取消未完成的加载"""
    loader_config = load_loader_config()
    app.state.loader_config = loader_config

    store = TaskStore(undo_timeout_s=loader_config.undo_timeout_s)
    loader = build_task_loader(store, loader_config)
    app.state.store = store
    app.state.loader = loader

    # 后台引导加载，不阻塞启动
    load_task = asyncio.create_task(loader.load())
    log.info(
        "task_loader_started",
        tasks_url=loader_config.tasks_url,
        seed_count=loader_config.seed_count,
    )

    yield

    # 关闭：取消仍在进行的加载，被取消的加载不会写入 Store
    if not load_task.done():
        load_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await load_task
        log.info("task_loader_cancelled")


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="SalesBoard Gateway",
        version=__version__,
        description="SalesBoard 任务 ROI 追踪 API",
        lifespan=lifespan,
    )

    app.add_middleware(LoggingMiddleware)

    setup_logging()

    app.include_router(tasks.router, tags=["tasks"])
    app.include_router(undo.router, tags=["undo"])
    app.include_router(metrics.router, tags=["metrics"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
