"""依赖注入模块 -- 通过 FastAPI Depends 注入 Store / Loader 实例

实例通过 app.state 管理，在 lifespan 中初始化/清理。
"""

from fastapi import Request

from salesboard.core.store import TaskStore
from salesboard.loader import TaskLoader


def get_store(request: Request) -> TaskStore:
    """从 app.state 获取 TaskStore，并惰性检查撤销超时"""
    store: TaskStore = request.app.state.store
    store.expire_undo()
    return store


def get_loader(request: Request) -> TaskLoader | None:
    """从 app.state 获取 TaskLoader 实例"""
    return getattr(request.app.state, "loader", None)
