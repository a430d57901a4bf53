"""撤销路由

GET  /api/undo: 当前撤销状态。
POST /api/undo: 恢复最近一次删除。
POST /api/undo/dismiss: 放弃撤销。
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from salesboard.core.models import Task, UndoState
from salesboard.core.store import TaskStore

from ..deps import get_store

router = APIRouter()


class UndoResponse(BaseModel):
    """撤销状态响应"""

    model_config = ConfigDict(populate_by_name=True)

    state: UndoState
    undo_visible: bool = Field(alias="undoVisible")
    last_deleted: Task | None = Field(default=None, alias="lastDeleted")
    restored: Task | None = None


def undo_response(store: TaskStore, restored: Task | None = None) -> UndoResponse:
    return UndoResponse(
        state=store.undo_state,
        undo_visible=store.undo_visible,
        last_deleted=store.last_deleted,
        restored=restored,
    )


@router.get("/api/undo", response_model=UndoResponse)
async def get_undo_state(store=Depends(get_store)):
    return undo_response(store)


@router.post("/api/undo", response_model=UndoResponse)
async def undo_delete(store=Depends(get_store)):
    """恢复待撤销任务；无待撤销时为无操作"""
    restored = store.undo_delete()
    return undo_response(store, restored=restored)


@router.post("/api/undo/dismiss", response_model=UndoResponse)
async def dismiss_undo(store=Depends(get_store)):
    store.dismiss_undo()
    return undo_response(store)
