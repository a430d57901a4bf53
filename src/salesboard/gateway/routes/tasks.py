"""任务路由

GET    /api/tasks: 派生并排序后的任务列表。
GET    /api/tasks/{task_id}: 首个匹配的任务。
POST   /api/tasks: 创建任务（字段强制修正，不拒绝）。
PATCH  /api/tasks/{task_id}: 合并更新。
PUT    /api/tasks/{task_id}/details: 详情编辑（收入、耗时须 > 0）。
DELETE /api/tasks/{task_id}: 删除并进入待撤销状态。
"""

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from starlette.responses import JSONResponse

from salesboard.core.derivation import with_derived
from salesboard.core.models import DerivedTask

from ..deps import get_store
from ..services.task_service import TaskEditRejectedError, TaskService
from .undo import UndoResponse, undo_response

router = APIRouter()


class TaskListResponse(BaseModel):
    """任务列表响应"""

    tasks: list[DerivedTask]


class TaskDetailsRequest(BaseModel):
    """详情编辑请求体"""

    model_config = ConfigDict(populate_by_name=True)

    revenue: float | None = Field(default=None, description="收入")
    time_taken: float | None = Field(default=None, alias="timeTaken", description="耗时（小时）")
    notes: str | None = Field(default=None, description="备注，空白表示清除")


def _not_found(task_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={
            "error": {
                "code": "TASK_NOT_FOUND",
                "message": f"Task with id {task_id} does not exist",
            }
        },
    )


@router.get("/api/tasks", response_model=TaskListResponse)
async def list_tasks(store=Depends(get_store)):
    """按展示顺序返回全部任务（含 roi）"""
    return TaskListResponse(tasks=store.derived_sorted())


@router.get("/api/tasks/{task_id}", response_model=DerivedTask)
async def get_task(task_id: str, store=Depends(get_store)):
    """查询任务，重复 id 时返回首个匹配"""
    task = store.get_task(task_id)
    if task is None:
        return _not_found(task_id)
    return with_derived(task)


@router.post("/api/tasks", response_model=DerivedTask, status_code=201)
async def create_task(
    body: dict[str, Any],
    store=Depends(get_store),
):
    """创建任务"""
    task = TaskService(store).create_task(body)
    return with_derived(task)


@router.patch("/api/tasks/{task_id}", response_model=DerivedTask)
async def update_task(
    task_id: str,
    body: dict[str, Any],
    store=Depends(get_store),
):
    """合并更新任务，不存在时返回 404"""
    task = TaskService(store).update_task(task_id, body)
    if task is None:
        return _not_found(task_id)
    return with_derived(task)


@router.put("/api/tasks/{task_id}/details", response_model=DerivedTask)
async def edit_task_details(
    task_id: str,
    body: TaskDetailsRequest,
    store=Depends(get_store),
):
    """详情编辑

    - 收入或耗时不大于 0（或非有限值）返回 422，Store 不变
    - 未提交 notes 时保留原备注，提交空白 notes 清除备注
    - 不存在的任务返回 404
    """
    try:
        task = TaskService(store).edit_details(
            task_id, body.model_dump(by_alias=True, exclude_unset=True)
        )
    except TaskEditRejectedError as e:
        return JSONResponse(
            status_code=422,
            content={
                "error": {
                    "code": "TASK_EDIT_REJECTED",
                    "message": str(e),
                    "field": e.field,
                }
            },
        )

    if task is None:
        return _not_found(task_id)
    return with_derived(task)


@router.delete("/api/tasks/{task_id}", response_model=UndoResponse)
async def delete_task(task_id: str, store=Depends(get_store)):
    """删除首个匹配任务，返回撤销状态（未知 id 同样返回 200，并清空待撤销）"""
    store.delete_task(task_id)
    return undo_response(store)
