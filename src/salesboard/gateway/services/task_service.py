"""TaskService -- 网关侧任务操作

包装 TaskStore 的变更接口，并承载详情编辑的业务校验：
收入与耗时必须为严格大于 0 的有限数，校验失败时 Store 保持不变。
"""

import math
from collections.abc import Mapping
from typing import Any

import structlog

from salesboard.core.models import Task
from salesboard.core.store import TaskStore

log = structlog.get_logger()


class TaskEditRejectedError(Exception):
    """详情编辑未通过业务校验"""

    def __init__(self, message: str, field: str) -> None:
        super().__init__(message)
        self.field = field


def _is_positive_finite(value: float | None) -> bool:
    return value is not None and math.isfinite(value) and value > 0


def validate_task_edit(revenue: float | None, time_taken: float | None) -> None:
    """详情编辑校验

    Raises:
        TaskEditRejectedError: 收入或耗时缺失、非有限值或不大于 0
    """
    if not _is_positive_finite(revenue):
        raise TaskEditRejectedError("Revenue must be greater than 0", field="revenue")
    if not _is_positive_finite(time_taken):
        raise TaskEditRejectedError("Time taken must be greater than 0", field="timeTaken")


class TaskService:
    """任务业务服务"""

    def __init__(self, store: TaskStore) -> None:
        self._store = store

    def create_task(self, data: dict[str, Any]) -> Task:
        return self._store.add_task(data)

    def update_task(self, task_id: str, patch: dict[str, Any]) -> Task | None:
        return self._store.update_task(task_id, patch)

    def edit_details(self, task_id: str, details: Mapping[str, Any]) -> Task | None:
        """保存详情编辑（收入、耗时、备注）

        details 只包含调用方实际提交的字段（camelCase）；未提交 notes 时保留原备注。

        Returns:
            更新后的 Task；任务不存在时返回 None

        Raises:
            TaskEditRejectedError: 校验失败（Store 未被修改）
        """
        if self._store.get_task(task_id) is None:
            return None

        try:
            validate_task_edit(details.get("revenue"), details.get("timeTaken"))
        except TaskEditRejectedError as e:
            log.info("task_edit_rejected", task_id=task_id, field=e.field, reason=str(e))
            raise

        patch = {"revenue": details["revenue"], "timeTaken": details["timeTaken"]}
        if "notes" in details:
            patch["notes"] = details["notes"]
        return self._store.update_task(task_id, patch)
