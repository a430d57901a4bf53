"""TaskStore -- 内存任务集合 + 删除撤销状态机

Store 持有 {collection, last_deleted, undo_visible}，
所有变更均为同步方法，彼此之间天然原子。
按 id 的操作一律"首个匹配生效"（集合允许重复 id）。

撤销状态机:
    IDLE --delete--> PENDING_UNDO --(undo | dismiss | timeout)--> IDLE
同一时刻只跟踪一个待撤销删除，再次删除会覆盖待撤销槽位。
"""

import time
from collections.abc import Callable, Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

import structlog
from ulid import ULID

from .config import UNTITLED_TASK_TITLE
from .derivation import derive_sorted
from .metrics import calculate_roi, compute_metrics
from .models import DerivedTask, Metrics, Task, TaskStatus, UndoState
from .sanitizer import (
    get_field,
    has_field,
    sanitize_notes,
    sanitize_priority,
    sanitize_revenue,
    sanitize_status,
    sanitize_task,
    sanitize_text,
    sanitize_time_taken,
)

log = structlog.get_logger()


class TaskStore:
    """任务 Store -- 每个实例独立持有状态"""

    def __init__(
        self,
        tasks: Iterable[Task] | None = None,
        undo_timeout_s: float = 4.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Args:
            tasks: 初始集合（须已通过 Sanitizer）
            undo_timeout_s: 待撤销删除自动失效时间（秒）
            clock: 单调时钟，用于撤销超时判断
        """
        self._tasks: list[Task] = list(tasks or [])
        self._last_deleted: Task | None = None
        self._undo_visible = False
        self._deleted_at: float | None = None
        self._undo_timeout_s = undo_timeout_s
        self._clock = clock

    # ============================================================
    # 读视图（每次读取重新计算）
    # ============================================================

    @property
    def tasks(self) -> list[Task]:
        """当前集合的浅拷贝"""
        return list(self._tasks)

    @property
    def last_deleted(self) -> Task | None:
        return self._last_deleted

    @property
    def undo_visible(self) -> bool:
        return self._undo_visible

    @property
    def undo_state(self) -> UndoState:
        if self._last_deleted is not None:
            return UndoState.PENDING_UNDO
        return UndoState.IDLE

    def get_task(self, task_id: str) -> Task | None:
        """按 id 查询，首个匹配生效"""
        index = self._find_index(task_id)
        return None if index is None else self._tasks[index]

    def derived_sorted(self) -> list[DerivedTask]:
        return derive_sorted(self._tasks)

    def metrics(self) -> Metrics:
        return compute_metrics(self._tasks)

    # ============================================================
    # 变更操作
    # ============================================================

    def replace_all(self, tasks: Iterable[Task]) -> None:
        """引导加载入口：整体替换集合（输入须已规范化）"""
        self._tasks = list(tasks)
        log.info("tasks_replaced", task_count=len(self._tasks))

    def add_task(self, data: Mapping[str, Any]) -> Task:
        """创建任务

        不合法字段一律强制修正，不会拒绝创建。
        缺失 id 时生成 ULID；初始状态为 Done 时 completed_at = created_at。
        """
        now = datetime.now(UTC)
        task_id = sanitize_text(get_field(data, "id")) or str(ULID())
        status = sanitize_status(get_field(data, "status"))

        task = Task(
            id=task_id,
            title=sanitize_text(get_field(data, "title")) or UNTITLED_TASK_TITLE,
            revenue=sanitize_revenue(get_field(data, "revenue")),
            time_taken=sanitize_time_taken(get_field(data, "time_taken")),
            priority=sanitize_priority(get_field(data, "priority")),
            status=status,
            notes=sanitize_notes(get_field(data, "notes")),
            created_at=now,
            completed_at=now if status == TaskStatus.DONE else None,
        )
        self._tasks.append(task)

        log.info(
            "task_created",
            task_id=task.id,
            revenue=task.revenue,
            time_taken=task.time_taken,
            roi=calculate_roi(task.revenue, task.time_taken),
        )
        return task

    def update_task(self, task_id: str, patch: Mapping[str, Any]) -> Task | None:
        """合并 patch 到首个匹配任务

        仅处理 patch 中出现的字段，且逐字段重新规范化；
        id / createdAt / completedAt 由系统维护，patch 中出现时忽略。

        Returns:
            更新后的 Task；id 不存在时返回 None（无操作）
        """
        index = self._find_index(task_id)
        if index is None:
            log.debug("task_update_skipped", task_id=task_id, reason="not_found")
            return None

        current = self._tasks[index]
        update: dict[str, Any] = {}

        if has_field(patch, "title"):
            # 空白标题不覆盖原标题
            title = sanitize_text(get_field(patch, "title"))
            if title is not None:
                update["title"] = title
        if has_field(patch, "revenue"):
            update["revenue"] = sanitize_revenue(get_field(patch, "revenue"))
        if has_field(patch, "time_taken"):
            update["time_taken"] = sanitize_time_taken(get_field(patch, "time_taken"))
        if has_field(patch, "priority"):
            update["priority"] = sanitize_priority(get_field(patch, "priority"))
        if has_field(patch, "status"):
            update["status"] = sanitize_status(get_field(patch, "status"))
        if has_field(patch, "notes"):
            update["notes"] = sanitize_notes(get_field(patch, "notes"))

        new_status = update.get("status", current.status)
        if (
            current.status != TaskStatus.DONE
            and new_status == TaskStatus.DONE
            and current.completed_at is None
        ):
            update["completed_at"] = datetime.now(UTC)

        merged = current.model_copy(update=update)
        self._tasks[index] = merged

        log.info(
            "task_updated",
            task_id=task_id,
            fields=sorted(update),
            revenue=merged.revenue,
            time_taken=merged.time_taken,
            roi=calculate_roi(merged.revenue, merged.time_taken),
        )
        return merged

    def delete_task(self, task_id: str) -> Task | None:
        """删除首个匹配任务并放入待撤销槽位

        id 不存在时集合不变，且清空任何待撤销状态。
        """
        index = self._find_index(task_id)
        if index is None:
            self._clear_pending()
            log.debug("task_delete_skipped", task_id=task_id, reason="not_found")
            return None

        target = self._tasks.pop(index)
        if self._last_deleted is not None:
            log.info("pending_undo_overwritten", task_id=self._last_deleted.id)
        self._last_deleted = target
        self._undo_visible = True
        self._deleted_at = self._clock()

        log.info("task_deleted", task_id=target.id, title=target.title)
        return target

    def undo_delete(self) -> Task | None:
        """恢复待撤销任务（重新规范化后追加到末尾）

        Returns:
            恢复的 Task；无待撤销任务时返回 None
        """
        current = self._last_deleted
        self._clear_pending()
        if current is None:
            log.debug("undo_skipped", reason="nothing_pending")
            return None

        restored = sanitize_task(current)
        self._tasks.append(restored)
        log.info("task_restored", task_id=restored.id, title=restored.title)
        return restored

    def dismiss_undo(self) -> None:
        """放弃撤销"""
        self._clear_pending()
        log.debug("undo_dismissed")

    def expire_undo(self) -> bool:
        """待撤销删除超过 undo_timeout_s 后自动放弃（惰性检查）

        Returns:
            True 表示本次调用使待撤销删除失效
        """
        if self._deleted_at is None:
            return False
        if self._clock() - self._deleted_at < self._undo_timeout_s:
            return False
        expired = self._last_deleted
        self._clear_pending()
        log.info("undo_expired", task_id=expired.id if expired else None)
        return True

    # ============================================================
    # 内部工具
    # ============================================================

    def _find_index(self, task_id: str) -> int | None:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        return None

    def _clear_pending(self) -> None:
        self._last_deleted = None
        self._undo_visible = False
        self._deleted_at = None
