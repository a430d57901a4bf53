"""Sanitizer -- 不可信输入的唯一信任边界

将松散类型的原始记录规范化为合法的 Task。
所有函数不抛异常：单条记录失败只丢弃该记录，不影响整批。
下游组件只处理 Task，不接触原始输入。
"""

import math
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime, timedelta
from typing import Any

import structlog
from pydantic import BaseModel

from .config import SYNTHETIC_DAY_SECONDS
from .models import Priority, Task, TaskStatus

log = structlog.get_logger()

# 原始记录字段名：线上 camelCase 优先，兼容 snake_case
FIELD_NAMES: dict[str, tuple[str, ...]] = {
    "id": ("id",),
    "title": ("title",),
    "revenue": ("revenue",),
    "time_taken": ("timeTaken", "time_taken"),
    "priority": ("priority",),
    "status": ("status",),
    "notes": ("notes",),
    "created_at": ("createdAt", "created_at"),
    "completed_at": ("completedAt", "completed_at"),
}


def _non_negative_number(value: Any) -> float:
    """数值强制转换：失败、负数、非有限值均回落为 0"""
    if isinstance(value, bool):
        return 0.0
    try:
        parsed = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(parsed) or parsed < 0:
        return 0.0
    return parsed


def sanitize_revenue(value: Any) -> float:
    """规范化收入"""
    return _non_negative_number(value)


def sanitize_time_taken(value: Any) -> float:
    """规范化耗时（小时）"""
    return _non_negative_number(value)


def sanitize_priority(value: Any) -> Priority:
    """非法优先级回落为 Medium"""
    try:
        return Priority(value)
    except (TypeError, ValueError):
        return Priority.MEDIUM


def sanitize_status(value: Any) -> TaskStatus:
    """非法状态回落为 Todo"""
    try:
        return TaskStatus(value)
    except (TypeError, ValueError):
        return TaskStatus.TODO


def sanitize_text(value: Any) -> str | None:
    """非字符串或空白返回 None，否则去除首尾空白"""
    if not isinstance(value, str):
        return None
    trimmed = value.strip()
    return trimmed or None


def sanitize_notes(value: Any) -> str | None:
    """规范化备注"""
    return sanitize_text(value)


def sanitize_timestamp(value: Any) -> datetime | None:
    """解析 ISO-8601 时间戳

    接受 datetime 或字符串（支持结尾 Z），无时区信息视为 UTC，
    无法解析返回 None。
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text[-1] in "Zz":
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def get_field(record: Mapping[str, Any], field: str) -> Any:
    """按 camelCase / snake_case 读取原始字段，缺失返回 None"""
    for name in FIELD_NAMES[field]:
        if name in record:
            return record[name]
    return None


def has_field(record: Mapping[str, Any], field: str) -> bool:
    """原始记录是否携带该字段（任一拼写）"""
    return any(name in record for name in FIELD_NAMES[field])


def _normalize_record(item: Any, position: int, anchor: datetime) -> Task | None:
    """规范化单条记录，id/title 不合法时返回 None

    position 为该记录在已接受记录中的序号，用于合成 createdAt。
    """
    if isinstance(item, BaseModel):
        item = item.model_dump(by_alias=True)
    if not isinstance(item, Mapping):
        return None

    task_id = sanitize_text(get_field(item, "id"))
    title = sanitize_text(get_field(item, "title"))
    if task_id is None or title is None:
        return None

    status = sanitize_status(get_field(item, "status"))

    # 缺失 createdAt 时按序号确定性合成：第 n 条为锚点前 n+1 天
    created_at = sanitize_timestamp(get_field(item, "created_at"))
    if created_at is None:
        created_at = anchor - timedelta(seconds=(position + 1) * SYNTHETIC_DAY_SECONDS)

    completed_at = sanitize_timestamp(get_field(item, "completed_at"))
    if completed_at is None and status == TaskStatus.DONE:
        completed_at = created_at + timedelta(seconds=SYNTHETIC_DAY_SECONDS)

    return Task(
        id=task_id,
        title=title,
        revenue=sanitize_revenue(get_field(item, "revenue")),
        time_taken=sanitize_time_taken(get_field(item, "time_taken")),
        priority=sanitize_priority(get_field(item, "priority")),
        status=status,
        notes=sanitize_notes(get_field(item, "notes")),
        created_at=created_at,
        completed_at=completed_at,
    )


def normalize_tasks(raw: Any, now: datetime | None = None) -> list[Task]:
    """将原始记录序列规范化为 Task 列表

    Args:
        raw: 任意输入；非序列视为空列表
        now: 合成 createdAt 的锚点时间，默认当前 UTC 时间

    Returns:
        通过校验的 Task 列表（保持输入顺序）
    """
    if not isinstance(raw, Sequence) or isinstance(raw, (str, bytes)):
        return []

    anchor = now or datetime.now(UTC)
    tasks: list[Task] = []
    for index, item in enumerate(raw):
        try:
            task = _normalize_record(item, len(tasks), anchor)
        except Exception as e:
            log.debug("record_dropped", index=index, error=str(e))
            continue
        if task is None:
            log.debug("record_dropped", index=index, reason="invalid_id_or_title")
            continue
        tasks.append(task)

    log.debug("tasks_normalized", received=len(raw), accepted=len(tasks))
    return tasks


def sanitize_task(task: Task) -> Task:
    """对已有 Task 重新执行字段规范化（撤销恢复时使用）"""
    return task.model_copy(
        update={
            "title": task.title.strip() or task.title,
            "revenue": sanitize_revenue(task.revenue),
            "time_taken": sanitize_time_taken(task.time_taken),
            "priority": sanitize_priority(task.priority),
            "status": sanitize_status(task.status),
            "notes": sanitize_notes(task.notes),
        }
    )
