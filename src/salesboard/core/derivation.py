"""Derivation & Sort -- 附加计算字段并排序展示

派生字段: roi、roiDisplay（两位小数或占位符）、cycleDays（创建到完成的天数）。

排序键（依次比较）：
1. 优先级 High < Medium < Low
2. ROI 有定义的在前
3. ROI 降序
4. 标题（忽略大小写）升序
完全相同的键保持原有相对顺序（sorted 为稳定排序）。
"""

import math
import sys
from collections.abc import Iterable
from datetime import datetime

from .config import SYNTHETIC_DAY_SECONDS
from .metrics import calculate_roi
from .models import PRIORITY_RANK, DerivedTask, Task

# ROI 无意义时的占位文本
ROI_PLACEHOLDER = "—"


def is_meaningful_roi(value: float | None) -> bool:
    """None、非有限值、近似 0 均视为无意义"""
    return value is not None and math.isfinite(value) and abs(value) >= sys.float_info.epsilon


def format_roi(value: float | None) -> str:
    """ROI 文本：无意义时返回占位符，否则保留两位小数"""
    if not is_meaningful_roi(value):
        return ROI_PLACEHOLDER
    return f"{value:.2f}"


def cycle_days(created_at: datetime, completed_at: datetime | None) -> int | None:
    """创建到完成的天数（四舍五入，不为负），未完成返回 None"""
    if completed_at is None:
        return None
    seconds = (completed_at - created_at).total_seconds()
    return max(0, round(seconds / SYNTHETIC_DAY_SECONDS))


def with_derived(task: Task) -> DerivedTask:
    """构造附带派生字段的 DerivedTask（新对象，不修改原 Task）"""
    roi = calculate_roi(task.revenue, task.time_taken)
    return DerivedTask(
        **task.model_dump(),
        roi=roi,
        roi_display=format_roi(roi),
        cycle_days=cycle_days(task.created_at, task.completed_at),
    )


def _sort_key(task: DerivedTask) -> tuple[int, int, float, str]:
    roi_missing = 1 if task.roi is None else 0
    roi_desc = -task.roi if task.roi is not None else 0.0
    return (PRIORITY_RANK[task.priority], roi_missing, roi_desc, task.title.casefold())


def sort_tasks(tasks: Iterable[DerivedTask]) -> list[DerivedTask]:
    """按展示顺序排序，返回新列表"""
    return sorted(tasks, key=_sort_key)


def derive_sorted(tasks: Iterable[Task]) -> list[DerivedTask]:
    """派生 + 排序"""
    return sort_tasks(with_derived(t) for t in tasks)
