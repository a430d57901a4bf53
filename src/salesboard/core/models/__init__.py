"""SalesBoard Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import (
    PRIORITY_RANK,
    PerformanceGrade,
    Priority,
    TaskStatus,
    UndoState,
)
from .metrics import Insights, LabeledValue, Metrics
from .task import DerivedTask, Task

__all__ = [
    # 枚举
    "Priority",
    "TaskStatus",
    "PerformanceGrade",
    "UndoState",
    "PRIORITY_RANK",
    # Task
    "Task",
    "DerivedTask",
    # 指标
    "Metrics",
    "Insights",
    "LabeledValue",
]
