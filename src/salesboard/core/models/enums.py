"""枚举定义

包含 Priority、TaskStatus、PerformanceGrade、UndoState 枚举，
以及排序用的 PRIORITY_RANK 映射。
"""

from enum import StrEnum


class Priority(StrEnum):
    """任务优先级（闭合枚举，非法值回落为 MEDIUM）"""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class TaskStatus(StrEnum):
    """任务状态（闭合枚举，非法值回落为 TODO）"""

    TODO = "Todo"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


class PerformanceGrade(StrEnum):
    """绩效等级 -- 由平均 ROI 按固定阈值映射，从低到高"""

    NEEDS_IMPROVEMENT = "Needs Improvement"
    GOOD = "Good"
    EXCELLENT = "Excellent"


class UndoState(StrEnum):
    """删除撤销状态机"""

    IDLE = "idle"
    PENDING_UNDO = "pending_undo"


# 展示排序：数值越小越靠前
PRIORITY_RANK: dict[Priority, int] = {
    Priority.HIGH: 0,
    Priority.MEDIUM: 1,
    Priority.LOW: 2,
}
