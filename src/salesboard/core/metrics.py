"""Metrics Engine -- 纯函数指标计算

所有函数无副作用、不抛异常；除零与非有限值均被守护。
"""

import math
from collections.abc import Iterable, Sequence

from .config import GRADE_EXCELLENT_THRESHOLD, GRADE_GOOD_THRESHOLD
from .models import Metrics, PerformanceGrade, Task, TaskStatus


def calculate_roi(revenue: float, time_taken: float) -> float | None:
    """计算单个任务 ROI（每小时收入）

    Args:
        revenue: 收入
        time_taken: 耗时（小时）

    Returns:
        revenue / time_taken；耗时 <= 0 或结果非有限时返回 None
    """
    if not math.isfinite(time_taken) or time_taken <= 0:
        return None
    roi = revenue / time_taken
    if not math.isfinite(roi):
        return None
    return roi


def compute_total_revenue(tasks: Iterable[Task]) -> float:
    """总收入"""
    return sum((t.revenue for t in tasks), 0.0)


def compute_total_time_taken(tasks: Iterable[Task]) -> float:
    """总耗时"""
    return sum((t.time_taken for t in tasks), 0.0)


def compute_time_efficiency(tasks: Sequence[Task]) -> float:
    """时间效率：已完成任务耗时占总耗时的百分比，总耗时为 0 时返回 0"""
    total = compute_total_time_taken(tasks)
    if total <= 0:
        return 0.0
    done = compute_total_time_taken(t for t in tasks if t.status == TaskStatus.DONE)
    return done / total * 100


def compute_revenue_per_hour(tasks: Sequence[Task]) -> float:
    """每小时收入：总收入 / 总耗时，总耗时为 0 时返回 0"""
    total_time = compute_total_time_taken(tasks)
    if total_time <= 0:
        return 0.0
    return compute_total_revenue(tasks) / total_time


def compute_average_roi(tasks: Iterable[Task]) -> float:
    """平均 ROI

    ROI 为 None 的任务被排除在外（而不是按 0 计入）；
    没有任何可计算 ROI 的任务时返回 0。
    """
    rois = [
        roi
        for roi in (calculate_roi(t.revenue, t.time_taken) for t in tasks)
        if roi is not None
    ]
    if not rois:
        return 0.0
    return sum(rois) / len(rois)


def compute_performance_grade(avg_roi: float) -> PerformanceGrade:
    """平均 ROI -> 绩效等级（全函数，NaN 与负数均落入最低等级）"""
    if avg_roi > GRADE_EXCELLENT_THRESHOLD:
        return PerformanceGrade.EXCELLENT
    if avg_roi >= GRADE_GOOD_THRESHOLD:
        return PerformanceGrade.GOOD
    return PerformanceGrade.NEEDS_IMPROVEMENT


def compute_metrics(tasks: Sequence[Task]) -> Metrics:
    """从头计算聚合指标快照，空集合返回归零快照"""
    if not tasks:
        return Metrics.zeroed()

    average_roi = compute_average_roi(tasks)
    return Metrics(
        total_revenue=compute_total_revenue(tasks),
        total_time_taken=compute_total_time_taken(tasks),
        time_efficiency_pct=compute_time_efficiency(tasks),
        revenue_per_hour=compute_revenue_per_hour(tasks),
        average_roi=average_roi,
        performance_grade=compute_performance_grade(average_roi),
    )
