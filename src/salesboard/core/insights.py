"""Insights -- 仪表盘图表聚合

按优先级/状态汇总收入、ROI 分布分桶。
"""

from collections.abc import Iterable, Sequence

from .derivation import is_meaningful_roi, with_derived
from .models import DerivedTask, Insights, LabeledValue, Priority, Task, TaskStatus

# ROI 分布分桶标签（顺序即展示顺序）
ROI_BUCKET_LOW = "<200"
ROI_BUCKET_MID = "200-500"
ROI_BUCKET_HIGH = ">500"
ROI_BUCKET_NA = "N/A"
ROI_BUCKETS: tuple[str, ...] = (ROI_BUCKET_LOW, ROI_BUCKET_MID, ROI_BUCKET_HIGH, ROI_BUCKET_NA)


def revenue_by_priority(tasks: Iterable[Task]) -> list[LabeledValue]:
    """按优先级汇总收入，覆盖所有优先级"""
    totals = dict.fromkeys(Priority, 0.0)
    for task in tasks:
        totals[task.priority] += task.revenue
    return [LabeledValue(label=p.value, value=v) for p, v in totals.items()]


def revenue_by_status(tasks: Iterable[Task]) -> list[LabeledValue]:
    """按状态汇总收入，覆盖所有状态"""
    totals = dict.fromkeys(TaskStatus, 0.0)
    for task in tasks:
        totals[task.status] += task.revenue
    return [LabeledValue(label=s.value, value=v) for s, v in totals.items()]


def roi_bucket(value: float | None) -> str:
    """单个 ROI 所属分桶（200 与 500 都归入中间桶）"""
    if not is_meaningful_roi(value):
        return ROI_BUCKET_NA
    if value < 200:
        return ROI_BUCKET_LOW
    if value <= 500:
        return ROI_BUCKET_MID
    return ROI_BUCKET_HIGH


def roi_distribution(tasks: Iterable[DerivedTask]) -> list[LabeledValue]:
    """ROI 分布计数"""
    counts = dict.fromkeys(ROI_BUCKETS, 0)
    for task in tasks:
        counts[roi_bucket(task.roi)] += 1
    return [LabeledValue(label=label, value=count) for label, count in counts.items()]


def build_insights(tasks: Sequence[Task]) -> Insights:
    """汇总全部图表数据"""
    derived = [with_derived(t) for t in tasks]
    return Insights(
        revenue_by_priority=revenue_by_priority(tasks),
        revenue_by_status=revenue_by_status(tasks),
        roi_distribution=roi_distribution(derived),
    )
