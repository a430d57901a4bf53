"""SalesBoard Core -- 任务派生与状态管理引擎"""

from .derivation import cycle_days, derive_sorted, format_roi, sort_tasks, with_derived
from .metrics import (
    calculate_roi,
    compute_average_roi,
    compute_metrics,
    compute_performance_grade,
    compute_revenue_per_hour,
    compute_time_efficiency,
    compute_total_revenue,
    compute_total_time_taken,
)
from .sanitizer import normalize_tasks, sanitize_task
from .store import TaskStore

__all__ = [
    "TaskStore",
    "normalize_tasks",
    "sanitize_task",
    "calculate_roi",
    "compute_total_revenue",
    "compute_total_time_taken",
    "compute_time_efficiency",
    "compute_revenue_per_hour",
    "compute_average_roi",
    "compute_performance_grade",
    "compute_metrics",
    "with_derived",
    "sort_tasks",
    "derive_sorted",
    "format_roi",
    "cycle_days",
]
