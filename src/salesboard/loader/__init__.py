"""SalesBoard Loader -- 任务引导加载

loader 包的公开接口导出。
"""

from .bootstrap import LoaderStatus, TaskLoader, build_task_loader
from .exceptions import LoaderError, MalformedPayloadError, SourceUnavailableError
from .generator import generate_sales_tasks
from .sources import HttpTaskSource, SyntheticTaskSource, TaskSource

__all__ = [
    "TaskLoader",
    "LoaderStatus",
    "build_task_loader",
    "TaskSource",
    "HttpTaskSource",
    "SyntheticTaskSource",
    "generate_sales_tasks",
    "LoaderError",
    "SourceUnavailableError",
    "MalformedPayloadError",
]
