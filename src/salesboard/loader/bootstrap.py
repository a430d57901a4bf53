"""TaskLoader -- 进程生命周期内一次性的任务引导加载

降级链: HttpTaskSource -> SyntheticTaskSource
拉取结果经 Sanitizer 规范化后写入 Store。
- primary 失败（网络、格式错误、规范化后为空）-> fallback
- fallback 也失败 -> 终态 error，附带可读错误信息
- 首次成功后再次调用为无操作（幂等）
- 被取消的加载不会更新 Store 与状态
"""

import asyncio

import structlog
from pydantic import BaseModel, Field

from salesboard.core.config import LoaderConfig
from salesboard.core.models import Task
from salesboard.core.sanitizer import normalize_tasks
from salesboard.core.store import TaskStore

from .exceptions import LoaderError
from .sources import HttpTaskSource, SyntheticTaskSource, TaskSource

log = structlog.get_logger()


class LoaderStatus(BaseModel):
    """加载状态（暴露给协作方）"""

    loading: bool = Field(default=True, description="是否仍在加载")
    error: str | None = Field(default=None, description="终态错误信息")
    loaded: bool = Field(default=False, description="是否已成功加载")
    source: str | None = Field(default=None, description="实际使用的数据源")
    task_count: int = Field(default=0, ge=0, description="写入 Store 的任务数")


class TaskLoader:
    """引导加载器"""

    def __init__(
        self,
        store: TaskStore,
        primary: TaskSource,
        fallback: TaskSource | None = None,
    ) -> None:
        """
        Args:
            store: 目标 Store
            primary: 主数据源（通常为 HttpTaskSource）
            fallback: 降级数据源（通常为 SyntheticTaskSource），None 表示无降级
        """
        self._store = store
        self._primary = primary
        self._fallback = fallback
        self._status = LoaderStatus()
        self._lock = asyncio.Lock()

    @property
    def status(self) -> LoaderStatus:
        return self._status

    async def load(self) -> LoaderStatus:
        """执行引导加载

        Returns:
            加载完成后的状态快照

        Raises:
            asyncio.CancelledError: 加载被取消（Store 与状态保持不变）
        """
        async with self._lock:
            if self._status.loaded:
                log.debug("load_skipped", reason="already_loaded")
                return self._status

            try:
                source, tasks = await self._load_with_fallback()
            except LoaderError as e:
                self._status = LoaderStatus(loading=False, error=str(e))
                log.error("task_load_failed", error=str(e))
                return self._status

            self._store.replace_all(tasks)
            self._status = LoaderStatus(
                loading=False,
                loaded=True,
                source=source,
                task_count=len(tasks),
            )
            log.info("tasks_loaded", source=source, task_count=len(tasks))
            return self._status

    async def _load_with_fallback(self) -> tuple[str, list[Task]]:
        """先尝试 primary，失败或为空时切换到 fallback"""
        primary_error: Exception | None = None
        try:
            tasks = await self._fetch_normalized(self._primary)
            if tasks:
                return self._primary.name, tasks
            primary_error = LoaderError("主数据源未返回任何有效任务")
        except asyncio.CancelledError:
            raise
        except Exception as e:
            primary_error = e

        log.warning(
            "primary_source_failed",
            source=self._primary.name,
            error=str(primary_error),
        )

        if self._fallback is None:
            raise LoaderError(
                f"主数据源加载失败且无降级数据源: {primary_error}",
                recoverable=False,
            ) from primary_error

        try:
            tasks = await self._fetch_normalized(self._fallback)
        except asyncio.CancelledError:
            raise
        except Exception as fallback_error:
            log.error(
                "both_primary_and_fallback_failed",
                primary_error=str(primary_error),
                fallback_error=str(fallback_error),
            )
            raise LoaderError(
                f"主数据源与降级数据源均失败。Primary: {primary_error}; "
                f"Fallback: {fallback_error}",
                recoverable=False,
            ) from fallback_error

        if not tasks:
            raise LoaderError("降级数据源未返回任何有效任务", recoverable=False)

        log.info(
            "fallback_activated",
            source=self._fallback.name,
            fallback_reason=str(primary_error),
        )
        return self._fallback.name, tasks

    @staticmethod
    async def _fetch_normalized(source: TaskSource) -> list[Task]:
        raw = await source.fetch()
        return normalize_tasks(raw)


def build_task_loader(store: TaskStore, config: LoaderConfig) -> TaskLoader:
    """按配置组装 HTTP 主数据源 + 合成数据降级"""
    return TaskLoader(
        store=store,
        primary=HttpTaskSource(config.tasks_url, timeout_s=config.fetch_timeout_s),
        fallback=SyntheticTaskSource(count=config.seed_count, seed=config.seed),
    )
