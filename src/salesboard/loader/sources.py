"""任务数据源 -- 远端 HTTP 拉取 + 合成数据降级

所有数据源实现 async fetch() -> list，返回未规范化的原始记录。
"""

import asyncio
from typing import Any, Protocol

import httpx
import structlog

from .exceptions import MalformedPayloadError, SourceUnavailableError
from .generator import generate_sales_tasks

log = structlog.get_logger()

# 连接类异常类型集合（触发 SourceUnavailableError，进而触发降级）
_CONNECTION_ERROR_TYPES = (
    ConnectionError,
    OSError,
    TimeoutError,
    httpx.TransportError,
)


class TaskSource(Protocol):
    """任务数据源接口"""

    name: str

    async def fetch(self) -> list[Any]:
        """拉取原始任务记录"""
        ...


class HttpTaskSource:
    """远端 tasks.json 数据源"""

    name = "http"

    def __init__(
        self,
        url: str,
        timeout_s: int = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            url: tasks.json 地址
            timeout_s: 请求超时（秒）
            transport: 自定义 httpx transport（测试注入 MockTransport）
        """
        self._url = url
        self._timeout_s = timeout_s
        self._transport = transport

    async def fetch(self) -> list[Any]:
        """GET 任务列表

        Raises:
            SourceUnavailableError: 连接失败、超时或非 2xx 响应
            MalformedPayloadError: 响应不是 JSON 数组
        """
        log.debug("http_fetch_start", url=self._url)
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout_s, transport=self._transport
            ) as client:
                resp = await client.get(self._url)
        except _CONNECTION_ERROR_TYPES as e:
            raise SourceUnavailableError(self._url, e) from e

        if not resp.is_success:
            raise SourceUnavailableError(
                self._url, f"Failed to load tasks.json ({resp.status_code})"
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise MalformedPayloadError(f"响应不是合法 JSON: {e}") from e

        if not isinstance(data, list):
            raise MalformedPayloadError(
                f"响应应为 JSON 数组，实际为 {type(data).__name__}"
            )

        log.info("http_fetch_completed", url=self._url, record_count=len(data))
        return data


class SyntheticTaskSource:
    """合成数据源 -- 降级后备"""

    name = "synthetic"

    def __init__(self, count: int = 50, seed: int | None = None) -> None:
        """
        Args:
            count: 生成数量
            seed: 随机种子，None 表示不固定
        """
        self._count = count
        self._seed = seed

    async def fetch(self) -> list[Any]:
        """生成合成任务记录"""
        # 让出事件循环，保持与远端数据源一致的取消点
        await asyncio.sleep(0)
        records = generate_sales_tasks(self._count, seed=self._seed)
        log.info("synthetic_tasks_generated", record_count=len(records), seed=self._seed)
        return records
