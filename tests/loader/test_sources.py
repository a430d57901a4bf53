"""任务数据源单元测试 -- HttpTaskSource (httpx MockTransport) + 合成数据"""

from datetime import UTC, datetime

import httpx
import pytest
from salesboard.core.models import TaskStatus
from salesboard.core.sanitizer import normalize_tasks
from salesboard.loader.exceptions import MalformedPayloadError, SourceUnavailableError
from salesboard.loader.generator import generate_sales_tasks
from salesboard.loader.sources import HttpTaskSource, SyntheticTaskSource

_URL = "http://test/tasks.json"


def _source(handler) -> HttpTaskSource:
    return HttpTaskSource(_URL, timeout_s=1, transport=httpx.MockTransport(handler))


class TestHttpTaskSource:
    """远端数据源"""

    async def test_fetch_list(self, sample_records):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url == _URL
            return httpx.Response(200, json=sample_records)

        assert await _source(handler).fetch() == sample_records

    async def test_non_2xx_raises_unavailable(self):
        source = _source(lambda request: httpx.Response(404))

        with pytest.raises(SourceUnavailableError) as exc_info:
            await source.fetch()
        assert "404" in str(exc_info.value)
        assert exc_info.value.recoverable is True

    async def test_connection_error_raises_unavailable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(SourceUnavailableError) as exc_info:
            await _source(handler).fetch()
        assert exc_info.value.source_url == _URL

    async def test_timeout_raises_unavailable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(SourceUnavailableError):
            await _source(handler).fetch()

    async def test_invalid_json_raises_malformed(self):
        source = _source(lambda request: httpx.Response(200, text="<html>oops</html>"))

        with pytest.raises(MalformedPayloadError):
            await source.fetch()

    async def test_non_list_payload_raises_malformed(self):
        source = _source(lambda request: httpx.Response(200, json={"tasks": []}))

        with pytest.raises(MalformedPayloadError):
            await source.fetch()


class TestSyntheticTaskSource:
    """合成数据源"""

    async def test_count(self):
        records = await SyntheticTaskSource(count=7, seed=1).fetch()
        assert len(records) == 7

    def test_deterministic_with_seed(self):
        now = datetime(2025, 3, 1, tzinfo=UTC)
        assert generate_sales_tasks(20, seed=3, now=now) == generate_sales_tasks(20, seed=3, now=now)
        assert generate_sales_tasks(20, seed=3, now=now) != generate_sales_tasks(20, seed=4, now=now)

    def test_records_survive_sanitizer(self):
        """生成的记录全部通过规范化且字段合理"""
        now = datetime(2025, 3, 1, tzinfo=UTC)
        records = generate_sales_tasks(50, seed=11, now=now)
        tasks = normalize_tasks(records, now=now)

        assert len(tasks) == 50
        assert len({t.id for t in tasks}) == 50
        for task in tasks:
            assert task.revenue > 0
            assert task.time_taken > 0
            assert task.created_at < now
            if task.status == TaskStatus.DONE:
                assert task.created_at < task.completed_at <= now
            else:
                assert task.completed_at is None
