"""gateway 测试配置 -- 手动初始化 app.state（绕过 lifespan）+ httpx AsyncClient"""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from salesboard.core.sanitizer import normalize_tasks
from salesboard.core.store import TaskStore
from salesboard.gateway.main import create_app
from salesboard.loader import TaskLoader


@pytest.fixture
def seeded_store(clock, sample_records, fixed_now) -> TaskStore:
    """预置样本任务的 Store（可控时钟）"""
    return TaskStore(
        tasks=normalize_tasks(sample_records, now=fixed_now),
        undo_timeout_s=4.0,
        clock=clock,
    )


@pytest_asyncio.fixture
async def test_app(seeded_store: TaskStore):
    """测试 app：Store 已就绪，Loader 尚未执行"""
    app = create_app()

    primary = AsyncMock()
    primary.name = "http"
    primary.fetch = AsyncMock(return_value=[])
    app.state.store = seeded_store
    app.state.loader = TaskLoader(seeded_store, primary=primary, fallback=None)

    yield app


@pytest_asyncio.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
    ) as ac:
        yield ac
