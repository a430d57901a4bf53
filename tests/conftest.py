"""全局 pytest 配置 -- 任务样本数据 + 可复现的脏数据 fixture"""

import math
import random
from datetime import UTC, datetime
from typing import Any

import pytest
from salesboard.core.store import TaskStore


class FakeClock:
    """可手动推进的单调时钟"""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fixed_now() -> datetime:
    """固定的时间锚点"""
    return datetime(2025, 3, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def sample_records() -> list[dict[str, Any]]:
    """标准 camelCase 原始任务记录"""
    return [
        {
            "id": "a",
            "title": "Close deal with Acme",
            "revenue": 1000,
            "timeTaken": 10,
            "priority": "High",
            "status": "Todo",
            "createdAt": "2025-02-01T09:00:00Z",
        },
        {
            "id": "b",
            "title": "Send pricing to Globex",
            "revenue": 3000,
            "timeTaken": 5,
            "priority": "Low",
            "status": "Done",
            "notes": "  Budget approved  ",
            "createdAt": "2025-02-02T09:00:00+00:00",
        },
        {
            "id": "c",
            "title": "Qualify lead at Initech",
            "revenue": 0,
            "timeTaken": 0,
            "priority": "Medium",
            "status": "In Progress",
            "createdAt": "2025-02-03T09:00:00+00:00",
        },
    ]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> TaskStore:
    """空 Store（可控时钟，撤销超时 4 秒）"""
    return TaskStore(undo_timeout_s=4.0, clock=clock)


def make_corrupted_records(
    base: list[dict[str, Any]], seed: int, count: int = 20
) -> list[Any]:
    """在合法记录中混入畸形 / 重复 id 记录（给定 seed 时完全确定）"""
    rng = random.Random(seed)
    garbage: list[Any] = [
        None,
        42,
        "not-a-task",
        ["list"],
        {"id": None, "title": "", "revenue": math.nan, "timeTaken": 0, "priority": "High"},
        {"id": "   ", "title": "Blank id"},
        {"id": "ok-but-no-title"},
        {
            "id": base[0]["id"] if base else "dup-1",
            "title": "Duplicate ID",
            "revenue": 9999999999,
            "timeTaken": -5,
            "priority": "Low",
            "status": "Done",
        },
        {"id": "weird", "title": "Weird", "revenue": "abc", "timeTaken": math.inf,
         "priority": "Urgent", "status": "Blocked", "notes": 123, "createdAt": "yesterday"},
        {"id": "strs", "title": " Strings ", "revenue": "250.5", "timeTaken": "2"},
    ]
    records: list[Any] = list(base)
    for _ in range(count):
        records.insert(rng.randint(0, len(records)), rng.choice(garbage))
    return records


@pytest.fixture
def corrupted_records(sample_records):
    """工厂 fixture：按 seed 生成脏数据"""

    def _make(seed: int, count: int = 20) -> list[Any]:
        return make_corrupted_records(sample_records, seed, count)

    return _make
