"""合成销售任务生成器 -- 远端数据不可用时的降级数据

给定 seed 时输出完全确定。
"""

import random
from datetime import UTC, datetime, timedelta
from typing import Any

from salesboard.core.models import Priority, TaskStatus

_ACTIONS = (
    "Follow up with",
    "Prepare proposal for",
    "Demo product to",
    "Negotiate renewal with",
    "Close deal with",
    "Qualify lead at",
    "Send pricing to",
    "Onboard",
)

_ACCOUNTS = (
    "Acme Corp",
    "Globex",
    "Initech",
    "Umbrella Health",
    "Stark Industries",
    "Wayne Logistics",
    "Hooli",
    "Soylent Foods",
    "Vandelay Imports",
    "Wonka Retail",
)

_NOTES = (
    "Decision maker looped in",
    "Waiting on legal review",
    "Budget approved for Q3",
    "Requested case studies",
    "",
)


def generate_sales_tasks(
    count: int,
    seed: int | None = None,
    now: datetime | None = None,
) -> list[dict[str, Any]]:
    """生成 count 条看起来合理的销售任务原始记录

    Args:
        count: 生成数量
        seed: 随机种子，None 表示不固定
        now: 时间锚点，默认当前 UTC 时间

    Returns:
        camelCase 字段的原始记录列表（仍需经过 Sanitizer）
    """
    rng = random.Random(seed)
    anchor = now or datetime.now(UTC)
    records: list[dict[str, Any]] = []

    for index in range(count):
        status = rng.choice(list(TaskStatus))
        created_at = anchor - timedelta(days=rng.randint(1, 60), hours=rng.randint(0, 23))
        record: dict[str, Any] = {
            "id": f"task-{index + 1:03d}",
            "title": f"{rng.choice(_ACTIONS)} {rng.choice(_ACCOUNTS)}",
            "revenue": round(rng.uniform(500, 25000), 2),
            "timeTaken": round(rng.uniform(1, 40), 1),
            "priority": rng.choice(list(Priority)).value,
            "status": status.value,
            "notes": rng.choice(_NOTES),
            "createdAt": created_at.isoformat(),
        }
        if status == TaskStatus.DONE:
            completed_at = created_at + timedelta(days=rng.randint(1, 14))
            record["completedAt"] = min(completed_at, anchor).isoformat()
        records.append(record)

    return records
