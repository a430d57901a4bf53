"""配置模块 -- 可通过环境变量覆盖

包含引导加载配置（远端 tasks.json 地址、超时、合成数据数量）、
撤销提示超时以及业务常量。
"""

import os

import structlog
from pydantic import BaseModel, Field

log = structlog.get_logger()

# 创建任务时标题为空的兜底标题
UNTITLED_TASK_TITLE: str = "Untitled Task"

# 合成 createdAt / completedAt 的步长（一天）
SYNTHETIC_DAY_SECONDS: int = 24 * 3600

# 绩效等级阈值（平均 ROI）
GRADE_EXCELLENT_THRESHOLD: float = 500.0
GRADE_GOOD_THRESHOLD: float = 200.0


class LoaderConfig(BaseModel):
    """引导加载配置 -- 从环境变量加载

    环境变量:
        SALESBOARD_TASKS_URL: 远端任务列表地址
        SALESBOARD_FETCH_TIMEOUT_S: 拉取超时（秒，默认 10）
        SALESBOARD_SEED_COUNT: 合成任务数量（默认 50）
        SALESBOARD_SEED: 合成数据随机种子（默认不固定）
        SALESBOARD_UNDO_TIMEOUT_S: 删除撤销提示自动消失时间（秒，默认 4）
    """

    tasks_url: str = Field(
        default="http://localhost:5173/tasks.json",
        description="远端 tasks.json 地址",
    )
    fetch_timeout_s: int = Field(default=10, ge=1, description="拉取超时（秒）")
    seed_count: int = Field(default=50, ge=1, description="合成任务数量")
    seed: int | None = Field(default=None, description="合成数据随机种子")
    undo_timeout_s: float = Field(
        default=4.0, gt=0, description="撤销提示自动消失时间（秒）"
    )


def _int_env(name: str, default: int | None) -> int | None:
    """读取整数环境变量，非法值记录 warning 并回落默认值"""
    val = os.environ.get(name)
    if not val:
        return default
    try:
        return int(val)
    except ValueError:
        log.warning("invalid_int_config", env_var=name, value=val, fallback=default)
        return default


def load_loader_config() -> LoaderConfig:
    """从环境变量加载引导配置

    Returns:
        LoaderConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("SALESBOARD_TASKS_URL"):
        kwargs["tasks_url"] = val

    kwargs["fetch_timeout_s"] = _int_env("SALESBOARD_FETCH_TIMEOUT_S", 10)
    kwargs["seed_count"] = _int_env("SALESBOARD_SEED_COUNT", 50)
    kwargs["seed"] = _int_env("SALESBOARD_SEED", None)

    if val := os.environ.get("SALESBOARD_UNDO_TIMEOUT_S"):
        try:
            kwargs["undo_timeout_s"] = float(val)
        except ValueError:
            log.warning(
                "invalid_float_config",
                env_var="SALESBOARD_UNDO_TIMEOUT_S",
                value=val,
                fallback=4.0,
            )

    return LoaderConfig(**kwargs)
