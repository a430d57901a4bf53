"""Task Domain Model

Task 是 Store 中的规范元素，只能由 Sanitizer 产出；
DerivedTask 在每次读取时重新构造，不落入 Store。
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .enums import Priority, TaskStatus


class Task(BaseModel):
    """Task 数据模型

    Python 属性为 snake_case，线上格式（引导数据与 API JSON）使用 camelCase 别名。
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1, description="任务标识，不强制唯一")
    title: str = Field(min_length=1, description="去除首尾空白后的标题")
    revenue: float = Field(default=0.0, ge=0.0, description="收入")
    time_taken: float = Field(
        default=0.0, ge=0.0, alias="timeTaken", description="耗时（小时）"
    )
    priority: Priority = Field(default=Priority.MEDIUM, description="优先级")
    status: TaskStatus = Field(default=TaskStatus.TODO, description="当前状态")
    notes: str | None = Field(default=None, description="备注，空白时省略")
    created_at: datetime = Field(alias="createdAt", description="创建时间，创建后不可变")
    completed_at: datetime | None = Field(
        default=None,
        alias="completedAt",
        description="首次进入 Done 的时间，仅设置一次",
    )


class DerivedTask(Task):
    """附带计算字段的 Task 视图

    roi 为 None 表示 ROI 无意义（耗时 <= 0），区别于真实的 0。
    roi_display / cycle_days 为详情与列表展示用的派生文本与周期。
    """

    roi: float | None = Field(default=None, description="revenue / timeTaken")
    roi_display: str = Field(alias="roiDisplay", description="ROI 展示文本，无意义时为占位符")
    cycle_days: int | None = Field(
        default=None, alias="cycleDays", description="创建到完成的天数，未完成为 None"
    )
