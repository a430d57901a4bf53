"""Metrics 聚合快照 + 图表洞察模型"""

from pydantic import BaseModel, ConfigDict, Field

from .enums import PerformanceGrade


class Metrics(BaseModel):
    """任务集合的聚合指标

    每次集合变化后从头重算，不做增量更新。
    """

    model_config = ConfigDict(populate_by_name=True)

    total_revenue: float = Field(default=0.0, alias="totalRevenue")
    total_time_taken: float = Field(default=0.0, alias="totalTimeTaken")
    time_efficiency_pct: float = Field(default=0.0, alias="timeEfficiencyPct")
    revenue_per_hour: float = Field(default=0.0, alias="revenuePerHour")
    average_roi: float = Field(default=0.0, alias="averageROI")
    performance_grade: PerformanceGrade = Field(
        default=PerformanceGrade.NEEDS_IMPROVEMENT, alias="performanceGrade"
    )

    @classmethod
    def zeroed(cls) -> "Metrics":
        """空集合对应的归零快照"""
        return cls()


class LabeledValue(BaseModel):
    """图表数据点"""

    label: str
    value: float


class Insights(BaseModel):
    """仪表盘图表数据"""

    model_config = ConfigDict(populate_by_name=True)

    revenue_by_priority: list[LabeledValue] = Field(alias="revenueByPriority")
    revenue_by_status: list[LabeledValue] = Field(alias="revenueByStatus")
    roi_distribution: list[LabeledValue] = Field(alias="roiDistribution")
