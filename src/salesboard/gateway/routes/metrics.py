"""指标路由

GET /api/metrics: 聚合指标快照（每次请求重算）。
GET /api/insights: 仪表盘图表数据。
"""

from fastapi import APIRouter, Depends

from salesboard.core.insights import build_insights
from salesboard.core.models import Insights, Metrics

from ..deps import get_store

router = APIRouter()


@router.get("/api/metrics", response_model=Metrics)
async def get_metrics(store=Depends(get_store)):
    return store.metrics()


@router.get("/api/insights", response_model=Insights)
async def get_insights(store=Depends(get_store)):
    return build_insights(store.tasks)
