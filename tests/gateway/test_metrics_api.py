"""指标 API 测试"""

import pytest
from httpx import AsyncClient


class TestMetrics:
    async def test_snapshot(self, client: AsyncClient):
        resp = await client.get("/api/metrics")
        assert resp.status_code == 200
        data = resp.json()
        assert data["totalRevenue"] == 4000
        assert data["totalTimeTaken"] == 15
        assert data["timeEfficiencyPct"] == pytest.approx(100 / 3)
        assert data["revenuePerHour"] == pytest.approx(4000 / 15)
        assert data["averageROI"] == pytest.approx(350)
        assert data["performanceGrade"] == "Good"

    async def test_recomputed_after_delete(self, client: AsyncClient):
        await client.delete("/api/tasks/b")
        data = (await client.get("/api/metrics")).json()
        assert data["totalRevenue"] == 1000
        assert data["timeEfficiencyPct"] == 0

    async def test_empty_collection_zeroed(self, client: AsyncClient, seeded_store):
        seeded_store.replace_all([])
        data = (await client.get("/api/metrics")).json()
        assert data["totalRevenue"] == 0
        assert data["averageROI"] == 0
        assert data["performanceGrade"] == "Needs Improvement"


class TestInsights:
    async def test_charts(self, client: AsyncClient):
        data = (await client.get("/api/insights")).json()
        by_priority = {p["label"]: p["value"] for p in data["revenueByPriority"]}
        assert by_priority == {"High": 1000, "Medium": 0, "Low": 3000}

        distribution = {p["label"]: p["value"] for p in data["roiDistribution"]}
        assert distribution["<200"] == 1
        assert distribution[">500"] == 1
        assert distribution["N/A"] == 1
