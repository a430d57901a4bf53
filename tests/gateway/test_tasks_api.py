"""任务 API 测试

测试内容：
1. GET /api/tasks 展示顺序与 roi
2. POST / PATCH 字段强制修正
3. PUT /details 校验拒绝时 Store 不变
4. 未知 id 返回 404
"""

from httpx import AsyncClient


class TestListTasks:
    async def test_sorted_with_roi(self, client: AsyncClient):
        resp = await client.get("/api/tasks")
        assert resp.status_code == 200

        tasks = resp.json()["tasks"]
        assert [t["id"] for t in tasks] == ["a", "c", "b"]
        assert tasks[0]["roi"] == 100
        assert tasks[1]["roi"] is None
        assert tasks[2]["roi"] == 600

    async def test_camel_case_fields(self, client: AsyncClient):
        task = (await client.get("/api/tasks")).json()["tasks"][2]
        assert task["timeTaken"] == 5
        assert task["notes"] == "Budget approved"
        assert task["createdAt"].startswith("2025-02-02T09:00:00")
        assert task["completedAt"] is not None

    async def test_display_fields(self, client: AsyncClient):
        """列表携带 roiDisplay 与 cycleDays"""
        tasks = {t["id"]: t for t in (await client.get("/api/tasks")).json()["tasks"]}

        assert tasks["a"]["roiDisplay"] == "100.00"
        assert tasks["a"]["cycleDays"] is None
        assert tasks["c"]["roiDisplay"] == "—"
        assert tasks["b"]["roiDisplay"] == "600.00"
        assert tasks["b"]["cycleDays"] == 1


class TestGetTask:
    async def test_found(self, client: AsyncClient):
        resp = await client.get("/api/tasks/a")
        assert resp.status_code == 200
        assert resp.json()["title"] == "Close deal with Acme"
        assert resp.json()["roiDisplay"] == "100.00"

    async def test_not_found(self, client: AsyncClient):
        resp = await client.get("/api/tasks/missing")
        assert resp.status_code == 404
        assert resp.json()["error"]["code"] == "TASK_NOT_FOUND"


class TestCreateTask:
    async def test_create(self, client: AsyncClient):
        resp = await client.post(
            "/api/tasks",
            json={"title": "Demo for Umbrella", "revenue": 800, "timeTaken": 4, "priority": "High"},
        )
        assert resp.status_code == 201
        data = resp.json()
        assert data["id"]
        assert data["roi"] == 200
        assert data["status"] == "Todo"

        listed = (await client.get("/api/tasks")).json()["tasks"]
        assert data["id"] in [t["id"] for t in listed]

    async def test_invalid_fields_coerced(self, client: AsyncClient):
        """创建不拒绝，非法字段被修正"""
        resp = await client.post(
            "/api/tasks",
            json={"title": " ", "revenue": -1, "timeTaken": "x", "priority": "Urgent"},
        )
        assert resp.status_code == 201
        data = resp.json()
        assert data["title"] == "Untitled Task"
        assert data["revenue"] == 0
        assert data["timeTaken"] == 0
        assert data["priority"] == "Medium"
        assert data["roi"] is None


class TestUpdateTask:
    async def test_patch_status_done(self, client: AsyncClient):
        resp = await client.patch("/api/tasks/a", json={"status": "Done"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "Done"
        assert data["completedAt"] is not None

    async def test_patch_unknown(self, client: AsyncClient):
        resp = await client.patch("/api/tasks/missing", json={"revenue": 5})
        assert resp.status_code == 404


class TestEditDetails:
    async def test_valid_edit(self, client: AsyncClient):
        resp = await client.put(
            "/api/tasks/a/details",
            json={"revenue": 2000, "timeTaken": 4, "notes": " follow up "},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["revenue"] == 2000
        assert data["roi"] == 500
        assert data["notes"] == "follow up"

    async def test_zero_revenue_rejected(self, client: AsyncClient, seeded_store):
        before = seeded_store.get_task("a")

        resp = await client.put("/api/tasks/a/details", json={"revenue": 0, "timeTaken": 4})

        assert resp.status_code == 422
        error = resp.json()["error"]
        assert error["code"] == "TASK_EDIT_REJECTED"
        assert error["field"] == "revenue"
        assert seeded_store.get_task("a") == before

    async def test_negative_time_rejected(self, client: AsyncClient, seeded_store):
        before = seeded_store.tasks

        resp = await client.put("/api/tasks/a/details", json={"revenue": 10, "timeTaken": -1})

        assert resp.status_code == 422
        assert resp.json()["error"]["field"] == "timeTaken"
        assert seeded_store.tasks == before

    async def test_infinite_revenue_rejected(self, client: AsyncClient, seeded_store):
        """JSON Infinity 字面量同样被拒绝"""
        before = seeded_store.tasks

        resp = await client.put(
            "/api/tasks/a/details",
            content='{"revenue": Infinity, "timeTaken": 5, "notes": "x"}',
            headers={"Content-Type": "application/json"},
        )

        assert resp.status_code == 422
        assert resp.json()["error"]["field"] == "revenue"
        assert seeded_store.tasks == before

    async def test_nan_time_rejected(self, client: AsyncClient, seeded_store):
        before = seeded_store.tasks

        resp = await client.put(
            "/api/tasks/a/details",
            content='{"revenue": 10, "timeTaken": NaN}',
            headers={"Content-Type": "application/json"},
        )

        assert resp.status_code == 422
        assert resp.json()["error"]["field"] == "timeTaken"
        assert seeded_store.tasks == before

    async def test_omitted_notes_kept(self, client: AsyncClient):
        """未提交 notes 时保留原备注"""
        await client.put("/api/tasks/a/details", json={"revenue": 10, "timeTaken": 2, "notes": "keep me"})

        resp = await client.put("/api/tasks/a/details", json={"revenue": 20, "timeTaken": 2})

        assert resp.status_code == 200
        assert resp.json()["notes"] == "keep me"
        assert resp.json()["revenue"] == 20

    async def test_blank_notes_clear(self, client: AsyncClient):
        resp = await client.put(
            "/api/tasks/b/details", json={"revenue": 10, "timeTaken": 2, "notes": "  "}
        )
        assert resp.json()["notes"] is None

    async def test_unknown_task(self, client: AsyncClient):
        resp = await client.put("/api/tasks/missing/details", json={"revenue": 1, "timeTaken": 1})
        assert resp.status_code == 404


class TestDeleteTask:
    async def test_delete_enters_pending_undo(self, client: AsyncClient):
        resp = await client.delete("/api/tasks/a")
        assert resp.status_code == 200
        data = resp.json()
        assert data["state"] == "pending_undo"
        assert data["undoVisible"] is True
        assert data["lastDeleted"]["id"] == "a"

        assert (await client.get("/api/tasks/a")).status_code == 404

    async def test_delete_unknown_clears_pending(self, client: AsyncClient):
        await client.delete("/api/tasks/a")
        data = (await client.delete("/api/tasks/missing")).json()
        assert data["state"] == "idle"
        assert data["lastDeleted"] is None
