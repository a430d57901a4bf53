"""撤销 API 测试 -- 删除 / 恢复 / 放弃 / 超时"""

from httpx import AsyncClient


class TestUndo:
    async def test_initial_idle(self, client: AsyncClient):
        data = (await client.get("/api/undo")).json()
        assert data == {"state": "idle", "undoVisible": False, "lastDeleted": None, "restored": None}

    async def test_undo_restores(self, client: AsyncClient):
        await client.delete("/api/tasks/b")

        resp = await client.post("/api/undo")
        assert resp.status_code == 200
        data = resp.json()
        assert data["restored"]["id"] == "b"
        assert data["state"] == "idle"

        ids = [t["id"] for t in (await client.get("/api/tasks")).json()["tasks"]]
        assert ids.count("b") == 1

    async def test_undo_without_pending(self, client: AsyncClient):
        data = (await client.post("/api/undo")).json()
        assert data["restored"] is None
        assert len((await client.get("/api/tasks")).json()["tasks"]) == 3

    async def test_dismiss(self, client: AsyncClient):
        await client.delete("/api/tasks/b")
        data = (await client.post("/api/undo/dismiss")).json()
        assert data["state"] == "idle"

        assert (await client.post("/api/undo")).json()["restored"] is None
        assert (await client.get("/api/tasks/b")).status_code == 404

    async def test_expires_after_timeout(self, client: AsyncClient, clock):
        """超时后读取撤销状态即为 idle"""
        await client.delete("/api/tasks/b")
        assert (await client.get("/api/undo")).json()["undoVisible"] is True

        clock.advance(4)

        data = (await client.get("/api/undo")).json()
        assert data["state"] == "idle"
        assert (await client.post("/api/undo")).json()["restored"] is None
