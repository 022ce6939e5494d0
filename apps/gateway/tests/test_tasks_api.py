"""任务 API 测试"""

from httpx import AsyncClient


async def _create(client: AsyncClient, **body) -> dict:
    payload = {"type": "CONTA_NOVA", "house": "Bet365"}
    payload.update(body)
    resp = await client.post("/api/tasks", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()["task"]


class TestCreateAndQuery:
    async def test_create_task(self, client: AsyncClient):
        task = await _create(client, quantity=3, pixKeyInfo="cpf 1")
        assert task["status"] == "PENDING"
        assert task["quantity"] == 3
        assert task["pixKeyInfo"] == "cpf 1"
        assert len(task["id"]) == 26

    async def test_unknown_task_type(self, client: AsyncClient):
        resp = await client.post("/api/tasks", json={"type": "NOPE", "house": "Bet365"})
        assert resp.status_code == 422
        assert resp.json()["error"]["code"] == "INVALID_TASK_TYPE"

    async def test_missing_house(self, client: AsyncClient):
        resp = await client.post("/api/tasks", json={"type": "SMS"})
        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "INVALID_INPUT"

    async def test_blank_house(self, client: AsyncClient):
        resp = await client.post("/api/tasks", json={"type": "SMS", "house": " "})
        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "INVALID_INPUT"

    async def test_list_and_filter(self, client: AsyncClient):
        first = await _create(client)
        second = await _create(client, type="SMS", status="REQUESTED")

        resp = await client.get("/api/tasks")
        ids = [t["id"] for t in resp.json()["tasks"]]
        assert ids == [second["id"], first["id"]]

        resp = await client.get("/api/tasks", params={"status": "REQUESTED"})
        assert [t["id"] for t in resp.json()["tasks"]] == [second["id"]]

    async def test_detail_includes_logs(self, client: AsyncClient):
        task = await _create(client)
        resp = await client.get(f"/api/tasks/{task['id']}")
        assert resp.status_code == 200
        data = resp.json()
        assert data["task"]["id"] == task["id"]
        assert data["logs"][0]["action"] == "Task created (Pending)"
        assert data["logs"][0]["actor"] == "Ana"

    async def test_detail_not_found(self, client: AsyncClient):
        resp = await client.get("/api/tasks/01JNOTEXIST000000000000000")
        assert resp.status_code == 404
        assert resp.json() == {
            "error": {
                "code": "TASK_NOT_FOUND",
                "message": "Task with id 01JNOTEXIST000000000000000 does not exist",
            }
        }


class TestTaskCommands:
    async def test_change_status(self, client: AsyncClient):
        task = await _create(client)
        resp = await client.post(f"/api/tasks/{task['id']}/status", json={"status": "FINALIZED"})
        assert resp.status_code == 200
        assert resp.json()["task"]["status"] == "FINALIZED"

    async def test_change_status_invalid_value(self, client: AsyncClient):
        task = await _create(client)
        resp = await client.post(f"/api/tasks/{task['id']}/status", json={"status": "DONE"})
        assert resp.status_code == 400

    async def test_edit(self, client: AsyncClient):
        task = await _create(client, description="old")
        resp = await client.patch(f"/api/tasks/{task['id']}", json={"pixKeyInfo": "email x"})
        assert resp.status_code == 200
        assert resp.json()["task"]["pixKeyInfo"] == "email x"
        assert resp.json()["task"]["description"] == "old"

        detail = (await client.get(f"/api/tasks/{task['id']}")).json()
        assert detail["logs"][0]["action"] == "Pix key updated"

    async def test_delete_without_body(self, client: AsyncClient):
        task = await _create(client)
        resp = await client.post(f"/api/tasks/{task['id']}/delete")
        assert resp.status_code == 200
        assert resp.json()["task"]["status"] == "DELETED"
        assert resp.json()["task"]["deletionReason"] == "not provided"

    async def test_delete_with_reason(self, client: AsyncClient):
        task = await _create(client)
        resp = await client.post(f"/api/tasks/{task['id']}/delete", json={"reason": "dup"})
        assert resp.json()["task"]["deletionReason"] == "dup"

    async def test_delete_missing(self, client: AsyncClient):
        resp = await client.post("/api/tasks/missing/delete")
        assert resp.status_code == 404

    async def test_delivery(self, client: AsyncClient):
        task = await _create(client, quantity=2)
        resp = await client.post(
            f"/api/tasks/{task['id']}/delivery",
            json={"accounts": [{"name": "acc1", "email": "a@x.com", "depositValue": 50}]},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["remainingQuantity"] == 1
        assert data["fullyDelivered"] is False
        assert data["task"]["quantity"] == 1
        assert data["accounts"][0]["house"] == "Bet365"
        assert data["accounts"][0]["taskIdSource"] == task["id"]

    async def test_empty_delivery(self, client: AsyncClient):
        task = await _create(client)
        resp = await client.post(f"/api/tasks/{task['id']}/delivery", json={"accounts": []})
        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "INVALID_INPUT"
