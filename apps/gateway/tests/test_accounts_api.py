"""账号 API 测试"""

from httpx import AsyncClient


async def _register(client: AsyncClient, **body) -> dict:
    payload = {"name": "acc", "house": "Betano"}
    payload.update(body)
    resp = await client.post("/api/accounts", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()["account"]


class TestAccountsApi:
    async def test_register_and_list(self, client: AsyncClient):
        account = await _register(client, email="x@mail.com")
        assert account["status"] == "ACTIVE"
        resp = await client.get("/api/accounts")
        assert [a["id"] for a in resp.json()["accounts"]] == [account["id"]]

    async def test_register_requires_house(self, client: AsyncClient):
        resp = await client.post("/api/accounts", json={"name": "x"})
        assert resp.status_code == 400

    async def test_filters(self, client: AsyncClient):
        a = await _register(client, name="a", house="KTO")
        await _register(client, name="b", house="Betano")
        await client.post(f"/api/accounts/{a['id']}/limit")

        resp = await client.get("/api/accounts", params={"status": "LIMITED"})
        assert [x["name"] for x in resp.json()["accounts"]] == ["a"]
        resp = await client.get("/api/accounts", params={"house": "Betano"})
        assert [x["name"] for x in resp.json()["accounts"]] == ["b"]

    async def test_update(self, client: AsyncClient):
        account = await _register(client)
        resp = await client.put(
            f"/api/accounts/{account['id']}",
            json={"name": "renamed", "status": "REPLACEMENT"},
        )
        assert resp.status_code == 200
        updated = resp.json()["account"]
        assert updated["name"] == "renamed"
        assert updated["status"] == "ACTIVE"
        assert updated["house"] == "Betano"
        assert updated["updatedAt"] is not None

    async def test_update_missing(self, client: AsyncClient):
        resp = await client.put("/api/accounts/missing", json={"name": "x"})
        assert resp.status_code == 404
        assert resp.json()["error"]["code"] == "ACCOUNT_NOT_FOUND"

    async def test_limit_with_withdrawal(self, client: AsyncClient):
        account = await _register(client)
        resp = await client.post(
            f"/api/accounts/{account['id']}/limit",
            json={"createWithdrawal": True, "pixInfo": "cpf 9"},
        )
        assert resp.status_code == 200
        assert resp.json()["account"]["status"] == "LIMITED"

        tasks = (await client.get("/api/tasks")).json()["tasks"]
        assert len(tasks) == 1
        assert tasks[0]["type"] == "SAQUE"
        assert tasks[0]["pixKeyInfo"] == "cpf 9"
        assert tasks[0]["accountName"] == "acc"

    async def test_replacement_twice(self, client: AsyncClient):
        account = await _register(client)
        first = await client.post(f"/api/accounts/{account['id']}/replacement")
        assert first.status_code == 200
        second = await client.post(f"/api/accounts/{account['id']}/replacement")
        assert second.status_code == 409
        assert second.json()["error"]["code"] == "INVALID_TRANSITION"
