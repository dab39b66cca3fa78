"""HTTP routes for categorization rules."""

import asyncio

import pytest

from autocat.schemas.internal import Transaction
from autocat.storage.memory import InMemoryTransactionStore

USER_ID = "user-1"


async def _create(client, *patterns, category_id="groceries", **fields):
    response = await client.post(
        "/api/v1/rules",
        json={"patterns": list(patterns), "category_id": category_id, **fields},
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_requires_user_header(client):
    response = await client.get("/api/v1/rules", headers={"X-User-Id": ""})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_and_list(client):
    first = await _create(client, "starbucks", category_id="coffee")
    assert first["priority"] == 1
    assert first["patterns"] == ["starbucks"]
    await _create(client, "safeway", "kroger")

    response = await client.get("/api/v1/rules")
    assert response.status_code == 200
    rules = response.json()
    assert [r["priority"] for r in rules] == [1, 2]
    assert [len(r["patterns"]) for r in rules] == [1, 2]


@pytest.mark.asyncio
async def test_create_duplicate_pattern(client):
    await _create(client, "amazon", "amzn")
    response = await client.post(
        "/api/v1/rules",
        json={"patterns": ["amazon prime", "amazon"], "category_id": "coffee"},
    )
    assert response.status_code == 422
    assert "already exist" in response.json()["detail"]


@pytest.mark.asyncio
async def test_create_too_many_patterns(client):
    response = await client.post(
        "/api/v1/rules",
        json={"patterns": ["p1", "p2", "p3", "p4", "p5", "p6"], "category_id": "x"},
    )
    assert response.status_code == 422
    assert "Invalid" in response.json()["detail"]


@pytest.mark.asyncio
async def test_update_and_delete(client):
    rule = await _create(client, "target")
    response = await client.patch(
        f"/api/v1/rules/{rule['id']}",
        json={"patterns": ["target", "tgt"], "is_active": False},
    )
    assert response.status_code == 200
    assert response.json()["patterns"] == ["target", "tgt"]
    assert response.json()["is_active"] is False

    response = await client.delete(f"/api/v1/rules/{rule['id']}")
    assert response.status_code == 204
    assert (await client.get("/api/v1/rules")).json() == []


@pytest.mark.asyncio
async def test_update_cannot_set_priority(client):
    rule = await _create(client, "target")
    response = await client.patch(f"/api/v1/rules/{rule['id']}", json={"priority": 5})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_unknown_rule_is_404(client):
    response = await client.delete("/api/v1/rules/non-existent-id")
    assert response.status_code == 404
    assert "not found" in response.json()["detail"]


@pytest.mark.asyncio
async def test_reorder_and_move(client):
    r1 = await _create(client, "a")
    r2 = await _create(client, "b")

    response = await client.put("/api/v1/rules/reorder", json={"rule_ids": [r2["id"], r1["id"]]})
    assert response.status_code == 200
    assert [(r["id"], r["priority"]) for r in response.json()] == [(r2["id"], 1), (r1["id"], 2)]

    response = await client.post(f"/api/v1/rules/{r1['id']}/move-up")
    assert response.status_code == 200
    assert [r["id"] for r in response.json()] == [r1["id"], r2["id"]]

    response = await client.post(f"/api/v1/rules/{r1['id']}/move-up")
    assert response.status_code == 400
    assert "Cannot move" in response.json()["detail"]


@pytest.mark.asyncio
async def test_reorder_with_invalid_id(client):
    rule = await _create(client, "valid")
    response = await client.put("/api/v1/rules/reorder", json={"rule_ids": [rule["id"], "invalid-id"]})
    assert response.status_code == 404
    assert "not found" in response.json()["detail"]


@pytest.fixture
def transaction_store():
    return InMemoryTransactionStore(
        {
            USER_ID: [
                Transaction(id="t1", name="STARBUCKS 42"),
                Transaction(id="t2", name="STARBUCKS 43", category_id="food"),
            ]
        }
    )


@pytest.mark.asyncio
async def test_apply_and_preview(client):
    await _create(client, "starbucks", category_id="coffee")

    response = await client.post("/api/v1/rules/preview", json={"force_recategorize": True})
    assert response.status_code == 200
    assert response.json()["would_categorize"] == 1
    assert response.json()["would_recategorize"] == 1

    response = await client.post("/api/v1/rules/apply")
    assert response.status_code == 200
    data = response.json()
    assert (data["categorized"], data["recategorized"], data["total"]) == (1, 0, 2)
    assert data["message"] == "Categorized 1 of 2 transactions"

    response = await client.post("/api/v1/rules/apply", json={"force_recategorize": True})
    assert response.json()["recategorized"] == 2


@pytest.mark.asyncio
async def test_concurrent_creates_are_all_kept(client, rule_store, monkeypatch):
    original_get_all = rule_store.get_all

    async def slow_get_all(user_id):
        rules = await original_get_all(user_id)
        await asyncio.sleep(0)
        return rules

    monkeypatch.setattr(rule_store, "get_all", slow_get_all)
    responses = await asyncio.gather(
        *(
            client.post("/api/v1/rules", json={"patterns": [f"shop{i}"], "category_id": "x"})
            for i in range(5)
        )
    )
    assert [r.status_code for r in responses] == [201] * 5

    rules = (await client.get("/api/v1/rules")).json()
    assert sorted(r["priority"] for r in rules) == [1, 2, 3, 4, 5]


@pytest.mark.asyncio
async def test_reorder_empty_rule_set(client):
    response = await client.put("/api/v1/rules/reorder", json={"rule_ids": []})
    assert response.status_code == 200
    assert response.json() == []
