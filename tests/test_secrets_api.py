"""Secret API tests."""

import pytest
from httpx import AsyncClient
from sqlalchemy import text


async def _create(client: AsyncClient, name: str, value: str = "v", description: str | None = None):
    resp = await client.post(
        "/api/secrets/", json={"name": name, "description": description, "value": value}
    )
    assert resp.status_code == 201
    return resp.json()


@pytest.mark.asyncio
async def test_list_secrets_empty(client: AsyncClient):
    resp = await client.get("/api/secrets/")
    assert resp.status_code == 200
    assert resp.json() == []


@pytest.mark.asyncio
async def test_create_list_get_masks_value_in_list(client: AsyncClient):
    created = await _create(client, "DB_URL", value="postgres://u:p@h/db")
    assert created["value"] == "postgres://u:p@h/db"
    assert created["created_at"] == created["updated_at"]

    resp = await client.get("/api/secrets/")
    assert resp.status_code == 200
    listed = resp.json()
    assert [s["name"] for s in listed] == ["DB_URL"]
    assert "value" not in listed[0]

    resp = await client.get(f"/api/secrets/{created['id']}")
    assert resp.status_code == 200
    assert resp.json()["value"] == "postgres://u:p@h/db"


@pytest.mark.asyncio
async def test_get_missing_secret(client: AsyncClient):
    resp = await client.get("/api/secrets/not-a-real-id")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_create_duplicate_secret(client: AsyncClient):
    await _create(client, "DUP")
    resp = await client.post("/api/secrets/", json={"name": "DUP", "value": "other"})
    assert resp.status_code == 409
    assert resp.json()["kind"] == "duplicate_name"
    assert "DUP" in resp.json()["detail"]


@pytest.mark.asyncio
async def test_create_requires_name(client: AsyncClient):
    resp = await client.post("/api/secrets/", json={"name": "", "value": "x"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_update_secret(client: AsyncClient):
    created = await _create(client, "BEFORE", value="1", description="old")
    resp = await client.put(
        f"/api/secrets/{created['id']}",
        json={"name": "AFTER", "description": None, "value": "2"},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["id"] == created["id"]
    assert data["name"] == "AFTER"
    assert data["description"] is None
    assert data["value"] == "2"
    assert data["created_at"] == created["created_at"]
    assert data["updated_at"] >= created["updated_at"]


@pytest.mark.asyncio
async def test_update_missing_secret(client: AsyncClient):
    resp = await client.put("/api/secrets/ghost", json={"name": "X", "value": "y"})
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Secret not found"


@pytest.mark.asyncio
async def test_rename_collision(client: AsyncClient):
    await _create(client, "TAKEN")
    other = await _create(client, "FREE")
    resp = await client.put(f"/api/secrets/{other['id']}", json={"name": "TAKEN", "value": "v"})
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_delete_secret(client: AsyncClient):
    created = await _create(client, "DEL")
    resp = await client.delete(f"/api/secrets/{created['id']}")
    assert resp.status_code == 200
    assert resp.json() == {"deleted": True}

    resp = await client.delete(f"/api/secrets/{created['id']}")
    assert resp.json() == {"deleted": False}

    resp = await client.get(f"/api/secrets/{created['id']}")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_search_secrets(client: AsyncClient):
    await _create(client, "OPENAI_API_KEY", description="LLM access")
    await _create(client, "DB_URL", description="postgres")

    resp = await client.get("/api/secrets/search", params={"query": "llm"})
    assert resp.status_code == 200
    assert resp.json() == [{"name": "OPENAI_API_KEY", "description": "LLM access"}]

    resp = await client.get("/api/secrets/search")
    assert [r["name"] for r in resp.json()] == ["DB_URL", "OPENAI_API_KEY"]


@pytest.mark.asyncio
async def test_store_path(client: AsyncClient, store):
    resp = await client.get("/api/secrets/store-path")
    assert resp.status_code == 200
    assert resp.json() == {"path": str(store.path)}


@pytest.mark.asyncio
async def test_write_env(client: AsyncClient, tmp_path):
    await _create(client, "A", value="has space")
    dest = tmp_path / "out.env"

    resp = await client.post("/api/secrets/write-env", json={"names": ["A", "B"], "path": str(dest)})
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "path": str(dest), "written": 1, "missing": ["B"]}
    assert dest.read_text(encoding="utf-8") == 'A="has space"\n'


@pytest.mark.asyncio
async def test_write_env_relative_path(client: AsyncClient):
    resp = await client.post("/api/secrets/write-env", json={"names": ["A"], "path": "relative/.env"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Path must be absolute"


@pytest.mark.asyncio
async def test_health(client: AsyncClient, store):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["store"] == str(store.path)


@pytest.mark.asyncio
async def test_store_unavailable(client: AsyncClient, store):
    await store.close()
    resp = await client.get("/api/secrets/")
    assert resp.status_code == 503
    assert resp.json()["kind"] == "store_unavailable"


@pytest.mark.asyncio
async def test_write_env_filesystem_error_passes_message(client: AsyncClient, tmp_path):
    await _create(client, "A", value="1")
    blocker = tmp_path / "afile"
    blocker.write_text("not a directory", encoding="utf-8")

    resp = await client.post(
        "/api/secrets/write-env",
        json={"names": ["A"], "path": str(blocker / "sub" / ".env")},
    )
    assert resp.status_code == 500
    detail = resp.json()["detail"]
    assert "Errno" in detail
    assert "afile" in detail


@pytest.mark.asyncio
async def test_storage_error_passes_message(client: AsyncClient, store):
    async with store.session() as db:
        await db.execute(text("DROP TABLE secrets"))
        await db.commit()

    resp = await client.get("/api/secrets/")
    assert resp.status_code == 500
    assert "no such table" in resp.json()["detail"]
