"""Health endpoint and request-id middleware."""

from httpx import AsyncClient


async def test_health_returns_ok(client: AsyncClient) -> None:
    response = await client.get("/api/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["service"] == "accounts"
    assert "timestamp" in body


async def test_request_id_is_generated(client: AsyncClient) -> None:
    response = await client.get("/api/health")
    assert len(response.headers["x-request-id"]) == 36


async def test_safe_request_id_is_echoed(client: AsyncClient) -> None:
    response = await client.get("/api/health", headers={"X-Request-ID": "trace-123"})
    assert response.headers["x-request-id"] == "trace-123"


async def test_unsafe_request_id_is_replaced(client: AsyncClient) -> None:
    response = await client.get(
        "/api/health", headers={"X-Request-ID": "bad id; drop table"}
    )
    assert response.headers["x-request-id"] != "bad id; drop table"
