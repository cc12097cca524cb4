import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health(test_client: AsyncClient):
    response = await test_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "database": "healthy"}


@pytest.mark.asyncio
async def test_request_id_is_echoed(test_client: AsyncClient):
    response = await test_client.get("/", headers={"x-request-id": "abc123"})

    assert response.status_code == 200
    assert response.headers["x-request-id"] == "abc123"
