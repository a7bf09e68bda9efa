from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from storefront_api.core.storage import JsonFileDatabase


@pytest.fixture(name="database")
def database_fixture(tmp_path: Path) -> JsonFileDatabase:
    """A database rooted in a fresh temporary directory for each test."""
    return JsonFileDatabase(tmp_path / "db")


@pytest_asyncio.fixture(name="client")
async def client_fixture(database: JsonFileDatabase) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client whose requests hit the temporary database."""
    from storefront_api.server.main import app
    from storefront_api.server.services.deps import get_database

    app.dependency_overrides[get_database] = lambda: database

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def user(client: AsyncClient) -> dict:
    response = await client.post(
        "/api/users",
        json={"name": "Ada Lovelace", "email": "ada@example.com", "phone": "1234567890", "city": "London"},
    )
    assert response.status_code == 201
    return response.json()["data"]


@pytest_asyncio.fixture
async def product(client: AsyncClient) -> dict:
    response = await client.post(
        "/api/products",
        json={"name": "Widget", "price": 9.99, "category": "Tools", "stock": 3},
    )
    assert response.status_code == 201
    return response.json()["data"]


@pytest_asyncio.fixture
async def order(client: AsyncClient, user: dict, product: dict) -> dict:
    response = await client.post(
        "/api/orders",
        json={
            "userId": user["id"],
            "items": [{"productId": product["id"], "quantity": 1, "price": 9.99}],
            "totalAmount": 9.99,
        },
    )
    assert response.status_code == 201
    return response.json()["data"]
