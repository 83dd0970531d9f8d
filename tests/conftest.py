"""
Shared pytest fixtures.

Async tests run on the anyio plugin against an in-memory SQLite database;
API tests drive the application through FastAPI's TestClient.
"""

import pytest
from fastapi.testclient import TestClient

from restaurant_menu.core.config import Settings
from restaurant_menu.database import Database
from restaurant_menu.main import create_app
from restaurant_menu.services.cache import DataCache

TEST_DATABASE_URL = "sqlite+aiosqlite://"

ADMIN_EMAIL = "admin@restaurant.com"
ADMIN_PASSWORD = "admin123"


class FakeClock:
    """Manually advanced time source for cache tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        database_url=TEST_DATABASE_URL,
        secret_key="test-secret-key-with-enough-length-for-hs256",
        seed_on_startup=True,
    )


@pytest.fixture
async def database():
    db = Database(TEST_DATABASE_URL)
    await db.connect()
    yield db
    await db.disconnect()


@pytest.fixture
async def session(database):
    async with database.session() as s:
        yield s


@pytest.fixture
def client(test_settings):
    app = create_app(
        settings=test_settings,
        database=Database(test_settings.database_url),
        cache=DataCache(),
    )
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_token(client) -> str:
    response = client.post(
        "/api/admin/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200, response.text
    return response.json()["token"]


@pytest.fixture
def auth_headers(admin_token) -> dict[str, str]:
    return {"Authorization": f"Bearer {admin_token}"}
