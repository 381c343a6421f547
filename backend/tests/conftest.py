"""
CaseDesk Backend: Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every API test gets its own app built by ``create_app(settings)``
       against a fresh SQLite file (aiosqlite), so tests never share rows.

Fixture Hierarchy (all function-scoped):
    ├── settings_factory: builds Settings with per-test overrides
    ├── settings:       Settings pointing at a temp SQLite database
    ├── app:            FastAPI app with the schema created
    ├── client:         HTTPX AsyncClient over ASGITransport
    ├── auth_headers:   Authorization header carrying a valid admin token
    └── mock_store:     AsyncMock standing in for DataStore in service tests
"""

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from casedesk.config import Settings
from casedesk.database import DataStore, QueryResult
from casedesk.main import create_app

TEST_SECRET = "test-signing-secret-0123456789abcdef"
TEST_PASSWORD = "correct-horse-battery-staple"


def make_settings(**overrides) -> Settings:
    """Settings that ignore any .env file; explicit values beat the environment."""
    values = {
        "jwt_secret": TEST_SECRET,
        "admin_password": TEST_PASSWORD,
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings_factory(tmp_path):
    """
    Build Settings against a temp SQLite file, overriding any field.

    Usage:
        settings = settings_factory(token_ttl_hours=2)
    """
    def factory(**overrides):
        overrides.setdefault("database_url", f"sqlite+aiosqlite:///{tmp_path / 'casedesk.db'}")
        return make_settings(**overrides)
    return factory


@pytest.fixture
def settings(settings_factory):
    return settings_factory()


@pytest_asyncio.fixture
async def app(settings):
    application = create_app(settings)
    await application.state.store.create_all()
    yield application
    await application.state.store.dispose()


@pytest_asyncio.fixture
async def client(app):
    """
    HTTPX AsyncClient routed straight into the app.

    Usage:
        async def test_list(client):
            response = await client.get("/api/cases")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def auth_headers(app):
    token = app.state.token_service.issue({"role": "admin"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def mock_store():
    """
    A DataStore double for service-level tests.

    Usage:
        mock_store.query.return_value = QueryResult(rows=[...])
        await case_service.list_cases(mock_store)
    """
    store = AsyncMock(spec=DataStore)
    store.query = AsyncMock(return_value=QueryResult())
    return store
