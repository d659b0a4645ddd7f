"""Service test fixtures — async DB, store, service + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - db_manager, store and service are built exactly as the lifespan builds
      them, only the database URL differs
    - client installs db_manager/resource_service on app.state and restores them

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - ASGITransport does not run the lifespan, so app.state is wired by hand
"""

import pytest
from httpx import ASGITransport, AsyncClient

from studyvault.core.auth_gate import AuthGate
from studyvault.infrastructure.database import DatabaseSessionManager
from studyvault.main import app
from studyvault.services.resource_service import ResourceService
from studyvault.services.resource_store import ResourceStore

from tests.support import TEST_SECRET


@pytest.fixture
async def db_manager():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    await manager.create_all()
    yield manager
    await manager.dispose()


@pytest.fixture
def store(db_manager):
    return ResourceStore(db_manager)


@pytest.fixture
def service(store):
    return ResourceService(AuthGate(TEST_SECRET), store)


@pytest.fixture
async def client(db_manager, service):
    """FastAPI test client wired to the test database."""
    previous = {
        name: getattr(app.state, name, None)
        for name in ("db_manager", "resource_service")
    }
    app.state.db_manager = db_manager
    app.state.resource_service = service

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    for name, value in previous.items():
        setattr(app.state, name, value)
