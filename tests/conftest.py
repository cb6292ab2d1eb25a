from pathlib import Path

import httpx
import pytest
import pytest_asyncio

from tasktracker.database import make_engine, make_session_factory
from tasktracker.dependencies import get_session_factory
from tasktracker.main import app
from tasktracker.repositories.remote import RemoteTaskRepository, RemoteUserRepository
from tasktracker.repositories.tasks import SqlTaskRepository
from tasktracker.repositories.users import SqlUserRepository
from tasktracker.services.backend import Backend, Repositories
from tasktracker.services.schema import ensure_schema
from tasktracker.services.transport import ApiClient


@pytest_asyncio.fixture
async def sessions(tmp_path: Path):
    """Session factory over a fresh SQLite file with the schema in place."""
    engine = make_engine(f"sqlite+aiosqlite:///{tmp_path / 'server.db'}")
    async with engine.begin() as conn:
        await ensure_schema(conn)
    yield make_session_factory(engine)
    await engine.dispose()


@pytest_asyncio.fixture
async def api_client(sessions):
    """ApiClient talking to the real FastAPI app in-process."""
    app.dependency_overrides[get_session_factory] = lambda: sessions
    async with ApiClient(base_url="http://test", transport=httpx.ASGITransport(app=app)) as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def http(sessions):
    """Raw httpx client for checking the wire format of the API."""
    app.dependency_overrides[get_session_factory] = lambda: sessions
    async with httpx.AsyncClient(base_url="http://test", transport=httpx.ASGITransport(app=app)) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture(params=[Backend.LOCAL, Backend.REMOTE], ids=["local", "remote"])
def repos(request, sessions, api_client) -> Repositories:
    """
    Both repository implementations over the same storage file, so every
    contract test runs once per backend.
    """
    if request.param is Backend.LOCAL:
        return Repositories(Backend.LOCAL, SqlTaskRepository(sessions), SqlUserRepository(sessions))
    return Repositories(Backend.REMOTE, RemoteTaskRepository(api_client), RemoteUserRepository(api_client))


@pytest_asyncio.fixture
async def ana(repos):
    return await repos.users.create("Ana Silva", "11999998888")


@pytest_asyncio.fixture
async def unreachable_sessions(tmp_path: Path):
    """Session factory whose database file can never be opened."""
    engine = make_engine(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'server.db'}")
    yield make_session_factory(engine)
    await engine.dispose()
