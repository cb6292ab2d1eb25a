from dataclasses import dataclass
from enum import Enum

from tasktracker.repositories.base import TaskRepository, UserRepository
from tasktracker.repositories.remote import RemoteTaskRepository, RemoteUserRepository
from tasktracker.repositories.tasks import SqlTaskRepository
from tasktracker.repositories.users import SqlUserRepository
from tasktracker.services.local_db import LocalDatabase
from tasktracker.services.transport import ApiClient


class Backend(str, Enum):
    LOCAL = "local"
    REMOTE = "remote"

    @property
    def label(self) -> str:
        return "SQLite (local)" if self is Backend.LOCAL else "PostgreSQL (remote)"


@dataclass(frozen=True)
class Repositories:
    backend: Backend
    tasks: TaskRepository
    users: UserRepository


class BackendSelector:
    """Hands out the repository pair of one backend. Data is never shared between them."""

    def __init__(self, local_db: LocalDatabase | None = None, api_client: ApiClient | None = None):
        self.local_db = local_db or LocalDatabase()
        self._api_client = api_client

    @property
    def api_client(self) -> ApiClient:
        if self._api_client is None:
            self._api_client = ApiClient()
        return self._api_client

    async def bind(self, backend: Backend | str) -> Repositories:
        backend = Backend(backend)
        if backend is Backend.LOCAL:
            handle = await self.local_db.open()
            return Repositories(
                backend,
                SqlTaskRepository(handle.sessions, handle.capabilities),
                SqlUserRepository(handle.sessions),
            )
        return Repositories(
            backend,
            RemoteTaskRepository(self.api_client),
            RemoteUserRepository(self.api_client),
        )

    async def aclose(self):
        await self.local_db.close()
        if self._api_client is not None:
            await self._api_client.aclose()
