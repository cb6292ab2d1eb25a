import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager

from sqlalchemy import exc as sa_exc
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tasktracker.exceptions import ConnectivityError
from tasktracker.models.tasks import TaskStatus
from tasktracker.schemas.task import Task
from tasktracker.schemas.user import User

logger = logging.getLogger(__name__)


@asynccontextmanager
async def open_session(sessions: async_sessionmaker[AsyncSession]):
    """Session whose storage failures surface as ConnectivityError."""
    try:
        async with sessions() as db:
            yield db
    except (sa_exc.OperationalError, sa_exc.InterfaceError) as exc:
        logger.error("Storage unavailable: %s", exc)
        raise ConnectivityError("Storage is unavailable. Try again later.") from exc


class TaskRepository(ABC):
    """Task operations shared by the local and the remote backend."""

    @abstractmethod
    async def list(self) -> list[Task]:
        """Tasks newest first, enriched with the assignee's name and phone."""

    @abstractmethod
    async def get(self, task_id: int) -> Task | None:
        ...

    @abstractmethod
    async def create(self, title: str, description: str, assignee_id: int | None) -> Task:
        ...

    @abstractmethod
    async def update(
        self,
        task_id: int,
        title: str | None = None,
        description: str | None = None,
        status: str | None = None,
        assignee_id: int | None = None,
    ) -> Task:
        ...

    @abstractmethod
    async def delete(self, task_id: int) -> bool:
        ...

    async def mark_done(self, task_id: int) -> Task:
        return await self.update(task_id, status=TaskStatus.DONE.value)


class UserRepository(ABC):

    @abstractmethod
    async def list(self) -> list[User]:
        """Users by name, newest first on equal names."""

    @abstractmethod
    async def get(self, user_id: int) -> User | None:
        ...

    @abstractmethod
    async def create(self, name: str, phone: str) -> User:
        ...
