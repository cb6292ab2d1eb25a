from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from tasktracker.database import get_session_factory as db_session_factory
from tasktracker.repositories.tasks import SqlTaskRepository
from tasktracker.repositories.users import SqlUserRepository
from tasktracker.services.schema import SchemaCapabilities


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return db_session_factory()


def get_capabilities(request: Request) -> SchemaCapabilities:
    # Set by the lifespan once the schema is ready
    return getattr(request.app.state, "capabilities", SchemaCapabilities())


def get_task_repository(
    sessions: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    capabilities: SchemaCapabilities = Depends(get_capabilities),
) -> SqlTaskRepository:
    return SqlTaskRepository(sessions, capabilities)


def get_user_repository(
    sessions: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> SqlUserRepository:
    return SqlUserRepository(sessions)
