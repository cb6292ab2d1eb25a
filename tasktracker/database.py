from functools import lru_cache

from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from tasktracker.config import settings


Base = declarative_base()


def async_url(url: str) -> str:
    # Ensure we use the async drivers
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    return url


def make_engine(url: str, **kwargs) -> AsyncEngine:
    engine = create_async_engine(async_url(url), echo=False, **kwargs)
    if engine.dialect.name == "sqlite":
        # SQLite ignores REFERENCES clauses unless asked on every connection
        @event.listens_for(engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
    return engine


def make_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False
    )


@lru_cache
def get_engine() -> AsyncEngine:
    """Engine for the server database, created on first use."""
    if not settings.database_url:
        raise RuntimeError("DATABASE_URL is not set. Configure it in the environment or the .env file.")
    connect_args = {"ssl": "require"} if settings.DATABASE_SSL else {}
    return make_engine(settings.database_url, connect_args=connect_args)


@lru_cache
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return make_session_factory(get_engine())
