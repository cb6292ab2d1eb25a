import asyncio
import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from tasktracker.config import settings
from tasktracker.database import make_engine, make_session_factory
from tasktracker.exceptions import ConnectivityError
from tasktracker.services.schema import SchemaCapabilities, ensure_schema

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocalHandle:
    engine: AsyncEngine
    sessions: async_sessionmaker[AsyncSession]
    capabilities: SchemaCapabilities


class LocalDatabase:
    """
    Embedded SQLite database, opened on first use and kept for the process.

    All concurrent first callers await the same in-flight open, so the file is
    opened and its schema prepared exactly once. A failed open is remembered:
    local storage stays unusable until close() is called.
    """

    def __init__(self, path: str | None = None):
        self.path = path or settings.LOCAL_DATABASE_PATH
        self._opening: asyncio.Task | None = None

    async def open(self) -> LocalHandle:
        if self._opening is None:
            self._opening = asyncio.ensure_future(self._open())
        return await asyncio.shield(self._opening)

    async def _open(self) -> LocalHandle:
        logger.info("Opening local database %s", self.path)
        engine = make_engine(f"sqlite+aiosqlite:///{self.path}")
        try:
            async with engine.begin() as conn:
                capabilities = await ensure_schema(conn)
        except SQLAlchemyError as exc:
            logger.error("Local database %s is unusable: %s", self.path, exc)
            await engine.dispose()
            raise ConnectivityError(f"Could not prepare the local database: {exc}") from exc
        return LocalHandle(engine, make_session_factory(engine), capabilities)

    async def close(self):
        opening, self._opening = self._opening, None
        if opening is None:
            return
        try:
            handle = await opening
        except ConnectivityError:
            return
        await handle.engine.dispose()
