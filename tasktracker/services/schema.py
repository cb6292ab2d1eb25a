import logging
from dataclasses import dataclass

from sqlalchemy import inspect, or_, text, update
from sqlalchemy.ext.asyncio import AsyncConnection

from tasktracker.database import Base
from tasktracker.models.tasks import Task, DEFAULT_STATUS, ASSIGNEE_COLUMN, LEGACY_CREATOR_COLUMN

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchemaCapabilities:
    # True when the tasks table still carries the NOT NULL free-text creator
    # columns of the older schema; inserts must fill them.
    legacy_creator: bool = False


def _task_columns(sync_conn) -> set[str]:
    return {c["name"] for c in inspect(sync_conn).get_columns("tasks")}


async def ensure_schema(conn: AsyncConnection) -> SchemaCapabilities:
    """
    Create missing tables and columns, backfill defaults and detect the
    legacy creator column. Additive only and safe to run on every startup.
    """
    await conn.run_sync(Base.metadata.create_all)

    columns = await conn.run_sync(_task_columns)
    if ASSIGNEE_COLUMN not in columns:
        logger.info("Adding tasks.%s to an existing tasks table", ASSIGNEE_COLUMN)
        await conn.execute(text(f"ALTER TABLE tasks ADD COLUMN {ASSIGNEE_COLUMN} INTEGER REFERENCES users(id)"))

    result = await conn.execute(
        update(Task.__table__)
        .where(or_(Task.status.is_(None), Task.status == ""))
        .values(status=DEFAULT_STATUS.value)
    )
    if result.rowcount:
        logger.info("Backfilled status of %s task(s) to '%s'", result.rowcount, DEFAULT_STATUS.value)

    capabilities = SchemaCapabilities(legacy_creator=LEGACY_CREATOR_COLUMN in columns)
    logger.debug("Schema ready: %s", capabilities)
    return capabilities
