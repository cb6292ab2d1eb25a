import logging

from sqlalchemy import delete, func, insert, literal_column, select
from sqlalchemy import exc as sa_exc
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tasktracker.exceptions import IntegrityError, NotFoundError, ValidationError
from tasktracker.models.tasks import Task, DEFAULT_STATUS, LEGACY_CREATOR_COLUMN, legacy_tasks
from tasktracker.models.user import User, utcnow
from tasktracker.repositories.base import TaskRepository, open_session
from tasktracker.schemas.task import Task as TaskSchema, TaskCreate, TaskUpdate
from tasktracker.services.schema import SchemaCapabilities
from tasktracker.utils.validation import validate

logger = logging.getLogger(__name__)


class SqlTaskRepository(TaskRepository):
    """
    Tasks stored in a relational database through SQLAlchemy.

    Used both by the local backend (SQLite file) and by the REST server
    (PostgreSQL), so both backends share validation, defaults and ordering.
    Every write runs in its own session and is committed as a whole.
    """

    def __init__(self, sessions: async_sessionmaker[AsyncSession], capabilities: SchemaCapabilities | None = None):
        self._sessions = sessions
        self._capabilities = capabilities or SchemaCapabilities()

    def _enriched_query(self):
        assignee_name = User.name
        if self._capabilities.legacy_creator:
            # Rows written by the free-text creator schema have no assignee
            assignee_name = func.coalesce(User.name, literal_column(f"tasks.{LEGACY_CREATOR_COLUMN}"))
        return (
            select(
                Task.id,
                Task.title,
                Task.description,
                Task.status,
                Task.assigned_user_id,
                Task.created_at,
                assignee_name.label("assignee_name"),
                User.phone.label("assignee_phone"),
            )
            .outerjoin(User, User.id == Task.assigned_user_id)
        )

    @staticmethod
    def _to_schema(row) -> TaskSchema:
        return TaskSchema(
            id=row.id,
            title=row.title,
            description=row.description or "",
            status=row.status or DEFAULT_STATUS.value,
            assignee_id=row.assigned_user_id,
            assignee_name=row.assignee_name or "",
            assignee_phone=row.assignee_phone or "",
            created_at=row.created_at,
        )

    @staticmethod
    async def _require_user(db: AsyncSession, user_id: int | None):
        if user_id is None:
            raise ValidationError("Select a user to assign the task.")
        result = await db.execute(select(User.id).filter(User.id == user_id))
        if result.scalar_one_or_none() is None:
            raise IntegrityError(f"User {user_id} not found for assignment.")

    async def list(self) -> list[TaskSchema]:
        # Rows without a timestamp count as just created
        query = self._enriched_query().order_by(Task.created_at.desc().nulls_first(), Task.id.desc())
        async with open_session(self._sessions) as db:
            result = await db.execute(query)
            return [self._to_schema(row) for row in result.all()]

    async def get(self, task_id: int) -> TaskSchema | None:
        async with open_session(self._sessions) as db:
            result = await db.execute(self._enriched_query().filter(Task.id == task_id))
            row = result.first()
        return self._to_schema(row) if row else None

    async def create(self, title: str, description: str, assignee_id: int | None) -> TaskSchema:
        data = validate(TaskCreate, title=title, description=description, assignee_id=assignee_id)

        values = dict(
            title=data.title,
            description=data.description,
            status=DEFAULT_STATUS.value,
            assigned_user_id=data.assignee_id,
            created_at=utcnow(),
        )
        target = Task.__table__
        if self._capabilities.legacy_creator:
            values.update(creator_name="", creator_email="")
            target = legacy_tasks

        async with open_session(self._sessions) as db:
            await self._require_user(db, data.assignee_id)
            try:
                result = await db.execute(insert(target).values(**values).returning(target.c.id))
                task_id = result.scalar_one()
                await db.commit()
            except sa_exc.IntegrityError as exc:
                await db.rollback()
                raise IntegrityError(f"User {data.assignee_id} not found for assignment.") from exc

        logger.info("Created task %s assigned to user %s", task_id, data.assignee_id)
        return await self.get(task_id)

    async def update(
        self,
        task_id: int,
        title: str | None = None,
        description: str | None = None,
        status: str | None = None,
        assignee_id: int | None = None,
    ) -> TaskSchema:
        changes = validate(TaskUpdate, title=title, description=description, status=status, assignee_id=assignee_id)

        async with open_session(self._sessions) as db:
            task = await db.get(Task, task_id)
            if task is None:
                raise NotFoundError(f"Task {task_id} not found.")

            target_user = changes.assignee_id if changes.assignee_id is not None else task.assigned_user_id
            await self._require_user(db, target_user)

            if changes.title is not None:
                task.title = changes.title
            if changes.description is not None:
                task.description = changes.description
            if changes.status is not None:
                task.status = changes.status.value
            elif not task.status:
                task.status = DEFAULT_STATUS.value
            task.assigned_user_id = target_user

            try:
                await db.commit()
            except sa_exc.IntegrityError as exc:
                await db.rollback()
                raise IntegrityError(f"User {target_user} not found for assignment.") from exc

        logger.info("Updated task %s (status=%s, user=%s)", task_id, changes.status.value if changes.status else "unchanged", target_user)
        return await self.get(task_id)

    async def delete(self, task_id: int) -> bool:
        async with open_session(self._sessions) as db:
            result = await db.execute(delete(Task).where(Task.id == task_id))
            await db.commit()
        removed = result.rowcount > 0
        if removed:
            logger.info("Deleted task %s", task_id)
        return removed
