import logging

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tasktracker.models.user import User, utcnow
from tasktracker.repositories.base import UserRepository, open_session
from tasktracker.schemas.user import User as UserSchema, UserCreate
from tasktracker.utils.validation import validate

logger = logging.getLogger(__name__)


def _to_schema(user: User) -> UserSchema:
    return UserSchema(id=user.id, name=user.name, phone=user.phone, created_at=user.created_at)


class SqlUserRepository(UserRepository):

    def __init__(self, sessions: async_sessionmaker[AsyncSession]):
        self._sessions = sessions

    async def list(self) -> list[UserSchema]:
        async with open_session(self._sessions) as db:
            result = await db.execute(select(User).order_by(User.name.asc(), User.id.desc()))
            return [_to_schema(u) for u in result.scalars().all()]

    async def get(self, user_id: int) -> UserSchema | None:
        async with open_session(self._sessions) as db:
            user = await db.get(User, user_id)
        return _to_schema(user) if user else None

    async def create(self, name: str, phone: str) -> UserSchema:
        data = validate(UserCreate, name=name, phone=phone)
        async with open_session(self._sessions) as db:
            result = await db.execute(
                insert(User).values(name=data.name, phone=data.phone, created_at=utcnow()).returning(User.id)
            )
            user_id = result.scalar_one()
            await db.commit()
        logger.info("Created user %s", user_id)
        return await self.get(user_id)
