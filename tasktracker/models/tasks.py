from enum import Enum

from sqlalchemy import Column, Integer, MetaData, String, Table, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from tasktracker.database import Base
from tasktracker.models.user import User, utcnow


class TaskStatus(str, Enum):
    PENDING = "pending"
    DONE = "done"


DEFAULT_STATUS = TaskStatus.PENDING

# Physical column names match the database files written by the mobile client,
# so existing local files open without a migration.
ASSIGNEE_COLUMN = "usuario_id"
LEGACY_CREATOR_COLUMN = "criador_nome"


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    title = Column("titulo", String(200), key="title", nullable=False)
    description = Column("descricao", Text, key="description", nullable=True)
    status = Column(String(30), default=DEFAULT_STATUS.value, nullable=True)
    assigned_user_id = Column(ASSIGNEE_COLUMN, Integer, ForeignKey("users.id"), key="assigned_user_id", nullable=True)
    created_at = Column("criado_em", DateTime(timezone=True), key="created_at", default=utcnow)

    assigned_user = relationship("User", back_populates="tasks", foreign_keys=[assigned_user_id])


# Column set of local files created by the free-text creator version of the
# app. Kept out of Base.metadata so create_all never builds it; only used to
# write rows when those NOT NULL columns are present.
legacy_tasks = Table(
    "tasks",
    MetaData(),
    Column("id", Integer, primary_key=True),
    Column("titulo", Text, key="title"),
    Column("descricao", Text, key="description"),
    Column("status", String(30)),
    Column(ASSIGNEE_COLUMN, Integer, key="assigned_user_id"),
    Column("criado_em", DateTime(timezone=True), key="created_at"),
    Column(LEGACY_CREATOR_COLUMN, Text, key="creator_name"),
    Column("criador_email", Text, key="creator_email"),
)
