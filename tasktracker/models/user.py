from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from tasktracker.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column("nome", String(100), key="name", nullable=False)
    phone = Column("telefone", String(30), key="phone", nullable=False)
    created_at = Column("criado_em", DateTime(timezone=True), key="created_at", default=utcnow)

    tasks = relationship("Task", back_populates="assigned_user")
