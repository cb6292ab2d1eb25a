from datetime import datetime

from pydantic import BaseModel, Field, field_validator, model_validator
from tasktracker.models.tasks import TaskStatus, DEFAULT_STATUS
from tasktracker.utils.sanitization import sanitize_string

TITLE_MIN_LENGTH = 3
DESCRIPTION_MIN_LENGTH = 5


def check_title(v: str) -> str:
    if len(v) < TITLE_MIN_LENGTH:
        raise ValueError(f"Title must have at least {TITLE_MIN_LENGTH} characters.")
    return v


def check_description(v: str) -> str:
    if len(v) < DESCRIPTION_MIN_LENGTH:
        raise ValueError(f"Description must have at least {DESCRIPTION_MIN_LENGTH} characters.")
    return v


def normalize_status(v):
    if v is None or isinstance(v, TaskStatus):
        return v
    v = str(v).strip().lower()
    if not v:
        return None
    allowed = [s.value for s in TaskStatus]
    if v not in allowed:
        raise ValueError(f"Invalid status '{v}'. Allowed values: {', '.join(allowed)}.")
    return TaskStatus(v)


# ── Request bodies ─────────────────────────────────────

class TaskCreate(BaseModel):
    title: str = Field(..., alias="titulo", max_length=200)
    description: str = Field("", alias="descricao", validate_default=True)
    assignee_id: int | None = Field(None, alias="usuarioId")

    @field_validator("title", "description", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        return check_title(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        return check_description(v)

    @model_validator(mode="after")
    def require_assignee(self):
        if self.assignee_id is None:
            raise ValueError("Select a user to assign the task.")
        return self

    class Config:
        populate_by_name = True


class TaskUpdate(BaseModel):
    """Partial update. Fields left as None keep their stored value."""

    title: str | None = Field(None, alias="titulo", max_length=200)
    description: str | None = Field(None, alias="descricao")
    status: TaskStatus | None = None
    assignee_id: int | None = Field(None, alias="usuarioId")

    @field_validator("title", "description", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        return v if v is None else check_title(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        return v if v is None else check_description(v)

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, v):
        return normalize_status(v)

    class Config:
        populate_by_name = True


# ── Enriched record ────────────────────────────────────

class Task(BaseModel):
    id: int
    title: str = Field(..., alias="titulo")
    description: str = Field("", alias="descricao")
    status: str = DEFAULT_STATUS.value
    assignee_id: int | None = Field(None, alias="usuarioId")
    assignee_name: str = Field("", alias="usuarioNome")
    assignee_phone: str = Field("", alias="usuarioTelefone")
    created_at: datetime | None = Field(None, alias="criadoEm")

    class Config:
        from_attributes = True
        populate_by_name = True
