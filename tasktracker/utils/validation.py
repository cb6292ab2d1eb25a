from typing import TypeVar

from pydantic import BaseModel, ValidationError as SchemaError
from tasktracker.exceptions import ValidationError

M = TypeVar("M", bound=BaseModel)


def first_error_message(errors: list[dict]) -> str:
    """Human-readable message of the first pydantic error."""
    if not errors:
        return "Invalid data."
    error = errors[0]
    ctx_error = (error.get("ctx") or {}).get("error")
    if ctx_error:
        return str(ctx_error)
    field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    return f"{field}: {error['msg']}" if field else error["msg"]


def validate(schema: type[M], **fields) -> M:
    try:
        return schema(**fields)
    except SchemaError as exc:
        raise ValidationError(first_error_message(exc.errors())) from exc
