from datetime import datetime

from pydantic import BaseModel, Field, field_validator
from tasktracker.utils.sanitization import sanitize_string, phone_digits

NAME_MIN_LENGTH = 3
PHONE_MIN_DIGITS = 8


class UserBase(BaseModel):
    name: str = Field(..., alias="nome", max_length=100)
    phone: str = Field(..., alias="telefone", max_length=30)

    @field_validator("name", "phone", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)

    class Config:
        populate_by_name = True


class UserCreate(UserBase):

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        if len(v) < NAME_MIN_LENGTH:
            raise ValueError(f"Name must have at least {NAME_MIN_LENGTH} characters.")
        return v

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        if len(phone_digits(v)) < PHONE_MIN_DIGITS:
            raise ValueError(f"Enter a valid phone number (at least {PHONE_MIN_DIGITS} digits).")
        return v


class User(UserBase):
    id: int
    created_at: datetime | None = Field(None, alias="criadoEm")

    class Config:
        from_attributes = True
        populate_by_name = True
