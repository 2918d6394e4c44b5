from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, EmailStr, Field, field_validator


UserRole = Literal["admin", "super_user", "manager", "user"]


class UserProfileCreate(BaseModel):
    username: str = Field(min_length=3, max_length=120)
    email: EmailStr
    password: str = Field(min_length=6, max_length=256)
    role: UserRole = "user"
    first_name: str | None = None
    last_name: str | None = None
    department: str | None = None
    position: str | None = None
    phone_number: str | None = None
    is_active: bool = True


class UserProfileUpdate(BaseModel):
    username: str | None = Field(default=None, min_length=3, max_length=120)
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=6, max_length=256)
    role: UserRole | None = None
    first_name: str | None = None
    last_name: str | None = None
    department: str | None = None
    position: str | None = None
    phone_number: str | None = None
    is_active: bool | None = None

    @field_validator("username", "email", "password", "role", "is_active", mode="before")
    @classmethod
    def required_fields_not_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("cannot be null")
        return value


class UserProfileOut(BaseModel):
    id: int
    username: str
    email: str
    role: str
    first_name: str | None = None
    last_name: str | None = None
    department: str | None = None
    position: str | None = None
    phone_number: str | None = None
    is_active: bool
    last_login: datetime | None = None
    modified_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class UserProfileFilter(BaseModel):
    search: str | None = None
    role: str | None = None
