from __future__ import annotations

from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator


TenderStatus = Literal["open", "closed", "awarded"]


class QualificationCreate(BaseModel):
    name: str = Field(min_length=1)
    type: str = Field(min_length=1)
    category: str | None = None
    description: str | None = None
    is_active: bool = True


class QualificationUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    type: str | None = Field(default=None, min_length=1)
    category: str | None = None
    description: str | None = None
    is_active: bool | None = None

    @field_validator("name", "type", "is_active", mode="before")
    @classmethod
    def required_fields_not_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("cannot be null")
        return value


class QualificationOut(BaseModel):
    id: int
    name: str
    type: str
    category: str | None = None
    description: str | None = None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class PositionRoleCreate(BaseModel):
    department: str = Field(min_length=1)
    role_name: str = Field(min_length=1)
    discipline: str | None = None
    domain: str | None = None
    category: str | None = None
    level: str | None = None
    sap_k_level: str | None = None
    is_active: bool = True


class PositionRoleUpdate(BaseModel):
    department: str | None = Field(default=None, min_length=1)
    role_name: str | None = Field(default=None, min_length=1)
    discipline: str | None = None
    domain: str | None = None
    category: str | None = None
    level: str | None = None
    sap_k_level: str | None = None
    is_active: bool | None = None

    @field_validator("department", "role_name", "is_active", mode="before")
    @classmethod
    def required_fields_not_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("cannot be null")
        return value


class PositionRoleOut(BaseModel):
    id: int
    department: str
    role_name: str
    discipline: str | None = None
    domain: str | None = None
    category: str | None = None
    level: str | None = None
    sap_k_level: str | None = None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class TenderCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str | None = None
    client: str | None = None
    status: TenderStatus = "open"
    start_date: date | None = None
    end_date: date | None = None
    submission_deadline: date | None = None
    estimated_value: str | None = None
    requirements: str | None = None
    assigned_to: str | None = None


class TenderUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    client: str | None = None
    status: TenderStatus | None = None
    start_date: date | None = None
    end_date: date | None = None
    submission_deadline: date | None = None
    estimated_value: str | None = None
    requirements: str | None = None
    assigned_to: str | None = None

    @field_validator("title", "status", mode="before")
    @classmethod
    def required_fields_not_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("cannot be null")
        return value


class TenderOut(BaseModel):
    id: int
    title: str
    description: str | None = None
    client: str | None = None
    status: str
    start_date: date | None = None
    end_date: date | None = None
    submission_deadline: date | None = None
    estimated_value: str | None = None
    requirements: str | None = None
    assigned_to: str | None = None
    created_by: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True
