from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, EmailStr, Field, field_validator


CVStatus = Literal["active", "pending", "archived"]
MONTH_YEAR_PATTERN = r"^(0[1-9]|1[0-2])/\d{4}$"


class WorkExperience(BaseModel):
    company_name: str = ""
    position: str = ""
    role_title: str | None = None
    start_date: str | None = Field(default=None, pattern=MONTH_YEAR_PATTERN)
    end_date: str | None = Field(default=None, pattern=MONTH_YEAR_PATTERN)
    is_current_role: bool = False

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def blank_date_is_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class CertificateType(BaseModel):
    department: str = ""
    role: str = ""
    certificate_name: str = Field(min_length=1)


class CVRecordFields(BaseModel):
    surname: str | None = None
    id_passport: str | None = None
    gender: str | None = None
    phone: str | None = None
    role_title: str | None = None
    department: str | None = None
    experience: int | None = Field(default=None, ge=0)
    experience_in_similar_role: int | None = Field(default=None, ge=0)
    experience_with_itsm_tools: int | None = Field(default=None, ge=0)
    sap_k_level: str | None = None
    qualifications: str | None = None
    qualification_type: str | None = None
    qualification_name: str | None = None
    institute_name: str | None = None
    year_completed: str | None = None
    other_qualifications: list[dict[str, Any]] | None = None
    languages: str | None = None
    work_experiences: list[WorkExperience] | None = None
    certificate_types: list[CertificateType] | None = None
    skills: str | None = None

    @field_validator("experience", "experience_in_similar_role", "experience_with_itsm_tools", mode="before")
    @classmethod
    def blank_number_is_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("year_completed", mode="before")
    @classmethod
    def year_as_text(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("languages", mode="before")
    @classmethod
    def join_languages(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return ", ".join(str(item).strip() for item in value if str(item).strip())
        return value

    @field_validator("other_qualifications", "work_experiences", "certificate_types", mode="before")
    @classmethod
    def decode_json_list(cls, value: Any) -> Any:
        # Multipart submissions carry nested lists as JSON text.
        if isinstance(value, str):
            if not value.strip():
                return None
            try:
                return json.loads(value)
            except json.JSONDecodeError as exc:
                raise ValueError("must be a JSON array") from exc
        return value


class CVRecordCreate(CVRecordFields):
    name: str = Field(min_length=1)
    email: EmailStr
    position: str = Field(min_length=1)
    status: CVStatus = "pending"


class CVRecordUpdate(CVRecordFields):
    name: str | None = Field(default=None, min_length=1)
    email: EmailStr | None = None
    position: str | None = Field(default=None, min_length=1)
    status: CVStatus | None = None

    @field_validator("name", "email", "position", "status", mode="before")
    @classmethod
    def required_fields_not_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("cannot be null")
        return value


class CVRecordOut(BaseModel):
    id: int
    name: str
    surname: str | None = None
    id_passport: str | None = None
    gender: str | None = None
    email: str
    phone: str | None = None
    position: str
    role_title: str | None = None
    department: str | None = None
    experience: int | None = None
    experience_in_similar_role: int | None = None
    experience_with_itsm_tools: int | None = None
    sap_k_level: str | None = None
    qualifications: str | None = None
    qualification_type: str | None = None
    qualification_name: str | None = None
    institute_name: str | None = None
    year_completed: str | None = None
    other_qualifications: list[dict[str, Any]] | None = None
    languages: str | None = None
    work_experiences: list[WorkExperience] | None = None
    certificate_types: list[CertificateType] | None = None
    skills: str | None = None
    status: str
    cv_file: str | None = None
    submitted_at: datetime
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class CVRecordFilter(BaseModel):
    search: str | None = None
    status: str | None = None
    department: str | None = None
    name: str | None = None
    surname: str | None = None
    id_passport: str | None = None
    language: str | None = None
    role: str | None = None
    role_title: str | None = None
    sap_k_level: str | None = None
    qualification: str | None = None
    experience: int | None = None
