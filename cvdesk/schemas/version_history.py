from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel


class VersionHistoryOut(BaseModel):
    id: int
    table_name: str
    record_id: int
    action: str
    old_values: dict[str, Any] | None = None
    new_values: dict[str, Any] | None = None
    changed_fields: list[str] = []
    user_id: int | None = None
    username: str
    timestamp: datetime
    description: str | None = None

    class Config:
        from_attributes = True
