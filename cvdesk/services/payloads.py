from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from cvdesk.errors import ValidationError


SchemaT = TypeVar("SchemaT", bound=BaseModel)


def validate_payload(schema: type[SchemaT], data: Mapping[str, Any] | BaseModel | None) -> SchemaT:
    if isinstance(data, schema):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=True)
    try:
        return schema.model_validate(dict(data or {}))
    except PydanticValidationError as exc:
        raise ValidationError.from_pydantic(exc) from exc


def snapshot(schema: type[BaseModel], row: Any) -> dict[str, Any]:
    """JSON-safe copy of a row as it is exposed to callers."""
    return schema.model_validate(row).model_dump(mode="json")
