from __future__ import annotations

import json
from typing import Any, Callable

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile

from cvdesk.auth import get_current_user
from cvdesk.database import get_db
from cvdesk.errors import ValidationError
from cvdesk.models.user import UserProfile
from cvdesk.services import permissions
from cvdesk.services.blob_store import BlobStore, Upload
from cvdesk.services.cv_records import CVRecordService
from cvdesk.services.user_profiles import UserProfileService


def get_blob_store(request: Request) -> BlobStore:
    return request.app.state.blob_store


def get_cv_record_service(
    db: Session = Depends(get_db),
    blob_store: BlobStore = Depends(get_blob_store),
) -> CVRecordService:
    return CVRecordService(db, blob_store)


def get_user_profile_service(db: Session = Depends(get_db)) -> UserProfileService:
    return UserProfileService(db)


def require_capability(capability: str) -> Callable[..., UserProfile]:
    """Resolve the signed-in user and reject them before the request body is read."""

    def dependency(current_user: UserProfile = Depends(get_current_user)) -> UserProfile:
        permissions.require(current_user.role, capability)
        return current_user

    return dependency


async def read_json_object(request: Request) -> dict[str, Any]:
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValidationError({"request": ["Body must be valid JSON"]}) from exc
    if not isinstance(body, dict):
        raise ValidationError({"request": ["Body must be a JSON object"]})
    return body


async def read_submission(request: Request, file_field: str = "cv_file") -> tuple[dict[str, Any], Upload | None]:
    """Read a JSON body, or a multipart form with an optional file part."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("multipart/form-data") or content_type.startswith(
        "application/x-www-form-urlencoded"
    ):
        form = await request.form()
        data: dict[str, Any] = {}
        upload: Upload | None = None
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                if key == file_field and value.filename:
                    upload = Upload(filename=value.filename, content=await value.read())
                continue
            # Blank form controls count as not submitted.
            if not value.strip():
                continue
            if key in data:
                previous = data[key]
                data[key] = [*previous, value] if isinstance(previous, list) else [previous, value]
            else:
                data[key] = value
        return data, upload

    return await read_json_object(request), None
