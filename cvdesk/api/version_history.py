from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from cvdesk.auth import get_current_user
from cvdesk.database import get_db
from cvdesk.models.user import UserProfile
from cvdesk.models.version_history import VersionHistory
from cvdesk.schemas.version_history import VersionHistoryOut
from cvdesk.services import permissions
from cvdesk.services.audit import AuditRecorder


router = APIRouter()


def _history_capability(table_name: str) -> str:
    if table_name == "user_profiles":
        return "can_access_user_profiles"
    return "can_view_all_cvs"


@router.get("", response_model=list[VersionHistoryOut])
def recent_history(
    limit: int = Query(50),
    table_name: str | None = Query(None),
    db: Session = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
) -> list[VersionHistory]:
    permissions.require(current_user.role, "can_access_user_profiles")
    return AuditRecorder(db).query_recent(limit=limit, table_name=table_name)


@router.get("/{table_name}/{record_id}", response_model=list[VersionHistoryOut])
def record_history(
    table_name: str,
    record_id: int,
    db: Session = Depends(get_db),
    current_user: UserProfile = Depends(get_current_user),
) -> list[VersionHistory]:
    permissions.require(current_user.role, _history_capability(table_name))
    return AuditRecorder(db).query_for_record(table_name, record_id)
