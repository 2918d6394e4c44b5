from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cvdesk.errors import AuditWriteError
from cvdesk.models.user import UserProfile
from cvdesk.models.version_history import AUDIT_ACTIONS, VersionHistory


logger = logging.getLogger(__name__)

# Maintained by the store, never by the caller.
BOOKKEEPING_FIELDS = frozenset({"id", "submitted_at", "created_at", "updated_at", "last_login", "modified_by"})

MAX_RECENT_LIMIT = 500

_INTEGER_TEXT = re.compile(r"^-?\d+$")
_DECIMAL_TEXT = re.compile(r"^-?\d+\.\d+$")


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and value == "":
        return None
    return value


def _as_number(text: str) -> Any:
    stripped = text.strip()
    if _INTEGER_TEXT.match(stripped):
        return int(stripped)
    if _DECIMAL_TEXT.match(stripped):
        return float(stripped)
    return text


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _values_equal(old: Any, new: Any) -> bool:
    old, new = _blank_to_none(old), _blank_to_none(new)
    if old is None or new is None:
        return old is None and new is None
    if isinstance(old, bool) or isinstance(new, bool):
        return type(old) is type(new) and old == new
    # Numeric text is read as a number only when compared against a number.
    if isinstance(old, str) and _is_number(new):
        old = _as_number(old)
    elif isinstance(new, str) and _is_number(old):
        new = _as_number(new)
    return old == new


def compute_changed_fields(old_values: dict[str, Any] | None, new_values: dict[str, Any] | None) -> list[str]:
    old_values = old_values or {}
    new_values = new_values or {}
    keys = list(old_values) + [key for key in new_values if key not in old_values]
    return [
        key
        for key in keys
        if key not in BOOKKEEPING_FIELDS and not _values_equal(old_values.get(key), new_values.get(key))
    ]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class AuditRecorder:
    def __init__(self, db: Session) -> None:
        self.db = db

    def record(
        self,
        action: str,
        table_name: str,
        record_id: int,
        actor: UserProfile,
        old_values: dict[str, Any] | None = None,
        new_values: dict[str, Any] | None = None,
        description: str | None = None,
    ) -> VersionHistory:
        if action not in AUDIT_ACTIONS:
            raise ValueError(f"unsupported audit action '{action}'")

        changed_fields = compute_changed_fields(old_values, new_values) if action == "UPDATE" else []
        entry = VersionHistory(
            table_name=table_name,
            record_id=record_id,
            action=action,
            old_values=old_values if action != "CREATE" else None,
            new_values=new_values if action != "DELETE" else None,
            changed_fields=changed_fields,
            user_id=actor.id,
            username=actor.username,
            timestamp=_utcnow(),
            description=description or f"{action.lower()} operation on {table_name}",
        )
        try:
            self.db.add(entry)
            self.db.flush()
        except SQLAlchemyError as exc:
            logger.error("Failed to write %s history for %s/%s", action, table_name, record_id)
            raise AuditWriteError(f"Could not record {action} on {table_name} {record_id}") from exc

        logger.info(
            "%s %s/%s by %s changed=%s", action, table_name, record_id, actor.username, changed_fields or "-"
        )
        return entry

    def query_for_record(self, table_name: str, record_id: int) -> list[VersionHistory]:
        return (
            self.db.query(VersionHistory)
            .filter(VersionHistory.table_name == table_name, VersionHistory.record_id == record_id)
            .order_by(VersionHistory.timestamp.desc(), VersionHistory.id.desc())
            .all()
        )

    def query_recent(self, limit: int = 50, table_name: str | None = None) -> list[VersionHistory]:
        limit = max(1, min(limit, MAX_RECENT_LIMIT))
        query = self.db.query(VersionHistory)
        if table_name:
            query = query.filter(VersionHistory.table_name == table_name)
        return query.order_by(VersionHistory.timestamp.desc(), VersionHistory.id.desc()).limit(limit).all()
