from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cvdesk.auth import hash_password
from cvdesk.database import transaction
from cvdesk.errors import ConflictError, NotFoundError
from cvdesk.models.auth_session import AuthSession
from cvdesk.models.user import UserProfile
from cvdesk.schemas.user_profile import UserProfileCreate, UserProfileFilter, UserProfileOut, UserProfileUpdate
from cvdesk.services import permissions
from cvdesk.services.audit import AuditRecorder
from cvdesk.services.payloads import snapshot, validate_payload


logger = logging.getLogger(__name__)

TABLE_NAME = "user_profiles"

SEARCH_COLUMNS = (
    UserProfile.username,
    UserProfile.email,
    UserProfile.first_name,
    UserProfile.last_name,
    UserProfile.department,
)


def _conflict_from_integrity(exc: IntegrityError, username: str | None, email: str | None) -> ConflictError:
    detail = str(exc.orig).lower()
    if "email" in detail:
        return ConflictError("email", email or "")
    return ConflictError("username", username or "")


class UserProfileService:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.audit = AuditRecorder(db)

    def _load(self, user_id: int) -> UserProfile:
        user = self.db.get(UserProfile, user_id)
        if user is None:
            raise NotFoundError("User profile", user_id)
        return user

    def _ensure_unique(self, username: str | None, email: str | None, exclude_id: int | None = None) -> None:
        for field, column, value in (
            ("username", UserProfile.username, username),
            ("email", UserProfile.email, email),
        ):
            if value is None:
                continue
            query = self.db.query(UserProfile.id).filter(column == value)
            if exclude_id is not None:
                query = query.filter(UserProfile.id != exclude_id)
            if query.first() is not None:
                logger.info("Rejected duplicate %s %r", field, value)
                raise ConflictError(field, value)

    def create(self, actor: UserProfile, data: Any) -> UserProfile:
        permissions.require(actor.role, "can_create_users")
        payload = validate_payload(UserProfileCreate, data)
        self._ensure_unique(payload.username, payload.email)

        values = payload.model_dump(exclude={"password"})
        with transaction(self.db):
            user = UserProfile(**values, password_hash=hash_password(payload.password))
            user.modified_by = actor.username
            self.db.add(user)
            try:
                self.db.flush()
            except IntegrityError as exc:
                raise _conflict_from_integrity(exc, payload.username, payload.email) from exc
            self.audit.record(
                "CREATE",
                TABLE_NAME,
                user.id,
                actor,
                new_values=snapshot(UserProfileOut, user),
                description=f"Created user profile: {user.username}",
            )

        logger.info("User %s created by %s", user.username, actor.username)
        return user

    def get(self, actor: UserProfile, user_id: int) -> UserProfile:
        permissions.require(actor.role, "can_access_user_profiles")
        return self._load(user_id)

    def list(self, actor: UserProfile, filters: Any = None) -> list[UserProfile]:
        permissions.require(actor.role, "can_access_user_profiles")
        criteria = validate_payload(UserProfileFilter, filters)
        query = self.db.query(UserProfile)
        if criteria.search and criteria.search.strip():
            pattern = f"%{criteria.search.strip()}%"
            query = query.filter(or_(*(column.ilike(pattern) for column in SEARCH_COLUMNS)))
        if criteria.role and criteria.role.strip().lower() != "all":
            query = query.filter(UserProfile.role == criteria.role.strip())
        return query.order_by(UserProfile.created_at.desc(), UserProfile.id.desc()).all()

    def update(self, actor: UserProfile, user_id: int, data: Any) -> UserProfile:
        permissions.require(actor.role, "can_edit_users")
        payload = validate_payload(UserProfileUpdate, data)
        changes = payload.model_dump(exclude_unset=True)
        user = self._load(user_id)
        self._ensure_unique(changes.get("username"), changes.get("email"), exclude_id=user.id)

        old_values = snapshot(UserProfileOut, user)
        password = changes.pop("password", None)
        with transaction(self.db):
            for key, value in changes.items():
                setattr(user, key, value)
            if password is not None:
                user.password_hash = hash_password(password)
            user.modified_by = actor.username
            try:
                self.db.flush()
            except IntegrityError as exc:
                raise _conflict_from_integrity(exc, changes.get("username"), changes.get("email")) from exc
            self.audit.record(
                "UPDATE",
                TABLE_NAME,
                user.id,
                actor,
                old_values=old_values,
                new_values=snapshot(UserProfileOut, user),
                description=f"Updated user profile: {user.username}",
            )

        logger.info("User %s updated by %s", user_id, actor.username)
        return user

    def delete(self, actor: UserProfile, user_id: int) -> None:
        permissions.require(actor.role, "can_delete_users")
        user = self._load(user_id)
        old_values = snapshot(UserProfileOut, user)
        description = f"Deleted user profile: {user.username}"

        with transaction(self.db):
            self.db.query(AuthSession).filter(AuthSession.user_id == user_id).delete(synchronize_session=False)
            self.db.delete(user)
            self.db.flush()
            self.audit.record("DELETE", TABLE_NAME, user_id, actor, old_values=old_values, description=description)

        logger.info("User %s deleted by %s", user_id, actor.username)
