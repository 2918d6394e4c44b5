from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import logging
import secrets
import time
from datetime import datetime, timezone

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from cvdesk.config import Settings
from cvdesk.database import get_db, transaction
from cvdesk.errors import InvalidCredentialsError, MissingCredentialsError, NotAuthenticatedError
from cvdesk.models.auth_session import AuthSession
from cvdesk.models.user import UserProfile


logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)
DEFAULT_ITERATIONS = 210_000


def hash_password(password: str) -> str:
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        DEFAULT_ITERATIONS,
    ).hex()
    return f"pbkdf2_sha256${DEFAULT_ITERATIONS}${salt}${digest}"


def verify_password(password: str, password_hash: str) -> bool:
    try:
        _, iterations_str, salt, digest = password_hash.split("$", 3)
        iterations = int(iterations_str)
    except ValueError:
        return False
    expected = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        iterations,
    ).hex()
    return hmac.compare_digest(expected, digest)


def _sign(secret: str, payload: str) -> str:
    return hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256).hexdigest()


def encode_token(user_id: int, session_key: str, expires_at: int, secret: str) -> str:
    payload = f"{user_id}:{expires_at}:{session_key}"
    token_raw = f"{payload}:{_sign(secret, payload)}".encode("utf-8")
    return base64.urlsafe_b64encode(token_raw).decode("utf-8").rstrip("=")


def decode_token(token: str, secret: str) -> tuple[int, str] | None:
    """Return ``(user_id, session_key)`` for a well-signed, unexpired token."""
    if not token:
        return None
    padding = "=" * (-len(token) % 4)
    try:
        decoded = base64.urlsafe_b64decode((token + padding).encode("utf-8")).decode("utf-8")
        user_id_str, exp_str, session_key, signature = decoded.split(":", 3)
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return None

    payload = f"{user_id_str}:{exp_str}:{session_key}"
    if not hmac.compare_digest(_sign(secret, payload), signature):
        return None

    try:
        exp = int(exp_str)
        user_id = int(user_id_str)
    except ValueError:
        return None
    if exp < int(time.time()):
        return None
    return user_id, session_key


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def authenticate(db: Session, username: str, password: str) -> UserProfile:
    if not username or not password:
        raise MissingCredentialsError()

    user = db.query(UserProfile).filter(UserProfile.username == username).first()
    # Unknown user, wrong password and disabled account are indistinguishable.
    if user is None or not user.is_active or not verify_password(password, user.password_hash):
        logger.info("Failed login for %r", username)
        raise InvalidCredentialsError()
    return user


def open_session(db: Session, user: UserProfile, settings: Settings) -> str:
    session_key = secrets.token_hex(16)
    expires_at = int(time.time()) + settings.auth_token_ttl_seconds
    with transaction(db):
        pruned = (
            db.query(AuthSession)
            .filter(AuthSession.user_id == user.id, AuthSession.expires_at < _utcnow())
            .delete(synchronize_session=False)
        )
        if pruned:
            logger.debug("Removed %d expired sessions for %s", pruned, user.username)
        db.add(
            AuthSession(
                session_key=session_key,
                user_id=user.id,
                expires_at=datetime.fromtimestamp(expires_at, tz=timezone.utc).replace(tzinfo=None),
            )
        )
        user.last_login = _utcnow()
    logger.info("User %s logged in", user.username)
    return encode_token(user.id, session_key, expires_at, settings.auth_secret)


def login(db: Session, username: str, password: str, settings: Settings) -> tuple[UserProfile, str]:
    user = authenticate(db, username, password)
    return user, open_session(db, user, settings)


def resolve_token(db: Session, token: str, settings: Settings) -> tuple[UserProfile, AuthSession] | None:
    decoded = decode_token(token, settings.auth_secret)
    if decoded is None:
        return None
    user_id, session_key = decoded

    session = (
        db.query(AuthSession)
        .filter(AuthSession.session_key == session_key, AuthSession.user_id == user_id)
        .first()
    )
    if session is None or session.expires_at < _utcnow():
        return None
    user = db.query(UserProfile).filter(UserProfile.id == user_id, UserProfile.is_active == True).first()  # noqa: E712
    if user is None:
        return None
    return user, session


def logout(db: Session, token: str | None, settings: Settings) -> None:
    if not token:
        return
    resolved = resolve_token(db, token, settings)
    if resolved is None:
        return
    user, session = resolved
    with transaction(db):
        db.delete(session)
    logger.info("User %s logged out", user.username)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def bearer_token(credentials: HTTPAuthorizationCredentials | None = Depends(security)) -> str | None:
    if credentials is None or credentials.scheme.lower() != "bearer":
        return None
    return credentials.credentials


def get_current_user(
    token: str | None = Depends(bearer_token),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> UserProfile:
    if token is None:
        raise NotAuthenticatedError()
    resolved = resolve_token(db, token, settings)
    if resolved is None:
        raise NotAuthenticatedError()
    return resolved[0]
