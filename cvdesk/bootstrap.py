from __future__ import annotations

import logging

from sqlalchemy import text
from sqlalchemy.engine import Connection

from cvdesk.auth import hash_password
from cvdesk.config import Settings
from cvdesk.database import StorageProvider
from cvdesk.services.reference_data import QUALIFICATION_MAPPINGS, ROLES


logger = logging.getLogger(__name__)


def _table_is_empty(conn: Connection, table_name: str) -> bool:
    return conn.execute(text(f"SELECT COUNT(*) FROM {table_name}")).scalar_one() == 0


def _seed_admin(conn: Connection, settings: Settings) -> None:
    username = settings.default_admin_username.strip()
    existing = conn.execute(
        text("SELECT id FROM user_profiles WHERE username = :username"),
        {"username": username},
    ).fetchone()
    if existing:
        return
    conn.execute(
        text(
            """
            INSERT INTO user_profiles
                (username, email, password_hash, role, first_name, last_name, is_active, modified_by)
            VALUES
                (:username, :email, :password_hash, 'admin', 'System', 'Administrator', 1, 'system')
            """
        ),
        {
            "username": username,
            "email": settings.default_admin_email,
            "password_hash": hash_password(settings.default_admin_password),
        },
    )
    logger.info("Created default admin account %r", username)


def _seed_qualifications(conn: Connection) -> None:
    if not _table_is_empty(conn, "qualifications"):
        return
    rows = [
        {"name": name, "type": qualification_type}
        for qualification_type, names in QUALIFICATION_MAPPINGS.items()
        for name in names
    ]
    conn.execute(
        text("INSERT INTO qualifications (name, type, is_active) VALUES (:name, :type, 1)"),
        rows,
    )
    logger.info("Seeded %d qualifications", len(rows))


def _seed_positions(conn: Connection) -> None:
    if not _table_is_empty(conn, "positions_roles"):
        return
    rows = [{"department": department, "role_name": role} for department, role in ROLES]
    conn.execute(
        text("INSERT INTO positions_roles (department, role_name, is_active) VALUES (:department, :role_name, 1)"),
        rows,
    )
    logger.info("Seeded %d positions", len(rows))


def run_bootstrap(storage: StorageProvider, settings: Settings) -> None:
    storage.create_all()
    with storage.engine.begin() as conn:
        _seed_admin(conn, settings)
        if settings.seed_reference_data:
            _seed_qualifications(conn)
            _seed_positions(conn)
