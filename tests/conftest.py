from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from cvdesk import auth
from cvdesk.auth import hash_password
from cvdesk.config import Settings
from cvdesk.main import create_app
from cvdesk.models.user import UserProfile
from cvdesk.models.version_history import VersionHistory


ADMIN_PASSWORD = "admin1"
PASSWORD = "secret123"
ROLE_USERS = {"super_user": "sue", "manager": "mandy", "user": "ursula"}


@pytest.fixture(autouse=True)
def fast_hashing(monkeypatch) -> None:
    monkeypatch.setattr(auth, "DEFAULT_ITERATIONS", 1_000)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'cvdesk.db'}",
        upload_dir=str(tmp_path / "uploads"),
        auth_secret="test-secret",
        default_admin_password=ADMIN_PASSWORD,
        seed_reference_data=False,
        log_level="WARNING",
        max_cv_size_mb=1,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(app, client):
    session = app.state.storage.session()
    yield session
    session.close()


@pytest.fixture
def users(db) -> dict[str, UserProfile]:
    created = {"admin": db.query(UserProfile).filter(UserProfile.username == "admin").one()}
    for role, username in ROLE_USERS.items():
        user = UserProfile(
            username=username,
            email=f"{username}@example.com",
            password_hash=hash_password(PASSWORD),
            role=role,
            first_name=username.title(),
        )
        db.add(user)
        created[role] = user
    db.commit()
    return created


def login(client: TestClient, username: str, password: str) -> dict[str, str]:
    response = client.post("/api/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def headers(client, users) -> dict[str, dict[str, str]]:
    """Bearer headers keyed by role."""
    result = {"admin": login(client, "admin", ADMIN_PASSWORD)}
    for role, username in ROLE_USERS.items():
        result[role] = login(client, username, PASSWORD)
    return result


@pytest.fixture
def history(app):
    def _entries(table_name: str | None = None, record_id: int | None = None) -> list[VersionHistory]:
        with app.state.storage.session() as session:
            query = session.query(VersionHistory)
            if table_name is not None:
                query = query.filter(VersionHistory.table_name == table_name)
            if record_id is not None:
                query = query.filter(VersionHistory.record_id == record_id)
            entries = query.order_by(VersionHistory.id).all()
            session.expunge_all()
            return entries

    return _entries
