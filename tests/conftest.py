"""Shared fixtures: a temporary SQLite database patched into the app, and an in-memory store."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SESSION_SECRET"] = "test-session-secret"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "admin-secret-1"
os.environ["APP_ENV"] = "test"

from contextlib import contextmanager
from datetime import datetime
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from canteen.core.security import get_password_hash
from canteen.db import session as db_session
from canteen.db.base import Base
from canteen.main import app
from canteen.models import AuditLog, Entry, LoginSession, User
from canteen.models.entry import new_id
from canteen.utils.time import ensure_utc, utc_now

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin-secret-1"


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


@pytest.fixture
def session_local(tmp_path: Path, monkeypatch) -> sessionmaker:
    engine = _build_test_engine(tmp_path / "canteen.db")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)
    monkeypatch.setattr("canteen.main.engine", engine)
    monkeypatch.setattr("canteen.main.SessionLocal", testing_session_local)
    yield testing_session_local
    engine.dispose()


@pytest.fixture
def client(session_local):
    with TestClient(app) as test_client:
        yield test_client


def add_user(session_local, username: str, password: str = "secret1", *, approved: bool = True, admin: bool = False) -> str:
    with session_local() as db:
        user = User(
            id=new_id(),
            username=username,
            password_hash=get_password_hash(password),
            is_approved=approved,
            is_admin=admin,
            created_at=utc_now(),
        )
        db.add(user)
        db.commit()
        return user.id


def login(client: TestClient, username: str, password: str):
    return client.post("/api/auth/login", json={"username": username, "password": password})


def login_admin(client: TestClient):
    response = login(client, ADMIN_USERNAME, ADMIN_PASSWORD)
    assert response.status_code == 200, response.text
    return response


class _MemoryRepository:
    def __init__(self) -> None:
        self.rows: dict = {}

    def _newest_first(self, rows):
        # Stable sort: among equal timestamps the later insert comes first.
        return sorted(reversed(list(rows)), key=lambda row: ensure_utc(row.created_at), reverse=True)


class MemoryEntryRepository(_MemoryRepository):
    def add(self, entry: Entry) -> Entry:
        self.rows[entry.id] = entry
        return entry

    def get(self, entry_id: str) -> Entry | None:
        return self.rows.get(entry_id)

    def list(self, *, invoiced: bool | None = None):
        rows = [row for row in self.rows.values() if invoiced is None or row.invoiced is invoiced]
        return self._newest_first(rows)

    def set_invoiced(self, entry: Entry, invoiced: bool) -> Entry:
        entry.invoiced = invoiced
        return entry


class MemoryAuditLogRepository(_MemoryRepository):
    def add(self, record: AuditLog) -> AuditLog:
        self.rows[record.id] = record
        return record

    def list(self):
        return self._newest_first(self.rows.values())


class MemoryUserRepository(_MemoryRepository):
    def add(self, user: User) -> User:
        if self.get_by_username(user.username) is not None:
            raise AssertionError("duplicate username reached the store")
        self.rows[user.id] = user
        return user

    def get(self, user_id: str) -> User | None:
        return self.rows.get(user_id)

    def get_by_username(self, username: str) -> User | None:
        return next((user for user in self.rows.values() if user.username == username), None)

    def list(self):
        return sorted(self.rows.values(), key=lambda user: ensure_utc(user.created_at))

    def update(self, user: User, *, is_approved: bool | None = None, is_admin: bool | None = None) -> User:
        if is_approved is not None:
            user.is_approved = is_approved
        if is_admin is not None:
            user.is_admin = is_admin
        return user

    def delete(self, user: User) -> None:
        self.rows.pop(user.id, None)


class MemoryLoginSessionRepository(_MemoryRepository):
    def add(self, login_session: LoginSession) -> LoginSession:
        self.rows[login_session.id] = login_session
        return login_session

    def get(self, session_id: str) -> LoginSession | None:
        return self.rows.get(session_id)

    def delete(self, session_id: str) -> None:
        self.rows.pop(session_id, None)

    def delete_for_user(self, user_id: str) -> int:
        doomed = [key for key, row in self.rows.items() if row.user_id == user_id]
        for key in doomed:
            del self.rows[key]
        return len(doomed)

    def purge_expired(self, now: datetime) -> int:
        doomed = [key for key, row in self.rows.items() if ensure_utc(row.expires_at) < now]
        for key in doomed:
            del self.rows[key]
        return len(doomed)


class MemoryStore:
    """Store fake without rollback; enough for workflow rules, not for atomicity."""

    def __init__(self) -> None:
        self.entries = MemoryEntryRepository()
        self.audit_logs = MemoryAuditLogRepository()
        self.users = MemoryUserRepository()
        self.sessions = MemoryLoginSessionRepository()
        self.commits = 0

    @contextmanager
    def transaction(self, failure_message: str = "Database operation failed", *, conflict_message: str | None = None):
        yield
        self.commits += 1


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()
