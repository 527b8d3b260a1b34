"""Repository interfaces.

Services depend on these protocols, never on a concrete database. ``SqlStore``
is the production adapter; tests may supply an in-memory implementation.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from datetime import datetime
from typing import Protocol, Sequence

from canteen.models import AuditLog, Entry, LoginSession, User


class EntryRepository(Protocol):
    def add(self, entry: Entry) -> Entry:
        raise NotImplementedError

    def get(self, entry_id: str) -> Entry | None:
        raise NotImplementedError

    def list(self, *, invoiced: bool | None = None) -> Sequence[Entry]:
        """Return entries newest first, optionally filtered by the invoiced flag."""
        raise NotImplementedError

    def set_invoiced(self, entry: Entry, invoiced: bool) -> Entry:
        raise NotImplementedError


class AuditLogRepository(Protocol):
    def add(self, record: AuditLog) -> AuditLog:
        raise NotImplementedError

    def list(self) -> Sequence[AuditLog]:
        """Return records newest first."""
        raise NotImplementedError


class UserRepository(Protocol):
    def add(self, user: User) -> User:
        raise NotImplementedError

    def get(self, user_id: str) -> User | None:
        raise NotImplementedError

    def get_by_username(self, username: str) -> User | None:
        raise NotImplementedError

    def list(self) -> Sequence[User]:
        raise NotImplementedError

    def update(self, user: User, *, is_approved: bool | None = None, is_admin: bool | None = None) -> User:
        raise NotImplementedError

    def delete(self, user: User) -> None:
        raise NotImplementedError


class LoginSessionRepository(Protocol):
    def add(self, login_session: LoginSession) -> LoginSession:
        raise NotImplementedError

    def get(self, session_id: str) -> LoginSession | None:
        raise NotImplementedError

    def delete(self, session_id: str) -> None:
        raise NotImplementedError

    def delete_for_user(self, user_id: str) -> int:
        raise NotImplementedError

    def purge_expired(self, now: datetime) -> int:
        raise NotImplementedError


class Store(Protocol):
    """Unit of work over every repository.

    Writes made inside ``transaction()`` become visible together or not at
    all; a failure leaves the store unchanged and raises ``StoreError``.
    """

    entries: EntryRepository
    audit_logs: AuditLogRepository
    users: UserRepository
    sessions: LoginSessionRepository

    def transaction(
        self,
        failure_message: str = "Database operation failed",
        *,
        conflict_message: str | None = None,
    ) -> AbstractContextManager[None]:
        raise NotImplementedError
