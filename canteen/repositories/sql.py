"""SQLAlchemy implementation of the storage interface."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from canteen.core.exceptions import ConflictError, StoreError
from canteen.models import AuditLog, Entry, LoginSession, User

logger = logging.getLogger(__name__)


class SqlEntryRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def add(self, entry: Entry) -> Entry:
        self.db.add(entry)
        self.db.flush()
        return entry

    def get(self, entry_id: str) -> Entry | None:
        return self.db.get(Entry, entry_id)

    def list(self, *, invoiced: bool | None = None) -> Sequence[Entry]:
        query = select(Entry).order_by(Entry.created_at.desc())
        if invoiced is not None:
            query = query.where(Entry.invoiced.is_(invoiced))
        return self.db.scalars(query).all()

    def set_invoiced(self, entry: Entry, invoiced: bool) -> Entry:
        entry.invoiced = invoiced
        self.db.flush()
        return entry


class SqlAuditLogRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def add(self, record: AuditLog) -> AuditLog:
        self.db.add(record)
        self.db.flush()
        return record

    def list(self) -> Sequence[AuditLog]:
        return self.db.scalars(select(AuditLog).order_by(AuditLog.created_at.desc())).all()


class SqlUserRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def add(self, user: User) -> User:
        self.db.add(user)
        self.db.flush()
        return user

    def get(self, user_id: str) -> User | None:
        return self.db.get(User, user_id)

    def get_by_username(self, username: str) -> User | None:
        return self.db.scalar(select(User).where(User.username == username).limit(1))

    def list(self) -> Sequence[User]:
        return self.db.scalars(select(User).order_by(User.created_at.asc())).all()

    def update(self, user: User, *, is_approved: bool | None = None, is_admin: bool | None = None) -> User:
        if is_approved is not None:
            user.is_approved = is_approved
        if is_admin is not None:
            user.is_admin = is_admin
        self.db.flush()
        return user

    def delete(self, user: User) -> None:
        self.db.delete(user)
        self.db.flush()


class SqlLoginSessionRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def add(self, login_session: LoginSession) -> LoginSession:
        self.db.add(login_session)
        self.db.flush()
        return login_session

    def get(self, session_id: str) -> LoginSession | None:
        return self.db.get(LoginSession, session_id)

    def delete(self, session_id: str) -> None:
        self.db.execute(delete(LoginSession).where(LoginSession.id == session_id))

    def delete_for_user(self, user_id: str) -> int:
        result = self.db.execute(delete(LoginSession).where(LoginSession.user_id == user_id))
        return result.rowcount or 0

    def purge_expired(self, now: datetime) -> int:
        result = self.db.execute(delete(LoginSession).where(LoginSession.expires_at < now))
        return result.rowcount or 0


class SqlStore:
    """Binds the repositories to one request-scoped SQLAlchemy session."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.entries = SqlEntryRepository(db)
        self.audit_logs = SqlAuditLogRepository(db)
        self.users = SqlUserRepository(db)
        self.sessions = SqlLoginSessionRepository(db)

    @contextmanager
    def transaction(
        self,
        failure_message: str = "Database operation failed",
        *,
        conflict_message: str | None = None,
    ) -> Iterator[None]:
        try:
            yield
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            if conflict_message is not None:
                raise ConflictError(conflict_message) from exc
            logger.exception("[STORE] %s", failure_message)
            raise StoreError(failure_message) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("[STORE] %s", failure_message)
            raise StoreError(failure_message) from exc
        except Exception:
            self.db.rollback()
            raise
