"""Server-side login sessions.

The browser only holds an opaque session id inside the signed cookie; the
binding to a user lives in ``login_sessions`` so that logout and account
deletion invalidate it immediately.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta

from canteen.core.security import new_session_id
from canteen.models import LoginSession, User
from canteen.repositories.base import Store
from canteen.utils.time import ensure_utc, utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionContext:
    """Identity resolved once per request and passed explicitly to services."""

    session_id: str
    user_id: str
    username: str
    is_approved: bool
    is_admin: bool

    @classmethod
    def for_user(cls, session_id: str, user: User) -> "SessionContext":
        return cls(
            session_id=session_id,
            user_id=user.id,
            username=user.username,
            is_approved=bool(user.is_approved),
            is_admin=bool(user.is_admin),
        )


def start_session(store: Store, user: User, *, max_age: timedelta, previous_session_id: str | None = None) -> LoginSession:
    """Issue a fresh session for ``user`` and drop whatever id the client came with."""
    now = utc_now()
    with store.transaction("Failed to start session"):
        if previous_session_id:
            store.sessions.delete(previous_session_id)
        login_session = store.sessions.add(
            LoginSession(id=new_session_id(), user_id=user.id, created_at=now, expires_at=now + max_age)
        )
    return login_session


def end_session(store: Store, session_id: str | None) -> None:
    if not session_id:
        return
    with store.transaction("Failed to logout"):
        store.sessions.delete(session_id)


def find_active_session(store: Store, session_id: str | None) -> LoginSession | None:
    """Return the session row unless it is unknown or expired."""
    if not session_id:
        return None
    login_session = store.sessions.get(session_id)
    if login_session is None:
        return None
    if ensure_utc(login_session.expires_at) <= utc_now():
        return None
    return login_session


def purge_expired_sessions(store: Store) -> int:
    with store.transaction("Failed to purge expired sessions"):
        removed = store.sessions.purge_expired(utc_now())
    if removed:
        logger.info("[AUTH] Purged %s expired sessions", removed)
    return removed
