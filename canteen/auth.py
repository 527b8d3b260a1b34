"""Session-based authentication dependencies for API routes.

The signed cookie holds only ``{"sid": <opaque id>}``. Each request resolves
that id once into a :class:`SessionContext`, which routes hand explicitly to
the services.
"""

from __future__ import annotations

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from canteen.core.exceptions import AuthError, ForbiddenError
from canteen.db.session import get_db
from canteen.repositories.sql import SqlStore
from canteen.services.account_service import resolve_session
from canteen.services.session_service import SessionContext

SESSION_KEY = "sid"


def get_store(db: Session = Depends(get_db)) -> SqlStore:
    return SqlStore(db)


def session_id_from(request: Request) -> str | None:
    value = request.session.get(SESSION_KEY)
    return str(value) if value else None


def get_session_context(request: Request, store: SqlStore = Depends(get_store)) -> SessionContext | None:
    """Return the caller's identity, or None for anonymous callers."""
    try:
        context = resolve_session(store, session_id_from(request))
    except AuthError:
        request.session.clear()
        raise
    if context is None and session_id_from(request):
        # Unknown or expired id; drop it so the browser stops sending it.
        request.session.clear()
    return context


def require_session(context: SessionContext | None = Depends(get_session_context)) -> SessionContext:
    if context is None:
        raise AuthError("Not authenticated")
    return context


def require_approved(context: SessionContext = Depends(require_session)) -> SessionContext:
    if not context.is_approved:
        raise ForbiddenError("Your account is waiting for administrator approval.")
    return context


def require_admin(context: SessionContext = Depends(require_approved)) -> SessionContext:
    if not context.is_admin:
        raise ForbiddenError("Admin access required")
    return context
