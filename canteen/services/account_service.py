"""Account provisioning, authentication and admin user management."""

from __future__ import annotations

import logging
from typing import Sequence

from canteen.core.config import Settings
from canteen.core.exceptions import AuthError, ConflictError, ForbiddenError, NotFoundError, ValidationError
from canteen.core.security import get_password_hash, verify_password
from canteen.models import User
from canteen.models.entry import new_id
from canteen.repositories.base import Store
from canteen.services.session_service import SessionContext, find_active_session
from canteen.utils.time import utc_now

logger = logging.getLogger(__name__)

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6


def register_user(store: Store, username: str, password: str, confirm_password: str | None = None) -> User:
    """Self-registration: the account waits for an admin to approve it."""
    clean_username = (username or "").strip()
    if len(clean_username) < MIN_USERNAME_LENGTH:
        raise ValidationError(
            f"Username must be at least {MIN_USERNAME_LENGTH} characters.", details={"field": "username"}
        )
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters.", details={"field": "password"}
        )
    if confirm_password is not None and password != confirm_password:
        raise ValidationError("Passwords do not match.", details={"field": "confirmPassword"})
    if store.users.get_by_username(clean_username) is not None:
        raise ConflictError("Username already exists.")

    user = User(
        id=new_id(),
        username=clean_username,
        password_hash=get_password_hash(password),
        is_approved=False,
        is_admin=False,
        created_at=utc_now(),
    )
    with store.transaction("Failed to register user", conflict_message="Username already exists."):
        store.users.add(user)
    logger.info("[AUTH] Registered user %s; awaiting approval", user.username)
    return user


def authenticate_user(store: Store, username: str, password: str) -> User:
    """Check credentials and approval; the caller then starts a session."""
    if not (username or "").strip() or not password:
        raise ValidationError("Username and password are required")
    user = store.users.get_by_username(username.strip())
    if user is None or not verify_password(password, user.password_hash):
        logger.info("[AUTH] Failed login for username=%s", username.strip())
        raise AuthError("Invalid username or password")
    if not user.is_approved:
        raise ForbiddenError("Your account is waiting for administrator approval.")
    return user


def resolve_session(store: Store, session_id: str | None) -> SessionContext | None:
    """Map a cookie session id to the current identity.

    Returns ``None`` for a missing, unknown or expired session. Raises
    ``AuthError`` if the session outlived its user; that session is destroyed.
    """
    login_session = find_active_session(store, session_id)
    if login_session is None:
        return None
    user = store.users.get(login_session.user_id)
    if user is None:
        with store.transaction("Failed to clear session"):
            store.sessions.delete(login_session.id)
        raise AuthError("Session expired")
    return SessionContext.for_user(login_session.id, user)


def current_user(store: Store, context: SessionContext | None) -> User:
    if context is None:
        raise AuthError("Not authenticated")
    user = store.users.get(context.user_id)
    if user is None:
        raise AuthError("Session expired")
    return user


def ensure_default_admin(store: Store, config: Settings) -> bool:
    """Ensure the bootstrap admin exists, is approved and is an admin.

    Returns:
        bool: True when the account existed before this call.
    """
    existing_admin = store.users.get_by_username(config.admin_username)
    if existing_admin is not None:
        if not existing_admin.is_approved or not existing_admin.is_admin:
            with store.transaction("Failed to update admin user"):
                store.users.update(existing_admin, is_approved=True, is_admin=True)
            logger.info("[BOOTSTRAP] Admin user status updated")
        else:
            logger.info("[BOOTSTRAP] Admin exists")
        return True

    password = config.admin_password
    if not password:
        password = config.admin_password_fallback
        logger.warning("[SECURITY] ADMIN_PASSWORD not set; default admin uses the development fallback password.")
    admin = User(
        id=new_id(),
        username=config.admin_username,
        password_hash=get_password_hash(password),
        is_approved=True,
        is_admin=True,
        created_at=utc_now(),
    )
    with store.transaction("Failed to create admin user", conflict_message="Admin user already exists."):
        store.users.add(admin)
    logger.warning("[BOOTSTRAP] Default admin user created (username: %s)", admin.username)
    return False


def _require_admin(actor: SessionContext) -> None:
    if not actor.is_admin:
        raise ForbiddenError("Admin access required")


def _get_target(store: Store, user_id: str) -> User:
    user = store.users.get(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def list_users(store: Store, *, actor: SessionContext) -> Sequence[User]:
    _require_admin(actor)
    return store.users.list()


def update_user_flags(
    store: Store,
    user_id: str,
    *,
    actor: SessionContext,
    is_approved: bool | None = None,
    is_admin: bool | None = None,
) -> User:
    """Change approval and/or admin flags of another user."""
    _require_admin(actor)
    if is_approved is None and is_admin is None:
        raise ValidationError("Nothing to update")
    user = _get_target(store, user_id)
    if user.id == actor.user_id:
        raise ForbiddenError("You cannot change your own account")
    with store.transaction("Failed to update user"):
        store.users.update(user, is_approved=is_approved, is_admin=is_admin)
    logger.info(
        "[AUTH] %s updated user %s (approved=%s, admin=%s)",
        actor.username,
        user.username,
        user.is_approved,
        user.is_admin,
    )
    return user


def set_approval(store: Store, user_id: str, approved: bool, *, actor: SessionContext) -> User:
    return update_user_flags(store, user_id, actor=actor, is_approved=approved)


def set_admin(store: Store, user_id: str, admin: bool, *, actor: SessionContext) -> User:
    return update_user_flags(store, user_id, actor=actor, is_admin=admin)


def delete_user(store: Store, user_id: str, *, actor: SessionContext) -> None:
    _require_admin(actor)
    if user_id == actor.user_id:
        raise ForbiddenError("You cannot delete your own account")
    user = _get_target(store, user_id)
    with store.transaction("Failed to delete user"):
        store.sessions.delete_for_user(user.id)
        store.users.delete(user)
    logger.info("[AUTH] %s deleted user %s", actor.username, user.username)
