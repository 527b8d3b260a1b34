"""Security utilities for password hashing and session identifiers."""

import secrets

from passlib.context import CryptContext

pwd_context: CryptContext = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

SESSION_ID_BYTES: int = 32


def get_password_hash(password: str) -> str:
    """Hash a plaintext password."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plaintext password against its hash."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Unrecognised or corrupt hash format stored for this account.
        return False


def new_session_id() -> str:
    """Return an unguessable, url-safe session identifier."""
    return secrets.token_urlsafe(SESSION_ID_BYTES)
