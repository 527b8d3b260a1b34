"""Storage interface and its SQLAlchemy adapter."""

from canteen.repositories.base import (
    AuditLogRepository,
    EntryRepository,
    LoginSessionRepository,
    Store,
    UserRepository,
)
from canteen.repositories.sql import SqlStore

__all__ = [
    "AuditLogRepository",
    "EntryRepository",
    "LoginSessionRepository",
    "SqlStore",
    "Store",
    "UserRepository",
]
