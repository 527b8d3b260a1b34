"""Application models package."""

from canteen.models.audit_log import AUDIT_ACTIONS, MOVED_TO_INVOICED, MOVED_TO_REGISTRATIONS, AuditLog
from canteen.models.entry import Entry
from canteen.models.login_session import LoginSession
from canteen.models.user import User

__all__ = [
    "AUDIT_ACTIONS", "MOVED_TO_INVOICED", "MOVED_TO_REGISTRATIONS", "AuditLog", "Entry", "LoginSession", "User",
]
