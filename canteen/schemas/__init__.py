"""Schema exports."""

from canteen.schemas.audit import AuditLogCreate, AuditLogRead
from canteen.schemas.auth import LoginRequest, RegisterRequest, SuccessResponse, UserSummary
from canteen.schemas.entry import EntryCreate, EntryRead, EntryUpdate
from canteen.schemas.user import UserFlagsUpdate

__all__ = [
    "AuditLogCreate",
    "AuditLogRead",
    "EntryCreate",
    "EntryRead",
    "EntryUpdate",
    "LoginRequest",
    "RegisterRequest",
    "SuccessResponse",
    "UserFlagsUpdate",
    "UserSummary",
]
