"""Authentication-related request and response schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(BaseModel):
    """Payload for self-registration."""

    username: str
    password: str
    confirm_password: str | None = None

    model_config = CAMEL_CONFIG


class LoginRequest(BaseModel):
    """Payload for user login."""

    username: str
    password: str


class UserSummary(BaseModel):
    """User response; the password hash is never part of it."""

    id: str
    username: str
    is_approved: bool
    is_admin: bool
    created_at: datetime

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class SuccessResponse(BaseModel):
    success: bool = True
