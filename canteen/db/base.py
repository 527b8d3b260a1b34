"""Shared SQLAlchemy base declarative class and model imports."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for ORM models."""


# Import model modules so metadata is populated before create_all.
from canteen.models import audit_log as _audit_log  # noqa: E402,F401
from canteen.models import entry as _entry  # noqa: E402,F401
from canteen.models import login_session as _login_session  # noqa: E402,F401
from canteen.models import user as _user  # noqa: E402,F401
