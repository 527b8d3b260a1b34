"""Audit log model for invoicing transitions."""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from canteen.db.base import Base
from canteen.models.entry import new_id

MOVED_TO_INVOICED = "moved_to_invoiced"
MOVED_TO_REGISTRATIONS = "moved_to_registrations"
AUDIT_ACTIONS = (MOVED_TO_INVOICED, MOVED_TO_REGISTRATIONS)


class AuditLog(Base):
    """Stores an immutable trail of entry transitions.

    Entry fields are copied, not referenced, so the trail stays readable
    whatever happens to the entry afterwards.
    """

    __tablename__ = "activity_logs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    action: Mapped[str] = mapped_column(String(64), nullable=False)
    entry_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    person_name: Mapped[str] = mapped_column(Text, nullable=False)
    company: Mapped[str] = mapped_column(Text, nullable=False)
    meal: Mapped[str] = mapped_column(Text, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    representative: Mapped[str] = mapped_column(Text, nullable=False)
    actor_username: Mapped[str | None] = mapped_column(String(128), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc), index=True
    )
