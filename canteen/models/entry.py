"""Canteen meal entry ORM model."""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

from sqlalchemy import Boolean, DateTime, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from canteen.db.base import Base


def new_id() -> str:
    return str(uuid4())


class Entry(Base):
    """One meal registration; only ``invoiced`` changes after creation."""

    __tablename__ = "canteen_entries"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    company: Mapped[str] = mapped_column(Text, nullable=False)
    meal: Mapped[str] = mapped_column(Text, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    representative: Mapped[str] = mapped_column(Text, nullable=False)
    invoiced: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc), index=True
    )

    def snapshot(self) -> dict[str, str | Decimal]:
        """Field values copied onto audit records."""
        return {
            "person_name": self.name,
            "company": self.company,
            "meal": self.meal,
            "amount": self.amount,
            "representative": self.representative,
        }
