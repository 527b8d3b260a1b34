"""Activity log schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel

from canteen.schemas.auth import CAMEL_CONFIG


class AuditLogCreate(BaseModel):
    action: str
    entry_id: str | None = None
    person_name: str
    company: str
    meal: str
    amount: str | int | float
    representative: str

    model_config = CAMEL_CONFIG


class AuditLogRead(BaseModel):
    id: str
    action: str
    entry_id: str | None = None
    person_name: str
    company: str
    meal: str
    amount: Decimal
    representative: str
    actor_username: str | None = None
    created_at: datetime

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    @field_serializer("amount")
    def _format_amount(self, value: Decimal) -> str:
        return f"{Decimal(value):.2f}"
