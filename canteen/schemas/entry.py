"""Canteen entry schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel


class EntryCreate(BaseModel):
    """Public meal-entry form. Blank values and bad amounts are rejected by the workflow."""

    name: str
    company: str
    meal: str
    amount: str | int | float
    representative: str


class EntryUpdate(BaseModel):
    invoiced: bool


class EntryRead(BaseModel):
    id: str
    name: str
    company: str
    meal: str
    amount: Decimal
    representative: str
    invoiced: bool
    created_at: datetime

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    @field_serializer("amount")
    def _format_amount(self, value: Decimal) -> str:
        return f"{Decimal(value):.2f}"
