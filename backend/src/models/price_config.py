"""
Price configuration model.

Each configuration prices one procedure with three amounts:
- value_done: charged when the service was performed
- value_not_done: charged when the appointment was not performed (e.g. no-show fee)
- value_additional: flat surcharge applied once when any extra was selected
"""

from decimal import Decimal

from pydantic import Field, field_serializer

from models.base import SalonModel


class PriceConfigInput(SalonModel):
    """Price configuration fields without identity (create/update payload)."""
    procedure_id: str
    value_done: Decimal = Field(Decimal("0"), ge=0, decimal_places=2)
    value_not_done: Decimal = Field(Decimal("0"), ge=0, decimal_places=2)
    value_additional: Decimal = Field(Decimal("0"), ge=0, decimal_places=2)
    active: bool = True

    @field_serializer("value_done", "value_not_done", "value_additional", when_used="json")
    def serialize_money(self, value: Decimal) -> float:
        # The API stores plain JSON numbers
        return float(value)


class PriceConfig(PriceConfigInput):
    """Price configuration as returned by the API."""
    id: str
