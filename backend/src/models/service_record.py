"""
Service record model.

A service record is one appointment outcome for a collaborator/procedure on a
calendar day. `calculated_value` is computed once, when the record is created,
and is stored verbatim by the API; later price changes never alter it.

Dates are kept as `YYYY-MM-DD` strings end to end. They are never turned into
timezone-aware timestamps, which would shift records across midnight.
"""

from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import Field, field_serializer, field_validator

from models.base import SalonModel
from utils.date_utils import normalize_date_key


class ServiceStatus(str, Enum):
    """Whether the scheduled service was performed (values as stored by the API)."""
    DONE = "Fez"
    NOT_DONE = "Não Fez"


# Fixed list of add-on services selectable per record
EXTRA_OPTIONS = ("Limpeza", "São Miguel", "Toalhas", "Limpeza Alicates")


class ServiceRecordInput(SalonModel):
    """User-supplied part of a new service record (value is computed server-side)."""
    date: str
    collaborator_id: str
    procedure_id: str
    status: ServiceStatus = ServiceStatus.DONE
    notes: Optional[str] = None
    extras: List[str] = Field(default_factory=list)

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, value: str) -> str:
        return normalize_date_key(value)

    @field_validator("extras")
    @classmethod
    def validate_extras(cls, value: List[str]) -> List[str]:
        unknown = [extra for extra in value if extra not in EXTRA_OPTIONS]
        if unknown:
            raise ValueError(f"Unknown extras: {', '.join(unknown)}")
        if len(set(value)) != len(value):
            raise ValueError("Extras must not repeat")
        return value


class ServiceRecord(SalonModel):
    """
    Service record as returned by the API.

    Extras are not checked against EXTRA_OPTIONS here: historical records must
    load even if the option list changes.
    """
    id: str
    date: str
    collaborator_id: str
    procedure_id: str
    status: ServiceStatus
    notes: Optional[str] = None
    extras: List[str] = Field(default_factory=list)
    calculated_value: Decimal = Decimal("0")
    created_at: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, value: str) -> str:
        # SQL backends may serialize DATE columns as "2024-03-01T00:00:00.000Z"
        return normalize_date_key(value)

    @field_validator("extras", mode="before")
    @classmethod
    def default_extras(cls, value: Optional[List[str]]) -> List[str]:
        return value or []

    @field_validator("calculated_value", mode="before")
    @classmethod
    def default_value(cls, value):
        return 0 if value is None else value

    @field_serializer("calculated_value", when_used="json")
    def serialize_money(self, value: Decimal) -> float:
        return float(value)

    @property
    def is_done(self) -> bool:
        return self.status == ServiceStatus.DONE
