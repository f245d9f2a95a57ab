"""Procedure model."""

from enum import Enum

from models.base import SalonModel


class ProcedureCategory(str, Enum):
    """Closed set of procedure categories (values as stored by the API)."""
    MANICURE = "Manicure"
    HAIRDRESSER_FEMALE = "Cabeleireira – Feminino"
    HAIRDRESSER_MALE = "Cabeleireira – Masculino"
    EXTRAS = "Extras"


class ProcedureInput(SalonModel):
    """Procedure fields without identity (create/update payload)."""
    name: str
    category: ProcedureCategory
    active: bool = True


class Procedure(ProcedureInput):
    """Procedure as returned by the API."""
    id: str
