"""
Collaborator model.

A collaborator is a salon professional. The allow-list of procedure ids limits
what can be recorded for them; ids that no longer match a procedure are
tolerated and simply never resolve.
"""

from enum import Enum
from typing import List, Optional

from models.base import SalonModel


class Role(str, Enum):
    """Closed set of collaborator roles (values as stored by the API)."""
    MANICURE = "Manicure"
    HAIRDRESSER = "Cabeleireira"
    BOTH = "Ambas"


class CollaboratorInput(SalonModel):
    """Collaborator fields without identity (create/update payload)."""
    name: str
    role: Role
    active: bool = True
    notes: Optional[str] = None
    allowed_procedure_ids: Optional[List[str]] = None  # None means "no restriction"


class Collaborator(CollaboratorInput):
    """Collaborator as returned by the API."""
    id: str
