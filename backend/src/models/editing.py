"""
Editing state for catalog forms.

A form edits either a new entity (Draft: no id yet) or a stored one
(Existing: id plus the full field set). Saving dispatches on the variant, so
"create vs update" is decided by type rather than by checking for an id.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from models.collaborator import CollaboratorInput, Role
from models.price_config import PriceConfigInput
from models.procedure import ProcedureCategory, ProcedureInput

InputT = TypeVar("InputT", CollaboratorInput, ProcedureInput, PriceConfigInput)


@dataclass(frozen=True)
class Draft(Generic[InputT]):
    """An entity that has not been stored yet."""
    data: InputT


@dataclass(frozen=True)
class Existing(Generic[InputT]):
    """A stored entity being edited."""
    id: str
    data: InputT


Edit = Union[Draft[InputT], Existing[InputT]]


def new_collaborator_draft() -> Draft[CollaboratorInput]:
    """Blank collaborator form."""
    return Draft(CollaboratorInput(name="", role=Role.MANICURE, active=True, allowed_procedure_ids=[]))


def new_procedure_draft() -> Draft[ProcedureInput]:
    """Blank procedure form."""
    return Draft(ProcedureInput(name="", category=ProcedureCategory.MANICURE, active=True))


def new_price_draft(procedure_id: str) -> Draft[PriceConfigInput]:
    """Blank price form for a procedure that has no configuration yet."""
    return Draft(PriceConfigInput(procedure_id=procedure_id))
