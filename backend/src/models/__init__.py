# Package initialization
# Entities are read-only snapshots of the external salon REST API
from .collaborator import Collaborator, CollaboratorInput, Role
from .procedure import Procedure, ProcedureInput, ProcedureCategory
from .price_config import PriceConfig, PriceConfigInput
from .service_record import ServiceRecord, ServiceRecordInput, ServiceStatus, EXTRA_OPTIONS
from .editing import Draft, Existing, Edit

__all__ = [
    "Collaborator",
    "CollaboratorInput",
    "Role",
    "Procedure",
    "ProcedureInput",
    "ProcedureCategory",
    "PriceConfig",
    "PriceConfigInput",
    "ServiceRecord",
    "ServiceRecordInput",
    "ServiceStatus",
    "EXTRA_OPTIONS",
    "Draft",
    "Existing",
    "Edit",
]
