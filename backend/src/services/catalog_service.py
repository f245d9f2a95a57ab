"""
Service for catalog management (collaborators, procedures, prices).

Saving takes an edit state: a Draft is created, an Existing entity is updated.
"""

import logging
from typing import Iterable, List

from models import (
    Collaborator,
    CollaboratorInput,
    Draft,
    Edit,
    Existing,
    PriceConfig,
    PriceConfigInput,
    Procedure,
    ProcedureInput,
)
from services.salon_api_client import SalonApiClient

logger = logging.getLogger(__name__)


class CatalogService:
    """Service for collaborator, procedure and price configuration maintenance."""

    @staticmethod
    async def save_collaborator(client: SalonApiClient, edit: Edit[CollaboratorInput]) -> Collaborator:
        if isinstance(edit, Existing):
            collaborator = await client.update_collaborator(edit.id, edit.data)
            logger.info(f"Updated collaborator {collaborator.id}")
        elif isinstance(edit, Draft):
            collaborator = await client.create_collaborator(edit.data)
            logger.info(f"Created collaborator {collaborator.id}")
        else:
            raise TypeError(f"Unsupported edit state: {type(edit).__name__}")
        return collaborator

    @staticmethod
    async def save_procedure(client: SalonApiClient, edit: Edit[ProcedureInput]) -> Procedure:
        if isinstance(edit, Existing):
            procedure = await client.update_procedure(edit.id, edit.data)
            logger.info(f"Updated procedure {procedure.id}")
        elif isinstance(edit, Draft):
            procedure = await client.create_procedure(edit.data)
            logger.info(f"Created procedure {procedure.id}")
        else:
            raise TypeError(f"Unsupported edit state: {type(edit).__name__}")
        return procedure

    @staticmethod
    async def save_price(client: SalonApiClient, edit: Edit[PriceConfigInput]) -> PriceConfig:
        if isinstance(edit, Existing):
            price = await client.update_price(edit.id, edit.data)
            logger.info(f"Updated price config {price.id}")
        elif isinstance(edit, Draft):
            price = await client.create_price(edit.data)
            logger.info(f"Created price config {price.id} for procedure {price.procedure_id}")
        else:
            raise TypeError(f"Unsupported edit state: {type(edit).__name__}")
        return price

    @staticmethod
    def unpriced_procedures(
        procedures: Iterable[Procedure],
        prices: Iterable[PriceConfig]
    ) -> List[Procedure]:
        """Procedures that have no price configuration yet."""
        priced = {price.procedure_id for price in prices}
        return [procedure for procedure in procedures if procedure.id not in priced]
