"""
Service for recording service appointments.

Handles the entry form: procedure options for a collaborator, value preview,
and record creation with the value frozen at creation time.
"""

import logging
from decimal import Decimal
from typing import Iterable, List

from models import Collaborator, PriceConfig, Procedure, ServiceRecord, ServiceRecordInput
from services.pricing import PriceResolver, ValueCalculator
from services.salon_api_client import SalonApiClient

logger = logging.getLogger(__name__)


class RecordService:
    """Service for service record entry and deletion."""

    @staticmethod
    def quote(prices: Iterable[PriceConfig], record_input: ServiceRecordInput) -> Decimal:
        """
        Compute the value a record would be stored with.

        Args:
            prices: Current price configurations
            record_input: Entry form data

        Returns:
            Value rounded to cents (0 if the procedure has no price)
        """
        price_config = PriceResolver.resolve_price(prices, record_input.procedure_id)
        return ValueCalculator.compute_value(price_config, record_input.status, record_input.extras)

    @staticmethod
    def build_payload(record_input: ServiceRecordInput, calculated_value: Decimal) -> dict:
        """Build the API write payload, including the frozen calculatedValue."""
        payload = record_input.to_api_payload()
        payload["calculatedValue"] = float(calculated_value)
        return payload

    @staticmethod
    async def create_record(client: SalonApiClient, record_input: ServiceRecordInput) -> ServiceRecord:
        """
        Create a service record.

        The value is computed once from the current prices and sent along with
        the record; it is never recomputed afterwards.

        Args:
            client: Salon API client
            record_input: Entry form data

        Returns:
            Stored ServiceRecord
        """
        prices = await client.get_prices()
        calculated_value = RecordService.quote(prices, record_input)

        record = await client.create_record(RecordService.build_payload(record_input, calculated_value))
        logger.info(
            f"Created record {record.id} for collaborator {record_input.collaborator_id}, "
            f"procedure {record_input.procedure_id}: {calculated_value}"
        )
        return record

    @staticmethod
    async def delete_record(client: SalonApiClient, record_id: str) -> None:
        await client.delete_record(record_id)
        logger.info(f"Deleted record {record_id}")

    @staticmethod
    def available_procedures(
        collaborators: Iterable[Collaborator],
        procedures: Iterable[Procedure],
        collaborator_id: str
    ) -> List[Procedure]:
        """
        Get the active procedures a collaborator may perform.

        A collaborator without an allow-list may perform every active procedure.
        Unknown or inactive collaborators get no options.
        """
        collaborator = next((c for c in collaborators if c.id == collaborator_id), None)
        if collaborator is None or not collaborator.active:
            return []

        active_procedures = [procedure for procedure in procedures if procedure.active]
        if collaborator.allowed_procedure_ids is None:
            return active_procedures

        allowed = set(collaborator.allowed_procedure_ids)
        return [procedure for procedure in active_procedures if procedure.id in allowed]
