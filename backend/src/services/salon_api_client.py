"""
Salon REST API client.

This module is the data-fetch layer: all reads and writes of collaborators,
procedures, price configurations and service records go through it. Results
are parsed into read-only models; calculations never happen here.
"""

import asyncio
import logging
from typing import Any, List, Optional, Type, TypeVar

import httpx
from pydantic import ValidationError

from core.config import SALON_API_URL, SALON_API_TIMEOUT_SECONDS
from models import (
    Collaborator,
    CollaboratorInput,
    PriceConfig,
    PriceConfigInput,
    Procedure,
    ProcedureInput,
    ServiceRecord,
)
from models.base import SalonModel
from services.dashboard_types import SalonSnapshot

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=SalonModel)


class SalonApiError(Exception):
    """Raised when the salon API call fails or returns an error status."""

    def __init__(self, status_code: int, message: str = "API Error") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class SalonApiClient:
    """
    Async client for the salon REST API.

    Attributes:
        base_url: API root, e.g. "http://localhost:3001/api"
        client: Underlying httpx.AsyncClient (owned unless one was passed in)
    """

    def __init__(
        self,
        base_url: str = SALON_API_URL,
        timeout: float = SALON_API_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize the HTTP client.

        Args:
            base_url: API root URL
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self.client.aclose()

    # --- Collaborators ---

    async def get_collaborators(self) -> List[Collaborator]:
        return await self._get_list("/collaborators", Collaborator)

    async def create_collaborator(self, data: CollaboratorInput) -> Collaborator:
        return await self._send("POST", "/collaborators", data, Collaborator)

    async def update_collaborator(self, collaborator_id: str, data: CollaboratorInput) -> Collaborator:
        return await self._send("PUT", f"/collaborators/{collaborator_id}", data, Collaborator)

    async def delete_collaborator(self, collaborator_id: str) -> None:
        await self._delete(f"/collaborators/{collaborator_id}")

    # --- Procedures ---

    async def get_procedures(self) -> List[Procedure]:
        return await self._get_list("/procedures", Procedure)

    async def create_procedure(self, data: ProcedureInput) -> Procedure:
        return await self._send("POST", "/procedures", data, Procedure)

    async def update_procedure(self, procedure_id: str, data: ProcedureInput) -> Procedure:
        return await self._send("PUT", f"/procedures/{procedure_id}", data, Procedure)

    async def delete_procedure(self, procedure_id: str) -> None:
        await self._delete(f"/procedures/{procedure_id}")

    # --- Prices ---

    async def get_prices(self) -> List[PriceConfig]:
        return await self._get_list("/prices", PriceConfig)

    async def create_price(self, data: PriceConfigInput) -> PriceConfig:
        return await self._send("POST", "/prices", data, PriceConfig)

    async def update_price(self, price_id: str, data: PriceConfigInput) -> PriceConfig:
        return await self._send("PUT", f"/prices/{price_id}", data, PriceConfig)

    async def delete_price(self, price_id: str) -> None:
        await self._delete(f"/prices/{price_id}")

    # --- Records ---

    async def get_records(self) -> List[ServiceRecord]:
        return await self._get_list("/records", ServiceRecord)

    async def create_record(self, payload: dict) -> ServiceRecord:
        """
        Store a new record.

        The payload must already include calculatedValue; the API stores it verbatim.
        """
        response = await self._request("POST", "/records", json=payload)
        return self._parse(ServiceRecord, response.json())

    async def delete_record(self, record_id: str) -> None:
        await self._delete(f"/records/{record_id}")

    # --- Snapshots ---

    async def fetch_snapshot(self, include_prices: bool = False) -> SalonSnapshot:
        """
        Fetch the collections one screen needs, concurrently.

        The requests run in parallel and are joined before anything is computed.
        If the caller is cancelled, the pending requests are cancelled with it.

        Args:
            include_prices: Also fetch price configurations

        Returns:
            SalonSnapshot with the joined collections
        """
        fetches = [self.get_records(), self.get_collaborators(), self.get_procedures()]
        if include_prices:
            fetches.append(self.get_prices())

        results = await asyncio.gather(*fetches)
        records, collaborators, procedures = results[0], results[1], results[2]
        prices = results[3] if include_prices else []

        logger.debug(
            f"Fetched snapshot: {len(records)} records, {len(collaborators)} collaborators, "
            f"{len(procedures)} procedures, {len(prices)} prices"
        )
        return SalonSnapshot(
            collaborators=tuple(collaborators),
            procedures=tuple(procedures),
            prices=tuple(prices),
            records=tuple(records),
        )

    # --- Helpers ---

    async def _get_list(self, path: str, model: Type[ModelT]) -> List[ModelT]:
        response = await self._request("GET", path)
        data = response.json()
        if not isinstance(data, list):
            raise SalonApiError(502, f"Expected a list from {path}")

        items: List[ModelT] = []
        for item in data:
            try:
                items.append(model.model_validate(item))
            except ValidationError as e:
                # Log error but continue processing other items
                logger.warning(f"Skipping invalid {model.__name__} from {path}: {e}")
                continue
        return items

    async def _send(self, method: str, path: str, data: SalonModel, model: Type[ModelT]) -> ModelT:
        response = await self._request(method, path, json=data.to_api_payload())
        return self._parse(model, response.json())

    async def _delete(self, path: str) -> None:
        await self._request("DELETE", path)

    async def _request(self, method: str, path: str, json: Any = None) -> httpx.Response:
        """
        Send a request and raise SalonApiError on failure.

        The API reports errors as {"error": "..."}; that message is kept.
        """
        try:
            response = await self.client.request(method, path, json=json)
        except httpx.HTTPError as e:
            logger.warning(f"Salon API {method} {path} failed: {e}")
            raise SalonApiError(503, "Salon API unavailable") from e

        if response.is_success:
            return response

        message = "API Error"
        try:
            body = response.json()
            if isinstance(body, dict) and body.get("error"):
                message = str(body["error"])
        except ValueError:
            pass

        logger.warning(f"Salon API {method} {path} returned {response.status_code}: {message}")
        raise SalonApiError(response.status_code, message)

    @staticmethod
    def _parse(model: Type[ModelT], data: Any) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Invalid {model.__name__} from salon API: {e}")
            raise SalonApiError(502, f"Invalid {model.__name__} data from salon API") from e
