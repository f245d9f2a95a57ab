# pyright: reportMissingTypeStubs=false
"""
Catalog API endpoints.

Handles collaborators, procedures and price configurations. Payloads are
passed through to the salon API; create and update go through CatalogService.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status

from auth.dependencies import get_current_session, get_salon_client
from models import (
    Collaborator,
    CollaboratorInput,
    Draft,
    Existing,
    PriceConfig,
    PriceConfigInput,
    Procedure,
    ProcedureInput,
)
from services.catalog_service import CatalogService
from services.record_service import RecordService
from services.salon_api_client import SalonApiClient
from services.session_service import SalonSession

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(get_current_session)])


# --- Collaborators ---

@router.get("/collaborators", summary="List collaborators", response_model=List[Collaborator])
async def list_collaborators(client: SalonApiClient = Depends(get_salon_client)) -> List[Collaborator]:
    return await client.get_collaborators()


@router.post(
    "/collaborators",
    summary="Create a collaborator",
    response_model=Collaborator,
    status_code=status.HTTP_201_CREATED
)
async def create_collaborator(
    data: CollaboratorInput,
    client: SalonApiClient = Depends(get_salon_client)
) -> Collaborator:
    return await CatalogService.save_collaborator(client, Draft(data))


@router.put("/collaborators/{collaborator_id}", summary="Update a collaborator", response_model=Collaborator)
async def update_collaborator(
    collaborator_id: str,
    data: CollaboratorInput,
    client: SalonApiClient = Depends(get_salon_client)
) -> Collaborator:
    return await CatalogService.save_collaborator(client, Existing(collaborator_id, data))


@router.delete(
    "/collaborators/{collaborator_id}",
    summary="Delete a collaborator",
    status_code=status.HTTP_204_NO_CONTENT
)
async def delete_collaborator(
    collaborator_id: str,
    client: SalonApiClient = Depends(get_salon_client)
) -> None:
    await client.delete_collaborator(collaborator_id)
    logger.info(f"Deleted collaborator {collaborator_id}")


@router.get(
    "/collaborators/{collaborator_id}/procedures",
    summary="List procedures a collaborator may perform",
    response_model=List[Procedure]
)
async def list_collaborator_procedures(
    collaborator_id: str,
    client: SalonApiClient = Depends(get_salon_client)
) -> List[Procedure]:
    snapshot = await client.fetch_snapshot()
    return RecordService.available_procedures(snapshot.collaborators, snapshot.procedures, collaborator_id)


# --- Procedures ---

@router.get("/procedures", summary="List procedures", response_model=List[Procedure])
async def list_procedures(client: SalonApiClient = Depends(get_salon_client)) -> List[Procedure]:
    return await client.get_procedures()


@router.post(
    "/procedures",
    summary="Create a procedure",
    response_model=Procedure,
    status_code=status.HTTP_201_CREATED
)
async def create_procedure(
    data: ProcedureInput,
    client: SalonApiClient = Depends(get_salon_client)
) -> Procedure:
    return await CatalogService.save_procedure(client, Draft(data))


@router.put("/procedures/{procedure_id}", summary="Update a procedure", response_model=Procedure)
async def update_procedure(
    procedure_id: str,
    data: ProcedureInput,
    client: SalonApiClient = Depends(get_salon_client)
) -> Procedure:
    return await CatalogService.save_procedure(client, Existing(procedure_id, data))


@router.delete(
    "/procedures/{procedure_id}",
    summary="Delete a procedure",
    status_code=status.HTTP_204_NO_CONTENT
)
async def delete_procedure(
    procedure_id: str,
    client: SalonApiClient = Depends(get_salon_client)
) -> None:
    await client.delete_procedure(procedure_id)
    logger.info(f"Deleted procedure {procedure_id}")


# --- Prices ---

@router.get("/prices", summary="List price configurations", response_model=List[PriceConfig])
async def list_prices(client: SalonApiClient = Depends(get_salon_client)) -> List[PriceConfig]:
    return await client.get_prices()


@router.get(
    "/prices/unpriced-procedures",
    summary="List procedures without a price",
    response_model=List[Procedure]
)
async def list_unpriced_procedures(client: SalonApiClient = Depends(get_salon_client)) -> List[Procedure]:
    snapshot = await client.fetch_snapshot(include_prices=True)
    return CatalogService.unpriced_procedures(snapshot.procedures, snapshot.prices)


@router.post(
    "/prices",
    summary="Create a price configuration",
    response_model=PriceConfig,
    status_code=status.HTTP_201_CREATED
)
async def create_price(
    data: PriceConfigInput,
    client: SalonApiClient = Depends(get_salon_client)
) -> PriceConfig:
    return await CatalogService.save_price(client, Draft(data))


@router.put("/prices/{price_id}", summary="Update a price configuration", response_model=PriceConfig)
async def update_price(
    price_id: str,
    data: PriceConfigInput,
    client: SalonApiClient = Depends(get_salon_client)
) -> PriceConfig:
    return await CatalogService.save_price(client, Existing(price_id, data))


@router.delete(
    "/prices/{price_id}",
    summary="Delete a price configuration",
    status_code=status.HTTP_204_NO_CONTENT
)
async def delete_price(
    price_id: str,
    client: SalonApiClient = Depends(get_salon_client)
) -> None:
    await client.delete_price(price_id)
    logger.info(f"Deleted price config {price_id}")
