# pyright: reportMissingTypeStubs=false
"""
Service record API endpoints.

Handles the records history, value preview, creation and deletion.
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from auth.dependencies import get_current_session, get_salon_client
from api.responses import QuoteResponse, RecordListResponse, RecordRowResponse
from models import ServiceRecordInput
from services.dashboard_engine import build_record_rows
from services.history_service import HistoryService
from services.pricing import PriceResolver, money_to_float
from services.record_service import RecordService
from services.salon_api_client import SalonApiClient
from services.session_service import SalonSession

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", summary="List and search records", response_model=RecordListResponse)
async def list_records(
    search: str = Query("", description="Matches collaborator name, procedure name or date"),
    session: SalonSession = Depends(get_current_session),
    client: SalonApiClient = Depends(get_salon_client)
) -> RecordListResponse:
    snapshot = await client.fetch_snapshot()
    rows = HistoryService.search(snapshot, search)
    return RecordListResponse(
        records=[RecordRowResponse.from_row(row) for row in rows],
        total=len(rows)
    )


@router.post("/quote", summary="Preview a record's value", response_model=QuoteResponse)
async def quote_record(
    record_input: ServiceRecordInput,
    session: SalonSession = Depends(get_current_session),
    client: SalonApiClient = Depends(get_salon_client)
) -> QuoteResponse:
    """Compute the value the record would be stored with, without saving it."""
    prices = await client.get_prices()
    return QuoteResponse(
        calculated_value=money_to_float(RecordService.quote(prices, record_input)),
        has_price=PriceResolver.resolve_price(prices, record_input.procedure_id) is not None
    )


@router.post(
    "",
    summary="Create a record",
    response_model=RecordRowResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_record(
    record_input: ServiceRecordInput,
    session: SalonSession = Depends(get_current_session),
    client: SalonApiClient = Depends(get_salon_client)
) -> RecordRowResponse:
    """
    Create a record.

    The value is computed from the current prices and frozen into the record.
    """
    record = await RecordService.create_record(client, record_input)
    snapshot = await client.fetch_snapshot()
    return RecordRowResponse.from_row(build_record_rows([record], snapshot)[0])


@router.delete("/{record_id}", summary="Delete a record", status_code=status.HTTP_204_NO_CONTENT)
async def delete_record(
    record_id: str,
    session: SalonSession = Depends(get_current_session),
    client: SalonApiClient = Depends(get_salon_client)
) -> None:
    await RecordService.delete_record(client, record_id)
