# pyright: reportMissingTypeStubs=false
"""
Dashboard, analysis and report API endpoints.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from auth.dependencies import get_current_session, get_salon_client
from api.responses import (
    AnalysisResponse,
    DashboardResponse,
    ReportResponse,
    build_analysis_response,
    build_dashboard_response,
    build_report_response,
)
from services.dashboard_engine import AnalysisEngine, DashboardEngine, ReportEngine
from services.salon_api_client import SalonApiClient
from services.session_service import SalonSession
from utils.date_utils import current_date_key, current_month_key, month_bounds

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/dashboard", summary="Get the month dashboard", response_model=DashboardResponse)
async def get_dashboard(
    month: Optional[str] = Query(None, description="Month in YYYY-MM format (defaults to the current month)"),
    session: SalonSession = Depends(get_current_session),
    client: SalonApiClient = Depends(get_salon_client)
) -> DashboardResponse:
    """
    Get KPIs, rankings and latest entries for a month.

    Revenue, average ticket and rankings count performed services only.
    """
    snapshot = await client.fetch_snapshot()
    result = DashboardEngine().compute(snapshot, month or current_month_key())
    return build_dashboard_response(result)


@router.get("/analysis", summary="Get the date-range analysis", response_model=AnalysisResponse)
async def get_analysis(
    start_date: Optional[str] = Query(None, description="Start date in YYYY-MM-DD format"),
    end_date: Optional[str] = Query(None, description="End date in YYYY-MM-DD format"),
    session: SalonSession = Depends(get_current_session),
    client: SalonApiClient = Depends(get_salon_client)
) -> AnalysisResponse:
    """
    Get KPIs, a gap-free daily revenue chart and rankings for a date range.

    Both dates are inclusive and default to the bounds of the current month.
    """
    default_start, default_end = month_bounds(current_month_key())
    snapshot = await client.fetch_snapshot()
    result = AnalysisEngine().compute(snapshot, start_date or default_start, end_date or default_end)
    return build_analysis_response(result)


@router.get("/reports", summary="Get a collaborator report", response_model=ReportResponse)
async def get_report(
    collaborator_id: str = Query(..., description="Collaborator the report is about"),
    mode: str = Query("month", description="'month' or 'day'"),
    value: Optional[str] = Query(
        None, description="YYYY-MM for month mode, YYYY-MM-DD for day mode (defaults to the current month or day)"
    ),
    report_type: str = Query("detailed", description="'detailed' or 'simple'"),
    session: SalonSession = Depends(get_current_session),
    client: SalonApiClient = Depends(get_salon_client)
) -> ReportResponse:
    """
    Get a collaborator's records for a month or a day, grouped by day.

    Day totals include services not performed.
    """
    if value is None:
        value = current_date_key() if mode == "day" else current_month_key()

    snapshot = await client.fetch_snapshot()
    result = ReportEngine().compute(snapshot, collaborator_id, mode, value, report_type)
    return build_report_response(result)
