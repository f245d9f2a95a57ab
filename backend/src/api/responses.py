"""
Shared response models for API endpoints.

This module contains Pydantic response models that are shared across
multiple API endpoints. Monetary amounts are floats with two decimals; the
services compute them as Decimal and they are converted only here.
"""

from decimal import Decimal
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel

from services.pricing import money_to_float


class RankedEntryResponse(BaseModel):
    """Response model for one ranking entry."""
    label: str
    value: float  # Revenue in currency units, or a service count
    bar_percent: int

    @classmethod
    def from_entry(cls, entry: Mapping[str, Any]) -> "RankedEntryResponse":
        value = entry['value']
        return cls(
            label=entry['label'],
            value=money_to_float(value) if isinstance(value, Decimal) else value,
            bar_percent=entry['bar_percent']
        )


class KpiSummaryResponse(BaseModel):
    """Response model for KPI totals."""
    total_revenue: float
    total_count: int
    done_count: int
    not_done_count: int
    avg_ticket: float
    efficiency_rate: int  # Percentage (0-100)

    @classmethod
    def from_summary(cls, summary: Mapping[str, Any]) -> "KpiSummaryResponse":
        return cls(
            total_revenue=money_to_float(summary['total_revenue']),
            total_count=summary['total_count'],
            done_count=summary['done_count'],
            not_done_count=summary['not_done_count'],
            avg_ticket=money_to_float(summary['avg_ticket']),
            efficiency_rate=summary['efficiency_rate']
        )


class RecordRowResponse(BaseModel):
    """Response model for a service record with display names."""
    id: str
    date: str  # YYYY-MM-DD
    collaborator_id: str
    collaborator_name: str
    procedure_id: str
    procedure_name: str
    status: str
    extras: List[str]
    notes: Optional[str] = None
    calculated_value: float
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "RecordRowResponse":
        return cls(**{**row, 'calculated_value': money_to_float(row['calculated_value'])})


class TimelinePointResponse(BaseModel):
    """Response model for one day of the revenue chart."""
    date: str
    label: str  # DD/MM
    value: float
    bar_percent: int


class DashboardResponse(BaseModel):
    """Response model for the month dashboard."""
    month: str
    summary: KpiSummaryResponse
    lost_value: float  # Value of services not performed this month
    active_collaborators: int
    collaborator_ranking: List[RankedEntryResponse]
    procedure_ranking: List[RankedEntryResponse]
    recent_records: List[RecordRowResponse]


class AnalysisResponse(BaseModel):
    """Response model for the date-range analysis."""
    start_date: str
    end_date: str
    summary: KpiSummaryResponse
    daily_revenue: List[TimelinePointResponse]
    has_revenue: bool
    collaborator_ranking: List[RankedEntryResponse]
    procedure_ranking: List[RankedEntryResponse]


class ReportDayResponse(BaseModel):
    """Response model for one day of a collaborator report."""
    date: str
    total_value: float
    count_done: int
    count_not_done: int
    records: List[RecordRowResponse] = []  # Detailed reports only
    extras: List[str] = []  # Simple reports only
    notes: List[str] = []  # Simple reports only


class ReportResponse(BaseModel):
    """Response model for a collaborator report."""
    collaborator_id: str
    collaborator_name: str
    mode: str
    value: str
    report_type: str
    days: List[ReportDayResponse]
    total_value: float
    total_done: int
    total_not_done: int


class RecordListResponse(BaseModel):
    """Response model for the records history."""
    records: List[RecordRowResponse]
    total: int


class QuoteResponse(BaseModel):
    """Response model for a record value preview."""
    calculated_value: float
    has_price: bool


class LoginResponse(BaseModel):
    """Response model for a successful login."""
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
    theme: str


class ThemeResponse(BaseModel):
    """Response model for the theme preference."""
    theme: str


def build_dashboard_response(result: Mapping[str, Any]) -> DashboardResponse:
    return DashboardResponse(
        month=result['month'],
        summary=KpiSummaryResponse.from_summary(result['summary']),
        lost_value=money_to_float(result['lost_value']),
        active_collaborators=result['active_collaborators'],
        collaborator_ranking=[RankedEntryResponse.from_entry(e) for e in result['collaborator_ranking']],
        procedure_ranking=[RankedEntryResponse.from_entry(e) for e in result['procedure_ranking']],
        recent_records=[RecordRowResponse.from_row(r) for r in result['recent_records']]
    )


def build_analysis_response(result: Mapping[str, Any]) -> AnalysisResponse:
    return AnalysisResponse(
        start_date=result['start_date'],
        end_date=result['end_date'],
        summary=KpiSummaryResponse.from_summary(result['summary']),
        daily_revenue=[
            TimelinePointResponse(
                date=point['date'],
                label=point['label'],
                value=money_to_float(point['value']),
                bar_percent=point['bar_percent']
            )
            for point in result['daily_revenue']
        ],
        has_revenue=result['has_revenue'],
        collaborator_ranking=[RankedEntryResponse.from_entry(e) for e in result['collaborator_ranking']],
        procedure_ranking=[RankedEntryResponse.from_entry(e) for e in result['procedure_ranking']]
    )


def build_report_response(result: Mapping[str, Any]) -> ReportResponse:
    return ReportResponse(
        collaborator_id=result['collaborator_id'],
        collaborator_name=result['collaborator_name'],
        mode=result['mode'],
        value=result['value'],
        report_type=result['report_type'],
        days=[
            ReportDayResponse(
                date=day['date'],
                total_value=money_to_float(day['total_value']),
                count_done=day['count_done'],
                count_not_done=day['count_not_done'],
                records=[RecordRowResponse.from_row(r) for r in day['records']],
                extras=day['extras'],
                notes=day['notes']
            )
            for day in result['days']
        ],
        total_value=money_to_float(result['total_value']),
        total_done=result['total_done'],
        total_not_done=result['total_not_done']
    )
