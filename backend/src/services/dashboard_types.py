"""
Type definitions for salon dashboard calculations.

This module provides TypedDict definitions for the plain-data shapes produced by
the pricing/aggregation layer (day groups, rankings, KPI bundles) and consumed by
the API layer. None of them carry behavior.
"""
from dataclasses import dataclass
from typing import TypedDict, Optional, Literal, List, Tuple, Union
from decimal import Decimal

from models import Collaborator, Procedure, PriceConfig, ServiceRecord


# Period selector modes:
# - "month": value is "YYYY-MM"
# - "day": value is "YYYY-MM-DD"
# - "range": value is a (start, end) tuple of "YYYY-MM-DD", both inclusive
PeriodMode = Literal["month", "day", "range"]
PeriodValue = Union[str, Tuple[str, str]]

# Report layouts: every record per day, or one aggregate row per day
ReportType = Literal["detailed", "simple"]


@dataclass(frozen=True)
class SalonSnapshot:
    """
    Read-only collections fetched for one screen render.

    Each request gets its own snapshot; nothing is cached across requests.
    """
    collaborators: Tuple[Collaborator, ...] = ()
    procedures: Tuple[Procedure, ...] = ()
    prices: Tuple[PriceConfig, ...] = ()
    records: Tuple[ServiceRecord, ...] = ()


class DayGroup(TypedDict):
    """Records of one calendar day with their subtotal and status counts."""
    date: str  # YYYY-MM-DD key
    records: List[ServiceRecord]  # In original relative order
    total_value: Decimal  # Sum of calculated_value over all statuses
    count_done: int
    count_not_done: int


class RankedEntry(TypedDict):
    """Single entry in a top-N ranking."""
    label: str
    value: Union[Decimal, int]  # Revenue (Decimal) or volume (int)
    bar_percent: int  # value relative to the ranking's maximum (0-100)


class KpiSummary(TypedDict):
    """Scalar totals over an already filtered record set."""
    total_revenue: Decimal  # Done records only
    total_count: int
    done_count: int
    not_done_count: int
    avg_ticket: Decimal
    efficiency_rate: int  # Percentage of Done over all records


class TimelinePoint(TypedDict):
    """Single day in a revenue timeline chart."""
    date: str  # YYYY-MM-DD key
    label: str  # DD/MM
    value: Decimal
    bar_percent: int


class RecordRow(TypedDict):
    """Service record with resolved display names."""
    id: str
    date: str
    collaborator_id: str
    collaborator_name: str
    procedure_id: str
    procedure_name: str
    status: str
    extras: List[str]
    notes: Optional[str]
    calculated_value: Decimal
    created_at: Optional[str]


class ReportDay(TypedDict):
    """One day of a collaborator report."""
    date: str
    total_value: Decimal
    count_done: int
    count_not_done: int
    records: List[RecordRow]  # Filled for detailed reports
    extras: List[str]  # Unique extras of the day, first-seen order (simple reports)
    notes: List[str]  # Non-empty notes of the day (simple reports)
