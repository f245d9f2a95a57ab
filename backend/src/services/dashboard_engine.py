"""
Calculation engines for the salon screens.

Orchestrates the period filter and calculators for the month dashboard, the
range analysis and the collaborator report. Engines take an already fetched
SalonSnapshot and never perform I/O.
"""
from typing import List, Dict, Any, Iterable, Optional
from decimal import Decimal
import logging
import os

from core.config import ENVIRONMENT
from core.constants import MAX_ANALYSIS_RANGE_DAYS, RANKING_TOP_N, RECENT_RECORDS_LIMIT
from models import ServiceRecord, ServiceStatus
from services.dashboard_types import (
    SalonSnapshot,
    PeriodMode,
    ReportType,
    DayGroup,
    RecordRow,
    ReportDay,
)
from services.dashboard_filters import PeriodFilter
from services.dashboard_calculators import (
    AggregateRanker,
    DayGrouper,
    KpiSummarizer,
    RevenueTimelineCalculator,
    build_name_lookup,
    resolve_name,
)
from utils.date_utils import days_between, normalize_date_key, normalize_month_key

logger = logging.getLogger(__name__)

# Tolerance for report total checks (1 cent)
CALCULATION_TOLERANCE = Decimal('0.01')


class CalculationValidationError(Exception):
    """Exception raised when calculation validation fails."""
    pass


def build_record_rows(
    records: Iterable[ServiceRecord],
    snapshot: SalonSnapshot
) -> List[RecordRow]:
    """
    Attach collaborator and procedure names to records.

    Dangling references resolve to the placeholder label.
    """
    collaborator_names = build_name_lookup(snapshot.collaborators)
    procedure_names = build_name_lookup(snapshot.procedures)

    return [
        RecordRow(
            id=record.id,
            date=record.date,
            collaborator_id=record.collaborator_id,
            collaborator_name=resolve_name(collaborator_names, record.collaborator_id),
            procedure_id=record.procedure_id,
            procedure_name=resolve_name(procedure_names, record.procedure_id),
            status=record.status.value,
            extras=list(record.extras),
            notes=record.notes,
            calculated_value=record.calculated_value,
            created_at=record.created_at
        )
        for record in records
    ]


class DashboardEngine:
    """
    Orchestrates the month dashboard.

    This engine coordinates:
    1. Month filtering
    2. KPI summary plus value lost to services not performed
    3. Collaborator revenue and procedure volume rankings
    4. Latest entries panel
    """

    def __init__(self):
        self.period_filter = PeriodFilter()
        self.summarizer = KpiSummarizer()
        self.ranker = AggregateRanker()

    def compute(self, snapshot: SalonSnapshot, month: str) -> Dict[str, Any]:
        """
        Compute the dashboard for a month.

        Args:
            snapshot: Fetched collections
            month: Month key "YYYY-MM"

        Returns:
            Dictionary with month, summary, lost_value, active_collaborators,
            collaborator_ranking, procedure_ranking and recent_records
        """
        month = normalize_month_key(month)
        month_records = self.period_filter.filter_by_period(snapshot.records, "month", month)

        logger.debug(f"Dashboard {month}: {len(month_records)} of {len(snapshot.records)} records")

        summary = self.summarizer.summarize(month_records)
        lost_value = sum(
            (record.calculated_value for record in month_records if record.status == ServiceStatus.NOT_DONE),
            Decimal('0')
        )

        return {
            'month': month,
            'summary': summary,
            'lost_value': lost_value,
            'active_collaborators': sum(1 for collaborator in snapshot.collaborators if collaborator.active),
            'collaborator_ranking': self.ranker.revenue_by_collaborator(
                month_records, snapshot.collaborators, RANKING_TOP_N
            ),
            'procedure_ranking': self.ranker.volume_by_procedure(
                month_records, snapshot.procedures, RANKING_TOP_N
            ),
            'recent_records': build_record_rows(self._recent(snapshot.records), snapshot)
        }

    @staticmethod
    def _recent(records: Iterable[ServiceRecord]) -> List[ServiceRecord]:
        """Latest entries across all months, newest first."""
        # Records without created_at sort last; equal timestamps keep API order
        ordered = sorted(records, key=lambda record: record.created_at or '', reverse=True)
        return ordered[:RECENT_RECORDS_LIMIT]


class AnalysisEngine:
    """
    Orchestrates the date-range analysis.

    This engine coordinates:
    1. Range filtering
    2. KPI summary
    3. Gap-free daily revenue timeline
    4. Collaborator revenue and procedure volume rankings
    """

    def __init__(self):
        self.period_filter = PeriodFilter()
        self.summarizer = KpiSummarizer()
        self.ranker = AggregateRanker()
        self.timeline_calculator = RevenueTimelineCalculator()

    def compute(self, snapshot: SalonSnapshot, start_date: str, end_date: str) -> Dict[str, Any]:
        """
        Compute the analysis for an inclusive date range.

        A range with start_date > end_date yields empty results, not an error.

        Raises:
            ValueError: If a date is malformed or the range spans more than
                MAX_ANALYSIS_RANGE_DAYS days
        """
        start_date = normalize_date_key(start_date)
        end_date = normalize_date_key(end_date)

        if days_between(start_date, end_date) > MAX_ANALYSIS_RANGE_DAYS:
            raise ValueError(
                f"Date range too long: {start_date}..{end_date} "
                f"(at most {MAX_ANALYSIS_RANGE_DAYS} days)"
            )

        records = self.period_filter.filter_by_period(snapshot.records, "range", (start_date, end_date))

        logger.debug(f"Analysis {start_date}..{end_date}: {len(records)} records")

        timeline = self.timeline_calculator.calculate(records, start_date, end_date)

        return {
            'start_date': start_date,
            'end_date': end_date,
            'summary': self.summarizer.summarize(records),
            'daily_revenue': timeline,
            'has_revenue': any(point['value'] > 0 for point in timeline),
            'collaborator_ranking': self.ranker.revenue_by_collaborator(
                records, snapshot.collaborators, RANKING_TOP_N
            ),
            'procedure_ranking': self.ranker.volume_by_procedure(
                records, snapshot.procedures, RANKING_TOP_N
            )
        }


class ReportEngine:
    """
    Orchestrates the collaborator report.

    This engine coordinates:
    1. Collaborator + month/day filtering
    2. Day grouping
    3. Detailed (every record) or simple (one row per day) layout
    4. Result validation
    """

    def __init__(self):
        self.period_filter = PeriodFilter()
        self.day_grouper = DayGrouper()

    def compute(
        self,
        snapshot: SalonSnapshot,
        collaborator_id: str,
        mode: PeriodMode,
        value: str,
        report_type: ReportType = "detailed"
    ) -> Dict[str, Any]:
        """
        Compute a collaborator report.

        Args:
            snapshot: Fetched collections
            collaborator_id: Collaborator the report is about
            mode: "month" or "day"
            value: "YYYY-MM" for month, "YYYY-MM-DD" for day
            report_type: "detailed" or "simple"

        Returns:
            Dictionary with report metadata, days and totals.
            Day totals include every status; see total_value.

        Raises:
            ValueError: If mode or report_type is not supported
        """
        if mode == "month":
            value = normalize_month_key(value)
        elif mode == "day":
            value = normalize_date_key(value)
        else:
            raise ValueError(f"Reports support 'month' or 'day' periods, got: {mode}")

        if report_type not in ("detailed", "simple"):
            raise ValueError(f"Unknown report type: {report_type}")

        records = self.period_filter.filter_by_period(
            snapshot.records, mode, value, collaborator_id=collaborator_id
        )
        groups = self.day_grouper.group_by_day(records)

        logger.debug(
            f"Report {report_type} for collaborator {collaborator_id} {mode}={value}: "
            f"{len(records)} records in {len(groups)} days"
        )

        days = [self._build_day(group, snapshot, report_type) for group in groups]

        total_value = sum((record.calculated_value for record in records), Decimal('0'))
        total_done = sum(1 for record in records if record.status == ServiceStatus.DONE)
        total_not_done = len(records) - total_done

        self._validate_results(groups, total_value, total_done, total_not_done)

        collaborator_names = build_name_lookup(snapshot.collaborators)

        return {
            'collaborator_id': collaborator_id,
            'collaborator_name': resolve_name(collaborator_names, collaborator_id),
            'mode': mode,
            'value': value,
            'report_type': report_type,
            'days': days,
            'total_value': total_value,
            'total_done': total_done,
            'total_not_done': total_not_done
        }

    @staticmethod
    def _build_day(group: DayGroup, snapshot: SalonSnapshot, report_type: ReportType) -> ReportDay:
        rows: List[RecordRow] = []
        extras: List[str] = []
        notes: List[str] = []

        if report_type == "detailed":
            rows = build_record_rows(group['records'], snapshot)
        else:
            for record in group['records']:
                for extra in record.extras:
                    if extra not in extras:
                        extras.append(extra)
                if record.notes:
                    notes.append(record.notes)

        return ReportDay(
            date=group['date'],
            total_value=group['total_value'],
            count_done=group['count_done'],
            count_not_done=group['count_not_done'],
            records=rows,
            extras=extras,
            notes=notes
        )

    @staticmethod
    def _validate_results(
        groups: List[DayGroup],
        total_value: Decimal,
        total_done: int,
        total_not_done: int,
        environment: Optional[str] = None
    ) -> None:
        """
        Validate that day groups add up to the report totals.

        Fails loudly in development/test environments, logs warnings in production.
        """
        if environment is None:
            # Also check for pytest environment as a fallback
            is_test = os.getenv("PYTEST_VERSION") is not None
            is_dev_or_test = ENVIRONMENT in ['development', 'test'] or is_test
        else:
            is_dev_or_test = environment in ['development', 'test']

        problems: List[str] = []

        grouped_total = sum((group['total_value'] for group in groups), Decimal('0'))
        if abs(grouped_total - total_value) > CALCULATION_TOLERANCE:
            problems.append(
                f"Report total mismatch: days={grouped_total}, records={total_value}, "
                f"diff={abs(grouped_total - total_value)}"
            )

        grouped_done = sum(group['count_done'] for group in groups)
        grouped_not_done = sum(group['count_not_done'] for group in groups)
        if grouped_done != total_done or grouped_not_done != total_not_done:
            problems.append(
                f"Report count mismatch: days={grouped_done}/{grouped_not_done}, "
                f"records={total_done}/{total_not_done}"
            )

        if not problems:
            return

        if is_dev_or_test:
            error_message = "Calculation validation failed:\n" + "\n".join(f"  - {p}" for p in problems)
            raise CalculationValidationError(error_message)

        for problem in problems:
            logger.warning(problem)
