"""
Period filter for dashboard calculations.

Selects service records by month, day or inclusive date range, optionally
restricted to one collaborator.
"""
from typing import Iterable, List, Optional
import logging

from models import ServiceRecord
from services.dashboard_types import PeriodMode, PeriodValue

logger = logging.getLogger(__name__)


class PeriodFilter:
    """
    Applies period and collaborator filters to service records.

    Handles:
    - Month filtering ("YYYY-MM" prefix match)
    - Day filtering (exact "YYYY-MM-DD" match)
    - Range filtering (inclusive, lexical comparison of date keys)
    - Collaborator filtering (applied in every mode when set)

    Date keys are compared as strings. Lexical order of "YYYY-MM-DD" equals
    calendar order, and no timezone is ever involved.
    """

    @staticmethod
    def filter_by_period(
        records: Iterable[ServiceRecord],
        mode: PeriodMode,
        value: PeriodValue,
        collaborator_id: Optional[str] = None
    ) -> List[ServiceRecord]:
        """
        Filter records by period.

        Args:
            records: Records to filter
            mode: "month", "day" or "range"
            value: "YYYY-MM" for month, "YYYY-MM-DD" for day, (start, end) for range
            collaborator_id: Only keep records of this collaborator (None means no filter)

        Returns:
            Matching records sorted ascending by date (stable for equal dates).
            An empty input or a range with start > end yields an empty list.

        Raises:
            ValueError: If mode is unknown or value does not fit the mode
        """
        filtered = list(records)

        if collaborator_id is not None:
            filtered = PeriodFilter._filter_by_collaborator(filtered, collaborator_id)

        if mode == "month":
            if not isinstance(value, str):
                raise ValueError("Month filter expects a 'YYYY-MM' string")
            filtered = PeriodFilter._filter_by_month(filtered, value)
        elif mode == "day":
            if not isinstance(value, str):
                raise ValueError("Day filter expects a 'YYYY-MM-DD' string")
            filtered = PeriodFilter._filter_by_day(filtered, value)
        elif mode == "range":
            if isinstance(value, str) or len(value) != 2:
                raise ValueError("Range filter expects a (start, end) pair")
            start, end = value
            filtered = PeriodFilter._filter_by_range(filtered, start, end)
        else:
            raise ValueError(f"Unknown period mode: {mode}")

        # sorted() is stable: records on the same day keep their input order
        result = sorted(filtered, key=lambda record: record.date)

        logger.debug(f"Period filter {mode}={value} collaborator={collaborator_id}: {len(result)} records")
        return result

    @staticmethod
    def _filter_by_collaborator(
        records: List[ServiceRecord],
        collaborator_id: str
    ) -> List[ServiceRecord]:
        return [record for record in records if record.collaborator_id == collaborator_id]

    @staticmethod
    def _filter_by_month(
        records: List[ServiceRecord],
        month_key: str
    ) -> List[ServiceRecord]:
        return [record for record in records if record.date.startswith(month_key)]

    @staticmethod
    def _filter_by_day(
        records: List[ServiceRecord],
        date_key: str
    ) -> List[ServiceRecord]:
        return [record for record in records if record.date == date_key]

    @staticmethod
    def _filter_by_range(
        records: List[ServiceRecord],
        start_key: str,
        end_key: str
    ) -> List[ServiceRecord]:
        if start_key > end_key:
            return []
        return [record for record in records if start_key <= record.date <= end_key]
