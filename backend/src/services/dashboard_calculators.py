"""
Metric calculators for dashboard calculations.

Each calculator is responsible for computing a specific metric or breakdown,
following the single responsibility principle for better testability and maintainability.
All calculators are pure: they never filter by period and never perform I/O.
"""
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, TypeVar, Union
from decimal import Decimal, ROUND_HALF_UP

from core.constants import RANKING_TOP_N, UNKNOWN_LABEL
from models import Collaborator, Procedure, ServiceRecord, ServiceStatus
from services.dashboard_types import DayGroup, KpiSummary, RankedEntry, TimelinePoint
from services.pricing import quantize_money
from utils.date_utils import format_day_label, iter_date_keys

Number = TypeVar("Number", Decimal, int)


def percent_of_max(value: Union[Decimal, int], max_value: Union[Decimal, int]) -> int:
    """
    Express value as a whole percentage of max_value (for bar widths).

    A max_value of 0 (or less) yields 0, never a division error.
    """
    if max_value <= 0:
        return 0
    ratio = Decimal(value) / Decimal(max_value) * 100
    return int(ratio.quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def build_name_lookup(entities: Iterable[Union[Collaborator, Procedure]]) -> Dict[str, str]:
    """Map entity id to display name."""
    return {entity.id: entity.name for entity in entities}


def resolve_name(lookup: Dict[str, str], entity_id: str) -> str:
    """Resolve an id to its display name, or the placeholder label if it is dangling."""
    return lookup.get(entity_id, UNKNOWN_LABEL)


def done_only(records: Iterable[ServiceRecord]) -> List[ServiceRecord]:
    """Keep records whose service was performed."""
    return [record for record in records if record.status == ServiceStatus.DONE]


class DayGrouper:
    """Groups records into per-calendar-day buckets."""

    @staticmethod
    def group_by_day(
        records: Iterable[ServiceRecord],
        seed_range: Optional[Tuple[str, str]] = None
    ) -> List[DayGroup]:
        """
        Group records by their date key.

        Each group's total_value sums calculated_value over every record of the
        day, whatever its status (the KPI summary counts Done records only).

        Args:
            records: Records to group
            seed_range: Optional (start, end) date keys; every day in the range
                gets a group even without records, giving a gap-free axis

        Returns:
            List of DayGroup sorted ascending by date
        """
        groups: Dict[str, DayGroup] = {}

        if seed_range is not None:
            start_key, end_key = seed_range
            for date_key in iter_date_keys(start_key, end_key):
                groups[date_key] = DayGrouper._empty_group(date_key)

        for record in records:
            # Keyed by the date string itself, never a parsed timestamp
            group = groups.get(record.date)
            if group is None:
                group = DayGrouper._empty_group(record.date)
                groups[record.date] = group

            group['records'].append(record)
            group['total_value'] += record.calculated_value
            if record.status == ServiceStatus.DONE:
                group['count_done'] += 1
            else:
                group['count_not_done'] += 1

        return [groups[date_key] for date_key in sorted(groups.keys())]

    @staticmethod
    def _empty_group(date_key: str) -> DayGroup:
        return DayGroup(
            date=date_key,
            records=[],
            total_value=Decimal('0'),
            count_done=0,
            count_not_done=0
        )


class AggregateRanker:
    """Reduces records into top-N rankings."""

    @staticmethod
    def rank_by(
        records: Iterable[ServiceRecord],
        key_fn: Callable[[ServiceRecord], str],
        value_fn: Callable[[ServiceRecord], Number],
        top_n: int
    ) -> List[RankedEntry]:
        """
        Aggregate records by key and rank them.

        Args:
            records: Records to aggregate (no status filtering happens here)
            key_fn: Record -> ranking label
            value_fn: Record -> contribution to the label's total
            top_n: Maximum number of entries returned

        Returns:
            Entries sorted by value descending. Ties keep the order in which
            their labels were first encountered.
        """
        totals: Dict[str, Union[Decimal, int]] = {}
        for record in records:
            label = key_fn(record)
            contribution = value_fn(record)
            if label in totals:
                totals[label] += contribution
            else:
                totals[label] = contribution

        # sorted() with reverse=True keeps equal elements in insertion order
        ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)[:max(top_n, 0)]

        max_value = ranked[0][1] if ranked else 0
        return [
            RankedEntry(label=label, value=value, bar_percent=percent_of_max(value, max_value))
            for label, value in ranked
        ]

    @staticmethod
    def revenue_by_collaborator(
        records: Iterable[ServiceRecord],
        collaborators: Iterable[Collaborator],
        top_n: int = RANKING_TOP_N
    ) -> List[RankedEntry]:
        """Top collaborators by revenue of performed services."""
        names = build_name_lookup(collaborators)
        return AggregateRanker.rank_by(
            done_only(records),
            key_fn=lambda record: resolve_name(names, record.collaborator_id),
            value_fn=lambda record: record.calculated_value,
            top_n=top_n
        )

    @staticmethod
    def volume_by_procedure(
        records: Iterable[ServiceRecord],
        procedures: Iterable[Procedure],
        top_n: int = RANKING_TOP_N
    ) -> List[RankedEntry]:
        """Top procedures by number of performed services."""
        names = build_name_lookup(procedures)
        return AggregateRanker.rank_by(
            done_only(records),
            key_fn=lambda record: resolve_name(names, record.procedure_id),
            value_fn=lambda record: 1,
            top_n=top_n
        )


class KpiSummarizer:
    """Calculates KPI totals for a record set."""

    @staticmethod
    def summarize(records: Sequence[ServiceRecord]) -> KpiSummary:
        """
        Calculate KPI totals.

        The record set is used as given; callers filter by period beforehand.

        Returns:
            KpiSummary where revenue and average ticket only consider Done
            records, and zero denominators give 0
        """
        total_revenue = Decimal('0')
        done_count = 0
        not_done_count = 0

        for record in records:
            if record.status == ServiceStatus.DONE:
                total_revenue += record.calculated_value
                done_count += 1
            else:
                not_done_count += 1

        total_count = done_count + not_done_count

        if done_count > 0:
            avg_ticket = quantize_money(total_revenue / Decimal(done_count))
        else:
            avg_ticket = Decimal('0')

        if total_count > 0:
            efficiency_rate = percent_of_max(done_count, total_count)
        else:
            efficiency_rate = 0

        return KpiSummary(
            total_revenue=total_revenue,
            total_count=total_count,
            done_count=done_count,
            not_done_count=not_done_count,
            avg_ticket=avg_ticket,
            efficiency_rate=efficiency_rate
        )


class RevenueTimelineCalculator:
    """Calculates a gap-free daily revenue timeline."""

    @staticmethod
    def calculate(
        records: Iterable[ServiceRecord],
        start_key: str,
        end_key: str
    ) -> List[TimelinePoint]:
        """
        Calculate revenue of performed services per day in [start_key, end_key].

        Days without records appear with value 0. Records outside the range are
        ignored.
        """
        in_range = [record for record in done_only(records) if start_key <= record.date <= end_key]
        groups = DayGrouper.group_by_day(in_range, seed_range=(start_key, end_key))

        max_value = max((group['total_value'] for group in groups), default=Decimal('0'))
        return [
            TimelinePoint(
                date=group['date'],
                label=format_day_label(group['date']),
                value=group['total_value'],
                bar_percent=percent_of_max(group['total_value'], max_value)
            )
            for group in groups
        ]
