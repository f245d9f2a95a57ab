"""
Service for the records history screen.
"""
from typing import List
import logging

from services.dashboard_calculators import build_name_lookup, resolve_name
from services.dashboard_engine import build_record_rows
from services.dashboard_types import RecordRow, SalonSnapshot

logger = logging.getLogger(__name__)


class HistoryService:
    """Lists and searches stored service records."""

    @staticmethod
    def search(snapshot: SalonSnapshot, term: str = "") -> List[RecordRow]:
        """
        Search records by collaborator name, procedure name or date.

        Matching is case-insensitive substring matching. An empty term returns
        every record in API order.
        """
        term = (term or "").strip().lower()
        if not term:
            return build_record_rows(snapshot.records, snapshot)

        collaborator_names = build_name_lookup(snapshot.collaborators)
        procedure_names = build_name_lookup(snapshot.procedures)

        matches = [
            record for record in snapshot.records
            if term in resolve_name(collaborator_names, record.collaborator_id).lower()
            or term in resolve_name(procedure_names, record.procedure_id).lower()
            or term in record.date
        ]

        logger.debug(f"History search '{term}': {len(matches)} of {len(snapshot.records)} records")
        return build_record_rows(matches, snapshot)
