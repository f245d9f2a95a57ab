"""
Services package for shared business logic.

This package contains service classes that encapsulate business logic
shared across multiple API endpoints.
"""

from .catalog_service import CatalogService
from .history_service import HistoryService
from .record_service import RecordService
from .session_service import SessionService

__all__ = [
    'CatalogService',
    'HistoryService',
    'RecordService',
    'SessionService',
]
