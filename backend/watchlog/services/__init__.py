"""
Services Package

Repositories and reconciliation workflows over titles and replay events.
"""
from watchlog.services.base import BaseService, service_operation, validate_form
from watchlog.services.title_service import TitleService, resolve_date_updated
from watchlog.services.aggregate_service import AggregateService
from watchlog.services.replay_event_service import ReplayEventService
from watchlog.services.reconciliation_service import ReconciliationService
from watchlog.services.statistics_service import StatisticsService

__all__ = [
    "BaseService",
    "service_operation",
    "validate_form",
    "TitleService",
    "resolve_date_updated",
    "AggregateService",
    "ReplayEventService",
    "ReconciliationService",
    "StatisticsService",
]
