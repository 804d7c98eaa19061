"""Application services - Orchestration around the ports."""

from .inventory_collector import CollectionResult, InventoryCollector
from .notification_dispatcher import DispatchResult, NotificationDispatcher, SenderIdentity
from .notification_renderer import NotificationRenderer
from .report_store import ExportResult, ReportStore, ReportStoreConfig, RetentionResult

__all__ = [
    "CollectionResult",
    "DispatchResult",
    "ExportResult",
    "InventoryCollector",
    "NotificationDispatcher",
    "NotificationRenderer",
    "ReportStore",
    "ReportStoreConfig",
    "RetentionResult",
    "SenderIdentity",
]
