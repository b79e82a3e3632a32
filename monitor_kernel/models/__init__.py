"""ORM models for the monitor kernel."""

from monitor_kernel.models.monitor_config import MonitorConfig
from monitor_kernel.models.monitor_event import MonitorEvent, MonitorEventType
from monitor_kernel.models.recipient import Recipient, WatchlistEntry
from monitor_kernel.models.sequence import SequenceCounter

__all__ = [
    "MonitorConfig",
    "MonitorEvent",
    "MonitorEventType",
    "Recipient",
    "SequenceCounter",
    "WatchlistEntry",
]
