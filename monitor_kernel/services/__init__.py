"""Services for the monitor kernel (write side)."""

from monitor_kernel.services.admin_service import AdminService
from monitor_kernel.services.disbursement_service import DisbursementService
from monitor_kernel.services.event_recorder import EventRecorder
from monitor_kernel.services.sequence_service import SequenceService
from monitor_kernel.services.treasury_service import TreasuryService
from monitor_kernel.services.upkeep_service import UpkeepService
from monitor_kernel.services.watchlist_service import WatchlistService

__all__ = [
    "AdminService",
    "DisbursementService",
    "EventRecorder",
    "SequenceService",
    "TreasuryService",
    "UpkeepService",
    "WatchlistService",
]
