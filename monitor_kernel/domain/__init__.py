"""
Domain layer -- pure functional core of the monitor kernel.

Nothing in this package touches the database.  ``SystemClock`` and
ledger implementations are the only I/O boundaries and are injected.
"""

from monitor_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from monitor_kernel.domain.dtos import (
    CheckResult,
    MonitorConfigInfo,
    MonitorEventInfo,
    RecipientInfo,
    TopUpOutcome,
    TopUpReport,
    TopUpStatus,
)
from monitor_kernel.domain.ledger import InMemoryLedger, LedgerClient, TransferRecord
from monitor_kernel.domain.payload import decode_candidates, encode_candidates
from monitor_kernel.domain.selection import (
    cooldown_elapsed,
    is_underfunded,
    needs_top_up,
    select_underfunded,
)
from monitor_kernel.domain.watchlist import WatchlistEntrySpec, validate_watchlist
from monitor_kernel.domain.work_budget import MIN_WORK_FOR_TRANSFER, WorkBudget

__all__ = [
    "CheckResult",
    "Clock",
    "DeterministicClock",
    "InMemoryLedger",
    "LedgerClient",
    "MIN_WORK_FOR_TRANSFER",
    "MonitorConfigInfo",
    "MonitorEventInfo",
    "RecipientInfo",
    "SystemClock",
    "TopUpOutcome",
    "TopUpReport",
    "TopUpStatus",
    "TransferRecord",
    "WatchlistEntrySpec",
    "WorkBudget",
    "cooldown_elapsed",
    "decode_candidates",
    "encode_candidates",
    "is_underfunded",
    "needs_top_up",
    "select_underfunded",
    "validate_watchlist",
]
