"""
Bootstrap -- install settings into an empty monitor database.

Creates the monitor configuration (owner, trigger, cooldown) and the
initial watchlist from a ``MonitorSettings``.  Flushes only; the caller
owns the transaction.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from monitor_config.schema import MonitorSettings
from monitor_kernel.domain.clock import Clock
from monitor_kernel.domain.ledger import InMemoryLedger, LedgerClient
from monitor_kernel.services.admin_service import AdminService
from monitor_kernel.services.watchlist_service import WatchlistService


def build_ledger(settings: MonitorSettings) -> InMemoryLedger:
    """In-memory ledger for ``settings.monitor_address`` seeded with ``settings.balances``."""
    return InMemoryLedger(settings.monitor_address, dict(settings.balances))


def bootstrap(
    session: Session,
    settings: MonitorSettings,
    ledger: LedgerClient | None = None,
    clock: Clock | None = None,
) -> LedgerClient:
    """
    Initialize the monitor and install the configured watchlist.

    Args:
        session: Session on an empty monitor database.
        settings: Parsed settings.
        ledger: Ledger client to run against.  An InMemoryLedger seeded
            from ``settings.balances`` is built when omitted.
        clock: Clock for event timestamps.

    Returns:
        The ledger the monitor is bound to.

    Raises:
        MonitorAlreadyInitializedError: The database already holds a
            monitor configuration.
        InvalidWatchListError, DuplicateAddressError: The configured
            watchlist is rejected.
    """
    if ledger is None:
        ledger = build_ledger(settings)
    elif ledger.account != settings.monitor_address:
        raise ValueError(
            f"Ledger account {ledger.account} does not match "
            f"monitor address {settings.monitor_address}"
        )

    AdminService(session, clock).initialize(
        owner=settings.owner,
        trigger=settings.trigger,
        min_wait_period_seconds=settings.min_wait_period_seconds,
    )
    if settings.watchlist:
        addresses, min_balances, top_up_amounts = settings.watchlist_columns
        WatchlistService(session).set_watchlist(
            settings.owner, addresses, min_balances, top_up_amounts
        )
    return ledger
