"""
MonitorSettings schema.

Defines the operator-authored settings of a balance monitor deployment.
YAML files are parsed into these types by the loader; ``bootstrap`` turns
them into the initial monitor configuration and watchlist.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from monitor_kernel.domain.work_budget import (
    DEFAULT_PER_CANDIDATE_COST,
    DEFAULT_PER_TRANSFER_COST,
    MIN_WORK_FOR_TRANSFER,
    WorkBudget,
)

# ---------------------------------------------------------------------------
# Work budget
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WorkSettings:
    """Per-call work limit for the perform phase.  ``limit=None`` is unlimited."""

    limit: int | None = None
    per_candidate_cost: int = DEFAULT_PER_CANDIDATE_COST
    per_transfer_cost: int = DEFAULT_PER_TRANSFER_COST
    min_work_for_transfer: int = MIN_WORK_FOR_TRANSFER

    def new_budget(self) -> WorkBudget:
        """Fresh budget for one perform call."""
        return WorkBudget(
            remaining=self.limit,
            per_candidate_cost=self.per_candidate_cost,
            per_transfer_cost=self.per_transfer_cost,
            min_work_for_transfer=self.min_work_for_transfer,
        )


# ---------------------------------------------------------------------------
# Watchlist
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WatchlistEntryDef:
    """One watched recipient as declared in settings."""

    address: str
    min_balance: int
    top_up_amount: int


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MonitorSettings:
    """
    Root settings object.

    ``balances`` seeds the in-memory ledger for local simulation; it is
    ignored when a real ledger client is supplied.
    """

    monitor_address: str
    owner: str
    trigger: str
    min_wait_period_seconds: int
    database_url: str = "sqlite:///:memory:"
    work: WorkSettings = field(default_factory=WorkSettings)
    watchlist: tuple[WatchlistEntryDef, ...] = ()
    balances: tuple[tuple[str, int], ...] = ()
    checksum: str = ""

    @property
    def watchlist_columns(self) -> tuple[list[str], list[int], list[int]]:
        """Watchlist as the three parallel sequences ``set_watchlist`` takes."""
        return (
            [e.address for e in self.watchlist],
            [e.min_balance for e in self.watchlist],
            [e.top_up_amount for e in self.watchlist],
        )
