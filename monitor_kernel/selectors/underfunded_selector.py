"""
Module: monitor_kernel.selectors.underfunded_selector
Responsibility: Read-only computation of which watched recipients should be
    funded right now, under the treasury's current balance.
Architecture position: Kernel > Selectors.  Reads the watchlist from the
    database and balances from the injected ledger; writes nothing anywhere.

Behavior:
    The budget is the monitor's own ledger balance at call time.  Its
    consumption is simulated locally (see domain.selection) and never
    persisted or reserved -- disbursement spends the real balance again,
    possibly differently.
"""

from sqlalchemy.orm import Session

from monitor_kernel.domain.clock import Clock, SystemClock
from monitor_kernel.domain.dtos import MonitorConfigInfo
from monitor_kernel.domain.ledger import LedgerClient
from monitor_kernel.domain.selection import select_underfunded
from monitor_kernel.logging_config import get_logger
from monitor_kernel.models.recipient import Recipient
from monitor_kernel.selectors.base import BaseSelector
from monitor_kernel.selectors.monitor_selector import MonitorSelector

logger = get_logger("selectors.underfunded")


class UnderfundedSelector(BaseSelector[Recipient]):
    """Greedy selection of underfunded recipients."""

    def __init__(
        self,
        session: Session,
        ledger: LedgerClient,
        clock: Clock | None = None,
    ):
        super().__init__(session)
        self._ledger = ledger
        self._clock = clock or SystemClock()
        self._monitor = MonitorSelector(session)

    def get_underfunded_addresses(
        self,
        config: MonitorConfigInfo | None = None,
    ) -> list[str]:
        """
        Addresses to fund this round, in watchlist order.

        Args:
            config: Configuration snapshot to evaluate under.  Read from the
                database when omitted.

        Returns:
            An exactly-sized list; empty when nothing qualifies.
        """
        config = config or self._monitor.get_config()
        now = self._clock.timestamp()
        budget = self._ledger.own_balance()
        recipients = self._monitor.get_watched_recipients()

        selected = select_underfunded(
            recipients,
            budget=budget,
            balance_of=self._ledger.balance_of,
            min_wait_period_seconds=config.min_wait_period_seconds,
            now=now,
        )

        logger.debug(
            "underfunded_selected",
            extra={
                "config_version": config.version,
                "budget": budget,
                "watched": len(recipients),
                "selected": len(selected),
                "now": now,
            },
        )
        return selected
