"""
DisbursementService -- best-effort top-up of a candidate list.

Responsibility:
    Transfers each candidate's fixed top-up amount out of the treasury,
    re-validating eligibility against live state first, stamping the
    cooldown on success, and recording per-recipient outcomes.

Architecture position:
    Kernel > Services -- imperative shell.  Called directly (public top-up)
    and by UpkeepService in the perform phase.

Invariants enforced:
    - Candidates are processed in the order given.
    - A candidate is funded only if it is active, its cooldown has elapsed
      and its live balance is below its minimum.  The shared budget is NOT
      re-checked here: the candidate list was budgeted once, at selection
      time, and a transfer the treasury can no longer cover simply fails.
    - last_top_up_time changes only on a successful transfer.
    - After each candidate, eligible or not, the work budget is charged;
      once it drops below its safety threshold the call returns early.

Failure modes:
    - PausedError when the monitor is paused (nothing is processed).
    - Failed transfers and ineligible candidates never raise.  The first
      record TOP_UP_FAILED, the second are skipped without an event.
"""

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from monitor_kernel.domain.clock import Clock, SystemClock
from monitor_kernel.domain.dtos import (
    MonitorConfigInfo,
    TopUpOutcome,
    TopUpReport,
    TopUpStatus,
)
from monitor_kernel.domain.ledger import LedgerClient
from monitor_kernel.domain.selection import needs_top_up
from monitor_kernel.domain.work_budget import WorkBudget
from monitor_kernel.logging_config import LogContext, get_logger
from monitor_kernel.models.recipient import Recipient
from monitor_kernel.selectors.monitor_selector import MonitorSelector, recipient_to_dto
from monitor_kernel.services.admin_service import require_not_paused
from monitor_kernel.services.base import BaseService
from monitor_kernel.services.event_recorder import EventRecorder

logger = get_logger("services.disbursement")


class DisbursementService(BaseService[Recipient]):
    """Executes top-ups for a candidate list."""

    def __init__(
        self,
        session: Session,
        ledger: LedgerClient,
        clock: Clock | None = None,
        events: EventRecorder | None = None,
    ):
        super().__init__(session)
        self._ledger = ledger
        self._clock = clock or SystemClock()
        self._events = events or EventRecorder(session, self._clock)
        self._monitor = MonitorSelector(session)

    def _load_recipient(self, address: str) -> Recipient | None:
        return self.session.execute(
            select(Recipient).where(Recipient.address == address)
        ).scalar_one_or_none()

    def top_up(
        self,
        candidates: Sequence[str],
        work_budget: WorkBudget | None = None,
        config: MonitorConfigInfo | None = None,
    ) -> TopUpReport:
        """
        Fund every still-eligible candidate, in order.

        Args:
            candidates: Addresses to consider (typically a selector result).
            work_budget: Per-call work limit.  Unlimited when omitted.
            config: Configuration snapshot to run under.  Read from the
                database when omitted.

        Returns:
            TopUpReport with one outcome per attempted transfer.

        Raises:
            PausedError: The monitor is paused.
        """
        config = config or self._monitor.get_config()
        require_not_paused(config, "top_up")
        budget = work_budget or WorkBudget.unlimited()

        now = self._clock.timestamp()
        outcomes: list[TopUpOutcome] = []
        examined = 0

        for address in candidates:
            examined += 1
            with LogContext.bind(recipient=address):
                outcome = self._process(address, config, now, budget)
            if outcome is not None:
                outcomes.append(outcome)

            budget.charge_candidate()
            if budget.is_exhausted() and examined < len(candidates):
                logger.warning(
                    "work_budget_exhausted",
                    extra={
                        "examined": examined,
                        "remaining_candidates": len(candidates) - examined,
                        "work_remaining": budget.remaining,
                    },
                )
                break

        report = TopUpReport(outcomes=tuple(outcomes), examined=examined)
        logger.info(
            "top_up_completed",
            extra={
                "config_version": config.version,
                "candidates": len(candidates),
                "examined": examined,
                "funded": len(report.funded),
                "failed": len(report.failed),
            },
        )
        return report

    def _process(
        self,
        address: str,
        config: MonitorConfigInfo,
        now: int,
        budget: WorkBudget,
    ) -> TopUpOutcome | None:
        recipient = self._load_recipient(address)
        if recipient is None:
            logger.debug("top_up_skipped", extra={"reason": "unknown_recipient"})
            return None

        balance = self._ledger.balance_of(address)
        if not needs_top_up(
            recipient_to_dto(recipient),
            balance,
            config.min_wait_period_seconds,
            now,
        ):
            logger.debug(
                "top_up_skipped",
                extra={"reason": "not_eligible", "balance": balance},
            )
            return None

        amount = recipient.top_up_amount
        budget.charge_transfer()
        if self._ledger.transfer(address, amount):
            recipient.last_top_up_time = now
            self.session.flush()
            self._events.record_top_up_succeeded(address, amount)
            return TopUpOutcome(recipient=address, amount=amount, status=TopUpStatus.SUCCEEDED)

        self._events.record_top_up_failed(address, amount)
        return TopUpOutcome(recipient=address, amount=amount, status=TopUpStatus.FAILED)
