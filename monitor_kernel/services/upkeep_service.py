"""
UpkeepService -- two-phase check/perform protocol for an external trigger.

Responsibility:
    ``check_upkeep`` is the read-only phase: it runs the underfunded
    selector and packages the result as an opaque payload.  ``perform_upkeep``
    is the privileged phase: restricted to the configured trigger identity,
    it decodes a payload and hands the candidates to DisbursementService.

Architecture position:
    Kernel > Services -- orchestration over UnderfundedSelector and
    DisbursementService.

Invariants enforced:
    - No state is carried between the phases.  Whatever happened since the
      check (watchlist replaced, balances moved, another perform ran) is
      caught by disbursement's live re-validation; the payload is a hint.
    - The treasury budget is simulated once, at check time, and is not
      re-verified at perform time.  Two performs from one check cycle can
      attempt more transfers than the balance covers; the surplus transfers
      fail and are recorded as TOP_UP_FAILED.

Failure modes:
    - check_upkeep: PausedError.
    - perform_upkeep: OnlyTriggerError (checked first), PausedError,
      PayloadDecodeError.
"""

from uuid import uuid4

from sqlalchemy.orm import Session

from monitor_kernel.domain.clock import Clock, SystemClock
from monitor_kernel.domain.dtos import CheckResult, TopUpReport
from monitor_kernel.domain.ledger import LedgerClient
from monitor_kernel.domain.payload import decode_candidates, encode_candidates
from monitor_kernel.domain.work_budget import WorkBudget
from monitor_kernel.exceptions import OnlyTriggerError
from monitor_kernel.logging_config import LogContext, get_logger
from monitor_kernel.selectors.monitor_selector import MonitorSelector
from monitor_kernel.selectors.underfunded_selector import UnderfundedSelector
from monitor_kernel.services.admin_service import require_not_paused
from monitor_kernel.services.disbursement_service import DisbursementService
from monitor_kernel.services.event_recorder import EventRecorder

logger = get_logger("services.upkeep")


class UpkeepService:
    """Coordinator of the check and perform phases."""

    def __init__(
        self,
        session: Session,
        ledger: LedgerClient,
        clock: Clock | None = None,
        work_budget_factory=None,
    ):
        """
        Args:
            session: SQLAlchemy session.
            ledger: Ledger bound to the treasury account.
            clock: Clock for cooldown arithmetic. Defaults to SystemClock.
            work_budget_factory: Zero-argument callable producing a fresh
                WorkBudget for each perform call.  Unlimited when omitted.
        """
        self._session = session
        self._clock = clock or SystemClock()
        self._monitor = MonitorSelector(session)
        self._selector = UnderfundedSelector(session, ledger, self._clock)
        self._disbursement = DisbursementService(
            session,
            ledger,
            self._clock,
            EventRecorder(session, self._clock),
        )
        self._work_budget_factory = work_budget_factory or WorkBudget.unlimited

    def check_upkeep(self, check_data: bytes = b"") -> CheckResult:
        """
        Read-only check phase.

        Args:
            check_data: Opaque trigger input; unused.

        Returns:
            CheckResult with ``upkeep_needed`` true iff at least one
            recipient qualifies, and the encoded candidate list.

        Raises:
            PausedError: The monitor is paused.
        """
        config = self._monitor.get_config()
        require_not_paused(config, "check_upkeep")

        candidates = self._selector.get_underfunded_addresses(config)
        result = CheckResult(
            upkeep_needed=len(candidates) > 0,
            perform_data=encode_candidates(candidates),
            candidates=tuple(candidates),
        )
        logger.info(
            "upkeep_checked",
            extra={
                "config_version": config.version,
                "upkeep_needed": result.upkeep_needed,
                "candidates": len(candidates),
            },
        )
        return result

    def perform_upkeep(
        self,
        caller: str,
        perform_data: bytes,
        work_budget: WorkBudget | None = None,
    ) -> TopUpReport:
        """
        Privileged perform phase.

        Args:
            caller: Must be the configured trigger identity.
            perform_data: Payload from a previous check_upkeep.
            work_budget: Overrides the factory budget for this call.

        Raises:
            OnlyTriggerError: ``caller`` is not the trigger.
            PausedError: The monitor is paused.
            PayloadDecodeError: ``perform_data`` is malformed.
        """
        config = self._monitor.get_config()
        if caller != config.trigger:
            raise OnlyTriggerError(caller, config.trigger)
        require_not_paused(config, "perform_upkeep")

        candidates = decode_candidates(perform_data)
        with LogContext.bind(actor=caller, cycle_id=str(uuid4())):
            report = self._disbursement.top_up(
                candidates,
                work_budget=work_budget or self._work_budget_factory(),
                config=config,
            )
            logger.info(
                "upkeep_performed",
                extra={
                    "config_version": config.version,
                    "candidates": len(candidates),
                    "funded": len(report.funded),
                    "failed": len(report.failed),
                },
            )
        return report
