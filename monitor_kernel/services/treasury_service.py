"""
TreasuryService -- deposits into and withdrawals from the monitor's account.

Responsibility:
    Records funds arriving in the treasury and lets the owner withdraw.
    The treasury balance lives on the ledger; this service never stores it.

Invariants enforced:
    - Withdrawals are owner-only and unaffected by pause.
    - The FUNDS_WITHDRAWN event is recorded before the transfer; a failed
      transfer raises, so the caller's rollback removes the event too.

Failure modes:
    - OnlyOwnerError, InvalidPayeeError, InsufficientFundsError,
      WithdrawalFailedError.
"""

from sqlalchemy.orm import Session

from monitor_kernel.db.types import is_null_address, validate_amount
from monitor_kernel.domain.clock import Clock, SystemClock
from monitor_kernel.domain.ledger import LedgerClient
from monitor_kernel.exceptions import (
    InsufficientFundsError,
    InvalidPayeeError,
    WithdrawalFailedError,
)
from monitor_kernel.logging_config import get_logger
from monitor_kernel.models.monitor_event import MonitorEvent
from monitor_kernel.selectors.monitor_selector import MonitorSelector
from monitor_kernel.services.admin_service import require_owner
from monitor_kernel.services.base import BaseService
from monitor_kernel.services.event_recorder import EventRecorder

logger = get_logger("services.treasury")


class TreasuryService(BaseService[MonitorEvent]):
    """Treasury inflows and owner withdrawals."""

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

    def balance(self) -> int:
        """Current treasury balance on the ledger."""
        return self._ledger.own_balance()

    def record_deposit(self, sender: str, amount: int) -> int:
        """
        Record funds that arrived in the treasury.

        The ledger has already credited the treasury; this records the
        FUNDS_ADDED event with the resulting balance.

        Returns:
            The treasury balance after the deposit.
        """
        validate_amount(amount)
        new_balance = self._ledger.own_balance()
        self._events.record_funds_added(sender, amount, new_balance)
        return new_balance

    def withdraw(self, caller: str, amount: int, payee: str) -> int:
        """
        Send ``amount`` from the treasury to ``payee``.

        Returns:
            The treasury balance after the withdrawal.

        Raises:
            OnlyOwnerError: ``caller`` is not the owner.
            InvalidPayeeError: ``payee`` is null.
            InsufficientFundsError: Treasury holds less than ``amount``.
            WithdrawalFailedError: The ledger rejected the transfer.
        """
        require_owner(self._monitor.get_config(), caller)
        if is_null_address(payee):
            raise InvalidPayeeError(payee)
        validate_amount(amount)

        available = self._ledger.own_balance()
        if amount > available:
            raise InsufficientFundsError(amount, available)

        self._events.record_funds_withdrawn(caller, payee, amount)
        if not self._ledger.transfer(payee, amount):
            logger.error(
                "withdrawal_failed",
                extra={"payee": payee, "amount": amount},
            )
            raise WithdrawalFailedError(payee, amount)

        return self._ledger.own_balance()
