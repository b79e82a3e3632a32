"""
WatchlistService -- owner-restricted replacement of the watched recipients.

Responsibility:
    Replaces the ordered watchlist and the recipient records it points at,
    and serves point reads of both.

Architecture position:
    Kernel > Services -- imperative shell over domain.watchlist validation.

Invariants enforced:
    - Fail-closed: the whole replacement is validated before any row is
      touched, so a rejected call changes nothing.
    - Every address in the new list ends up active with
      ``last_top_up_time = 0``, including addresses that were already
      watched -- re-registration always clears cooldown history.
    - Addresses dropped by the replacement are deactivated; their stale
      values stay in place until the address is registered again.
    - The ordered index and the record arena are replaced in the same flush.

Audit relevance:
    No monitor event is recorded for a replacement; only a log line.
"""

from collections.abc import Sequence

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from monitor_kernel.domain.dtos import RecipientInfo
from monitor_kernel.domain.watchlist import validate_watchlist
from monitor_kernel.logging_config import get_logger
from monitor_kernel.models.recipient import Recipient, WatchlistEntry
from monitor_kernel.selectors.monitor_selector import MonitorSelector
from monitor_kernel.services.admin_service import require_owner
from monitor_kernel.services.base import BaseService

logger = get_logger("services.watchlist")


class WatchlistService(BaseService[Recipient]):
    """Writer of the watchlist and its recipient records."""

    def __init__(self, session: Session):
        super().__init__(session)
        self._monitor = MonitorSelector(session)

    def set_watchlist(
        self,
        caller: str,
        addresses: Sequence[str],
        min_balances: Sequence[int],
        top_up_amounts: Sequence[int],
    ) -> list[str]:
        """
        Replace the watchlist.

        Args:
            caller: Must be the monitor owner.
            addresses: New watched addresses, highest priority first.
            min_balances: Balance threshold per address.
            top_up_amounts: Fixed transfer size per address (> 0).

        Returns:
            The new watchlist.

        Raises:
            OnlyOwnerError: ``caller`` is not the owner.
            InvalidWatchListError: Length mismatch, null address, zero or
                negative amount.
            DuplicateAddressError: An address appears twice.
        """
        require_owner(self._monitor.get_config(), caller)
        entries = validate_watchlist(addresses, min_balances, top_up_amounts)

        # Deactivate everything currently watched before re-registering.
        previous = self._monitor.get_watchlist()
        if previous:
            for recipient in self.session.execute(
                select(Recipient).where(Recipient.address.in_(previous))
            ).scalars():
                recipient.active = False

        self.session.execute(delete(WatchlistEntry))
        self.session.flush()

        new_addresses = [entry.address for entry in entries]
        existing = {
            r.address: r
            for r in self.session.execute(
                select(Recipient).where(Recipient.address.in_(new_addresses))
            ).scalars()
        } if new_addresses else {}

        for position, entry in enumerate(entries):
            recipient = existing.get(entry.address)
            if recipient is None:
                recipient = Recipient(address=entry.address)
                self.session.add(recipient)
            recipient.active = True
            recipient.min_balance = entry.min_balance
            recipient.top_up_amount = entry.top_up_amount
            recipient.last_top_up_time = 0
            self.session.add(WatchlistEntry(position=position, address=entry.address))

        self.session.flush()

        logger.info(
            "watchlist_replaced",
            extra={
                "caller": caller,
                "previous_size": len(previous),
                "new_size": len(entries),
                "dropped": len(set(previous) - set(new_addresses)),
            },
        )
        return new_addresses

    def get_watchlist(self) -> list[str]:
        """Watched addresses in priority order."""
        return self._monitor.get_watchlist()

    def get_account_info(self, address: str) -> RecipientInfo:
        """Record for ``address`` (inactive all-zero record if never registered)."""
        return self._monitor.get_recipient(address)
