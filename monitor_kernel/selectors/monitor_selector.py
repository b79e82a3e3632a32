"""
Module: monitor_kernel.selectors.monitor_selector
Responsibility: Read access to monitor configuration, the ordered watchlist,
    and individual recipient records.
Architecture position: Kernel > Selectors.  Read-only.
"""

from sqlalchemy import select

from monitor_kernel.domain.dtos import MonitorConfigInfo, RecipientInfo
from monitor_kernel.exceptions import MonitorNotInitializedError
from monitor_kernel.models.monitor_config import MonitorConfig
from monitor_kernel.models.recipient import Recipient, WatchlistEntry
from monitor_kernel.selectors.base import BaseSelector


def config_to_dto(config: MonitorConfig) -> MonitorConfigInfo:
    """Convert the ORM configuration row to its immutable snapshot."""
    return MonitorConfigInfo(
        version=config.version,
        owner=config.owner,
        pending_owner=config.pending_owner,
        trigger=config.trigger,
        min_wait_period_seconds=config.min_wait_period_seconds,
        paused=config.paused,
    )


def recipient_to_dto(recipient: Recipient) -> RecipientInfo:
    """Convert an ORM recipient row to a RecipientInfo."""
    return RecipientInfo(
        address=recipient.address,
        active=recipient.active,
        min_balance=recipient.min_balance,
        top_up_amount=recipient.top_up_amount,
        last_top_up_time=recipient.last_top_up_time,
    )


class MonitorSelector(BaseSelector[MonitorConfig]):
    """Queries over configuration and watchlist state."""

    def find_config(self) -> MonitorConfigInfo | None:
        config = self.session.execute(select(MonitorConfig).limit(1)).scalar_one_or_none()
        return config_to_dto(config) if config is not None else None

    def get_config(self) -> MonitorConfigInfo:
        """
        Current configuration snapshot.

        Raises:
            MonitorNotInitializedError: If no configuration exists.
        """
        config = self.find_config()
        if config is None:
            raise MonitorNotInitializedError()
        return config

    def get_watchlist(self) -> list[str]:
        """Watched addresses in priority order."""
        stmt = select(WatchlistEntry.address).order_by(WatchlistEntry.position)
        return list(self.session.execute(stmt).scalars())

    def get_watched_recipients(self) -> list[RecipientInfo]:
        """Records of the watched addresses, in priority order."""
        stmt = (
            select(Recipient)
            .join(WatchlistEntry, WatchlistEntry.address == Recipient.address)
            .order_by(WatchlistEntry.position)
        )
        return [recipient_to_dto(r) for r in self.session.execute(stmt).scalars()]

    def get_recipient(self, address: str) -> RecipientInfo:
        """
        Record for ``address``.

        Unknown addresses read as an inactive all-zero record rather than
        raising, matching a plain keyed lookup.
        """
        recipient = self.session.execute(
            select(Recipient).where(Recipient.address == address)
        ).scalar_one_or_none()
        if recipient is None:
            return RecipientInfo.empty(address)
        return recipient_to_dto(recipient)
