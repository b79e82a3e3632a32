"""
Module: monitor_kernel.models.recipient
Responsibility: ORM persistence for the watchlist -- an arena of recipient
    records keyed by address, plus a separate ordered index of the currently
    watched addresses.
Architecture position: Kernel > Models.  May import from db/ only.
    MUST NOT import from services/, selectors/, domain/, or outer layers.

Invariants enforced:
    - address is unique in the record arena (uq_recipient_address).
    - position is unique in the ordered index (uq_watchlist_position) and the
      index holds each address at most once (uq_watchlist_address).
    - Every address in the ordered index has an active Recipient row.  The
      pair is only ever replaced together by WatchlistService.

Failure modes:
    - IntegrityError on a duplicate address or position (only reachable by
      bypassing WatchlistService validation).
"""

from sqlalchemy import Boolean, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from monitor_kernel.db.base import TrackedBase, UIntString
from monitor_kernel.db.types import ADDRESS_LENGTH


class Recipient(TrackedBase):
    """
    Funding parameters and cooldown state of one monitored account.

    Contract:
        A row is created or overwritten whenever its address appears in a
        watchlist replacement, and deactivated (never deleted) when a later
        replacement omits it.  Inactive rows keep their stale values until
        the address is registered again.

    Guarantees:
        - top_up_amount > 0 while active.
        - last_top_up_time is epoch seconds of the last successful transfer,
          0 when never funded since registration.
    """

    __tablename__ = "recipients"

    __table_args__ = (
        UniqueConstraint("address", name="uq_recipient_address"),
        Index("idx_recipient_active", "active"),
    )

    address: Mapped[str] = mapped_column(
        String(ADDRESS_LENGTH),
        nullable=False,
    )

    active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    min_balance: Mapped[int] = mapped_column(
        UIntString(),
        nullable=False,
        default=0,
    )

    top_up_amount: Mapped[int] = mapped_column(
        UIntString(),
        nullable=False,
        default=0,
    )

    last_top_up_time: Mapped[int] = mapped_column(
        nullable=False,
        default=0,
    )

    def __repr__(self) -> str:
        state = "active" if self.active else "inactive"
        return f"<Recipient {self.address} ({state})>"


class WatchlistEntry(TrackedBase):
    """
    One slot of the ordered watchlist.

    Contract:
        position 0 is the highest-priority claim on the treasury budget.
        Positions are contiguous from 0 after every replacement.
    """

    __tablename__ = "watchlist_entries"

    __table_args__ = (
        UniqueConstraint("position", name="uq_watchlist_position"),
        UniqueConstraint("address", name="uq_watchlist_address"),
    )

    position: Mapped[int] = mapped_column(nullable=False)

    address: Mapped[str] = mapped_column(
        String(ADDRESS_LENGTH),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<WatchlistEntry #{self.position}: {self.address}>"
