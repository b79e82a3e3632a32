"""
Module: monitor_kernel.models.monitor_event
Responsibility: ORM persistence for the monitor's append-only event log --
    funds received and withdrawn, per-recipient top-up outcomes, and
    configuration changes.
Architecture position: Kernel > Models.  May import from db/ only.

Invariants enforced:
    - seq is strictly increasing, allocated by SequenceService.
    - Rows are written by EventRecorder only and never updated.

Audit relevance:
    This is the only audit trail of disbursement.  Watchlist replacement does
    not write events; reviewers relying on history must read the recipient
    records themselves.
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import JSON, DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from monitor_kernel.db.base import Base
from monitor_kernel.db.types import ADDRESS_LENGTH


class MonitorEventType(str, Enum):
    """Kinds of events the monitor records."""

    # Treasury
    FUNDS_ADDED = "funds_added"
    FUNDS_WITHDRAWN = "funds_withdrawn"

    # Disbursement
    TOP_UP_SUCCEEDED = "top_up_succeeded"
    TOP_UP_FAILED = "top_up_failed"

    # Configuration
    TRIGGER_UPDATED = "trigger_updated"
    MIN_WAIT_PERIOD_UPDATED = "min_wait_period_updated"
    OWNERSHIP_TRANSFER_REQUESTED = "ownership_transfer_requested"
    OWNERSHIP_TRANSFERRED = "ownership_transferred"
    PAUSED = "paused"
    UNPAUSED = "unpaused"


class MonitorEvent(Base):
    """
    A single recorded monitor event.

    Guarantees:
        - seq orders events globally.
        - recipient is set for TOP_UP_* events, None otherwise.
        - payload holds the event-specific fields (amounts as decimal strings).
    """

    __tablename__ = "monitor_events"

    __table_args__ = (
        Index("idx_monitor_event_seq", "seq", unique=True),
        Index("idx_monitor_event_type", "event_type"),
        Index("idx_monitor_event_recipient", "recipient"),
    )

    seq: Mapped[int] = mapped_column(nullable=False)

    event_type: Mapped[MonitorEventType] = mapped_column(
        String(50),
        nullable=False,
    )

    recipient: Mapped[str | None] = mapped_column(
        String(ADDRESS_LENGTH),
        nullable=True,
    )

    actor: Mapped[str | None] = mapped_column(
        String(ADDRESS_LENGTH),
        nullable=True,
    )

    occurred_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    payload: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
    )

    def __repr__(self) -> str:
        return f"<MonitorEvent #{self.seq} {self.event_type}>"
