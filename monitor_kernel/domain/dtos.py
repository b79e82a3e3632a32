"""
Data Transfer Objects for the monitor kernel.

All DTOs are frozen dataclasses.  Services and selectors return these,
never ORM instances, so callers cannot mutate persisted state by accident.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class RecipientInfo:
    """Live view of one recipient record."""

    address: str
    active: bool
    min_balance: int
    top_up_amount: int
    last_top_up_time: int

    @classmethod
    def empty(cls, address: str) -> RecipientInfo:
        """Default record for an address that was never registered."""
        return cls(
            address=address,
            active=False,
            min_balance=0,
            top_up_amount=0,
            last_top_up_time=0,
        )


@dataclass(frozen=True)
class MonitorConfigInfo:
    """
    Versioned snapshot of the monitor configuration.

    The control loop receives one of these per call instead of reading
    ambient state; ``version`` identifies which administrative state the
    call ran under.
    """

    version: int
    owner: str
    pending_owner: str | None
    trigger: str
    min_wait_period_seconds: int
    paused: bool


@dataclass(frozen=True)
class CheckResult:
    """Outcome of the read-only check phase."""

    upkeep_needed: bool
    perform_data: bytes
    candidates: tuple[str, ...] = ()


class TopUpStatus(str, Enum):
    """Per-recipient disbursement outcome."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class TopUpOutcome:
    """A transfer that was attempted for an eligible candidate."""

    recipient: str
    amount: int
    status: TopUpStatus

    @property
    def succeeded(self) -> bool:
        return self.status == TopUpStatus.SUCCEEDED


@dataclass(frozen=True)
class TopUpReport:
    """
    Result of one disbursement call.

    ``examined`` counts the candidates that were looked at before the call
    returned; ineligible candidates are examined but have no outcome.
    """

    outcomes: tuple[TopUpOutcome, ...] = ()
    examined: int = 0

    @property
    def funded(self) -> tuple[str, ...]:
        return tuple(o.recipient for o in self.outcomes if o.succeeded)

    @property
    def failed(self) -> tuple[str, ...]:
        return tuple(o.recipient for o in self.outcomes if not o.succeeded)


@dataclass(frozen=True)
class MonitorEventInfo:
    """Read-side view of a recorded monitor event."""

    seq: int
    event_type: str
    recipient: str | None
    actor: str | None
    occurred_at: datetime
    payload: dict[str, Any] = field(default_factory=dict)
