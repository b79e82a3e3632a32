"""
EventRecorder -- append-only event log of the monitor.

Responsibility:
    Persists one ``MonitorEvent`` row per observable monitor action and logs
    it.  Peer services call the domain-specific ``record_*`` methods; none of
    them write ``MonitorEvent`` rows directly.

Invariants enforced:
    - seq allocated by SequenceService (strictly increasing).
    - Amounts are stored in the JSON payload as decimal strings so values
      beyond 64 bits round-trip exactly.

Non-goals:
    - Does NOT call ``session.commit()``.  If the caller's transaction rolls
      back, recorded events roll back with it.
"""

from typing import Any

from sqlalchemy.orm import Session

from monitor_kernel.domain.clock import Clock, SystemClock
from monitor_kernel.logging_config import get_logger
from monitor_kernel.models.monitor_event import MonitorEvent, MonitorEventType
from monitor_kernel.services.sequence_service import SequenceService

logger = get_logger("services.events")


class EventRecorder:
    """Records monitor events."""

    def __init__(self, session: Session, clock: Clock | None = None):
        self._session = session
        self._clock = clock or SystemClock()
        self._sequence_service = SequenceService(session)

    def _record(
        self,
        event_type: MonitorEventType,
        *,
        recipient: str | None = None,
        actor: str | None = None,
        payload: dict[str, Any] | None = None,
    ) -> MonitorEvent:
        seq = self._sequence_service.next_value(SequenceService.MONITOR_EVENT)
        event = MonitorEvent(
            seq=seq,
            event_type=event_type.value,
            recipient=recipient,
            actor=actor,
            occurred_at=self._clock.now_utc(),
            payload=payload or {},
        )
        self._session.add(event)
        self._session.flush()

        logger.info(
            event_type.value,
            extra={
                "event_seq": seq,
                "event_recipient": recipient,
                "event_actor": actor,
                **{f"event_{k}": v for k, v in (payload or {}).items()},
            },
        )
        return event

    # Treasury

    def record_funds_added(self, sender: str, amount: int, new_balance: int) -> MonitorEvent:
        return self._record(
            MonitorEventType.FUNDS_ADDED,
            actor=sender,
            payload={"amount": str(amount), "new_balance": str(new_balance)},
        )

    def record_funds_withdrawn(self, caller: str, payee: str, amount: int) -> MonitorEvent:
        return self._record(
            MonitorEventType.FUNDS_WITHDRAWN,
            actor=caller,
            payload={"amount": str(amount), "payee": payee},
        )

    # Disbursement

    def record_top_up_succeeded(self, recipient: str, amount: int) -> MonitorEvent:
        return self._record(
            MonitorEventType.TOP_UP_SUCCEEDED,
            recipient=recipient,
            payload={"amount": str(amount)},
        )

    def record_top_up_failed(self, recipient: str, amount: int) -> MonitorEvent:
        return self._record(
            MonitorEventType.TOP_UP_FAILED,
            recipient=recipient,
            payload={"amount": str(amount)},
        )

    # Configuration

    def record_trigger_updated(self, caller: str, old: str | None, new: str) -> MonitorEvent:
        return self._record(
            MonitorEventType.TRIGGER_UPDATED,
            actor=caller,
            payload={"old_trigger": old, "new_trigger": new},
        )

    def record_min_wait_period_updated(self, caller: str, old: int, new: int) -> MonitorEvent:
        return self._record(
            MonitorEventType.MIN_WAIT_PERIOD_UPDATED,
            actor=caller,
            payload={"old_min_wait_period": old, "new_min_wait_period": new},
        )

    def record_ownership_transfer_requested(self, owner: str, to: str) -> MonitorEvent:
        return self._record(
            MonitorEventType.OWNERSHIP_TRANSFER_REQUESTED,
            actor=owner,
            payload={"from": owner, "to": to},
        )

    def record_ownership_transferred(self, old_owner: str, new_owner: str) -> MonitorEvent:
        return self._record(
            MonitorEventType.OWNERSHIP_TRANSFERRED,
            actor=new_owner,
            payload={"from": old_owner, "to": new_owner},
        )

    def record_paused(self, caller: str) -> MonitorEvent:
        return self._record(MonitorEventType.PAUSED, actor=caller)

    def record_unpaused(self, caller: str) -> MonitorEvent:
        return self._record(MonitorEventType.UNPAUSED, actor=caller)
