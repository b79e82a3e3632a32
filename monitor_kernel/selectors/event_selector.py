"""
Module: monitor_kernel.selectors.event_selector
Responsibility: Read access to the monitor event log.
Architecture position: Kernel > Selectors.  Read-only.
"""

from sqlalchemy import select

from monitor_kernel.domain.dtos import MonitorEventInfo
from monitor_kernel.models.monitor_event import MonitorEvent, MonitorEventType
from monitor_kernel.selectors.base import BaseSelector


class EventSelector(BaseSelector[MonitorEvent]):
    """Queries over recorded monitor events."""

    def list_events(
        self,
        event_type: MonitorEventType | None = None,
        recipient: str | None = None,
        after_seq: int = 0,
        limit: int | None = None,
    ) -> list[MonitorEventInfo]:
        """
        Events in sequence order, optionally filtered.

        Args:
            event_type: Only events of this type.
            recipient: Only events about this recipient.
            after_seq: Only events with seq greater than this value.
            limit: Maximum number of events returned.
        """
        stmt = select(MonitorEvent).where(MonitorEvent.seq > after_seq)
        if event_type is not None:
            stmt = stmt.where(MonitorEvent.event_type == MonitorEventType(event_type).value)
        if recipient is not None:
            stmt = stmt.where(MonitorEvent.recipient == recipient)
        stmt = stmt.order_by(MonitorEvent.seq)
        if limit is not None:
            stmt = stmt.limit(limit)

        return [
            MonitorEventInfo(
                seq=event.seq,
                event_type=MonitorEventType(event.event_type).value,
                recipient=event.recipient,
                actor=event.actor,
                occurred_at=event.occurred_at,
                payload=dict(event.payload or {}),
            )
            for event in self.session.execute(stmt).scalars()
        ]
