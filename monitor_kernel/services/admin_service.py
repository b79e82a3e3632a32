"""
AdminService -- owner-restricted configuration and pause gating.

Responsibility:
    Creates the single monitor configuration row and is the only writer of
    it afterwards: trigger identity, cooldown length, pause flag, and
    two-step ownership transfer.  Every mutation bumps the configuration
    version and records an event.

Architecture position:
    Kernel > Services -- imperative shell.  Other services read the
    configuration through MonitorSelector and use the guard helpers here
    (``require_owner``, ``require_not_paused``) for access checks.

Invariants enforced:
    - Only the owner mutates configuration.
    - The trigger identity is never the null address.
    - Pause never blocks administration, deposits, or withdrawals.

Failure modes:
    - OnlyOwnerError, InvalidTriggerError, InvalidOwnerError,
      InvalidMinWaitPeriodError, NotPendingOwnerError.
    - PausedError / NotPausedError on redundant pause / unpause.
    - MonitorNotInitializedError before ``initialize``.
    - MonitorAlreadyInitializedError on a second ``initialize``.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from monitor_kernel.db.types import is_null_address
from monitor_kernel.domain.clock import Clock, SystemClock
from monitor_kernel.domain.dtos import MonitorConfigInfo
from monitor_kernel.exceptions import (
    InvalidMinWaitPeriodError,
    InvalidOwnerError,
    InvalidTriggerError,
    MonitorAlreadyInitializedError,
    MonitorNotInitializedError,
    NotPausedError,
    NotPendingOwnerError,
    OnlyOwnerError,
    PausedError,
)
from monitor_kernel.logging_config import get_logger
from monitor_kernel.models.monitor_config import MonitorConfig
from monitor_kernel.selectors.monitor_selector import config_to_dto
from monitor_kernel.services.base import BaseService
from monitor_kernel.services.event_recorder import EventRecorder

logger = get_logger("services.admin")


def require_owner(config: MonitorConfigInfo, caller: str) -> None:
    """Raise OnlyOwnerError unless ``caller`` owns the monitor."""
    if caller != config.owner:
        raise OnlyOwnerError(caller)


def require_not_paused(config: MonitorConfigInfo, operation: str) -> None:
    """Raise PausedError while the monitor is paused."""
    if config.paused:
        raise PausedError(operation)


def _validate_min_wait_period(seconds: int) -> int:
    if isinstance(seconds, bool) or not isinstance(seconds, int) or seconds < 0:
        raise InvalidMinWaitPeriodError(seconds)
    return seconds


class AdminService(BaseService[MonitorConfig]):
    """Access guard and configuration writer."""

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        events: EventRecorder | None = None,
    ):
        super().__init__(session)
        self._clock = clock or SystemClock()
        self._events = events or EventRecorder(session, self._clock)

    def _load(self) -> MonitorConfig:
        config = self.session.execute(select(MonitorConfig).limit(1)).scalar_one_or_none()
        if config is None:
            raise MonitorNotInitializedError()
        return config

    def _load_as_owner(self, caller: str) -> MonitorConfig:
        config = self._load()
        require_owner(config_to_dto(config), caller)
        return config

    def _bump(self, config: MonitorConfig) -> MonitorConfigInfo:
        config.version += 1
        self.session.flush()
        return config_to_dto(config)

    def get_config(self) -> MonitorConfigInfo:
        """Current configuration snapshot."""
        return config_to_dto(self._load())

    def initialize(
        self,
        owner: str,
        trigger: str,
        min_wait_period_seconds: int,
    ) -> MonitorConfigInfo:
        """
        Create the monitor configuration.

        Records TRIGGER_UPDATED (from None) and MIN_WAIT_PERIOD_UPDATED
        (from 0), as the individual setters would.

        Raises:
            MonitorAlreadyInitializedError: Configuration already exists.
            InvalidOwnerError: ``owner`` is null.
            InvalidTriggerError: ``trigger`` is null.
            InvalidMinWaitPeriodError: Negative cooldown.
        """
        existing = self.session.execute(select(MonitorConfig).limit(1)).scalar_one_or_none()
        if existing is not None:
            raise MonitorAlreadyInitializedError(existing.owner)
        if is_null_address(owner):
            raise InvalidOwnerError(owner, "owner cannot be the null address")
        if is_null_address(trigger):
            raise InvalidTriggerError(trigger)
        _validate_min_wait_period(min_wait_period_seconds)

        config = MonitorConfig(
            owner=owner,
            pending_owner=None,
            trigger=trigger,
            min_wait_period_seconds=min_wait_period_seconds,
            paused=False,
            version=1,
        )
        self.session.add(config)
        self.session.flush()

        self._events.record_trigger_updated(owner, None, trigger)
        self._events.record_min_wait_period_updated(owner, 0, min_wait_period_seconds)

        logger.info(
            "monitor_initialized",
            extra={
                "owner": owner,
                "trigger": trigger,
                "min_wait_period_seconds": min_wait_period_seconds,
            },
        )
        return config_to_dto(config)

    def set_trigger(self, caller: str, trigger: str) -> MonitorConfigInfo:
        """
        Replace the identity allowed to run the perform phase.

        Raises:
            OnlyOwnerError: ``caller`` is not the owner.
            InvalidTriggerError: ``trigger`` is null.
        """
        config = self._load_as_owner(caller)
        if is_null_address(trigger):
            raise InvalidTriggerError(trigger)
        old = config.trigger
        config.trigger = trigger
        info = self._bump(config)
        self._events.record_trigger_updated(caller, old, trigger)
        return info

    def set_min_wait_period(self, caller: str, seconds: int) -> MonitorConfigInfo:
        """
        Replace the per-recipient cooldown.

        Raises:
            OnlyOwnerError: ``caller`` is not the owner.
            InvalidMinWaitPeriodError: Negative or non-integer seconds.
        """
        config = self._load_as_owner(caller)
        _validate_min_wait_period(seconds)
        old = config.min_wait_period_seconds
        config.min_wait_period_seconds = seconds
        info = self._bump(config)
        self._events.record_min_wait_period_updated(caller, old, seconds)
        return info

    def pause(self, caller: str) -> MonitorConfigInfo:
        """Suspend check, perform, and top-up."""
        config = self._load_as_owner(caller)
        if config.paused:
            raise PausedError("pause")
        config.paused = True
        info = self._bump(config)
        self._events.record_paused(caller)
        return info

    def unpause(self, caller: str) -> MonitorConfigInfo:
        """Resume check, perform, and top-up."""
        config = self._load_as_owner(caller)
        if not config.paused:
            raise NotPausedError()
        config.paused = False
        info = self._bump(config)
        self._events.record_unpaused(caller)
        return info

    def transfer_ownership(self, caller: str, to: str) -> MonitorConfigInfo:
        """
        Propose a new owner.  Takes effect when ``to`` calls accept_ownership.

        Raises:
            OnlyOwnerError: ``caller`` is not the owner.
            InvalidOwnerError: ``to`` is null or is the caller.
        """
        config = self._load_as_owner(caller)
        if is_null_address(to):
            raise InvalidOwnerError(to, "owner cannot be the null address")
        if to == caller:
            raise InvalidOwnerError(to, "cannot transfer to self")
        config.pending_owner = to
        info = self._bump(config)
        self._events.record_ownership_transfer_requested(caller, to)
        return info

    def accept_ownership(self, caller: str) -> MonitorConfigInfo:
        """
        Complete a proposed ownership transfer.

        Raises:
            NotPendingOwnerError: ``caller`` is not the proposed owner.
        """
        config = self._load()
        if config.pending_owner is None or caller != config.pending_owner:
            raise NotPendingOwnerError(caller, config.pending_owner)
        old_owner = config.owner
        config.owner = caller
        config.pending_owner = None
        info = self._bump(config)
        self._events.record_ownership_transferred(old_owner, caller)
        return info
