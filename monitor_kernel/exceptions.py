"""
Typed Exception Hierarchy for the Monitor Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers of the monitor (an automation trigger, an operator CLI, tests) need
to tell a rejected watchlist apart from an unauthorized caller without
parsing message strings. Every error therefore:
  1. Has its own class (catch by type, not message)
  2. Carries a CODE class attribute (machine-readable, log-safe)
  3. Stores its context as attributes (not just a message string)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    MonitorKernelError (base)
    |
    +-- WatchlistError
    |   +-- InvalidWatchListError
    |   +-- DuplicateAddressError
    |
    +-- AccessError
    |   +-- OnlyOwnerError
    |   +-- OnlyTriggerError
    |   +-- NotPendingOwnerError
    |
    +-- ConfigurationError
    |   +-- InvalidTriggerError
    |   +-- InvalidOwnerError
    |   +-- InvalidMinWaitPeriodError
    |   +-- MonitorNotInitializedError
    |   +-- MonitorAlreadyInitializedError
    |
    +-- PauseError
    |   +-- PausedError
    |   +-- NotPausedError
    |
    +-- PayloadError
    |   +-- PayloadDecodeError
    |
    +-- TreasuryError
        +-- InvalidPayeeError
        +-- InsufficientFundsError
        +-- WithdrawalFailedError

===============================================================================
WHAT IS NOT AN EXCEPTION
===============================================================================

Disbursement is best-effort. A transfer the ledger reports as failed, or a
candidate that is no longer eligible, never raises: the first is recorded as
a TOP_UP_FAILED event, the second is skipped silently. Running out of work
budget mid-batch is a normal, successful return.

===============================================================================
"""


class MonitorKernelError(Exception):
    """
    Base exception for all monitor kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "MONITOR_KERNEL_ERROR"


# Watchlist exceptions


class WatchlistError(MonitorKernelError):
    """Base exception for watchlist replacement errors."""

    code: str = "WATCHLIST_ERROR"


class InvalidWatchListError(WatchlistError):
    """
    Watchlist replacement is malformed.

    Raised for mismatched input lengths, a non-string or null address,
    a zero top-up amount, or a negative amount.
    """

    code: str = "INVALID_WATCHLIST"

    def __init__(self, reason: str, index: int | None = None, address: str | None = None):
        self.reason = reason
        self.index = index
        self.address = address
        location = f" at index {index}" if index is not None else ""
        super().__init__(f"Invalid watchlist{location}: {reason}")


class DuplicateAddressError(WatchlistError):
    """The same address appears more than once in a watchlist replacement."""

    code: str = "DUPLICATE_ADDRESS"

    def __init__(self, address: str, index: int):
        self.address = address
        self.index = index
        super().__init__(f"Duplicate address {address} at index {index}")


# Access exceptions


class AccessError(MonitorKernelError):
    """Base exception for caller authorization failures."""

    code: str = "ACCESS_ERROR"


class OnlyOwnerError(AccessError):
    """Operation is restricted to the monitor owner."""

    code: str = "ONLY_OWNER"

    def __init__(self, caller: str):
        self.caller = caller
        super().__init__(f"Only callable by owner, caller was {caller}")


class OnlyTriggerError(AccessError):
    """Perform phase is restricted to the configured trigger identity."""

    code: str = "ONLY_TRIGGER"

    def __init__(self, caller: str, trigger: str):
        self.caller = caller
        self.trigger = trigger
        super().__init__(f"Only callable by trigger {trigger}, caller was {caller}")


class NotPendingOwnerError(AccessError):
    """Ownership can only be accepted by the proposed owner."""

    code: str = "NOT_PENDING_OWNER"

    def __init__(self, caller: str, pending_owner: str | None):
        self.caller = caller
        self.pending_owner = pending_owner
        super().__init__(
            f"Must be proposed owner to accept ownership "
            f"(pending={pending_owner}, caller={caller})"
        )


# Configuration exceptions


class ConfigurationError(MonitorKernelError):
    """Base exception for monitor configuration errors."""

    code: str = "CONFIGURATION_ERROR"


class InvalidTriggerError(ConfigurationError):
    """Trigger identity must not be the null address."""

    code: str = "INVALID_TRIGGER"

    def __init__(self, trigger: str | None):
        self.trigger = trigger
        super().__init__(f"Invalid trigger address: {trigger!r}")


class InvalidOwnerError(ConfigurationError):
    """Proposed owner is null or already the owner."""

    code: str = "INVALID_OWNER"

    def __init__(self, owner: str | None, reason: str):
        self.owner = owner
        self.reason = reason
        super().__init__(f"Invalid owner {owner!r}: {reason}")


class InvalidMinWaitPeriodError(ConfigurationError):
    """Cooldown must be a non-negative number of seconds."""

    code: str = "INVALID_MIN_WAIT_PERIOD"

    def __init__(self, seconds: int):
        self.seconds = seconds
        super().__init__(f"Invalid min wait period: {seconds}")


class MonitorNotInitializedError(ConfigurationError):
    """No monitor configuration row exists yet."""

    code: str = "MONITOR_NOT_INITIALIZED"

    def __init__(self):
        super().__init__("Monitor configuration has not been initialized")


class MonitorAlreadyInitializedError(ConfigurationError):
    """Monitor configuration can only be created once."""

    code: str = "MONITOR_ALREADY_INITIALIZED"

    def __init__(self, owner: str):
        self.owner = owner
        super().__init__(f"Monitor already initialized (owner={owner})")


# Pause exceptions


class PauseError(MonitorKernelError):
    """Base exception for pause gating."""

    code: str = "PAUSE_ERROR"


class PausedError(PauseError):
    """Operation is suspended while the monitor is paused."""

    code: str = "PAUSED"

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Monitor is paused: {operation} unavailable")


class NotPausedError(PauseError):
    """Unpause requested while the monitor is running."""

    code: str = "NOT_PAUSED"

    def __init__(self):
        super().__init__("Monitor is not paused")


# Payload exceptions


class PayloadError(MonitorKernelError):
    """Base exception for perform payload errors."""

    code: str = "PAYLOAD_ERROR"


class PayloadDecodeError(PayloadError):
    """Perform payload could not be decoded into a list of addresses."""

    code: str = "PAYLOAD_DECODE_ERROR"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Cannot decode perform payload: {reason}")


# Treasury exceptions


class TreasuryError(MonitorKernelError):
    """Base exception for treasury withdrawals."""

    code: str = "TREASURY_ERROR"


class InvalidPayeeError(TreasuryError):
    """Withdrawal payee must not be the null address."""

    code: str = "INVALID_PAYEE"

    def __init__(self, payee: str | None):
        self.payee = payee
        super().__init__(f"Invalid payee: {payee!r}")


class InsufficientFundsError(TreasuryError):
    """Withdrawal amount exceeds the monitor's ledger balance."""

    code: str = "INSUFFICIENT_FUNDS"

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient funds: requested {requested}, available {available}"
        )


class WithdrawalFailedError(TreasuryError):
    """Ledger reported the withdrawal transfer as failed."""

    code: str = "WITHDRAWAL_FAILED"

    def __init__(self, payee: str, amount: int):
        self.payee = payee
        self.amount = amount
        super().__init__(f"Withdrawal of {amount} to {payee} failed")
