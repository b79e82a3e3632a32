"""
Selection -- eligibility rules and greedy budget allocation.

Responsibility:
    Decides which watched recipients should be funded this round.  The same
    cooldown/threshold predicates are used by the read-only selector and by
    the disbursement service's execution-time re-check.

Architecture position:
    Kernel > Domain -- pure functional core.  Balances are supplied through
    a callable so the function stays independent of any ledger.

Allocation rule:
    Recipients are visited in watchlist order.  A recipient is selected when
    its cooldown has elapsed, the *remaining simulated* budget covers its
    top-up amount, and its live balance is below its minimum.  The simulated
    budget is then reduced by that amount before the next recipient is
    considered.  This is greedy first fit: an earlier recipient can exhaust
    the budget and exclude a later one that would otherwise qualify, while a
    cheaper recipient further down can still fit.
"""

from collections.abc import Callable, Iterable

from monitor_kernel.domain.dtos import RecipientInfo


def cooldown_elapsed(last_top_up_time: int, min_wait_period_seconds: int, now: int) -> bool:
    """True once ``now`` reaches ``last_top_up_time + min_wait_period_seconds`` (inclusive)."""
    return last_top_up_time + min_wait_period_seconds <= now


def is_underfunded(balance: int, min_balance: int) -> bool:
    """True when ``balance`` is strictly below ``min_balance``."""
    return balance < min_balance


def needs_top_up(
    recipient: RecipientInfo,
    balance: int,
    min_wait_period_seconds: int,
    now: int,
) -> bool:
    """
    Execution-time eligibility: active, cooled down, and underfunded.

    The shared budget is deliberately not part of this predicate.
    """
    return (
        recipient.active
        and cooldown_elapsed(recipient.last_top_up_time, min_wait_period_seconds, now)
        and is_underfunded(balance, recipient.min_balance)
    )


def select_underfunded(
    recipients: Iterable[RecipientInfo],
    budget: int,
    balance_of: Callable[[str], int],
    min_wait_period_seconds: int,
    now: int,
) -> list[str]:
    """
    Greedy, order-dependent selection of recipients to fund.

    Args:
        recipients: Watched recipients in watchlist order.
        budget: Funds available for this round.
        balance_of: Live balance lookup, called only for recipients that
            passed the cooldown and budget tests.
        min_wait_period_seconds: Cooldown between two top-ups.
        now: Current epoch seconds.

    Returns:
        Addresses to fund, in watchlist order.
    """
    selected: list[str] = []
    for recipient in recipients:
        if (
            cooldown_elapsed(recipient.last_top_up_time, min_wait_period_seconds, now)
            and budget >= recipient.top_up_amount
            and is_underfunded(balance_of(recipient.address), recipient.min_balance)
        ):
            selected.append(recipient.address)
            budget -= recipient.top_up_amount
    return selected
