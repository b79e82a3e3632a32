"""
Watchlist -- pure validation of a watchlist replacement.

Responsibility:
    Turns the three parallel input sequences of a replacement into an
    ordered tuple of ``WatchlistEntrySpec`` or raises the typed error the
    replacement would fail with.  Nothing is persisted here; the service
    applies the validated result in one step, so a rejected replacement
    never leaves partial state.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Failure modes (checked entry by entry, in input order):
    - InvalidWatchListError: sequences have different lengths (checked first).
    - DuplicateAddressError: the address already appeared earlier in the list.
    - InvalidWatchListError: non-string or null address, zero top-up
      amount, or a negative/non-integer amount.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from monitor_kernel.db.types import is_null_address
from monitor_kernel.exceptions import DuplicateAddressError, InvalidWatchListError


@dataclass(frozen=True)
class WatchlistEntrySpec:
    """One validated watchlist slot."""

    address: str
    min_balance: int
    top_up_amount: int


def _check_unsigned(value: object, index: int, address: str, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidWatchListError(f"{field_name} must be an integer", index, address)
    if value < 0:
        raise InvalidWatchListError(f"{field_name} must be non-negative", index, address)
    return value


def validate_watchlist(
    addresses: Sequence[str],
    min_balances: Sequence[int],
    top_up_amounts: Sequence[int],
) -> tuple[WatchlistEntrySpec, ...]:
    """
    Validate a watchlist replacement.

    Postconditions:
        - Returned entries preserve input order.
        - Addresses are unique and non-null; every top_up_amount is > 0.

    Raises:
        InvalidWatchListError: See module docstring.
        DuplicateAddressError: See module docstring.
    """
    if not (len(addresses) == len(min_balances) == len(top_up_amounts)):
        raise InvalidWatchListError(
            f"length mismatch: {len(addresses)} addresses, "
            f"{len(min_balances)} min balances, {len(top_up_amounts)} top-up amounts"
        )

    seen: set[str] = set()
    entries: list[WatchlistEntrySpec] = []
    for index, (address, min_balance, top_up_amount) in enumerate(
        zip(addresses, min_balances, top_up_amounts)
    ):
        if address is not None and not isinstance(address, str):
            raise InvalidWatchListError("address must be a string", index, repr(address))
        # Duplicate check runs before the null check for the same entry.
        if address in seen:
            raise DuplicateAddressError(address, index)
        if is_null_address(address):
            raise InvalidWatchListError("null address", index, address)
        min_balance = _check_unsigned(min_balance, index, address, "min_balance")
        top_up_amount = _check_unsigned(top_up_amount, index, address, "top_up_amount")
        if top_up_amount == 0:
            raise InvalidWatchListError("top_up_amount must be greater than zero", index, address)
        seen.add(address)
        entries.append(
            WatchlistEntrySpec(
                address=address,
                min_balance=min_balance,
                top_up_amount=top_up_amount,
            )
        )
    return tuple(entries)
