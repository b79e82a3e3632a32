"""
Ledger -- capability interface to the external value-transfer system.

Responsibility:
    Defines the two operations the monitor needs from a ledger: read any
    account's balance, and attempt a transfer out of the monitor's own
    account.  ``InMemoryLedger`` is the deterministic implementation used by
    tests, the CLI simulation, and local runs.

Architecture position:
    Kernel > Domain -- collaborator boundary.  Services depend on
    ``LedgerClient`` only, never on a concrete ledger.

Contract for implementations:
    - ``transfer`` reports failure by returning False.  It must not raise
      for an ordinary failed transfer (insufficient funds, rejecting
      recipient); a batch of top-ups continues past a failed transfer.
    - ``balance_of`` is side-effect free.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from monitor_kernel.db.types import validate_amount


class LedgerClient(ABC):
    """Ledger access bound to the monitor's own account."""

    @property
    @abstractmethod
    def account(self) -> str:
        """Address of the monitor's own (treasury) account."""
        ...

    @abstractmethod
    def balance_of(self, address: str) -> int:
        """Current balance of ``address`` in base units."""
        ...

    @abstractmethod
    def transfer(self, to: str, amount: int) -> bool:
        """Send ``amount`` from the monitor's account to ``to``.

        Returns:
            True if the ledger applied the transfer, False otherwise.
        """
        ...

    def own_balance(self) -> int:
        """Balance of the monitor's own account -- the funding budget."""
        return self.balance_of(self.account)


@dataclass(frozen=True)
class TransferRecord:
    """One attempted transfer on an InMemoryLedger."""

    to: str
    amount: int
    succeeded: bool


class InMemoryLedger(LedgerClient):
    """
    Deterministic in-process ledger.

    Guarantees:
        - Balances default to 0 for unknown addresses.
        - A transfer fails (returns False, moves nothing) when the monitor
          balance is below the amount or the recipient has been marked as
          rejecting with ``reject_transfers_to``.
        - Every attempt is appended to ``transfers`` in call order.
    """

    def __init__(self, account: str, balances: dict[str, int] | None = None):
        self._account = account
        self._balances: dict[str, int] = {}
        self._rejecting: set[str] = set()
        self.transfers: list[TransferRecord] = []
        for address, amount in (balances or {}).items():
            self.set_balance(address, amount)

    @property
    def account(self) -> str:
        return self._account

    def balance_of(self, address: str) -> int:
        return self._balances.get(address, 0)

    def set_balance(self, address: str, amount: int) -> None:
        """Overwrite the balance of ``address``."""
        self._balances[address] = validate_amount(amount)

    def credit(self, address: str, amount: int) -> int:
        """Add ``amount`` to ``address`` (e.g. a deposit arriving); returns the new balance."""
        validate_amount(amount)
        self._balances[address] = self.balance_of(address) + amount
        return self._balances[address]

    def debit(self, address: str, amount: int) -> int:
        """Remove ``amount`` from ``address`` (e.g. the recipient spending funds)."""
        validate_amount(amount)
        current = self.balance_of(address)
        if amount > current:
            raise ValueError(f"Cannot debit {amount} from {address}: balance {current}")
        self._balances[address] = current - amount
        return self._balances[address]

    def reject_transfers_to(self, address: str, rejecting: bool = True) -> None:
        """Make transfers to ``address`` fail (or succeed again)."""
        if rejecting:
            self._rejecting.add(address)
        else:
            self._rejecting.discard(address)

    def transfer(self, to: str, amount: int) -> bool:
        source_balance = self.balance_of(self._account)
        succeeded = amount <= source_balance and to not in self._rejecting
        if succeeded:
            self._balances[self._account] = source_balance - amount
            self._balances[to] = self.balance_of(to) + amount
        self.transfers.append(TransferRecord(to=to, amount=amount, succeeded=succeeded))
        return succeeded
