"""
WorkBudget -- cooperative per-call work limit for disbursement.

Responsibility:
    Stands in for platform resource metering.  The disbursement loop charges
    the budget for every candidate it examines and every transfer it
    attempts, and stops once the remaining units fall below
    ``min_work_for_transfer`` -- leaving enough headroom to finish the call
    cleanly instead of failing part-way through a transfer.

Architecture position:
    Kernel > Domain -- pure, deterministic, injected per call.
"""

from __future__ import annotations

from dataclasses import dataclass

MIN_WORK_FOR_TRANSFER = 55_000
DEFAULT_PER_CANDIDATE_COST = 5_000
DEFAULT_PER_TRANSFER_COST = 30_000


@dataclass
class WorkBudget:
    """
    Mutable work counter for a single disbursement call.

    ``remaining=None`` means unlimited: charges are ignored and the budget
    never reports exhaustion.
    """

    remaining: int | None
    per_candidate_cost: int = DEFAULT_PER_CANDIDATE_COST
    per_transfer_cost: int = DEFAULT_PER_TRANSFER_COST
    min_work_for_transfer: int = MIN_WORK_FOR_TRANSFER

    def __post_init__(self) -> None:
        for name in ("per_candidate_cost", "per_transfer_cost", "min_work_for_transfer"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")
        if self.remaining is not None and self.remaining < 0:
            raise ValueError("remaining must be non-negative")

    @classmethod
    def unlimited(cls) -> WorkBudget:
        return cls(remaining=None)

    @property
    def is_unlimited(self) -> bool:
        return self.remaining is None

    def charge(self, units: int) -> None:
        """Consume ``units``; the counter floors at zero."""
        if self.remaining is not None:
            self.remaining = max(0, self.remaining - units)

    def charge_candidate(self) -> None:
        self.charge(self.per_candidate_cost)

    def charge_transfer(self) -> None:
        self.charge(self.per_transfer_cost)

    def is_exhausted(self) -> bool:
        """True when too little work remains to safely attempt another transfer."""
        return self.remaining is not None and self.remaining < self.min_work_for_transfer
