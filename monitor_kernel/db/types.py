"""
Module: monitor_kernel.db.types
Responsibility: Helpers for ledger identities and amounts, so every model and
    service applies identical definitions.
Architecture position: Kernel > DB.  May be imported by models/, domain/,
    services/, and selectors/.  MUST NOT import from any of those layers.

Invariants enforced:
    - Addresses are opaque strings; the null identity is None, the empty
      string, or the all-zero 20-byte hex address.
    - Amounts are non-negative ints.  No floats anywhere in the kernel.
"""

ADDRESS_LENGTH = 128

NULL_ADDRESS = "0x" + "0" * 40


def is_null_address(address: str | None) -> bool:
    """True for the null identity, in any hex case."""
    if address is None:
        return True
    stripped = address.strip()
    if not stripped:
        return True
    return stripped.lower() == NULL_ADDRESS


def validate_amount(value: int, field_name: str = "amount") -> int:
    """
    Check that value is a non-negative int.

    Raises:
        TypeError: If value is not an int (bool and float are rejected).
        ValueError: If value is negative.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{field_name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{field_name} must be non-negative, got {value}")
    return value
