"""
Perform payload codec.

The check phase hands the trigger an opaque byte string; the perform phase
decodes it back into the candidate list.  The encoding is compact UTF-8
JSON: an array of address strings in selection order.  The payload is only
a hint -- nothing here checks that the addresses are watched.
"""

import json
from collections.abc import Sequence

from monitor_kernel.exceptions import PayloadDecodeError


def encode_candidates(addresses: Sequence[str]) -> bytes:
    """Encode candidate addresses for the perform phase."""
    return json.dumps(list(addresses), separators=(",", ":")).encode("utf-8")


def decode_candidates(payload: bytes) -> list[str]:
    """
    Decode a perform payload.

    Raises:
        PayloadDecodeError: If the bytes are not UTF-8 JSON holding an array
            of strings.
    """
    if not isinstance(payload, (bytes, bytearray)):
        raise PayloadDecodeError(f"expected bytes, got {type(payload).__name__}")
    try:
        decoded = json.loads(payload.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise PayloadDecodeError(str(exc)) from exc
    if not isinstance(decoded, list):
        raise PayloadDecodeError("payload is not an array")
    if not all(isinstance(item, str) for item in decoded):
        raise PayloadDecodeError("payload array must contain only address strings")
    return decoded
