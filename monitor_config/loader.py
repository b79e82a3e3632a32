"""
Settings Loader (``monitor_config.loader``).

Responsibility
--------------
Loads a YAML settings file and parses it into ``monitor_config.schema``
dataclasses.  Runtime callers go through
``monitor_config.get_active_settings()``.

Invariants enforced
-------------------
* Parse errors raise ``ValueError`` or ``KeyError`` with descriptive
  messages; required fields have no silent defaults.
* Amounts are parsed as exact ints.  Decimal strings are accepted so that
  values too large for YAML tooling survive; floats are rejected.
* ``compute_checksum`` is deterministic over the raw parsed document.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError`` propagates.
* Wrongly typed or negative values  -> ``ValueError``.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from monitor_config.schema import MonitorSettings, WatchlistEntryDef, WorkSettings


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_amount(value: Any, field_name: str) -> int:
    """Parse a non-negative integer amount from an int or a decimal string."""
    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be an integer, got {value!r}")
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    if not isinstance(value, int):
        raise ValueError(f"{field_name} must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{field_name} must be non-negative, got {value}")
    return value


def parse_work(data: dict[str, Any] | None) -> WorkSettings:
    """Parse WorkSettings; missing keys take the kernel defaults."""
    if not data:
        return WorkSettings()
    defaults = WorkSettings()
    limit = data.get("limit")
    return WorkSettings(
        limit=parse_amount(limit, "work.limit") if limit is not None else None,
        per_candidate_cost=parse_amount(
            data.get("per_candidate_cost", defaults.per_candidate_cost),
            "work.per_candidate_cost",
        ),
        per_transfer_cost=parse_amount(
            data.get("per_transfer_cost", defaults.per_transfer_cost),
            "work.per_transfer_cost",
        ),
        min_work_for_transfer=parse_amount(
            data.get("min_work_for_transfer", defaults.min_work_for_transfer),
            "work.min_work_for_transfer",
        ),
    )


def parse_watchlist_entry(data: dict[str, Any]) -> WatchlistEntryDef:
    """
    Parse one watchlist entry.

    Raises:
        KeyError: if ``address``, ``min_balance`` or ``top_up_amount`` is missing.
        ValueError: if an amount is not a non-negative integer.
    """
    address = data["address"]
    return WatchlistEntryDef(
        address=str(address),
        min_balance=parse_amount(data["min_balance"], f"{address}.min_balance"),
        top_up_amount=parse_amount(data["top_up_amount"], f"{address}.top_up_amount"),
    )


def parse_settings(data: dict[str, Any], checksum: str = "") -> MonitorSettings:
    """
    Parse the root settings document.

    Duplicate or null watchlist addresses are not rejected here; the
    watchlist service applies its own validation when the list is installed.

    Raises:
        KeyError: if a required key is missing.
        ValueError: if a value has the wrong type.
    """
    monitor = data["monitor"]
    min_wait = monitor.get("min_wait_period_seconds", 0)
    if isinstance(min_wait, bool) or not isinstance(min_wait, int) or min_wait < 0:
        raise ValueError(f"min_wait_period_seconds must be a non-negative integer, got {min_wait!r}")

    balances = tuple(
        (str(address), parse_amount(amount, f"balances.{address}"))
        for address, amount in (data.get("balances") or {}).items()
    )

    return MonitorSettings(
        monitor_address=str(monitor["address"]),
        owner=str(monitor["owner"]),
        trigger=str(monitor["trigger"]),
        min_wait_period_seconds=min_wait,
        database_url=(data.get("database") or {}).get("url", "sqlite:///:memory:"),
        work=parse_work(data.get("work")),
        watchlist=tuple(parse_watchlist_entry(e) for e in data.get("watchlist") or []),
        balances=balances,
        checksum=checksum,
    )


def compute_checksum(data: dict[str, Any]) -> str:
    """SHA-256 of the canonical JSON serialization of ``data``."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()


def load_settings(path: Path) -> MonitorSettings:
    """Load and parse a settings file."""
    data = load_yaml_file(Path(path))
    return parse_settings(data, checksum=compute_checksum(data))
