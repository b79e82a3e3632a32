"""
monitor_config -- single public entrypoint for monitor settings.

Responsibility:
    Provides the runtime way to obtain deployment settings through
    ``get_active_settings()``.  Settings are YAML files parsed into frozen
    ``MonitorSettings`` dataclasses.

Architecture position:
    Configuration -- sits above ``monitor_kernel``.  The kernel never
    imports from ``monitor_config``; ``bootstrap`` translates settings into
    kernel service calls.

Failure modes:
    - ``FileNotFoundError`` -- the requested settings file does not exist.
    - ``KeyError`` / ``ValueError`` -- missing or malformed fields.

Audit relevance:
    Every successful ``get_active_settings()`` call emits a
    ``MONITOR_CONFIG_TRACE`` log entry with the settings checksum, tying
    each run to the exact settings file that governed it.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from monitor_config.bootstrap import bootstrap, build_ledger
from monitor_config.loader import load_settings
from monitor_config.schema import MonitorSettings, WatchlistEntryDef, WorkSettings

_logger = logging.getLogger("monitor_kernel.config")

DEFAULT_SETTINGS_PATH = Path(__file__).parent / "sets" / "default.yaml"

CONFIG_ENV_VAR = "MONITOR_CONFIG"


def get_active_settings(path: Path | str | None = None) -> MonitorSettings:
    """Load the active settings.

    Resolution order: ``path`` argument, then the ``MONITOR_CONFIG``
    environment variable, then the bundled ``sets/default.yaml``.

    Raises:
        FileNotFoundError: If the resolved file does not exist.
        KeyError: If a required field is missing.
        ValueError: If a field is malformed.
    """
    resolved = Path(path or os.environ.get(CONFIG_ENV_VAR) or DEFAULT_SETTINGS_PATH)
    settings = load_settings(resolved)

    _logger.info(
        "MONITOR_CONFIG_TRACE",
        extra={
            "trace_type": "MONITOR_CONFIG_TRACE",
            "settings_path": str(resolved),
            "checksum": settings.checksum,
            "monitor_address": settings.monitor_address,
            "watchlist_size": len(settings.watchlist),
            "min_wait_period_seconds": settings.min_wait_period_seconds,
        },
    )
    return settings


__all__ = [
    "DEFAULT_SETTINGS_PATH",
    "MonitorSettings",
    "WatchlistEntryDef",
    "WorkSettings",
    "bootstrap",
    "build_ledger",
    "get_active_settings",
    "load_settings",
]
