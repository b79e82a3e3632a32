#!/usr/bin/env python3
"""
Run simulated upkeep cycles against the in-memory ledger.

Loads monitor settings, bootstraps the monitor (unless the database already
holds one), then runs check/perform cycles as the configured trigger,
advancing a deterministic clock between cycles.  Prints a JSON summary.

Usage:
    python3 scripts/run_cycle.py
    python3 scripts/run_cycle.py --config my_settings.yaml --cycles 3 --interval 3600
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))


def _cycle_summary(index: int, timestamp: int, check, report) -> dict:
    return {
        "cycle": index,
        "timestamp": timestamp,
        "upkeep_needed": check.upkeep_needed,
        "candidates": list(check.candidates),
        "examined": report.examined,
        "funded": list(report.funded),
        "failed": list(report.failed),
    }


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run simulated balance monitor upkeep cycles.")
    parser.add_argument("--config", type=Path, default=None, help="Settings YAML (default: MONITOR_CONFIG or bundled default)")
    parser.add_argument("--db-url", type=str, default=None, help="Override settings database URL")
    parser.add_argument("--cycles", type=int, default=1, help="Number of check/perform cycles")
    parser.add_argument("--interval", type=int, default=None, help="Seconds between cycles (default: min wait period)")
    parser.add_argument("--start-time", type=int, default=None, help="Epoch seconds of the first cycle")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Kernel log level")
    args = parser.parse_args(argv)

    if args.cycles < 1:
        parser.error("--cycles must be at least 1")

    from monitor_config import bootstrap, build_ledger, get_active_settings
    from monitor_kernel.db.engine import (
        create_tables,
        init_engine_from_url,
        reset_engine,
        session_scope,
    )
    from monitor_kernel.domain.clock import DeterministicClock, SystemClock
    from monitor_kernel.domain.dtos import TopUpReport
    from monitor_kernel.exceptions import MonitorKernelError
    from monitor_kernel.logging_config import configure_logging
    from monitor_kernel.selectors.monitor_selector import MonitorSelector
    from monitor_kernel.services.upkeep_service import UpkeepService

    configure_logging(level=args.log_level)

    try:
        settings = get_active_settings(args.config)
    except (FileNotFoundError, KeyError, ValueError) as exc:
        print(f"  ERROR: cannot load settings: {exc}", file=sys.stderr)
        return 1

    clock = DeterministicClock(SystemClock().now())
    if args.start_time is not None:
        clock.set_timestamp(args.start_time)
    interval = args.interval if args.interval is not None else settings.min_wait_period_seconds

    ledger = build_ledger(settings)
    cycles = []

    init_engine_from_url(args.db_url or settings.database_url)
    try:
        create_tables()
        with session_scope() as session:
            if MonitorSelector(session).find_config() is None:
                bootstrap(session, settings, ledger, clock)

        for index in range(args.cycles):
            if index:
                clock.advance(interval)
            with session_scope() as session:
                upkeep = UpkeepService(session, ledger, clock, settings.work.new_budget)
                check = upkeep.check_upkeep()
                if check.upkeep_needed:
                    report = upkeep.perform_upkeep(settings.trigger, check.perform_data)
                else:
                    report = TopUpReport()
            cycles.append(_cycle_summary(index, clock.timestamp(), check, report))
    except MonitorKernelError as exc:
        print(f"  ERROR [{exc.code}]: {exc}", file=sys.stderr)
        return 1
    finally:
        reset_engine()

    watched = [entry.address for entry in settings.watchlist]
    summary = {
        "checksum": settings.checksum,
        "monitor_address": settings.monitor_address,
        "cycles": cycles,
        "balances": {
            address: ledger.balance_of(address)
            for address in [settings.monitor_address, *watched]
        },
    }
    print(json.dumps(summary, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
