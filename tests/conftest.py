"""
Pytest fixtures for the monitor kernel test suite.

Provides:
- A fresh in-memory SQLite database per test
- Deterministic clock and in-memory ledger
- Service fixtures wired to the shared session, clock and ledger
- Structured log capture
"""

import json
import logging
from io import StringIO
from typing import Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

import monitor_kernel.models  # noqa: F401
from monitor_kernel.db.base import Base
from monitor_kernel.domain.clock import DeterministicClock
from monitor_kernel.domain.ledger import InMemoryLedger
from monitor_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from monitor_kernel.services.admin_service import AdminService
from monitor_kernel.services.disbursement_service import DisbursementService
from monitor_kernel.services.event_recorder import EventRecorder
from monitor_kernel.services.treasury_service import TreasuryService
from monitor_kernel.services.upkeep_service import UpkeepService
from monitor_kernel.services.watchlist_service import WatchlistService

# Identities used throughout the suite
MONITOR = "0xmonitor"
OWNER = "0xowner"
TRIGGER = "0xtrigger"
STRANGER = "0xstranger"

# One hour cooldown
MIN_WAIT = 3600


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture monitor_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, upkeep):
            upkeep.check_upkeep()
            logs = captured_logs()
            assert any(r["message"] == "upkeep_checked" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("monitor_kernel")
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture(scope="function")
def engine():
    """In-memory SQLite engine with all tables created."""
    eng = create_engine(
        "sqlite+pysqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture(scope="function")
def session(engine) -> Generator[Session, None, None]:
    """Provide a database session for testing."""
    sess = Session(bind=engine, expire_on_commit=False)
    yield sess
    sess.rollback()
    sess.close()


# Clock and ledger fixtures


@pytest.fixture
def deterministic_clock():
    """Provide a deterministic clock for testing."""
    return DeterministicClock()


@pytest.fixture
def ledger():
    """In-memory ledger bound to the monitor's account, initially empty."""
    return InMemoryLedger(MONITOR)


# Service fixtures


@pytest.fixture
def event_recorder(session: Session, deterministic_clock):
    """Provide an EventRecorder instance."""
    return EventRecorder(session, deterministic_clock)


@pytest.fixture
def admin_service(session: Session, deterministic_clock, event_recorder):
    """Provide an AdminService instance."""
    return AdminService(session, deterministic_clock, event_recorder)


@pytest.fixture
def watchlist_service(session: Session):
    """Provide a WatchlistService instance."""
    return WatchlistService(session)


@pytest.fixture
def disbursement_service(session: Session, ledger, deterministic_clock, event_recorder):
    """Provide a DisbursementService instance."""
    return DisbursementService(session, ledger, deterministic_clock, event_recorder)


@pytest.fixture
def upkeep_service(session: Session, ledger, deterministic_clock):
    """Provide an UpkeepService instance with an unlimited work budget."""
    return UpkeepService(session, ledger, deterministic_clock)


@pytest.fixture
def treasury_service(session: Session, ledger, deterministic_clock, event_recorder):
    """Provide a TreasuryService instance."""
    return TreasuryService(session, ledger, deterministic_clock, event_recorder)


@pytest.fixture
def monitor(admin_service):
    """Initialized monitor configuration (owner OWNER, trigger TRIGGER, MIN_WAIT cooldown)."""
    return admin_service.initialize(OWNER, TRIGGER, MIN_WAIT)


@pytest.fixture
def install_watchlist(monitor, watchlist_service):
    """
    Install a watchlist as the owner.

    Usage::

        install_watchlist(("0xa", 100, 50), ("0xb", 200, 150))
    """

    def _install(*entries: tuple[str, int, int]) -> list[str]:
        addresses = [e[0] for e in entries]
        min_balances = [e[1] for e in entries]
        top_up_amounts = [e[2] for e in entries]
        return watchlist_service.set_watchlist(OWNER, addresses, min_balances, top_up_amounts)

    return _install
