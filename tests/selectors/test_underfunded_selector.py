"""
Tests for UnderfundedSelector against the database and in-memory ledger.
"""

from monitor_kernel.selectors.underfunded_selector import UnderfundedSelector
from tests.conftest import MIN_WAIT, MONITOR


class TestUnderfundedSelector:

    def test_scenario(self, session, install_watchlist, ledger, deterministic_clock):
        """Watchlist [A(100, 50), B(200, 150)], treasury 150, A=90, B=50 -> [A]."""
        install_watchlist(("0xa", 100, 50), ("0xb", 200, 150))
        ledger.set_balance(MONITOR, 150)
        ledger.set_balance("0xa", 90)
        ledger.set_balance("0xb", 50)

        selected = UnderfundedSelector(session, ledger, deterministic_clock).get_underfunded_addresses()

        assert selected == ["0xa"]

    def test_greedy_skip(self, session, install_watchlist, ledger, deterministic_clock):
        install_watchlist(("0x1", 100, 60), ("0x2", 100, 50), ("0x3", 100, 40))
        ledger.set_balance(MONITOR, 100)

        selected = UnderfundedSelector(session, ledger, deterministic_clock).get_underfunded_addresses()

        assert selected == ["0x1", "0x3"]

    def test_empty_watchlist(self, session, monitor, ledger, deterministic_clock):
        ledger.set_balance(MONITOR, 100)

        assert UnderfundedSelector(session, ledger, deterministic_clock).get_underfunded_addresses() == []

    def test_cooldown_uses_config_snapshot(
        self,
        session,
        install_watchlist,
        disbursement_service,
        ledger,
        deterministic_clock,
        monitor,
    ):
        install_watchlist(("0xa", 100, 50))
        ledger.set_balance(MONITOR, 1000)
        disbursement_service.top_up(["0xa"])
        ledger.set_balance("0xa", 0)
        selector = UnderfundedSelector(session, ledger, deterministic_clock)

        assert selector.get_underfunded_addresses() == []

        deterministic_clock.advance(MIN_WAIT)
        assert selector.get_underfunded_addresses() == ["0xa"]

    def test_selection_writes_nothing(self, session, install_watchlist, ledger, deterministic_clock):
        install_watchlist(("0xa", 100, 50))
        ledger.set_balance(MONITOR, 1000)
        session.flush()

        UnderfundedSelector(session, ledger, deterministic_clock).get_underfunded_addresses()

        assert not session.new
        assert not session.dirty
        assert ledger.transfers == []
        assert ledger.own_balance() == 1000

    def test_logs_selection(self, session, install_watchlist, ledger, deterministic_clock, captured_logs):
        install_watchlist(("0xa", 100, 50))
        ledger.set_balance(MONITOR, 70)

        UnderfundedSelector(session, ledger, deterministic_clock).get_underfunded_addresses()

        record = next(r for r in captured_logs() if r["message"] == "underfunded_selected")
        assert record["budget"] == 70
        assert record["selected"] == 1
