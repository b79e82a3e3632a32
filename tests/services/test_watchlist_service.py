"""
Tests for WatchlistService.

Verifies:
- Only the owner can replace the watchlist
- Replacement is all-or-nothing
- Every replacement resets cooldown history, including for addresses that
  stay on the list
- Dropped addresses are deactivated but keep their values
"""

import pytest

from monitor_kernel.domain.dtos import RecipientInfo
from monitor_kernel.exceptions import (
    DuplicateAddressError,
    InvalidWatchListError,
    OnlyOwnerError,
)
from monitor_kernel.models.monitor_event import MonitorEventType
from monitor_kernel.selectors.event_selector import EventSelector
from tests.conftest import MONITOR, OWNER, STRANGER


class TestSetWatchlist:
    """Replacement semantics."""

    def test_installs_watchlist_in_order(self, install_watchlist, watchlist_service):
        result = install_watchlist(("0xb", 200, 150), ("0xa", 100, 50))

        assert result == ["0xb", "0xa"]
        assert watchlist_service.get_watchlist() == ["0xb", "0xa"]

    def test_records_are_active_with_zero_timestamp(self, install_watchlist, watchlist_service):
        install_watchlist(("0xa", 100, 50))

        assert watchlist_service.get_account_info("0xa") == RecipientInfo(
            address="0xa",
            active=True,
            min_balance=100,
            top_up_amount=50,
            last_top_up_time=0,
        )

    def test_only_owner(self, monitor, watchlist_service):
        with pytest.raises(OnlyOwnerError) as exc_info:
            watchlist_service.set_watchlist(STRANGER, ["0xa"], [1], [1])
        assert exc_info.value.caller == STRANGER

    def test_replacement_drops_and_deactivates(self, install_watchlist, watchlist_service):
        install_watchlist(("0xa", 100, 50), ("0xb", 200, 150))

        install_watchlist(("0xc", 10, 5))

        assert watchlist_service.get_watchlist() == ["0xc"]
        dropped = watchlist_service.get_account_info("0xa")
        assert dropped.active is False
        assert dropped.min_balance == 100
        assert dropped.top_up_amount == 50

    def test_re_registration_overwrites_values(self, install_watchlist, watchlist_service):
        install_watchlist(("0xa", 100, 50))
        install_watchlist(("0xa", 300, 70))

        info = watchlist_service.get_account_info("0xa")
        assert info.active is True
        assert (info.min_balance, info.top_up_amount) == (300, 70)

    def test_empty_replacement_clears_watchlist(self, install_watchlist, watchlist_service):
        install_watchlist(("0xa", 100, 50))

        assert install_watchlist() == []
        assert watchlist_service.get_watchlist() == []
        assert watchlist_service.get_account_info("0xa").active is False

    def test_unknown_address_reads_as_empty_record(self, monitor, watchlist_service):
        assert watchlist_service.get_account_info("0xnever") == RecipientInfo.empty("0xnever")

    def test_records_no_events(self, session, install_watchlist):
        before = len(EventSelector(session).list_events())
        install_watchlist(("0xa", 100, 50))
        assert len(EventSelector(session).list_events()) == before

    def test_logs_replacement(self, install_watchlist, captured_logs):
        install_watchlist(("0xa", 100, 50))
        install_watchlist(("0xb", 100, 50))

        records = [r for r in captured_logs() if r["message"] == "watchlist_replaced"]
        assert records[-1]["caller"] == OWNER
        assert records[-1]["previous_size"] == 1
        assert records[-1]["new_size"] == 1
        assert records[-1]["dropped"] == 1


class TestFailClosed:
    """A rejected replacement leaves the previous state untouched."""

    @pytest.mark.parametrize(
        "addresses, min_balances, top_up_amounts, error",
        [
            (["0xc", "0xd"], [1], [1, 1], InvalidWatchListError),
            (["0xc", "0xc"], [1, 1], [1, 1], DuplicateAddressError),
            (["0xc", ""], [1, 1], [1, 1], InvalidWatchListError),
            (["0xc"], [1], [0], InvalidWatchListError),
            (["0xc", 7], [1, 1], [1, 1], InvalidWatchListError),
        ],
    )
    def test_rejected_replacement_changes_nothing(
        self,
        install_watchlist,
        watchlist_service,
        addresses,
        min_balances,
        top_up_amounts,
        error,
    ):
        install_watchlist(("0xa", 100, 50), ("0xb", 200, 150))
        before = [watchlist_service.get_account_info(a) for a in ("0xa", "0xb", "0xc")]

        with pytest.raises(error):
            watchlist_service.set_watchlist(OWNER, addresses, min_balances, top_up_amounts)

        assert watchlist_service.get_watchlist() == ["0xa", "0xb"]
        after = [watchlist_service.get_account_info(a) for a in ("0xa", "0xb", "0xc")]
        assert after == before


class TestCooldownReset:
    """Replacement always clears last_top_up_time."""

    def test_funded_entry_reset_by_replacement(
        self,
        install_watchlist,
        watchlist_service,
        disbursement_service,
        ledger,
        deterministic_clock,
    ):
        ledger.set_balance(MONITOR, 1000)
        install_watchlist(("0xa", 100, 50), ("0xb", 100, 50))
        disbursement_service.top_up(["0xa"])
        assert watchlist_service.get_account_info("0xa").last_top_up_time == deterministic_clock.timestamp()

        install_watchlist(("0xa", 100, 50), ("0xb", 100, 50))

        assert watchlist_service.get_account_info("0xa").last_top_up_time == 0

    def test_reset_makes_entry_immediately_eligible(
        self,
        session,
        install_watchlist,
        disbursement_service,
        ledger,
    ):
        ledger.set_balance(MONITOR, 1000)
        install_watchlist(("0xa", 100, 50))
        disbursement_service.top_up(["0xa"])
        ledger.set_balance("0xa", 0)

        assert disbursement_service.top_up(["0xa"]).funded == ()

        install_watchlist(("0xa", 100, 50))
        assert disbursement_service.top_up(["0xa"]).funded == ("0xa",)

        succeeded = EventSelector(session).list_events(MonitorEventType.TOP_UP_SUCCEEDED)
        assert [e.recipient for e in succeeded] == ["0xa", "0xa"]
