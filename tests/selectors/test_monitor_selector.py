"""
Tests for MonitorSelector read access.
"""

import pytest

from monitor_kernel.domain.dtos import RecipientInfo
from monitor_kernel.exceptions import MonitorNotInitializedError
from monitor_kernel.selectors.monitor_selector import MonitorSelector


class TestMonitorSelector:

    def test_no_config(self, session):
        selector = MonitorSelector(session)

        assert selector.find_config() is None
        with pytest.raises(MonitorNotInitializedError):
            selector.get_config()

    def test_get_config(self, session, monitor):
        assert MonitorSelector(session).get_config() == monitor

    def test_watched_recipients_follow_watchlist_order(self, session, install_watchlist):
        install_watchlist(("0xc", 3, 3), ("0xa", 1, 1), ("0xb", 2, 2))

        recipients = MonitorSelector(session).get_watched_recipients()

        assert [r.address for r in recipients] == ["0xc", "0xa", "0xb"]
        assert [r.top_up_amount for r in recipients] == [3, 1, 2]

    def test_dropped_recipient_not_watched(self, session, install_watchlist):
        install_watchlist(("0xa", 1, 1), ("0xb", 2, 2))
        install_watchlist(("0xb", 2, 2))

        selector = MonitorSelector(session)

        assert [r.address for r in selector.get_watched_recipients()] == ["0xb"]
        assert selector.get_recipient("0xa").active is False

    def test_unknown_recipient(self, session):
        assert MonitorSelector(session).get_recipient("0xz") == RecipientInfo.empty("0xz")
