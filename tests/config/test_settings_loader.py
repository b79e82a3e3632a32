"""
Tests for monitor settings loading and bootstrap.
"""

import textwrap

import pytest
import yaml

from monitor_config import (
    DEFAULT_SETTINGS_PATH,
    WatchlistEntryDef,
    bootstrap,
    get_active_settings,
    load_settings,
)
from monitor_config.loader import compute_checksum, parse_amount
from monitor_kernel.domain.ledger import InMemoryLedger
from monitor_kernel.exceptions import DuplicateAddressError, MonitorAlreadyInitializedError
from monitor_kernel.selectors.monitor_selector import MonitorSelector

SETTINGS_YAML = textwrap.dedent(
    """
    monitor:
      address: "0xmonitor"
      owner: "0xowner"
      trigger: "0xtrigger"
      min_wait_period_seconds: 120
    database:
      url: "sqlite:///:memory:"
    work:
      limit: 200000
      per_transfer_cost: 20000
    watchlist:
      - address: "0xa"
        min_balance: 100
        top_up_amount: 50
      - address: "0xb"
        min_balance: "115792089237316195423570985008687907853269984665640564039457584007913129639935"
        top_up_amount: 150
    balances:
      "0xmonitor": 150
      "0xa": 90
    """
)


@pytest.fixture
def settings_file(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text(SETTINGS_YAML)
    return path


class TestLoadSettings:

    def test_parses_all_sections(self, settings_file):
        settings = load_settings(settings_file)

        assert settings.monitor_address == "0xmonitor"
        assert settings.owner == "0xowner"
        assert settings.trigger == "0xtrigger"
        assert settings.min_wait_period_seconds == 120
        assert settings.work.limit == 200_000
        assert settings.work.per_transfer_cost == 20_000
        assert settings.work.per_candidate_cost == 5_000
        assert settings.watchlist[0] == WatchlistEntryDef("0xa", 100, 50)
        assert settings.watchlist[1].min_balance == 2**256 - 1
        assert dict(settings.balances) == {"0xmonitor": 150, "0xa": 90}

    def test_checksum_is_deterministic(self, settings_file):
        first = load_settings(settings_file)
        second = load_settings(settings_file)

        assert first.checksum == second.checksum
        assert first.checksum == compute_checksum(yaml.safe_load(SETTINGS_YAML))
        assert len(first.checksum) == 64

    def test_work_settings_build_budget(self, settings_file):
        budget = load_settings(settings_file).work.new_budget()

        assert budget.remaining == 200_000
        assert budget.per_transfer_cost == 20_000

    def test_missing_work_section_is_unlimited(self, tmp_path):
        path = tmp_path / "s.yaml"
        path.write_text("monitor: {address: m, owner: o, trigger: t}\n")

        settings = load_settings(path)

        assert settings.work.new_budget().is_unlimited
        assert settings.watchlist == ()
        assert settings.min_wait_period_seconds == 0

    def test_missing_required_key(self, tmp_path):
        path = tmp_path / "s.yaml"
        path.write_text("monitor: {address: m, owner: o}\n")

        with pytest.raises(KeyError):
            load_settings(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "absent.yaml")

    @pytest.mark.parametrize("value", [-1, 1.5, "abc", True, "-3"])
    def test_bad_amounts(self, value):
        with pytest.raises(ValueError):
            parse_amount(value, "amount")

    def test_negative_cooldown(self, tmp_path):
        path = tmp_path / "s.yaml"
        path.write_text("monitor: {address: m, owner: o, trigger: t, min_wait_period_seconds: -1}\n")

        with pytest.raises(ValueError):
            load_settings(path)


class TestGetActiveSettings:

    def test_bundled_default(self, monkeypatch):
        monkeypatch.delenv("MONITOR_CONFIG", raising=False)

        settings = get_active_settings()

        assert settings.checksum == load_settings(DEFAULT_SETTINGS_PATH).checksum
        assert len(settings.watchlist) == 2

    def test_env_var(self, monkeypatch, settings_file):
        monkeypatch.setenv("MONITOR_CONFIG", str(settings_file))

        assert get_active_settings().monitor_address == "0xmonitor"

    def test_emits_trace(self, settings_file, captured_logs):
        settings = get_active_settings(settings_file)

        trace = next(r for r in captured_logs() if r["message"] == "MONITOR_CONFIG_TRACE")
        assert trace["checksum"] == settings.checksum
        assert trace["watchlist_size"] == 2


class TestBootstrap:

    def test_bootstrap_installs_config_and_watchlist(self, session, settings_file, deterministic_clock):
        settings = load_settings(settings_file)

        ledger = bootstrap(session, settings, clock=deterministic_clock)

        selector = MonitorSelector(session)
        config = selector.get_config()
        assert config.owner == "0xowner"
        assert config.trigger == "0xtrigger"
        assert config.min_wait_period_seconds == 120
        assert selector.get_watchlist() == ["0xa", "0xb"]
        assert isinstance(ledger, InMemoryLedger)
        assert ledger.own_balance() == 150
        assert ledger.balance_of("0xa") == 90

    def test_bootstrap_with_given_ledger(self, session, settings_file):
        settings = load_settings(settings_file)
        ledger = InMemoryLedger("0xmonitor")

        assert bootstrap(session, settings, ledger) is ledger

    def test_ledger_account_mismatch(self, session, settings_file):
        with pytest.raises(ValueError):
            bootstrap(session, load_settings(settings_file), InMemoryLedger("0xother"))

    def test_bootstrap_twice(self, session, settings_file):
        settings = load_settings(settings_file)
        bootstrap(session, settings)

        with pytest.raises(MonitorAlreadyInitializedError):
            bootstrap(session, settings)

    def test_invalid_watchlist_rejected(self, session, tmp_path):
        path = tmp_path / "s.yaml"
        path.write_text(
            textwrap.dedent(
                """
                monitor: {address: m, owner: o, trigger: t}
                watchlist:
                  - {address: "0xa", min_balance: 1, top_up_amount: 1}
                  - {address: "0xa", min_balance: 1, top_up_amount: 1}
                """
            )
        )

        with pytest.raises(DuplicateAddressError):
            bootstrap(session, load_settings(path))
