"""
Tests for the run_cycle simulation CLI.
"""

import json
import textwrap

import pytest

from scripts.run_cycle import main


@pytest.fixture
def settings_file(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text(
        textwrap.dedent(
            """
            monitor:
              address: "0xmonitor"
              owner: "0xowner"
              trigger: "0xtrigger"
              min_wait_period_seconds: 3600
            watchlist:
              - {address: "0xa", min_balance: 100, top_up_amount: 50}
              - {address: "0xb", min_balance: 200, top_up_amount: 150}
            balances:
              "0xmonitor": 150
              "0xa": 90
              "0xb": 50
            """
        )
    )
    return path


def _run(argv, capsys):
    code = main(argv)
    out = capsys.readouterr().out
    return code, json.loads(out) if code == 0 else None


class TestRunCycle:

    def test_single_cycle(self, settings_file, capsys):
        code, summary = _run(["--config", str(settings_file), "--start-time", "1700000000"], capsys)

        assert code == 0
        cycle = summary["cycles"][0]
        assert cycle["timestamp"] == 1_700_000_000
        assert cycle["candidates"] == ["0xa"]
        assert cycle["funded"] == ["0xa"]
        assert summary["balances"] == {"0xmonitor": 100, "0xa": 140, "0xb": 50}

    def test_multiple_cycles_respect_cooldown(self, settings_file, capsys):
        code, summary = _run(
            ["--config", str(settings_file), "--cycles", "3", "--interval", "60"],
            capsys,
        )

        assert code == 0
        assert [c["funded"] for c in summary["cycles"]] == [["0xa"], [], []]
        assert summary["cycles"][1]["upkeep_needed"] is False

    def test_missing_settings_file(self, tmp_path, capsys):
        code = main(["--config", str(tmp_path / "absent.yaml")])

        assert code == 1
        assert "cannot load settings" in capsys.readouterr().err

    def test_kernel_error_reported(self, tmp_path, capsys):
        path = tmp_path / "bad.yaml"
        path.write_text(
            "monitor: {address: m, owner: o, trigger: t}\n"
            "watchlist:\n"
            "  - {address: '0xa', min_balance: 1, top_up_amount: 0}\n"
        )

        code = main(["--config", str(path)])

        assert code == 1
        assert "INVALID_WATCHLIST" in capsys.readouterr().err
