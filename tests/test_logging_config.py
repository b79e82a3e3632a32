"""
Tests for structured JSON logging.
"""

import json
import logging
import sys

from monitor_kernel.exceptions import OnlyOwnerError
from monitor_kernel.logging_config import LogContext, StructuredFormatter, get_logger


def _format(record: logging.LogRecord) -> dict:
    return json.loads(StructuredFormatter().format(record))


def _record(msg="event", exc_info=None, **extra) -> logging.LogRecord:
    record = logging.LogRecord("monitor_kernel.test", logging.INFO, __file__, 1, msg, (), exc_info)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:

    def test_basic_fields(self):
        payload = _format(_record("upkeep_checked", candidates=2))

        assert payload["message"] == "upkeep_checked"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "monitor_kernel.test"
        assert payload["candidates"] == 2

    def test_context_fields_merged(self):
        with LogContext.bind(actor="0xtrigger", cycle_id="c-1"):
            payload = _format(_record())

        assert payload["actor"] == "0xtrigger"
        assert payload["cycle_id"] == "c-1"
        assert "actor" not in _format(_record())

    def test_bind_restores_outer_context(self):
        with LogContext.bind(recipient="0xa"):
            with LogContext.bind(recipient="0xb"):
                assert LogContext.get_all()["recipient"] == "0xb"
            assert LogContext.get_all()["recipient"] == "0xa"

    def test_kernel_error_fields(self):
        try:
            raise OnlyOwnerError("0xstranger")
        except OnlyOwnerError:
            payload = _format(_record("failed", exc_info=sys.exc_info()))

        assert payload["exc_type"] == "OnlyOwnerError"
        assert payload["exc_code"] == "ONLY_OWNER"
        assert payload["exc_caller"] == "0xstranger"

    def test_bytes_rendered_as_hex(self):
        assert _format(_record(perform_data=b"\x01\x02"))["perform_data"] == "0102"


def test_get_logger_namespace():
    assert get_logger("services.upkeep").name == "monitor_kernel.services.upkeep"


def test_large_amounts_rendered_as_strings():
    payload = _format(_record(budget=2**60, amount=50, nested={"v": 2**70}))

    assert payload["budget"] == str(2**60)
    assert payload["amount"] == 50
    assert payload["nested"] == {"v": str(2**70)}
