"""
Tests for the perform payload codec.
"""

import pytest

from monitor_kernel.domain.payload import decode_candidates, encode_candidates
from monitor_kernel.exceptions import PayloadDecodeError


class TestPayload:

    def test_encoding_is_compact_json(self):
        assert encode_candidates(["0xa", "0xb"]) == b'["0xa","0xb"]'

    def test_empty_list(self):
        assert encode_candidates([]) == b"[]"
        assert decode_candidates(b"[]") == []

    def test_decode_preserves_order(self):
        payload = encode_candidates(["0xc", "0xa", "0xb"])
        assert decode_candidates(payload) == ["0xc", "0xa", "0xb"]

    def test_decode_accepts_bytearray(self):
        assert decode_candidates(bytearray(b'["0xa"]')) == ["0xa"]

    @pytest.mark.parametrize(
        "payload",
        [
            b"",
            b"not json",
            b"\xff\xfe",
            b'{"a": 1}',
            b'"0xa"',
            b'["0xa", 1]',
            b"[null]",
        ],
    )
    def test_malformed_payload(self, payload):
        with pytest.raises(PayloadDecodeError) as exc_info:
            decode_candidates(payload)
        assert exc_info.value.code == "PAYLOAD_DECODE_ERROR"

    def test_non_bytes_payload(self):
        with pytest.raises(PayloadDecodeError):
            decode_candidates('["0xa"]')
