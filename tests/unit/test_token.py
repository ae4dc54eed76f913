"""Tests for page token encoding and decoding."""

import base64
import json
import re
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from keyset_pager.errors.problem_details import InvalidTokenError, TokenDecodeError
from keyset_pager.pagination import PageTokenData, decode_page_token, encode_page_token


def raw_token(payload: str) -> str:
    """Wrap arbitrary text the way tokens are wrapped."""
    return base64.urlsafe_b64encode(payload.encode("utf-8")).rstrip(b"=").decode("ascii")


class TestEncodePageToken:
    """Test page token encoding."""

    @pytest.mark.parametrize("values", [
        [],
        [None],
        [20, None],
        [None, "2020-02-01"],
        [None, None, None],
        [True, False, 0, -1, 2 ** 70],
        [1.5, -0.0, float("inf")],
        [Decimal("10.250"), "text with spaces & symbols/?=", ""],
        [b"\x00\xffbinary", bytearray(b"abc")],
        [datetime(2020, 2, 1, 12, 30, 15, 123456)],
        [datetime(2020, 2, 1, tzinfo=timezone(timedelta(hours=2)))],
        [date(2020, 1, 31), time(23, 59, 59, 5)],
        [timedelta(days=-1, seconds=5, microseconds=7), timedelta(0), timedelta(days=3650)],
        [uuid4(), None, 42],
    ])
    def test_round_trip(self, values):
        """Decoding an encoded token restores the values and their types."""
        decoded = decode_page_token(encode_page_token(values))

        assert decoded == [bytes(v) if isinstance(v, bytearray) else v for v in values]
        assert [type(v) for v in decoded] == [
            bytes if isinstance(v, bytearray) else type(v) for v in values
        ]

    def test_token_is_url_safe(self):
        """Tokens only use the URL-safe base64 alphabet without padding."""
        token = encode_page_token([b"\xfb\xff\xfe" * 10, "???///+++", None])

        assert re.fullmatch(r"[A-Za-z0-9_-]+", token)

    def test_empty_values_give_non_empty_token(self):
        """An empty value list still encodes to a usable token."""
        token = encode_page_token([])

        assert token
        assert decode_page_token(token) == []

    def test_envelope_layout(self):
        """Tokens wrap a versioned list of tagged values."""
        token = encode_page_token([20, None])
        padded = token + "=" * (-len(token) % 4)
        data = PageTokenData.model_validate_json(base64.urlsafe_b64decode(padded))

        assert data.v == 1
        assert data.values == [("int", "20"), ("null", None)]

    def test_unsupported_type(self):
        with pytest.raises(TypeError, match="Cannot encode sort key value of type object"):
            encode_page_token([object()])


class TestDecodePageToken:
    """Test page token decoding failures."""

    @pytest.mark.parametrize("token", [
        "!!!not-base64!!!",
        "a",
        "é",
        raw_token("not json"),
        raw_token("[]"),
        raw_token('{"v": 1, "values": "nope"}'),
        raw_token('{"v": 1, "values": [["int"]]}'),
        raw_token('{"v": 2, "values": []}'),
        raw_token('{"v": 1, "values": [["complex", "1j"]]}'),
        raw_token('{"v": 1, "values": [["int", "twenty"]]}'),
        raw_token('{"v": 1, "values": [["int", 20]]}'),
        raw_token('{"v": 1, "values": [["bool", "true"]]}'),
        raw_token('{"v": 1, "values": [["null", "x"]]}'),
        raw_token('{"v": 1, "values": [["decimal", "ten"]]}'),
        raw_token('{"v": 1, "values": [["datetime", "yesterday"]]}'),
        raw_token('{"v": 1, "values": [["uuid", "123"]]}'),
        raw_token('{"v": 1, "values": [["interval", "1.5"]]}'),
        raw_token('{"v": 1, "values": [["interval", "' + "9" * 30 + '"]]}'),
    ])
    def test_malformed_token(self, token):
        """Malformed tokens raise TokenDecodeError."""
        with pytest.raises(TokenDecodeError) as exc_info:
            decode_page_token(token)

        assert exc_info.value.status == 400
        assert "Invalid page token format" in exc_info.value.detail

    @pytest.mark.parametrize("token", ["", None])
    def test_empty_token(self, token):
        with pytest.raises(TokenDecodeError, match="Empty page token provided"):
            decode_page_token(token)

    def test_decode_error_is_invalid_token_error(self):
        with pytest.raises(InvalidTokenError):
            decode_page_token(raw_token(json.dumps({"v": 1, "values": [["int"]]})))

    def test_padded_token_is_accepted(self):
        """Tokens that kept their base64 padding still decode."""
        token = encode_page_token([1])
        padded = token + "=" * (-len(token) % 4)

        assert decode_page_token(padded) == [1]
