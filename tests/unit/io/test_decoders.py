"""Unit tests for response decoders."""

from datetime import UTC, datetime

import pytest

from dbento.data.core import DecodeError
from dbento.data.io import (
    ResponseKind,
    StructuredResponse,
    TabularResponse,
    decode_price,
    decode_response,
    decode_timestamp,
    parse_csv,
    parse_json,
)


class TestParseCSV:
    """Test tabular decoding rules."""

    def test_rows_keyed_by_header(self):
        rows = parse_csv("a,b,c\n1,2,3\n4,5,6\n")
        assert rows == [{"a": "1", "b": "2", "c": "3"}, {"a": "4", "b": "5", "c": "6"}]

    def test_header_only_is_empty(self):
        assert parse_csv("ts_event,bid_px_00,ask_px_00") == []
        assert parse_csv("ts_event,bid_px_00,ask_px_00\n\n") == []

    @pytest.mark.parametrize("text", ["", "   ", "\n\n"])
    def test_blank_input_is_empty(self, text):
        assert parse_csv(text) == []

    def test_blank_lines_dropped(self):
        rows = parse_csv("a,b\n\n1,2\n   \n3,4\n")
        assert [r["a"] for r in rows] == ["1", "3"]

    def test_fields_trimmed(self):
        assert parse_csv(" a , b \n 1 , 2 ") == [{"a": "1", "b": "2"}]

    def test_short_row_padded(self):
        rows = parse_csv("a,b,c\n1")
        assert rows == [{"a": "1", "b": "", "c": ""}]

    def test_extra_values_ignored(self):
        assert parse_csv("a,b\n1,2,3,4") == [{"a": "1", "b": "2"}]

    def test_crlf_line_endings(self):
        assert parse_csv("a,b\r\n1,2\r\n") == [{"a": "1", "b": "2"}]


class TestParseJSON:
    def test_parses_value(self):
        assert parse_json('["GLBX.MDP3", "XNAS.ITCH"]') == ["GLBX.MDP3", "XNAS.ITCH"]

    def test_malformed_wraps_text_and_cause(self):
        with pytest.raises(DecodeError) as exc_info:
            parse_json("{not json")
        assert exc_info.value.text == "{not json"
        assert exc_info.value.__cause__ is not None


class TestDecodePrice:
    """Test fixed-point price decoding."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (4500000000, 4.5),
            ("4500000000", 4.5),
            ("4500000000000", 4500.0),
            ("5245750000000", 5245.75),
            ("18345250000000", 18345.25),
            (" 1 ", 1e-9),
        ],
    )
    def test_divides_by_scale(self, raw, expected):
        assert decode_price(raw) == pytest.approx(expected, rel=1e-12)

    def test_keeps_nine_decimal_digits(self):
        assert decode_price("4500123456789") == pytest.approx(4500.123456789, abs=1e-9)

    def test_decimal_string_passes_through(self):
        assert decode_price("5245.75") == 5245.75

    def test_float_passes_through_like_decimal_string(self):
        assert decode_price(5245.75) == decode_price("5245.75") == 5245.75

    @pytest.mark.parametrize("raw", ["", "  ", "abc"])
    def test_invalid_raises(self, raw):
        with pytest.raises(DecodeError):
            decode_price(raw)


class TestDecodeTimestamp:
    def test_nanoseconds(self):
        ts = decode_timestamp("1710513000123456789")
        assert ts == datetime(2024, 3, 15, 14, 30, 0, 123456, tzinfo=UTC)

    def test_iso_with_nanoseconds(self):
        ts = decode_timestamp("2024-03-15T14:30:00.123456789Z")
        assert ts == datetime(2024, 3, 15, 14, 30, 0, 123456, tzinfo=UTC)

    def test_iso_without_fraction(self):
        assert decode_timestamp("2024-03-15T09:30:00Z") == datetime(2024, 3, 15, 9, 30, tzinfo=UTC)

    @pytest.mark.parametrize("raw", ["", "yesterday"])
    def test_invalid_raises(self, raw):
        with pytest.raises(DecodeError):
            decode_timestamp(raw)


class TestDecodeResponse:
    def test_tabular(self):
        decoded = decode_response("a\n1\n", ResponseKind.TABULAR)
        assert isinstance(decoded, TabularResponse)
        assert decoded.rows == [{"a": "1"}]

    def test_structured(self):
        decoded = decode_response('{"a": 1}', ResponseKind.STRUCTURED)
        assert isinstance(decoded, StructuredResponse)
        assert decoded.value == {"a": 1}

    def test_kind_decides_not_content(self):
        # JSON-looking text on a tabular endpoint is still parsed as CSV
        decoded = decode_response('{"a": 1}', ResponseKind.TABULAR)
        assert isinstance(decoded, TabularResponse)
        assert decoded.rows == []
