"""Response decoders.

Pure functions turning response text into rows, JSON values, prices and
timestamps. The endpoint definition decides which decoder applies; content
is never sniffed.

Architecture:
    - parse_csv: header + data rows -> list of string-keyed records
    - parse_json: text -> Python value, DecodeError on malformed input
    - decode_price: fixed-point wire integer (1e-9 units) -> float
    - decode_timestamp: nanoseconds since epoch or ISO-8601 -> aware datetime
    - decode_response: dispatch on ResponseKind into a DecodedResponse
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import Any

from ..core.exceptions import DecodeError

PRICE_SCALE = 1_000_000_000

# Longest text excerpt carried in DecodeError messages
_EXCERPT_LEN = 200

# ISO-8601 with fractional seconds longer than datetime supports
_ISO_FRACTION = re.compile(r"^(?P<head>[^.]+)\.(?P<frac>\d+)(?P<tz>.*)$")


class ResponseKind(str, Enum):
    """How an endpoint's response body is decoded."""

    TABULAR = "tabular"
    STRUCTURED = "structured"
    RAW = "raw"


@dataclass(frozen=True)
class TabularResponse:
    rows: list[dict[str, str]] = field(default_factory=list)
    kind: ResponseKind = ResponseKind.TABULAR


@dataclass(frozen=True)
class StructuredResponse:
    value: Any = None
    kind: ResponseKind = ResponseKind.STRUCTURED


@dataclass(frozen=True)
class RawResponse:
    text: str = ""
    kind: ResponseKind = ResponseKind.RAW


DecodedResponse = TabularResponse | StructuredResponse | RawResponse


def _excerpt(text: str) -> str:
    return text if len(text) <= _EXCERPT_LEN else text[:_EXCERPT_LEN] + "..."


def parse_csv(text: str) -> list[dict[str, str]]:
    """Parse comma-delimited text with a header row into records.

    Blank lines are dropped and every field is trimmed. Rows shorter than the
    header are padded with empty strings; values past the header are ignored.
    Empty text and header-only text both decode to an empty list.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        return []

    headers = [h.strip() for h in lines[0].split(",")]
    rows: list[dict[str, str]] = []
    for line in lines[1:]:
        values = line.split(",")
        rows.append(
            {
                header: values[i].strip() if i < len(values) else ""
                for i, header in enumerate(headers)
            }
        )
    return rows


def parse_json(text: str) -> Any:
    """Parse JSON text, wrapping failures in DecodeError."""
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise DecodeError(
            f"Failed to parse JSON response: {e}: {_excerpt(str(text))!r}", text=text
        ) from e


def decode_price(raw: str | int | float) -> float:
    """Decode a fixed-point price (integer scaled by 1e9) into a float.

    Integers and integer strings are parsed exactly and divided once. Floats
    and strings already in decimal form (``pretty_px`` output such as
    ``"5245.75"``) are taken as decoded prices and pass through.

    >>> decode_price(4500000000)
    4.5
    """
    if isinstance(raw, bool):
        raise DecodeError(f"Invalid price value: {raw!r}")
    if isinstance(raw, int):
        return raw / PRICE_SCALE
    if isinstance(raw, float):
        return raw

    value = raw.strip() if isinstance(raw, str) else ""
    if not value:
        raise DecodeError(f"Invalid price value: {raw!r}", text=str(raw))
    try:
        return int(value) / PRICE_SCALE
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError as e:
        raise DecodeError(f"Invalid price value: {raw!r}", text=value) from e


def decode_volume(raw: str | int) -> float:
    try:
        return float(raw)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Invalid volume value: {raw!r}", text=str(raw)) from e


def decode_timestamp(raw: str | int) -> datetime:
    """Decode a venue timestamp into an aware UTC datetime.

    Accepts integer nanoseconds since the epoch or ISO-8601 text with up to
    nanosecond precision (truncated to microseconds).
    """
    if isinstance(raw, int) or (isinstance(raw, str) and raw.strip().isdigit()):
        nanos = int(raw)
        seconds, rem = divmod(nanos, 1_000_000_000)
        return datetime.fromtimestamp(seconds, tz=UTC) + timedelta(microseconds=rem // 1000)

    value = raw.strip() if isinstance(raw, str) else ""
    if not value:
        raise DecodeError(f"Invalid timestamp value: {raw!r}", text=str(raw))

    value = value.replace("Z", "+00:00")
    match = _ISO_FRACTION.match(value)
    if match:
        value = f"{match['head']}.{match['frac'][:6].ljust(6, '0')}{match['tz']}"
    try:
        ts = datetime.fromisoformat(value)
    except ValueError as e:
        raise DecodeError(f"Invalid timestamp value: {raw!r}", text=str(raw)) from e
    if ts.tzinfo is None:
        return ts.replace(tzinfo=UTC)
    return ts.astimezone(UTC)


def decode_response(text: str, kind: ResponseKind) -> DecodedResponse:
    if kind is ResponseKind.TABULAR:
        return TabularResponse(rows=parse_csv(text))
    if kind is ResponseKind.STRUCTURED:
        return StructuredResponse(value=parse_json(text))
    return RawResponse(text=text)
