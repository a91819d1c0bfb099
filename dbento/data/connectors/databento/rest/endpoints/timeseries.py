"""Databento ``timeseries.get_range`` endpoint definitions and adapters.

The same upstream endpoint backs three adapters:

- QuoteAdapter: last mbp-1 row -> Quote
- BarsAdapter: ohlcv-* rows -> list[Bar]
- RangeAdapter: undecoded body -> RangeResult
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError as ModelValidationError

from dbento.data.core import DecodeError, NoDataError
from dbento.data.io import (
    RawResponse,
    ResponseKind,
    TabularResponse,
    decode_price,
    decode_timestamp,
    decode_volume,
)
from dbento.data.models import Bar, Quote, RangeResult
from dbento.data.runtime.rest import ResponseAdapter, RestEndpointSpec

from .common import field

PATH = "/v0/timeseries.get_range"

_QUERY_FIELDS = (
    "dataset",
    "symbols",
    "schema",
    "start",
    "end",
    "stype_in",
    "stype_out",
    "limit",
    "encoding",
)


def build_path(params: dict[str, Any]) -> str:
    return PATH


def build_query(params: dict[str, Any]) -> dict[str, Any]:
    """Build query parameters; ``symbols`` may be a list."""
    q = {name: params.get(name) for name in _QUERY_FIELDS}
    if isinstance(q["symbols"], list | tuple):
        q["symbols"] = ",".join(q["symbols"])
    for name in ("schema", "stype_in", "stype_out", "encoding"):
        if q[name] is not None:
            q[name] = str(q[name])
    return q


SPEC = RestEndpointSpec(
    id="timeseries.get_range",
    method="GET",
    build_path=build_path,
    build_query=build_query,
    response_kind=ResponseKind.TABULAR,
)

RAW_SPEC = RestEndpointSpec(
    id="timeseries.get_range.raw",
    method="GET",
    build_path=build_path,
    build_query=build_query,
    response_kind=ResponseKind.RAW,
)


class QuoteAdapter(ResponseAdapter):
    """Turn the most recent mbp-1 row into a Quote."""

    def parse(self, response: TabularResponse, params: dict[str, Any]) -> Quote:
        symbol = params["symbol"]
        if not response.rows:
            raise NoDataError(f"No quote data available for {symbol}")

        latest = response.rows[-1]
        bid = decode_price(field(latest, "bid_px_00"))
        ask = decode_price(field(latest, "ask_px_00"))
        return Quote(
            symbol=symbol,
            price=(bid + ask) / 2,
            bid=bid,
            ask=ask,
            timestamp=decode_timestamp(field(latest, "ts_event")),
        )


class BarsAdapter(ResponseAdapter):
    """Decode ohlcv rows into Bars in received order."""

    def parse(self, response: TabularResponse, params: dict[str, Any]) -> list[Bar]:
        if not response.rows:
            raise NoDataError(f"No bar data available for {params['symbol']}")

        bars: list[Bar] = []
        for row in response.rows:
            try:
                bars.append(
                    Bar(
                        timestamp=decode_timestamp(field(row, "ts_event")),
                        open=decode_price(field(row, "open")),
                        high=decode_price(field(row, "high")),
                        low=decode_price(field(row, "low")),
                        close=decode_price(field(row, "close")),
                        volume=decode_volume(field(row, "volume")),
                    )
                )
            except ModelValidationError as e:
                raise DecodeError(f"Invalid bar row {row!r}: {e}") from e
        return bars


class RangeAdapter(ResponseAdapter):
    """Wrap the undecoded body with a record count and the request echo."""

    def parse(self, response: RawResponse, params: dict[str, Any]) -> RangeResult:
        symbols = params["symbols"]
        if not response.text.strip():
            raise NoDataError(
                f"No data available for symbols: {','.join(symbols)} "
                f"in date range: {params['start']} to {params['end']}"
            )

        lines = [line for line in response.text.strip().splitlines() if line.strip()]
        return RangeResult(
            data=response.text,
            schema=str(params["schema"]),
            record_count=max(0, len(lines) - 1),
            symbols=list(symbols),
            start=params["start"],
            end=params["end"],
        )
