"""Shared fixtures for unit tests.

Responses mimic Databento CSV output: integer nanosecond timestamps and
fixed-point prices scaled by 1e9.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from dbento.data.clients import MarketDataClient, QuoteCache
from dbento.data.connectors.databento import DatabentoRESTConnector
from dbento.data.runtime.rest import HTTPClient

API_KEY = "db-test-key"

MBP1_HEADER = (
    "ts_recv,ts_event,rtype,publisher_id,instrument_id,action,side,depth,price,size,"
    "flags,ts_in_delta,sequence,bid_px_00,ask_px_00,bid_sz_00,ask_sz_00,bid_ct_00,ask_ct_00"
)

OHLCV_HEADER = "ts_event,rtype,publisher_id,instrument_id,open,high,low,close,volume"

# 2024-03-15T14:30:00Z in nanoseconds
BASE_TS_NS = 1710513000 * 1_000_000_000
HOUR_NS = 3600 * 1_000_000_000


def mbp1_row(ts_ns: int, bid: int, ask: int) -> str:
    return f"{ts_ns},{ts_ns},1,1,5602,A,B,0,{bid},1,0,0,1,{bid},{ask},10,12,3,4"


def ohlcv_row(ts_ns: int, open_: float, high: float, low: float, close: float, volume: int) -> str:
    def px(value: float) -> int:
        return int(round(value * 1_000_000_000))

    return f"{ts_ns},34,1,5602,{px(open_)},{px(high)},{px(low)},{px(close)},{volume}"


def hourly_bars_csv(n: int, volumes: list[int] | None = None) -> str:
    volumes = volumes or [100 + i for i in range(n)]
    rows = [
        ohlcv_row(BASE_TS_NS + i * HOUR_NS, 100 + i, 101 + i, 99 + i, 100.5 + i, volumes[i])
        for i in range(n)
    ]
    return "\n".join([OHLCV_HEADER, *rows]) + "\n"


class Wire:
    """Builders for canned venue responses."""

    API_KEY = API_KEY
    MBP1_HEADER = MBP1_HEADER
    OHLCV_HEADER = OHLCV_HEADER
    BASE_TS_NS = BASE_TS_NS
    HOUR_NS = HOUR_NS

    mbp1_row = staticmethod(mbp1_row)
    ohlcv_row = staticmethod(ohlcv_row)
    hourly_bars_csv = staticmethod(hourly_bars_csv)

    @staticmethod
    def mbp1_csv(*rows: str) -> str:
        return "\n".join([MBP1_HEADER, *rows]) + "\n"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def http() -> HTTPClient:
    """HTTPClient whose get/post/post_form are AsyncMocks and never sleeps."""
    client = HTTPClient(API_KEY, sleep=AsyncMock())
    client.get = AsyncMock(return_value="")
    client.post = AsyncMock(return_value="{}")
    client.post_form = AsyncMock(return_value="{}")
    return client


@pytest.fixture
def connector(http: HTTPClient) -> DatabentoRESTConnector:
    return DatabentoRESTConnector(API_KEY, http=http)


@pytest.fixture
def market_client(connector: DatabentoRESTConnector, clock: FakeClock) -> MarketDataClient:
    return MarketDataClient(connector=connector, cache=QuoteCache(ttl=30.0, clock=clock))


@pytest.fixture
def wire() -> type[Wire]:
    return Wire
