"""Core enumerations shared by the engine and the venue connector.

Architecture:
    String enums so values can be passed straight through as query
    parameters and serialized without conversion.

Key Types:
    - Timeframe: Bar intervals served by the bar pipeline
    - Schema: Venue record schemas
    - SType: Venue symbology types
    - Encoding / Compression: Batch output formats
    - TradingSession: Named windows of the trading day
"""

from enum import Enum
from typing import Optional

_SECONDS_MAP = {
    "1h": 3600,
    "H4": 14400,
    "1d": 86400,
}

# Accepted spellings that are not enum values
_ALIASES = {
    "4h": "H4",
    "h1": "1h",
    "1H": "1h",
    "D1": "1d",
}


class Timeframe(str, Enum):
    """Bar intervals supported by the historical bar pipeline.

    The venue has no native 4-hour bucket; H4 bars are built from 1-hour bars.
    """

    H1 = "1h"
    H4 = "H4"
    D1 = "1d"

    def __str__(self) -> str:
        return self.value

    @property
    def seconds(self) -> int:
        """Number of seconds in this interval."""
        return _SECONDS_MAP[self.value]

    @classmethod
    def from_str(cls, tf: str) -> Optional["Timeframe"]:
        """Get interval from string value. Returns None if no match."""
        try:
            return cls(_ALIASES.get(tf, tf))
        except ValueError:
            return None


class Schema(str, Enum):
    """Venue record schemas."""

    MBO = "mbo"
    MBP_1 = "mbp-1"
    MBP_10 = "mbp-10"
    TBBO = "tbbo"
    TRADES = "trades"
    OHLCV_1S = "ohlcv-1s"
    OHLCV_1M = "ohlcv-1m"
    OHLCV_1H = "ohlcv-1h"
    OHLCV_1D = "ohlcv-1d"
    OHLCV_EOD = "ohlcv-eod"
    DEFINITION = "definition"
    STATISTICS = "statistics"
    STATUS = "status"
    IMBALANCE = "imbalance"
    CORPORATE_ACTIONS = "corporate_actions"
    ADJUSTMENT = "adjustment"

    def __str__(self) -> str:
        return self.value


class SType(str, Enum):
    """Venue symbology types."""

    RAW_SYMBOL = "raw_symbol"
    INSTRUMENT_ID = "instrument_id"
    CONTINUOUS = "continuous"
    PARENT = "parent"
    NASDAQ = "nasdaq"
    CMS = "cms"
    BATS = "bats"
    SMART = "smart"
    ISIN = "isin"

    def __str__(self) -> str:
        return self.value


class Encoding(str, Enum):
    DBN = "dbn"
    CSV = "csv"
    JSON = "json"

    def __str__(self) -> str:
        return self.value


class Compression(str, Enum):
    NONE = "none"
    ZSTD = "zstd"
    GZIP = "gzip"

    def __str__(self) -> str:
        return self.value


class BatchJobState(str, Enum):
    RECEIVED = "received"
    QUEUED = "queued"
    PROCESSING = "processing"
    DONE = "done"
    EXPIRED = "expired"

    def __str__(self) -> str:
        return self.value


class TradingSession(str, Enum):
    """Named trading-day windows, determined by UTC hour."""

    ASIAN = "Asian"
    LONDON = "London"
    NY = "NY"
    UNKNOWN = "Unknown"

    def __str__(self) -> str:
        return self.value
