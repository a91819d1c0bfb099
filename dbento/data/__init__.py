"""dbento-data - Async access layer for the Databento historical market-data API."""

from .clients import MarketDataClient, QuoteCache, aggregate_bars
from .connectors.databento import DATASET, SYMBOL_MAP, DatabentoRESTConnector, resolve_symbol
from .core import (
    BatchJobState,
    ClientConfig,
    Compression,
    ConfigurationError,
    DataError,
    DecodeError,
    Encoding,
    InvalidSymbolError,
    InvalidTimeframeError,
    NoDataError,
    ProviderError,
    Schema,
    SType,
    Timeframe,
    TradingSession,
    TransportError,
    TransportErrorKind,
    ValidationError,
    api_key_from_env,
    classify_session,
)
from .io import decode_price, parse_csv, parse_json
from .models import Bar, BatchDownloadResult, BatchJob, Quote, RangeResult, SessionInfo

__version__ = "0.1.0"

__all__ = [
    # Engine
    "MarketDataClient",
    "QuoteCache",
    "aggregate_bars",
    "classify_session",
    # Connector
    "DatabentoRESTConnector",
    "DATASET",
    "SYMBOL_MAP",
    "resolve_symbol",
    # Config
    "ClientConfig",
    "api_key_from_env",
    # Enums
    "BatchJobState",
    "Compression",
    "Encoding",
    "Schema",
    "SType",
    "Timeframe",
    "TradingSession",
    # Errors
    "ConfigurationError",
    "DataError",
    "DecodeError",
    "InvalidSymbolError",
    "InvalidTimeframeError",
    "NoDataError",
    "ProviderError",
    "TransportError",
    "TransportErrorKind",
    "ValidationError",
    # Decoders
    "decode_price",
    "parse_csv",
    "parse_json",
    # Models
    "Bar",
    "BatchDownloadResult",
    "BatchJob",
    "Quote",
    "RangeResult",
    "SessionInfo",
]
