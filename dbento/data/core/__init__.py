"""Core components."""

from .config import (
    API_KEY_ENV,
    API_KEY_PREFIX,
    ClientConfig,
    api_key_from_env,
    validate_api_key,
)
from .enums import (
    BatchJobState,
    Compression,
    Encoding,
    Schema,
    SType,
    Timeframe,
    TradingSession,
)
from .exceptions import (
    ConfigurationError,
    DataError,
    DecodeError,
    InvalidSymbolError,
    InvalidTimeframeError,
    NoDataError,
    ProviderError,
    TransportError,
    TransportErrorKind,
    ValidationError,
)
from .sessions import classify_session

__all__ = [
    "API_KEY_ENV",
    "API_KEY_PREFIX",
    "ClientConfig",
    "api_key_from_env",
    "validate_api_key",
    "BatchJobState",
    "Compression",
    "Encoding",
    "Schema",
    "SType",
    "Timeframe",
    "TradingSession",
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
    "classify_session",
]
