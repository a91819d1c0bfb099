"""Shared Databento connector constants.

This module centralizes the base URL, dataset and symbol mappings used by
the endpoint definitions so the connector itself can stay small.
"""

from __future__ import annotations

from dbento.data.core import InvalidSymbolError, Schema, Timeframe
from dbento.data.core.config import DEFAULT_BASE_URL

BASE_URL = DEFAULT_BASE_URL

# CME Group Market Data Platform 3
DATASET = "GLBX.MDP3"

# Logical symbol -> venue continuous-contract notation (front month)
SYMBOL_MAP: dict[str, str] = {
    "ES": "ES.c.0",  # E-mini S&P 500
    "NQ": "NQ.c.0",  # E-mini Nasdaq-100
}

# Upstream schema for each bar timeframe; H4 is built from 1h bars
SCHEMA_MAP: dict[Timeframe, Schema] = {
    Timeframe.H1: Schema.OHLCV_1H,
    Timeframe.H4: Schema.OHLCV_1H,
    Timeframe.D1: Schema.OHLCV_1D,
}

QUOTE_SCHEMA = Schema.MBP_1
QUOTE_LIMIT = 100
BARS_LIMIT = 1000

# Venue request limit
MAX_SYMBOLS_PER_REQUEST = 2000


def normalize_symbol(symbol: str) -> str:
    """Canonical spelling of a logical symbol (``" es "`` -> ``"ES"``)."""
    return symbol.strip().upper() if isinstance(symbol, str) else symbol


def resolve_symbol(symbol: str) -> str:
    """Map a logical symbol (``ES``) to its continuous contract (``ES.c.0``).

    Raises:
        InvalidSymbolError: If the symbol has no mapping
    """
    key = normalize_symbol(symbol)
    try:
        return SYMBOL_MAP[key]
    except (KeyError, TypeError):
        raise InvalidSymbolError(
            f"Invalid symbol: {symbol!r} (supported: {', '.join(sorted(SYMBOL_MAP))})"
        ) from None
