"""High-level clients."""

from .bar_pipeline import aggregate_bars, lookback_days, plan_bar_request
from .market_data import MarketDataClient
from .quote_cache import CacheEntry, QuoteCache

__all__ = [
    "CacheEntry",
    "MarketDataClient",
    "QuoteCache",
    "aggregate_bars",
    "lookback_days",
    "plan_bar_request",
]
