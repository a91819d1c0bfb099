"""Market data access engine.

The three operations calling code consumes:

- get_quote: cached top-of-book quote for a logical symbol
- get_historical_bars: OHLCV bars, with H4 built from 1h bars
- get_session_info: trading-session classification (no network)

Errors from the connector are annotated with the operation and its
parameters and re-raised, never swallowed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, date, datetime, timedelta

from ..connectors.databento.config import BARS_LIMIT, QUOTE_LIMIT, normalize_symbol, resolve_symbol
from ..connectors.databento.rest import DatabentoRESTConnector
from ..core import ClientConfig, DataError, Timeframe, api_key_from_env, classify_session
from ..models import Bar, Quote, SessionInfo
from .bar_pipeline import finalize_bars, plan_bar_request
from .quote_cache import QuoteCache

logger = logging.getLogger(__name__)

# Calendar days of mbp-1 history searched for the latest quote
QUOTE_LOOKBACK_DAYS = 7


def _utcnow() -> datetime:
    return datetime.now(UTC)


class MarketDataClient:
    """Quotes, bars and sessions for continuous futures contracts.

    Each instance owns its own quote cache; nothing is shared between
    instances.

    Example:
        >>> async with MarketDataClient(api_key) as client:
        ...     quote = await client.get_quote("ES")
        ...     bars = await client.get_historical_bars("NQ", "H4", 10)
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        config: ClientConfig | None = None,
        connector: DatabentoRESTConnector | None = None,
        cache: QuoteCache | None = None,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Databento API key; read from DATABENTO_API_KEY when omitted,
                ignored when ``connector`` is given
            config: Transport and cache settings
            connector: Pre-built connector, mainly for tests
            cache: Pre-built quote cache, mainly for tests
            now: Wall-clock source used for request windows

        Raises:
            ConfigurationError: If no connector is given and the key is invalid
        """
        self.config = config or ClientConfig()
        if connector is None:
            key = api_key if api_key is not None else api_key_from_env()
            connector = DatabentoRESTConnector(key, config=self.config)
        self._connector = connector
        self._cache = cache or QuoteCache(ttl=self.config.quote_cache_ttl)
        self._now = now

    @property
    def connector(self) -> DatabentoRESTConnector:
        return self._connector

    @property
    def cache(self) -> QuoteCache:
        return self._cache

    def _today(self) -> date:
        return self._now().astimezone(UTC).date()

    async def get_quote(self, symbol: str) -> Quote:
        """Current quote for ``symbol`` (e.g. "ES"), served from cache while fresh.

        Symbols are case-insensitive; the cache and the returned quote use the
        canonical spelling.

        Raises:
            InvalidSymbolError: If the symbol has no continuous-contract mapping
            NoDataError: If the venue returned no rows
            TransportError: If the request failed after retries
        """
        try:
            key = normalize_symbol(symbol)
            contract = resolve_symbol(key)
            return await self._cache.get_or_fetch(key, lambda: self._fetch_quote(key, contract))
        except DataError as e:
            e.annotate("get_quote", symbol=symbol)
            raise

    async def _fetch_quote(self, symbol: str, contract: str) -> Quote:
        today = self._today()
        start = today - timedelta(days=QUOTE_LOOKBACK_DAYS)
        logger.debug(
            "Fetching quote",
            extra={"symbol": symbol, "contract": contract, "start": start.isoformat()},
        )
        return await self._connector.fetch_quote(
            symbol, contract, start.isoformat(), today.isoformat(), QUOTE_LIMIT
        )

    async def get_historical_bars(
        self, symbol: str, timeframe: Timeframe | str, count: int
    ) -> list[Bar]:
        """Last ``count`` bars for ``symbol``, most recent last.

        Returns fewer than ``count`` bars when fewer exist.

        Raises:
            InvalidSymbolError: If the symbol has no continuous-contract mapping
            InvalidTimeframeError: If the timeframe is not 1h, H4 or 1d
            ValidationError: If count < 1
            NoDataError: If the venue returned no rows
            TransportError: If the request failed after retries
        """
        try:
            key = normalize_symbol(symbol)
            contract = resolve_symbol(key)
            plan = plan_bar_request(timeframe, count, self._today())
            logger.debug(
                "Fetching bars",
                extra={
                    "symbol": key,
                    "schema": plan.schema.value,
                    "start": plan.start.isoformat(),
                    "end": plan.end.isoformat(),
                },
            )
            bars = await self._connector.fetch_bars(
                key,
                contract,
                plan.schema,
                plan.start.isoformat(),
                plan.end.isoformat(),
                BARS_LIMIT,
            )
            return finalize_bars(bars, plan)
        except DataError as e:
            e.annotate("get_historical_bars", symbol=symbol, timeframe=timeframe, count=count)
            raise

    def get_session_info(self, timestamp: datetime | None = None) -> SessionInfo:
        """Trading session for ``timestamp`` (defaults to now)."""
        return classify_session(timestamp if timestamp is not None else self._now())

    async def close(self) -> None:
        await self._connector.close()

    async def __aenter__(self) -> MarketDataClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
