"""Short-TTL quote cache with single-flight refresh."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from ..models import Quote

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 30.0


@dataclass(frozen=True)
class CacheEntry:
    value: Quote
    stored_at: float


class QuoteCache:
    """Per-instance quote cache keyed by logical symbol.

    An entry is fresh while ``clock() - stored_at < ttl``. Entries are only
    ever superseded, never evicted. Concurrent misses for the same symbol
    share one refresh: the first caller fetches, the rest wait on the
    symbol's lock and then read what it stored.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL_SECONDS,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, symbol: str) -> bool:
        return self.get(symbol) is not None

    def get(self, symbol: str) -> Quote | None:
        """Return the cached quote if it is still fresh."""
        entry = self._entries.get(symbol)
        if entry is None or self._clock() - entry.stored_at >= self.ttl:
            return None
        return entry.value

    def put(self, symbol: str, quote: Quote) -> None:
        """Store ``quote``, replacing any previous entry (last writer wins)."""
        self._entries[symbol] = CacheEntry(value=quote, stored_at=self._clock())

    async def get_or_fetch(self, symbol: str, fetch: Callable[[], Awaitable[Quote]]) -> Quote:
        cached = self.get(symbol)
        if cached is not None:
            logger.debug("Quote cache hit", extra={"symbol": symbol})
            return cached

        lock = self._locks.setdefault(symbol, asyncio.Lock())
        async with lock:
            # Another caller may have refreshed while we waited
            cached = self.get(symbol)
            if cached is not None:
                return cached

            logger.debug("Quote cache miss", extra={"symbol": symbol})
            quote = await fetch()
            self.put(symbol, quote)
            return quote
