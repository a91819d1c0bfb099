"""Top-of-book quote model."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field


class Quote(BaseModel):
    """Best bid/ask snapshot for a logical symbol.

    ``timestamp`` is the venue event time, not the fetch time. ``data_age``
    is derived on every read and never stored.
    """

    symbol: str = Field(..., min_length=1)
    price: float
    bid: float
    ask: float
    timestamp: datetime

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @property
    def data_age(self) -> float:
        """Seconds elapsed since the venue event time."""
        return self.age_at(datetime.now(UTC))

    def age_at(self, now: datetime) -> float:
        return (now - self.timestamp).total_seconds()

    @property
    def spread(self) -> float:
        return self.ask - self.bid
