"""Bar (OHLCV) data model."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Bar(BaseModel):
    """One fixed time bucket of trading activity for one instrument.

    Prices are decoded floats; volume is the raw contract count.
    """

    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float = Field(..., ge=0)

    @field_validator("low")
    @classmethod
    def validate_low(cls, v: float, info) -> float:
        """Validate low <= high."""
        if "high" in info.data and v > info.data["high"]:
            raise ValueError("low must be <= high")
        return v

    model_config = ConfigDict(frozen=True)
