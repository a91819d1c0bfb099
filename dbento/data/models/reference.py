"""Reference data models: security master, corporate actions, adjustments."""

from pydantic import BaseModel, ConfigDict, Field


class SecurityRecord(BaseModel):
    """Security master entry from ``metadata.list_symbols``."""

    instrument_id: int = 0
    symbol: str | None = None
    dataset: str
    stype: str = "unknown"
    first_available: str | None = None
    last_available: str | None = None
    exchange: str | None = None
    asset_class: str | None = None
    description: str | None = None
    isin: str | None = None
    currency: str | None = None
    contract_size: float | None = None
    tick_size: float | None = None
    expiration: str | None = None

    model_config = ConfigDict(frozen=True)


class CorporateAction(BaseModel):
    """Dividend, split, merger or similar event for one instrument."""

    instrument_id: int = 0
    symbol: str
    dataset: str
    action_type: str | None = None
    effective_date: str | None = None
    announcement_date: str | None = None
    ex_date: str | None = None
    record_date: str | None = None
    payment_date: str | None = None
    amount: float | None = None
    currency: str | None = None
    split_ratio: str | None = None  # e.g. "2:1"
    split_factor: float | None = None
    details: str | None = None

    model_config = ConfigDict(frozen=True)


class AdjustmentFactor(BaseModel):
    """Cumulative price/volume adjustment effective from a date."""

    instrument_id: int = 0
    symbol: str
    dataset: str
    effective_date: str | None = None
    price_factor: float = Field(1.0, gt=0)
    volume_factor: float | None = None
    reason: str | None = None
    action_type: str | None = None

    model_config = ConfigDict(frozen=True)
