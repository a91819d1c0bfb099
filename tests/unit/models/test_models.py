"""Unit tests for data models."""

from datetime import UTC, datetime, timedelta

import pytest
from pydantic import ValidationError

from dbento.data.core import TradingSession
from dbento.data.models import (
    AdjustmentFactor,
    Bar,
    BatchJob,
    Quote,
    RangeResult,
    SecurityRecord,
    SessionInfo,
)


def test_bar_valid():
    """Test valid bar creation."""
    bar = Bar(
        timestamp=datetime(2024, 1, 1, 0, 0, tzinfo=UTC),
        open=4500.25,
        high=4510.0,
        low=4495.5,
        close=4505.75,
        volume=1200,
    )
    assert bar.open == 4500.25
    assert bar.high == 4510.0
    assert bar.low == 4495.5
    assert bar.close == 4505.75
    assert bar.volume == 1200


def test_bar_frozen():
    """Test bar is immutable."""
    bar = Bar(
        timestamp=datetime(2024, 1, 1, tzinfo=UTC),
        open=1.0,
        high=2.0,
        low=0.5,
        close=1.5,
        volume=10,
    )
    with pytest.raises(ValidationError):
        bar.open = 3.0


def test_bar_invalid_high_low():
    """Test validation: high must be >= low."""
    with pytest.raises(ValidationError):
        Bar(
            timestamp=datetime(2024, 1, 1, tzinfo=UTC),
            open=4500.0,
            high=4490.0,  # high < low
            low=4510.0,
            close=4500.0,
            volume=100,
        )


def test_bar_negative_volume():
    with pytest.raises(ValidationError):
        Bar(
            timestamp=datetime(2024, 1, 1, tzinfo=UTC),
            open=1.0,
            high=1.0,
            low=1.0,
            close=1.0,
            volume=-1,
        )


def test_bar_zero_volume():
    """Test volume can be zero."""
    bar = Bar(
        timestamp=datetime(2024, 1, 1, tzinfo=UTC),
        open=1.0,
        high=1.0,
        low=1.0,
        close=1.0,
        volume=0,
    )
    assert bar.volume == 0


class TestQuote:
    def _quote(self, **overrides) -> Quote:
        values = {
            "symbol": "ES",
            "price": 4501.0,
            "bid": 4500.0,
            "ask": 4502.0,
            "timestamp": datetime(2024, 3, 15, 14, 30, tzinfo=UTC),
        }
        values.update(overrides)
        return Quote(**values)

    def test_spread(self):
        assert self._quote().spread == 2.0

    def test_age_at(self):
        quote = self._quote()
        assert quote.age_at(quote.timestamp + timedelta(seconds=90)) == 90.0

    def test_data_age_is_recomputed(self):
        quote = self._quote(timestamp=datetime.now(UTC) - timedelta(seconds=5))
        assert quote.data_age >= 5.0

    def test_symbol_required(self):
        with pytest.raises(ValidationError):
            self._quote(symbol="  ")


def test_session_info_frozen():
    ts = datetime(2024, 3, 15, 9, tzinfo=UTC)
    info = SessionInfo(session=TradingSession.LONDON, session_start=ts, session_end=ts, timestamp=ts)
    with pytest.raises(ValidationError):
        info.session = TradingSession.NY


def test_range_result_schema_alias():
    result = RangeResult(
        data="h\n",
        schema="mbp-1",
        record_count=0,
        symbols=["ES.c.0"],
        start="2024-03-15",
        end="2024-03-15",
    )
    assert result.schema_name == "mbp-1"
    assert result.model_dump(by_alias=True)["schema"] == "mbp-1"


def test_batch_job_keeps_extra_fields():
    job = BatchJob.model_validate(
        {"id": "job-1", "state": "queued", "schema": "trades", "cost_usd": 1.25}
    )
    assert job.schema_name == "trades"
    assert job.model_extra == {"cost_usd": 1.25}


def test_security_record_defaults():
    record = SecurityRecord(dataset="GLBX.MDP3")
    assert record.instrument_id == 0
    assert record.stype == "unknown"
    assert record.symbol is None


def test_adjustment_factor_must_be_positive():
    assert AdjustmentFactor(symbol="AAPL", dataset="XNAS.ITCH").price_factor == 1.0
    with pytest.raises(ValidationError):
        AdjustmentFactor(symbol="AAPL", dataset="XNAS.ITCH", price_factor=0)
