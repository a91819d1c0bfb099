"""Unit tests for bar request planning and H4 aggregation."""

from __future__ import annotations

import math
from datetime import UTC, date, datetime, timedelta

import pytest

from dbento.data.clients import aggregate_bars, lookback_days, plan_bar_request
from dbento.data.core import InvalidTimeframeError, Schema, Timeframe, ValidationError
from dbento.data.models import Bar


def _hourly(n: int) -> list[Bar]:
    start = datetime(2024, 3, 15, 0, tzinfo=UTC)
    return [
        Bar(
            timestamp=start + timedelta(hours=i),
            open=100.0 + i,
            high=105.0 + i,
            low=95.0 + i,
            close=101.0 + i,
            volume=10.0 * (i + 1),
        )
        for i in range(n)
    ]


class TestAggregateBars:
    """Test H4 aggregation over consecutive 1h bars."""

    @pytest.mark.parametrize("n", [0, 1, 3, 4, 5, 8, 9, 23])
    def test_yields_ceil_n_over_4(self, n):
        assert len(aggregate_bars(_hourly(n))) == math.ceil(n / 4)

    def test_group_values(self):
        bars = _hourly(4)
        (h4,) = aggregate_bars(bars)
        assert h4.timestamp == bars[0].timestamp
        assert h4.open == bars[0].open
        assert h4.high == max(b.high for b in bars)
        assert h4.low == min(b.low for b in bars)
        assert h4.close == bars[-1].close
        assert h4.volume == sum(b.volume for b in bars)

    def test_trailing_partial_group_aggregated(self):
        bars = _hourly(6)
        h4 = aggregate_bars(bars)
        assert len(h4) == 2
        assert h4[-1].volume == bars[4].volume + bars[5].volume
        assert h4[-1].open == bars[4].open
        assert h4[-1].close == bars[5].close

    def test_groups_follow_received_order_not_clock(self):
        # Starting at 01:00 does not realign groups to 00:00/04:00
        bars = _hourly(5)[1:]
        (h4,) = aggregate_bars(bars)
        assert h4.timestamp == bars[0].timestamp


class TestLookback:
    @pytest.mark.parametrize(
        "timeframe, count, expected",
        [
            (Timeframe.H1, 24, 8),
            (Timeframe.H1, 25, 9),
            (Timeframe.H4, 6, 8),
            (Timeframe.H4, 2, 8),
            (Timeframe.D1, 10, 17),
        ],
    )
    def test_lookback_days(self, timeframe, count, expected):
        assert lookback_days(timeframe, count) == expected


class TestPlanBarRequest:
    def test_h4_requests_hourly_schema_and_aggregation(self):
        plan = plan_bar_request("H4", 2, date(2024, 3, 15))
        assert plan.timeframe is Timeframe.H4
        assert plan.schema is Schema.OHLCV_1H
        assert plan.aggregate_group == 4
        assert plan.start == date(2024, 3, 7)
        assert plan.end == date(2024, 3, 15)

    def test_native_timeframes(self):
        assert plan_bar_request("1h", 5, date(2024, 3, 15)).aggregate_group is None
        assert plan_bar_request(Timeframe.D1, 5, date(2024, 3, 15)).schema is Schema.OHLCV_1D

    def test_unknown_timeframe(self):
        with pytest.raises(InvalidTimeframeError):
            plan_bar_request("15m", 5, date(2024, 3, 15))

    def test_count_must_be_positive(self):
        with pytest.raises(ValidationError):
            plan_bar_request("1h", 0, date(2024, 3, 15))
