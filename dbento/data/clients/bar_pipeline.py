"""Historical bar retrieval planning and aggregation."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, timedelta

from ..connectors.databento.config import SCHEMA_MAP
from ..core import InvalidTimeframeError, Schema, Timeframe, ValidationError
from ..models import Bar

# Extra calendar days added to every lookback to absorb weekends and holidays
LOOKBACK_PADDING_DAYS = 7

# Number of 1h bars in one H4 bar
H4_GROUP_SIZE = 4


@dataclass(frozen=True)
class BarRequestPlan:
    """What to ask the venue for, and what to do with the answer."""

    timeframe: Timeframe
    schema: Schema
    start: date
    end: date
    count: int
    aggregate_group: int | None = None


def parse_timeframe(timeframe: Timeframe | str) -> Timeframe:
    if isinstance(timeframe, Timeframe):
        return timeframe
    tf = Timeframe.from_str(timeframe) if isinstance(timeframe, str) else None
    if tf is None:
        supported = ", ".join(t.value for t in Timeframe)
        raise InvalidTimeframeError(f"Invalid timeframe: {timeframe!r} (supported: {supported})")
    return tf


def lookback_days(timeframe: Timeframe, count: int) -> int:
    """Calendar days needed to cover ``count`` bars, padded for closed days."""
    if timeframe is Timeframe.H1:
        days = math.ceil(count / 24)
    elif timeframe is Timeframe.H4:
        days = math.ceil(count / 6)
    else:
        days = count
    return days + LOOKBACK_PADDING_DAYS


def plan_bar_request(timeframe: Timeframe | str, count: int, today: date) -> BarRequestPlan:
    if count < 1:
        raise ValidationError(f"count must be at least 1, got {count}")
    tf = parse_timeframe(timeframe)
    return BarRequestPlan(
        timeframe=tf,
        schema=SCHEMA_MAP[tf],
        start=today - timedelta(days=lookback_days(tf, count)),
        end=today,
        count=count,
        aggregate_group=H4_GROUP_SIZE if tf is Timeframe.H4 else None,
    )


def aggregate_bars(bars: Sequence[Bar], group_size: int = H4_GROUP_SIZE) -> list[Bar]:
    """Combine consecutive groups of ``group_size`` bars into one bar each.

    Groups follow received order, not clock boundaries. A trailing group
    with fewer members is aggregated from whatever it has.
    """
    if group_size < 1:
        raise ValueError("group_size must be positive")

    out: list[Bar] = []
    for i in range(0, len(bars), group_size):
        chunk = bars[i : i + group_size]
        out.append(
            Bar(
                timestamp=chunk[0].timestamp,
                open=chunk[0].open,
                high=max(b.high for b in chunk),
                low=min(b.low for b in chunk),
                close=chunk[-1].close,
                volume=sum(b.volume for b in chunk),
            )
        )
    return out


def finalize_bars(bars: Sequence[Bar], plan: BarRequestPlan) -> list[Bar]:
    """Aggregate if the plan asks for it, then keep the last ``count`` bars."""
    if plan.aggregate_group:
        bars = aggregate_bars(bars, plan.aggregate_group)
    return list(bars[-plan.count :])
