"""Trading session classification by UTC hour.

Half-open hour windows:

    [0, 7)   Asian   00:00-07:00
    [7, 14)  London  07:00-14:00
    [14, 22) NY      14:00-22:00
    [22, 24) Unknown

For Unknown, ``session_start`` and ``session_end`` are both the input
timestamp. Consumers rely on that, so it is not replaced with the next
Asian open.
"""

from __future__ import annotations

from datetime import UTC, datetime

from ..models.session import SessionInfo
from .enums import TradingSession

# (session, start hour, end hour)
SESSION_WINDOWS: tuple[tuple[TradingSession, int, int], ...] = (
    (TradingSession.ASIAN, 0, 7),
    (TradingSession.LONDON, 7, 14),
    (TradingSession.NY, 14, 22),
)


def _to_utc(timestamp: datetime) -> datetime:
    # Naive datetimes are taken to already be UTC
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=UTC)
    return timestamp.astimezone(UTC)


def classify_session(timestamp: datetime) -> SessionInfo:
    """Map a timestamp to the trading session containing it."""
    ts = _to_utc(timestamp)
    midnight = ts.replace(hour=0, minute=0, second=0, microsecond=0)

    for session, start_hour, end_hour in SESSION_WINDOWS:
        if start_hour <= ts.hour < end_hour:
            return SessionInfo(
                session=session,
                session_start=midnight.replace(hour=start_hour),
                session_end=midnight.replace(hour=end_hour),
                timestamp=ts,
            )

    return SessionInfo(
        session=TradingSession.UNKNOWN,
        session_start=ts,
        session_end=ts,
        timestamp=ts,
    )
