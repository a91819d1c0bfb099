"""Data models returned by the engine and connectors.

All models are pydantic v2 and immutable (frozen=True); refreshing a value
means replacing the object, never mutating it.

Model Categories:
    - Market data: Bar, Quote
    - Derived: SessionInfo
    - Venue payloads: RangeResult, BatchJob, BatchDownloadResult
    - Reference data: SecurityRecord, CorporateAction, AdjustmentFactor
"""

from .bar import Bar
from .batch import BatchDownloadResult, BatchJob
from .quote import Quote
from .reference import AdjustmentFactor, CorporateAction, SecurityRecord
from .session import SessionInfo
from .timeseries import RangeResult

__all__ = [
    "AdjustmentFactor",
    "Bar",
    "BatchDownloadResult",
    "BatchJob",
    "CorporateAction",
    "Quote",
    "RangeResult",
    "SecurityRecord",
    "SessionInfo",
]
