"""Trading session data model."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from ..core.enums import TradingSession


class SessionInfo(BaseModel):
    """Session that contains ``timestamp`` and the session's UTC bounds."""

    session: TradingSession
    session_start: datetime
    session_end: datetime
    timestamp: datetime

    model_config = ConfigDict(frozen=True)
