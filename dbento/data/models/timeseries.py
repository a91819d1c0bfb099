"""Raw time-series range result."""

from pydantic import BaseModel, ConfigDict, Field


class RangeResult(BaseModel):
    """Undecoded ``timeseries.get_range`` payload with request echo."""

    data: str
    schema_name: str = Field(..., alias="schema")
    record_count: int = Field(..., ge=0)
    symbols: list[str]
    start: str
    end: str

    model_config = ConfigDict(frozen=True, populate_by_name=True)
