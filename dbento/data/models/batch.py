"""Batch job models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class BatchJob(BaseModel):
    """Batch job as reported by the venue.

    Only the fields the library reads are declared; anything else the venue
    returns is kept as extra attributes.
    """

    id: str
    state: str
    dataset: str | None = None
    schema_name: str | None = Field(None, alias="schema")
    encoding: str | None = None
    compression: str | None = None
    record_count: int | None = None
    file_count: int | None = None
    total_size: int | None = None
    ts_received: str | None = None
    ts_queued: str | None = None
    ts_process_start: str | None = None
    ts_process_done: str | None = None
    ts_expiration: str | None = None

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)


class BatchDownloadResult(BaseModel):
    """Download readiness for a batch job."""

    job_id: str
    state: str
    message: str
    download_url: str | None = None
    filenames: list[str] = Field(default_factory=list)
    record_count: int | None = None
    file_count: int | None = None
    total_size: int | None = None
    ts_expiration: str | None = None
    error: str | None = None

    model_config = ConfigDict(frozen=True)
