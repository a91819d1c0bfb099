"""Databento REST connector.

Direct access to the historical API: quote and bar fetches used by the
market-data engine, plus the generic range, metadata, symbology, reference
and batch endpoints.

Architecture:
    Endpoint specs and adapters are looked up in the endpoint registry and
    executed by RestRunner over a single RESTTransport. Parameter validation
    happens here, before any request is issued.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date, datetime
from typing import Any

from dbento.data.connectors.databento.config import DATASET
from dbento.data.core import (
    BatchJobState,
    ClientConfig,
    Compression,
    DataError,
    Encoding,
    Schema,
    SType,
    ValidationError,
)
from dbento.data.models import (
    AdjustmentFactor,
    Bar,
    BatchDownloadResult,
    BatchJob,
    CorporateAction,
    Quote,
    RangeResult,
    SecurityRecord,
)
from dbento.data.runtime.rest import HTTPClient, RESTTransport, RestRunner, RetryPolicy

from .endpoints import get_endpoint_adapter, get_endpoint_spec
from .endpoints.common import (
    drop_none,
    iso_timestamp,
    normalize_date,
    require,
    strict_date,
    symbol_list,
)

logger = logging.getLogger(__name__)

_ENCODING_EXT = {"dbn": ".dbn", "csv": ".csv", "json": ".json"}
_COMPRESSION_EXT = {"zstd": ".zst", "gzip": ".gz", "none": ""}


class DatabentoRESTConnector:
    """Databento historical REST connector."""

    def __init__(
        self,
        api_key: str,
        *,
        config: ClientConfig | None = None,
        http: HTTPClient | None = None,
    ) -> None:
        """Initialize the connector.

        Args:
            api_key: Databento API key (must start with ``db-``)
            config: Transport settings; defaults to ClientConfig()
            http: Pre-built HTTP client, mainly for tests

        Raises:
            ConfigurationError: If the key is empty or malformed
        """
        self.config = config or ClientConfig()
        self._http = http or HTTPClient(
            api_key,
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            retry_policy=RetryPolicy(
                attempts=self.config.retry_attempts,
                base_delay=self.config.retry_base_delay,
            ),
            user_agent=self.config.user_agent,
        )
        self._transport = RESTTransport(self._http)
        self._runner = RestRunner(self._transport)

    @property
    def base_url(self) -> str:
        return self._transport.base_url

    async def fetch(self, endpoint_id: str, params: dict[str, Any]) -> Any:
        """Fetch data from a Databento REST endpoint.

        Args:
            endpoint_id: Endpoint identifier (e.g., "quote", "metadata.list_schemas")
            params: Request parameters

        Returns:
            Parsed response from the endpoint adapter

        Raises:
            ValueError: If endpoint_id is not found in registry
        """
        spec = get_endpoint_spec(endpoint_id)
        if spec is None:
            raise ValueError(f"Unknown REST endpoint: {endpoint_id}")

        adapter_cls = get_endpoint_adapter(endpoint_id)
        if adapter_cls is None:
            raise ValueError(f"No adapter found for endpoint: {endpoint_id}")

        logger.debug("Fetching endpoint", extra={"endpoint": endpoint_id})
        return await self._runner.run(spec=spec, adapter=adapter_cls(), params=params)

    # ----------------------
    # Engine fetches
    # ----------------------
    async def fetch_quote(self, symbol: str, contract: str, start: str, end: str, limit: int) -> Quote:
        """Latest top-of-book quote for a continuous contract."""
        return await self.fetch(
            "quote",
            {
                "symbol": symbol,
                "dataset": DATASET,
                "symbols": contract,
                "schema": Schema.MBP_1,
                "stype_in": SType.CONTINUOUS,
                "stype_out": SType.INSTRUMENT_ID,
                "start": start,
                "end": end,
                "limit": limit,
            },
        )

    async def fetch_bars(
        self, symbol: str, contract: str, schema: Schema, start: str, end: str, limit: int
    ) -> list[Bar]:
        """OHLCV bars for a continuous contract, in venue order."""
        return await self.fetch(
            "bars",
            {
                "symbol": symbol,
                "dataset": DATASET,
                "symbols": contract,
                "schema": schema,
                "stype_in": SType.CONTINUOUS,
                "stype_out": SType.INSTRUMENT_ID,
                "start": start,
                "end": end,
                "limit": limit,
            },
        )

    # ----------------------
    # Time series
    # ----------------------
    async def fetch_range(
        self,
        dataset: str,
        symbols: str | Sequence[str],
        schema: Schema | str,
        start: str | date | datetime,
        end: str | date | datetime | None = None,
        *,
        stype_in: SType | str = SType.RAW_SYMBOL,
        stype_out: SType | str = SType.INSTRUMENT_ID,
        limit: int | None = None,
        encoding: Encoding | str | None = None,
    ) -> RangeResult:
        """Fetch a historical range without decoding rows.

        ``end`` defaults to ``start``. Dates are normalized to YYYY-MM-DD.

        Raises:
            ValidationError: On missing or malformed parameters
            NoDataError: If the response body is empty
        """
        require({"dataset": dataset, "schema": schema, "start": start}, "dataset", "schema", "start")
        items = symbol_list(symbols)
        if limit is not None and limit < 1:
            raise ValidationError("limit must be greater than 0")
        start_str = normalize_date(start, "start date")
        end_str = normalize_date(end, "end date") if end else start_str

        return await self.fetch(
            "timeseries.get_range",
            {
                "dataset": dataset,
                "symbols": items,
                "schema": schema,
                "start": start_str,
                "end": end_str,
                "stype_in": stype_in,
                "stype_out": stype_out,
                "limit": limit,
                "encoding": encoding,
            },
        )

    # ----------------------
    # Metadata
    # ----------------------
    async def list_datasets(
        self, start_date: str | None = None, end_date: str | None = None
    ) -> list[str]:
        return await self.fetch(
            "metadata.list_datasets", {"start_date": start_date, "end_date": end_date}
        )

    async def list_schemas(self, dataset: str) -> list[str]:
        require({"dataset": dataset}, "dataset")
        return await self.fetch("metadata.list_schemas", {"dataset": dataset})

    async def list_publishers(self, dataset: str | None = None) -> list[dict[str, Any]]:
        return await self.fetch("metadata.list_publishers", {"dataset": dataset})

    async def list_fields(self, schema: Schema | str, encoding: str | None = None) -> list[dict[str, Any]]:
        require({"schema": schema}, "schema")
        return await self.fetch("metadata.list_fields", {"schema": str(schema), "encoding": encoding})

    async def list_unit_prices(self, dataset: str) -> list[dict[str, Any]]:
        require({"dataset": dataset}, "dataset")
        return await self.fetch("metadata.list_unit_prices", {"dataset": dataset})

    async def get_dataset_range(self, dataset: str) -> dict[str, Any]:
        require({"dataset": dataset}, "dataset")
        return await self.fetch("metadata.get_dataset_range", {"dataset": dataset})

    async def get_dataset_condition(
        self, dataset: str, start_date: str | None = None, end_date: str | None = None
    ) -> list[dict[str, Any]]:
        require({"dataset": dataset}, "dataset")
        return await self.fetch(
            "metadata.get_dataset_condition",
            {"dataset": dataset, "start_date": start_date, "end_date": end_date},
        )

    async def get_cost(
        self,
        dataset: str,
        start: str,
        end: str | None = None,
        *,
        symbols: str | Sequence[str] | None = None,
        schema: Schema | str | None = None,
        mode: str | None = None,
        stype_in: SType | str | None = None,
        stype_out: SType | str | None = None,
    ) -> Any:
        """Cost in USD of a historical query."""
        require({"dataset": dataset, "start": start}, "dataset", "start")
        params = {
            "dataset": dataset,
            "start": start,
            "end": end,
            "symbols": list(symbols) if isinstance(symbols, list | tuple) else symbols,
            "schema": str(schema) if schema else None,
            "mode": mode,
            "stype_in": str(stype_in) if stype_in else None,
            "stype_out": str(stype_out) if stype_out else None,
        }
        return await self.fetch("metadata.get_cost", params)

    # ----------------------
    # Symbology
    # ----------------------
    async def resolve_symbols(
        self,
        dataset: str,
        symbols: Sequence[str],
        stype_in: SType | str,
        stype_out: SType | str,
        start_date: str,
        end_date: str | None = None,
    ) -> dict[str, str | list[str]]:
        """Resolve symbols from one symbology type to another."""
        require(
            {"dataset": dataset, "stype_in": stype_in, "stype_out": stype_out, "start_date": start_date},
            "dataset",
            "stype_in",
            "stype_out",
            "start_date",
        )
        params = {
            "dataset": dataset,
            "symbols": symbol_list(symbols),
            "stype_in": stype_in,
            "stype_out": stype_out,
            "start_date": strict_date(start_date, "start_date"),
            "end_date": strict_date(end_date, "end_date") if end_date else None,
        }
        try:
            return await self.fetch("symbology.resolve", params)
        except DataError as e:
            e.annotate("resolve_symbols", dataset=dataset)
            raise

    # ----------------------
    # Reference data
    # ----------------------
    def _reference_params(
        self,
        dataset: str,
        symbols: str | Sequence[str],
        start_date: str | date | datetime | None,
        end_date: str | date | datetime | None,
        stype_in: SType | str,
    ) -> dict[str, Any]:
        require({"dataset": dataset}, "dataset")
        return {
            "dataset": dataset,
            "symbols": symbol_list(symbols),
            "stype_in": stype_in,
            "start": normalize_date(start_date, "start date") if start_date else None,
            "end": normalize_date(end_date, "end date") if end_date else None,
        }

    async def search_securities(
        self,
        dataset: str,
        symbols: str | Sequence[str],
        *,
        start_date: str | date | datetime | None = None,
        end_date: str | date | datetime | None = None,
        stype_in: SType | str = SType.RAW_SYMBOL,
        limit: int = 1000,
    ) -> list[SecurityRecord]:
        """Look up security master records via ``metadata.list_symbols``."""
        if limit < 1:
            raise ValidationError("limit must be greater than 0")
        params = self._reference_params(dataset, symbols, start_date, end_date, stype_in)
        params["limit"] = limit
        try:
            return await self.fetch("reference.search_securities", params)
        except DataError as e:
            e.annotate("search_securities", dataset=dataset)
            raise

    async def get_corporate_actions(
        self,
        dataset: str,
        symbols: str | Sequence[str],
        *,
        start_date: str | date | datetime | None = None,
        end_date: str | date | datetime | None = None,
        stype_in: SType | str = SType.RAW_SYMBOL,
        action_types: Sequence[str] | None = None,
    ) -> list[CorporateAction]:
        """Dividends, splits and other corporate actions for ``symbols``.

        Args:
            action_types: Keep only these action types (e.g. ``["DIVIDEND"]``)
        """
        params = self._reference_params(dataset, symbols, start_date, end_date, stype_in)
        params["action_types"] = list(action_types) if action_types else None
        try:
            return await self.fetch("reference.corporate_actions", params)
        except DataError as e:
            e.annotate("get_corporate_actions", dataset=dataset)
            raise

    async def get_adjustment_factors(
        self,
        dataset: str,
        symbols: str | Sequence[str],
        *,
        start_date: str | date | datetime | None = None,
        end_date: str | date | datetime | None = None,
        stype_in: SType | str = SType.RAW_SYMBOL,
    ) -> list[AdjustmentFactor]:
        """Price and volume adjustment factors; a missing price factor reads as 1.0."""
        params = self._reference_params(dataset, symbols, start_date, end_date, stype_in)
        try:
            return await self.fetch("reference.adjustment_factors", params)
        except DataError as e:
            e.annotate("get_adjustment_factors", dataset=dataset)
            raise

    # ----------------------
    # Batch
    # ----------------------
    async def submit_batch_job(
        self,
        dataset: str,
        symbols: Sequence[str],
        schema: Schema | str,
        start: str | date | datetime,
        end: str | date | datetime | None = None,
        *,
        encoding: Encoding | str | None = None,
        compression: Compression | str | None = None,
        stype_in: SType | str | None = None,
        stype_out: SType | str | None = None,
        split_duration: str | None = None,
        split_size: int | None = None,
        split_symbols: bool | None = None,
        limit: int | None = None,
        ts_out: bool | None = None,
    ) -> BatchJob:
        """Submit an asynchronous batch download job.

        ``start`` and ``end`` take ``YYYY-MM-DD`` or an ISO-8601 timestamp.
        """
        require({"dataset": dataset, "schema": schema, "start": start}, "dataset", "schema", "start")
        if limit is not None and limit < 1:
            raise ValidationError("limit must be greater than 0")
        params = drop_none(
            {
                "dataset": dataset,
                "symbols": symbol_list(symbols),
                "schema": schema,
                "start": iso_timestamp(start, "start date"),
                "end": iso_timestamp(end, "end date") if end else None,
                "encoding": encoding,
                "compression": compression,
                "stype_in": stype_in,
                "stype_out": stype_out,
                "split_duration": split_duration,
                "split_size": split_size,
                "split_symbols": split_symbols,
                "limit": limit,
                "ts_out": ts_out,
            }
        )
        job = await self.fetch("batch.submit_job", params)
        logger.info(f"Submitted batch job {job.id}", extra={"dataset": dataset, "state": job.state})
        return job

    async def list_batch_jobs(
        self,
        states: Sequence[BatchJobState | str] | None = None,
        since: str | None = None,
    ) -> list[BatchJob]:
        return await self.fetch("batch.list_jobs", {"states": states, "since": since})

    async def get_batch_download_info(self, job_id: str) -> BatchDownloadResult:
        """Describe whether a batch job's files are ready and where to get them.

        Unlike the other methods, lookup failures are reported in the result
        (state ``expired`` with ``error`` set) rather than raised, since the
        job may simply have aged out.
        """
        if not job_id or not job_id.strip():
            raise ValidationError("Job ID is required")

        jobs = await self.list_batch_jobs()
        job = next((j for j in jobs if j.id == job_id), None)
        if job is None:
            return BatchDownloadResult(
                job_id=job_id,
                state=BatchJobState.EXPIRED.value,
                message=f"Job {job_id} not found. It may have expired or does not exist.",
                error="Job not found",
            )

        if job.state != BatchJobState.DONE.value:
            return BatchDownloadResult(job_id=job_id, state=job.state, message=job_status_message(job))

        file_count = job.file_count or 1
        filenames = batch_filenames(job) if file_count > 1 else []
        return BatchDownloadResult(
            job_id=job_id,
            state=job.state,
            message=f"Job completed successfully. {file_count} file(s) ready for download.",
            download_url=f"{self.base_url}/v0/batch.download/{job_id}",
            filenames=filenames,
            record_count=job.record_count,
            file_count=job.file_count,
            total_size=job.total_size,
            ts_expiration=job.ts_expiration,
        )

    async def close(self) -> None:
        await self._transport.close()

    async def __aenter__(self) -> DatabentoRESTConnector:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def job_status_message(job: BatchJob) -> str:
    messages = {
        "received": f"Job {job.id} received and pending validation. Check back shortly.",
        "queued": f"Job {job.id} is queued for processing. Queued at {job.ts_queued}.",
        "processing": f"Job {job.id} is currently being processed. Started at {job.ts_process_start}.",
        "done": f"Job {job.id} completed. {job.record_count} records across {job.file_count} file(s).",
        "expired": f"Job {job.id} has expired. Files are no longer available for download.",
    }
    return messages.get(job.state, f"Job {job.id} status: {job.state}")


def batch_filenames(job: BatchJob) -> list[str]:
    ext = _ENCODING_EXT.get(job.encoding or "", ".bin") + _COMPRESSION_EXT.get(job.compression or "", "")
    return [f"{job.id}_{i}{ext}" for i in range(job.file_count or 0)]
