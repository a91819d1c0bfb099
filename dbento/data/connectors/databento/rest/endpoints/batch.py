"""Databento batch endpoints: job submission (form POST) and job listing."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError as ModelValidationError

from dbento.data.core import DecodeError
from dbento.data.io import ResponseKind, StructuredResponse
from dbento.data.models import BatchJob
from dbento.data.runtime.rest import ResponseAdapter, RestEndpointSpec

_SUBMIT_FIELDS = (
    "dataset",
    "symbols",
    "schema",
    "start",
    "end",
    "encoding",
    "compression",
    "stype_in",
    "stype_out",
    "split_duration",
    "split_size",
    "split_symbols",
    "limit",
    "ts_out",
)


def build_form(params: dict[str, Any]) -> dict[str, Any]:
    """Form fields; the transport joins the symbols list with commas."""
    form = {name: params.get(name) for name in _SUBMIT_FIELDS}
    for name in ("schema", "encoding", "compression", "stype_in", "stype_out"):
        if form[name] is not None:
            form[name] = str(form[name])
    return form


def build_list_query(params: dict[str, Any]) -> dict[str, Any]:
    states = params.get("states")
    return {
        "states": ",".join(str(s) for s in states) if states else None,
        "since": params.get("since"),
    }


SUBMIT_SPEC = RestEndpointSpec(
    id="batch.submit_job",
    method="POST",
    build_path=lambda params: "/v0/batch.submit_job",
    build_form=build_form,
    response_kind=ResponseKind.STRUCTURED,
)

LIST_SPEC = RestEndpointSpec(
    id="batch.list_jobs",
    method="GET",
    build_path=lambda params: "/v0/batch.list_jobs",
    build_query=build_list_query,
    response_kind=ResponseKind.STRUCTURED,
)


def _job(value: Any) -> BatchJob:
    try:
        return BatchJob.model_validate(value)
    except ModelValidationError as e:
        raise DecodeError(f"Invalid batch job payload: {e}", text=repr(value)) from e


class SubmitAdapter(ResponseAdapter):
    def parse(self, response: StructuredResponse, params: dict[str, Any]) -> BatchJob:
        return _job(response.value)


class ListAdapter(ResponseAdapter):
    def parse(self, response: StructuredResponse, params: dict[str, Any]) -> list[BatchJob]:
        if not isinstance(response.value, list):
            raise DecodeError(
                f"Expected JSON list of jobs, got {type(response.value).__name__}",
                text=repr(response.value),
            )
        return [_job(item) for item in response.value]
