"""Databento metadata endpoint definitions.

All metadata endpoints are JSON GETs whose query is a plain projection of
the caller's parameters, so the specs are generated from a table.
"""

from __future__ import annotations

from typing import Any

from dbento.data.core import DecodeError
from dbento.data.io import ResponseKind, StructuredResponse
from dbento.data.runtime.rest import ResponseAdapter, RestEndpointSpec

# endpoint id -> (query parameter names, expected JSON type)
_ENDPOINTS: dict[str, tuple[tuple[str, ...], type]] = {
    "metadata.list_datasets": (("start_date", "end_date"), list),
    "metadata.list_schemas": (("dataset",), list),
    "metadata.list_publishers": (("dataset",), list),
    "metadata.list_fields": (("schema", "encoding"), list),
    "metadata.list_unit_prices": (("dataset",), list),
    "metadata.get_dataset_range": (("dataset",), dict),
    "metadata.get_dataset_condition": (("dataset", "start_date", "end_date"), list),
    "metadata.get_cost": (
        ("dataset", "start", "end", "symbols", "schema", "mode", "stype_in", "stype_out"),
        object,
    ),
}


def _make_spec(endpoint_id: str, names: tuple[str, ...]) -> RestEndpointSpec:
    def build_query(params: dict[str, Any]) -> dict[str, Any]:
        q = {name: params.get(name) for name in names}
        if isinstance(q.get("symbols"), list | tuple):
            q["symbols"] = ",".join(q["symbols"])
        return q

    return RestEndpointSpec(
        id=endpoint_id,
        method="GET",
        build_path=lambda params: f"/v0/{endpoint_id}",
        build_query=build_query,
        response_kind=ResponseKind.STRUCTURED,
    )


class JSONAdapter(ResponseAdapter):
    """Return the decoded JSON value after checking its top-level type."""

    expected: type = object

    def parse(self, response: StructuredResponse, params: dict[str, Any]) -> Any:
        value = response.value
        if not isinstance(value, self.expected):
            raise DecodeError(
                f"Expected JSON {self.expected.__name__}, got {type(value).__name__}",
                text=repr(value),
            )
        return value


def _make_adapter(expected: type) -> type[JSONAdapter]:
    return type(f"JSON{expected.__name__.title()}Adapter", (JSONAdapter,), {"expected": expected})


SPECS: dict[str, tuple[RestEndpointSpec, type[ResponseAdapter]]] = {
    endpoint_id: (_make_spec(endpoint_id, names), _make_adapter(expected))
    for endpoint_id, (names, expected) in _ENDPOINTS.items()
}
