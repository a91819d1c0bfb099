"""Databento ``symbology.resolve`` endpoint definition and adapter.

Sent as a JSON POST so large symbol lists stay out of the URL.
"""

from __future__ import annotations

import json
from typing import Any

from dbento.data.core import DecodeError
from dbento.data.io import ResponseKind, StructuredResponse
from dbento.data.runtime.rest import ResponseAdapter, RestEndpointSpec


def build_path(params: dict[str, Any]) -> str:
    return "/v0/symbology.resolve"


def build_body(params: dict[str, Any]) -> dict[str, Any]:
    body: dict[str, Any] = {
        "dataset": params["dataset"],
        "symbols": ",".join(params["symbols"]),
        "stype_in": str(params["stype_in"]),
        "stype_out": str(params["stype_out"]),
        "start_date": params["start_date"],
    }
    if params.get("end_date"):
        body["end_date"] = params["end_date"]
    return body


SPEC = RestEndpointSpec(
    id="symbology.resolve",
    method="POST",
    build_path=build_path,
    build_body=build_body,
    response_kind=ResponseKind.STRUCTURED,
)


def _output_symbol(resolution: Any) -> str:
    if isinstance(resolution, str):
        return resolution
    if isinstance(resolution, dict) and "s" in resolution:
        return str(resolution["s"])
    return str(resolution)


class Adapter(ResponseAdapter):
    """Flatten the resolution map to ``input -> output`` (str or list of str).

    Entries are either a list of resolutions (one per date interval), a bare
    string, or an object carrying the output symbol under ``s``.
    """

    def parse(
        self, response: StructuredResponse, params: dict[str, Any]
    ) -> dict[str, str | list[str]]:
        data = response.value
        if isinstance(data, dict) and isinstance(data.get("result"), dict):
            data = data["result"]
        if not isinstance(data, dict):
            raise DecodeError(
                f"Failed to parse symbology response: expected object, got {type(data).__name__}",
                text=repr(data),
            )

        mappings: dict[str, str | list[str]] = {}
        for input_symbol, resolutions in data.items():
            if isinstance(resolutions, list):
                outputs = [_output_symbol(r) for r in resolutions]
                mappings[input_symbol] = outputs[0] if len(outputs) == 1 else outputs
            elif isinstance(resolutions, str):
                mappings[input_symbol] = resolutions
            elif isinstance(resolutions, dict):
                if "s" in resolutions:
                    mappings[input_symbol] = str(resolutions["s"])
                else:
                    mappings[input_symbol] = json.dumps(resolutions)
        return mappings
