"""REST request runner using endpoint specs and response adapters."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ...io.decoders import DecodedResponse, ResponseKind, decode_response
from .transport import RESTTransport


@dataclass(frozen=True)
class RestEndpointSpec:
    id: str
    method: str  # "GET" | "POST"
    build_path: Callable[[dict[str, Any]], str]
    build_query: Callable[[dict[str, Any]], dict[str, Any]] | None = None
    build_body: Callable[[dict[str, Any]], dict[str, Any]] | None = None
    build_form: Callable[[dict[str, Any]], dict[str, Any]] | None = None
    build_headers: Callable[[dict[str, Any]], dict[str, str]] | None = None
    # Decided per endpoint, never inferred from the body
    response_kind: ResponseKind = ResponseKind.TABULAR


class ResponseAdapter:
    def parse(self, response: DecodedResponse, params: dict[str, Any]) -> Any:
        return response


class RestRunner:
    def __init__(self, transport: RESTTransport) -> None:
        self._t = transport

    async def run(
        self, *, spec: RestEndpointSpec, adapter: ResponseAdapter, params: dict[str, Any]
    ) -> Any:
        path = spec.build_path(params)
        query = spec.build_query(params) if spec.build_query else None
        headers = spec.build_headers(params) if spec.build_headers else None

        if spec.method.upper() == "GET":
            text = await self._t.get(path, params=query, headers=headers)
        elif spec.build_form is not None:
            text = await self._t.post_form(path, form=spec.build_form(params), headers=headers)
        else:
            body = spec.build_body(params) if spec.build_body else None
            text = await self._t.post(path, json_body=body, headers=headers)

        return adapter.parse(decode_response(text, spec.response_kind), params)
