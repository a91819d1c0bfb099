"""REST transport bound to one authenticated HTTP client."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .http_client import HTTPClient


class RESTTransport:
    """Thin facade the runner and connectors talk to.

    Keeps endpoint code independent of how requests are authenticated and
    retried.
    """

    def __init__(self, http: HTTPClient) -> None:
        self._http = http

    @property
    def base_url(self) -> str:
        return self._http.base_url

    async def get(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> str:
        return await self._http.get(path, params=params, headers=headers)

    async def post(
        self,
        path: str,
        json_body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> str:
        return await self._http.post(path, json_body=json_body, headers=headers)

    async def post_form(
        self,
        path: str,
        form: Mapping[str, Any],
        headers: dict[str, str] | None = None,
    ) -> str:
        return await self._http.post_form(path, form=form, headers=headers)

    async def close(self) -> None:
        await self._http.close()
