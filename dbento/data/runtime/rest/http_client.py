"""Authenticated HTTP client with per-attempt timeout and classified retry."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

import aiohttp

from ...core.config import DEFAULT_BASE_URL, DEFAULT_USER_AGENT, validate_api_key
from ...core.exceptions import DecodeError, TransportError, TransportErrorKind

logger = logging.getLogger(__name__)

# Longest response excerpt carried in error messages
_EXCERPT_LEN = 200

Sleep = Callable[[float], Awaitable[Any]]


@dataclass(frozen=True)
class RetryPolicy:
    """Fixed attempt budget with linear backoff.

    Before attempt ``n + 1`` the client sleeps ``n * base_delay`` seconds.
    Network errors, timeouts, 429 and 5xx are transient; every other non-2xx
    status is terminal and fails on the spot.
    """

    attempts: int = 3
    base_delay: float = 1.0

    def delay_for(self, attempt: int) -> float:
        return attempt * self.base_delay

    @staticmethod
    def is_retryable_status(status: int) -> bool:
        return status == 429 or status >= 500


def build_query_params(params: Mapping[str, Any] | None) -> dict[str, str]:
    """Drop ``None`` values and stringify the rest (booleans as true/false)."""
    if not params:
        return {}
    query: dict[str, str] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            query[key] = "true" if value else "false"
        else:
            query[key] = str(value)
    return query


def encode_form(data: Mapping[str, Any]) -> dict[str, str]:
    """Form-encode key/value pairs; list values are joined with commas."""
    form: dict[str, str] = {}
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, list | tuple):
            form[key] = ",".join(str(v) for v in value)
        elif isinstance(value, bool):
            form[key] = "true" if value else "false"
        else:
            form[key] = str(value)
    return form


def _excerpt(text: str) -> str:
    text = text.strip()
    return text if len(text) <= _EXCERPT_LEN else text[:_EXCERPT_LEN] + "..."


class HTTPClient:
    """Async HTTP client returning response bodies as text.

    Every request carries HTTP Basic auth (API key as username, empty
    password) and a fixed User-Agent. The API key is validated on
    construction, before any network activity.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 15.0,
        retry_policy: RetryPolicy | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._auth = aiohttp.BasicAuth(validate_api_key(api_key), "")
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.retry_policy = retry_policy or RetryPolicy()
        self.user_agent = user_agent
        self._sleep = sleep
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    @property
    def auth_header(self) -> str:
        return self._auth.encode()

    def url_for(self, path: str) -> str:
        if path.startswith("http"):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    async def get(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> str:
        """GET request with query-string parameters."""
        return await self.request("GET", path, params=params, headers=headers)

    async def post(
        self,
        path: str,
        json_body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> str:
        """POST request with a JSON body."""
        return await self.request("POST", path, json_body=json_body, headers=headers)

    async def post_form(
        self,
        path: str,
        form: Mapping[str, Any],
        headers: dict[str, str] | None = None,
    ) -> str:
        """POST request with a form-encoded body."""
        return await self.request("POST", path, form=form, headers=headers)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json_body: Any = None,
        form: Mapping[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> str:
        """Send a request, retrying transient failures within the budget."""
        policy = self.retry_policy
        attempt = 0

        while True:
            attempt += 1
            try:
                status, text = await self._send(
                    method, path, params=params, json_body=json_body, form=form, headers=headers
                )
            except asyncio.TimeoutError as e:
                failure = TransportError(
                    f"Request timed out after {self.timeout.total}s",
                    kind=TransportErrorKind.TIMEOUT,
                    attempts=attempt,
                    last_cause=e,
                )
            except aiohttp.ClientError as e:
                failure = TransportError(
                    f"Network error: {e}",
                    kind=TransportErrorKind.NETWORK,
                    attempts=attempt,
                    last_cause=e,
                )
            else:
                if 200 <= status < 300:
                    logger.debug(
                        "Request succeeded",
                        extra={"method": method, "path": path, "status": status, "attempt": attempt},
                    )
                    return text
                failure = TransportError(
                    f"HTTP {status}: {_excerpt(text)}",
                    kind=TransportErrorKind.HTTP_STATUS,
                    attempts=attempt,
                    status_code=status,
                    retryable=policy.is_retryable_status(status),
                )

            if not failure.retryable:
                logger.error(
                    "Request failed with non-retryable status",
                    extra={"method": method, "path": path, "status": failure.status_code},
                )
                raise TransportError(
                    f"API request to {path} failed: {failure.message}",
                    kind=failure.kind,
                    attempts=attempt,
                    status_code=failure.status_code,
                    last_cause=failure,
                    retryable=False,
                )

            if attempt >= policy.attempts:
                logger.error(
                    f"Request failed after {attempt} attempts: {failure.message}",
                    extra={"method": method, "path": path, "kind": str(failure.kind)},
                )
                raise TransportError(
                    f"API request to {path} failed after {attempt} attempts: {failure.message}",
                    kind=failure.kind,
                    attempts=attempt,
                    status_code=failure.status_code,
                    last_cause=failure.last_cause or failure,
                ) from failure.last_cause

            delay = policy.delay_for(attempt)
            logger.warning(
                f"Request attempt {attempt}/{policy.attempts} failed, retrying in {delay}s: "
                f"{failure.message}",
                extra={"method": method, "path": path, "kind": str(failure.kind)},
            )
            await self._sleep(delay)

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None,
        json_body: Any,
        form: Mapping[str, Any] | None,
        headers: dict[str, str] | None,
    ) -> tuple[int, str]:
        """Single attempt. Returns (status, body text).

        Raises:
            DecodeError: If a 2xx body cannot be decoded as text (not retried)
        """
        request_headers = {
            "Authorization": self.auth_header,
            "User-Agent": self.user_agent,
            **(headers or {}),
        }
        kwargs: dict[str, Any] = {"headers": request_headers}
        query = build_query_params(params)
        if query:
            kwargs["params"] = query
        if json_body is not None:
            kwargs["json"] = json_body
        elif form is not None:
            kwargs["data"] = encode_form(form)

        logger.debug("Sending request", extra={"method": method, "path": path})
        async with self.session.request(method, self.url_for(path), **kwargs) as response:
            try:
                text = await response.text()
            except UnicodeDecodeError as e:
                body = await response.read()
                text = body.decode("utf-8", errors="replace")
                # Undecodable 2xx bodies are malformed data and are not retried
                if 200 <= response.status < 300:
                    raise DecodeError(
                        f"Response from {path} is not valid {e.encoding} text: {e.reason}",
                        text=_excerpt(text),
                    ) from e
            return response.status, text

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
