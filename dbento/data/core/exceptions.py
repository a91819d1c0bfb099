"""Custom exception hierarchy."""

from __future__ import annotations

from enum import Enum
from typing import Any


class DataError(Exception):
    """Base exception for all library errors.

    Errors can be annotated with the operation that raised them and the
    parameters involved, so the final message names what failed:

        >>> str(NoDataError("No quote data available for ES").annotate("get_quote", symbol="ES"))
        'get_quote(symbol=ES): No quote data available for ES'
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.operation: str | None = None
        self.context: dict[str, Any] = {}

    def annotate(self, operation: str, **context: Any) -> DataError:
        """Attach operation context. Innermost annotation wins for the operation name."""
        if self.operation is None:
            self.operation = operation
        for key, value in context.items():
            self.context.setdefault(key, value)
        return self

    def __str__(self) -> str:
        if self.operation is None:
            return self.message
        args = ", ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.operation}({args}): {self.message}"


class ConfigurationError(DataError):
    """Missing or malformed client configuration (e.g. API key)."""

    pass


class ProviderError(DataError):
    """Error from external data provider."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransportErrorKind(str, Enum):
    """Failure category of the last transport attempt."""

    HTTP_STATUS = "http_status"
    NETWORK = "network"
    TIMEOUT = "timeout"

    def __str__(self) -> str:
        return self.value


class TransportError(ProviderError):
    """Request failed after the transport gave up.

    Raised either when the retry budget is exhausted or immediately for a
    terminal (non-retryable) status such as 401 or 403.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: TransportErrorKind,
        attempts: int,
        status_code: int | None = None,
        last_cause: BaseException | None = None,
        retryable: bool = True,
    ) -> None:
        super().__init__(message, status_code=status_code)
        self.kind = kind
        self.attempts = attempts
        self.last_cause = last_cause
        self.retryable = retryable


class DecodeError(DataError):
    """Response body could not be decoded."""

    def __init__(self, message: str, text: str | None = None) -> None:
        super().__init__(message)
        self.text = text


class NoDataError(DataError):
    """Request succeeded but returned no usable rows."""

    pass


class ValidationError(DataError):
    """Data validation failure."""

    pass


class InvalidSymbolError(ValidationError):
    """Symbol has no continuous-contract mapping."""

    pass


class InvalidTimeframeError(ValidationError):
    """Timeframe not supported by the bar pipeline."""

    pass
