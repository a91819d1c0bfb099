"""Parameter helpers shared by Databento endpoint definitions."""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import date, datetime
from typing import Any

from dbento.data.connectors.databento.config import MAX_SYMBOLS_PER_REQUEST
from dbento.data.core import DecodeError, ValidationError

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DATE_PREFIX_RE = re.compile(r"^\d{4}-\d{2}-\d{2}")


def require(params: dict[str, Any], *names: str) -> None:
    for name in names:
        value = params.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(f"{name} is required")


def normalize_date(value: str | date | datetime, name: str = "date") -> str:
    """Return ``YYYY-MM-DD`` for a date, datetime or ISO-8601 string."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str) and _DATE_RE.match(value):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        raise ValidationError(f"Invalid {name} format: {value!r}") from None


def iso_timestamp(value: str | date | datetime, name: str) -> str:
    """Accept ``YYYY-MM-DD`` or a full ISO-8601 timestamp; any time part is kept."""
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str) or not _DATE_PREFIX_RE.match(value.strip()):
        raise ValidationError(
            f"Invalid {name} format: {value!r}. Expected YYYY-MM-DD or ISO 8601"
        )
    return value.strip()


def strict_date(value: str, name: str) -> str:
    """Accept only ``YYYY-MM-DD``."""
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise ValidationError(f"Invalid {name} format: {value!r}. Expected YYYY-MM-DD")
    return value


def symbol_list(symbols: str | Sequence[str]) -> list[str]:
    """Normalize a comma-separated string or sequence into a checked list."""
    if isinstance(symbols, str):
        items = [s.strip() for s in symbols.split(",") if s.strip()]
    else:
        items = [str(s).strip() for s in symbols if str(s).strip()]
    if not items:
        raise ValidationError("symbols is required and cannot be empty")
    if len(items) > MAX_SYMBOLS_PER_REQUEST:
        raise ValidationError(
            f"Too many symbols: {len(items)}. Maximum is {MAX_SYMBOLS_PER_REQUEST}"
        )
    return items


def field(row: dict[str, str], name: str) -> str:
    """Column value from a decoded row; missing columns are a decode failure."""
    try:
        return row[name]
    except KeyError:
        raise DecodeError(
            f"Response is missing column {name!r} (columns: {', '.join(row)})"
        ) from None


def drop_none(values: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}
