"""Databento reference data: security master, corporate actions, adjustments.

Column names vary between datasets, so each field is read from the first
non-empty of its known spellings (``instrument_id``/``id``, ``venue``/
``exchange``, ...). Corporate actions and adjustment factors are
``timeseries.get_range`` queries with a fixed schema.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError as ModelValidationError

from dbento.data.core import DecodeError, Schema
from dbento.data.io import ResponseKind, TabularResponse
from dbento.data.models import AdjustmentFactor, CorporateAction, SecurityRecord
from dbento.data.runtime.rest import ResponseAdapter, RestEndpointSpec

from . import timeseries

LIST_SYMBOLS_PATH = "/v0/metadata.list_symbols"


def first(row: dict[str, str], *names: str) -> str | None:
    """First non-empty value among ``names``, or None."""
    for name in names:
        value = row.get(name)
        if value:
            return value
    return None


def _int(value: str | None) -> int:
    if not value:
        return 0
    try:
        return int(value)
    except ValueError:
        raise DecodeError(f"Invalid integer value: {value!r}") from None


def _float(value: str | None) -> float | None:
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        raise DecodeError(f"Invalid numeric value: {value!r}") from None


def _search_query(params: dict[str, Any]) -> dict[str, Any]:
    return {
        "dataset": params.get("dataset"),
        "symbols": ",".join(params["symbols"]) if params.get("symbols") else None,
        "stype_in": str(params["stype_in"]) if params.get("stype_in") else None,
        "start": params.get("start"),
        "end": params.get("end"),
        "limit": params.get("limit"),
    }


def _range_spec(endpoint_id: str, schema: Schema) -> RestEndpointSpec:
    def build_query(params: dict[str, Any]) -> dict[str, Any]:
        return timeseries.build_query({**params, "schema": schema})

    return RestEndpointSpec(
        id=endpoint_id,
        method="GET",
        build_path=timeseries.build_path,
        build_query=build_query,
        response_kind=ResponseKind.TABULAR,
    )


SEARCH_SPEC = RestEndpointSpec(
    id="reference.search_securities",
    method="GET",
    build_path=lambda params: LIST_SYMBOLS_PATH,
    build_query=_search_query,
    response_kind=ResponseKind.TABULAR,
)

CORPORATE_ACTIONS_SPEC = _range_spec("reference.corporate_actions", Schema.CORPORATE_ACTIONS)
ADJUSTMENT_SPEC = _range_spec("reference.adjustment_factors", Schema.ADJUSTMENT)


class _RowAdapter(ResponseAdapter):
    """Map each CSV row through ``record``; an empty body is an empty list."""

    def parse(self, response: TabularResponse, params: dict[str, Any]) -> list[Any]:
        records = []
        for row in response.rows:
            try:
                records.append(self.record(row, params))
            except ModelValidationError as e:
                raise DecodeError(f"Invalid reference row {row!r}: {e}") from e
        return records

    def record(self, row: dict[str, str], params: dict[str, Any]) -> Any:
        raise NotImplementedError


class SecuritiesAdapter(_RowAdapter):
    def record(self, row: dict[str, str], params: dict[str, Any]) -> SecurityRecord:
        return SecurityRecord(
            instrument_id=_int(first(row, "instrument_id", "id")),
            symbol=first(row, "symbol", "raw_symbol"),
            dataset=params["dataset"],
            stype=first(row, "stype") or "unknown",
            first_available=first(row, "first_available", "ts_start"),
            last_available=first(row, "last_available", "ts_end"),
            exchange=first(row, "exchange", "venue"),
            asset_class=first(row, "asset_class"),
            description=first(row, "description"),
            isin=first(row, "isin"),
            currency=first(row, "currency"),
            contract_size=_float(first(row, "contract_size")),
            tick_size=_float(first(row, "tick_size")),
            expiration=first(row, "expiration"),
        )


class CorporateActionsAdapter(_RowAdapter):
    """Corporate actions, optionally filtered to ``params["action_types"]``."""

    def parse(self, response: TabularResponse, params: dict[str, Any]) -> list[CorporateAction]:
        actions = super().parse(response, params)
        wanted = params.get("action_types")
        if wanted:
            actions = [a for a in actions if a.action_type in wanted]
        return actions

    def record(self, row: dict[str, str], params: dict[str, Any]) -> CorporateAction:
        return CorporateAction(
            instrument_id=_int(first(row, "instrument_id")),
            symbol=first(row, "symbol") or params["symbols"][0],
            dataset=params["dataset"],
            action_type=first(row, "action_type", "type"),
            effective_date=first(row, "effective_date", "ts_event"),
            announcement_date=first(row, "announcement_date"),
            ex_date=first(row, "ex_date"),
            record_date=first(row, "record_date"),
            payment_date=first(row, "payment_date"),
            amount=_float(first(row, "amount")),
            currency=first(row, "currency"),
            split_ratio=first(row, "split_ratio"),
            split_factor=_float(first(row, "split_factor")),
            details=first(row, "details"),
        )


class AdjustmentFactorsAdapter(_RowAdapter):
    def record(self, row: dict[str, str], params: dict[str, Any]) -> AdjustmentFactor:
        price_factor = _float(first(row, "price_factor", "price_adj_factor"))
        return AdjustmentFactor(
            instrument_id=_int(first(row, "instrument_id")),
            symbol=first(row, "symbol") or params["symbols"][0],
            dataset=params["dataset"],
            effective_date=first(row, "effective_date", "ts_event"),
            price_factor=1.0 if price_factor is None else price_factor,
            volume_factor=_float(first(row, "volume_factor", "volume_adj_factor")),
            reason=first(row, "reason"),
            action_type=first(row, "action_type"),
        )
