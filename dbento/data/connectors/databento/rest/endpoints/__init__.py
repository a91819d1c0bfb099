"""Databento REST endpoint registry.

This module collects all endpoint specifications and adapters from the
endpoint modules.
"""

from __future__ import annotations

from dbento.data.runtime.rest import ResponseAdapter, RestEndpointSpec

from . import batch, metadata, reference, symbology, timeseries

# Registry mapping endpoint IDs to specs and adapters
_ENDPOINT_REGISTRY: dict[str, tuple[RestEndpointSpec, type[ResponseAdapter]]] = {
    "quote": (timeseries.SPEC, timeseries.QuoteAdapter),
    "bars": (timeseries.SPEC, timeseries.BarsAdapter),
    "timeseries.get_range": (timeseries.RAW_SPEC, timeseries.RangeAdapter),
    "symbology.resolve": (symbology.SPEC, symbology.Adapter),
    "batch.submit_job": (batch.SUBMIT_SPEC, batch.SubmitAdapter),
    "batch.list_jobs": (batch.LIST_SPEC, batch.ListAdapter),
    "reference.search_securities": (reference.SEARCH_SPEC, reference.SecuritiesAdapter),
    "reference.corporate_actions": (
        reference.CORPORATE_ACTIONS_SPEC,
        reference.CorporateActionsAdapter,
    ),
    "reference.adjustment_factors": (
        reference.ADJUSTMENT_SPEC,
        reference.AdjustmentFactorsAdapter,
    ),
    **metadata.SPECS,
}


def get_endpoint_spec(endpoint_id: str) -> RestEndpointSpec | None:
    """Get endpoint specification by ID.

    Args:
        endpoint_id: Endpoint identifier (e.g., "quote", "metadata.list_schemas")

    Returns:
        RestEndpointSpec if found, None otherwise
    """
    entry = _ENDPOINT_REGISTRY.get(endpoint_id)
    return entry[0] if entry else None


def get_endpoint_adapter(endpoint_id: str) -> type[ResponseAdapter] | None:
    """Get endpoint adapter class by ID."""
    entry = _ENDPOINT_REGISTRY.get(endpoint_id)
    return entry[1] if entry else None


def list_endpoints() -> list[str]:
    return sorted(_ENDPOINT_REGISTRY)


__all__ = ["get_endpoint_adapter", "get_endpoint_spec", "list_endpoints"]
