"""Databento historical API connector."""

from .config import BASE_URL, DATASET, SCHEMA_MAP, SYMBOL_MAP, normalize_symbol, resolve_symbol
from .rest import DatabentoRESTConnector

__all__ = [
    "BASE_URL",
    "DATASET",
    "SCHEMA_MAP",
    "SYMBOL_MAP",
    "DatabentoRESTConnector",
    "normalize_symbol",
    "resolve_symbol",
]
