"""Response decoding."""

from .decoders import (
    PRICE_SCALE,
    DecodedResponse,
    RawResponse,
    ResponseKind,
    StructuredResponse,
    TabularResponse,
    decode_price,
    decode_response,
    decode_timestamp,
    decode_volume,
    parse_csv,
    parse_json,
)

__all__ = [
    "PRICE_SCALE",
    "DecodedResponse",
    "RawResponse",
    "ResponseKind",
    "StructuredResponse",
    "TabularResponse",
    "decode_price",
    "decode_response",
    "decode_timestamp",
    "decode_volume",
    "parse_csv",
    "parse_json",
]
