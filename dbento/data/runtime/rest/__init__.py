"""REST runtime abstractions."""

from .http_client import HTTPClient, RetryPolicy, build_query_params, encode_form
from .runner import ResponseAdapter, RestEndpointSpec, RestRunner
from .transport import RESTTransport

__all__ = [
    "HTTPClient",
    "RESTTransport",
    "RetryPolicy",
    "RestRunner",
    "RestEndpointSpec",
    "ResponseAdapter",
    "build_query_params",
    "encode_form",
]
