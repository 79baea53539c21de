"""Client-side request marshalling."""

from .request import PreparedRequest, RequestMarshaller, prepare_request
from .utils import (
    ClassifiedParams,
    build_headers,
    build_path,
    build_query,
    build_url,
    encode_cookies,
    get_http_method,
    params_by_location,
    percent_encode,
)

__all__ = [
    "PreparedRequest",
    "RequestMarshaller",
    "prepare_request",
    "ClassifiedParams",
    "build_headers",
    "build_path",
    "build_query",
    "build_url",
    "encode_cookies",
    "get_http_method",
    "params_by_location",
    "percent_encode",
]
