"""
apiwire - HTTP request marshalling for typed API definitions.

apiwire turns a declarative description of an operation's inputs (which
value goes in the path, query string, headers, cookies or body) into the
concrete URL, header map and body needed to send the request. It performs
no validation and no network I/O.

Key Features:
- Typed parameter and operation definitions via Pydantic
- Path template substitution with percent-encoding
- Query string, cookie and header assembly
- JSON, plain-text and binary bodies with matching content types

Main Exports (Import from top level):
    Definitions:
        - ParamSpec: Location and wire name of one input property
        - ParamLocation: Request locations
        - BodyKind: Body serialization policies
        - OperationDef: Method, path template and input definition
        - ControllerDef: Named group of operations

    Marshalling:
        - params_by_location: Route values into request locations
        - build_path / build_query / build_url: URL assembly
        - encode_cookies / build_headers: Header assembly
        - get_http_method: Method normalization
        - prepare_request: Run the whole pipeline for an operation
        - RequestMarshaller: Prepare requests for a controller

    Configuration:
        - ClientConfig: Endpoint, default headers and log level

    Modules:
        - exceptions: Custom exception classes

Example:
    >>> from apiwire import OperationDef, ParamSpec, prepare_request
    >>>
    >>> op = OperationDef.get("/users/{id}", {"id": ParamSpec.path()})
    >>> prepare_request(op, {"id": 7}, endpoint="http://localhost:8080").url
    'http://localhost:8080/users/7'
"""

import logging

__version__ = "0.1.0"

# Modules
from . import exceptions

# Marshalling
from .client import (
    ClassifiedParams,
    PreparedRequest,
    RequestMarshaller,
    build_headers,
    build_path,
    build_query,
    build_url,
    encode_cookies,
    get_http_method,
    params_by_location,
    prepare_request,
)
from .config import ClientConfig
from .constants import ContentType

# Definitions
from .core import (
    BodyKind,
    ControllerDef,
    OperationDef,
    ParamLocation,
    ParamSpec,
    param_string_value,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version
    "__version__",
    # Definitions
    "ParamSpec",
    "ParamLocation",
    "BodyKind",
    "OperationDef",
    "ControllerDef",
    # Marshalling
    "ClassifiedParams",
    "PreparedRequest",
    "RequestMarshaller",
    "build_headers",
    "build_path",
    "build_query",
    "build_url",
    "encode_cookies",
    "get_http_method",
    "params_by_location",
    "prepare_request",
    "param_string_value",
    # Configuration
    "ClientConfig",
    "ContentType",
    # Modules
    "exceptions",
]
