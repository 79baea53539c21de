"""Request marshalling helpers.

These functions turn an input definition and its values into the pieces of
an HTTP request: path, query string, headers and body. They are pure and
allocate fresh output on every call, except ``build_headers`` which fills in
the header map it is given.
"""

import logging
import re
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import quote

from pydantic import BaseModel, Field

from apiwire.constants import ContentType, HeaderNames
from apiwire.core.params import (
    BodyKind,
    OperationDef,
    ParamLocation,
    ParamSpec,
    validate_input_definition,
)
from apiwire.core.serialization import param_string_value
from apiwire.exceptions import PathVariableMissing

logger = logging.getLogger(__name__)

_PATH_VARIABLE = re.compile(r"\{(\w+)\}")

# Characters encodeURIComponent leaves untouched, besides alphanumerics
_URI_COMPONENT_SAFE = "-_.!~*'()"


def percent_encode(value: str) -> str:
    """Percent-encode a URI component."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


def build_path(path_template: str, path_vars: Mapping[str, str]) -> str:
    """Substitute ``{name}`` placeholders in a path template.

    Args:
        path_template: Template such as ``/users/{userId}``
        path_vars: Wire-string values keyed by placeholder name

    Returns:
        The path with every placeholder replaced by its percent-encoded value

    Raises:
        PathVariableMissing: If a placeholder has no value or an empty one
    """

    def _substitute(match: "re.Match[str]") -> str:
        name = match.group(1)
        value = path_vars.get(name)
        if not value:
            raise PathVariableMissing(name, path_template)
        return percent_encode(value)

    return _PATH_VARIABLE.sub(_substitute, path_template)


def build_query(query_vars: Mapping[str, str]) -> str:
    """Serialize query values into a ``?``-prefixed query string."""
    value = "&".join(
        f"{percent_encode(k)}={percent_encode(v)}" for k, v in query_vars.items()
    )
    return f"?{value}" if value else ""


def build_url(
    endpoint: str,
    path_template: str,
    path_vars: Mapping[str, str],
    query_vars: Mapping[str, str],
) -> str:
    """Concatenate endpoint, resolved path and query string."""
    path = build_path(path_template, path_vars)
    query = build_query(query_vars)
    return f"{endpoint}{path}{query}"


def encode_cookies(cookies: Mapping[str, str]) -> Optional[str]:
    """Encode cookies as a single ``Cookie`` header value, or None if empty."""
    value = ";".join(f"{k}={v}" for k, v in cookies.items())
    return value or None


def build_headers(
    headers: Dict[str, str],
    cookies: Mapping[str, str],
    body_type: Optional[ContentType],
) -> Dict[str, str]:
    """Add the ``Cookie`` and ``Content-Type`` headers.

    The given ``headers`` dict is updated in place and returned. It belongs to
    this request from then on and must not be reused for another one.

    Args:
        headers: Header values keyed by wire name
        cookies: Cookie values keyed by wire name
        body_type: Content type of the body, if there is one

    Returns:
        The same ``headers`` dict
    """
    encoded_cookies = encode_cookies(cookies)
    if encoded_cookies:
        headers[HeaderNames.COOKIE] = encoded_cookies
    if body_type:
        headers[HeaderNames.CONTENT_TYPE] = ContentType(body_type).value
    return headers


class ClassifiedParams(BaseModel):
    """Input values routed to their request locations.

    Attributes:
        path: Path variable values keyed by wire name
        query: Query values keyed by wire name, in definition order
        header: Header values keyed by wire name
        cookie: Cookie values keyed by wire name
        body: Body payload, raw for binary bodies
        body_type: Content type matching the body kind
    """

    path: Dict[str, str] = Field(default_factory=dict)
    query: Dict[str, str] = Field(default_factory=dict)
    header: Dict[str, str] = Field(default_factory=dict)
    cookie: Dict[str, str] = Field(default_factory=dict)
    body: Optional[Any] = None
    body_type: Optional[ContentType] = None

    def bucket(self, location: ParamLocation) -> Dict[str, str]:
        """Return the wire-string mapping for a non-body location."""
        if location is ParamLocation.BODY:
            raise ValueError("The body location has no string bucket")
        return getattr(self, location.value)


def _encode_body(spec: ParamSpec, value: Any) -> Any:
    if spec.body_kind is BodyKind.BINARY:
        return value
    return param_string_value(value)


def params_by_location(
    definition: Mapping[str, ParamSpec], values: Mapping[str, Any]
) -> ClassifiedParams:
    """Route input values into path, query, header, cookie and body.

    Only properties named in ``definition`` are considered; values that are
    None or missing are skipped.

    Args:
        definition: Input definition keyed by property name
        values: Input values keyed by the same property names

    Returns:
        ClassifiedParams holding wire strings and the body

    Raises:
        DefinitionError: If the definition declares more than one body
    """
    validate_input_definition(definition)
    result = ClassifiedParams()
    for property_name, spec in definition.items():
        raw_value = values.get(property_name)
        if raw_value is None:
            continue
        if spec.is_body:
            result.body = _encode_body(spec, raw_value)
            result.body_type = spec.body_kind.content_type
        else:
            wire_name = spec.wire_name(property_name)
            result.bucket(spec.location)[wire_name] = param_string_value(raw_value)

    logger.debug(
        f"Classified params: path={len(result.path)} query={len(result.query)} "
        f"header={len(result.header)} cookie={len(result.cookie)} "
        f"body={result.body_type.value if result.body_type else None}"
    )
    return result


def get_http_method(operation: Union[OperationDef, str]) -> str:
    """Return the upper-case HTTP method of an operation or method name."""
    method = operation.method if isinstance(operation, OperationDef) else operation
    return method.upper()


__all__ = [
    "ClassifiedParams",
    "percent_encode",
    "build_path",
    "build_query",
    "build_url",
    "encode_cookies",
    "build_headers",
    "params_by_location",
    "get_http_method",
]
