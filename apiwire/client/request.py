"""Request assembly for defined operations.

Runs the marshalling pipeline for one operation and bundles the result into
a ``PreparedRequest`` ready to hand to an HTTP transport.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field

from apiwire.config import ClientConfig
from apiwire.constants import ContentType
from apiwire.core.params import ControllerDef, OperationDef
from apiwire.exceptions import ConfigurationError

from .utils import build_headers, build_url, get_http_method, params_by_location

logger = logging.getLogger(__name__)


class PreparedRequest(BaseModel):
    """Transport-ready pieces of an HTTP request.

    Attributes:
        method: Upper-case HTTP method
        url: Fully resolved URL
        headers: Header map including Cookie and Content-Type
        body: Body payload (text, or raw bytes for binary bodies)
        body_type: Content type of the body
    """

    method: str
    url: str
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Optional[Any] = None
    body_type: Optional[ContentType] = None


def _resolve_endpoint(endpoint: Optional[str], config: Optional[ClientConfig]) -> str:
    resolved = endpoint or (config.endpoint if config else None)
    if not resolved:
        raise ConfigurationError(
            "No endpoint configured; pass endpoint= or set ClientConfig.endpoint"
        )
    return resolved[:-1] if resolved.endswith("/") else resolved


def prepare_request(
    operation: OperationDef,
    values: Mapping[str, Any],
    endpoint: Optional[str] = None,
    config: Optional[ClientConfig] = None,
) -> PreparedRequest:
    """Marshal input values for an operation into a prepared request.

    Args:
        operation: Operation definition
        values: Input values keyed by property name
        endpoint: Base URL; overrides ``config.endpoint``
        config: Client configuration providing endpoint and default headers

    Returns:
        PreparedRequest for the operation

    Raises:
        ConfigurationError: If no endpoint is available
        PathVariableMissing: If a path placeholder has no value
    """
    base_url = _resolve_endpoint(endpoint, config)
    classified = params_by_location(operation.input_def, values)

    headers: Dict[str, str] = dict(config.default_headers) if config else {}
    headers.update(classified.header)
    build_headers(headers, classified.cookie, classified.body_type)

    request = PreparedRequest(
        method=get_http_method(operation),
        url=build_url(base_url, operation.path, classified.path, classified.query),
        headers=headers,
        body=classified.body,
        body_type=classified.body_type,
    )
    logger.debug(
        f"Prepared {request.method} {operation.path} "
        f"(headers: {', '.join(request.headers) or 'none'})"
    )
    return request


class RequestMarshaller:
    """Prepares requests for the operations of a controller.

    Example:
        >>> marshaller = RequestMarshaller(controller, ClientConfig(endpoint="http://h"))
        >>> marshaller.prepare("hello", {"message": "hi"}).url
        'http://h/hello?message=hi'
    """

    def __init__(self, controller: ControllerDef, config: Optional[ClientConfig] = None):
        """Initialize the marshaller.

        Args:
            controller: Controller whose operations are prepared
            config: Client configuration; read from the environment if omitted
        """
        self.controller = controller
        self.config = config or ClientConfig.from_env()

    def prepare(self, operation_name: str, values: Mapping[str, Any]) -> PreparedRequest:
        """Prepare a request for the named operation.

        Raises:
            OperationNotFound: If the controller has no such operation
        """
        operation = self.controller.operation(operation_name)
        return prepare_request(operation, values, config=self.config)
