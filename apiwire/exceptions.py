"""Exception classes for apiwire.

All errors raised by the marshalling pipeline derive from ``ApiWireError``
and carry a machine-readable ``error_code`` alongside the human message.
"""

from typing import Any, Dict, Optional


class ApiWireError(Exception):
    """Base exception for apiwire.

    Attributes:
        message: Human-readable error message
        error_code: Stable, machine-readable error identifier
        details: Optional structured context for the error
    """

    error_code: str = "apiwire_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize the exception.

        Args:
            message: Error message
            details: Additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert the exception to a serializable dictionary."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class PathVariableMissing(ApiWireError):
    """Raised when a path template placeholder has no usable value."""

    error_code = "path_variable_missing"

    def __init__(self, variable: str, template: Optional[str] = None):
        self.variable = variable
        self.template = template
        super().__init__(
            f"Could not resolve path variable:'{variable}'",
            details={"variable": variable, "template": template},
        )


class DefinitionError(ApiWireError):
    """Raised when an operation or input definition is malformed."""

    error_code = "invalid_definition"


class ConfigurationError(ApiWireError):
    """Raised when required client configuration is missing."""

    error_code = "configuration_error"


class ValueEncodingError(ApiWireError):
    """Raised when a value cannot be converted to its wire form."""

    error_code = "value_encoding_error"


class OperationNotFound(ApiWireError):
    """Raised when a controller has no operation with the requested name."""

    error_code = "operation_not_found"

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(
            f"Unknown operation: '{operation}'", details={"operation": operation}
        )


__all__ = [
    "ApiWireError",
    "PathVariableMissing",
    "DefinitionError",
    "ConfigurationError",
    "OperationNotFound",
    "ValueEncodingError",
]
