"""Constants for apiwire.

This module provides centralized constants for content types, header names,
environment variables, and other magic strings used throughout the marshalling layer.
"""

from enum import Enum


class ContentType(str, Enum):
    """Content types a request body can be sent with."""

    OCTET_STREAM = "application/octet-stream"
    JSON = "application/json"
    TEXT = "text/plain"


class HeaderNames:
    """Header names set by the marshaller."""

    COOKIE = "Cookie"
    CONTENT_TYPE = "Content-Type"


class EnvVars:
    """Environment variables read by ``ClientConfig.from_env``."""

    ENDPOINT = "APIWIRE_ENDPOINT"
    DEFAULT_HEADERS = "APIWIRE_DEFAULT_HEADERS"
    LOG_LEVEL = "APIWIRE_LOG_LEVEL"


class Defaults:
    """Default configuration values."""

    LOG_LEVEL = "warning"

    # Largest integer a JSON consumer using IEEE-754 doubles holds exactly
    MAX_SAFE_INTEGER = 2**53 - 1

    # Floats at or above this magnitude print in exponent notation
    FLOAT_EXPONENT_THRESHOLD = 1e21


__all__ = [
    "ContentType",
    "HeaderNames",
    "EnvVars",
    "Defaults",
]
