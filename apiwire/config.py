"""Configuration model for the apiwire client side.

This module provides the configuration consumed when preparing requests:
the base endpoint, headers sent with every request, and the log level.
"""

import logging
import os
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator

from apiwire.constants import Defaults, EnvVars

logger = logging.getLogger(__name__)


class ClientConfig(BaseModel):
    """Configuration model for request marshalling.

    Attributes:
        endpoint: Base URL that resolved paths are appended to
        default_headers: Headers copied into every prepared request
        log_level: Logging level for the ``apiwire`` logger
    """

    endpoint: Optional[str] = Field(
        default=None, description="Base URL, e.g. http://localhost:8080"
    )
    default_headers: Dict[str, str] = Field(default_factory=dict)
    log_level: str = Defaults.LOG_LEVEL

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.lower()

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Build a configuration from environment variables.

        Environment Variables:
            APIWIRE_ENDPOINT: Base URL for requests
            APIWIRE_DEFAULT_HEADERS: Comma-separated ``Name=Value`` pairs
            APIWIRE_LOG_LEVEL: Log level name (default: "warning")

        Returns:
            ClientConfig populated from the environment
        """
        headers: Dict[str, str] = {}
        raw_headers = os.getenv(EnvVars.DEFAULT_HEADERS, "")
        for pair in raw_headers.split(","):
            if not pair.strip():
                continue
            name, sep, value = pair.partition("=")
            if not sep or not name.strip():
                logger.warning(f"Invalid default header entry: {pair!r}, skipping")
                continue
            headers[name.strip()] = value.strip()

        return cls(
            endpoint=os.getenv(EnvVars.ENDPOINT) or None,
            default_headers=headers,
            log_level=os.getenv(EnvVars.LOG_LEVEL, Defaults.LOG_LEVEL),
        )

    def configure_logging(self) -> None:
        """Apply ``log_level`` to the package logger."""
        level = getattr(logging, self.log_level.upper(), None)
        if not isinstance(level, int):
            logger.warning(f"Invalid log level: {self.log_level}, using WARNING")
            level = logging.WARNING
        logging.getLogger("apiwire").setLevel(level)
