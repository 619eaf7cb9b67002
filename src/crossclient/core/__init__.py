r"""Core shared logic of the API engine.

This package contains the configuration, the parameter validation, the
handshake protocol, and the request pipeline used by both the
synchronous and asynchronous entry points of ``ApiEngine``.
"""

from __future__ import annotations

__all__ = [
    "AUTHENTICATE_PATH",
    "AUTHENTICATION_ENABLED_KEY",
    "DEFAULT_MAX_RESPONSE_SIZE",
    "DEFAULT_TIMEOUT",
    "EngineConfig",
    "is_authentication_enabled",
    "validate_max_response_size",
    "validate_timeout",
]

from crossclient.core.config import (
    AUTHENTICATE_PATH,
    AUTHENTICATION_ENABLED_KEY,
    DEFAULT_MAX_RESPONSE_SIZE,
    DEFAULT_TIMEOUT,
    EngineConfig,
    is_authentication_enabled,
)
from crossclient.core.validation import validate_max_response_size, validate_timeout
