r"""Configuration dataclass and defaults for ApiEngine.

This module provides the transport defaults, the names of the gateway
settings, and a dataclass-based configuration object for the
``ApiEngine`` class.
"""

from __future__ import annotations

__all__ = [
    "AUTHENTICATE_PATH",
    "AUTHENTICATION_ENABLED_KEY",
    "DEFAULT_MAX_RESPONSE_SIZE",
    "DEFAULT_TIMEOUT",
    "EngineConfig",
    "is_authentication_enabled",
]

import os
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from crossclient.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from crossclient.callbacks import RequestInfo, ResponseInfo


# Default connect/read timeout in seconds for the shared client
DEFAULT_TIMEOUT = 15.0

# Maximum number of bytes buffered for a single response body
DEFAULT_MAX_RESPONSE_SIZE = 256_000

# Name of the setting that turns the punchout/authentication gates on
AUTHENTICATION_ENABLED_KEY = "IsAuthenticationEnabled"

# Relative path of the token exchange on the discovered endpoint
AUTHENTICATE_PATH = "authenticate"


def is_authentication_enabled(settings: Mapping[str, Any]) -> bool:
    """Read the authentication switch from the settings.

    Args:
        settings: The settings mapping, e.g. ``os.environ``.

    Returns:
        ``True`` if the setting is the boolean ``True`` or the string
            ``"true"`` (case-insensitive), otherwise ``False``.

    Raises:
        ConfigurationError: If the setting is missing.

    Example:
        ```pycon
        >>> from crossclient.core.config import is_authentication_enabled
        >>> is_authentication_enabled({"IsAuthenticationEnabled": "True"})
        True
        >>> is_authentication_enabled({"IsAuthenticationEnabled": "false"})
        False

        ```
    """
    value = settings.get(AUTHENTICATION_ENABLED_KEY)
    if value is None:
        raise ConfigurationError(AUTHENTICATION_ENABLED_KEY)
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


@dataclass
class EngineConfig:
    """Configuration for ApiEngine behavior.

    Note:
        The transport settings (timeout, buffer size) are NOT included
        in this config as they belong to the shared
        ``ConnectionProvider``.

    Args:
        settings: Mapping the authentication switch is read from on
            every call. Defaults to ``os.environ``.
        on_request: Optional callback called before each request is sent.
        on_response: Optional callback called after each response is
            classified.

    Example:
        ```pycon
        >>> from crossclient.core.config import EngineConfig
        >>> config = EngineConfig(settings={"IsAuthenticationEnabled": "true"})
        >>> config.is_authentication_enabled()
        True
        >>> merged = config.merge(settings={"IsAuthenticationEnabled": "false"})
        >>> merged.is_authentication_enabled()
        False
        >>> config.is_authentication_enabled()  # Original unchanged
        True

        ```
    """

    settings: Mapping[str, Any] = field(default_factory=lambda: os.environ)
    on_request: Callable[[RequestInfo], None] | None = None
    on_response: Callable[[ResponseInfo], None] | None = None

    def is_authentication_enabled(self) -> bool:
        """Read the authentication switch from ``settings``.

        Returns:
            ``True`` if the punchout/authentication gates must run.

        Raises:
            ConfigurationError: If the setting is missing.
        """
        return is_authentication_enabled(self.settings)

    def merge(self, **overrides: Any) -> EngineConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new EngineConfig instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)
