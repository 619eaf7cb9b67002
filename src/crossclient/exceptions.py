r"""Define the exceptions raised by crossclient.

Only a few failures ever leave the library as exceptions: a missing
configuration switch, a shared connection that cannot be built, and the
precondition checks of the synchronous entry points. Every other failure
is reported to the caller as a ``Response``.
"""

from __future__ import annotations

__all__ = [
    "AuthenticationRequiredError",
    "ConfigurationError",
    "ConnectionProviderError",
    "CrossClientError",
    "PreconditionError",
    "PunchoutRequiredError",
    "ResponseTooLargeError",
]


class CrossClientError(Exception):
    r"""Base class of all the crossclient exceptions."""


class ConfigurationError(CrossClientError):
    r"""Raised when a required configuration setting is missing.

    Args:
        key: The name of the missing setting.

    Example:
        ```pycon
        >>> from crossclient.exceptions import ConfigurationError
        >>> err = ConfigurationError("IsAuthenticationEnabled")
        >>> err.key
        'IsAuthenticationEnabled'

        ```
    """

    def __init__(self, key: str) -> None:
        super().__init__(f"The configuration setting '{key}' is missing")
        self.key = key


class ConnectionProviderError(CrossClientError):
    r"""Raised when the shared HTTP client cannot be constructed."""


class ResponseTooLargeError(CrossClientError):
    r"""Raised when a response body exceeds the buffer size limit.

    Args:
        max_size: The maximum number of bytes that can be buffered.
    """

    def __init__(self, max_size: int) -> None:
        super().__init__(
            f"Cannot write more bytes to the buffer than the configured maximum "
            f"buffer size: {max_size}"
        )
        self.max_size = max_size


class PreconditionError(CrossClientError):
    r"""Raised by synchronous calls made before the handshake is
    complete."""


class PunchoutRequiredError(PreconditionError):
    r"""Raised when no service endpoint has been discovered yet."""

    def __init__(self) -> None:
        super().__init__("Please carry out the punchout setup request in order to continue")


class AuthenticationRequiredError(PreconditionError):
    r"""Raised when no session token has been obtained yet."""

    def __init__(self) -> None:
        super().__init__("Please carry out the authentication process in order to continue")
