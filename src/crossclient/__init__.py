r"""crossclient - Client of a web API gateway with punchout handshake.

This package lets an application call a remote HTTP/JSON API gateway
under a two-phase trust model. A punchout setup request first discovers
the live service endpoint with long-lived client credentials, then an
authentication exchanges the user credentials for a short-lived session
token attached to every subsequent call. Built on top of httpx and
pydantic.

Key Features:
    - Punchout setup request and token-based authentication
    - GET, POST, PUT and DELETE calls, for single items or collections
    - Uniform ``Response`` record for every outcome: success, validation
      errors (HTTP 400), not found, other failures, transport exceptions
    - One shared connection per process, with a fixed timeout, a response
      size cap, and transparent gzip/deflate decompression
    - Asynchronous calls and blocking equivalents with identical behavior

Example:
    ```pycon
    >>> from crossclient import ApiEngine, Credentials
    >>> engine = ApiEngine(
    ...     Credentials(base_address="https://gw.example.com/", client_id="c1", shared_secret="s1")
    ... )
    >>> errors = engine.punchout_setup_request()  # doctest: +SKIP
    >>> user = engine.authenticate()  # doctest: +SKIP
    >>> response = engine.get("orders/1")  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "ApiEngine",
    "AuthenticatedUser",
    "AuthenticationRequiredError",
    "BusinessEntity",
    "ConfigurationError",
    "ConnectionProvider",
    "ConnectionProviderError",
    "Credentials",
    "CrossClientError",
    "EngineConfig",
    "PreconditionError",
    "PunchoutRequiredError",
    "Response",
    "ResponseTooLargeError",
    "TokenUser",
    "__version__",
    "default_connection_provider",
]

from importlib.metadata import PackageNotFoundError, version

from crossclient.connection import ConnectionProvider, default_connection_provider
from crossclient.core.config import EngineConfig
from crossclient.engine import ApiEngine
from crossclient.exceptions import (
    AuthenticationRequiredError,
    ConfigurationError,
    ConnectionProviderError,
    CrossClientError,
    PreconditionError,
    PunchoutRequiredError,
    ResponseTooLargeError,
)
from crossclient.models import AuthenticatedUser, BusinessEntity, Credentials, TokenUser
from crossclient.response import Response

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
