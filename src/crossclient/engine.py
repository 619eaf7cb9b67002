r"""API engine in charge of connecting to the web API gateway.

The ``ApiEngine`` holds the session of one client (credentials,
discovered endpoint, session token) and exposes the handshake and the
GET/POST/PUT/DELETE calls. Every call is implemented once, as a
coroutine; the synchronous methods run the same coroutine on the I/O
loop of the shared connection and block until it completes.
"""

from __future__ import annotations

__all__ = ["ApiEngine"]

from typing import TYPE_CHECKING, Any, TypeVar

from crossclient.connection import default_connection_provider
from crossclient.core.config import EngineConfig
from crossclient.core.handshake import authenticate, punchout_setup_request
from crossclient.core.pipeline import dispatch
from crossclient.models import AuthenticatedUser
from crossclient.session import SessionState

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from crossclient.callbacks import RequestInfo, ResponseInfo
    from crossclient.connection import ConnectionProvider
    from crossclient.models import Credentials
    from crossclient.response import Response

T = TypeVar("T")
U = TypeVar("U")


class ApiEngine:
    r"""Client of the web API gateway.

    Before any business call, the application carries out the punchout
    setup request (endpoint discovery) and the authentication (session
    token). Both gates are skipped when the ``IsAuthenticationEnabled``
    setting is not ``"true"``.

    Asynchronous methods report a missing handshake step as a 401
    ``Response``; synchronous methods raise ``PunchoutRequiredError`` or
    ``AuthenticationRequiredError``.

    An engine must be used sequentially: its session state is not locked.
    Use one engine per concurrent session. All engines share the same
    connection by default.

    Args:
        credentials: The client credentials.
        client_ip_address: The IP address of the calling client, sent
            with every request when not empty.
        config: Optional engine configuration. If ``None``, the
            authentication switch is read from ``os.environ``.
        connection: Optional connection provider. If ``None``, the
            process-wide provider is used.
        on_request: Optional callback called before each request is
            sent. Overrides the one of ``config``.
        on_response: Optional callback called after each response is
            classified. Overrides the one of ``config``.

    Example:
        ```pycon
        >>> import asyncio
        >>> from crossclient import ApiEngine, Credentials
        >>> engine = ApiEngine(
        ...     Credentials(
        ...         base_address="https://gw.example.com/",
        ...         client_id="c1",
        ...         shared_secret="s1",
        ...         application_code=3,
        ...         username="jdoe",
        ...         password="secret",
        ...     )
        ... )
        >>> async def main():  # doctest: +SKIP
        ...     errors = await engine.punchout_setup_request_async()
        ...     user = await engine.authenticate_async()
        ...     return await engine.get_async("orders/1")
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        credentials: Credentials,
        *,
        client_ip_address: str = "",
        config: EngineConfig | None = None,
        connection: ConnectionProvider | None = None,
        on_request: Callable[[RequestInfo], None] | None = None,
        on_response: Callable[[ResponseInfo], None] | None = None,
    ) -> None:
        self._session = SessionState(credentials=credentials, client_ip_address=client_ip_address)
        self._config = (config if config is not None else EngineConfig()).merge(
            on_request=on_request, on_response=on_response
        )
        self._connection = connection if connection is not None else default_connection_provider()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(credentials={self._session.credentials!r}, "
            f"current_endpoint={self._session.current_endpoint!r})"
        )

    @property
    def session(self) -> SessionState:
        r"""The session state of this engine."""
        return self._session

    @property
    def credentials(self) -> Credentials:
        return self._session.credentials

    @credentials.setter
    def credentials(self, credentials: Credentials) -> None:
        self._session.rotate_credentials(credentials)

    @property
    def client_ip_address(self) -> str:
        return self._session.client_ip_address

    @property
    def current_endpoint(self) -> str | None:
        r"""The discovered service endpoint, or ``None``."""
        return self._session.current_endpoint

    @current_endpoint.setter
    def current_endpoint(self, endpoint: str | None) -> None:
        self._session.current_endpoint = endpoint

    @property
    def current_token(self) -> str | None:
        r"""The session token, or ``None`` before authentication."""
        return self._session.current_token

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def connection(self) -> ConnectionProvider:
        return self._connection

    def reset(self) -> None:
        r"""Forget the endpoint and the token to force a new handshake."""
        self._session.reset()

    def clear_token(self) -> None:
        r"""Forget the token to force a new authentication."""
        self._session.clear_token()

    ####################
    #     Handshake    #
    ####################

    async def punchout_setup_request_async(self) -> list[str]:
        r"""Discover the service endpoint with the client credentials.

        Returns:
            The error messages, empty on success.
        """
        return await punchout_setup_request(self._session, self._connection)

    def punchout_setup_request(self) -> list[str]:
        r"""Blocking version of ``punchout_setup_request_async``."""
        return self._connection.run(self.punchout_setup_request_async())

    async def authenticate_async(self, user_type: type[U] = AuthenticatedUser) -> U:
        r"""Obtain the session token with the user credentials.

        Args:
            user_type: The type the authenticated user is decoded into.
                It must expose ``token`` and ``authentication_status``.

        Returns:
            The user. An empty ``authentication_status`` means success.

        Raises:
            ConfigurationError: If the authentication switch is missing.
        """
        enabled = self._config.is_authentication_enabled()
        return await authenticate(self._session, self._connection, user_type, enabled=enabled)

    def authenticate(self, user_type: type[U] = AuthenticatedUser) -> U:
        r"""Blocking version of ``authenticate_async``."""
        return self._connection.run(self.authenticate_async(user_type))

    async def _dispatch(self, method: str, url: str, **kwargs: Any) -> Response[Any]:
        return await dispatch(
            method,
            url,
            session=self._session,
            connection=self._connection,
            config=self._config,
            **kwargs,
        )

    def _dispatch_sync(self, method: str, url: str, **kwargs: Any) -> Response[Any]:
        return self._connection.run(self._dispatch(method, url, strict=True, **kwargs))

    ##############
    #     GET    #
    ##############

    async def get_async(self, url: str, credentials: Credentials | None = None) -> Response[str]:
        r"""Get a string from the gateway with the GET verb.

        The escape backslashes and surrounding quotes of the body are
        removed.

        Args:
            url: The URL relative to the discovered endpoint.
            credentials: Optional credentials replacing the current ones.

        Returns:
            The response, with the body in ``data``.
        """
        return await self._dispatch("GET", url, as_text=True, credentials=credentials)

    def get(self, url: str, credentials: Credentials | None = None) -> Response[str]:
        r"""Blocking version of ``get_async``.

        Raises:
            PreconditionError: If the handshake is not complete.
        """
        return self._dispatch_sync("GET", url, as_text=True, credentials=credentials)

    async def get_item_async(
        self, url: str, result_type: type[T], credentials: Credentials | None = None
    ) -> Response[T]:
        r"""Get an object from the gateway with the GET verb.

        Args:
            url: The URL relative to the discovered endpoint.
            result_type: The type the body is decoded into.
            credentials: Optional credentials replacing the current ones.

        Returns:
            The response, with the decoded object in ``data``.
        """
        return await self._dispatch(
            "GET", url, result_type=result_type, credentials=credentials
        )

    def get_item(
        self, url: str, result_type: type[T], credentials: Credentials | None = None
    ) -> Response[T]:
        r"""Blocking version of ``get_item_async``."""
        return self._dispatch_sync("GET", url, result_type=result_type, credentials=credentials)

    async def get_items_async(
        self, url: str, item_type: type[T], credentials: Credentials | None = None
    ) -> Response[list[T]]:
        r"""Get a list of objects from the gateway with the GET verb."""
        return await self._dispatch(
            "GET", url, result_type=list[item_type], credentials=credentials
        )

    def get_items(
        self, url: str, item_type: type[T], credentials: Credentials | None = None
    ) -> Response[list[T]]:
        r"""Blocking version of ``get_items_async``."""
        return self._dispatch_sync(
            "GET", url, result_type=list[item_type], credentials=credentials
        )

    ###############
    #     POST    #
    ###############

    async def post_async(
        self,
        url: str,
        payload: Any = None,
        result_type: type[T] | None = None,
        credentials: Credentials | None = None,
    ) -> Response[Any]:
        r"""Send an object to the gateway with the POST verb.

        Args:
            url: The URL relative to the discovered endpoint.
            payload: Optional entity sent as JSON. Its
                ``mapped_properties`` are cleared before sending.
            result_type: Optional type the body is decoded into. If
                ``None``, ``data`` is ``True`` on success.
            credentials: Optional credentials replacing the current ones.

        Returns:
            The response.
        """
        return await self._dispatch(
            "POST", url, payload=payload, result_type=result_type, credentials=credentials
        )

    def post(
        self,
        url: str,
        payload: Any = None,
        result_type: type[T] | None = None,
        credentials: Credentials | None = None,
    ) -> Response[Any]:
        r"""Blocking version of ``post_async``."""
        return self._dispatch_sync(
            "POST", url, payload=payload, result_type=result_type, credentials=credentials
        )

    async def post_items_async(
        self,
        url: str,
        payloads: Iterable[Any],
        result_type: type[T] | None = None,
        credentials: Credentials | None = None,
    ) -> Response[Any]:
        r"""Send a list of objects to the gateway with the POST verb."""
        return await self._dispatch(
            "POST",
            url,
            payload=list(payloads),
            result_type=result_type,
            credentials=credentials,
        )

    def post_items(
        self,
        url: str,
        payloads: Iterable[Any],
        result_type: type[T] | None = None,
        credentials: Credentials | None = None,
    ) -> Response[Any]:
        r"""Blocking version of ``post_items_async``."""
        return self._dispatch_sync(
            "POST",
            url,
            payload=list(payloads),
            result_type=result_type,
            credentials=credentials,
        )

    ##############
    #     PUT    #
    ##############

    async def put_async(
        self, url: str, payload: Any = None, credentials: Credentials | None = None
    ) -> Response[bool]:
        r"""Send an object to the gateway with the PUT verb.

        Returns:
            The response, with ``data=True`` on success.
        """
        return await self._dispatch("PUT", url, payload=payload, credentials=credentials)

    def put(
        self, url: str, payload: Any = None, credentials: Credentials | None = None
    ) -> Response[bool]:
        r"""Blocking version of ``put_async``."""
        return self._dispatch_sync("PUT", url, payload=payload, credentials=credentials)

    async def put_items_async(
        self, url: str, payloads: Iterable[Any], credentials: Credentials | None = None
    ) -> Response[bool]:
        r"""Send a list of objects to the gateway with the PUT verb."""
        return await self._dispatch("PUT", url, payload=list(payloads), credentials=credentials)

    def put_items(
        self, url: str, payloads: Iterable[Any], credentials: Credentials | None = None
    ) -> Response[bool]:
        r"""Blocking version of ``put_items_async``."""
        return self._dispatch_sync("PUT", url, payload=list(payloads), credentials=credentials)

    #################
    #     DELETE    #
    #################

    async def delete_async(
        self, url: str, credentials: Credentials | None = None
    ) -> Response[bool]:
        r"""Delete a resource of the gateway with the DELETE verb.

        Returns:
            The response, with ``data=True`` on success.
        """
        return await self._dispatch("DELETE", url, credentials=credentials)

    def delete(self, url: str, credentials: Credentials | None = None) -> Response[bool]:
        r"""Blocking version of ``delete_async``."""
        return self._dispatch_sync("DELETE", url, credentials=credentials)
