r"""Shared connection used by every API engine.

Creating one HTTP client per request exhausts sockets under load. This
module provides a ``ConnectionProvider`` that builds a single
``httpx.AsyncClient`` on first use and reuses it for every request. The
provider also owns a dedicated event loop running on a daemon thread:
all the network I/O of the shared client happens on that loop, so the
client is never bound to two event loops and the synchronous entry
points can block on the asynchronous path without deadlocking.

Example:
    ```pycon
    >>> from crossclient.connection import default_connection_provider
    >>> provider = default_connection_provider()
    >>> provider is default_connection_provider()
    True
    >>> provider.get_client() is provider.get_client()
    True

    ```
"""

from __future__ import annotations

__all__ = ["ConnectionProvider", "HttpOutcome", "default_connection_provider"]

import asyncio
import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar

import httpx

from crossclient.core.config import DEFAULT_MAX_RESPONSE_SIZE, DEFAULT_TIMEOUT
from crossclient.core.validation import validate_max_response_size, validate_timeout
from crossclient.exceptions import ConnectionProviderError, ResponseTooLargeError

if TYPE_CHECKING:
    from collections.abc import Coroutine, Mapping

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)

# httpx decodes both encodings transparently
ACCEPT_ENCODING = "gzip, deflate"


@dataclass(frozen=True)
class HttpOutcome:
    r"""Raw outcome of an HTTP exchange with a fully buffered body.

    Attributes:
        status_code: The HTTP status code.
        reason_phrase: The HTTP reason phrase.
        content: The decoded (decompressed) response body.
        url: The URL that was requested.

    Example:
        ```pycon
        >>> from crossclient.connection import HttpOutcome
        >>> outcome = HttpOutcome(status_code=200, reason_phrase="OK", content=b'"pong"')
        >>> outcome.is_success
        True
        >>> outcome.text
        '"pong"'

        ```
    """

    status_code: int
    reason_phrase: str = ""
    content: bytes = b""
    url: str = ""

    @property
    def is_success(self) -> bool:
        r"""Whether the status code is in the 2xx range."""
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        r"""The body decoded as UTF-8."""
        return self.content.decode("utf-8", errors="replace")


class ConnectionProvider:
    r"""Owner of the long-lived HTTP client shared by all requests.

    The client is built lazily, exactly once, and its configuration is
    fixed at construction. The provider is safe to use from any thread
    and any event loop.

    Args:
        timeout: Connect/read timeout in seconds. Must be > 0.
        max_response_size: Maximum number of bytes buffered for a
            response body. Must be > 0.
        transport: Optional httpx transport, e.g. ``httpx.MockTransport``
            in tests. If ``None``, the default network transport is used.

    Example:
        ```pycon
        >>> import httpx
        >>> from crossclient.connection import ConnectionProvider
        >>> provider = ConnectionProvider(
        ...     transport=httpx.MockTransport(lambda request: httpx.Response(200, text="pong"))
        ... )
        >>> async def ping():
        ...     return await provider.fetch("GET", "https://svc.internal/ping")
        ...
        >>> provider.run(ping()).text
        'pong'
        >>> provider.close()

        ```
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        max_response_size: int = DEFAULT_MAX_RESPONSE_SIZE,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        validate_timeout(timeout)
        validate_max_response_size(max_response_size)
        self._timeout = timeout
        self._max_response_size = max_response_size
        self._transport = transport

        self._lock = threading.Lock()
        self._client: httpx.AsyncClient | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(timeout={self._timeout}, "
            f"max_response_size={self._max_response_size})"
        )

    @property
    def timeout(self) -> float:
        r"""The connect/read timeout in seconds."""
        return self._timeout

    @property
    def max_response_size(self) -> int:
        r"""The maximum number of bytes buffered for a response body."""
        return self._max_response_size

    def get_client(self) -> httpx.AsyncClient:
        r"""Return the shared HTTP client, building it on first use.

        Returns:
            The same ``httpx.AsyncClient`` on every call.

        Raises:
            ConnectionProviderError: If the client cannot be constructed.
        """
        if self._client is None:
            with self._lock:
                if self._client is None:
                    self._client = self._create_client()
        return self._client

    def _create_client(self) -> httpx.AsyncClient:
        try:
            client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={"Accept-Encoding": ACCEPT_ENCODING},
                transport=self._transport,
            )
        except Exception as exc:
            msg = f"Cannot construct the shared HTTP client: {exc}"
            raise ConnectionProviderError(msg) from exc
        logger.debug(f"Created the shared HTTP client (timeout={self._timeout}s)")
        return client

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            with self._lock:
                if self._loop is None:
                    loop = asyncio.new_event_loop()
                    thread = threading.Thread(
                        target=_run_forever, args=(loop,), name="crossclient-io", daemon=True
                    )
                    thread.start()
                    self._loop, self._thread = loop, thread
        return self._loop

    def _is_on_io_loop(self) -> bool:
        try:
            return asyncio.get_running_loop() is self._loop
        except RuntimeError:
            return False

    async def fetch(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        content: bytes | None = None,
    ) -> HttpOutcome:
        r"""Send a request with the shared client and buffer its body.

        Args:
            method: The HTTP method.
            url: The absolute URL to send the request to.
            headers: The request headers.
            content: The request body.

        Returns:
            The outcome of the exchange.

        Raises:
            ConnectionProviderError: If the shared client cannot be
                constructed.
            ResponseTooLargeError: If the body exceeds
                ``max_response_size``.
            httpx.HTTPError: If the transport fails.
        """
        client = self.get_client()
        loop = self._get_loop()
        coroutine = self._send(client, method, url, headers, content)
        if self._is_on_io_loop():
            return await coroutine
        return await asyncio.wrap_future(asyncio.run_coroutine_threadsafe(coroutine, loop))

    async def _send(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        headers: Mapping[str, str] | None,
        content: bytes | None,
    ) -> HttpOutcome:
        request = client.build_request(method, url, headers=headers, content=content)
        response = await client.send(request, stream=True)
        try:
            body = await self._read_body(response)
        finally:
            await response.aclose()
        return HttpOutcome(
            status_code=response.status_code,
            reason_phrase=response.reason_phrase,
            content=body,
            url=str(request.url),
        )

    async def _read_body(self, response: httpx.Response) -> bytes:
        buffer = bytearray()
        async for chunk in response.aiter_bytes():
            buffer.extend(chunk)
            if len(buffer) > self._max_response_size:
                raise ResponseTooLargeError(self._max_response_size)
        return bytes(buffer)

    def run(self, coroutine: Coroutine[Any, Any, T]) -> T:
        r"""Run a coroutine on the I/O loop and block until it completes.

        Args:
            coroutine: The coroutine to run.

        Returns:
            The result of the coroutine.

        Raises:
            RuntimeError: If called from the I/O loop itself, which would
                deadlock.
        """
        loop = self._get_loop()
        if self._is_on_io_loop():
            coroutine.close()
            msg = "Blocking calls cannot be made from the crossclient I/O event loop"
            raise RuntimeError(msg)
        return asyncio.run_coroutine_threadsafe(coroutine, loop).result()

    def close(self) -> None:
        r"""Close the shared client and stop the I/O loop.

        The default provider is never closed. This is meant for providers
        created explicitly, e.g. in tests.

        Raises:
            RuntimeError: If called from the I/O loop itself.
        """
        if self._is_on_io_loop():
            msg = "The connection provider cannot be closed from its own I/O event loop"
            raise RuntimeError(msg)
        with self._lock:
            client, loop, thread = self._client, self._loop, self._thread
            self._client = self._loop = self._thread = None
        if loop is None:
            return
        if client is not None:
            asyncio.run_coroutine_threadsafe(client.aclose(), loop).result()
        loop.call_soon_threadsafe(loop.stop)
        if thread is not None:
            thread.join()
        loop.close()
        logger.debug("Closed the shared HTTP client")


def _run_forever(loop: asyncio.AbstractEventLoop) -> None:
    asyncio.set_event_loop(loop)
    loop.run_forever()


_default_provider: ConnectionProvider | None = None
_default_provider_lock = threading.Lock()


def default_connection_provider() -> ConnectionProvider:
    r"""Return the process-wide connection provider.

    It is created once, on first use, with the default configuration and
    is never torn down.

    Returns:
        The same ``ConnectionProvider`` on every call.
    """
    global _default_provider  # noqa: PLW0603
    if _default_provider is None:
        with _default_provider_lock:
            if _default_provider is None:
                _default_provider = ConnectionProvider()
    return _default_provider
