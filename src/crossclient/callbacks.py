r"""Callback types and data structures for observability.

This module lets applications hook into the request pipeline for
logging, metrics, or alerting. Two lifecycle hooks are provided:

- on_request: Called before a request is sent to the gateway
- on_response: Called after the outcome has been classified

Example:
    ```pycon
    >>> from crossclient.callbacks import ResponseInfo
    >>> from crossclient.core.config import EngineConfig
    >>> def log_response(info: ResponseInfo) -> None:
    ...     print(f"{info.method} {info.url} -> {info.status_code}")
    ...
    >>> config = EngineConfig(on_response=log_response)

    ```
"""

from __future__ import annotations

__all__ = ["RequestInfo", "ResponseInfo", "invoke_on_request", "invoke_on_response"]

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass
class RequestInfo:
    """Information passed to on_request callback.

    Attributes:
        url: The resolved URL being requested.
        method: The HTTP method (e.g., "GET", "POST").
        has_body: Whether a JSON body is sent with the request.
    """

    url: str
    method: str
    has_body: bool


@dataclass
class ResponseInfo:
    """Information passed to on_response callback.

    Attributes:
        url: The resolved URL that was requested.
        method: The HTTP method (e.g., "GET", "POST").
        status_code: The HTTP status code, or 0 if the transport failed.
        is_ok: Whether the call succeeded.
        total_time: Time spent sending the request and classifying the
            outcome (seconds).
    """

    url: str
    method: str
    status_code: int
    is_ok: bool
    total_time: float


def invoke_on_request(
    on_request: Callable[[RequestInfo], None] | None,
    *,
    url: str,
    method: str,
    has_body: bool,
) -> None:
    """Invoke the on_request callback if provided.

    Args:
        on_request: Optional callback to invoke.
        url: The resolved URL being requested.
        method: The HTTP method.
        has_body: Whether a JSON body is sent.
    """
    if on_request is not None:
        on_request(RequestInfo(url=url, method=method, has_body=has_body))


def invoke_on_response(
    on_response: Callable[[ResponseInfo], None] | None,
    *,
    url: str,
    method: str,
    status_code: int,
    is_ok: bool,
    total_time: float,
) -> None:
    """Invoke the on_response callback if provided.

    Args:
        on_response: Optional callback to invoke.
        url: The resolved URL that was requested.
        method: The HTTP method.
        status_code: The HTTP status code, or 0 on transport failure.
        is_ok: Whether the call succeeded.
        total_time: Elapsed time in seconds.
    """
    if on_response is not None:
        on_response(
            ResponseInfo(
                url=url,
                method=method,
                status_code=status_code,
                is_ok=is_ok,
                total_time=total_time,
            )
        )
