r"""Shared test helpers for the gateway tests.

This module contains a fake gateway plugged into ``httpx.MockTransport``
so the tests exercise the real shared connection without any network.
"""

from __future__ import annotations

__all__ = [
    "ENDPOINT",
    "GATEWAY_URL",
    "GatewayStub",
    "Order",
    "fail_with",
    "respond",
]

import json
from typing import TYPE_CHECKING, Any

import httpx

from crossclient.models import BusinessEntity

if TYPE_CHECKING:
    from collections.abc import Callable

GATEWAY_URL = "https://gw/"
ENDPOINT = "https://svc.internal/"


class Order(BusinessEntity):
    r"""Business entity used in the pipeline tests."""

    id: int = 0
    name: str = ""


def respond(
    status_code: int = 200,
    *,
    text: str | None = None,
    json_body: Any = None,
    content: bytes | None = None,
    headers: dict[str, str] | None = None,
    reason: str | None = None,
) -> Callable[[httpx.Request], httpx.Response]:
    r"""Create a route returning a fresh response on every request."""

    def route(request: httpx.Request) -> httpx.Response:
        kwargs: dict[str, Any] = {"headers": headers}
        if json_body is not None:
            kwargs["content"] = json.dumps(json_body).encode()
        elif text is not None:
            kwargs["text"] = text
        elif content is not None:
            kwargs["content"] = content
        if reason is not None:
            kwargs["extensions"] = {"reason_phrase": reason.encode()}
        return httpx.Response(status_code, request=request, **kwargs)

    return route


def fail_with(exc: Exception) -> Callable[[httpx.Request], httpx.Response]:
    r"""Create a route raising ``exc`` as the transport would."""

    def route(request: httpx.Request) -> httpx.Response:
        raise exc

    return route


class GatewayStub:
    r"""Fake gateway routing requests by ``"<METHOD> <url>"``.

    Unknown routes answer 404. Every request is recorded.
    """

    def __init__(self) -> None:
        self.routes: dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self, method: str, url: str, route: Callable[[httpx.Request], httpx.Response]
    ) -> None:
        self.routes[f"{method} {url}"] = route

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(f"{request.method} {request.url}")
        if route is None:
            return httpx.Response(404, text="<html>Not Found</html>", request=request)
        return route(request)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]
