r"""Uniform outcome record returned by every pipeline call."""

from __future__ import annotations

__all__ = [
    "AUTHENTICATION_REQUIRED_MESSAGE",
    "PUNCHOUT_REQUIRED_MESSAGE",
    "Response",
    "authentication_required_response",
    "punchout_required_response",
]

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")

PUNCHOUT_REQUIRED_MESSAGE = "Please, carry out the punchout setup request"
AUTHENTICATION_REQUIRED_MESSAGE = "Please, carry out the authentication process"

UNAUTHORIZED = 401


@dataclass
class Response(Generic[T]):
    r"""Outcome of a call to the API gateway.

    ``is_ok`` implies that ``error_message`` and ``model_state`` are
    ``None``. ``model_state`` is only set for validation errors (HTTP
    400). ``status_code`` stays at 0 when the transport itself failed.

    Attributes:
        data: The deserialized body, ``True`` for a successful call
            without result, or ``None``.
        is_ok: Whether the call succeeded.
        status_code: The HTTP status code.
        error_message: The error description for failed calls.
        model_state: The field-level validation messages.

    Example:
        ```pycon
        >>> from crossclient.response import Response
        >>> response = Response(data="pong", is_ok=True, status_code=200)
        >>> response.is_ok
        True

        ```
    """

    data: T | None = None
    is_ok: bool = False
    status_code: int = 0
    error_message: str | None = None
    model_state: dict[str, list[str]] | None = None


def punchout_required_response() -> Response[Any]:
    r"""Return the response of a call made before the punchout setup
    request.

    Example:
        ```pycon
        >>> from crossclient.response import punchout_required_response
        >>> punchout_required_response()
        Response(data=None, is_ok=False, status_code=401, error_message='Please, carry out the punchout setup request', model_state=None)

        ```
    """
    return Response(status_code=UNAUTHORIZED, error_message=PUNCHOUT_REQUIRED_MESSAGE)


def authentication_required_response() -> Response[Any]:
    r"""Return the response of a call made before the authentication
    process."""
    return Response(status_code=UNAUTHORIZED, error_message=AUTHENTICATION_REQUIRED_MESSAGE)
