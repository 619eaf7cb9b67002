r"""Exception handling utilities for the request pipeline and the
handshake.

Exceptions raised by the transport never escape the pipeline. They are
turned into failed ``Response`` records (pipeline) or status messages
(handshake).
"""

from __future__ import annotations

__all__ = [
    "INVALID_ENDPOINT_MESSAGE",
    "MAX_CAUSE_DEPTH",
    "classify_exception",
    "describe_handshake_error",
    "format_exception_chain",
]

import httpx

from crossclient.response import Response

INVALID_ENDPOINT_MESSAGE = "The api endpoint is not a valid string input. Details:{details}"

# Number of chained causes reported below the exception itself
MAX_CAUSE_DEPTH = 3


def _get_message(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


def _get_cause(exc: BaseException) -> BaseException | None:
    if exc.__cause__ is not None:
        return exc.__cause__
    if exc.__suppress_context__:
        return None
    return exc.__context__


def format_exception_chain(exc: BaseException, max_depth: int = MAX_CAUSE_DEPTH) -> str:
    r"""Join the messages of an exception and its chained causes.

    Args:
        exc: The exception to describe.
        max_depth: Maximum number of causes reported below ``exc``.

    Returns:
        One message per line, starting with ``exc``.

    Example:
        ```pycon
        >>> from crossclient.utils.exceptions import format_exception_chain
        >>> try:
        ...     try:
        ...         raise ValueError("B")
        ...     except ValueError as inner:
        ...         raise RuntimeError("A") from inner
        ... except RuntimeError as exc:
        ...     print(format_exception_chain(exc))
        ...
        A
        B

        ```
    """
    messages = [_get_message(exc)]
    cause = _get_cause(exc)
    while cause is not None and len(messages) <= max_depth:
        messages.append(_get_message(cause))
        cause = _get_cause(cause)
    return "\n".join(messages)


def classify_exception(exc: BaseException) -> Response[object]:
    r"""Build the response of a call whose transport failed.

    Args:
        exc: The exception raised while sending the request or reading
            the response.

    Returns:
        A failed response with ``status_code`` 0.
    """
    return Response(error_message=format_exception_chain(exc))


def describe_handshake_error(exc: Exception) -> str:
    r"""Return the status message of a handshake step that raised.

    Args:
        exc: The exception raised by the handshake step.

    Returns:
        A dedicated message for malformed endpoint URLs and grouped
            errors, otherwise the exception message.

    Example:
        ```pycon
        >>> import httpx
        >>> from crossclient.utils.exceptions import describe_handshake_error
        >>> describe_handshake_error(httpx.UnsupportedProtocol("missing protocol"))
        'The api endpoint is not a valid string input. Details:missing protocol'
        >>> describe_handshake_error(httpx.ConnectError("refused"))
        'refused'

        ```
    """
    if isinstance(exc, (httpx.InvalidURL, httpx.UnsupportedProtocol, ExceptionGroup)):
        return INVALID_ENDPOINT_MESSAGE.format(details=_get_message(exc))
    return _get_message(exc)
