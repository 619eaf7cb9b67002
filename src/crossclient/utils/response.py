r"""Classification of HTTP outcomes into ``Response`` records.

The classification mirrors the gateway conventions: 2xx is a success,
400 carries field-level validation messages, 404 is normalized without
looking at the body, and any other status is reported with its reason
phrase and raw body.
"""

from __future__ import annotations

__all__ = [
    "NOT_FOUND_MESSAGE",
    "classify_failure",
    "classify_outcome",
    "parse_model_state",
    "strip_quotes",
]

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from crossclient.models import BadRequestResponse
from crossclient.response import Response
from crossclient.utils.serialization import deserialize

if TYPE_CHECKING:
    from crossclient.connection import HttpOutcome

logger: logging.Logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Endpoint or resource not found"

BAD_REQUEST = 400
NOT_FOUND = 404


def strip_quotes(text: str) -> str:
    r"""Remove the escape backslashes and the surrounding quotes of a
    JSON string body.

    Args:
        text: The raw body.

    Returns:
        The cleaned string.

    Example:
        ```pycon
        >>> from crossclient.utils.response import strip_quotes
        >>> strip_quotes('"\\"https://svc.internal/\\""')
        'https://svc.internal/'

        ```
    """
    return text.replace("\\", "").strip('"')


def parse_model_state(content: bytes | str) -> dict[str, list[str]] | None:
    r"""Parse the validation-error envelope of a 400 response.

    Args:
        content: The raw body.

    Returns:
        The field-level messages, or ``None`` if the body is not a
            validation-error envelope.

    Example:
        ```pycon
        >>> from crossclient.utils.response import parse_model_state
        >>> parse_model_state(b'{"ModelState": {"name": ["Required"]}}')
        {'name': ['Required']}
        >>> parse_model_state(b"<html></html>") is None
        True

        ```
    """
    try:
        envelope = BadRequestResponse.model_validate_json(content)
    except ValidationError:
        logger.debug("The 400 response body is not a validation-error envelope")
        return None
    return envelope.model_state


def classify_failure(outcome: HttpOutcome) -> Response[Any]:
    r"""Build the response of a non-2xx outcome.

    Args:
        outcome: The raw HTTP outcome.

    Returns:
        A failed response. Only 400 fills ``model_state``; every other
            status fills ``error_message``.
    """
    if outcome.status_code == BAD_REQUEST:
        return Response(
            status_code=outcome.status_code, model_state=parse_model_state(outcome.content)
        )
    if outcome.status_code == NOT_FOUND:
        return Response(status_code=outcome.status_code, error_message=NOT_FOUND_MESSAGE)
    return Response(
        status_code=outcome.status_code,
        error_message=f"{outcome.reason_phrase}. {outcome.text}",
    )


def classify_outcome(
    outcome: HttpOutcome,
    *,
    result_type: Any = None,
    as_text: bool = False,
) -> Response[Any]:
    r"""Build the response of an HTTP outcome.

    Args:
        outcome: The raw HTTP outcome.
        result_type: The type the success body is decoded into. If
            ``None``, no body is expected.
        as_text: If ``True`` and ``result_type`` is ``None``, the success
            body is returned as a string with its quotes stripped.

    Returns:
        The classified response. A success without ``result_type`` nor
            ``as_text`` has ``data=True``.

    Raises:
        pydantic.ValidationError: If the success body does not match
            ``result_type``.
    """
    if not outcome.is_success:
        return classify_failure(outcome)

    if result_type is not None:
        data = deserialize(outcome.content, result_type) if outcome.content.strip() else None
    elif as_text:
        data = strip_quotes(outcome.text)
    else:
        data = True
    return Response(data=data, is_ok=True, status_code=outcome.status_code)
