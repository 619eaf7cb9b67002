r"""Two-step handshake with the API gateway.

1. The punchout setup request presents the long-lived client credentials
   to the gateway and discovers the live service endpoint.
2. The authentication exchanges the user credentials for the session
   token attached to every later call.

Both steps report their failures as status messages and never raise for
transport or protocol errors.
"""

from __future__ import annotations

__all__ = ["authenticate", "format_status", "punchout_setup_request"]

import logging
from typing import TYPE_CHECKING, TypeVar

from crossclient.core.config import AUTHENTICATE_PATH
from crossclient.utils.exceptions import describe_handshake_error
from crossclient.utils.response import parse_model_state, strip_quotes
from crossclient.utils.serialization import deserialize

if TYPE_CHECKING:
    from crossclient.connection import ConnectionProvider, HttpOutcome
    from crossclient.session import SessionState

U = TypeVar("U")

logger: logging.Logger = logging.getLogger(__name__)

EMPTY_ENDPOINT_MESSAGE = "The api endpoint is null or empty"


def format_status(outcome: HttpOutcome, detail: str | None = None) -> str:
    r"""Format the status message of a failed handshake step.

    Args:
        outcome: The failed HTTP outcome.
        detail: The failure detail. Defaults to the reason phrase.

    Returns:
        The status message.

    Example:
        ```pycon
        >>> from crossclient.connection import HttpOutcome
        >>> from crossclient.core.handshake import format_status
        >>> format_status(HttpOutcome(status_code=403, reason_phrase="Forbidden"))
        'Status:403 - Detail:Forbidden'

        ```
    """
    if detail is None:
        detail = outcome.reason_phrase
    return f"Status:{outcome.status_code} - Detail:{detail}"


def _format_model_state(model_state: dict[str, list[str]]) -> str:
    return "\n".join(f"{key}:{' '.join(messages)}" for key, messages in model_state.items())


def _base_headers(session: SessionState) -> dict[str, str]:
    headers = {"Accept": "application/json"}
    if session.client_ip_address:
        headers["clientIPAddress"] = session.client_ip_address
    return headers


async def punchout_setup_request(
    session: SessionState, connection: ConnectionProvider
) -> list[str]:
    r"""Discover the service endpoint and store it in the session.

    The request is sent to ``credentials.base_address`` with the
    ``clientId`` and ``sharedSecret`` headers (plus ``clientIPAddress``
    when known). The
    body is the endpoint as a JSON string. Running the request again
    re-resolves the endpoint.

    Args:
        session: The session state, updated on success.
        connection: The shared connection.

    Returns:
        The error messages, empty on success.
    """
    errors: list[str] = []
    credentials = session.credentials
    headers = _base_headers(session)
    headers["clientId"] = credentials.client_id
    headers["sharedSecret"] = credentials.shared_secret

    try:
        outcome = await connection.fetch("GET", credentials.base_address, headers=headers)
    except Exception as exc:  # noqa: BLE001
        logger.debug(f"Punchout setup request to {credentials.base_address} failed: {exc}")
        errors.append(describe_handshake_error(exc))
        return errors

    if not outcome.is_success:
        logger.debug(
            f"Punchout setup request to {outcome.url} failed with status {outcome.status_code}"
        )
        errors.append(format_status(outcome))
        return errors

    endpoint = strip_quotes(outcome.text)
    if not endpoint:
        errors.append(EMPTY_ENDPOINT_MESSAGE)
        return errors

    session.current_endpoint = endpoint
    logger.debug(f"Discovered the service endpoint {endpoint}")
    return errors


async def authenticate(
    session: SessionState,
    connection: ConnectionProvider,
    user_type: type[U],
    *,
    enabled: bool = True,
) -> U:
    r"""Exchange the user credentials for a session token.

    The request is sent to ``<endpoint>authenticate`` with the
    ``username``, ``password``, and ``applicationCode`` headers. On
    success, the token of the returned user is stored in the session and
    its ``authentication_status`` is cleared. On failure, the returned
    user carries at least one status message.

    Args:
        session: The session state, updated on success.
        connection: The shared connection.
        user_type: The type the success body is decoded into. It must
            expose ``token`` and ``authentication_status`` and be
            constructible without arguments.
        enabled: Whether the authentication switch is on. If ``False``,
            an empty user is returned without any network call.

    Returns:
        The authenticated user, or an empty user with the failure
            messages in ``authentication_status``.
    """
    user = user_type()
    user.authentication_status = []
    if not enabled:
        return user

    credentials = session.credentials
    headers = _base_headers(session)
    headers["username"] = credentials.username
    headers["password"] = credentials.password
    headers["applicationCode"] = str(credentials.application_code)

    try:
        url = session.resolve_url(AUTHENTICATE_PATH)
        outcome = await connection.fetch("GET", url, headers=headers)
        if outcome.is_success:
            user = deserialize(outcome.content, user_type)
    except Exception as exc:  # noqa: BLE001
        logger.debug(f"Authentication of {credentials.username!r} failed: {exc}")
        user.authentication_status.append(describe_handshake_error(exc))
        return user

    if outcome.is_success:
        session.current_token = user.token
        user.authentication_status = []
        logger.debug(f"Authenticated {credentials.username!r}")
        return user

    model_state = parse_model_state(outcome.content)
    if model_state:
        user.authentication_status.append(format_status(outcome, _format_model_state(model_state)))
    else:
        user.authentication_status.append(format_status(outcome))
    logger.debug(
        f"Authentication of {credentials.username!r} at {outcome.url} failed with status "
        f"{outcome.status_code}"
    )
    return user
