r"""Generic request pipeline shared by every verb and result shape.

Every call of ``ApiEngine`` goes through ``dispatch``, parameterized by
the HTTP verb, the payload sent with write verbs, and the type the
success body is decoded into. Gating, header attachment, failure
classification, and exception handling are therefore identical for all
shapes.
"""

from __future__ import annotations

__all__ = ["WRITE_METHODS", "build_headers", "dispatch"]

import logging
import time
from typing import TYPE_CHECKING, Any

from crossclient.callbacks import invoke_on_request, invoke_on_response
from crossclient.exceptions import ConnectionProviderError
from crossclient.session import GateStatus
from crossclient.utils.exceptions import classify_exception
from crossclient.utils.response import classify_outcome
from crossclient.utils.serialization import clear_mapped_properties, serialize

if TYPE_CHECKING:
    from crossclient.connection import ConnectionProvider
    from crossclient.core.config import EngineConfig
    from crossclient.models import Credentials
    from crossclient.response import Response
    from crossclient.session import SessionState

logger: logging.Logger = logging.getLogger(__name__)

WRITE_METHODS = frozenset({"POST", "PUT"})


def build_headers(session: SessionState) -> dict[str, str]:
    r"""Build the headers attached to every pipeline request.

    Args:
        session: The session state.

    Returns:
        The ``Accept`` header, plus ``clientIPAddress`` when known and
            ``tokenCode`` once authenticated.

    Example:
        ```pycon
        >>> from crossclient.core.pipeline import build_headers
        >>> from crossclient.models import Credentials
        >>> from crossclient.session import SessionState
        >>> session = SessionState(
        ...     credentials=Credentials(base_address="https://gw/"), client_ip_address="10.0.0.1"
        ... )
        >>> session.current_token = "t0k3n"
        >>> build_headers(session)
        {'Accept': 'application/json', 'clientIPAddress': '10.0.0.1', 'tokenCode': 't0k3n'}

        ```
    """
    headers = {"Accept": "application/json"}
    if session.client_ip_address:
        headers["clientIPAddress"] = session.client_ip_address
    if session.current_token:
        headers["tokenCode"] = session.current_token
    return headers


async def dispatch(
    method: str,
    url: str,
    *,
    session: SessionState,
    connection: ConnectionProvider,
    config: EngineConfig,
    payload: Any = None,
    result_type: Any = None,
    as_text: bool = False,
    strict: bool = False,
    credentials: Credentials | None = None,
) -> Response[Any]:
    r"""Send a request to the discovered endpoint and classify the
    outcome.

    Args:
        method: The HTTP method (GET, POST, PUT, DELETE).
        url: The URL relative to the endpoint, or an absolute URL
            already starting with it.
        session: The session state.
        connection: The shared connection.
        config: The engine configuration.
        payload: The entity or list of entities sent with a write verb.
            Its ``mapped_properties`` are cleared before serialization.
        result_type: The type the success body is decoded into. If
            ``None``, a success has ``data=True`` (or the body as a string
            if ``as_text`` is ``True``).
        as_text: Whether to return the success body as a string with its
            quotes stripped.
        strict: If ``True``, a failed gate raises instead of returning a
            401 sentinel response. Used by the synchronous entry points.
        credentials: Optional credentials replacing the session ones
            before the gate runs. Different credentials end the current
            session, see ``SessionState.rotate_credentials``.

    Returns:
        The classified response.

    Raises:
        ConfigurationError: If the authentication switch is missing.
        ConnectionProviderError: If the shared client cannot be built.
        PreconditionError: If ``strict`` is ``True`` and the handshake
            is not complete.
    """
    enabled = config.is_authentication_enabled()
    if credentials is not None:
        session.rotate_credentials(credentials)
    if enabled:
        status = session.check(url)
        if status is not GateStatus.OK:
            logger.debug(f"{method} request to {url} rejected: {status.name}")
            if strict:
                raise status.to_error()
            return status.to_response()

    request_url = session.resolve_url(url)
    headers = build_headers(session)
    has_body = method in WRITE_METHODS
    invoke_on_request(config.on_request, url=request_url, method=method, has_body=has_body)
    start_time = time.time()
    try:
        content = None
        if has_body:
            payload = clear_mapped_properties(payload)
            content = b"" if payload is None else serialize(payload)
            if payload is not None:
                headers["Content-Type"] = "application/json"
        outcome = await connection.fetch(method, request_url, headers=headers, content=content)
        response = classify_outcome(outcome, result_type=result_type, as_text=as_text)
    except ConnectionProviderError:
        raise
    except Exception as exc:  # noqa: BLE001
        logger.debug(f"{method} request to {request_url} encountered {type(exc).__name__}: {exc}")
        response = classify_exception(exc)
    else:
        logger.debug(
            f"{method} request to {outcome.url} completed with status {outcome.status_code}"
        )

    invoke_on_response(
        config.on_response,
        url=request_url,
        method=method,
        status_code=response.status_code,
        is_ok=response.is_ok,
        total_time=time.time() - start_time,
    )
    return response
