r"""Session state of one API engine and the validation gate run before
every non-handshake call.

The state is not protected by any lock: an ``ApiEngine`` instance must be
used sequentially (or serialized by the caller). Concurrent sessions need
separate instances.
"""

from __future__ import annotations

__all__ = ["GateStatus", "SessionState"]

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from crossclient.core.config import AUTHENTICATE_PATH
from crossclient.exceptions import (
    AuthenticationRequiredError,
    PreconditionError,
    PunchoutRequiredError,
)
from crossclient.response import authentication_required_response, punchout_required_response

if TYPE_CHECKING:
    from typing import Any

    from crossclient.models import Credentials
    from crossclient.response import Response


class GateStatus(enum.Enum):
    r"""Result of the validation gate."""

    OK = "OK"
    PUNCHOUT_REQUIRED = "PUNCHOUT_SETUP_REQUEST"
    AUTHENTICATION_REQUIRED = "AUTHENTICATE"

    def to_error(self) -> PreconditionError:
        r"""Return the error raised by synchronous calls for this status.

        Raises:
            ValueError: If the status is ``OK``.
        """
        if self is GateStatus.PUNCHOUT_REQUIRED:
            return PunchoutRequiredError()
        if self is GateStatus.AUTHENTICATION_REQUIRED:
            return AuthenticationRequiredError()
        msg = f"{self} is not a gate failure"
        raise ValueError(msg)

    def to_response(self) -> Response[Any]:
        r"""Return the sentinel response of asynchronous calls for this
        status.

        Raises:
            ValueError: If the status is ``OK``.
        """
        if self is GateStatus.PUNCHOUT_REQUIRED:
            return punchout_required_response()
        if self is GateStatus.AUTHENTICATION_REQUIRED:
            return authentication_required_response()
        msg = f"{self} is not a gate failure"
        raise ValueError(msg)


@dataclass
class SessionState:
    r"""Discovered endpoint, session token, and identity of a client.

    ``current_endpoint`` is set by a successful punchout setup request,
    ``current_token`` by a successful authentication.

    Args:
        credentials: The client credentials.
        client_ip_address: The IP address of the calling client, sent
            with every request when known.

    Example:
        ```pycon
        >>> from crossclient.models import Credentials
        >>> from crossclient.session import GateStatus, SessionState
        >>> state = SessionState(credentials=Credentials(base_address="https://gw/"))
        >>> state.check("orders")
        <GateStatus.PUNCHOUT_REQUIRED: 'PUNCHOUT_SETUP_REQUEST'>
        >>> state.current_endpoint = "https://svc.internal/"
        >>> state.check("authenticate")
        <GateStatus.OK: 'OK'>
        >>> state.check("orders")
        <GateStatus.AUTHENTICATION_REQUIRED: 'AUTHENTICATE'>

        ```
    """

    credentials: Credentials
    client_ip_address: str = ""
    current_endpoint: str | None = None
    current_token: str | None = field(default=None, repr=False)

    def check(self, url: str) -> GateStatus:
        r"""Run the validation gate for a call to ``url``.

        Only the token exchange itself (``authenticate``, optionally
        followed by a query string or a sub-path) is allowed without a
        token.

        Args:
            url: The URL of the call, relative to the endpoint or
                starting with it.

        Returns:
            The gate status.
        """
        if not self.current_endpoint:
            return GateStatus.PUNCHOUT_REQUIRED
        if not self.current_token and not self._is_authenticate_path(url):
            return GateStatus.AUTHENTICATION_REQUIRED
        return GateStatus.OK

    def _is_authenticate_path(self, url: str) -> bool:
        if self.current_endpoint and url.startswith(self.current_endpoint):
            url = url[len(self.current_endpoint) :]
        return url == AUTHENTICATE_PATH or url.startswith(
            (f"{AUTHENTICATE_PATH}?", f"{AUTHENTICATE_PATH}/")
        )

    def rotate_credentials(self, credentials: Credentials) -> None:
        r"""Replace the credentials and end the session they opened.

        A change of gateway client (``base_address``, ``client_id`` or
        ``shared_secret``) forgets the endpoint and the token. Any other
        change forgets the token only. Identical credentials keep the
        session.

        Args:
            credentials: The new credentials.

        Example:
            ```pycon
            >>> from crossclient.models import Credentials
            >>> from crossclient.session import SessionState
            >>> state = SessionState(credentials=Credentials(base_address="https://gw/"))
            >>> state.current_endpoint, state.current_token = "https://svc.internal/", "t0k3n"
            >>> state.rotate_credentials(Credentials(base_address="https://gw/", username="jdoe"))
            >>> state.current_endpoint, state.current_token
            ('https://svc.internal/', None)
            >>> state.rotate_credentials(Credentials(base_address="https://gw2/"))
            >>> state.current_endpoint is None
            True

            ```
        """
        previous, self.credentials = self.credentials, credentials
        if credentials == previous:
            return
        if _client_identity(credentials) != _client_identity(previous):
            self.reset()
        else:
            self.clear_token()

    def resolve_url(self, url: str) -> str:
        r"""Prefix ``url`` with the discovered endpoint.

        Args:
            url: A URL relative to the endpoint, or an absolute URL
                already starting with it.

        Returns:
            The final request URL.

        Example:
            ```pycon
            >>> from crossclient.models import Credentials
            >>> from crossclient.session import SessionState
            >>> state = SessionState(credentials=Credentials(base_address="https://gw/"))
            >>> state.resolve_url("orders")
            'orders'
            >>> state.current_endpoint = "https://svc.internal/"
            >>> state.resolve_url("orders")
            'https://svc.internal/orders'
            >>> state.resolve_url("https://svc.internal/orders")
            'https://svc.internal/orders'

            ```
        """
        if not self.current_endpoint or url.startswith(self.current_endpoint):
            return url
        return self.current_endpoint + url

    def clear_token(self) -> None:
        r"""Forget the session token to force a new authentication."""
        self.current_token = None

    def reset(self) -> None:
        r"""Forget the endpoint and the token to force a new handshake."""
        self.current_endpoint = None
        self.current_token = None


def _client_identity(credentials: Credentials) -> tuple[str, str, str]:
    return credentials.base_address, credentials.client_id, credentials.shared_secret
