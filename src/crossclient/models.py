r"""Data contracts exchanged with the API gateway.

This module defines the client credentials, the base class of the
business entities sent on writes, the token user contract filled in by
the authentication step, and the validation-error envelope returned by
the gateway on HTTP 400.
"""

from __future__ import annotations

__all__ = [
    "AuthenticatedUser",
    "BadRequestResponse",
    "BusinessEntity",
    "Credentials",
    "TokenUser",
]

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol, runtime_checkable

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


@dataclass(frozen=True)
class Credentials:
    r"""API client credentials used by the punchout setup request and
    the authentication process.

    Args:
        base_address: The gateway address the punchout setup request is
            sent to.
        client_id: The client identification.
        application_code: The application identification.
        shared_secret: The client shared secret.
        username: The name of the user to authenticate.
        password: The password of the user to authenticate.

    Example:
        ```pycon
        >>> from crossclient.models import Credentials
        >>> credentials = Credentials(
        ...     base_address="https://gw/", client_id="c1", shared_secret="s1"
        ... )
        >>> credentials.client_id
        'c1'

        ```
    """

    base_address: str
    client_id: str = ""
    application_code: int | str = 0
    shared_secret: str = field(default="", repr=False)
    username: str = ""
    password: str = field(default="", repr=False)


class BusinessEntity(BaseModel):
    r"""Base class of the entities exchanged with the gateway.

    ``mapped_properties`` is filled in by read/query operations only. It
    is cleared before an entity is sent with a write verb.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    mapped_properties: dict[str, Any] | None = None


@runtime_checkable
class TokenUser(Protocol):
    r"""Contract of the object returned by the authentication process.

    Any type exposing ``token`` and ``authentication_status`` satisfies
    it. An empty ``authentication_status`` means the authentication
    succeeded.
    """

    token: str | None
    authentication_status: list[str] | None


class AuthenticatedUser(BaseModel):
    r"""Default user returned by the authentication process.

    Example:
        ```pycon
        >>> from crossclient.models import AuthenticatedUser, TokenUser
        >>> user = AuthenticatedUser.model_validate_json('{"id": 7, "token": "abc"}')
        >>> user.token
        'abc'
        >>> isinstance(user, TokenUser)
        True

        ```
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int = 0
    username: str | None = None
    email: str | None = None
    created_on: datetime | None = None
    token: str | None = None
    authentication_status: list[str] | None = Field(default_factory=list)


class BadRequestResponse(BaseModel):
    r"""Validation-error envelope returned by the gateway on HTTP 400."""

    model_state: dict[str, list[str]] | None = Field(
        default=None,
        validation_alias=AliasChoices("modelState", "ModelState", "model_state"),
    )
