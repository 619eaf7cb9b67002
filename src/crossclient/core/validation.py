r"""Parameter validation utilities for the connection provider.

This module provides validation functions for the transport settings to
ensure they meet the required constraints before the shared client is
constructed.
"""

from __future__ import annotations

__all__ = ["validate_max_response_size", "validate_timeout"]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


def validate_timeout(timeout: float | httpx.Timeout) -> None:
    """Validate timeout parameter.

    Args:
        timeout: Maximum seconds to wait for server responses.
            Must be > 0 if provided as a numeric value.

    Raises:
        ValueError: If timeout is a numeric value <= 0.

    Example:
        ```pycon
        >>> from crossclient.core.validation import validate_timeout
        >>> validate_timeout(15.0)
        >>> validate_timeout(30)
        >>> validate_timeout(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if isinstance(timeout, (int, float)) and timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_max_response_size(max_response_size: int) -> None:
    """Validate the maximum number of buffered response bytes.

    Args:
        max_response_size: Maximum size of a response body in bytes.
            Must be > 0.

    Raises:
        ValueError: If max_response_size is <= 0.

    Example:
        ```pycon
        >>> from crossclient.core.validation import validate_max_response_size
        >>> validate_max_response_size(256_000)
        >>> validate_max_response_size(-1)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: max_response_size must be > 0, got -1

        ```
    """
    if max_response_size <= 0:
        msg = f"max_response_size must be > 0, got {max_response_size}"
        raise ValueError(msg)
