r"""Utility functions for the request pipeline.

This package provides helpers for classifying HTTP outcomes and
transport exceptions into ``Response`` records, and for encoding and
decoding JSON payloads.
"""

from __future__ import annotations

__all__ = [
    "NOT_FOUND_MESSAGE",
    "classify_exception",
    "classify_failure",
    "classify_outcome",
    "clear_mapped_properties",
    "describe_handshake_error",
    "deserialize",
    "format_exception_chain",
    "parse_model_state",
    "serialize",
    "strip_quotes",
]

from crossclient.utils.exceptions import (
    classify_exception,
    describe_handshake_error,
    format_exception_chain,
)
from crossclient.utils.response import (
    NOT_FOUND_MESSAGE,
    classify_failure,
    classify_outcome,
    parse_model_state,
    strip_quotes,
)
from crossclient.utils.serialization import clear_mapped_properties, deserialize, serialize
