r"""JSON serialization of request payloads and response bodies.

Payloads are encoded with ``pydantic_core.to_json`` so pydantic models,
dataclasses, and plain containers are all accepted. Bodies are decoded
into the requested type with a cached ``pydantic.TypeAdapter``.
"""

from __future__ import annotations

__all__ = ["clear_mapped_properties", "deserialize", "serialize"]

import dataclasses
import functools
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter
from pydantic_core import to_json

T = TypeVar("T")

MAPPED_PROPERTIES = "mapped_properties"
MAPPED_PROPERTIES_KEYS = frozenset({MAPPED_PROPERTIES, "mappedProperties"})


def clear_mapped_properties(payload: Any) -> Any:
    r"""Clear the ``mapped_properties`` field of a payload.

    The field is a read/query artifact and must never be sent on a
    write. Mutable entities are cleared in place. Frozen pydantic models
    and frozen dataclasses are copied, and mappings are copied without
    the ``mapped_properties``/``mappedProperties`` keys. Collection
    payloads are cleared item by item.

    Args:
        payload: A single entity, a mapping, or an iterable of them.

    Returns:
        The payload to serialize.

    Example:
        ```pycon
        >>> from crossclient.models import BusinessEntity
        >>> from crossclient.utils.serialization import clear_mapped_properties
        >>> entity = BusinessEntity(mapped_properties={"Name": "name"})
        >>> clear_mapped_properties(entity) is entity
        True
        >>> entity.mapped_properties is None
        True
        >>> clear_mapped_properties({"id": 1, "mappedProperties": {}})
        {'id': 1}

        ```
    """
    if payload is None:
        return None
    if isinstance(payload, (list, tuple, set)):
        return [clear_mapped_properties(item) for item in payload]
    if isinstance(payload, Mapping):
        return {key: value for key, value in payload.items() if key not in MAPPED_PROPERTIES_KEYS}
    if not hasattr(payload, MAPPED_PROPERTIES):
        return payload
    if isinstance(payload, BaseModel) and payload.model_config.get("frozen"):
        return payload.model_copy(update={MAPPED_PROPERTIES: None})
    if dataclasses.is_dataclass(payload) and payload.__dataclass_params__.frozen:
        return dataclasses.replace(payload, mapped_properties=None)
    setattr(payload, MAPPED_PROPERTIES, None)
    return payload


def serialize(payload: Any) -> bytes:
    r"""Encode a payload as JSON.

    Args:
        payload: The payload to encode.

    Returns:
        The JSON document.

    Example:
        ```pycon
        >>> from crossclient.utils.serialization import serialize
        >>> serialize({"id": 1})
        b'{"id":1}'

        ```
    """
    return to_json(payload, by_alias=True)


@functools.lru_cache(maxsize=256)
def _get_adapter(result_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(result_type)


def deserialize(content: bytes | str, result_type: type[T] | Any) -> T:
    r"""Decode a JSON document into ``result_type``.

    Args:
        content: The JSON document.
        result_type: The expected type, e.g. a pydantic model or
            ``list[Model]``.

    Returns:
        The decoded value.

    Raises:
        pydantic.ValidationError: If the document does not match the type.

    Example:
        ```pycon
        >>> from crossclient.utils.serialization import deserialize
        >>> deserialize(b"[1, 2]", list[int])
        [1, 2]

        ```
    """
    return _get_adapter(result_type).validate_json(content)
