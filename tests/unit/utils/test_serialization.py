from __future__ import annotations

import json
from dataclasses import dataclass

import pytest
from pydantic import ConfigDict, ValidationError

from crossclient.models import BusinessEntity
from crossclient.utils import clear_mapped_properties, deserialize, serialize
from tests.helpers import Order


@dataclass
class Tag:
    label: str
    mapped_properties: dict[str, str] | None = None


@dataclass(frozen=True)
class FrozenTag:
    label: str
    mapped_properties: dict[str, str] | None = None


class FrozenOrder(Order):
    model_config = ConfigDict(frozen=True)


#############################################
#     Tests for clear_mapped_properties     #
#############################################


def test_clear_mapped_properties_entity() -> None:
    order = Order(id=1, mapped_properties={"Name": "name"})
    assert clear_mapped_properties(order) is order
    assert order.mapped_properties is None


def test_clear_mapped_properties_list() -> None:
    orders = [Order(id=1, mapped_properties={"a": "b"}), Order(id=2, mapped_properties={})]
    assert clear_mapped_properties(orders) == [Order(id=1), Order(id=2)]
    assert [order.mapped_properties for order in orders] == [None, None]


def test_clear_mapped_properties_tuple() -> None:
    cleared = clear_mapped_properties((Order(id=1, mapped_properties={}),))
    assert cleared == [Order(id=1)]


def test_clear_mapped_properties_dataclass() -> None:
    tag = Tag(label="x", mapped_properties={"Label": "label"})
    assert clear_mapped_properties(tag) is tag
    assert tag.mapped_properties is None


def test_clear_mapped_properties_frozen_entity() -> None:
    """Test that a frozen entity is copied instead of mutated."""
    order = FrozenOrder(id=1, name="Pen", mapped_properties={"Name": "name"})
    cleared = clear_mapped_properties(order)
    assert cleared == FrozenOrder(id=1, name="Pen")
    assert order.mapped_properties == {"Name": "name"}


def test_clear_mapped_properties_frozen_dataclass() -> None:
    tag = FrozenTag(label="x", mapped_properties={"Label": "label"})
    assert clear_mapped_properties(tag) == FrozenTag(label="x")
    assert tag.mapped_properties == {"Label": "label"}


def test_clear_mapped_properties_frozen_entities_in_list() -> None:
    orders = [FrozenOrder(id=1, mapped_properties={}), Order(id=2, mapped_properties={})]
    assert clear_mapped_properties(orders) == [FrozenOrder(id=1), Order(id=2)]


@pytest.mark.parametrize("key", ["mappedProperties", "mapped_properties"])
def test_clear_mapped_properties_dict(key: str) -> None:
    """Test that a mapping is copied without its mapped properties."""
    payload = {"id": 1, key: {"a": "b"}}
    assert clear_mapped_properties(payload) == {"id": 1}
    assert payload == {"id": 1, key: {"a": "b"}}


def test_clear_mapped_properties_list_of_dicts() -> None:
    payload = [{"id": 1, "mappedProperties": {}}, {"id": 2}]
    assert clear_mapped_properties(payload) == [{"id": 1}, {"id": 2}]


@pytest.mark.parametrize("payload", [42, "text", 1.5])
def test_clear_mapped_properties_unchanged(payload: object) -> None:
    assert clear_mapped_properties(payload) == payload


def test_clear_mapped_properties_none() -> None:
    assert clear_mapped_properties(None) is None


###############################
#     Tests for serialize     #
###############################


def test_serialize_entity_uses_camel_case() -> None:
    class LineItem(BusinessEntity):
        unit_price: float = 0.0

    assert json.loads(serialize(LineItem(unit_price=2.5))) == {
        "mappedProperties": None,
        "unitPrice": 2.5,
    }


def test_serialize_list() -> None:
    assert json.loads(serialize([Order(id=1), Order(id=2)])) == [
        {"mappedProperties": None, "id": 1, "name": ""},
        {"mappedProperties": None, "id": 2, "name": ""},
    ]


def test_serialize_dataclass() -> None:
    assert json.loads(serialize(Tag(label="x"))) == {"label": "x", "mapped_properties": None}


def test_serialize_dict() -> None:
    assert serialize({"id": 1}) == b'{"id":1}'


#################################
#     Tests for deserialize     #
#################################


def test_deserialize_entity_from_camel_case() -> None:
    order = deserialize(b'{"id": 3, "name": "Pen", "mappedProperties": {"Name": "name"}}', Order)
    assert order == Order(id=3, name="Pen", mapped_properties={"Name": "name"})


def test_deserialize_list() -> None:
    assert deserialize('[{"id": 1}]', list[Order]) == [Order(id=1)]


def test_deserialize_builtin() -> None:
    assert deserialize(b'"pong"', str) == "pong"


def test_deserialize_invalid() -> None:
    with pytest.raises(ValidationError):
        deserialize(b"not json", Order)
