from __future__ import annotations

import pytest

from lib_module_config.application.operations import (
    Append,
    DeleteAt,
    DuplicateAt,
    Reorder,
    UpdateAt,
    parse_operation,
)
from lib_module_config.domain.errors import InvalidOperation, InvalidValue
from lib_module_config.domain.ids import sequential_id_factory
from lib_module_config.domain.pricing import DEFAULT_RULES


@pytest.mark.parametrize(
    ("payload", "expected"),
    [
        ({"op": "append", "item": {"id": "a"}}, Append({"id": "a"})),
        ({"op": "duplicateAt", "index": 1}, DuplicateAt(1)),
        ({"op": "duplicate_at", "index": 1}, DuplicateAt(1)),
        ({"op": "DELETEAT", "index": 0}, DeleteAt(0)),
        ({"op": "updateAt", "index": 0, "item": {"id": "a"}}, UpdateAt(0, {"id": "a"})),
        ({"op": "reorder", "ids": ["b", "a"]}, Reorder(("b", "a"))),
    ],
)
def test_parse_operation(payload, expected) -> None:
    assert parse_operation(payload) == expected


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"op": "shuffle"},
        {"op": "deleteAt"},
        {"op": "deleteAt", "index": "1"},
        {"op": "deleteAt", "index": True},
        {"op": "append"},
        {"op": "updateAt", "index": 0},
        {"op": "reorder", "ids": "ab"},
        ["append"],
    ],
)
def test_parse_operation_rejects_malformed_intents(payload) -> None:
    with pytest.raises(InvalidOperation):
        parse_operation(payload)


def test_operation_names() -> None:
    assert [op.name for op in (Append, DuplicateAt, DeleteAt, UpdateAt, Reorder)] == [
        "append",
        "duplicateAt",
        "deleteAt",
        "updateAt",
        "reorder",
    ]


def test_append_derives_only_with_rules() -> None:
    plain = Append({"id": "s1", "price": 50}).apply([])
    assert "priceLabel" not in plain[0]
    derived = Append({"id": "s1", "price": 50}).apply([], rules=DEFAULT_RULES)
    assert derived[0]["priceLabel"] == "50 €"


def test_update_at_derives_against_previous_item() -> None:
    collection = [{"id": "s1", "price": 0, "priceLabel": "Offert"}]
    updated = UpdateAt(0, {"id": "s1", "price": 50, "priceLabel": "Offert"}).apply(collection, rules=DEFAULT_RULES)
    assert updated[0]["priceLabel"] == "50 €"
    assert collection[0]["priceLabel"] == "Offert"


def test_duplicate_uses_injected_factory() -> None:
    result = DuplicateAt(0).apply([{"id": "a"}], id_factory=sequential_id_factory("a", 2))
    assert [item["id"] for item in result] == ["a", "a2"]


def test_entering_items_get_rating_snapped() -> None:
    appended = Append({"id": "p1", "rating": 7.3}).apply([])
    assert appended[0]["rating"] == 5
    updated = UpdateAt(0, {"id": "p1", "rating": 2.2}).apply(appended)
    assert updated[0]["rating"] == 2
    assert Append({"id": "p1", "rating": None}).apply([])[0]["rating"] is None


def test_negative_prices_are_rejected() -> None:
    with pytest.raises(InvalidValue):
        Append({"id": "p1", "price": -5}).apply([])
    with pytest.raises(InvalidValue):
        UpdateAt(0, {"id": "p1", "price": -0.5}).apply([{"id": "p1", "price": 5}])
