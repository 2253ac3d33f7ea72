"""Collection-operation intents.

Purpose
-------
Describe "what the user asked for" on a collection as small immutable values
so hosts can queue, log or serialise them before applying. Each intent wraps
one function from :mod:`lib_module_config.domain.items`. Items entering a
collection through ``append`` or ``updateAt`` are admitted first: a negative price
is rejected, a rating is snapped into 0..5 in half steps and, when pricing
rules are supplied, the price label is re-derived.

Contents
--------
* :class:`Append`, :class:`DuplicateAt`, :class:`DeleteAt`,
  :class:`UpdateAt`, :class:`Reorder` – the five intents.
* :data:`CollectionOp` – union of the intents.
* :func:`parse_operation` – build an intent from a plain mapping such as
  ``{"op": "reorder", "ids": ["b", "a"]}``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar, Union

from ..domain import items as ops
from ..domain.derived import is_number, normalize_rating
from ..domain.errors import InvalidOperation, InvalidValue
from ..domain.ids import IdFactory
from ..domain.pricing import PricingRules, derive_item

Item = Mapping[str, Any]


@dataclass(frozen=True)
class Append:
    """Add *item* at the end of the collection."""

    item: Item
    name: ClassVar[str] = "append"

    def apply(
        self,
        collection: Sequence[Item],
        *,
        id_factory: IdFactory | None = None,
        rules: PricingRules | None = None,
    ) -> list[Item]:
        result = ops.append(collection, self.item, id_factory=id_factory)
        result[-1] = _admit(result[-1], rules)
        return result


@dataclass(frozen=True)
class DuplicateAt:
    """Clone the item at *index* right after itself under a new id."""

    index: int
    name: ClassVar[str] = "duplicateAt"

    def apply(
        self,
        collection: Sequence[Item],
        *,
        id_factory: IdFactory | None = None,
        rules: PricingRules | None = None,
    ) -> list[Item]:
        return ops.duplicate_at(collection, self.index, id_factory=id_factory)


@dataclass(frozen=True)
class DeleteAt:
    """Remove the item at *index*."""

    index: int
    name: ClassVar[str] = "deleteAt"

    def apply(
        self,
        collection: Sequence[Item],
        *,
        id_factory: IdFactory | None = None,
        rules: PricingRules | None = None,
    ) -> list[Item]:
        return ops.delete_at(collection, self.index)


@dataclass(frozen=True)
class UpdateAt:
    """Replace the item at *index*; the id must stay the same."""

    index: int
    item: Item
    name: ClassVar[str] = "updateAt"

    def apply(
        self,
        collection: Sequence[Item],
        *,
        id_factory: IdFactory | None = None,
        rules: PricingRules | None = None,
    ) -> list[Item]:
        result = ops.update_at(collection, self.index, self.item)
        result[self.index] = _admit(result[self.index], rules, previous=collection[self.index])
        return result


@dataclass(frozen=True)
class Reorder:
    """Re-sequence the collection to follow *ids*."""

    ids: tuple[str, ...]
    name: ClassVar[str] = "reorder"

    def apply(
        self,
        collection: Sequence[Item],
        *,
        id_factory: IdFactory | None = None,
        rules: PricingRules | None = None,
    ) -> list[Item]:
        return ops.reorder(collection, self.ids)


CollectionOp = Union[Append, DuplicateAt, DeleteAt, UpdateAt, Reorder]

_BY_NAME: dict[str, type] = {
    "append": Append,
    "duplicateat": DuplicateAt,
    "deleteat": DeleteAt,
    "updateat": UpdateAt,
    "reorder": Reorder,
}


def parse_operation(payload: Mapping[str, Any]) -> CollectionOp:
    """Build a :data:`CollectionOp` from a plain mapping.

    Operation names are matched case-insensitively and with or without
    underscores (``duplicateAt``, ``duplicate_at``).

    Examples
    --------
    >>> parse_operation({"op": "deleteAt", "index": 2})
    DeleteAt(index=2)
    >>> parse_operation({"op": "reorder", "ids": ["b", "a"]})
    Reorder(ids=('b', 'a'))
    >>> parse_operation({"op": "shuffle"})
    Traceback (most recent call last):
    ...
    lib_module_config.domain.errors.InvalidOperation: Unknown collection operation 'shuffle'
    """

    if not isinstance(payload, Mapping):
        raise InvalidOperation(f"Operation must be a mapping, got {type(payload).__name__}")
    raw_name = payload.get("op")
    if not isinstance(raw_name, str):
        raise InvalidOperation("Operation mapping needs an 'op' name")
    op_type = _BY_NAME.get(raw_name.replace("_", "").lower())
    if op_type is None:
        raise InvalidOperation(f"Unknown collection operation {raw_name!r}")

    if op_type is Append:
        return Append(_require_item(payload, raw_name))
    if op_type is DuplicateAt:
        return DuplicateAt(_require_index(payload, raw_name))
    if op_type is DeleteAt:
        return DeleteAt(_require_index(payload, raw_name))
    if op_type is UpdateAt:
        return UpdateAt(_require_index(payload, raw_name), _require_item(payload, raw_name))
    return Reorder(_require_ids(payload, raw_name))


def _require_index(payload: Mapping[str, Any], op_name: str) -> int:
    index = payload.get("index")
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidOperation(f"{op_name} needs an integer 'index', got {index!r}")
    return index


def _require_item(payload: Mapping[str, Any], op_name: str) -> Item:
    item = payload.get("item")
    if not isinstance(item, Mapping):
        raise InvalidOperation(f"{op_name} needs an 'item' mapping")
    return item


def _require_ids(payload: Mapping[str, Any], op_name: str) -> tuple[str, ...]:
    ids = payload.get("ids")
    if isinstance(ids, (str, bytes)) or not isinstance(ids, Sequence):
        raise InvalidOperation(f"{op_name} needs an 'ids' list")
    return tuple(ids)


def _admit(item: Item, rules: PricingRules | None, previous: Item | None = None) -> Item:
    """Check and complete an item entering a collection."""

    price = item.get("price")
    if is_number(price) and price < 0:
        raise InvalidValue(f"Price must not be negative, got {price!r}")
    admitted = dict(item)
    rating = admitted.get("rating")
    if is_number(rating):
        admitted["rating"] = normalize_rating(rating)
    if rules is not None:
        admitted = derive_item(admitted, rules, previous)
    return admitted
