"""Ordered collections of identity-bearing items.

Purpose
-------
Provide the pure list operations every module editor needs (services,
products, categories, guarantees): append, duplicate, delete, update and
reorder. Identity is carried by each item's ``id``; positions are derived.

Contents
--------
* :func:`append` / :func:`duplicate_at` / :func:`delete_at` /
  :func:`update_at` / :func:`reorder` – the collection operations.
* :func:`ids_of` / :func:`index_of` / :func:`find_item` – lookups by id.
* :func:`ensure_ids` – assign ids to legacy items stored without one.

System Role
-----------
Each function returns a new ``list`` and leaves the input untouched, raising
from :mod:`lib_module_config.domain.errors` when a contract is violated. Items
that are not modified are shared by reference with the input list.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from copy import deepcopy
from typing import Any

from .errors import DuplicateId, IdentityViolation, IndexOutOfRange, InvalidPermutation, TypeMismatch
from .ids import IdFactory, new_item_id

Item = Mapping[str, Any]


def append(collection: Sequence[Item], item: Item, *, id_factory: IdFactory | None = None) -> list[Item]:
    """Return *collection* with *item* added at the end.

    Items arriving without an ``id`` receive a fresh one; an explicit id that is
    already taken raises :class:`DuplicateId`.

    Examples
    --------
    >>> services = append([], {"id": "s1", "name": "Massage"})
    >>> [s["id"] for s in append(services, {"id": "s2"})]
    ['s1', 's2']
    >>> append(services, {"id": "s1"})
    Traceback (most recent call last):
    ...
    lib_module_config.domain.errors.DuplicateId: Item id 's1' already exists in collection
    """

    items = _as_items(collection)
    candidate = _as_item(item)
    existing = set(ids_of(items))
    item_id = candidate.get("id")
    if not item_id:
        candidate = {"id": _fresh_id(existing, id_factory), **{k: v for k, v in candidate.items() if k != "id"}}
    elif item_id in existing:
        raise DuplicateId(f"Item id {item_id!r} already exists in collection")
    return [*items, candidate]


def duplicate_at(collection: Sequence[Item], index: int, *, id_factory: IdFactory | None = None) -> list[Item]:
    """Clone the item at *index* under a new id and insert it right after the source.

    Examples
    --------
    >>> from lib_module_config.domain.ids import sequential_id_factory
    >>> items = [{"id": "a", "name": "A"}, {"id": "b", "name": "B"}]
    >>> copied = duplicate_at(items, 0, id_factory=sequential_id_factory("copy"))
    >>> [(i["id"], i["name"]) for i in copied]
    [('a', 'A'), ('copy1', 'A'), ('b', 'B')]
    """

    items = _as_items(collection)
    _check_index(items, index)
    clone = deepcopy(dict(items[index]))
    clone["id"] = _fresh_id(set(ids_of(items)), id_factory)
    return [*items[: index + 1], clone, *items[index + 1 :]]


def delete_at(collection: Sequence[Item], index: int) -> list[Item]:
    """Return *collection* without the item at *index*.

    >>> delete_at([{"id": "a"}], 0)
    []
    """

    items = _as_items(collection)
    _check_index(items, index)
    return [*items[:index], *items[index + 1 :]]


def update_at(collection: Sequence[Item], index: int, new_item: Item) -> list[Item]:
    """Replace the item at *index* with *new_item*, keeping its identity.

    Raises
    ------
    IdentityViolation
        When ``new_item["id"]`` differs from the stored id.
    """

    items = _as_items(collection)
    _check_index(items, index)
    replacement = _as_item(new_item)
    current_id = items[index].get("id")
    if replacement.get("id") != current_id:
        raise IdentityViolation(
            f"Update at index {index} would change id {current_id!r} to {replacement.get('id')!r}"
        )
    return [*items[:index], replacement, *items[index + 1 :]]


def reorder(collection: Sequence[Item], new_id_order: Sequence[str]) -> list[Item]:
    """Return the items re-sequenced to follow *new_id_order*.

    *new_id_order* must be a permutation of the current ids: same length, no
    repeats, no unknown ids.

    Examples
    --------
    >>> items = [{"id": "a"}, {"id": "b"}, {"id": "c"}]
    >>> [i["id"] for i in reorder(items, ["c", "a", "b"])]
    ['c', 'a', 'b']
    >>> reorder(items, ["a", "b"])
    Traceback (most recent call last):
    ...
    lib_module_config.domain.errors.InvalidPermutation: Expected 3 ids, got 2
    """

    items = _as_items(collection)
    order = list(new_id_order)
    if len(order) != len(items):
        raise InvalidPermutation(f"Expected {len(items)} ids, got {len(order)}")
    by_id = {item.get("id"): item for item in items}
    if len(by_id) != len(items):
        raise InvalidPermutation("Collection contains repeated ids and cannot be reordered")
    if len(set(order)) != len(order):
        raise InvalidPermutation(f"Reorder request repeats ids: {order!r}")
    unknown = [item_id for item_id in order if item_id not in by_id]
    if unknown:
        raise InvalidPermutation(f"Unknown ids in reorder request: {unknown!r}")
    return [by_id[item_id] for item_id in order]


def ids_of(collection: Sequence[Item]) -> list[Any]:
    """Return the ids of *collection* in display order."""

    return [item.get("id") for item in collection]


def index_of(collection: Sequence[Item], item_id: str) -> int | None:
    """Return the position of *item_id* or ``None`` when it is not present."""

    for position, item in enumerate(collection):
        if item.get("id") == item_id:
            return position
    return None


def find_item(collection: Sequence[Item], item_id: str) -> Item | None:
    """Return the item carrying *item_id* or ``None``."""

    position = index_of(collection, item_id)
    return None if position is None else collection[position]


def ensure_ids(collection: Sequence[Item], *, id_factory: IdFactory | None = None) -> list[Item]:
    """Give every id-less item a fresh id; items that already have one are shared as-is.

    Older documents stored guarantees as bare ``{"icon", "text"}`` records; they
    must be upgraded before they can be reordered or duplicated.
    """

    items = _as_items(collection)
    taken = {item_id for item_id in ids_of(items) if item_id}
    upgraded: list[Item] = []
    for item in items:
        if item.get("id"):
            upgraded.append(item)
            continue
        fresh = _fresh_id(taken, id_factory)
        taken.add(fresh)
        upgraded.append({"id": fresh, **{k: v for k, v in item.items() if k != "id"}})
    return upgraded


def _fresh_id(taken: set[Any], id_factory: IdFactory | None) -> str:
    """Draw ids from the factory until one is free in *taken*."""

    make = id_factory or new_item_id
    candidate = make()
    while not candidate or candidate in taken:
        candidate = make()
    return candidate


def _check_index(items: Sequence[Item], index: int) -> None:
    """Reject negative or too-large indices (no Python wrap-around)."""

    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(items):
        raise IndexOutOfRange(f"Index {index!r} is out of range for {len(items)} item(s)")


def _as_items(collection: Sequence[Item]) -> list[Item]:
    """Validate that *collection* is a list-like of mappings."""

    if isinstance(collection, (str, bytes)) or not isinstance(collection, Sequence):
        raise TypeMismatch(f"Expected a collection of items, got {type(collection).__name__}")
    for item in collection:
        if not isinstance(item, Mapping):
            raise TypeMismatch(f"Collection items must be mappings, got {type(item).__name__}")
    return list(collection)


def _as_item(item: Item) -> dict[str, Any]:
    """Copy *item* into a plain ``dict`` after checking its type."""

    if not isinstance(item, Mapping):
        raise TypeMismatch(f"Items must be mappings, got {type(item).__name__}")
    return dict(item)
