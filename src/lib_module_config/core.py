"""Composition root for ``lib_module_config``.

Purpose
-------
Offer the host read/write API: every UI intent (field edit, style edit,
collection operation) enters here, is routed through the section binder to the
pure domain helpers and leaves as a new document value. The module wires in
the editor settings for derived price fields and emits one structured log
event per accepted or rejected edit.

Contents
--------
* :func:`get_section_value` – read one section.
* :func:`apply_field_update` – write a field below a section.
* :func:`apply_style_update` – merge a partial into ``styles[key]``.
* :func:`apply_collection_op` – run a collection intent, re-deriving prices.
* :func:`add_default_item` – append the module-default item to a collection.
* :func:`apply_intent` – route a plain-mapping intent to one of the above.

System Role
-----------
Hosts and the CLI call these functions; nothing here keeps the document past
the call. Rejected edits are logged as ``edit_rejected`` and re-raised
unchanged so callers catch the :class:`EditError` family.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any, NoReturn

from .application.binder import read_section, update_collection, write_field, write_style
from .application.modules import ID_PREFIXES, new_item
from .application.operations import Append, CollectionOp, parse_operation
from .config import DEFAULT_SETTINGS, EditorSettings
from .domain.errors import EditError, InvalidOperation
from .domain.ids import IdFactory, prefixed_id_factory
from .domain.paths import PathLike, normalize_path
from .observability import log_error, log_info, make_event

__all__ = [
    "get_section_value",
    "apply_field_update",
    "apply_style_update",
    "apply_collection_op",
    "add_default_item",
    "apply_intent",
]


def get_section_value(document: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    """Return section *name* of *document* (``{}`` when the section is absent).

    Examples
    --------
    >>> get_section_value({"booking": {"title": "Réservez"}}, "booking")
    {'title': 'Réservez'}
    """

    with _rejections(name, None, "read"):
        return read_section(document, name)


def apply_field_update(document: Mapping[str, Any], name: str, path: PathLike, value: Any) -> dict[str, Any]:
    """Return a new document with ``document[name][path] = value``.

    Examples
    --------
    >>> apply_field_update({"booking": {"title": "A"}}, "booking", "openingHours.monday.start", "10:00")
    {'booking': {'title': 'A', 'openingHours': {'monday': {'start': '10:00'}}}}
    """

    with _rejections(name, path, "field"):
        updated = write_field(document, name, path, value)
    log_info("field_updated", **make_event(name, _dotted(path)))
    return updated


def apply_style_update(document: Mapping[str, Any], name: str, key: PathLike, partial: Any) -> dict[str, Any]:
    """Return a new document with *partial* merged into ``document[name].styles[key]``."""

    with _rejections(name, key, "style"):
        updated = write_style(document, name, key, partial)
    log_info("style_updated", **make_event(name, _dotted(key)))
    return updated


def apply_collection_op(
    document: Mapping[str, Any],
    name: str,
    path: PathLike,
    op: CollectionOp | Mapping[str, Any],
    settings: EditorSettings | None = None,
    *,
    id_factory: IdFactory | None = None,
) -> dict[str, Any]:
    """Apply *op* to the collection at ``document[name][path]``.

    Parameters
    ----------
    op:
        An intent from :mod:`lib_module_config.application.operations` or a
        mapping accepted by :func:`parse_operation`.
    settings:
        Locale conventions for the re-derived ``priceLabel`` of appended and
        updated items. Defaults to :data:`DEFAULT_SETTINGS`.
    id_factory:
        Source of new ids; defaults to the prefix used by the editors for that
        collection (``b`` for services, ``p`` for products...).

    Examples
    --------
    >>> doc = apply_collection_op({}, "booking", "services", {"op": "append", "item": {"id": "s1", "price": 0}})
    >>> doc["booking"]["services"][0]["priceLabel"]
    'Offert'
    """

    with _rejections(name, path, "collection"):
        intent = op if not isinstance(op, Mapping) else parse_operation(op)
        updated = update_collection(
            document,
            name,
            path,
            intent,
            id_factory=id_factory or _default_id_factory(path),
            rules=(settings or DEFAULT_SETTINGS).pricing,
        )
    log_info("collection_updated", **make_event(name, _dotted(path), {"op": intent.name}))
    return updated


def add_default_item(
    document: Mapping[str, Any],
    name: str,
    collection: str,
    settings: EditorSettings | None = None,
    *,
    id_factory: IdFactory | None = None,
) -> dict[str, Any]:
    """Append the module-default item (new service, product...) to *collection*."""

    with _rejections(name, collection, "collection"):
        rules = (settings or DEFAULT_SETTINGS).pricing
        item = new_item(name, collection, read_section(document, name), rules, id_factory=id_factory)
    return apply_collection_op(document, name, collection, Append(item), settings, id_factory=id_factory)


def apply_intent(
    document: Mapping[str, Any],
    intent: Mapping[str, Any],
    settings: EditorSettings | None = None,
) -> dict[str, Any]:
    """Route a plain-mapping intent to the matching host call.

    Accepted shapes::

        {"kind": "field", "section": "booking", "path": "title", "value": "..."}
        {"kind": "style", "section": "booking", "key": "background", "value": {...}}
        {"kind": "collection", "section": "booking", "path": "services",
         "op": {"op": "deleteAt", "index": 0}}

    A collection intent may also inline the operation (``"op": "deleteAt",
    "index": 0``).

    Raises
    ------
    InvalidOperation
        For an unknown ``kind`` or a missing ``section``.
    """

    kind = intent.get("kind")
    section = intent.get("section")
    if not isinstance(section, str) or not section:
        _reject(section, None, InvalidOperation("Intent needs a 'section' name"))
    if kind == "field":
        return apply_field_update(document, section, _require(intent, "path"), intent.get("value"))
    if kind == "style":
        return apply_style_update(document, section, _require(intent, "key"), intent.get("value"))
    if kind == "collection":
        op = intent.get("op")
        payload = op if isinstance(op, Mapping) else intent
        return apply_collection_op(document, section, _require(intent, "path"), payload, settings)
    _reject(section, None, InvalidOperation(f"Unknown intent kind {kind!r}; expected field, style or collection"))


@contextmanager
def _rejections(section: str | None, path: PathLike | None, action: str) -> Iterator[None]:
    """Log :class:`EditError` raised inside the block as ``edit_rejected`` and re-raise."""

    try:
        yield
    except EditError as exc:
        log_error(
            "edit_rejected",
            **make_event(section, _dotted(path), {"action": action, "error": type(exc).__name__, "detail": str(exc)}),
        )
        raise


def _reject(section: str | None, path: PathLike | None, error: EditError) -> NoReturn:
    with _rejections(section, path, "intent"):
        raise error


def _require(intent: Mapping[str, Any], key: str) -> Any:
    value = intent.get(key)
    if value is None:
        _reject(intent.get("section"), None, InvalidOperation(f"Intent needs a {key!r} entry"))
    return value


def _default_id_factory(path: PathLike) -> IdFactory:
    """Return the id factory the editors use for the collection at *path*."""

    keys = normalize_path(path)
    return prefixed_id_factory(ID_PREFIXES.get(keys[-1], ""))


def _dotted(path: PathLike | None) -> str | None:
    if path is None:
        return None
    if isinstance(path, str):
        return path
    return ".".join(str(part) for part in path)
