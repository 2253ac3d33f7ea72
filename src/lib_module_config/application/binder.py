"""Section binder: scope edits to one top-level section of a document.

Purpose
-------
Module editors (booking, ecommerce, ...) should only see their own section.
The binder turns whole-document reads and writes into section-relative ones,
treats ``styles`` entries as merge targets and runs collection intents against
lists stored inside the section.

Contents
--------
* :func:`read_section` – the section mapping, ``{}`` when absent.
* :func:`write_field` – set a value at a path relative to the section; writes
  under ``openingHours`` and ``fields`` go through their closed-record model.
* :func:`write_style` / :func:`merge_style` – shallow-merge style updates.
* :func:`style_value` – read a style key with per-module defaults.
* :func:`update_collection` – apply a collection intent at a section path.
* :class:`SectionBinding` – the same operations pre-bound to one section name.

System Role
-----------
Sits between the host API in :mod:`lib_module_config.core` and the domain
helpers. Everything here is pure: the input document is never modified and a
failing call leaves no trace.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Final

from ..domain.errors import TypeMismatch
from ..domain.ids import IdFactory
from ..domain.paths import ABSENT, PathLike, get_path, normalize_path, set_path
from ..domain.pricing import PricingRules
from ..domain.records import FORM_FIELDS, SCHEDULE, ClosedRecordModel
from .operations import CollectionOp

STYLES_KEY: Final[str] = "styles"
"""Section field holding the style record."""

CLOSED_RECORDS: Final[dict[str, ClosedRecordModel]] = {model.name: model for model in (SCHEDULE, FORM_FIELDS)}
"""Section fields whose keys come from a fixed set."""


def read_section(document: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    """Return section *name*; missing sections read as an empty mapping.

    The returned mapping is shared with *document* and must be treated as
    read-only.

    >>> read_section({"booking": {"title": "Réservez"}}, "booking")
    {'title': 'Réservez'}
    >>> read_section({}, "ecommerce")
    {}
    """

    section = get_path(document, (name,), default=None)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise TypeMismatch(f"Section {name!r} is a {type(section).__name__}, not a mapping")
    return section


def write_field(document: Mapping[str, Any], name: str, field_path: PathLike, value: Any) -> dict[str, Any]:
    """Return *document* with ``section[field_path] = value``.

    >>> doc = {"booking": {"title": "A", "badge": "B"}}
    >>> write_field(doc, "booking", "title", "C")
    {'booking': {'title': 'C', 'badge': 'B'}}

    Raises
    ------
    InvalidPath
        For a day or form field outside the closed set.
    InvalidValue
        For a mistyped record value or a time that is not ``HH:MM``.
    """

    keys = normalize_path(field_path)
    model = CLOSED_RECORDS.get(keys[0])
    if model is None:
        return set_path(document, _section_path(name, keys), value)

    record_path = _section_path(name, keys[:1])
    if len(keys) == 1:
        return set_path(document, record_path, value if value is ABSENT else model.replace(value))
    stored = get_path(document, record_path, default=None)
    if stored is not None and not isinstance(stored, Mapping):
        raise TypeMismatch(f"{'.'.join(record_path)} is a {type(stored).__name__}, not a mapping")
    return set_path(document, record_path, model.assign(stored, keys[1:], value))


def merge_style(existing: Mapping[str, Any], partial: Mapping[str, Any]) -> dict[str, Any]:
    """Shallow-merge *partial* into *existing*; :data:`ABSENT` values drop a key.

    >>> merge_style({"color": "#fff", "image": "bg.png"}, {"color": "#000"})
    {'color': '#000', 'image': 'bg.png'}
    """

    merged = dict(existing)
    for key, value in partial.items():
        if value is ABSENT:
            merged.pop(key, None)
        else:
            merged[key] = value
    return merged


def write_style(document: Mapping[str, Any], name: str, style_key: PathLike, partial: Any) -> dict[str, Any]:
    """Merge *partial* into ``section.styles[style_key]``.

    Mapping values are merged into an existing mapping so sibling sub-keys
    survive (updating ``background.color`` keeps ``background.image``); scalar
    values such as ``cardRadius`` simply replace.

    >>> doc = {"booking": {"styles": {"background": {"color": "#fff", "image": "a.png"}}}}
    >>> write_style(doc, "booking", "background", {"color": "#000"})["booking"]["styles"]["background"]
    {'color': '#000', 'image': 'a.png'}
    """

    path = (name, STYLES_KEY, *normalize_path(style_key))
    if isinstance(partial, Mapping):
        existing = get_path(document, path, default=ABSENT)
        base = existing if isinstance(existing, Mapping) else {}
        return set_path(document, path, merge_style(base, partial))
    return set_path(document, path, partial)


def style_value(section: Mapping[str, Any], key: PathLike, defaults: Mapping[str, Any] | None = None) -> Any:
    """Return ``section.styles[key]`` or the documented default when unset.

    >>> style_value({}, "cardRadius", {"cardRadius": 20})
    20
    >>> style_value({"styles": {"cardRadius": 0}}, "cardRadius", {"cardRadius": 20})
    0
    """

    keys = normalize_path(key)
    value = get_path(section, (STYLES_KEY, *keys), default=None)
    if value is not None:
        return value
    if defaults is None:
        return None
    return get_path(defaults, keys, default=None)


def update_collection(
    document: Mapping[str, Any],
    name: str,
    path: PathLike,
    op: CollectionOp,
    *,
    id_factory: IdFactory | None = None,
    rules: PricingRules | None = None,
) -> dict[str, Any]:
    """Apply *op* to the list stored at ``section[path]`` and write it back.

    A missing list is treated as empty so the first ``append`` creates it.
    """

    full_path = _section_path(name, path)
    collection = get_path(document, full_path, default=None)
    if collection is None:
        collection = []
    if isinstance(collection, (str, bytes)) or not isinstance(collection, Sequence):
        raise TypeMismatch(f"{'.'.join(full_path)} is a {type(collection).__name__}, not a collection")
    updated = op.apply(collection, id_factory=id_factory, rules=rules)
    return set_path(document, full_path, updated)


@dataclass(frozen=True)
class SectionBinding:
    """Read/write helpers pre-bound to one section name.

    Examples
    --------
    >>> booking = SectionBinding("booking")
    >>> doc = booking.set_field({}, "title", "Réservez")
    >>> booking.get(doc)
    {'title': 'Réservez'}
    """

    name: str

    def get(self, document: Mapping[str, Any]) -> Mapping[str, Any]:
        return read_section(document, self.name)

    def set_field(self, document: Mapping[str, Any], field_path: PathLike, value: Any) -> dict[str, Any]:
        return write_field(document, self.name, field_path, value)

    def set_style(self, document: Mapping[str, Any], style_key: PathLike, partial: Any) -> dict[str, Any]:
        return write_style(document, self.name, style_key, partial)

    def style(self, document: Mapping[str, Any], key: PathLike, defaults: Mapping[str, Any] | None = None) -> Any:
        return style_value(read_section(document, self.name), key, defaults)

    def apply(
        self,
        document: Mapping[str, Any],
        path: PathLike,
        op: CollectionOp,
        *,
        id_factory: IdFactory | None = None,
        rules: PricingRules | None = None,
    ) -> dict[str, Any]:
        return update_collection(document, self.name, path, op, id_factory=id_factory, rules=rules)


def _section_path(name: str, field_path: PathLike) -> tuple[str, ...]:
    """Prefix *field_path* with the section name."""

    return normalize_path((name, *normalize_path(field_path)))
