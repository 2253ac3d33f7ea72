"""Path accessor for immutable nested documents.

Purpose
-------
Read and write a value at an arbitrary field path inside a nested mapping
without mutating the input and without clobbering sibling data. Writes return a
new document where only the ancestors of the target are fresh ``dict``
instances; every other branch is shared with the input by reference.

Contents
--------
* :data:`ABSENT` – sentinel meaning "no value": returned by reads when asked,
  and accepted by writes to delete the leaf key.
* :func:`normalize_path` – turn a dotted string or key sequence into a tuple.
* :func:`get_path` / :func:`has_path` – lookups.
* :func:`set_path` / :func:`delete_path` – structural-sharing writes.

System Role
-----------
Every other write in the package (section binder, closed records, host API)
composes these helpers, so this is the single place that enforces the
"no partial writes, no silent scalar overwrite" rules.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Final, Union

from .errors import InvalidPath, TypeMismatch


class _Absent:
    """Marker type for :data:`ABSENT`; documents never contain it."""

    _instance: _Absent | None = None

    def __new__(cls) -> _Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Final[Any] = _Absent()
"""Sentinel used for missing values on read and key removal on write."""

PathLike = Union[str, Sequence[str]]


def normalize_path(path: PathLike) -> tuple[str, ...]:
    """Return *path* as a tuple of keys, rejecting empty or malformed paths.

    Parameters
    ----------
    path:
        Dotted string (``"styles.background.color"``) or a sequence of keys.

    Examples
    --------
    >>> normalize_path("styles.background.color")
    ('styles', 'background', 'color')
    >>> normalize_path(["services"])
    ('services',)
    >>> normalize_path("")
    Traceback (most recent call last):
    ...
    lib_module_config.domain.errors.InvalidPath: Path must contain at least one key
    """

    if isinstance(path, str):
        keys: tuple[Any, ...] = tuple(path.split(".")) if path else ()
    elif isinstance(path, Sequence):
        keys = tuple(path)
    else:
        raise InvalidPath(f"Unsupported path type: {type(path).__name__}")
    if not keys:
        raise InvalidPath("Path must contain at least one key")
    for key in keys:
        if not isinstance(key, str) or not key:
            raise InvalidPath(f"Invalid path segment {key!r} in {_dotted(keys)}")
    return keys


def get_path(document: Mapping[str, Any], path: PathLike, default: Any = None) -> Any:
    """Return the value stored at *path* or *default* when any key is missing.

    Pass ``default=ABSENT`` to read a value that can be written back unchanged:
    ``set_path(doc, p, get_path(doc, p, default=ABSENT)) == doc`` holds for
    missing paths too, whereas the ``None`` default would store a ``None`` leaf.

    Raises
    ------
    TypeMismatch
        When an intermediate value exists but is not a mapping.

    Examples
    --------
    >>> doc = {"booking": {"styles": {"cardRadius": 20}}}
    >>> get_path(doc, "booking.styles.cardRadius")
    20
    >>> get_path(doc, "booking.title", default="untitled")
    'untitled'
    """

    keys = normalize_path(path)
    current: Any = _ensure_mapping(document, ())
    for depth, key in enumerate(keys):
        current = _ensure_mapping(current, keys[:depth])
        if key not in current:
            return default
        current = current[key]
    return current


def has_path(document: Mapping[str, Any], path: PathLike) -> bool:
    """Return ``True`` when every key along *path* exists."""

    return get_path(document, path, default=ABSENT) is not ABSENT


def set_path(document: Mapping[str, Any], path: PathLike, value: Any) -> dict[str, Any]:
    """Return a copy of *document* with *value* stored at *path*.

    Why
    ----
    Editors must replace one branch without touching siblings, and hosts rely
    on unchanged branches keeping their identity (cheap change detection).

    What
    ----
    Copies each ancestor mapping along the path, creates empty mappings for
    missing intermediates and replaces (or, for :data:`ABSENT`, removes) the
    leaf. Removing a key that does not exist returns an unchanged copy.

    Raises
    ------
    InvalidPath
        For empty or malformed paths.
    TypeMismatch
        When the path walks through a scalar.

    Examples
    --------
    >>> doc = {"booking": {"title": "Old", "services": []}}
    >>> updated = set_path(doc, "booking.title", "New")
    >>> updated["booking"]["title"], doc["booking"]["title"]
    ('New', 'Old')
    >>> updated["booking"]["services"] is doc["booking"]["services"]
    True
    >>> set_path(doc, "booking.title.text", "x")
    Traceback (most recent call last):
    ...
    lib_module_config.domain.errors.TypeMismatch: Cannot traverse scalar at booking.title
    """

    keys = normalize_path(path)
    root = _ensure_mapping(document, ())
    if value is ABSENT and not has_path(root, keys):
        _check_traversable(root, keys)
        return dict(root)
    return _assign(root, keys, 0, value)


def delete_path(document: Mapping[str, Any], path: PathLike) -> dict[str, Any]:
    """Return a copy of *document* without the leaf key at *path*."""

    return set_path(document, path, ABSENT)


def _assign(node: Mapping[str, Any], keys: tuple[str, ...], depth: int, value: Any) -> dict[str, Any]:
    """Rebuild the ancestors of ``keys[depth:]`` below *node*."""

    key = keys[depth]
    updated = dict(node)
    if depth == len(keys) - 1:
        if value is ABSENT:
            updated.pop(key, None)
        else:
            updated[key] = value
        return updated

    child = node.get(key, ABSENT)
    if child is ABSENT:
        child = {}
    child = _ensure_mapping(child, keys[: depth + 1])
    updated[key] = _assign(child, keys, depth + 1, value)
    return updated


def _check_traversable(root: Mapping[str, Any], keys: tuple[str, ...]) -> None:
    """Walk *keys* as far as they exist, raising on scalars along the way."""

    current: Any = root
    for depth, key in enumerate(keys[:-1]):
        current = current.get(key, ABSENT)
        if current is ABSENT:
            return
        _ensure_mapping(current, keys[: depth + 1])


def _ensure_mapping(value: Any, prefix: tuple[str, ...]) -> Mapping[str, Any]:
    """Return *value* when it is a mapping, otherwise raise :class:`TypeMismatch`."""

    if not isinstance(value, Mapping):
        location = _dotted(prefix) if prefix else "<document root>"
        raise TypeMismatch(f"Cannot traverse scalar at {location}")
    return value


def _dotted(keys: Sequence[Any]) -> str:
    """Join *keys* for error messages."""

    return ".".join(str(key) for key in keys)
