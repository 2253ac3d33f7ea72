"""Structured document loaders and writers.

Purpose
-------
Convert stored module documents (and settings files) into Python mappings and
back. Loaders are small wrappers around ``json``, ``yaml.safe_load`` and
``tomllib`` so error handling and observability live in one place.

Contents
--------
* :class:`BaseFileLoader` – shared helpers for reading files and validating
  mapping outputs.
* :class:`JSONFileLoader` / :class:`YAMLFileLoader` / :class:`TOMLFileLoader`
  – one loader per format.
* :func:`load_document` – pick the loader from the file suffix.
* :func:`dumps_document` / :func:`dump_document` – JSON or YAML output that
  keeps mapping key order and item order.

System Role
-----------
Used by the CLI and by :func:`lib_module_config.config.load_settings`. The
editing core itself only ever sees the resulting plain mappings.
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any, Mapping

import yaml

from ...domain.errors import InvalidFormat, NotFound
from ...observability import log_debug, log_error


class BaseFileLoader:
    """Common utilities shared by the structured file loaders."""

    def _read(self, path: str) -> bytes:
        """Read *path* as bytes, raising :class:`NotFound` when the file is missing.

        Side Effects
        ------------
        Emits ``document_file_read`` debug events.
        """

        file_path = Path(path)
        if not file_path.is_file():
            raise NotFound(f"Document file not found: {path}")
        payload = file_path.read_bytes()
        log_debug("document_file_read", section=None, path=path, size=len(payload))
        return payload

    @staticmethod
    def _ensure_mapping(data: object, *, path: str) -> Mapping[str, object]:
        """Ensure *data* behaves like a mapping, otherwise raise ``InvalidFormat``.

        Examples
        --------
        >>> BaseFileLoader._ensure_mapping({"booking": {}}, path="demo")
        {'booking': {}}
        >>> BaseFileLoader._ensure_mapping([1, 2], path="demo")
        Traceback (most recent call last):
        ...
        lib_module_config.domain.errors.InvalidFormat: File demo did not produce a mapping
        """

        if not isinstance(data, Mapping):
            raise InvalidFormat(f"File {path} did not produce a mapping")
        return data


class JSONFileLoader(BaseFileLoader):
    """Load JSON documents, the format hosts usually persist."""

    def load(self, path: str) -> Mapping[str, object]:
        """Return mapping extracted from the JSON file at *path*."""

        try:
            data = json.loads(self._read(path))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            log_error("document_invalid", section=None, path=path, format="json", error=str(exc))
            raise InvalidFormat(f"Invalid JSON in {path}: {exc}") from exc
        result = self._ensure_mapping(data, path=path)
        log_debug("document_loaded", section=None, path=path, format="json")
        return result


class YAMLFileLoader(BaseFileLoader):
    """Load YAML documents; an empty file reads as an empty document."""

    def load(self, path: str) -> Mapping[str, object]:
        """Return mapping extracted from the YAML file at *path*."""

        try:
            data = yaml.safe_load(self._read(path))
        except yaml.YAMLError as exc:
            log_error("document_invalid", section=None, path=path, format="yaml", error=str(exc))
            raise InvalidFormat(f"Invalid YAML in {path}: {exc}") from exc
        if data is None:
            data = {}
        result = self._ensure_mapping(data, path=path)
        log_debug("document_loaded", section=None, path=path, format="yaml")
        return result


class TOMLFileLoader(BaseFileLoader):
    """Load TOML files; mostly used for settings since TOML has no ``null``."""

    def load(self, path: str) -> Mapping[str, object]:
        """Return mapping extracted from the TOML file at *path*."""

        try:
            data = tomllib.loads(self._read(path).decode("utf-8"))
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
            log_error("document_invalid", section=None, path=path, format="toml", error=str(exc))
            raise InvalidFormat(f"Invalid TOML in {path}: {exc}") from exc
        result = self._ensure_mapping(data, path=path)
        log_debug("document_loaded", section=None, path=path, format="toml")
        return result


FILE_LOADERS: dict[str, BaseFileLoader] = {
    ".json": JSONFileLoader(),
    ".yaml": YAMLFileLoader(),
    ".yml": YAMLFileLoader(),
    ".toml": TOMLFileLoader(),
}
"""Loaders keyed by lower-case file suffix."""


def load_document(path: str | Path) -> dict[str, Any]:
    """Load the document at *path* with the loader matching its suffix.

    Raises
    ------
    InvalidFormat
        For unsupported suffixes or unparsable content.
    NotFound
        When the file does not exist.
    """

    suffix = Path(path).suffix.lower()
    loader = FILE_LOADERS.get(suffix)
    if loader is None:
        raise InvalidFormat(f"Unsupported document format {suffix or '<none>'!r} for {path}")
    return dict(loader.load(str(path)))  # type: ignore[attr-defined]


def dumps_document(document: Mapping[str, Any], *, fmt: str = "json", indent: int | None = 2) -> str:
    """Serialise *document* as JSON or YAML, preserving key and item order.

    Examples
    --------
    >>> print(dumps_document({"booking": {"title": "Réservez", "services": []}}, indent=None))
    {"booking": {"title": "Réservez", "services": []}}
    >>> print(dumps_document({"booking": {"title": "Réservez"}}, fmt="yaml"), end="")
    booking:
      title: Réservez
    """

    if fmt == "json":
        return json.dumps(document, indent=indent, ensure_ascii=False)
    if fmt == "yaml":
        return yaml.safe_dump(_plain(document), sort_keys=False, allow_unicode=True)
    raise InvalidFormat(f"Cannot write documents as {fmt!r}; use json or yaml")


def dump_document(document: Mapping[str, Any], path: str | Path, *, indent: int | None = 2) -> Path:
    """Write *document* to *path* in the format implied by its suffix."""

    target = Path(path)
    suffix = target.suffix.lower()
    formats = {".json": "json", ".yaml": "yaml", ".yml": "yaml"}
    if suffix not in formats:
        raise InvalidFormat(f"Cannot write documents to {target}; use .json, .yaml or .yml")
    text = dumps_document(document, fmt=formats[suffix], indent=indent)
    target.write_text(text if text.endswith("\n") else text + "\n", encoding="utf-8")
    log_debug("document_written", section=None, path=str(target), format=formats[suffix])
    return target


def _plain(value: Any) -> Any:
    """Convert mappings and tuples to ``dict``/``list`` so ``safe_dump`` accepts them."""

    if isinstance(value, Mapping):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value
