"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contracts the composition root and the CLI rely on so
they never depend on a concrete file format or environment source.

Contents
--------
* :class:`DocumentLoader` – parses a stored document or settings file.
* :class:`EnvLoader` – materialises prefixed environment variables.
* :class:`ItemIdFactory` – produces fresh item ids.

System Role
-----------
Adapters in :mod:`lib_module_config.adapters` implement these protocols;
contract tests check them with ``isinstance`` thanks to
:func:`typing.runtime_checkable`.
"""

from __future__ import annotations

from typing import Mapping, Protocol, runtime_checkable


@runtime_checkable
class DocumentLoader(Protocol):
    """Parse a structured file (JSON/YAML/TOML) into a mapping.

    Why
    ----
    Keep serialisation formats out of the editing core.
    """

    def load(self, path: str) -> Mapping[str, object]:
        """Read *path* and return a mapping or raise ``InvalidFormat``/``NotFound``."""


@runtime_checkable
class EnvLoader(Protocol):
    """Translate prefixed environment variables into nested dictionaries."""

    def load(self, prefix: str) -> Mapping[str, object]:
        """Return variables that match *prefix* (``__`` for nesting)."""


@runtime_checkable
class ItemIdFactory(Protocol):
    """Produce a new opaque item id on each call."""

    def __call__(self) -> str:
        """Return a fresh id."""
