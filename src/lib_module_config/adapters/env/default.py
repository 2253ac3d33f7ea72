"""Environment variable adapter for editor settings.

Purpose
-------
Turn ``LIB_MODULE_CONFIG_*`` process variables into a nested mapping so
operators can switch currency or label conventions without touching files.
It is the last layer applied by :func:`lib_module_config.config.load_settings`.

Key behaviours
--------------
* Only variables carrying the prefix (``default_env_prefix``) are captured.
* ``__`` nests keys (``EDITOR__CURRENCY`` → ``{"editor": {"currency": ...}}``).
* Common scalars are coerced (bools, ints, floats, ``null``/``none``).
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from ...domain.errors import InvalidValue
from ...observability import log_debug


def default_env_prefix(slug: str) -> str:
    """Return the environment prefix for *slug*.

    Examples
    --------
    >>> default_env_prefix('lib-module-config')
    'LIB_MODULE_CONFIG'
    """

    return slug.replace("-", "_").upper()


class DefaultEnvLoader:
    """Load environment variables that belong to the settings namespace."""

    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        """Use *environ* instead of :data:`os.environ` (handy in tests)."""

        self._environ = os.environ if environ is None else environ

    def load(self, prefix: str) -> dict[str, object]:
        """Return a nested mapping of the variables starting with *prefix*.

        Keys are lower-cased unless they already exist with another case,
        which keeps camelCase setting names reachable
        (``DECIMAL_SEPARATOR`` still maps to ``decimal_separator``).

        Side Effects
        ------------
        Emits an ``env_variables_loaded`` debug event listing the top-level keys.

        Examples
        --------
        >>> loader = DefaultEnvLoader(environ={'DEMO_CURRENCY': '$', 'DEMO_PROMO_MARKUP': '1.5'})
        >>> payload = loader.load('DEMO')
        >>> payload['currency'], payload['promo_markup']
        ('$', 1.5)
        """

        prefix = f"{prefix}_" if prefix and not prefix.endswith("_") else prefix
        collected: dict[str, object] = {}
        for key, value in self._environ.items():
            if prefix and not key.startswith(prefix):
                continue
            stripped = key[len(prefix) :] if prefix else key
            if not stripped:
                continue
            assign_nested(collected, stripped, _coerce(value))
        log_debug("env_variables_loaded", section=None, path=None, keys=sorted(collected))
        return collected


def assign_nested(target: dict[str, object], key: str, value: object) -> None:
    """Assign *value* inside *target* using ``__`` as a nesting delimiter.

    Examples
    --------
    >>> data: dict[str, object] = {}
    >>> assign_nested(data, 'EDITOR__FREE_LABEL', 'Gratuit')
    >>> data
    {'editor': {'free_label': 'Gratuit'}}
    """

    parts = key.split("__")
    cursor = target
    for part in parts[:-1]:
        cursor = _ensure_child_mapping(cursor, part)
    cursor[_resolve_key(cursor, parts[-1])] = value


def _resolve_key(mapping: dict[str, object], key: str) -> str:
    """Return an existing key matching *key* case-insensitively, else its lower-case form."""

    lower = key.lower()
    for existing in mapping:
        if existing.lower() == lower:
            return existing
    return lower


def _ensure_child_mapping(mapping: dict[str, object], key: str) -> dict[str, object]:
    """Return ``mapping[key]`` as a dict, creating it when missing."""

    resolved = _resolve_key(mapping, key)
    child = mapping.setdefault(resolved, {})
    if not isinstance(child, dict):
        raise InvalidValue(f"Cannot nest settings below scalar key {key}")
    return child


def _coerce(value: str) -> object:
    """Coerce textual environment values to Python scalars where possible.

    Examples
    --------
    >>> _coerce('true'), _coerce('10'), _coerce('1.3'), _coerce('€')
    (True, 10, 1.3, '€')
    """

    lowered = value.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    if lowered in {"null", "none"}:
        return None
    if value.isdigit() or (value.startswith("-") and value[1:].isdigit()):
        return int(value)
    try:
        return float(value)
    except ValueError:
        return value
