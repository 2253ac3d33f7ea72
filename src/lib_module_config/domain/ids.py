"""Item id generation.

Ids are opaque strings: a caller-chosen prefix, a base36 millisecond
timestamp, a base36 process-wide counter and a short random suffix. The
counter alone makes ids unique within the process; the timestamp and random
part keep ids from different sessions apart when documents are merged by hand.

INVARIANT: an id never changes once assigned. Reorders, edits and duplication
of *other* items leave it untouched.
"""

from __future__ import annotations

import itertools
import secrets
import time
from typing import Callable, Iterator

IdFactory = Callable[[], str]

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
_COUNTER: Iterator[int] = itertools.count(1)


def _base36(number: int) -> str:
    """Encode a non-negative integer in base36."""
    if number == 0:
        return "0"
    digits: list[str] = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_ALPHABET[remainder])
    return "".join(reversed(digits))


def new_item_id(prefix: str = "") -> str:
    """Return a fresh process-unique id such as ``blxk2m9q41a3f0``.

    >>> new_item_id("b").startswith("b")
    True
    >>> new_item_id() != new_item_id()
    True
    """
    stamp = _base36(time.time_ns() // 1_000_000)
    return f"{prefix}{stamp}{_base36(next(_COUNTER))}{secrets.token_hex(2)}"


def prefixed_id_factory(prefix: str) -> IdFactory:
    """Return a factory producing :func:`new_item_id` values with *prefix*."""

    def factory() -> str:
        return new_item_id(prefix)

    return factory


def sequential_id_factory(prefix: str = "item", start: int = 1) -> IdFactory:
    """Return a deterministic factory (``item1``, ``item2``...) for tests and fixtures.

    >>> make = sequential_id_factory("s")
    >>> make(), make()
    ('s1', 's2')
    """
    counter = itertools.count(start)

    def factory() -> str:
        return f"{prefix}{next(counter)}"

    return factory
