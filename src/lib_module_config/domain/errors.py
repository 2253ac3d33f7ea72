"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by the editing core, the adapters and
host applications. The hierarchy lives in the domain layer so the outer layers
may depend on it without the domain importing anything from them.

Contents
--------
* :class:`EditError` – umbrella base class for every failure raised by the
  editing core.
* :class:`InvalidPath` – malformed or empty field path.
* :class:`TypeMismatch` – a path traverses a scalar as if it were a mapping.
* :class:`DuplicateId` – an insertion would collide with an existing item id.
* :class:`IndexOutOfRange` – a collection operation received a bad index.
* :class:`IdentityViolation` – an update tried to change an item's id.
* :class:`InvalidPermutation` – a reorder argument is not a permutation of the
  current ids.
* :class:`InvalidValue` – a value breaks a documented invariant (negative
  price, malformed time, wrong record field type).
* :class:`InvalidOperation` – a host intent could not be understood.
* :class:`InvalidFormat` / :class:`NotFound` – document or settings files that
  cannot be parsed or do not exist.

System Role
-----------
Every error here signals a programming-contract violation, not a transient
fault: nothing is retried and no operation leaves partial state behind. Hosts
catch :class:`EditError` to handle all library failures uniformly.
"""

from __future__ import annotations


class EditError(Exception):
    """Base type for all exceptions emitted by ``lib_module_config``.

    Why
    ----
    Provide a single catch-all type for hosts that surface contract violations
    as developer-facing assertions.
    """


class InvalidPath(EditError):
    """Raised when a field path is empty or contains an unusable segment.

    Also used for keys outside a closed record (unknown weekday or form field),
    since those are paths the document model never introduces.
    """


class TypeMismatch(EditError, TypeError):
    """Raised when a path walks through a scalar as if it were a mapping.

    Why
    ----
    Writing below a scalar would silently discard it. Surfacing the mistake
    lets the caller clear the path explicitly instead.
    """


class DuplicateId(EditError):
    """Raised when an item id would appear twice in one collection."""


class IndexOutOfRange(EditError, IndexError):
    """Raised when a collection index is negative or past the end."""


class IdentityViolation(EditError):
    """Raised when an update would swap the identity of an item."""


class InvalidPermutation(EditError):
    """Raised when a reorder request is not a permutation of the current ids."""


class InvalidValue(EditError, ValueError):
    """Signifies that a value breaks a documented field invariant.

    Typical Sources
    ---------------
    Negative prices, opening hours that are not ``HH:MM``, non-boolean toggles
    in closed records and settings of the wrong type.
    """


class InvalidOperation(EditError):
    """Raised when a collection or host intent is unknown or incomplete."""


class InvalidFormat(EditError):
    """Raised when a document or settings file cannot be parsed into a mapping."""


class NotFound(EditError):
    """Represents a missing document or settings file."""
