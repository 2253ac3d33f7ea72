"""Structured logging for document edits.

Every accepted or rejected edit, every document read or write and the
settings resolution leave one record on the ``lib_module_config`` logger. The
record message is the event name (``field_updated``, ``edit_rejected`` ...)
and the details travel in ``record.context`` together with the id of the
editing session that produced them, so a host can group the entries of one
editor tab or one CLI invocation.

Nothing is printed until the host attaches a handler.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Final, Mapping

SESSION_ID: ContextVar[str | None] = ContextVar("lib_module_config_session_id", default=None)
"""Editing session the current call belongs to."""

_LOGGER: Final[logging.Logger] = logging.getLogger("lib_module_config")
_LOGGER.addHandler(logging.NullHandler())


def get_logger() -> logging.Logger:
    """Return the package logger so hosts can attach handlers."""

    return _LOGGER


def bind_session_id(session_id: str | None) -> None:
    """Tag the following edits with *session_id*; ``None`` clears the tag.

    >>> bind_session_id("tab-1")
    >>> SESSION_ID.get()
    'tab-1'
    >>> bind_session_id(None)
    """

    SESSION_ID.set(session_id)


@contextmanager
def edit_session(session_id: str | None = None) -> Iterator[str]:
    """Tag the edits made inside the block; a random id is used when none is given.

    The previous session id is restored on exit.
    """

    token = SESSION_ID.set(session_id or uuid.uuid4().hex[:12])
    try:
        yield SESSION_ID.get() or ""
    finally:
        SESSION_ID.reset(token)


def make_event(
    section: str | None,
    path: str | None,
    payload: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Return the ``section``/``path`` fields of an event plus optional detail.

    >>> make_event('booking', 'services', {'op': 'append'})
    {'section': 'booking', 'path': 'services', 'op': 'append'}
    """

    event: dict[str, Any] = {"section": section, "path": path}
    if payload:
        event |= dict(payload)
    return event


def log_debug(event: str, **fields: Any) -> None:
    _emit(logging.DEBUG, event, fields)


def log_info(event: str, **fields: Any) -> None:
    _emit(logging.INFO, event, fields)


def log_error(event: str, **fields: Any) -> None:
    _emit(logging.ERROR, event, fields)


def _emit(level: int, event: str, fields: Mapping[str, Any]) -> None:
    if not _LOGGER.isEnabledFor(level):
        return
    _LOGGER.log(level, event, extra={"context": {"session_id": SESSION_ID.get(), **fields}})
