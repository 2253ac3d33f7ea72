"""Closed-set records with typed per-key defaults.

Purpose
-------
Model the two records whose keys come from a fixed list: weekly opening hours
(one entry per weekday) and contact-form field toggles (one entry per form
field). Both share the same rules, so both are instances of
:class:`ClosedRecordModel`.

Contents
--------
* :class:`DayHours` / :class:`FormField` – typed shapes of a single entry.
* :class:`ClosedRecordModel` – ``with_defaults`` / ``entry`` /
  ``set_entry_field`` / ``toggle`` over a closed key set.
* :data:`SCHEDULE` / :data:`FORM_FIELDS` – the two concrete models.
* Module-level shortcuts (:func:`toggle_day`, :func:`set_day_hours`,
  :func:`toggle_form_field`, ...).

System Role
-----------
Defaults are synthesised at read time and never written eagerly: a write only
touches the one key and field it targets. Toggling ``enabled``/``show`` never
clears the paired times or label, so switching back on restores them.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Callable, Final, TypedDict

from .errors import InvalidPath, InvalidValue, TypeMismatch
from .paths import ABSENT, set_path


class DayHours(TypedDict):
    """Opening hours for one weekday.

    Attributes
    ----------
    enabled:
        Whether the business is open that day.
    start / end:
        ``HH:MM`` strings; kept while ``enabled`` is ``False``.
    """

    enabled: bool
    start: str
    end: str


class FormField(TypedDict):
    """Display settings for one contact-form field."""

    show: bool
    required: bool
    label: str


WEEKDAYS: Final[tuple[str, ...]] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

DEFAULT_DAY_HOURS: Final[DayHours] = {"enabled": False, "start": "09:00", "end": "18:00"}

FORM_FIELD_LABELS: Final[dict[str, str]] = {
    "firstName": "Prénom",
    "lastName": "Nom",
    "email": "Email",
    "phone": "Téléphone",
    "message": "Message (optionnel)",
}

_TIME_PATTERN: Final[re.Pattern[str]] = re.compile(r"^(?:[01]\d|2[0-3]):[0-5]\d$")


def is_time_of_day(value: Any) -> bool:
    """Return ``True`` for ``HH:MM`` strings on a 24h clock.

    >>> is_time_of_day("09:30"), is_time_of_day("24:00"), is_time_of_day("9:30")
    (True, False, False)
    """

    return isinstance(value, str) and _TIME_PATTERN.match(value) is not None


@dataclass(frozen=True)
class ClosedRecordModel:
    """Rules for a mapping whose keys come from a fixed, ordered set.

    Parameters
    ----------
    name:
        Record name used in error messages (``"openingHours"``).
    defaults:
        Ordered mapping from each allowed key to its complete default entry.
    field_types:
        Allowed sub-fields and their Python type.
    toggle_field:
        Boolean sub-field flipped by :meth:`toggle`.
    validators:
        Optional extra checks per sub-field.

    Examples
    --------
    >>> SCHEDULE.entry({}, "monday")
    {'enabled': False, 'start': '09:00', 'end': '18:00'}
    >>> FORM_FIELDS.entry({}, "message")["required"]
    False
    """

    name: str
    defaults: Mapping[str, Mapping[str, Any]]
    field_types: Mapping[str, type]
    toggle_field: str
    validators: Mapping[str, Callable[[Any], bool]] = field(default_factory=dict)

    @property
    def keys(self) -> tuple[str, ...]:
        """Allowed keys in canonical order."""

        return tuple(self.defaults)

    def with_defaults(self, record: Mapping[str, Any] | None) -> dict[str, dict[str, Any]]:
        """Return a complete copy of *record* with every key and sub-field present.

        The input is not modified; keys outside the closed set are left out of
        the view.
        """

        return {key: self.entry(record, key) for key in self.keys}

    def entry(self, record: Mapping[str, Any] | None, key: str) -> dict[str, Any]:
        """Return the complete entry for *key*, falling back to its defaults."""

        self._check_key(key)
        stored = (record or {}).get(key)
        complete = dict(self.defaults[key])
        if stored is None:
            return complete
        if not isinstance(stored, Mapping):
            raise TypeMismatch(f"{self.name}.{key} must be a mapping, got {type(stored).__name__}")
        for sub_field, value in stored.items():
            if sub_field in self.field_types and value is not None:
                complete[sub_field] = value
        return complete

    def set_entry_field(self, record: Mapping[str, Any] | None, key: str, sub_field: str, value: Any) -> dict[str, Any]:
        """Return *record* with ``record[key][sub_field] = value``.

        Raises
        ------
        InvalidPath
            For keys or sub-fields outside the closed set.
        InvalidValue
            When *value* has the wrong type or fails the sub-field validator.
        """

        self._check_key(key)
        expected = self._field_type(key, sub_field)
        if not _has_type(value, expected):
            raise InvalidValue(f"{self.name}.{key}.{sub_field} expects {expected.__name__}, got {value!r}")
        check = self.validators.get(sub_field)
        if check is not None and not check(value):
            raise InvalidValue(f"Invalid value {value!r} for {self.name}.{key}.{sub_field}")
        return set_path(record or {}, (key, sub_field), value)

    def assign(self, record: Mapping[str, Any] | None, path: Sequence[str], value: Any) -> dict[str, Any]:
        """Write *value* at ``key`` or ``key.field`` inside *record*.

        A whole entry is checked field by field. :data:`ABSENT` removes the
        stored value so the default shows through again.

        >>> SCHEDULE.assign({}, ("monday",), {"enabled": True, "start": "08:00"})
        {'monday': {'enabled': True, 'start': '08:00'}}
        """

        if not 1 <= len(path) <= 2:
            raise InvalidPath(f"{self.name} paths are 'key' or 'key.field', got {'.'.join(path)!r}")
        key = path[0]
        self._check_key(key)
        if len(path) == 2:
            if value is ABSENT:
                self._field_type(key, path[1])
                return set_path(record or {}, tuple(path), ABSENT)
            return self.set_entry_field(record, key, path[1], value)
        if value is ABSENT:
            return set_path(record or {}, (key,), ABSENT)
        if not isinstance(value, Mapping):
            raise InvalidValue(f"{self.name}.{key} expects a mapping, got {value!r}")
        updated = set_path(record or {}, (key,), {})
        for sub_field, sub_value in value.items():
            updated = self.set_entry_field(updated, key, sub_field, sub_value)
        return updated

    def replace(self, value: Mapping[str, Any]) -> dict[str, Any]:
        """Return a checked copy of a whole record written in one go."""

        if not isinstance(value, Mapping):
            raise InvalidValue(f"{self.name} expects a mapping, got {value!r}")
        updated: dict[str, Any] = {}
        for key, entry in value.items():
            updated = self.assign(updated, (key,), entry)
        return updated

    def toggle(self, record: Mapping[str, Any] | None, key: str) -> dict[str, Any]:
        """Flip the toggle sub-field of *key*, keeping all other sub-fields."""

        current = self.entry(record, key)[self.toggle_field]
        return self.set_entry_field(record, key, self.toggle_field, not current)

    def _check_key(self, key: str) -> None:
        if key not in self.defaults:
            raise InvalidPath(f"Unknown {self.name} key {key!r}; expected one of {', '.join(self.keys)}")

    def _field_type(self, key: str, sub_field: str) -> type:
        expected = self.field_types.get(sub_field)
        if expected is None:
            raise InvalidPath(f"Unknown field {sub_field!r} for {self.name}.{key}")
        return expected


def _has_type(value: Any, expected: type) -> bool:
    """Type check that refuses ``int`` for ``bool`` and ``bool`` for ``int``."""

    if expected is bool:
        return isinstance(value, bool)
    return isinstance(value, expected) and not isinstance(value, bool)


SCHEDULE: Final[ClosedRecordModel] = ClosedRecordModel(
    name="openingHours",
    defaults={day: dict(DEFAULT_DAY_HOURS) for day in WEEKDAYS},
    field_types={"enabled": bool, "start": str, "end": str},
    toggle_field="enabled",
    validators={"start": is_time_of_day, "end": is_time_of_day},
)

FORM_FIELDS: Final[ClosedRecordModel] = ClosedRecordModel(
    name="fields",
    defaults={
        key: {"show": True, "required": key != "message", "label": label}
        for key, label in FORM_FIELD_LABELS.items()
    },
    field_types={"show": bool, "required": bool, "label": str},
    toggle_field="show",
)


def schedule_with_defaults(record: Mapping[str, Any] | None) -> dict[str, dict[str, Any]]:
    """Return all seven weekdays with their hours filled in."""

    return SCHEDULE.with_defaults(record)


def day_hours(record: Mapping[str, Any] | None, day: str) -> dict[str, Any]:
    """Return the complete hours of *day*."""

    return SCHEDULE.entry(record, day)


def toggle_day(record: Mapping[str, Any] | None, day: str) -> dict[str, Any]:
    """Open or close *day*; start/end survive the round trip.

    >>> hours = {"monday": {"enabled": True, "start": "08:00", "end": "12:00"}}
    >>> toggle_day(toggle_day(hours, "monday"), "monday") == hours
    True
    """

    return SCHEDULE.toggle(record, day)


def set_day_hours(
    record: Mapping[str, Any] | None,
    day: str,
    *,
    start: str | None = None,
    end: str | None = None,
) -> dict[str, Any]:
    """Set the opening and/or closing time of *day*."""

    updated = dict(record or {})
    if start is not None:
        updated = SCHEDULE.set_entry_field(updated, day, "start", start)
    if end is not None:
        updated = SCHEDULE.set_entry_field(updated, day, "end", end)
    return updated


def form_fields_with_defaults(record: Mapping[str, Any] | None) -> dict[str, dict[str, Any]]:
    """Return all contact-form fields with their settings filled in."""

    return FORM_FIELDS.with_defaults(record)


def form_field(record: Mapping[str, Any] | None, key: str) -> dict[str, Any]:
    """Return the complete settings of form field *key*."""

    return FORM_FIELDS.entry(record, key)


def toggle_form_field(record: Mapping[str, Any] | None, key: str) -> dict[str, Any]:
    """Show or hide form field *key*; its label and required flag are kept."""

    return FORM_FIELDS.toggle(record, key)


def set_form_field(record: Mapping[str, Any] | None, key: str, prop: str, value: Any) -> dict[str, Any]:
    """Set ``show``, ``required`` or ``label`` of form field *key*."""

    return FORM_FIELDS.set_entry_field(record, key, prop, value)
