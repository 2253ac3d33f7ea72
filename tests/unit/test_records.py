"""Closed-set records: opening hours and contact-form fields."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_module_config.domain.errors import InvalidPath, InvalidValue, TypeMismatch
from lib_module_config.domain.paths import ABSENT
from lib_module_config.domain.records import (
    FORM_FIELDS,
    SCHEDULE,
    WEEKDAYS,
    day_hours,
    form_field,
    form_fields_with_defaults,
    is_time_of_day,
    schedule_with_defaults,
    set_day_hours,
    set_form_field,
    toggle_day,
    toggle_form_field,
)

TIME = st.builds(lambda h, m: f"{h:02d}:{m:02d}", st.integers(0, 23), st.integers(0, 59))


@given(st.sampled_from(WEEKDAYS), TIME, TIME)
def test_toggle_twice_preserves_hours(day, start, end) -> None:
    hours = set_day_hours({}, day, start=start, end=end)
    hours = SCHEDULE.set_entry_field(hours, day, "enabled", True)
    closed = toggle_day(hours, day)
    assert day_hours(closed, day) == {"enabled": False, "start": start, "end": end}
    assert toggle_day(closed, day) == hours


def test_schedule_defaults_fill_every_weekday_in_order() -> None:
    complete = schedule_with_defaults({"monday": {"enabled": True}})
    assert list(complete) == list(WEEKDAYS)
    assert complete["monday"] == {"enabled": True, "start": "09:00", "end": "18:00"}
    assert complete["sunday"] == {"enabled": False, "start": "09:00", "end": "18:00"}


def test_with_defaults_drops_unknown_keys_and_keeps_input() -> None:
    record = {"monday": {"enabled": True, "note": "x"}, "holiday": {"enabled": True}}
    complete = schedule_with_defaults(record)
    assert "holiday" not in complete
    assert "note" not in complete["monday"]
    assert record == {"monday": {"enabled": True, "note": "x"}, "holiday": {"enabled": True}}


def test_writes_touch_only_one_key() -> None:
    assert toggle_day(None, "friday") == {"friday": {"enabled": True}}


@pytest.mark.parametrize("value", ["24:00", "9:00", "09:60", "", 900])
def test_invalid_times_are_rejected(value) -> None:
    with pytest.raises(InvalidValue):
        SCHEDULE.set_entry_field({}, "monday", "start", value)


def test_unknown_keys_and_fields_are_rejected() -> None:
    with pytest.raises(InvalidPath):
        toggle_day({}, "funday")
    with pytest.raises(InvalidPath):
        SCHEDULE.set_entry_field({}, "monday", "lunch", "12:00")


def test_toggle_value_must_be_boolean() -> None:
    with pytest.raises(InvalidValue):
        SCHEDULE.set_entry_field({}, "monday", "enabled", 1)


def test_stored_scalar_entry_is_a_type_mismatch() -> None:
    with pytest.raises(TypeMismatch):
        day_hours({"monday": "closed"}, "monday")


def test_form_field_defaults() -> None:
    complete = form_fields_with_defaults(None)
    assert list(complete) == ["firstName", "lastName", "email", "phone", "message"]
    assert complete["email"] == {"show": True, "required": True, "label": "Email"}
    assert complete["message"]["required"] is False


def test_form_field_toggle_keeps_label() -> None:
    record = set_form_field({}, "phone", "label", "Mobile")
    hidden = toggle_form_field(record, "phone")
    assert form_field(hidden, "phone") == {"show": False, "required": True, "label": "Mobile"}
    assert toggle_form_field(hidden, "phone")["phone"] == {"label": "Mobile", "show": True}


def test_models_share_one_type() -> None:
    assert type(SCHEDULE) is type(FORM_FIELDS)
    assert FORM_FIELDS.keys[0] == "firstName"


def test_is_time_of_day() -> None:
    assert is_time_of_day("00:00")
    assert is_time_of_day("23:59")
    assert not is_time_of_day(None)


def test_assign_checks_whole_entries() -> None:
    record = {"monday": {"enabled": True, "start": "08:00", "end": "12:00"}}
    updated = SCHEDULE.assign(record, ("friday",), {"enabled": True, "end": "20:00"})
    assert updated["friday"] == {"enabled": True, "end": "20:00"}
    assert updated["monday"] is record["monday"]
    with pytest.raises(InvalidValue):
        SCHEDULE.assign(record, ("friday",), "open")
    with pytest.raises(InvalidPath):
        SCHEDULE.assign(record, ("friday", "start", "hour"), 8)


def test_assign_absent_restores_the_default() -> None:
    record = {"monday": {"enabled": True, "start": "08:00", "end": "12:00"}}
    cleared = SCHEDULE.assign(record, ("monday", "start"), ABSENT)
    assert day_hours(cleared, "monday")["start"] == "09:00"
    assert SCHEDULE.assign(record, ("monday",), ABSENT) == {}
    with pytest.raises(InvalidPath):
        SCHEDULE.assign(record, ("monday", "lunch"), ABSENT)


def test_replace_validates_every_entry() -> None:
    assert FORM_FIELDS.replace({"phone": {"show": False}}) == {"phone": {"show": False}}
    with pytest.raises(InvalidPath):
        FORM_FIELDS.replace({"fax": {"show": True}})
    with pytest.raises(InvalidValue):
        FORM_FIELDS.replace(["phone"])
