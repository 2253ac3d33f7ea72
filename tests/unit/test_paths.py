"""Path accessor tests: immutable reads and writes over nested documents.

Randomised documents check the get/set round-trip laws; the example-based
tests pin down structural sharing and the error cases.
"""

from __future__ import annotations

import pytest
from hypothesis import assume, given
from hypothesis import strategies as st

from lib_module_config.domain.errors import InvalidPath, TypeMismatch
from lib_module_config.domain.paths import ABSENT, delete_path, get_path, has_path, normalize_path, set_path

KEY = st.text(alphabet="abc", min_size=1, max_size=2)
PATH = st.lists(KEY, min_size=1, max_size=3).map(tuple)
SCALAR = st.one_of(st.none(), st.booleans(), st.integers(), st.text(max_size=5))
VALUE = st.recursive(
    SCALAR,
    lambda children: st.one_of(
        st.dictionaries(KEY, children, max_size=3),
        st.lists(children, max_size=3),
    ),
    max_leaves=8,
)
DOCUMENT = st.dictionaries(KEY, VALUE, max_size=4)


@given(DOCUMENT, PATH, VALUE)
def test_get_after_set_returns_value(document, path, value) -> None:
    try:
        updated = set_path(document, path, value)
    except TypeMismatch:
        assume(False)
    assert get_path(updated, path) == value


@given(DOCUMENT, PATH)
def test_set_with_current_value_is_a_no_op(document, path) -> None:
    try:
        current = get_path(document, path, default=ABSENT)
    except TypeMismatch:
        assume(False)
    assert set_path(document, path, current) == document


def test_absent_default_makes_missing_reads_writable() -> None:
    document = {"booking": {"title": "A"}}
    assert set_path(document, "booking.badge", get_path(document, "booking.badge", default=ABSENT)) == document
    assert set_path(document, "booking.badge", get_path(document, "booking.badge")) == {
        "booking": {"title": "A", "badge": None}
    }


@given(DOCUMENT, PATH, VALUE)
def test_set_never_mutates_input(document, path, value) -> None:
    snapshot = repr(document)
    try:
        set_path(document, path, value)
    except TypeMismatch:
        pass
    assert repr(document) == snapshot


def test_set_path_shares_untouched_branches() -> None:
    services = [{"id": "s1"}]
    styles = {"cardRadius": 20}
    ecommerce = {"title": "Boutique"}
    document = {"booking": {"title": "Old", "services": services, "styles": styles}, "ecommerce": ecommerce}

    updated = set_path(document, "booking.title", "New")

    assert updated is not document
    assert updated["booking"] is not document["booking"]
    assert updated["booking"]["services"] is services
    assert updated["booking"]["styles"] is styles
    assert updated["ecommerce"] is ecommerce
    assert document["booking"]["title"] == "Old"


def test_set_path_creates_missing_intermediates() -> None:
    updated = set_path({}, ("booking", "styles", "background", "color"), "#000")
    assert updated == {"booking": {"styles": {"background": {"color": "#000"}}}}


def test_set_path_through_scalar_raises() -> None:
    with pytest.raises(TypeMismatch, match="booking.title"):
        set_path({"booking": {"title": "x"}}, "booking.title.text", "y")


def test_get_path_through_scalar_raises() -> None:
    with pytest.raises(TypeMismatch):
        get_path({"booking": "oops"}, "booking.title")


def test_none_is_a_scalar_on_the_way() -> None:
    with pytest.raises(TypeMismatch):
        set_path({"booking": None}, "booking.title", "x")


def test_get_path_missing_returns_default() -> None:
    assert get_path({"booking": {}}, "booking.title") is None
    assert get_path({"booking": {}}, "booking.title", default="untitled") == "untitled"


def test_delete_path_removes_leaf_and_keeps_siblings() -> None:
    document = {"booking": {"title": "x", "badge": "y"}}
    assert delete_path(document, "booking.title") == {"booking": {"badge": "y"}}
    assert document == {"booking": {"title": "x", "badge": "y"}}


def test_delete_missing_path_returns_equal_copy() -> None:
    document = {"booking": {"title": "x"}}
    updated = delete_path(document, "booking.subtitle.text")
    assert updated == document
    assert updated is not document


def test_has_path_distinguishes_none_from_missing() -> None:
    document = {"booking": {"badge": None}}
    assert has_path(document, "booking.badge")
    assert not has_path(document, "booking.title")


@pytest.mark.parametrize("path", ["", "booking..title", ".title", (), ("booking", ""), ("booking", 3)])
def test_malformed_paths_are_rejected(path) -> None:
    with pytest.raises(InvalidPath):
        normalize_path(path)


def test_absent_sentinel_is_falsy_singleton() -> None:
    assert not ABSENT
    assert repr(ABSENT) == "ABSENT"
    assert type(ABSENT)() is ABSENT
