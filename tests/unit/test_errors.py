from __future__ import annotations

import pytest

from lib_module_config.domain.errors import (
    DuplicateId,
    EditError,
    IdentityViolation,
    IndexOutOfRange,
    InvalidFormat,
    InvalidOperation,
    InvalidPath,
    InvalidPermutation,
    InvalidValue,
    NotFound,
    TypeMismatch,
)

ALL_ERRORS = (
    InvalidPath,
    TypeMismatch,
    DuplicateId,
    IndexOutOfRange,
    IdentityViolation,
    InvalidPermutation,
    InvalidValue,
    InvalidOperation,
    InvalidFormat,
    NotFound,
)


@pytest.mark.parametrize("error_type", ALL_ERRORS)
def test_error_hierarchy(error_type) -> None:
    assert issubclass(error_type, EditError)
    assert isinstance(error_type(""), EditError)


def test_builtin_bases_keep_generic_handlers_working() -> None:
    assert issubclass(TypeMismatch, TypeError)
    assert issubclass(IndexOutOfRange, IndexError)
    assert issubclass(InvalidValue, ValueError)
