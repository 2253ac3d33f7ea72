"""Public package surface for editing module configuration documents.

Hosts import the read/write API, the collection intents, the settings object
and the error family from here; the domain helpers (derived fields, pricing
transitions, closed records) are re-exported for editors that compute views.
"""

from __future__ import annotations

from .application.binder import SectionBinding
from .application.operations import Append, CollectionOp, DeleteAt, DuplicateAt, Reorder, UpdateAt, parse_operation
from .config import DEFAULT_SETTINGS, EditorSettings, load_settings
from .core import (
    add_default_item,
    apply_collection_op,
    apply_field_update,
    apply_intent,
    apply_style_update,
    get_section_value,
)
from .domain.derived import discount_percent, effective_promo, price_label, resolve_color, resolve_icon
from .domain.errors import (
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
from .domain.paths import ABSENT, delete_path, get_path, set_path
from .domain.pricing import set_price_label, toggle_free, toggle_promo
from .domain.records import FORM_FIELDS, SCHEDULE, ClosedRecordModel
from .observability import bind_session_id, edit_session, get_logger

__all__ = [
    "ABSENT",
    "Append",
    "ClosedRecordModel",
    "CollectionOp",
    "DEFAULT_SETTINGS",
    "DeleteAt",
    "DuplicateAt",
    "DuplicateId",
    "EditError",
    "EditorSettings",
    "FORM_FIELDS",
    "IdentityViolation",
    "IndexOutOfRange",
    "InvalidFormat",
    "InvalidOperation",
    "InvalidPath",
    "InvalidPermutation",
    "InvalidValue",
    "NotFound",
    "Reorder",
    "SCHEDULE",
    "SectionBinding",
    "TypeMismatch",
    "UpdateAt",
    "add_default_item",
    "apply_collection_op",
    "apply_field_update",
    "apply_intent",
    "apply_style_update",
    "bind_session_id",
    "delete_path",
    "discount_percent",
    "edit_session",
    "effective_promo",
    "get_logger",
    "get_path",
    "get_section_value",
    "load_settings",
    "parse_operation",
    "price_label",
    "resolve_color",
    "resolve_icon",
    "set_path",
    "set_price_label",
    "toggle_free",
    "toggle_promo",
]
