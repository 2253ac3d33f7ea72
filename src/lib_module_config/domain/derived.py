"""Derived display fields computed from primitive inputs.

Purpose
    Keep every dependent field (price label, discount percentage, icon and
    colour fallbacks, resolved category) a pure function of its inputs so it
    can be recomputed whenever those inputs change and never drifts.

Contents
    - ``round_half_up``: commercial rounding (``37.5 -> 38``), unlike ``round``.
    - ``format_price`` / ``price_label``: human price text with a free sentinel.
    - ``discount_percent`` / ``effective_promo``: promo helpers that ignore
      stale ``originalPrice <= price`` states.
    - ``resolve_icon`` / ``resolve_color``: catalog lookups that never raise.
    - ``normalize_rating`` / ``resolve_category``: product field helpers.
    - ``is_number``: guard for legacy documents that stored prices as text.

System Integration
    :mod:`lib_module_config.domain.pricing` applies these to whole items and
    the composition root re-runs them after collection edits.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation as DecimalError
from typing import Any, Final

from .errors import InvalidValue

FREE_LABEL: Final[str] = "Offert"
"""Label shown instead of a price when the price is zero."""

DEFAULT_CURRENCY: Final[str] = "€"
FALLBACK_ICON: Final[str] = "Star"
"""Icon used when neither the requested name nor a catalog is available."""

RATING_MAX: Final[int] = 5
_CENT: Final[Decimal] = Decimal("0.01")


def round_half_up(number: float | int | Decimal) -> int:
    """Round to the nearest integer, halves away from zero.

    >>> round_half_up(37.5), round_half_up(2.5), round_half_up(2.4)
    (38, 3, 2)
    """

    return int(_to_decimal(number).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def format_price(price: float | int, decimal_separator: str = ",") -> str:
    """Format *price* the way the editors display it.

    Whole amounts drop their decimals; other amounts keep at most two digits,
    trailing zeros removed.

    >>> format_price(50), format_price(29.99), format_price(12.5), format_price(29.99, ".")
    ('50', '29,99', '12,5', '29.99')
    """

    amount = _to_decimal(price).quantize(_CENT, rounding=ROUND_HALF_UP)
    if amount == amount.to_integral_value():
        return str(int(amount))
    text = format(amount, "f").rstrip("0").rstrip(".")
    return text.replace(".", decimal_separator)


def price_label(
    price: float | int,
    currency: str = DEFAULT_CURRENCY,
    *,
    free_label: str = FREE_LABEL,
    decimal_separator: str = ",",
) -> str:
    """Return the display label for *price*.

    Examples
    --------
    >>> price_label(0, "€")
    'Offert'
    >>> price_label(50, "€")
    '50 €'
    >>> price_label(-1, "€")
    Traceback (most recent call last):
    ...
    lib_module_config.domain.errors.InvalidValue: Price must not be negative, got -1
    """

    amount = _to_decimal(price)
    if amount < 0:
        raise InvalidValue(f"Price must not be negative, got {price}")
    if amount == 0:
        return free_label
    return f"{format_price(price, decimal_separator)} {currency}"


def discount_percent(price: float | int | None, original_price: float | int | None) -> int | None:
    """Return the rounded discount or ``None`` when there is no real promo.

    >>> discount_percent(70, 100), discount_percent(50, 80), discount_percent(100, 90)
    (30, 38, None)
    """

    promo = effective_promo(price, original_price)
    if promo is None:
        return None
    ratio = _to_decimal(price) / _to_decimal(promo)
    return round_half_up((1 - ratio) * 100)


def effective_promo(price: float | int | None, original_price: float | int | None) -> float | int | None:
    """Return *original_price* only when it is strictly greater than *price*.

    Guards against ``originalPrice <= price`` states left over from earlier
    edits (for example after the price itself was raised).

    >>> effective_promo(50, 80), effective_promo(80, 80), effective_promo(50, None)
    (80, None, None)
    """

    if price is None or original_price is None:
        return None
    try:
        if _to_decimal(original_price) > _to_decimal(price):
            return original_price
    except InvalidValue:
        return None
    return None


def resolve_icon(name: str | None, catalog: Sequence[str] | Mapping[str, Any], fallback: Any = None) -> Any:
    """Return the catalog entry for *name* or a fallback; never raises.

    Unknown names are a normal transient state while a user is still choosing,
    so the lookup degrades to *fallback*, then to the first catalog entry, then
    to :data:`FALLBACK_ICON`.

    >>> resolve_icon("Clock", ["Star", "Clock"])
    'Clock'
    >>> resolve_icon("Clo", ["Star", "Clock"])
    'Star'
    >>> resolve_icon("Nope", {"Check": "check.svg"}, fallback="Check")
    'Check'
    >>> resolve_icon(None, [])
    'Star'
    """

    try:
        if name and name in catalog:
            return catalog[name] if isinstance(catalog, Mapping) else name
    except TypeError:
        pass
    if fallback is not None:
        return fallback
    first = _first(catalog.values() if isinstance(catalog, Mapping) else catalog)
    return first if first is not None else FALLBACK_ICON


def resolve_color(value: str | None, palette: Sequence[str]) -> str | None:
    """Return *value* when set, else the first palette entry (``None`` if empty).

    >>> resolve_color("#000000", ["#10b981"]), resolve_color("", ["#10b981"]), resolve_color(None, [])
    ('#000000', '#10b981', None)
    """

    if value:
        return value
    return _first(palette)


def normalize_rating(value: float | int | None) -> float | int:
    """Clamp *value* into ``[0, 5]`` and snap it to half-star steps.

    >>> normalize_rating(7), normalize_rating(-1), normalize_rating(4.3), normalize_rating(4.26)
    (5, 0, 4.5, 4.5)
    """

    if value is None:
        return 0
    amount = min(Decimal(RATING_MAX), max(Decimal(0), _to_decimal(value)))
    snapped = (amount * 2).quantize(Decimal(1), rounding=ROUND_HALF_UP) / 2
    if snapped == snapped.to_integral_value():
        return int(snapped)
    return float(snapped)


def resolve_category(category_id: str | None, categories: Sequence[Mapping[str, Any]]) -> Mapping[str, Any] | None:
    """Return the category referenced by *category_id*; dangling refs give ``None``."""

    if not category_id:
        return None
    for category in categories:
        if category.get("id") == category_id:
            return category
    return None


def _first(values: Any) -> Any:
    """Return the first element of an iterable or ``None``."""

    for value in values:
        return value
    return None


def _to_decimal(value: Any) -> Decimal:
    """Convert a numeric input to :class:`Decimal` via its text form."""

    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise InvalidValue(f"Expected a number, got {value!r}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except DecimalError as exc:
        raise InvalidValue(f"Expected a finite number, got {value!r}") from exc
    if not amount.is_finite():
        raise InvalidValue(f"Expected a finite number, got {value!r}")
    return amount


def is_number(value: Any) -> bool:
    """Return ``True`` for finite ints/floats (booleans excluded).

    >>> is_number(5), is_number("50€"), is_number(True)
    (True, False, False)
    """

    try:
        _to_decimal(value)
    except InvalidValue:
        return False
    return True
