"""Booking and e-commerce module helpers.

Purpose
-------
Hold the module-specific knowledge the generic core does not need: what a new
service, product, category or guarantee looks like, which style and display
options default to what, and how item summaries read in the editor lists.

Contents
--------
* :func:`new_service` / :func:`new_product` / :func:`new_category` /
  :func:`new_guarantee` – factories for freshly added items.
* :func:`new_item` – dispatch on ``(section, collection)`` for hosts and CLI.
* :func:`set_badge` / :func:`badge_preset` / :func:`set_rating` /
  :func:`product_category` – product field helpers.
* :func:`item_summary` / :func:`duration_label` – one-line descriptions.
* :func:`item_icon` / :func:`item_color` – catalog lookups with fallbacks.
* :func:`section_with_defaults` – a display view with every default filled in.
* :data:`STYLE_DEFAULTS` / :data:`DISPLAY_DEFAULTS` and
  :func:`display_option` – documented fallbacks for absent keys.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Callable, Final

from ..catalogs import (
    BADGE_PRESETS,
    CATEGORY_ICONS,
    DEFAULT_BADGE_COLOR,
    DURATION_OPTIONS,
    GUARANTEE_ICONS,
    MODULE_ICONS,
    PRESET_COLORS,
)
from ..domain.derived import format_price, is_number, normalize_rating, resolve_category, resolve_color, resolve_icon
from ..domain.errors import InvalidOperation
from ..domain.ids import IdFactory, prefixed_id_factory
from ..domain.pricing import DEFAULT_RULES, PricingRules, derive_item
from ..domain.records import FORM_FIELDS, SCHEDULE

Item = Mapping[str, Any]

BOOKING: Final[str] = "booking"
ECOMMERCE: Final[str] = "ecommerce"

STYLE_DEFAULTS: Final[dict[str, dict[str, Any]]] = {
    BOOKING: {"cardRadius": 20, "cardShadow": "lg", "cardHoverEffect": True},
    ECOMMERCE: {"cardRadius": 16, "cardShadow": "md", "cardHoverEffect": True},
}

DISPLAY_DEFAULTS: Final[dict[str, dict[str, Any]]] = {
    BOOKING: {
        "showSteps": True,
        "showCalendar": True,
        "showTimeSlots": True,
        "showGuarantees": True,
    },
    ECOMMERCE: {
        "columns": 3,
        "cardStyle": "default",
        "showPrices": True,
        "showStock": True,
        "showRatings": True,
        "showFilters": True,
        "showSearch": True,
        "showFloatingCart": True,
        "enableQuickView": True,
    },
}

ID_PREFIXES: Final[dict[str, str]] = {
    "services": "b",
    "products": "p",
    "categories": "cat",
    "guarantees": "g",
}

ICON_CATALOGS: Final[dict[str, tuple[str, ...]]] = {
    "services": MODULE_ICONS,
    "products": MODULE_ICONS,
    "guarantees": GUARANTEE_ICONS,
    "categories": CATEGORY_ICONS,
}


def new_service(
    existing: Sequence[Item],
    rules: PricingRules = DEFAULT_RULES,
    *,
    palette: Sequence[str] = PRESET_COLORS,
    id_factory: IdFactory | None = None,
) -> dict[str, Any]:
    """Return a new booking service; its colour cycles through *palette*."""

    make_id = id_factory or prefixed_id_factory(ID_PREFIXES["services"])
    color = palette[len(existing) % len(palette)] if palette else None
    service = {
        "id": make_id(),
        "name": "Nouveau service",
        "icon": "Star",
        "duration": 60,
        "price": 50,
        "description": "Description de votre nouveau service",
        "color": color,
        "popular": False,
    }
    return derive_item(service, rules)


def new_product(
    categories: Sequence[Item],
    rules: PricingRules = DEFAULT_RULES,
    *,
    id_factory: IdFactory | None = None,
) -> dict[str, Any]:
    """Return a new product filed under the first category, if any."""

    make_id = id_factory or prefixed_id_factory(ID_PREFIXES["products"])
    product = {
        "id": make_id(),
        "name": "Nouveau produit",
        "description": "Description du produit",
        "price": 29.99,
        "originalPrice": None,
        "image": None,
        "category": categories[0].get("id", "") if categories else "",
        "stock": 10,
        "rating": 5,
        "reviewCount": 0,
        "badge": None,
        "badgeColor": None,
    }
    return derive_item(product, rules)


def new_category(*, id_factory: IdFactory | None = None) -> dict[str, Any]:
    """Return a new product category."""

    make_id = id_factory or prefixed_id_factory(ID_PREFIXES["categories"])
    return {"id": make_id(), "name": "Nouvelle catégorie", "icon": "Tag"}


def new_guarantee(*, id_factory: IdFactory | None = None) -> dict[str, Any]:
    """Return a new booking guarantee."""

    make_id = id_factory or prefixed_id_factory(ID_PREFIXES["guarantees"])
    return {"id": make_id(), "icon": "Check", "text": "Nouvelle garantie"}


_Factory = Callable[[Mapping[str, Any], PricingRules, "IdFactory | None"], dict[str, Any]]

NEW_ITEM_FACTORIES: Final[dict[tuple[str, str], _Factory]] = {
    (BOOKING, "services"): lambda section, rules, ids: new_service(
        section.get("services") or [], rules, id_factory=ids
    ),
    (BOOKING, "guarantees"): lambda section, rules, ids: new_guarantee(id_factory=ids),
    (ECOMMERCE, "products"): lambda section, rules, ids: new_product(
        section.get("categories") or [], rules, id_factory=ids
    ),
    (ECOMMERCE, "categories"): lambda section, rules, ids: new_category(id_factory=ids),
}


def new_item(
    section_name: str,
    collection: str,
    section: Mapping[str, Any],
    rules: PricingRules = DEFAULT_RULES,
    *,
    id_factory: IdFactory | None = None,
) -> dict[str, Any]:
    """Build the default item for ``section_name.collection``.

    Raises
    ------
    InvalidOperation
        When no factory is registered for that collection.
    """

    factory = NEW_ITEM_FACTORIES.get((section_name, collection))
    if factory is None:
        known = ", ".join(f"{s}.{c}" for s, c in NEW_ITEM_FACTORIES)
        raise InvalidOperation(f"No item template for {section_name}.{collection}; known: {known}")
    return factory(section, rules, id_factory)


def badge_preset(preset_id: str) -> dict[str, str] | None:
    """Return the badge preset named *preset_id* (``"popular"``, ``"new"``...)."""

    for preset in BADGE_PRESETS:
        if preset["id"] == preset_id:
            return dict(preset)
    return None


def set_badge(product: Item, badge: Mapping[str, Any] | None) -> dict[str, Any]:
    """Store *badge* (``{"label", "color"}``) on *product*; ``None`` clears it.

    >>> set_badge({"id": "p1"}, {"label": "Promo"})
    {'id': 'p1', 'badge': 'Promo', 'badgeColor': '#8b5cf6'}
    """

    if not badge or not badge.get("label"):
        return {**product, "badge": None, "badgeColor": None}
    return {**product, "badge": badge["label"], "badgeColor": badge.get("color") or DEFAULT_BADGE_COLOR}


def set_rating(product: Item, value: float | int | None) -> dict[str, Any]:
    """Store a rating clamped to ``[0, 5]`` in half-star steps."""

    return {**product, "rating": normalize_rating(value)}


def product_category(product: Item, categories: Sequence[Item]) -> Item | None:
    """Return the category of *product*; deleted categories resolve to ``None``."""

    return resolve_category(product.get("category"), categories)


def duration_label(minutes: Any) -> str:
    """Return the editor label for a service duration.

    >>> duration_label(90), duration_label(50)
    ('1h30', '50 min')
    """

    for value, label in DURATION_OPTIONS:
        if value == minutes:
            return label
    return f"{minutes} min"


def item_summary(item: Item, categories: Sequence[Item] = (), rules: PricingRules = DEFAULT_RULES) -> str:
    """Return the one-line subtitle shown under an item in the editor list.

    Services read ``"<minutes> min • <price label>"``; products list their
    price, stock and category when known.

    >>> item_summary({"duration": 60, "priceLabel": "50 €"})
    '60 min • 50 €'
    >>> item_summary({"price": 12, "stock": 3, "category": "c1"}, [{"id": "c1", "name": "Thés"}])
    '12 € • Stock: 3 • Thés'
    """

    if "duration" in item:
        return f"{item.get('duration') or 30} min • {item.get('priceLabel') or 'Gratuit'}"

    price = item.get("price")
    parts: list[str] = []
    if item.get("priceLabel"):
        parts.append(str(item["priceLabel"]))
    elif is_number(price):
        parts.append(f"{format_price(price, rules.decimal_separator)} {rules.currency}")
    if item.get("stock") is not None:
        parts.append(f"Stock: {item['stock']}")
    category = product_category(item, categories)
    if category is not None and category.get("name"):
        parts.append(str(category["name"]))
    return " • ".join(parts)


def display_option(section: Mapping[str, Any], section_name: str, key: str) -> Any:
    """Return a display option, falling back to the module default when absent."""

    value = section.get(key)
    if value is not None:
        return value
    return DISPLAY_DEFAULTS.get(section_name, {}).get(key)


def section_with_defaults(section_name: str, section: Mapping[str, Any]) -> dict[str, Any]:
    """Return *section* with documented defaults filled in for display.

    Booking sections get complete ``openingHours`` and ``fields`` records;
    every known module gets its style and display defaults under any values
    already stored. The stored document is not touched.

    >>> view = section_with_defaults(BOOKING, {"styles": {"cardRadius": 8}})
    >>> view["styles"]["cardRadius"], view["styles"]["cardShadow"], view["openingHours"]["sunday"]["enabled"]
    (8, 'lg', False)
    """

    view: dict[str, Any] = {**DISPLAY_DEFAULTS.get(section_name, {})}
    view.update({key: value for key, value in section.items() if value is not None})
    styles = section.get("styles")
    view["styles"] = {**STYLE_DEFAULTS.get(section_name, {}), **(styles if isinstance(styles, Mapping) else {})}
    if section_name == BOOKING:
        view[SCHEDULE.name] = SCHEDULE.with_defaults(section.get(SCHEDULE.name))
        view[FORM_FIELDS.name] = FORM_FIELDS.with_defaults(section.get(FORM_FIELDS.name))
    return view


def item_icon(collection: str, item: Item) -> str:
    """Return the icon to render for *item*, falling back to the collection catalog.

    >>> item_icon("guarantees", {"icon": "Removed"}), item_icon("categories", {"icon": "Coffee"})
    ('Check', 'Coffee')
    """

    return resolve_icon(item.get("icon"), ICON_CATALOGS.get(collection, MODULE_ICONS))


def item_color(item: Item, palette: Sequence[str] = PRESET_COLORS) -> str | None:
    """Return the accent colour of *item* or the first palette entry."""

    return resolve_color(item.get("color"), palette)
