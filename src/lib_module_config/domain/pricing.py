"""Item-level price transitions built on :mod:`.derived`.

Services and products share the same price block: ``price``, optional
``originalPrice`` (promo), ``priceLabel`` and a handful of hidden flags that
keep user input alive across toggles:

* ``priceLabelCustom`` – the label was written explicitly and must not be
  re-derived when the price changes.
* ``promo`` – ``False`` while the promo toggle is off; ``originalPrice`` stays
  stored so switching the promo back on restores it.
* ``lastPrice`` – the paid price remembered while the "free" toggle is on.

Every function returns a new ``dict``; the input item is never modified.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from .derived import DEFAULT_CURRENCY, FREE_LABEL, discount_percent, effective_promo, is_number, price_label, round_half_up

Item = Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class PricingRules:
    """Locale and default amounts used when deriving price fields.

    Attributes
    ----------
    currency:
        Symbol appended to labels (``"50 €"``).
    free_label:
        Label used for a zero price.
    decimal_separator:
        Separator for fractional amounts (``"29,99 €"``).
    promo_markup:
        Factor used to seed ``originalPrice`` the first time a promo is enabled.
    default_paid_price:
        Price restored when leaving "free" with no remembered price.
    """

    currency: str = DEFAULT_CURRENCY
    free_label: str = FREE_LABEL
    decimal_separator: str = ","
    promo_markup: float = 1.3
    default_paid_price: float | int = 50

    def label(self, price: float | int) -> str:
        """Return the automatic label for *price* under these rules."""

        return price_label(
            price,
            self.currency,
            free_label=self.free_label,
            decimal_separator=self.decimal_separator,
        )


DEFAULT_RULES = PricingRules()


def derive_item(item: Item, rules: PricingRules = DEFAULT_RULES, previous: Item | None = None) -> dict[str, Any]:
    """Re-derive ``priceLabel`` for *item* when its price calls for it.

    Why
    ----
    The label depends on ``price`` but users may also type their own ("Sur
    devis"). The last explicit write wins over any earlier derivation.

    What
    ----
    Without *previous* the item is new: a non-empty label that differs from
    the automatic one is kept as a manual override. With *previous*, a label
    that changed between the two versions counts as an explicit write (an
    empty label clears the override); otherwise the label is recomputed only
    when ``price`` changed or no label is stored, and never while an override
    is active. Items without a numeric ``price`` are returned as a plain copy.

    Examples
    --------
    >>> derive_item({"id": "s1", "price": 0})["priceLabel"]
    'Offert'
    >>> derive_item({"id": "s1", "price": 50, "priceLabel": "Sur devis"})["priceLabelCustom"]
    True
    >>> before = {"id": "s1", "price": 50, "priceLabel": "50 €"}
    >>> custom = derive_item({**before, "priceLabel": "Sur devis"}, previous=before)
    >>> derive_item({**custom, "price": 70}, previous=custom)["priceLabel"]
    'Sur devis'
    """

    updated = dict(item)
    price = updated.get("price")
    if not is_number(price):
        return updated

    automatic = rules.label(price)
    label = updated.get("priceLabel")
    if previous is None or label != previous.get("priceLabel"):
        if label and label != automatic:
            updated["priceLabelCustom"] = True
            return updated
        updated.pop("priceLabelCustom", None)
    elif updated.get("priceLabelCustom") or (label and price == previous.get("price")):
        return updated
    updated["priceLabel"] = automatic
    return updated


def set_price(item: Item, price: float | int, rules: PricingRules = DEFAULT_RULES) -> dict[str, Any]:
    """Store *price* and refresh the derived label."""

    return derive_item({**item, "price": price}, rules, previous=item)


def set_original_price(item: Item, original_price: float | int | None) -> dict[str, Any]:
    """Store the crossed-out price; it only shows when greater than ``price``."""

    return {**item, "originalPrice": original_price}


def set_price_label(item: Item, label: str | None, rules: PricingRules = DEFAULT_RULES) -> dict[str, Any]:
    """Write *label* explicitly; ``None`` or ``""`` returns to the automatic label."""

    return derive_item({**item, "priceLabel": label}, rules, previous=item)


def toggle_promo(item: Item, enabled: bool, rules: PricingRules = DEFAULT_RULES) -> dict[str, Any]:
    """Switch the promo on or off without losing the entered ``originalPrice``.

    Turning the promo on restores the stored value when it is still above the
    price and otherwise seeds ``price * promo_markup`` (rounded half-up).

    >>> item = {"id": "p1", "price": 50, "originalPrice": 80}
    >>> hidden = toggle_promo(item, False)
    >>> item_promo(hidden), hidden["originalPrice"]
    (None, 80)
    >>> item_promo(toggle_promo(hidden, True))
    80
    >>> toggle_promo({"id": "p2", "price": 50}, True)["originalPrice"]
    65
    """

    if not enabled:
        return {**item, "promo": False}
    updated = {**item, "promo": True}
    price = item.get("price")
    if is_number(price) and effective_promo(price, item.get("originalPrice")) is None:
        updated["originalPrice"] = round_half_up(Decimal(str(price)) * Decimal(str(rules.promo_markup)))
    return updated


def toggle_free(item: Item, free: bool, rules: PricingRules = DEFAULT_RULES) -> dict[str, Any]:
    """Make the item free (remembering its price) or paid again.

    >>> free = toggle_free({"id": "s1", "price": 80}, True)
    >>> free["price"], free["priceLabel"], free["lastPrice"]
    (0, 'Offert', 80)
    >>> toggle_free(free, False)["priceLabel"]
    '80 €'
    """

    price = item.get("price")
    if free:
        updated = {**item, "price": 0}
        if is_number(price) and price > 0:
            updated["lastPrice"] = price
        return derive_item(updated, rules, previous=item)

    remembered = item.get("lastPrice")
    restored = remembered if is_number(remembered) and remembered > 0 else rules.default_paid_price
    updated = {key: value for key, value in item.items() if key != "lastPrice"}
    updated["price"] = restored
    return derive_item(updated, rules, previous=item)


def item_promo(item: Item) -> Any:
    """Return the effective crossed-out price of *item* or ``None``.

    Free items and items whose promo toggle is off never show a promo.
    """

    if item.get("promo") is False:
        return None
    price = item.get("price")
    if not is_number(price) or price == 0:
        return None
    return effective_promo(price, item.get("originalPrice"))


def item_discount(item: Item) -> int | None:
    """Return the discount percentage displayed for *item*."""

    promo = item_promo(item)
    if promo is None:
        return None
    return discount_percent(item.get("price"), promo)
