"""Editor settings and their layered loading.

Purpose
-------
Collect the locale conventions the derived fields depend on (currency,
"free" label, decimal separator) plus the amounts used by the price toggles.
Hosts either build :class:`EditorSettings` directly or call
:func:`load_settings` to layer defaults, an optional settings file and
``LIB_MODULE_CONFIG_*`` environment variables.

Contents
--------
* :data:`ENV_PREFIX` – environment namespace.
* :data:`SETTINGS_SECTION` – table read from settings files (``[editor]``).
* :class:`EditorSettings` – frozen value object with a :attr:`pricing` view.
* :func:`load_settings` – defaults → file → environment.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Final

from .adapters.env.default import DefaultEnvLoader, default_env_prefix
from .adapters.file_loaders.structured import load_document
from .domain.derived import DEFAULT_CURRENCY, FREE_LABEL, is_number
from .domain.errors import InvalidValue
from .domain.pricing import PricingRules
from .observability import log_info

ENV_PREFIX: Final[str] = default_env_prefix("lib-module-config")
SETTINGS_SECTION: Final[str] = "editor"


@dataclass(frozen=True)
class EditorSettings:
    """Locale and pricing conventions shared by every editor.

    Examples
    --------
    >>> EditorSettings().pricing.label(29.99)
    '29,99 €'
    >>> EditorSettings(currency="$", decimal_separator=".").pricing.label(12.5)
    '12.5 $'
    """

    currency: str = DEFAULT_CURRENCY
    free_label: str = FREE_LABEL
    decimal_separator: str = ","
    promo_markup: float = 1.3
    default_paid_price: float | int = 50

    def __post_init__(self) -> None:
        for name in ("currency", "free_label", "decimal_separator"):
            if not isinstance(getattr(self, name), str):
                raise InvalidValue(f"Setting {name} must be a string, got {getattr(self, name)!r}")
        if not is_number(self.promo_markup) or self.promo_markup <= 0:
            raise InvalidValue(f"Setting promo_markup must be a positive number, got {self.promo_markup!r}")
        if not is_number(self.default_paid_price) or self.default_paid_price < 0:
            raise InvalidValue(
                f"Setting default_paid_price must be a non-negative number, got {self.default_paid_price!r}"
            )

    @property
    def pricing(self) -> PricingRules:
        """Return the :class:`PricingRules` used by the price transitions."""

        return PricingRules(
            currency=self.currency,
            free_label=self.free_label,
            decimal_separator=self.decimal_separator,
            promo_markup=self.promo_markup,
            default_paid_price=self.default_paid_price,
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> EditorSettings:
        """Build settings from *data*, ignoring keys that are not settings."""

        known = {field.name for field in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    def as_dict(self) -> dict[str, Any]:
        """Return the settings as a plain mapping (used by the CLI)."""

        return {field.name: getattr(self, field.name) for field in fields(self)}


DEFAULT_SETTINGS: Final[EditorSettings] = EditorSettings()


def load_settings(
    path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> EditorSettings:
    """Resolve settings from defaults, an optional file and the environment.

    Parameters
    ----------
    path:
        JSON, YAML or TOML file whose ``editor`` table holds settings.
    environ:
        Mapping to read ``LIB_MODULE_CONFIG_*`` variables from; defaults to
        :data:`os.environ`. Both ``LIB_MODULE_CONFIG_CURRENCY`` and
        ``LIB_MODULE_CONFIG_EDITOR__CURRENCY`` are accepted.

    Raises
    ------
    InvalidValue
        When a layer supplies a value of the wrong type.
    NotFound / InvalidFormat
        When *path* is missing or unreadable.

    Examples
    --------
    >>> load_settings(environ={"LIB_MODULE_CONFIG_CURRENCY": "CHF"}).currency
    'CHF'
    """

    layers: list[str] = ["defaults"]
    values: dict[str, Any] = DEFAULT_SETTINGS.as_dict()

    if path is not None:
        section = load_document(path).get(SETTINGS_SECTION) or {}
        if not isinstance(section, Mapping):
            raise InvalidValue(f"Section {SETTINGS_SECTION!r} in {path} must be a table")
        values.update(section)
        layers.append(str(path))

    env_payload = DefaultEnvLoader(environ=environ).load(ENV_PREFIX)
    nested = env_payload.pop(SETTINGS_SECTION, None)
    if isinstance(nested, Mapping):
        env_payload.update(nested)
    if env_payload:
        values.update(env_payload)
        layers.append("env")

    settings = EditorSettings.from_mapping(values)
    log_info("settings_loaded", section=None, path=str(path) if path is not None else None, layers=layers)
    return settings
