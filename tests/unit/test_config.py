"""Editor settings: value object validation and layered loading."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from lib_module_config.config import DEFAULT_SETTINGS, ENV_PREFIX, EditorSettings, load_settings
from lib_module_config.domain.errors import InvalidValue, NotFound


def test_defaults() -> None:
    assert DEFAULT_SETTINGS == EditorSettings()
    assert DEFAULT_SETTINGS.as_dict() == {
        "currency": "€",
        "free_label": "Offert",
        "decimal_separator": ",",
        "promo_markup": 1.3,
        "default_paid_price": 50,
    }
    assert ENV_PREFIX == "LIB_MODULE_CONFIG"


def test_pricing_view_carries_every_setting() -> None:
    rules = EditorSettings(currency="$", free_label="Free", decimal_separator=".", promo_markup=2).pricing
    assert rules.label(0) == "Free"
    assert rules.label(3.5) == "3.5 $"
    assert rules.promo_markup == 2


@pytest.mark.parametrize(
    "overrides",
    [
        {"currency": 1},
        {"free_label": None},
        {"promo_markup": 0},
        {"promo_markup": "1.3"},
        {"default_paid_price": -5},
        {"default_paid_price": True},
    ],
)
def test_wrong_types_are_rejected(overrides) -> None:
    with pytest.raises(InvalidValue):
        EditorSettings(**overrides)


def test_load_settings_without_layers_returns_defaults() -> None:
    assert load_settings(environ={}) == DEFAULT_SETTINGS


def test_file_layer_reads_editor_table(tmp_path: Path) -> None:
    path = tmp_path / "settings.toml"
    path.write_text('[editor]\ncurrency = "$"\ndecimal_separator = "."\nunknown = 1\n', encoding="utf-8")
    settings = load_settings(path, environ={})
    assert settings.currency == "$"
    assert settings.decimal_separator == "."
    assert settings.free_label == "Offert"


def test_environment_overrides_file(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text('{"editor": {"currency": "$", "promo_markup": 1.5}}', encoding="utf-8")
    environ = {
        "LIB_MODULE_CONFIG_CURRENCY": "CHF",
        "LIB_MODULE_CONFIG_EDITOR__FREE_LABEL": "Gratuit",
        "OTHER_CURRENCY": "ignored",
    }
    settings = load_settings(path, environ=environ)
    assert settings.currency == "CHF"
    assert settings.free_label == "Gratuit"
    assert settings.promo_markup == 1.5


def test_environment_values_are_coerced() -> None:
    settings = load_settings(environ={"LIB_MODULE_CONFIG_DEFAULT_PAID_PRICE": "30"})
    assert settings.default_paid_price == 30


def test_environment_with_wrong_type_is_rejected() -> None:
    with pytest.raises(InvalidValue):
        load_settings(environ={"LIB_MODULE_CONFIG_PROMO_MARKUP": "lots"})


def test_missing_settings_file(tmp_path: Path) -> None:
    with pytest.raises(NotFound):
        load_settings(tmp_path / "absent.toml", environ={})


def test_settings_loaded_event(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="lib_module_config")
    load_settings(environ={"LIB_MODULE_CONFIG_CURRENCY": "$"})
    record = caplog.records[-1]
    assert record.getMessage() == "settings_loaded"
    assert record.context["layers"] == ["defaults", "env"]
