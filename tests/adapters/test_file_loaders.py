from __future__ import annotations

import json
from pathlib import Path

import pytest

from lib_module_config.adapters.file_loaders.structured import (
    JSONFileLoader,
    TOMLFileLoader,
    YAMLFileLoader,
    dump_document,
    dumps_document,
    load_document,
)
from lib_module_config.domain.errors import InvalidFormat, NotFound
from tests.support import sample_document, write_document


def test_toml_loader(tmp_path: Path) -> None:
    path = tmp_path / "settings.toml"
    path.write_text('[editor]\ncurrency = "$"\n', encoding="utf-8")
    assert TOMLFileLoader().load(str(path)) == {"editor": {"currency": "$"}}


def test_toml_loader_missing_file(tmp_path: Path) -> None:
    with pytest.raises(NotFound):
        TOMLFileLoader().load(str(tmp_path / "missing.toml"))


def test_json_loader_invalid(tmp_path: Path) -> None:
    path = tmp_path / "module.json"
    path.write_text("{invalid}", encoding="utf-8")
    with pytest.raises(InvalidFormat):
        JSONFileLoader().load(str(path))


def test_json_loader_rejects_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "module.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(InvalidFormat):
        JSONFileLoader().load(str(path))


def test_yaml_loader_handles_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "module.yaml"
    path.write_text("# empty file\n", encoding="utf-8")
    assert YAMLFileLoader().load(str(path)) == {}


def test_yaml_loader_invalid(tmp_path: Path) -> None:
    path = tmp_path / "module.yaml"
    path.write_text("booking: [unclosed\n", encoding="utf-8")
    with pytest.raises(InvalidFormat):
        YAMLFileLoader().load(str(path))


@pytest.mark.parametrize("name", ["module.json", "module.yaml", "module.yml"])
def test_load_document_picks_loader_by_suffix(tmp_path: Path, name: str) -> None:
    path = write_document(tmp_path, name)
    assert load_document(path) == sample_document()


def test_load_document_rejects_unknown_suffix(tmp_path: Path) -> None:
    path = tmp_path / "module.txt"
    path.write_text("{}", encoding="utf-8")
    with pytest.raises(InvalidFormat):
        load_document(path)


@pytest.mark.parametrize("name", ["out.json", "out.yaml"])
def test_dump_then_load_preserves_order(tmp_path: Path, name: str) -> None:
    document = sample_document()
    dump_document(document, tmp_path / name)
    loaded = load_document(tmp_path / name)
    assert loaded == document
    assert list(loaded["booking"]) == list(document["booking"])
    assert [s["id"] for s in loaded["booking"]["services"]] == ["s1", "s2"]


def test_dumps_document_keeps_unicode() -> None:
    text = dumps_document({"booking": {"title": "Réservez", "price": "50 €"}})
    assert "Réservez" in text and "€" in text
    assert json.loads(text) == {"booking": {"title": "Réservez", "price": "50 €"}}


def test_dump_document_rejects_toml(tmp_path: Path) -> None:
    with pytest.raises(InvalidFormat):
        dump_document({}, tmp_path / "out.toml")
    with pytest.raises(InvalidFormat):
        dumps_document({}, fmt="toml")
