"""Adapter contract tests: the default adapters satisfy the application ports."""

from __future__ import annotations

from pathlib import Path

from lib_module_config.adapters.env.default import DefaultEnvLoader
from lib_module_config.adapters.file_loaders.structured import FILE_LOADERS
from lib_module_config.application import ports
from lib_module_config.domain.ids import prefixed_id_factory, sequential_id_factory
from tests.support import write_document


def test_file_loaders_fulfil_document_loader(tmp_path: Path) -> None:
    path = write_document(tmp_path, "module.json")
    for suffix, loader in FILE_LOADERS.items():
        assert isinstance(loader, ports.DocumentLoader), suffix
    assert "booking" in FILE_LOADERS[".json"].load(str(path))


def test_env_loader_fulfils_env_loader() -> None:
    loader = DefaultEnvLoader(environ={"DEMO_CURRENCY": "$"})
    assert isinstance(loader, ports.EnvLoader)
    assert loader.load("DEMO") == {"currency": "$"}


def test_id_factories_fulfil_item_id_factory() -> None:
    for factory in (prefixed_id_factory("b"), sequential_id_factory("s")):
        assert isinstance(factory, ports.ItemIdFactory)
        assert isinstance(factory(), str)
