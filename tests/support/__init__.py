"""Shared fixtures for the test-suite: sample documents and file helpers."""

from __future__ import annotations

import json
from copy import deepcopy
from pathlib import Path
from typing import Any

import yaml

_SAMPLE: dict[str, Any] = {
    "booking": {
        "title": "Réservez votre séance",
        "services": [
            {"id": "s1", "name": "Massage", "duration": 60, "price": 50, "priceLabel": "50 €", "icon": "Heart"},
            {"id": "s2", "name": "Soin visage", "duration": 90, "price": 0, "priceLabel": "Offert", "icon": "Sun"},
        ],
        "guarantees": [{"id": "g1", "icon": "Check", "text": "Annulation gratuite"}],
        "openingHours": {"monday": {"enabled": True, "start": "08:00", "end": "12:00"}},
        "styles": {"background": {"color": "#ffffff", "image": "bg.png"}, "cardRadius": 12},
    },
    "ecommerce": {
        "title": "Boutique",
        "categories": [{"id": "c1", "name": "Thés", "icon": "Coffee"}],
        "products": [
            {"id": "p1", "name": "Thé vert", "price": 12, "originalPrice": 15, "category": "c1", "stock": 3},
        ],
    },
}


def sample_document() -> dict[str, Any]:
    """Return a fresh copy of a small booking + e-commerce document."""

    return deepcopy(_SAMPLE)


def write_document(directory: Path, name: str, payload: dict[str, Any] | None = None) -> Path:
    """Write *payload* (default: the sample document) as JSON or YAML depending on *name*."""

    target = directory / name
    data = sample_document() if payload is None else payload
    if target.suffix in {".yaml", ".yml"}:
        target.write_text(yaml.safe_dump(data, sort_keys=False, allow_unicode=True), encoding="utf-8")
    else:
        target.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return target


def read_json(path: Path) -> dict[str, Any]:
    """Load a JSON file written by the CLI."""

    return json.loads(path.read_text(encoding="utf-8"))
