"""Backend module discovery against an on-disk monorepo."""
from __future__ import annotations

from pathlib import Path

import pytest

from modpack.core.modules.backend import discover_backend_modules, layer_patterns, parse_package_info
from modpack.core.modules.models import DependencyEdge
from helpers.monorepo import BACKEND_SRC, write


def test_discovers_modules_sorted_by_name(settings) -> None:
    modules = discover_backend_modules(settings)
    assert [m.name for m in modules] == ["bootstrap", "buchung", "common", "warenbestand"]


def test_buchung_descriptor(settings) -> None:
    buchung = {m.name: m for m in discover_backend_modules(settings)}["buchung"]

    assert buchung.display_name == "Buchung"
    assert buchung.description == "Booking management. Handles reservations and invoices."
    assert buchung.path == f"{BACKEND_SRC}/buchung"
    assert buchung.type == "bounded-context"
    assert buchung.dependencies == (
        DependencyEdge("warenbestand", "api"),
        DependencyEdge("common", "full"),
    )
    assert buchung.address == "backend/buchung"


def test_types_are_classified(settings) -> None:
    types = {m.name: m.type for m in discover_backend_modules(settings)}
    assert types["common"] == "shared"
    assert types["bootstrap"] == "bootstrap"


def test_layers_are_rooted_at_module(settings) -> None:
    assert layer_patterns("buchung", settings) == {
        "domain": "buchung/core/domain/**/*.java",
        "application": "buchung/core/application/**/*.java",
        "adapter": "buchung/core/adapter/**/*.java",
    }


def test_descriptors_are_immutable_and_hashable(settings) -> None:
    module = next(m for m in discover_backend_modules(settings) if m.name == "buchung")

    with pytest.raises(TypeError):
        module.layers["domain"] = "elsewhere/**/*.java"
    assert module.layers["domain"] == "buchung/core/domain/**/*.java"
    assert module in {module}
    assert module.to_dict()["layers"] == dict(module.layers)


def test_file_without_package_is_skipped(settings, monorepo: Path) -> None:
    path = monorepo / BACKEND_SRC / "broken" / "package-info.java"
    assert parse_package_info(path, settings) is None


def test_unreadable_file_is_logged_and_skipped(settings, monorepo: Path, caplog) -> None:
    path = monorepo / BACKEND_SRC / "binary" / "package-info.java"
    path.parent.mkdir(parents=True)
    path.write_bytes(b"\xff\xfe\x00invalid utf-8")

    assert parse_package_info(path, settings) is None
    assert "Error parsing" in caplog.text
    assert "binary" not in [m.name for m in discover_backend_modules(settings)]


def test_nested_metadata_files_are_not_scanned(settings, monorepo: Path) -> None:
    write(
        monorepo / BACKEND_SRC / "buchung" / "internal" / "package-info.java",
        "package com.example.app.buchung.internal;\n",
    )
    assert "internal" not in [m.name for m in discover_backend_modules(settings)]


def test_missing_backend_root_yields_nothing(tmp_path: Path) -> None:
    from modpack.core.config import load_settings

    assert discover_backend_modules(load_settings(tmp_path)) == []
