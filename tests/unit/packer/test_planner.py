"""Target selection for the pack command."""
from __future__ import annotations

import pytest

from modpack.core.exceptions import InvalidLayerError, MissingTargetError, UnknownTargetError
from modpack.core.modules import discover_catalog
from modpack.core.packer import PackRequest, plan_pack


@pytest.fixture
def catalog(settings):
    return discover_catalog(settings)


def _paths(plan):
    return [c.output_path.split("outputs/", 1)[1] for c in plan.configs]


def test_backend_target(settings, catalog) -> None:
    plan = plan_pack(catalog, settings, PackRequest(target="backend/buchung", deps_mode="api"))
    assert _paths(plan) == ["backend/buchung-deps-packed.txt"]
    assert plan.title == "Packing backend/buchung (deps: api)"


def test_bare_backend_name(settings, catalog) -> None:
    plan = plan_pack(catalog, settings, PackRequest(target="buchung", layers=("domain",)))
    assert _paths(plan) == ["backend/buchung-domain-packed.txt"]
    assert plan.title.endswith("layers: domain)")


@pytest.mark.parametrize("target", ["dbmigration", "backend/dbmigration"])
def test_dbmigration_target(settings, catalog, target: str) -> None:
    plan = plan_pack(catalog, settings, PackRequest(target=target))
    assert _paths(plan) == ["backend/dbmigration-packed.txt"]


@pytest.mark.parametrize(
    "target, expected",
    [
        ("frontend", ["frontend/all-packed.txt"]),
        ("frontend/customer", ["frontend/customer-packed.txt"]),
        ("infrastructure", ["infrastructure/all-packed.txt"]),
        ("infrastructure/authentik", ["infrastructure/authentik-packed.txt"]),
    ],
)
def test_category_targets(settings, catalog, target: str, expected) -> None:
    assert _paths(plan_pack(catalog, settings, PackRequest(target=target))) == expected


def test_pack_all(settings, catalog) -> None:
    plan = plan_pack(catalog, settings, PackRequest(all=True))
    assert _paths(plan) == [
        "backend/bootstrap-packed.txt",
        "backend/buchung-packed.txt",
        "backend/common-packed.txt",
        "backend/warenbestand-packed.txt",
        "frontend/customer-packed.txt",
        "frontend/employee-packed.txt",
        "frontend/reports-packed.txt",
        "infrastructure/all-packed.txt",
    ]


def test_all_flag_wins_over_target(settings, catalog) -> None:
    plan = plan_pack(catalog, settings, PackRequest(target="frontend", all_backend=True, deps_mode="full"))
    assert "backend/buchung-deps-full-packed.txt" in _paths(plan)
    assert plan.title == "Packing all backend modules"


def test_all_frontend(settings, catalog) -> None:
    plan = plan_pack(catalog, settings, PackRequest(all_frontend=True))
    assert len(plan.configs) == 3


def test_all_infrastructure_skips_services_without_files(settings, catalog) -> None:
    plan = plan_pack(catalog, settings, PackRequest(all_infrastructure=True))
    assert _paths(plan) == [
        "infrastructure/authentik-packed.txt",
        "infrastructure/postgres-packed.txt",
        "infrastructure/all-packed.txt",
    ]


@pytest.mark.parametrize(
    "target, message",
    [
        ("backend/ghost", "Backend module not found: ghost"),
        ("frontend/ghost", "Frontend module not found: ghost"),
        ("infrastructure/ghost", "Infrastructure module not found: ghost"),
        ("ghost", "Unknown target: ghost"),
        ("elsewhere/buchung", "Unknown target: elsewhere/buchung"),
    ],
)
def test_unknown_targets(settings, catalog, target: str, message: str) -> None:
    with pytest.raises(UnknownTargetError) as exc_info:
        plan_pack(catalog, settings, PackRequest(target=target))

    assert str(exc_info.value) == message
    assert exc_info.value.target == target
    assert "backend/buchung" in exc_info.value.available
    assert "frontend" in exc_info.value.available


def test_missing_target(settings, catalog) -> None:
    with pytest.raises(MissingTargetError):
        plan_pack(catalog, settings, PackRequest())


def test_invalid_layer_propagates(settings, catalog) -> None:
    with pytest.raises(InvalidLayerError):
        plan_pack(catalog, settings, PackRequest(target="backend/buchung", layers=("ui",)))
