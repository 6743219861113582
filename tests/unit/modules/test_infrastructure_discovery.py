"""Infrastructure discovery from the compose manifest and service table."""
from __future__ import annotations

from pathlib import Path

import pytest

from modpack.core.config import load_settings
from modpack.core.exceptions import ConfigurationError
from modpack.core.modules.infrastructure import (
    full_infrastructure_patterns,
    discover_infrastructure_modules,
    load_compose_manifest,
)
from helpers.monorepo import write, write_project_config


def test_modules_sorted_with_first_wins_dedup(settings) -> None:
    modules = discover_infrastructure_modules(settings)
    assert [m.name for m in modules] == ["app", "authentik", "mailpit", "postgres", "redis"]


def test_mapped_service(settings) -> None:
    postgres = {m.name: m for m in discover_infrastructure_modules(settings)}["postgres"]

    assert postgres.display_name == "Postgres"
    assert postgres.description == "Docker service: postgres:16"
    assert postgres.service_name == "postgres"
    assert postgres.base_path == "infrastructure"
    assert postgres.patterns == (
        "infrastructure/postgres/**/*.sql",
        "infrastructure/postgres/**/*.sh",
        "infrastructure/docker-compose.yaml",
    )
    assert postgres.has_dedicated_files


def test_display_name_from_mapping(settings) -> None:
    authentik = {m.name: m for m in discover_infrastructure_modules(settings)}["authentik"]
    assert authentik.display_name == "Authentik"
    assert authentik.service_name == "authentik-server"


def test_unmapped_service_uses_prefix_and_custom_image(settings) -> None:
    app = {m.name: m for m in discover_infrastructure_modules(settings)}["app"]
    assert app.service_name == "app-backend"
    assert app.description == "Docker service: custom"
    assert app.patterns == ("infrastructure/docker-compose.yaml",)
    assert not app.has_dedicated_files


def test_skipped_service_never_appears(settings) -> None:
    manifest = {"services": {"authentik-worker": {"image": "x"}}}
    assert discover_infrastructure_modules(settings, manifest) == []


def test_duplicate_names_keep_first_in_manifest_order(settings) -> None:
    manifest = {
        "services": {
            "cache-primary": {"image": "redis:7"},
            "cache-replica": {"image": "redis:6"},
        }
    }
    modules = discover_infrastructure_modules(settings, manifest)
    assert len(modules) == 1
    assert modules[0].service_name == "cache-primary"
    assert modules[0].description == "Docker service: redis:7"


def test_folders_default_to_every_file(monorepo: Path) -> None:
    write_project_config(
        monorepo,
        "services",
        {"infrastructure": {"services": {"keycloak": {"folders": ["keycloak", "realms"]}}}},
    )
    manifest = {"services": {"keycloak": {"image": "quay.io/keycloak/keycloak"}}}
    [module] = discover_infrastructure_modules(load_settings(monorepo), manifest)
    assert module.patterns == (
        "infrastructure/keycloak/**/*",
        "infrastructure/realms/**/*",
        "infrastructure/docker-compose.yaml",
    )


def test_discovery_is_deterministic(settings) -> None:
    assert discover_infrastructure_modules(settings) == discover_infrastructure_modules(settings)


def test_missing_manifest_yields_no_modules(tmp_path: Path, caplog) -> None:
    settings = load_settings(tmp_path)
    assert load_compose_manifest(settings) == {}
    assert discover_infrastructure_modules(settings) == []
    assert "manifest not found" in caplog.text


def test_manifest_without_services(monorepo: Path, settings) -> None:
    write(monorepo / "infrastructure/docker-compose.yaml", "version: '3'\n")
    assert discover_infrastructure_modules(settings) == []


def test_invalid_manifest_raises(monorepo: Path, settings) -> None:
    write(monorepo / "infrastructure/docker-compose.yaml", "services: [unclosed\n")
    with pytest.raises(ConfigurationError):
        load_compose_manifest(settings)


def test_full_infrastructure_patterns(settings) -> None:
    assert full_infrastructure_patterns(settings) == [
        "infrastructure/**/*.yaml",
        "infrastructure/**/*.yml",
        "infrastructure/**/*.json",
        "infrastructure/**/*.sql",
        "infrastructure/**/*.sh",
        "infrastructure/**/*.md",
    ]
