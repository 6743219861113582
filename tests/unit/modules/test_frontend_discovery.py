"""Frontend feature-folder discovery."""
from __future__ import annotations

from pathlib import Path

from modpack.core.config import load_settings
from modpack.core.modules.frontend import config_paths, discover_frontend_modules, shared_paths


def test_one_module_per_directory_sorted(settings) -> None:
    modules = discover_frontend_modules(settings)
    assert [m.name for m in modules] == ["customer", "employee", "reports"]


def test_known_modules_use_display_table(settings) -> None:
    employee = {m.name: m for m in discover_frontend_modules(settings)}["employee"]
    assert employee.display_name == "Employee"
    assert employee.description == "Employee dashboard, vehicle management, bookings"
    assert employee.path == "frontend/src/modules/employee"
    assert employee.include_shared is True


def test_unknown_module_gets_derived_metadata(settings) -> None:
    reports = {m.name: m for m in discover_frontend_modules(settings)}["reports"]
    assert reports.display_name == "Reports"
    assert reports.description == "reports module"


def test_missing_modules_folder_logs_and_returns_empty(tmp_path: Path, caplog) -> None:
    assert discover_frontend_modules(load_settings(tmp_path)) == []
    assert "Error discovering frontend modules" in caplog.text


def test_shared_and_config_paths(settings) -> None:
    assert shared_paths(settings) == [
        "frontend/src/shared/**/*.tsx",
        "frontend/src/shared/**/*.ts",
        "frontend/src/App.tsx",
        "frontend/src/main.tsx",
    ]
    assert config_paths(settings) == [
        "frontend/package.json",
        "frontend/vite.config.*",
        "frontend/tailwind.config.*",
    ]
