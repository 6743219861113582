"""modpack configuration system.

Usage:
    from modpack.core.config import load_settings

    settings = load_settings(repo_root=Path("/path/to/monorepo"))
    settings.backend.source_root

    # Raw merged mapping
    cfg = ConfigManager(repo_root).load_config()
"""
from __future__ import annotations

from .manager import ConfigManager, ENV_PREFIX, PROJECT_CONFIG_DIR
from .settings import (
    BackendSettings,
    DbMigrationSettings,
    FrontendModuleMeta,
    FrontendSettings,
    InfrastructureSettings,
    LoggingSettings,
    PackerSettings,
    ServiceMapping,
    Settings,
    load_settings,
)

__all__ = [
    "ConfigManager",
    "ENV_PREFIX",
    "PROJECT_CONFIG_DIR",
    "Settings",
    "BackendSettings",
    "DbMigrationSettings",
    "FrontendModuleMeta",
    "FrontendSettings",
    "InfrastructureSettings",
    "LoggingSettings",
    "PackerSettings",
    "ServiceMapping",
    "load_settings",
]
