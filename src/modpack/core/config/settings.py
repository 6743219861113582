"""Typed, immutable view of the merged configuration.

A ``Settings`` value is built once at process entry and passed explicitly to
every discoverer, builder and runner.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from .manager import ConfigManager


def _strings(values: Any) -> Tuple[str, ...]:
    return tuple(str(v) for v in (values or ()))


@dataclass(frozen=True)
class BackendSettings:
    source_root: str
    resources_root: str
    metadata_file: str
    source_extension: str
    resources_glob: str
    ignore: Tuple[str, ...] = ()


@dataclass(frozen=True)
class DbMigrationSettings:
    changelog_dir: str
    extensions: Tuple[str, ...]
    ignore: Tuple[str, ...] = ()


@dataclass(frozen=True)
class FrontendModuleMeta:
    display_name: str
    description: str


@dataclass(frozen=True)
class FrontendSettings:
    root: str
    source_root: str
    modules_dir: str
    modules: Mapping[str, FrontendModuleMeta] = field(default_factory=dict)
    ignore: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ServiceMapping:
    """Static mapping entry for one orchestration-manifest service.

    ``patterns`` is ``None`` when the entry does not name any; folders are
    then crossed with ``**/*``.
    """

    display_name: Optional[str] = None
    folders: Tuple[str, ...] = ()
    patterns: Optional[Tuple[str, ...]] = None
    skip: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ServiceMapping":
        patterns = data.get("patterns")
        return cls(
            display_name=data.get("display_name") or None,
            folders=_strings(data.get("folders")),
            patterns=_strings(patterns) if patterns is not None else None,
            skip=bool(data.get("skip", False)),
        )


@dataclass(frozen=True)
class InfrastructureSettings:
    root: str
    manifest: str
    services: Mapping[str, ServiceMapping] = field(default_factory=dict)
    ignore: Tuple[str, ...] = ()


@dataclass(frozen=True)
class PackerSettings:
    command: str = "repomix"
    style: str = "xml"
    remove_comments: bool = True
    remove_empty_lines: bool = True
    top_files_length: int = 3
    show_line_numbers: bool = False
    copy_to_clipboard: bool = False
    use_gitignore: bool = True
    use_default_patterns: bool = True
    enable_security_check: bool = True
    max_output_bytes: int = 10 * 1024 * 1024
    timeout_seconds: Optional[float] = None


@dataclass(frozen=True)
class LoggingSettings:
    level: str = "WARNING"
    file: Optional[str] = None


@dataclass(frozen=True)
class Settings:
    project_root: Path
    output_dir: str
    backend: BackendSettings
    dbmigration: DbMigrationSettings
    frontend: FrontendSettings
    infrastructure: InfrastructureSettings
    packer: PackerSettings = field(default_factory=PackerSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    @classmethod
    def from_mapping(cls, cfg: Mapping[str, Any], project_root: Path) -> "Settings":
        """Build settings from a merged (and validated) configuration mapping."""
        backend = cfg["backend"]
        dbmigration = cfg["dbmigration"]
        frontend = cfg["frontend"]
        infra = cfg["infrastructure"]
        packer = dict(cfg.get("packer") or {})
        log_cfg = dict(cfg.get("logging") or {})

        frontend_modules: Dict[str, FrontendModuleMeta] = {}
        for name, meta in (frontend.get("modules") or {}).items():
            meta = meta or {}
            frontend_modules[str(name)] = FrontendModuleMeta(
                display_name=str(meta.get("display_name") or str(name)[:1].upper() + str(name)[1:]),
                description=str(meta.get("description") or f"{name} module"),
            )

        services = {
            str(name): ServiceMapping.from_mapping(entry or {})
            for name, entry in (infra.get("services") or {}).items()
        }

        timeout = packer.get("timeout_seconds")
        return cls(
            project_root=Path(project_root),
            output_dir=str(cfg["output_dir"]),
            backend=BackendSettings(
                source_root=str(backend["source_root"]),
                resources_root=str(backend["resources_root"]),
                metadata_file=str(backend["metadata_file"]),
                source_extension=str(backend["source_extension"]),
                resources_glob=str(backend["resources_glob"]),
                ignore=_strings(backend.get("ignore")),
            ),
            dbmigration=DbMigrationSettings(
                changelog_dir=str(dbmigration["changelog_dir"]),
                extensions=_strings(dbmigration["extensions"]),
                ignore=_strings(dbmigration.get("ignore")),
            ),
            frontend=FrontendSettings(
                root=str(frontend["root"]),
                source_root=str(frontend["source_root"]),
                modules_dir=str(frontend["modules_dir"]),
                modules=frontend_modules,
                ignore=_strings(frontend.get("ignore")),
            ),
            infrastructure=InfrastructureSettings(
                root=str(infra["root"]),
                manifest=str(infra["manifest"]),
                services=services,
                ignore=_strings(infra.get("ignore")),
            ),
            packer=PackerSettings(
                command=str(packer.get("command", "repomix")),
                style=str(packer.get("style", "xml")),
                remove_comments=bool(packer.get("remove_comments", True)),
                remove_empty_lines=bool(packer.get("remove_empty_lines", True)),
                top_files_length=int(packer.get("top_files_length", 3)),
                show_line_numbers=bool(packer.get("show_line_numbers", False)),
                copy_to_clipboard=bool(packer.get("copy_to_clipboard", False)),
                use_gitignore=bool(packer.get("use_gitignore", True)),
                use_default_patterns=bool(packer.get("use_default_patterns", True)),
                enable_security_check=bool(packer.get("enable_security_check", True)),
                max_output_bytes=int(packer.get("max_output_bytes", 10 * 1024 * 1024)),
                timeout_seconds=float(timeout) if timeout is not None else None,
            ),
            logging=LoggingSettings(
                level=str(log_cfg.get("level") or "WARNING").upper(),
                file=log_cfg.get("file") or None,
            ),
        )

    def resolve(self, relative: str) -> Path:
        """Absolute path for a project-relative configured path."""
        return self.project_root / relative


def load_settings(repo_root: Optional[Path] = None) -> Settings:
    """Load, validate and freeze the configuration for ``repo_root``."""
    manager = ConfigManager(repo_root)
    return Settings.from_mapping(manager.load_config(), manager.repo_root)


__all__ = [
    "Settings",
    "BackendSettings",
    "DbMigrationSettings",
    "FrontendSettings",
    "FrontendModuleMeta",
    "InfrastructureSettings",
    "ServiceMapping",
    "PackerSettings",
    "LoggingSettings",
    "load_settings",
]
