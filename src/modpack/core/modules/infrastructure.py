"""Infrastructure service discovery from the docker-compose manifest.

Services map to display modules through the ``infrastructure.services``
table. Several services may collapse into one module (``authentik-server``
and ``authentik-worker`` both become ``authentik``); the first one in
manifest order wins.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Set

import yaml

from modpack.core.config import ServiceMapping, Settings
from modpack.core.exceptions import ConfigurationError
from modpack.core.utils.io import read_yaml

from .models import InfrastructureModule

logger = logging.getLogger(__name__)

DEFAULT_FOLDER_PATTERN = "**/*"
FULL_INFRASTRUCTURE_EXTENSIONS = ("yaml", "yml", "json", "sql", "sh", "md")


def load_compose_manifest(settings: Settings) -> Dict[str, Any]:
    """Read the orchestration manifest.

    A missing manifest is logged and treated as having no services; a file
    that is not valid YAML raises ``ConfigurationError``.
    """
    path = settings.resolve(settings.infrastructure.manifest)
    if not path.exists():
        logger.warning("Infrastructure manifest not found: %s", path)
        return {}
    try:
        data = read_yaml(path, default={})
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(
            f"Cannot read infrastructure manifest {path}: {exc}",
            context={"path": str(path)},
        ) from exc
    return data if isinstance(data, dict) else {}


def _capitalize(value: str) -> str:
    return value[:1].upper() + value[1:]


def _include_patterns(mapping: Optional[ServiceMapping], settings: Settings) -> List[str]:
    infra = settings.infrastructure
    folders = mapping.folders if mapping else ()
    patterns = mapping.patterns if mapping and mapping.patterns is not None else (DEFAULT_FOLDER_PATTERN,)

    includes = [f"{infra.root}/{folder}/{pattern}" for folder in folders for pattern in patterns]
    includes.append(infra.manifest)
    return includes


def discover_infrastructure_modules(
    settings: Settings,
    manifest: Optional[Mapping[str, Any]] = None,
) -> List[InfrastructureModule]:
    """Map manifest services to display modules, sorted by name.

    Args:
        settings: Loaded settings (service table, infrastructure paths)
        manifest: Pre-parsed manifest; read from disk when omitted
    """
    if manifest is None:
        manifest = load_compose_manifest(settings)
    services = manifest.get("services") or {}
    if not isinstance(services, Mapping):
        logger.warning("Manifest services entry is not a mapping; ignoring it")
        services = {}

    modules: List[InfrastructureModule] = []
    seen: Set[str] = set()

    for service_name, service_config in services.items():
        mapping = settings.infrastructure.services.get(service_name)
        if mapping is not None and mapping.skip:
            logger.debug("Skipping service %s", service_name)
            continue

        name = (mapping.display_name if mapping else None) or service_name.split("-")[0]
        if name in seen:
            logger.debug("Service %s folds into already discovered module %s", service_name, name)
            continue
        seen.add(name)

        image = (service_config or {}).get("image") if isinstance(service_config, dict) else None
        modules.append(
            InfrastructureModule(
                name=name,
                display_name=_capitalize(name),
                description=f"Docker service: {image or 'custom'}",
                service_name=service_name,
                base_path=settings.infrastructure.root,
                patterns=tuple(_include_patterns(mapping, settings)),
            )
        )

    return sorted(modules, key=lambda m: m.name)


def full_infrastructure_patterns(settings: Settings) -> List[str]:
    """Globs for the complete infrastructure pack.

    Environment files (``.env*``) are not included.
    """
    root = settings.infrastructure.root
    return [f"{root}/**/*.{ext}" for ext in FULL_INFRASTRUCTURE_EXTENSIONS]


__all__ = [
    "load_compose_manifest",
    "discover_infrastructure_modules",
    "full_infrastructure_patterns",
]
