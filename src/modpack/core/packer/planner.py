"""Turn a pack request (target plus flags) into the configs to run."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from modpack.core.config import Settings
from modpack.core.exceptions import MissingTargetError, UnknownTargetError
from modpack.core.modules.catalog import ModuleCatalog
from modpack.core.modules.models import DBMIGRATION_NAME

from .builder import (
    build_backend_config,
    build_dbmigration_config,
    build_frontend_config,
    build_full_frontend_config,
    build_full_infrastructure_config,
    build_infrastructure_config,
)
from .spec import PackConfig


@dataclass(frozen=True)
class PackRequest:
    target: Optional[str] = None
    deps_mode: str = "none"
    layers: Tuple[str, ...] = ()
    all: bool = False
    all_backend: bool = False
    all_frontend: bool = False
    all_infrastructure: bool = False


@dataclass(frozen=True)
class PackPlan:
    title: str
    configs: Tuple[PackConfig, ...] = field(default_factory=tuple)


def _split_target(target: str) -> Tuple[Optional[str], str]:
    if "/" in target:
        category, _, name = target.partition("/")
        return category, name.split("/")[0]
    return None, target


def _not_found(message: str, target: str, catalog: ModuleCatalog) -> UnknownTargetError:
    return UnknownTargetError(message, target=target, available=catalog.available_targets())


def _plan_target(catalog: ModuleCatalog, settings: Settings, request: PackRequest) -> PackPlan:
    target = request.target or ""
    category, name = _split_target(target)

    if target == "frontend":
        return PackPlan("Packing all frontend", (build_full_frontend_config(settings),))
    if target == "infrastructure":
        return PackPlan("Packing all infrastructure", (build_full_infrastructure_config(settings),))

    if name == DBMIGRATION_NAME:
        module = catalog.dbmigration
        return PackPlan(
            f"Packing {module.address} ({module.display_name})",
            (build_dbmigration_config(module, settings),),
        )

    if category == "backend" or (category is None and name in catalog.backend_names()):
        backend = catalog.find("backend", name)
        if backend is None:
            raise _not_found(f"Backend module not found: {name}", target, catalog)
        layer_info = f" layers: {','.join(request.layers)}" if request.layers else ""
        config = build_backend_config(
            backend,  # type: ignore[arg-type]
            catalog.backend,
            settings,
            request.deps_mode,
            request.layers,
        )
        return PackPlan(f"Packing {backend.address} (deps: {request.deps_mode}{layer_info})", (config,))

    if category == "frontend":
        frontend = catalog.find("frontend", name)
        if frontend is None:
            raise _not_found(f"Frontend module not found: {name}", target, catalog)
        return PackPlan(
            f"Packing {frontend.address}",
            (build_frontend_config(frontend, settings),),  # type: ignore[arg-type]
        )

    if category == "infrastructure":
        infra = catalog.find("infrastructure", name)
        if infra is None:
            raise _not_found(f"Infrastructure module not found: {name}", target, catalog)
        return PackPlan(
            f"Packing {infra.address}",
            (build_infrastructure_config(infra, settings),),  # type: ignore[arg-type]
        )

    raise _not_found(f"Unknown target: {target}", target, catalog)


def plan_pack(catalog: ModuleCatalog, settings: Settings, request: PackRequest) -> PackPlan:
    """Select and build the pack configs for ``request``.

    The ``--all*`` flags take precedence over a target, in the order all,
    all-backend, all-frontend, all-infrastructure.

    Raises:
        UnknownTargetError: The target names no discovered module
        MissingTargetError: Neither a target nor an ``--all*`` flag was given
        InvalidLayerError: A layer filter names an unknown layer
    """
    configs: List[PackConfig] = []

    def backend_configs() -> List[PackConfig]:
        return [
            build_backend_config(m, catalog.backend, settings, request.deps_mode, request.layers)
            for m in catalog.backend
        ]

    if request.all:
        configs.extend(backend_configs())
        configs.extend(build_frontend_config(m, settings) for m in catalog.frontend)
        configs.append(build_full_infrastructure_config(settings))
        return PackPlan("Packing all modules", tuple(configs))

    if request.all_backend:
        return PackPlan("Packing all backend modules", tuple(backend_configs()))

    if request.all_frontend:
        configs.extend(build_frontend_config(m, settings) for m in catalog.frontend)
        return PackPlan("Packing all frontend modules", tuple(configs))

    if request.all_infrastructure:
        configs.extend(
            build_infrastructure_config(m, settings)
            for m in catalog.infrastructure
            if m.has_dedicated_files
        )
        configs.append(build_full_infrastructure_config(settings))
        return PackPlan("Packing all infrastructure modules", tuple(configs))

    if request.target:
        return _plan_target(catalog, settings, request)

    raise MissingTargetError(
        "No target specified. Use --help for usage.",
        context={"available": catalog.available_targets()},
    )


__all__ = ["PackRequest", "PackPlan", "plan_pack"]
