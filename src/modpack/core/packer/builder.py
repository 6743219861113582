"""Pack configuration builders, one per module category.

All builders are pure: the same module, settings and options always produce
an equal ``PackConfig``. Nothing is written to disk here.
"""
from __future__ import annotations

from typing import List, Optional, Sequence

from modpack.core.config import Settings
from modpack.core.exceptions import InvalidLayerError
from modpack.core.modules.frontend import config_paths, shared_paths
from modpack.core.modules.graph import build_dependency_graph, resolve_dependencies
from modpack.core.modules.infrastructure import full_infrastructure_patterns
from modpack.core.modules.models import (
    DEPENDENCY_MODES,
    LAYERS,
    BackendModule,
    DbMigrationModule,
    DependencyEdge,
    FrontendModule,
    InfrastructureModule,
)

from .spec import IgnoreOptions, OutputOptions, PackConfig, SecurityOptions

DEPS_SUFFIXES = {"none": "", "api": "-deps", "full": "-deps-full"}
FULL_PACK_NAME = "all"


def validate_layers(layers: Optional[Sequence[str]]) -> List[str]:
    """Return the requested layers, rejecting names outside ``LAYERS``."""
    selected = list(layers or [])
    for layer in selected:
        if layer not in LAYERS:
            raise InvalidLayerError(layer, valid=LAYERS)
    return selected


def output_path(
    settings: Settings,
    category: str,
    name: str,
    deps_suffix: str = "",
    layers: Optional[Sequence[str]] = None,
) -> str:
    """``<output_dir>/<category>/<name><suffix>-packed.txt``."""
    suffix = deps_suffix
    if layers:
        suffix += "-" + "-".join(layers)
    return f"{settings.output_dir}/{category}/{name}{suffix}-packed.txt"


def _base_config(
    settings: Settings,
    file_path: str,
    header_text: str,
    includes: Sequence[str],
    ignore_patterns: Sequence[str],
) -> PackConfig:
    packer = settings.packer
    return PackConfig(
        output=OutputOptions(
            file_path=file_path,
            header_text=header_text,
            style=packer.style,
            remove_comments=packer.remove_comments,
            remove_empty_lines=packer.remove_empty_lines,
            top_files_length=packer.top_files_length,
            show_line_numbers=packer.show_line_numbers,
            copy_to_clipboard=packer.copy_to_clipboard,
        ),
        include=tuple(includes),
        ignore=IgnoreOptions(
            use_gitignore=packer.use_gitignore,
            use_default_patterns=packer.use_default_patterns,
            custom_patterns=tuple(ignore_patterns),
        ),
        security=SecurityOptions(enable_security_check=packer.enable_security_check),
    )


def format_dependencies_header(dependencies: Sequence[DependencyEdge]) -> str:
    """`` + Dependencies (API: a, b; Full: c)``, or empty without dependencies."""
    if not dependencies:
        return ""
    api = [d.module for d in dependencies if d.scope == "api"]
    full = [d.module for d in dependencies if d.scope == "full"]

    parts = []
    if api:
        parts.append(f"API: {', '.join(api)}")
    if full:
        parts.append(f"Full: {', '.join(full)}")
    return f" + Dependencies ({'; '.join(parts)})"


def format_layer_warning(layers: Sequence[str]) -> str:
    included = ", ".join(layers)
    excluded = ", ".join(layer for layer in LAYERS if layer not in layers)

    warning = f"\n\nPARTIAL VIEW - Only {included} layer(s) included."
    if excluded:
        warning += f" Missing: {excluded}."
    return warning + " API package always included."


def backend_includes(
    module: BackendModule,
    dependencies: Sequence[DependencyEdge],
    settings: Settings,
    layers: Optional[Sequence[str]] = None,
) -> List[str]:
    """Include globs for a backend module.

    The module's ``api`` tree is always present. Its ``core`` tree is
    included whole, or only the selected layers when a filter is given.
    API-scoped dependencies contribute their ``api`` tree, full-scoped ones
    their entire tree. The application config glob comes last.
    """
    src = settings.backend.source_root
    ext = settings.backend.source_extension

    includes = [f"{src}/{module.name}/api/**/*.{ext}"]
    if layers:
        includes.extend(f"{src}/{module.layers[layer]}" for layer in layers)
    else:
        includes.append(f"{src}/{module.name}/core/**/*.{ext}")

    for dep in dependencies:
        if dep.scope == "api":
            includes.append(f"{src}/{dep.module}/api/**/*.{ext}")
        else:
            includes.append(f"{src}/{dep.module}/**/*.{ext}")

    includes.append(settings.backend.resources_glob)
    return includes


def build_backend_config(
    module: BackendModule,
    all_modules: Sequence[BackendModule],
    settings: Settings,
    deps_mode: str = "none",
    layers: Optional[Sequence[str]] = None,
) -> PackConfig:
    """Pack config for one bounded context.

    Dependencies are resolved only when ``deps_mode`` is ``api`` or ``full``
    and the module declares any; otherwise the output carries no
    dependency suffix.

    Raises:
        InvalidLayerError: A requested layer is not domain/application/adapter
        ValueError: ``deps_mode`` is not none/api/full
    """
    if deps_mode not in DEPENDENCY_MODES:
        raise ValueError(f"Invalid dependency mode: {deps_mode}")
    selected = validate_layers(layers)

    dependencies: List[DependencyEdge] = []
    deps_suffix = ""
    if deps_mode != "none" and module.dependencies:
        graph = build_dependency_graph(all_modules)
        dependencies = resolve_dependencies(module.name, graph, deps_mode)  # type: ignore[arg-type]
        deps_suffix = DEPS_SUFFIXES[deps_mode]

    header = f"Bounded Context: {module.display_name}"
    if selected:
        header += format_layer_warning(selected)
    header += format_dependencies_header(dependencies)

    return _base_config(
        settings,
        output_path(settings, "backend", module.name, deps_suffix, selected),
        header,
        backend_includes(module, dependencies, settings, selected),
        settings.backend.ignore,
    )


def build_frontend_config(module: FrontendModule, settings: Settings) -> PackConfig:
    includes = [f"{module.path}/**/*.tsx", f"{module.path}/**/*.ts"]
    if module.include_shared:
        includes.extend(shared_paths(settings))
    includes.extend(config_paths(settings))

    return _base_config(
        settings,
        output_path(settings, "frontend", module.name),
        f"Frontend: {module.display_name} Module + Shared",
        includes,
        settings.frontend.ignore,
    )


def build_full_frontend_config(settings: Settings) -> PackConfig:
    """Every TypeScript source under the frontend plus its project config."""
    src = settings.frontend.source_root
    includes = [f"{src}/**/*.tsx", f"{src}/**/*.ts"]
    includes.extend(config_paths(settings))

    return _base_config(
        settings,
        output_path(settings, "frontend", FULL_PACK_NAME),
        "Frontend: Complete Application",
        includes,
        settings.frontend.ignore,
    )


def build_infrastructure_config(module: InfrastructureModule, settings: Settings) -> PackConfig:
    return _base_config(
        settings,
        output_path(settings, "infrastructure", module.name),
        f"Infrastructure: {module.display_name} - {module.description}",
        module.patterns,
        settings.infrastructure.ignore,
    )


def build_full_infrastructure_config(settings: Settings) -> PackConfig:
    return _base_config(
        settings,
        output_path(settings, "infrastructure", FULL_PACK_NAME),
        "Infrastructure: Complete Docker & Services Setup",
        full_infrastructure_patterns(settings),
        settings.infrastructure.ignore,
    )


def build_dbmigration_config(module: DbMigrationModule, settings: Settings) -> PackConfig:
    # Migrations belong to the backend, so the pack lands beside the bounded contexts.
    header = (
        f"{module.display_name} - {module.description}\n\n"
        f"Liquibase/Flyway migration files from {module.base_path}"
    )
    return _base_config(
        settings,
        output_path(settings, "backend", module.name),
        header,
        module.patterns,
        settings.dbmigration.ignore,
    )


__all__ = [
    "output_path",
    "validate_layers",
    "format_dependencies_header",
    "format_layer_warning",
    "backend_includes",
    "build_backend_config",
    "build_frontend_config",
    "build_full_frontend_config",
    "build_infrastructure_config",
    "build_full_infrastructure_config",
    "build_dbmigration_config",
]
