"""Module discovery: descriptors, discoverers, dependency graph and catalog."""
from __future__ import annotations

from .backend import discover_backend_modules, layer_patterns, parse_package_info
from .catalog import ModuleCatalog, discover_catalog
from .dbmigration import discover_dbmigration_module
from .frontend import config_paths, discover_frontend_modules, shared_paths
from .graph import DependencyGraph, build_dependency_graph, resolve_dependencies
from .infrastructure import (
    full_infrastructure_patterns,
    discover_infrastructure_modules,
    load_compose_manifest,
)
from .metadata import (
    MetadataExtractor,
    ModuleFacts,
    RegexMetadataExtractor,
    classify_module_type,
    extract_module_facts,
    parse_dependency,
)
from .models import (
    DBMIGRATION_NAME,
    DEPENDENCY_MODES,
    LAYERS,
    BackendModule,
    DbMigrationModule,
    DependencyEdge,
    DependencyMode,
    FrontendModule,
    InfrastructureModule,
    Layer,
    ModuleInfo,
    Scope,
)

__all__ = [
    "BackendModule",
    "DbMigrationModule",
    "DependencyEdge",
    "DependencyGraph",
    "DependencyMode",
    "FrontendModule",
    "InfrastructureModule",
    "Layer",
    "ModuleCatalog",
    "ModuleFacts",
    "ModuleInfo",
    "MetadataExtractor",
    "RegexMetadataExtractor",
    "Scope",
    "DBMIGRATION_NAME",
    "DEPENDENCY_MODES",
    "LAYERS",
    "full_infrastructure_patterns",
    "build_dependency_graph",
    "classify_module_type",
    "config_paths",
    "discover_backend_modules",
    "discover_catalog",
    "discover_dbmigration_module",
    "discover_frontend_modules",
    "discover_infrastructure_modules",
    "extract_module_facts",
    "layer_patterns",
    "load_compose_manifest",
    "parse_dependency",
    "parse_package_info",
    "resolve_dependencies",
    "shared_paths",
]
