"""Module descriptors discovered in the monorepo.

Each category has its own frozen dataclass; ``ModuleInfo`` is their union.
Category-specific logic matches on the concrete type.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, ClassVar, Dict, Literal, Mapping, Tuple, Union

Scope = Literal["api", "full"]
DependencyMode = Literal["none", "api", "full"]
Layer = Literal["domain", "application", "adapter"]
BackendType = Literal["bounded-context", "shared", "bootstrap"]

LAYERS: Tuple[str, ...] = ("domain", "application", "adapter")
DEPENDENCY_MODES: Tuple[str, ...] = ("none", "api", "full")

DBMIGRATION_NAME = "dbmigration"


@dataclass(frozen=True)
class DependencyEdge:
    """A declared dependency on another backend module.

    ``api`` scope needs only the dependency's public API files; ``full`` needs
    its whole source tree.
    """

    module: str
    scope: Scope

    def to_dict(self) -> Dict[str, str]:
        return {"module": self.module, "scope": self.scope}


@dataclass(frozen=True)
class BackendModule:
    category: ClassVar[str] = "backend"

    name: str
    display_name: str
    description: str
    path: str
    dependencies: Tuple[DependencyEdge, ...] = ()
    type: BackendType = "bounded-context"
    layers: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "layers", MappingProxyType(dict(self.layers)))

    @property
    def address(self) -> str:
        return f"{self.category}/{self.name}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "displayName": self.display_name,
            "description": self.description,
            "category": self.category,
            "path": self.path,
            "dependencies": [d.to_dict() for d in self.dependencies],
            "type": self.type,
            "layers": dict(self.layers),
        }


@dataclass(frozen=True)
class FrontendModule:
    category: ClassVar[str] = "frontend"

    name: str
    display_name: str
    description: str
    path: str
    include_shared: bool = True

    @property
    def address(self) -> str:
        return f"{self.category}/{self.name}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "displayName": self.display_name,
            "description": self.description,
            "category": self.category,
            "path": self.path,
            "includeShared": self.include_shared,
        }


@dataclass(frozen=True)
class InfrastructureModule:
    category: ClassVar[str] = "infrastructure"

    name: str
    display_name: str
    description: str
    service_name: str
    base_path: str
    patterns: Tuple[str, ...] = ()

    @property
    def address(self) -> str:
        return f"{self.category}/{self.name}"

    @property
    def has_dedicated_files(self) -> bool:
        # Only the manifest itself means the service has no config directory.
        return len(self.patterns) > 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "displayName": self.display_name,
            "description": self.description,
            "category": self.category,
            "serviceName": self.service_name,
            "basePath": self.base_path,
            "patterns": list(self.patterns),
        }


@dataclass(frozen=True)
class DbMigrationModule:
    category: ClassVar[str] = "dbmigration"

    display_name: str
    description: str
    base_path: str
    patterns: Tuple[str, ...] = ()
    name: str = DBMIGRATION_NAME

    @property
    def address(self) -> str:
        # Addressed alongside the backend modules it belongs to.
        return f"backend/{self.name}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "displayName": self.display_name,
            "description": self.description,
            "category": self.category,
            "basePath": self.base_path,
            "patterns": list(self.patterns),
        }


ModuleInfo = Union[BackendModule, FrontendModule, InfrastructureModule, DbMigrationModule]


__all__ = [
    "Scope",
    "DependencyMode",
    "Layer",
    "BackendType",
    "LAYERS",
    "DEPENDENCY_MODES",
    "DBMIGRATION_NAME",
    "DependencyEdge",
    "BackendModule",
    "FrontendModule",
    "InfrastructureModule",
    "DbMigrationModule",
    "ModuleInfo",
]
