"""One discovery pass over every module category."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from modpack.core.config import Settings

from .backend import discover_backend_modules
from .dbmigration import discover_dbmigration_module
from .frontend import discover_frontend_modules
from .graph import DependencyGraph, build_dependency_graph
from .infrastructure import discover_infrastructure_modules
from .metadata import MetadataExtractor
from .models import (
    BackendModule,
    DbMigrationModule,
    FrontendModule,
    InfrastructureModule,
    ModuleInfo,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModuleCatalog:
    """Everything discovered in the project for one invocation."""

    backend: Tuple[BackendModule, ...]
    frontend: Tuple[FrontendModule, ...]
    infrastructure: Tuple[InfrastructureModule, ...]
    dbmigration: DbMigrationModule

    def graph(self) -> DependencyGraph:
        return build_dependency_graph(self.backend)

    def backend_names(self) -> List[str]:
        return [m.name for m in self.backend]

    def find(self, category: str, name: str) -> Optional[ModuleInfo]:
        """Look up a module by category and name; None when absent."""
        if category == "backend" and name == self.dbmigration.name:
            return self.dbmigration
        pool = {
            "backend": self.backend,
            "frontend": self.frontend,
            "infrastructure": self.infrastructure,
        }.get(category, ())
        for module in pool:
            if module.name == name:
                return module
        return None

    def completion_targets(
        self,
        *,
        backend: bool = False,
        frontend: bool = False,
        infrastructure: bool = False,
    ) -> List[str]:
        """Pack target addresses, optionally restricted to some categories.

        With no filter set every category is listed. Infrastructure modules
        without dedicated files are left out since packing them adds nothing
        over the full infrastructure pack.
        """
        targets: List[str] = []
        if not frontend and not infrastructure:
            targets.extend(m.address for m in self.backend)
            targets.append(self.dbmigration.address)
        if not backend and not infrastructure:
            targets.extend(m.address for m in self.frontend)
            targets.append("frontend")
        if not backend and not frontend:
            targets.append("infrastructure")
            targets.extend(m.address for m in self.infrastructure if m.has_dedicated_files)
        return targets

    def available_targets(self) -> List[str]:
        """Every valid pack target, used when reporting an unknown one."""
        targets = [self.dbmigration.address]
        targets.extend(m.address for m in self.backend)
        targets.append("frontend")
        targets.extend(m.address for m in self.frontend)
        targets.append("infrastructure")
        targets.extend(m.address for m in self.infrastructure)
        return targets


def discover_catalog(
    settings: Settings,
    extractor: Optional[MetadataExtractor] = None,
) -> ModuleCatalog:
    catalog = ModuleCatalog(
        backend=tuple(discover_backend_modules(settings, extractor)),
        frontend=tuple(discover_frontend_modules(settings)),
        infrastructure=tuple(discover_infrastructure_modules(settings)),
        dbmigration=discover_dbmigration_module(settings),
    )
    logger.debug(
        "Discovered %d backend, %d frontend, %d infrastructure modules",
        len(catalog.backend),
        len(catalog.frontend),
        len(catalog.infrastructure),
    )
    return catalog


__all__ = ["ModuleCatalog", "discover_catalog"]
