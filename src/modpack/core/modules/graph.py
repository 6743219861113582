"""Backend dependency graph and direct-dependency resolution.

Resolution walks exactly one level: a module's dependencies' dependencies
are never followed, so cycles need no special handling.
"""
from __future__ import annotations

from typing import Dict, Iterable, List

from .models import BackendModule, DependencyEdge, Scope

DependencyGraph = Dict[str, BackendModule]


def build_dependency_graph(modules: Iterable[BackendModule]) -> DependencyGraph:
    return {module.name: module for module in modules}


def resolve_dependencies(
    module_name: str,
    graph: DependencyGraph,
    scope: Scope = "api",
) -> List[DependencyEdge]:
    """Declared dependencies of ``module_name``.

    With ``scope="full"`` every edge is promoted to full; with ``"api"`` each
    edge keeps its declared scope. Unknown modules resolve to an empty list.
    """
    module = graph.get(module_name)
    if module is None:
        return []
    return [
        DependencyEdge(module=dep.module, scope="full" if scope == "full" else dep.scope)
        for dep in module.dependencies
    ]


__all__ = ["DependencyGraph", "build_dependency_graph", "resolve_dependencies"]
