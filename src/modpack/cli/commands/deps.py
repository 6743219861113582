"""
modpack deps command.

SUMMARY: Show direct dependencies of a backend module

Only declared (direct) dependencies are shown; dependencies of dependencies
are not followed.
"""

from __future__ import annotations

import argparse
import sys

from modpack.cli import OutputFormatter, add_standard_flags, load_cli_settings
from modpack.core.exceptions import ModpackError, UnknownTargetError
from modpack.core.modules import build_dependency_graph, discover_backend_modules, resolve_dependencies

SUMMARY = "Show direct dependencies of a backend module"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("module", help="Backend module name")
    parser.add_argument(
        "--full",
        "-f",
        action="store_true",
        help="Show full dependencies (not just API)",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        settings = load_cli_settings(args)
        modules = discover_backend_modules(settings)
    except ModpackError as e:
        formatter.error(e, error_code="discovery_error")
        return 1

    graph = build_dependency_graph(modules)
    module = graph.get(args.module)
    if module is None:
        names = [m.name for m in modules]
        formatter.error(
            UnknownTargetError(f"Module not found: {args.module}", target=args.module, available=names),
            error_code="unknown_module",
        )
        formatter.text("Available backend modules:")
        for name in names:
            formatter.text(f"  - {name}")
        return 1

    scope = "full" if args.full else "api"
    deps = resolve_dependencies(args.module, graph, scope)

    if formatter.json_mode:
        formatter.json_output(
            {
                "module": module.name,
                "displayName": module.display_name,
                "scope": scope,
                "dependencies": [
                    {
                        **dep.to_dict(),
                        "displayName": graph[dep.module].display_name if dep.module in graph else dep.module,
                    }
                    for dep in deps
                ],
            }
        )
        return 0

    formatter.text(f"Dependencies for {module.display_name}")
    formatter.text(f"Mode: {'Full code' if scope == 'full' else 'API only'}")
    formatter.text("")
    if not deps:
        formatter.text("  No dependencies")
    for dep in deps:
        target = graph.get(dep.module)
        formatter.text(f"  -> {target.display_name if target else dep.module} [{dep.scope}]")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
