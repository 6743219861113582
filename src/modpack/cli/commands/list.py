"""
modpack list command.

SUMMARY: List discovered modules

``--json`` prints the flat list of pack targets consumed by the shell
completion spec.
"""

from __future__ import annotations

import argparse
import sys

from modpack.cli import OutputFormatter, add_standard_flags, load_cli_settings
from modpack.core.exceptions import ModpackError
from modpack.core.modules import ModuleCatalog, discover_catalog

SUMMARY = "List discovered modules"

TYPE_MARKERS = {
    "bounded-context": "",
    "shared": " [shared]",
    "bootstrap": " [bootstrap]",
}


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("--backend", "-b", action="store_true", help="Show only backend modules")
    parser.add_argument("--frontend", "-f", action="store_true", help="Show only frontend modules")
    parser.add_argument(
        "--infrastructure",
        "-i",
        action="store_true",
        help="Show only infrastructure modules",
    )
    add_standard_flags(parser)


def _print_backend(formatter: OutputFormatter, catalog: ModuleCatalog) -> None:
    formatter.text("Backend Bounded Contexts")
    formatter.text("=" * 40)
    formatter.text("")

    db = catalog.dbmigration
    formatter.text(f"{db.display_name} ({db.address})")
    formatter.text(f"   {db.description}")
    formatter.text("")

    for module in catalog.backend:
        formatter.text(f"{module.display_name} ({module.address}){TYPE_MARKERS.get(module.type, '')}")
        if module.description:
            formatter.text(f"   {module.description}")
        if module.dependencies:
            formatter.text("   Dependencies:")
            for dep in module.dependencies:
                formatter.text(f"     -> {dep.module} [{dep.scope}]")
        formatter.text("")


def _print_frontend(formatter: OutputFormatter, catalog: ModuleCatalog) -> None:
    formatter.text("Frontend Modules")
    formatter.text("=" * 40)
    formatter.text("")
    for module in catalog.frontend:
        formatter.text(f"{module.display_name} ({module.address})")
        formatter.text(f"   {module.description}")
        formatter.text("")
    formatter.text('Tip: Use "frontend" without a module name to pack everything.')
    formatter.text("")


def _print_infrastructure(formatter: OutputFormatter, catalog: ModuleCatalog) -> None:
    formatter.text("Infrastructure Services")
    formatter.text("=" * 40)
    formatter.text("")
    for module in catalog.infrastructure:
        formatter.text(f"{module.display_name} ({module.address})")
        formatter.text(f"   {module.description}")
        if not module.has_dedicated_files:
            formatter.text("   (No custom config files)")
        formatter.text("")
    formatter.text('Tip: Use "infrastructure" without a module name to pack everything.')
    formatter.text("")


def main(args: argparse.Namespace) -> int:
    """List modules per category, or the completion targets as JSON."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        settings = load_cli_settings(args)
        catalog = discover_catalog(settings)
    except ModpackError as e:
        formatter.error(e, error_code="discovery_error")
        return 1

    if formatter.json_mode:
        formatter.json_output(
            catalog.completion_targets(
                backend=args.backend,
                frontend=args.frontend,
                infrastructure=args.infrastructure,
            )
        )
        return 0

    show_all = not (args.backend or args.frontend or args.infrastructure)
    if show_all or args.backend:
        _print_backend(formatter, catalog)
    if show_all or args.frontend:
        _print_frontend(formatter, catalog)
    if show_all or args.infrastructure:
        _print_infrastructure(formatter, catalog)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
