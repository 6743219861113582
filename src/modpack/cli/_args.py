"""Common CLI argument registration utilities.

Reusable argument registration functions shared by the commands.
"""
from __future__ import annotations

import argparse
from typing import List

from modpack.core.modules.models import LAYERS


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_repo_root_flag(parser: argparse.ArgumentParser) -> None:
    """Add --repo-root flag for repository root override."""
    parser.add_argument(
        "--repo-root",
        type=str,
        help="Override repository root path",
    )


def add_dry_run_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--dry-run",
        "-n",
        action="store_true",
        help="Print the generated configs without running the packer",
    )


def add_verbose_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output",
    )


def parse_layers(value: str) -> List[str]:
    """argparse type for ``--layers domain,application``.

    Raises:
        argparse.ArgumentTypeError: On an empty list or unknown layer name
    """
    layers = [part.strip() for part in value.split(",") if part.strip()]
    if not layers:
        raise argparse.ArgumentTypeError("expected at least one layer")
    unknown = [layer for layer in layers if layer not in LAYERS]
    if unknown:
        raise argparse.ArgumentTypeError(
            f"invalid layer(s): {', '.join(unknown)} (choose from {', '.join(LAYERS)})"
        )
    return layers


def add_deps_flag(parser: argparse.ArgumentParser) -> None:
    """Add ``-d/--deps [api|full]``; a bare flag means ``api``."""
    parser.add_argument(
        "--deps",
        "-d",
        nargs="?",
        choices=["api", "full"],
        const="api",
        default="none",
        dest="deps",
        metavar="MODE",
        help="Include backend dependencies: api (default) or full",
    )


def add_layers_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--layers",
        "-l",
        type=parse_layers,
        default=None,
        help=f"Comma-separated backend layers to include ({','.join(LAYERS)})",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add the flags every command accepts (--json, --repo-root)."""
    add_json_flag(parser)
    add_repo_root_flag(parser)


__all__ = [
    "add_json_flag",
    "add_repo_root_flag",
    "add_dry_run_flag",
    "add_verbose_flag",
    "add_deps_flag",
    "add_layers_flag",
    "add_standard_flags",
    "parse_layers",
]
