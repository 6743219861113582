"""
modpack completion command.

SUMMARY: Install the Fig/Warp autocomplete spec

The completion spec is copied to ``~/.warp/autocomplete`` when Warp is installed
(``~/.warp`` exists), otherwise to ``~/.fig/autocomplete``.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from modpack.cli import OutputFormatter, add_json_flag, print_success
from modpack.core.utils.io import atomic_write, ensure_directory
from modpack.data import get_data_path, read_text

SUMMARY = "Install the Fig/Warp autocomplete spec"

SPEC_FILENAME = "modpack.ts"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--print",
        action="store_true",
        dest="print_spec",
        help="Print the completion spec instead of installing it",
    )
    parser.add_argument(
        "--shell",
        choices=["fig"],
        default="fig",
        help="Completion flavour (Warp reads Fig specs)",
    )
    add_json_flag(parser)


def autocomplete_dir(home: Path) -> Path:
    """Warp's autocomplete directory when Warp is present, else Fig's."""
    if (home / ".warp").exists():
        return home / ".warp" / "autocomplete"
    return home / ".fig" / "autocomplete"


def install_spec(home: Path) -> Path:
    content = read_text("completion", SPEC_FILENAME)
    target_dir = ensure_directory(autocomplete_dir(home))
    target = target_dir / SPEC_FILENAME
    atomic_write(target, lambda f: f.write(content))
    return target


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    if args.print_spec:
        print(read_text("completion", SPEC_FILENAME), end="")
        return 0

    try:
        target = install_spec(Path.home())
    except OSError as e:
        formatter.error(e, "Failed to install completion", error_code="completion_install_failed")
        formatter.text(f"   Error: {e}")
        formatter.text("")
        formatter.text("Manual installation:")
        formatter.text(f"   cp {get_data_path('completion', SPEC_FILENAME)} ~/.fig/autocomplete/")
        return 1

    if formatter.json_mode:
        formatter.success({"path": str(target)}, "Installed autocomplete spec")
        return 0

    print_success("Installed autocomplete spec to:")
    formatter.text(f"   {target}")
    formatter.text("")
    formatter.text("Restart your terminal to activate, then type: modpack [Tab]")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
