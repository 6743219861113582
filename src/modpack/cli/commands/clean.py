"""
modpack clean command.

SUMMARY: Remove all generated outputs
"""

from __future__ import annotations

import argparse
import sys

from modpack.cli import OutputFormatter, add_standard_flags, load_cli_settings, print_success
from modpack.core.exceptions import ModpackError
from modpack.core.packer import clean_outputs

SUMMARY = "Remove all generated outputs"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        settings = load_cli_settings(args)
    except ModpackError as e:
        formatter.error(e, error_code="config_error")
        return 1

    formatter.text("Cleaning outputs...")
    output_dir = clean_outputs(settings)
    if formatter.json_mode:
        formatter.success({"outputDir": str(output_dir)}, "Outputs cleaned")
    else:
        print_success("Outputs cleaned")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
