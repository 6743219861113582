"""
modpack CLI package.

Commands are auto-discovered from ``cli/commands/*.py``; each module exposes
``SUMMARY``, ``register_args(parser)`` and ``main(args) -> int``.

Helpers shared by the commands:
- _output: text/JSON output
- _args: flag registration
- _utils: project root and settings loading
"""
from ._output import OutputFormatter, format_json, print_failure, print_success
from ._args import (
    add_deps_flag,
    add_dry_run_flag,
    add_json_flag,
    add_layers_flag,
    add_standard_flags,
    add_verbose_flag,
)
from ._utils import load_cli_settings

__all__ = [
    "OutputFormatter",
    "format_json",
    "print_success",
    "print_failure",
    "add_json_flag",
    "add_dry_run_flag",
    "add_verbose_flag",
    "add_deps_flag",
    "add_layers_flag",
    "add_standard_flags",
    "load_cli_settings",
]
