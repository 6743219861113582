"""Output helpers shared by the commands.

Command results go to stdout and errors to stderr. In ``--json`` mode stdout
carries only JSON, so plain text lines are dropped.
"""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional

from modpack.core.exceptions import ModpackError


class OutputFormatter:
    """Prints command results as text or as JSON."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def success(
        self,
        data: Dict[str, Any],
        message: str,
        *,
        status: str = "success",
    ) -> None:
        """Print ``message``, or ``data`` tagged with ``status`` in JSON mode."""
        if self.json_mode:
            self.json_output({"status": status, **data})
        else:
            print(message)

    def error(
        self,
        error: Exception | str,
        message: Optional[str] = None,
        *,
        error_code: str = "error",
    ) -> None:
        """Report a failure on stderr.

        In JSON mode the payload is ``{"error": error_code, "message": ...}``;
        a ``ModpackError`` adds its class name as ``code`` and, when present,
        its ``context``.
        """
        msg = message or str(error)
        if not self.json_mode:
            print(f"Error: {msg}", file=sys.stderr)
            return

        output: Dict[str, Any] = {"error": error_code, "message": msg}
        if isinstance(error, ModpackError):
            details = error.to_json_error()
            output["code"] = details["code"]
            if details["context"]:
                output["context"] = details["context"]
        print(format_json(output, self.indent), file=sys.stderr)

    def json_output(self, data: Any) -> None:
        print(format_json(data, self.indent))

    def text(self, message: str = "") -> None:
        """Print a plain text line; dropped in JSON mode."""
        if not self.json_mode:
            print(message)


def format_json(data: Any, indent: int = 2) -> str:
    return json.dumps(data, indent=indent, default=str)


def print_success(message: str) -> None:
    print(f"✓ {message}")


def print_failure(message: str) -> None:
    print(f"✗ {message}")


__all__ = [
    "OutputFormatter",
    "format_json",
    "print_success",
    "print_failure",
]
