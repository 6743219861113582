from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from modpack.core.exceptions import ConfigurationError
from modpack.core.utils.io import ensure_directory

_MODPACK_HANDLER: logging.Handler | None = None
_JSON_MODE_NULL_HANDLER_INSTALLED: bool = False

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
FILE_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_stdlib_logging(*, level: str = "WARNING", log_path: Optional[Path] = None) -> None:
    """Install the modpack handler on the root logger.

    Logs go to stderr (never stdout, which carries command output) or to
    ``log_path`` when given. Calling again replaces the previous handler.

    Raises:
        ConfigurationError: If ``log_path`` cannot be opened for writing.
    """
    global _MODPACK_HANDLER

    root = logging.getLogger()
    root.setLevel(_level_from_name(level))

    if _MODPACK_HANDLER is not None:
        root.removeHandler(_MODPACK_HANDLER)
        _MODPACK_HANDLER.close()
        _MODPACK_HANDLER = None

    handler: logging.Handler
    if log_path is not None:
        resolved = Path(log_path).resolve()
        try:
            ensure_directory(resolved.parent)
            handler = logging.FileHandler(resolved, encoding="utf-8")
        except OSError as exc:
            raise ConfigurationError(
                f"Cannot open log file {resolved}: {exc}",
                context={"logging.file": str(resolved)},
            ) from exc
        handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(_level_from_name(level))
    root.addHandler(handler)
    _MODPACK_HANDLER = handler


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove the installed handler."""
    global _MODPACK_HANDLER, _JSON_MODE_NULL_HANDLER_INSTALLED
    root = logging.getLogger()
    root.setLevel(logging.WARNING)
    if _MODPACK_HANDLER is not None:
        root.removeHandler(_MODPACK_HANDLER)
        _MODPACK_HANDLER.close()
    _MODPACK_HANDLER = None
    _JSON_MODE_NULL_HANDLER_INSTALLED = False


def suppress_lastresort_in_json_mode() -> None:
    """Prevent logging's lastResort handler from writing to stderr in --json mode.

    Ensures the root logger has at least one handler (a NullHandler) when it
    otherwise has none.
    """
    global _JSON_MODE_NULL_HANDLER_INSTALLED

    root = logging.getLogger()
    if root.handlers or _JSON_MODE_NULL_HANDLER_INSTALLED:
        return
    root.addHandler(logging.NullHandler())
    _JSON_MODE_NULL_HANDLER_INSTALLED = True


__all__ = [
    "configure_stdlib_logging",
    "reset_stdlib_logging_for_tests",
    "suppress_lastresort_in_json_mode",
]
