"""Shared CLI utilities: project root and settings resolution."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from modpack.core.config import Settings, load_settings
from modpack.core.stdlib_logging import configure_stdlib_logging
from modpack.core.utils.paths import resolve_project_root


def get_repo_root(args: argparse.Namespace) -> Path:
    """Get repository root from ``--repo-root`` or auto-detect."""
    if getattr(args, "repo_root", None):
        return resolve_project_root(getattr(args, "repo_root"))
    return resolve_project_root()


def load_cli_settings(args: argparse.Namespace) -> Settings:
    """Load settings for the invocation and configure logging from them.

    ``--verbose`` lowers the log level to DEBUG regardless of configuration.
    """
    settings = load_settings(get_repo_root(args))

    level = "DEBUG" if getattr(args, "verbose", False) else settings.logging.level
    log_path = settings.resolve(settings.logging.file) if settings.logging.file else None
    configure_stdlib_logging(level=level, log_path=log_path)
    logging.getLogger(__name__).debug("Project root: %s", settings.project_root)
    return settings


__all__ = ["get_repo_root", "load_cli_settings"]
