"""Project root resolution.

Resolution priority:
1. Explicit path (``--repo-root``)
2. ``MODPACK_PROJECT_ROOT`` environment variable
3. Git repository root via ``git rev-parse --show-toplevel``
4. Current working directory
"""
from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Optional

from modpack.core.exceptions import ProjectRootError

logger = logging.getLogger(__name__)

PROJECT_ROOT_ENV = "MODPACK_PROJECT_ROOT"


def _git_toplevel(cwd: Path) -> Optional[Path]:
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=str(cwd),
            text=True,
            capture_output=True,
            check=True,
            timeout=5,
        )
    except (FileNotFoundError, subprocess.CalledProcessError, subprocess.TimeoutExpired) as exc:
        logger.debug("git root detection failed in %s: %s", cwd, exc)
        return None

    root_str = (result.stdout or "").strip()
    if not root_str:
        return None
    return Path(root_str).expanduser().resolve()


def resolve_project_root(explicit: Path | str | None = None) -> Path:
    """Resolve the monorepo root all configured paths are relative to.

    Raises:
        ProjectRootError: If an explicit or environment path does not exist
    """
    if explicit:
        path = Path(explicit).expanduser().resolve()
        if not path.is_dir():
            raise ProjectRootError(f"Repository root does not exist: {path}")
        return path

    env_root = os.environ.get(PROJECT_ROOT_ENV)
    if env_root:
        path = Path(env_root).expanduser().resolve()
        if not path.is_dir():
            raise ProjectRootError(f"{PROJECT_ROOT_ENV} points at missing path: {path}")
        return path

    cwd = Path.cwd().resolve()
    return _git_toplevel(cwd) or cwd


__all__ = ["PROJECT_ROOT_ENV", "resolve_project_root"]
