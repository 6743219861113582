"""Run the external packer once per pack config.

Each run serializes the config to a scratch JSON file, invokes
``<packer.command> --config <file>`` from the project root and removes the
scratch file afterwards, whatever the outcome. Failures come back as
unsuccessful ``RunResult`` values; nothing raised by the packer escapes
``PackerRunner.run``.
"""
from __future__ import annotations

import json
import logging
import os
import shlex
import shutil
import subprocess
import tempfile
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from modpack.core.config import Settings
from modpack.core.exceptions import PackerError
from modpack.core.utils.io import ensure_directory
from modpack.core.utils.subprocess import run_command

from .spec import PackConfig

logger = logging.getLogger(__name__)

TEMP_CONFIG_PREFIX = "repomix-"


@dataclass(frozen=True)
class RunResult:
    success: bool
    config: PackConfig
    output_path: Optional[str] = None
    error: Optional[str] = None
    duration_ms: int = 0
    stdout: str = ""
    command: Tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "outputPath": self.output_path,
            "error": self.error,
            "durationMs": self.duration_ms,
        }


@dataclass(frozen=True)
class BatchResult:
    results: Tuple[RunResult, ...] = field(default_factory=tuple)

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def total_count(self) -> int:
        return len(self.results)

    @property
    def ok(self) -> bool:
        return self.success_count == self.total_count


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


def _describe_failure(exc: BaseException) -> str:
    if isinstance(exc, subprocess.CalledProcessError):
        cmd = " ".join(str(p) for p in exc.cmd) if isinstance(exc.cmd, (list, tuple)) else str(exc.cmd)
        detail = (exc.stderr or exc.output or "").strip()
        message = f"Command failed (exit {exc.returncode}): {cmd}"
        return f"{message}\n{detail}" if detail else message
    if isinstance(exc, subprocess.TimeoutExpired):
        return f"Command timed out after {exc.timeout}s"
    if isinstance(exc, FileNotFoundError) and exc.filename:
        return f"Packer executable not found: {exc.filename}"
    return str(exc) or exc.__class__.__name__


class PackerRunner:
    """Invokes the configured packer for pack configs, strictly one at a time."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def command_for(self, config_path: Path) -> List[str]:
        argv = shlex.split(self.settings.packer.command)
        if not argv:
            raise PackerError("Packer command is empty")
        return argv + ["--config", str(config_path)]

    def _write_temp_config(self, config: PackConfig) -> Path:
        fd, name = tempfile.mkstemp(prefix=TEMP_CONFIG_PREFIX, suffix=".json")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(config.to_dict(), f, indent=2)
        return Path(name)

    def run(self, config: PackConfig, *, dry_run: bool = False, verbose: bool = False) -> RunResult:
        """Run the packer for one config.

        With ``dry_run`` the scratch file is still written (and removed) but
        the packer is not started.
        """
        start = time.monotonic()
        temp_path: Optional[Path] = None
        command: Tuple[str, ...] = ()
        try:
            temp_path = self._write_temp_config(config)
            command = tuple(self.command_for(temp_path))

            if dry_run:
                return RunResult(
                    success=True,
                    config=config,
                    output_path=config.output_path,
                    duration_ms=_elapsed_ms(start),
                    command=command,
                )

            ensure_directory(self.settings.resolve(config.output_path).parent)
            log = logger.info if verbose else logger.debug
            log("Running: %s", " ".join(command))

            completed = run_command(
                command,
                cwd=self.settings.project_root,
                max_output_bytes=self.settings.packer.max_output_bytes,
                timeout=self.settings.packer.timeout_seconds,
            )
            return RunResult(
                success=True,
                config=config,
                output_path=config.output_path,
                duration_ms=_elapsed_ms(start),
                stdout=completed.stdout or "",
                command=command,
            )
        except (OSError, UnicodeError, subprocess.SubprocessError, PackerError) as exc:
            logger.debug("Packer run for %s failed: %s", config.output_path, exc)
            return RunResult(
                success=False,
                config=config,
                error=_describe_failure(exc),
                duration_ms=_elapsed_ms(start),
                command=command,
            )
        finally:
            if temp_path is not None:
                try:
                    temp_path.unlink()
                except OSError:
                    pass

    def run_many(
        self,
        configs: Iterable[PackConfig],
        *,
        dry_run: bool = False,
        verbose: bool = False,
    ) -> BatchResult:
        """Run every config in order; a failure does not stop the batch."""
        results = tuple(self.run(c, dry_run=dry_run, verbose=verbose) for c in configs)
        return BatchResult(results=results)


def clean_outputs(settings: Settings) -> Path:
    """Remove and recreate the output directory. Errors are logged, not raised."""
    output_dir = settings.resolve(settings.output_dir)
    try:
        shutil.rmtree(output_dir, ignore_errors=True)
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.warning("Could not clean %s: %s", output_dir, exc)
    return output_dir


__all__ = ["RunResult", "BatchResult", "PackerRunner", "clean_outputs"]
