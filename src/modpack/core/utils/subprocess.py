"""Subprocess helpers for running external tools.

- Commands run without a shell, in their own process group
- Captured output is capped at a configurable number of bytes; the child is
  killed once a stream passes the cap
- Wall-clock timeouts are optional and off unless a caller passes one
"""
from __future__ import annotations

import logging
import os
import shlex
import signal
import subprocess
import threading
from pathlib import Path
from typing import Any, Optional, Sequence

from modpack.core.exceptions import OutputLimitExceeded

logger = logging.getLogger(__name__)

DEFAULT_MAX_OUTPUT_BYTES = 10 * 1024 * 1024
_CHUNK_SIZE = 64 * 1024


def _flatten_cmd(cmd: Any) -> Sequence[str]:
    if isinstance(cmd, (list, tuple)):
        return [str(p) for p in cmd]
    return shlex.split(str(cmd))


def _popen_process_group_kwargs() -> dict[str, Any]:
    if os.name == "posix":
        return {"start_new_session": True}
    if os.name == "nt":
        creationflags = getattr(subprocess, "CREATE_NEW_PROCESS_GROUP", None)
        if isinstance(creationflags, int):
            return {"creationflags": creationflags}
    return {}


def _terminate_process_group(proc: subprocess.Popen[Any]) -> None:
    if proc.poll() is not None:
        return
    if os.name == "posix":
        try:
            os.killpg(proc.pid, signal.SIGTERM)
        except OSError:
            proc.terminate()
        try:
            proc.wait(timeout=0.2)
        except subprocess.TimeoutExpired:
            pass
        if proc.poll() is None:
            try:
                os.killpg(proc.pid, signal.SIGKILL)
            except OSError:
                proc.kill()
        try:
            proc.wait(timeout=0.2)
        except subprocess.TimeoutExpired:
            pass
        return

    proc.kill()
    try:
        proc.wait(timeout=0.2)
    except subprocess.TimeoutExpired:
        pass


def _drain(
    proc: subprocess.Popen[bytes],
    name: str,
    sink: bytearray,
    limit: int,
    overflow: list[str],
) -> None:
    stream = getattr(proc, name)
    try:
        while True:
            chunk = stream.read1(_CHUNK_SIZE)
            if not chunk:
                return
            if len(sink) + len(chunk) > limit:
                overflow.append(name)
                _terminate_process_group(proc)
                return
            sink.extend(chunk)
    finally:
        stream.close()


def _decode(data: bytearray) -> str:
    return bytes(data).decode("utf-8", errors="replace")


def run_command(
    cmd: Any,
    *,
    cwd: Path | str | None = None,
    env: Optional[dict[str, str]] = None,
    max_output_bytes: int = DEFAULT_MAX_OUTPUT_BYTES,
    timeout: float | None = None,
    check: bool = True,
) -> subprocess.CompletedProcess:
    """Run ``cmd`` capturing text output, with an output cap and optional timeout.

    Output is read incrementally; the process group is killed as soon as
    either stream passes the cap. Bytes that are not valid UTF-8 are replaced.

    Args:
        cmd: Command list/str. Strings are split with ``shlex``.
        cwd: Working directory.
        env: Environment for the child (defaults to the current environment).
        max_output_bytes: Cap applied to stdout and stderr separately.
        timeout: Seconds before the process group is killed. ``None`` waits forever.
        check: Raise ``CalledProcessError`` on a non-zero exit code.

    Returns:
        CompletedProcess with ``stdout``/``stderr`` as text.

    Raises:
        OutputLimitExceeded: When stdout or stderr exceeds ``max_output_bytes``.
        subprocess.TimeoutExpired: When ``timeout`` elapses.
        subprocess.CalledProcessError: On non-zero exit when ``check`` is set.
        FileNotFoundError: When the executable does not exist.
    """
    argv = list(_flatten_cmd(cmd))
    logger.debug("Running %s (cwd=%s)", " ".join(argv), cwd)

    proc = subprocess.Popen(
        argv,
        cwd=str(cwd) if cwd is not None else None,
        env=env,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        **_popen_process_group_kwargs(),
    )
    buffers = {"stdout": bytearray(), "stderr": bytearray()}
    overflow: list[str] = []
    readers = [
        threading.Thread(
            target=_drain,
            args=(proc, name, sink, max_output_bytes, overflow),
            daemon=True,
        )
        for name, sink in buffers.items()
    ]
    for reader in readers:
        reader.start()

    timed_out = False
    try:
        proc.wait(timeout=timeout)
    except subprocess.TimeoutExpired:
        timed_out = True
        _terminate_process_group(proc)
    for reader in readers:
        reader.join()
    proc.wait()

    stdout = _decode(buffers["stdout"])
    stderr = _decode(buffers["stderr"])

    if overflow:
        raise OutputLimitExceeded(
            f"{overflow[0]} maxBuffer length exceeded ({max_output_bytes} bytes)",
            command=argv,
            returncode=proc.returncode,
        )
    if timed_out:
        raise subprocess.TimeoutExpired(argv, timeout, output=stdout, stderr=stderr)

    completed = subprocess.CompletedProcess(argv, proc.returncode, stdout=stdout, stderr=stderr)
    if check and completed.returncode != 0:
        raise subprocess.CalledProcessError(
            completed.returncode,
            argv,
            output=stdout,
            stderr=stderr,
        )
    return completed


__all__ = ["DEFAULT_MAX_OUTPUT_BYTES", "run_command"]
