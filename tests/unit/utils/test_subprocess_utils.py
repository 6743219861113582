"""run_command: output cap, exit status, timeouts."""
from __future__ import annotations

import subprocess
import sys

import pytest

from modpack.core.exceptions import OutputLimitExceeded
from modpack.core.utils.subprocess import run_command


def _py(code: str) -> list:
    return [sys.executable, "-c", code]


def test_captures_text_output(tmp_path) -> None:
    result = run_command(_py("import os; print(os.getcwd())"), cwd=tmp_path)
    assert result.returncode == 0
    assert result.stdout.strip() == str(tmp_path.resolve())


def test_non_zero_exit_raises_when_checked() -> None:
    with pytest.raises(subprocess.CalledProcessError) as exc_info:
        run_command(_py("import sys; sys.stderr.write('bad'); sys.exit(3)"))
    assert exc_info.value.returncode == 3
    assert exc_info.value.stderr == "bad"


def test_non_zero_exit_returned_when_unchecked() -> None:
    result = run_command(_py("raise SystemExit(4)"), check=False)
    assert result.returncode == 4


def test_output_cap(tmp_path) -> None:
    with pytest.raises(OutputLimitExceeded, match="stdout maxBuffer length exceeded") as exc_info:
        run_command(_py("print('x' * 100)"), max_output_bytes=10)
    assert exc_info.value.context["command"][0] == sys.executable


def test_stderr_counts_separately() -> None:
    with pytest.raises(OutputLimitExceeded, match="stderr"):
        run_command(_py("import sys; sys.stderr.write('y' * 50)"), max_output_bytes=10)


def test_timeout_kills_process() -> None:
    with pytest.raises(subprocess.TimeoutExpired):
        run_command(_py("import time; time.sleep(30)"), timeout=0.5)


def test_string_commands_are_split() -> None:
    result = run_command(f'"{sys.executable}" -c "print(42)"')
    assert result.stdout.strip() == "42"


def test_invalid_utf8_is_replaced() -> None:
    result = run_command(_py("import sys; sys.stdout.buffer.write(b'caf\\xe9')"))
    assert result.stdout == "caf�"


def test_endless_writer_is_killed_at_the_cap() -> None:
    with pytest.raises(OutputLimitExceeded, match="stdout") as exc_info:
        run_command(_py("import sys\nwhile True: sys.stdout.write('x' * 4096)"), max_output_bytes=1024)
    assert exc_info.value.context["returncode"] != 0
