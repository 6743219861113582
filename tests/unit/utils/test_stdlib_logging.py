"""Root logger configuration for the CLI."""
from __future__ import annotations

import logging
from pathlib import Path

import pytest

from modpack.core.exceptions import ConfigurationError
from modpack.core.stdlib_logging import (
    configure_stdlib_logging,
    reset_stdlib_logging_for_tests,
    suppress_lastresort_in_json_mode,
)


def test_stderr_handler_uses_level_and_format(capsys) -> None:
    configure_stdlib_logging(level="INFO")
    logging.getLogger("modpack.test").info("hello")
    logging.getLogger("modpack.test").debug("hidden")

    err = capsys.readouterr().err
    assert "INFO modpack.test: hello" in err
    assert "hidden" not in err


def test_reconfiguring_replaces_handler() -> None:
    root = logging.getLogger()
    before = len(root.handlers)
    configure_stdlib_logging(level="INFO")
    configure_stdlib_logging(level="DEBUG")
    assert len(root.handlers) == before + 1


def test_file_handler(tmp_path: Path, capsys) -> None:
    log_file = tmp_path / "logs" / "modpack.log"
    configure_stdlib_logging(level="WARNING", log_path=log_file)
    logging.getLogger("modpack.test").warning("to file")
    reset_stdlib_logging_for_tests()

    assert "to file" in log_file.read_text(encoding="utf-8")
    assert "to file" not in capsys.readouterr().err


def test_json_mode_null_handler_only_when_unconfigured(monkeypatch) -> None:
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    suppress_lastresort_in_json_mode()
    assert any(isinstance(h, logging.NullHandler) for h in root.handlers)


def test_unwritable_log_file_is_a_configuration_error(tmp_path: Path) -> None:
    blocker = tmp_path / "logs"
    blocker.write_text("a file, not a directory", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Cannot open log file"):
        configure_stdlib_logging(log_path=blocker / "modpack.log")
