from __future__ import annotations

import os
import sys
import textwrap
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'modpack' and tests/ importable for helpers
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from modpack.core.config import load_settings  # noqa: E402
from modpack.core.stdlib_logging import reset_stdlib_logging_for_tests  # noqa: E402
from modpack.data import clear_caches  # noqa: E402
from helpers.monorepo import build_monorepo, use_packer, write  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_modpack_env(monkeypatch):
    """Drop MODPACK_* overrides from the developer shell and reset logging/caches."""
    for key in list(os.environ):
        if key.startswith("MODPACK_"):
            monkeypatch.delenv(key, raising=False)
    clear_caches()
    yield
    reset_stdlib_logging_for_tests()
    clear_caches()


@pytest.fixture
def monorepo(tmp_path: Path) -> Path:
    """A small monorepo with every module category populated."""
    return build_monorepo(tmp_path / "repo")


@pytest.fixture
def settings(monorepo: Path):
    return load_settings(monorepo)


def _write_script(path: Path, body: str) -> Path:
    write(path, f"#!{sys.executable}\n" + textwrap.dedent(body))
    path.chmod(0o755)
    return path


@pytest.fixture
def fake_packer(tmp_path: Path) -> Path:
    """Executable standing in for repomix: writes the configured output file."""
    return _write_script(
        tmp_path / "bin" / "fake-repomix",
        """
        import json
        import sys
        from pathlib import Path

        config = json.loads(Path(sys.argv[sys.argv.index("--config") + 1]).read_text())
        out = Path(config["output"]["filePath"])
        out.write_text(config["output"]["headerText"] + "\\n" + "\\n".join(config["include"]))
        print(f"packed {len(config['include'])} patterns")
        """,
    )


@pytest.fixture
def failing_packer(tmp_path: Path) -> Path:
    return _write_script(
        tmp_path / "bin" / "broken-repomix",
        """
        import sys

        sys.stderr.write("boom: invalid config\\n")
        sys.exit(2)
        """,
    )


@pytest.fixture
def latin1_packer(tmp_path: Path) -> Path:
    """Packer that reports progress in Latin-1 rather than UTF-8."""
    return _write_script(
        tmp_path / "bin" / "latin1-repomix",
        """
        import sys

        sys.stdout.buffer.write(b"caf\\xe9 packed\\n")
        sys.stderr.buffer.write(b"warn: r\\xe9sum\\xe9\\n")
        """,
    )


@pytest.fixture
def packer_settings(monorepo: Path, fake_packer: Path):
    use_packer(monorepo, fake_packer)
    return load_settings(monorepo)
