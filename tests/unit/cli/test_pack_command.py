"""`modpack pack` end to end through the dispatcher."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from modpack.cli._dispatcher import main as cli_main
from helpers.monorepo import use_packer


@pytest.fixture
def repo_with_packer(monorepo: Path, fake_packer: Path) -> Path:
    use_packer(monorepo, fake_packer)
    return monorepo


def test_single_target(repo_with_packer: Path, capsys) -> None:
    code = cli_main(["pack", "backend/buchung", "--deps", "--repo-root", str(repo_with_packer)])
    out = capsys.readouterr().out

    assert code == 0
    assert "Packing backend/buchung (deps: api)" in out
    assert "✓ Generated: .repomix/outputs/backend/buchung-deps-packed.txt" in out
    assert "Duration:" in out
    packed = repo_with_packer / ".repomix/outputs/backend/buchung-deps-packed.txt"
    assert "Dependencies (API: warenbestand; Full: common)" in packed.read_text(encoding="utf-8")


def test_deps_full_and_layers(repo_with_packer: Path, capsys) -> None:
    code = cli_main(
        ["pack", "buchung", "-d", "full", "-l", "domain,application", "--repo-root", str(repo_with_packer)]
    )
    assert code == 0
    assert (repo_with_packer / ".repomix/outputs/backend/buchung-deps-full-domain-application-packed.txt").exists()


def test_batch_summary(repo_with_packer: Path, capsys) -> None:
    code = cli_main(["pack", "--all-infrastructure", "--repo-root", str(repo_with_packer)])
    out = capsys.readouterr().out

    assert code == 0
    assert "✓ .repomix/outputs/infrastructure/postgres-packed.txt" in out
    assert "Completed 3/3 packs" in out


def test_dry_run_prints_configs(monorepo: Path, capsys) -> None:
    code = cli_main(["pack", "frontend/customer", "--dry-run", "--repo-root", str(monorepo)])
    out = capsys.readouterr().out

    assert code == 0
    assert "Generated config (dry-run):" in out
    assert '"headerText": "Frontend: Customer Module + Shared"' in out
    assert not (monorepo / ".repomix").exists()


def test_json_output(monorepo: Path, capsys) -> None:
    code = cli_main(["pack", "infrastructure", "--dry-run", "--json", "--repo-root", str(monorepo)])
    payload = json.loads(capsys.readouterr().out)

    assert code == 0
    assert payload["successCount"] == payload["totalCount"] == 1
    assert payload["results"][0]["outputPath"] == ".repomix/outputs/infrastructure/all-packed.txt"
    assert payload["results"][0]["config"]["output"]["headerText"].startswith("Infrastructure:")


def test_failed_pack_exits_non_zero(monorepo: Path, failing_packer: Path, capsys) -> None:
    use_packer(monorepo, failing_packer)
    code = cli_main(["pack", "backend/common", "--repo-root", str(monorepo)])
    out = capsys.readouterr().out

    assert code == 1
    assert "✗ Failed: Command failed (exit 2)" in out


def test_unknown_target_lists_alternatives(monorepo: Path, capsys) -> None:
    code = cli_main(["pack", "backend/ghost", "--repo-root", str(monorepo)])
    captured = capsys.readouterr()

    assert code == 1
    assert "Backend module not found: ghost" in captured.err
    assert "Available targets:" in captured.out
    assert "  backend/buchung" in captured.out
    assert "  infrastructure/authentik" in captured.out


def test_missing_target(monorepo: Path, capsys) -> None:
    code = cli_main(["pack", "--repo-root", str(monorepo)])
    captured = capsys.readouterr()

    assert code == 1
    assert "No target specified" in captured.err
    assert "backend/dbmigration" in captured.out


def test_unknown_target_json(monorepo: Path, capsys) -> None:
    code = cli_main(["pack", "ghost", "--json", "--repo-root", str(monorepo)])
    captured = capsys.readouterr()

    assert code == 1
    assert captured.out == ""
    error = json.loads(captured.err)
    assert error["error"] == "unknown_target"
    assert error["context"]["target"] == "ghost"
    assert error["code"] == "UnknownTargetError"
    assert "backend/buchung" in error["context"]["available"]


def test_invalid_layer_rejected_by_parser(monorepo: Path, capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli_main(["pack", "backend/buchung", "--layers", "ui", "--repo-root", str(monorepo)])
    assert exc_info.value.code == 2
    assert "invalid layer(s): ui" in capsys.readouterr().err
