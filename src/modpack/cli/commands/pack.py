"""
modpack pack command.

SUMMARY: Pack a module or group of modules

Targets are ``backend/<name>`` (or a bare backend module name),
``backend/dbmigration``, ``frontend/<name>``, ``frontend``,
``infrastructure/<name>`` and ``infrastructure``. The ``--all*`` flags take
precedence over a target.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Dict, List

from modpack.cli import (
    OutputFormatter,
    add_deps_flag,
    add_dry_run_flag,
    add_layers_flag,
    add_standard_flags,
    add_verbose_flag,
    format_json,
    load_cli_settings,
    print_failure,
    print_success,
)
from modpack.core.exceptions import (
    InvalidLayerError,
    MissingTargetError,
    ModpackError,
    UnknownTargetError,
)
from modpack.core.modules import discover_catalog
from modpack.core.packer import BatchResult, PackerRunner, PackRequest, plan_pack

SUMMARY = "Pack a module or group of modules"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "target",
        nargs="?",
        help="Module to pack (e.g. backend/orders, frontend/customer, infrastructure)",
    )
    add_deps_flag(parser)
    add_layers_flag(parser)
    parser.add_argument("--all", action="store_true", help="Pack all modules")
    parser.add_argument("--all-backend", action="store_true", help="Pack all backend modules")
    parser.add_argument("--all-frontend", action="store_true", help="Pack all frontend modules")
    parser.add_argument(
        "--all-infrastructure",
        action="store_true",
        help="Pack all infrastructure modules",
    )
    add_dry_run_flag(parser)
    add_verbose_flag(parser)
    add_standard_flags(parser)


def _request_from_args(args: argparse.Namespace) -> PackRequest:
    return PackRequest(
        target=args.target,
        deps_mode=args.deps or "none",
        layers=tuple(args.layers or ()),
        all=args.all,
        all_backend=args.all_backend,
        all_frontend=args.all_frontend,
        all_infrastructure=args.all_infrastructure,
    )


def _print_available(formatter: OutputFormatter, targets: List[str]) -> None:
    formatter.text("")
    formatter.text("Available targets:")
    for target in targets:
        formatter.text(f"  {target}")


def _report_json(formatter: OutputFormatter, title: str, batch: BatchResult, dry_run: bool) -> None:
    results: List[Dict[str, Any]] = []
    for result in batch.results:
        entry = result.to_dict()
        if dry_run:
            entry["config"] = result.config.to_dict()
        results.append(entry)
    formatter.json_output(
        {
            "title": title,
            "dryRun": dry_run,
            "results": results,
            "successCount": batch.success_count,
            "totalCount": batch.total_count,
        }
    )


def _report_text(formatter: OutputFormatter, batch: BatchResult, *, dry_run: bool, verbose: bool) -> None:
    for result in batch.results:
        if dry_run:
            formatter.text("Generated config (dry-run):")
            formatter.text(format_json(result.config.to_dict()))
        elif verbose:
            formatter.text(f"Running: {' '.join(result.command)}")
            if result.stdout:
                formatter.text(result.stdout.rstrip())

    if batch.total_count == 1:
        result = batch.results[0]
        if result.success:
            print_success(f"Generated: {result.output_path}")
            formatter.text(f"  Duration: {result.duration_ms}ms")
        else:
            print_failure(f"Failed: {result.error}")
        return

    for result in batch.results:
        if result.success:
            print_success(str(result.output_path))
        else:
            print_failure(str(result.error))
    formatter.text("")
    formatter.text(f"Completed {batch.success_count}/{batch.total_count} packs")


def main(args: argparse.Namespace) -> int:
    """Plan the requested packs and run the packer for each."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        settings = load_cli_settings(args)
        catalog = discover_catalog(settings)
        plan = plan_pack(catalog, settings, _request_from_args(args))
    except UnknownTargetError as e:
        formatter.error(e, error_code="unknown_target")
        _print_available(formatter, e.available)
        return 1
    except MissingTargetError as e:
        formatter.error(e, error_code="missing_target")
        _print_available(formatter, list(e.context.get("available", [])))
        return 1
    except InvalidLayerError as e:
        formatter.error(e, error_code="invalid_layer")
        return 1
    except ModpackError as e:
        formatter.error(e, error_code="pack_error")
        return 1

    formatter.text(f"\n{plan.title}\n")
    if not plan.configs:
        formatter.text("No configs to run.")
        if formatter.json_mode:
            _report_json(formatter, plan.title, BatchResult(), args.dry_run)
        return 0

    runner = PackerRunner(settings)
    batch = runner.run_many(plan.configs, dry_run=args.dry_run, verbose=args.verbose)

    if formatter.json_mode:
        _report_json(formatter, plan.title, batch, args.dry_run)
    else:
        _report_text(formatter, batch, dry_run=args.dry_run, verbose=args.verbose)

    return 0 if batch.ok else 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
