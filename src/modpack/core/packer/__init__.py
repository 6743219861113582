"""Pack configs for the external packer: building, planning and running them."""
from __future__ import annotations

from .builder import (
    build_backend_config,
    build_dbmigration_config,
    build_frontend_config,
    build_full_frontend_config,
    build_full_infrastructure_config,
    build_infrastructure_config,
    output_path,
)
from .planner import PackPlan, PackRequest, plan_pack
from .runner import BatchResult, PackerRunner, RunResult, clean_outputs
from .spec import IgnoreOptions, OutputOptions, PackConfig, SecurityOptions

__all__ = [
    "PackConfig",
    "OutputOptions",
    "IgnoreOptions",
    "SecurityOptions",
    "output_path",
    "build_backend_config",
    "build_frontend_config",
    "build_full_frontend_config",
    "build_infrastructure_config",
    "build_full_infrastructure_config",
    "build_dbmigration_config",
    "PackRequest",
    "PackPlan",
    "plan_pack",
    "RunResult",
    "BatchResult",
    "PackerRunner",
    "clean_outputs",
]
