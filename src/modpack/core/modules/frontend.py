"""Frontend feature-folder discovery."""
from __future__ import annotations

import logging
from typing import List

from modpack.core.config import FrontendModuleMeta, Settings

from .models import FrontendModule

logger = logging.getLogger(__name__)


def _metadata_for(name: str, settings: Settings) -> FrontendModuleMeta:
    known = settings.frontend.modules.get(name)
    if known is not None:
        return known
    return FrontendModuleMeta(
        display_name=name[:1].upper() + name[1:],
        description=f"{name} module",
    )


def discover_frontend_modules(settings: Settings) -> List[FrontendModule]:
    """One module per immediate subdirectory of ``<source_root>/<modules_dir>``.

    A missing folder is logged and yields an empty list.
    """
    fe = settings.frontend
    modules_path = settings.resolve(fe.source_root) / fe.modules_dir
    modules: List[FrontendModule] = []

    try:
        entries = sorted(modules_path.iterdir())
    except OSError as exc:
        logger.error("Error discovering frontend modules in %s: %s", modules_path, exc)
        return modules

    for entry in entries:
        if not entry.is_dir():
            continue
        meta = _metadata_for(entry.name, settings)
        modules.append(
            FrontendModule(
                name=entry.name,
                display_name=meta.display_name,
                description=meta.description,
                path=f"{fe.source_root}/{fe.modules_dir}/{entry.name}",
                include_shared=True,
            )
        )
    return sorted(modules, key=lambda m: m.name)


def shared_paths(settings: Settings) -> List[str]:
    src = settings.frontend.source_root
    return [
        f"{src}/shared/**/*.tsx",
        f"{src}/shared/**/*.ts",
        f"{src}/App.tsx",
        f"{src}/main.tsx",
    ]


def config_paths(settings: Settings) -> List[str]:
    root = settings.frontend.root
    return [
        f"{root}/package.json",
        f"{root}/vite.config.*",
        f"{root}/tailwind.config.*",
    ]


__all__ = ["discover_frontend_modules", "shared_paths", "config_paths"]
