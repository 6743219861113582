"""Backend bounded-context discovery from per-module metadata files."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

from modpack.core.config import Settings

from .metadata import MetadataExtractor, classify_module_type, extract_module_facts
from .models import LAYERS, BackendModule

logger = logging.getLogger(__name__)


def layer_patterns(module_name: str, settings: Settings) -> Dict[str, str]:
    """Layer globs rooted at the module, relative to the backend source root."""
    ext = settings.backend.source_extension
    return {layer: f"{module_name}/core/{layer}/**/*.{ext}" for layer in LAYERS}


def parse_package_info(
    path: Path,
    settings: Settings,
    extractor: Optional[MetadataExtractor] = None,
) -> Optional[BackendModule]:
    """Parse one metadata file into a backend module.

    Returns None when the file declares no package or cannot be read.
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Error parsing %s: %s", path, exc)
        return None

    facts = extract_module_facts(content, extractor)
    if facts is None:
        logger.debug("No package declaration in %s; skipping", path)
        return None

    return BackendModule(
        name=facts.module_name,
        display_name=facts.display_name,
        description=facts.description,
        path=f"{settings.backend.source_root}/{facts.module_name}",
        dependencies=facts.dependencies,
        type=classify_module_type(facts),
        layers=layer_patterns(facts.module_name, settings),
    )


def discover_backend_modules(
    settings: Settings,
    extractor: Optional[MetadataExtractor] = None,
) -> List[BackendModule]:
    """Discover every ``<source_root>/*/<metadata_file>`` module, sorted by name."""
    backend_root = settings.resolve(settings.backend.source_root)
    files = sorted(backend_root.glob(f"*/{settings.backend.metadata_file}"))
    logger.debug("Found %d metadata files under %s", len(files), backend_root)

    modules: List[BackendModule] = []
    for file in files:
        module = parse_package_info(file, settings, extractor)
        if module is not None:
            modules.append(module)
    return sorted(modules, key=lambda m: m.name)


__all__ = ["layer_patterns", "parse_package_info", "discover_backend_modules"]
