"""YAML reading for config layers, schemas and compose manifests."""
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


def read_yaml(path: Path, default: Any = None) -> Any:
    """Parse ``path`` with ``yaml.safe_load``; an empty document yields ``default``.

    Raises:
        OSError: If the file cannot be read.
        yaml.YAMLError: If the content is not valid YAML.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return default if data is None else data


def iter_yaml_files(dir_path: Path) -> list[Path]:
    """``*.yaml`` and ``*.yml`` files in ``dir_path``, sorted by stem.

    When ``<name>.yaml`` and ``<name>.yml`` both exist only the ``.yaml`` file
    is returned. A missing directory yields ``[]``.
    """
    d = Path(dir_path)
    if not d.is_dir():
        return []
    by_stem = {p.stem: p for p in d.glob("*.yml")}
    by_stem.update({p.stem: p for p in d.glob("*.yaml")})
    return [by_stem[stem] for stem in sorted(by_stem)]


__all__ = ["read_yaml", "iter_yaml_files"]
