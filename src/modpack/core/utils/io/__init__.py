"""File I/O helpers: directory creation, atomic writes and YAML reads."""
from __future__ import annotations

from .core import atomic_write, ensure_directory
from .yaml import iter_yaml_files, read_yaml

__all__ = ["ensure_directory", "atomic_write", "read_yaml", "iter_yaml_files"]
