"""Shared utilities: deep merge, file I/O, subprocess execution, path resolution."""
from __future__ import annotations

from .merge import deep_merge, merge_arrays

__all__ = ["deep_merge", "merge_arrays"]
