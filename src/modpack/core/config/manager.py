"""
modpack configuration management (YAML layers + environment overrides).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import yaml

from modpack.core.exceptions import ConfigurationError
from modpack.core.utils.io import iter_yaml_files, read_yaml
from modpack.core.utils.merge import deep_merge
from modpack.core.utils.paths import resolve_project_root
from modpack.data import get_data_path

from .validation import validate_payload

logger = logging.getLogger(__name__)

PROJECT_CONFIG_DIR = ".modpack"
ENV_PREFIX = "MODPACK_"
CONFIG_SCHEMA = "config.schema"

# Environment variables with the prefix that are not configuration keys.
_RESERVED_ENV_KEYS = {"PROJECT_ROOT"}


class ConfigManager:
    """Load, merge, and validate modpack configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: MODPACK_<section>__<key>
    2. Project config: <repo_root>/.modpack/config/*.yaml (alphabetical order)
    3. Bundled defaults: modpack.data/config/*.yaml (alphabetical order)
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self.repo_root = Path(repo_root) if repo_root else resolve_project_root()
        self.core_config_dir = get_data_path("config")
        self.project_config_dir = self.repo_root / PROJECT_CONFIG_DIR / "config"

    def _merge_directory(self, base: Dict[str, Any], directory: Path) -> Dict[str, Any]:
        cfg = dict(base)
        for path in iter_yaml_files(directory):
            try:
                data = read_yaml(path, default={}) or {}
            except (OSError, yaml.YAMLError) as exc:
                raise ConfigurationError(
                    f"Invalid YAML in {path}: {exc}",
                    context={"path": str(path)},
                ) from exc
            if not isinstance(data, dict):
                raise ConfigurationError(
                    f"Configuration file must contain a mapping: {path}",
                    context={"path": str(path)},
                )
            logger.debug("Merging configuration from %s", path)
            cfg = deep_merge(cfg, data)
        return cfg

    def _coerce_type(self, value: str) -> Any:
        s = value.strip()
        low = s.lower()
        if low in {"true", "false"}:
            return low == "true"
        if low in {"null", "none"}:
            return None
        if re.fullmatch(r"[-+]?\d+", s):
            return int(s)
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except json.JSONDecodeError:
                return s
        return s

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX):]
            if not raw or raw in _RESERVED_ENV_KEYS:
                continue
            segments = raw.split("__")
            if any(seg == "" for seg in segments):
                raise ConfigurationError(
                    f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.",
                    context={"key": key},
                )
            yield [seg.lower() for seg in segments], self._coerce_type(os.environ[key])

    def _apply_env_overrides(self, cfg: Dict[str, Any]) -> Dict[str, Any]:
        result = dict(cfg)
        for path, value in self._iter_env_overrides():
            override: Dict[str, Any] = {path[-1]: value}
            for seg in reversed(path[:-1]):
                override = {seg: override}
            logger.debug("Applying environment override %s", ".".join(path))
            result = deep_merge(result, override)
        return result

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Return the merged configuration mapping.

        Raises:
            ConfigurationError: On invalid YAML, malformed env keys or schema violations.
        """
        cfg = self._merge_directory({}, self.core_config_dir)
        cfg = self._merge_directory(cfg, self.project_config_dir)
        cfg = self._apply_env_overrides(cfg)
        if validate:
            validate_payload(cfg, CONFIG_SCHEMA)
        return cfg


__all__ = ["ConfigManager", "PROJECT_CONFIG_DIR", "ENV_PREFIX"]
