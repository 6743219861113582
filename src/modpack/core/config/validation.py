"""Schema validation for the merged configuration.

Schemas are JSON Schema documents stored as YAML under ``modpack/data/schemas``.
"""
from __future__ import annotations

from typing import Any, Dict, List

from jsonschema import Draft202012Validator

from modpack.core.exceptions import ConfigurationError
from modpack.data import get_data_path, read_yaml


def load_schema(schema_name: str) -> Dict[str, Any]:
    """Load a bundled schema, appending ``.yaml`` if no extension is given.

    Raises:
        FileNotFoundError: If the schema file doesn't exist.
        ValueError: If the schema is not a YAML mapping.
    """
    lowered = schema_name.lower()
    if not (lowered.endswith(".yaml") or lowered.endswith(".yml")):
        schema_name = f"{schema_name}.yaml"

    schema_path = get_data_path("schemas", schema_name)
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema not found: {schema_path}")

    schema = read_yaml("schemas", schema_name)
    if not isinstance(schema, dict):
        raise ValueError(f"Schema must be a YAML mapping, got {type(schema).__name__}")
    return schema


def collect_errors(payload: Dict[str, Any], schema_name: str) -> List[str]:
    """Validate ``payload`` and return readable error messages (empty if valid)."""
    validator = Draft202012Validator(load_schema(schema_name))
    errors: List[str] = []
    for error in sorted(validator.iter_errors(payload), key=lambda e: str(list(e.path))):
        if error.path:
            path_str = ".".join(str(p) for p in error.path)
            errors.append(f"{path_str}: {error.message}")
        else:
            errors.append(error.message)
    return errors


def validate_payload(payload: Dict[str, Any], schema_name: str) -> None:
    """Validate ``payload`` against a bundled schema.

    Raises:
        ConfigurationError: If validation fails; ``context["errors"]`` lists each problem.
    """
    errors = collect_errors(payload, schema_name)
    if errors:
        summary = "; ".join(errors)
        raise ConfigurationError(
            f"Validation failed against schema '{schema_name}': {summary}",
            errors=errors,
        )


__all__ = ["load_schema", "collect_errors", "validate_payload"]
