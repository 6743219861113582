from __future__ import annotations

from typing import Any, Dict, Mapping, Sequence


class ModpackError(Exception):
    """Base exception for modpack."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ConfigurationError(ModpackError, ValueError):
    """Raised when the merged configuration is missing or invalid."""

    def __init__(
        self,
        message: str = "",
        *,
        errors: Sequence[str] | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if errors:
            ctx["errors"] = list(errors)
        ModpackError.__init__(self, message, context=ctx)
        ValueError.__init__(self, message)


class ProjectRootError(ModpackError, ValueError):
    """Raised when the project root cannot be resolved."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ModpackError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class InvalidLayerError(ModpackError, ValueError):
    """Raised when a layer filter names something other than domain/application/adapter."""

    def __init__(self, layer: str, *, valid: Sequence[str]) -> None:
        message = f"Invalid layer: {layer} (expected one of: {', '.join(valid)})"
        ModpackError.__init__(self, message, context={"layer": layer, "valid": list(valid)})
        ValueError.__init__(self, message)


class UnknownTargetError(ModpackError, LookupError):
    """Raised when a pack target or module name does not match anything discovered."""

    def __init__(
        self,
        message: str,
        *,
        target: str,
        available: Sequence[str] = (),
    ) -> None:
        ModpackError.__init__(
            self,
            message,
            context={"target": target, "available": list(available)},
        )
        LookupError.__init__(self, message)
        self.target = target
        self.available = list(available)


class MissingTargetError(ModpackError):
    """Raised when `pack` is invoked without a target or an --all flag."""


class PackerError(ModpackError, RuntimeError):
    """Raised when the external packer cannot be run or reports failure."""

    def __init__(
        self,
        message: str = "",
        *,
        command: Sequence[str] | None = None,
        returncode: int | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if command:
            ctx["command"] = list(command)
        if returncode is not None:
            ctx["returncode"] = returncode
        ModpackError.__init__(self, message, context=ctx)
        RuntimeError.__init__(self, message)


class OutputLimitExceeded(PackerError):
    """Raised when a subprocess writes more than the configured output cap."""


__all__ = [
    "ModpackError",
    "ConfigurationError",
    "ProjectRootError",
    "InvalidLayerError",
    "UnknownTargetError",
    "MissingTargetError",
    "PackerError",
    "OutputLimitExceeded",
]
