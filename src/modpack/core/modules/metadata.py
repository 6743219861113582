"""Module fact extraction from backend metadata files.

Backend modules declare themselves in a ``package-info.java`` file::

    /**
     * Booking management.
     * <p>
     * Handles reservations.
     */
    @ApplicationModule(
        displayName = "Buchung",
        type = ApplicationModule.Type.CLOSED,
        allowedDependencies = {"warenbestand::api", "common"}
    )
    package com.example.app.buchung;

Callers depend on ``MetadataExtractor`` only; ``RegexMetadataExtractor`` is
the default strategy and matches raw text rather than parsing Java.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple

from .models import BackendType, DependencyEdge

API_SUFFIX = "::api"
SHARED_TYPE = "OPEN"
BOOTSTRAP_MODULE = "bootstrap"

_PACKAGE_RE = re.compile(r"package\s+[\w.]+\.(\w+);")
_DISPLAY_NAME_RE = re.compile(r'displayName\s*=\s*"([^"]+)"')
_DOC_COMMENT_RE = re.compile(r"/\*\*\s*(.*?)\s*\*/", re.DOTALL)
_DOC_LINE_PREFIX_RE = re.compile(r"^\s*\*\s?")
_ALLOWED_DEPS_RE = re.compile(r"allowedDependencies\s*=\s*\{([^}]*)\}", re.DOTALL)
_QUOTED_RE = re.compile(r'"([^"]+)"')
_TYPE_RE = re.compile(r"type\s*=\s*[\w.]+\.Type\.(\w+)")

_SKIPPED_DOC_PREFIXES = ("@", "<p>", "</p>")


@dataclass(frozen=True)
class ModuleFacts:
    module_name: str
    display_name: str
    description: str
    dependencies: Tuple[DependencyEdge, ...]
    type_name: Optional[str] = None


class MetadataExtractor(Protocol):
    def extract(self, text: str) -> Optional[ModuleFacts]:
        """Return the module facts declared in ``text``, or None if it declares no module."""
        ...


def parse_dependency(token: str) -> DependencyEdge:
    """``"warenbestand::api"`` -> api edge on ``warenbestand``; anything else is a full edge."""
    if token.endswith(API_SUFFIX):
        return DependencyEdge(module=token[: -len(API_SUFFIX)], scope="api")
    return DependencyEdge(module=token, scope="full")


def parse_dependencies(text: str) -> List[DependencyEdge]:
    match = _ALLOWED_DEPS_RE.search(text)
    if not match:
        return []
    return [parse_dependency(token) for token in _QUOTED_RE.findall(match.group(1))]


def parse_description(text: str) -> str:
    match = _DOC_COMMENT_RE.search(text)
    if not match:
        return ""
    lines = []
    for raw in match.group(1).split("\n"):
        line = _DOC_LINE_PREFIX_RE.sub("", raw).strip()
        if line and not line.startswith(_SKIPPED_DOC_PREFIXES):
            lines.append(line)
    return " ".join(lines[:2]).strip()


class RegexMetadataExtractor:
    """Pattern-matching extractor over the raw file text."""

    def extract(self, text: str) -> Optional[ModuleFacts]:
        package = _PACKAGE_RE.search(text)
        if not package:
            return None
        module_name = package.group(1)

        display = _DISPLAY_NAME_RE.search(text)
        type_match = _TYPE_RE.search(text)
        return ModuleFacts(
            module_name=module_name,
            display_name=display.group(1) if display else module_name,
            description=parse_description(text),
            dependencies=tuple(parse_dependencies(text)),
            type_name=type_match.group(1) if type_match else None,
        )


def classify_module_type(facts: ModuleFacts) -> BackendType:
    if facts.type_name == SHARED_TYPE:
        return "shared"
    if facts.module_name == BOOTSTRAP_MODULE:
        return "bootstrap"
    return "bounded-context"


DEFAULT_EXTRACTOR: MetadataExtractor = RegexMetadataExtractor()


def extract_module_facts(text: str, extractor: Optional[MetadataExtractor] = None) -> Optional[ModuleFacts]:
    return (extractor or DEFAULT_EXTRACTOR).extract(text)


__all__ = [
    "API_SUFFIX",
    "ModuleFacts",
    "MetadataExtractor",
    "RegexMetadataExtractor",
    "DEFAULT_EXTRACTOR",
    "parse_dependency",
    "parse_dependencies",
    "parse_description",
    "classify_module_type",
    "extract_module_facts",
]
