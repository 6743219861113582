"""Pack configuration handed to the external packer.

``PackConfig.to_dict()`` yields the packer's JSON config shape (camelCase
keys). Instances are immutable; builders return fresh ones.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class OutputOptions:
    file_path: str
    header_text: str
    style: str = "xml"
    remove_comments: bool = True
    remove_empty_lines: bool = True
    top_files_length: int = 3
    show_line_numbers: bool = False
    copy_to_clipboard: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filePath": self.file_path,
            "style": self.style,
            "headerText": self.header_text,
            "removeComments": self.remove_comments,
            "removeEmptyLines": self.remove_empty_lines,
            "topFilesLength": self.top_files_length,
            "showLineNumbers": self.show_line_numbers,
            "copyToClipboard": self.copy_to_clipboard,
        }


@dataclass(frozen=True)
class IgnoreOptions:
    use_gitignore: bool = True
    use_default_patterns: bool = True
    custom_patterns: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "useGitignore": self.use_gitignore,
            "useDefaultPatterns": self.use_default_patterns,
            "customPatterns": list(self.custom_patterns),
        }


@dataclass(frozen=True)
class SecurityOptions:
    enable_security_check: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {"enableSecurityCheck": self.enable_security_check}


@dataclass(frozen=True)
class PackConfig:
    output: OutputOptions
    include: Tuple[str, ...]
    ignore: IgnoreOptions = IgnoreOptions()
    security: SecurityOptions = SecurityOptions()

    @property
    def output_path(self) -> str:
        return self.output.file_path

    @property
    def header(self) -> str:
        return self.output.header_text

    def to_dict(self) -> Dict[str, Any]:
        return {
            "output": self.output.to_dict(),
            "include": list(self.include),
            "ignore": self.ignore.to_dict(),
            "security": self.security.to_dict(),
        }


__all__ = ["OutputOptions", "IgnoreOptions", "SecurityOptions", "PackConfig"]
