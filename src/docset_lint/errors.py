"""
Structured error types for docset-lint.

Every error raised by the linter extends ``DocsetError`` so callers get a
category, the offending path and line, and the chained cause.

Architecture:
    ::

        DocsetError (category, path, line, cause)
              │
              ├──► ConfigError        (CONFIG)  bad .docset-lint.yaml / options
              ├──► FrontMatterError   (PARSE)   malformed YAML front-matter
              └──► DocumentReadError  (IO)      unreadable or non-UTF-8 file

Guardrails:
    ❌ DON'T: Raise a bare Exception from a check
    ✅ DO: Raise the matching DocsetError subclass with path and line

    ❌ DON'T: Swallow the original exception
    ✅ DO: Pass it as cause= for error chaining

Examples:
    >>> error = FrontMatterError("unterminated front-matter", path="a.md", line=1)
    >>> error.category
    <ErrorCategory.PARSE: 'PARSE'>
    >>> error.location
    'a.md:1'
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error categories used for reporting and exit-code decisions."""

    CONFIG = "CONFIG"
    PARSE = "PARSE"
    IO = "IO"
    INTERNAL = "INTERNAL"


class DocsetError(Exception):
    """Base exception for all docset-lint errors.

    Subclasses set ``default_category``; instances carry the message,
    the file the error concerns and (where known) the 1-based line.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        line: int | None = None,
        category: ErrorCategory | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.path = path
        self.line = line
        self.category = category or self.default_category
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    @property
    def location(self) -> str:
        """``path:line`` (or just ``path``) for messages."""
        if self.path is None:
            return ""
        if self.line is None:
            return self.path
        return f"{self.path}:{self.line}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        if self.path is not None:
            result["path"] = self.path
        if self.line is not None:
            result["line"] = self.line
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __str__(self) -> str:
        if self.location:
            return f"{self.location}: {self.message}"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


class ConfigError(DocsetError):
    """Invalid configuration file, option or check selection."""

    default_category = ErrorCategory.CONFIG


class FrontMatterError(DocsetError):
    """YAML front-matter block that cannot be parsed."""

    default_category = ErrorCategory.PARSE


class DocumentReadError(DocsetError):
    """A document that cannot be read as UTF-8 text."""

    default_category = ErrorCategory.IO


__all__ = [
    "ErrorCategory",
    "DocsetError",
    "ConfigError",
    "FrontMatterError",
    "DocumentReadError",
]
