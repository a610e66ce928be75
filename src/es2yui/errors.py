"""Exceptions raised by es2yui.

Every error is fatal: a transpile run either produces all of its files or
raises one of these.
"""

from __future__ import annotations


class TranspileError(Exception):
    """Base class for all es2yui errors."""


class UnsupportedSyntaxError(TranspileError):
    """An import/export shape the YUI format cannot express."""


class ResolutionError(TranspileError, AssertionError):
    """Resolved module data is inconsistent with itself.

    This signals a bug in resolution or in a formatter rather than a problem
    with the user's code.
    """


class ParseError(TranspileError):
    """Module source could not be parsed."""

    def __init__(self, message: str, filename: str | None = None) -> None:
        self.filename = filename
        if filename:
            message = f"{filename}: {message}"
        super().__init__(message)


class UnresolvedImportError(TranspileError):
    """An import source does not name any known module."""


class ConfigError(TranspileError):
    """Invalid build configuration."""


__all__ = [
    "ConfigError",
    "ParseError",
    "ResolutionError",
    "TranspileError",
    "UnresolvedImportError",
    "UnsupportedSyntaxError",
]
