"""Target module formats.

Each format is a `Formatter` capability table; `get_formatter` looks one up by
name.
"""

from __future__ import annotations

from es2yui.errors import ConfigError
from es2yui.formatters.base import BuildOptions, Formatter, leave_as_is
from es2yui.formatters.replacement import NodePath, ReferencePath, Replacement
from es2yui.formatters.yui import YUI

FORMATTERS: dict[str, Formatter] = {YUI.name: YUI}


def get_formatter(name: str) -> Formatter:
    """Return the formatter registered under `name`."""
    try:
        return FORMATTERS[name]
    except KeyError:
        msg = f"unknown module format `{name}` (available: {', '.join(FORMATTERS)})"
        raise ConfigError(msg) from None


__all__ = [
    "FORMATTERS",
    "YUI",
    "BuildOptions",
    "Formatter",
    "NodePath",
    "ReferencePath",
    "Replacement",
    "get_formatter",
    "leave_as_is",
]
