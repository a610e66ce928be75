"""Printer context - shared state passed through printing."""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO

from es2yui.emitter import JSEmitter


@dataclass
class PrintContext:
    """State shared by all statement and expression printers."""

    emitter: JSEmitter

    def nested(self) -> PrintContext:
        """Return a context writing one level deeper into a fresh buffer."""
        width = self.emitter.indent_width
        return PrintContext(
            emitter=JSEmitter(StringIO(), indent=width, indent_width=width)
        )

    def getvalue(self) -> str:
        """Return everything written so far (StringIO-backed contexts only)."""
        stream = self.emitter.stream
        assert isinstance(stream, StringIO)
        return stream.getvalue()
