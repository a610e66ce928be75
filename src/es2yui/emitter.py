"""JavaScript text emitter for es2yui.

Provides the JSEmitter class that writes printed JavaScript to a stream.
The printer walks the syntax tree and calls Emitter methods to produce text,
keeping tree traversal separate from layout.
"""

from __future__ import annotations

import textwrap
from typing import TextIO

import esprima


class JSEmitter:
    """Writes JavaScript source text.

    Handles:
    - Line and text emission with automatic indentation
    - Re-indentation of multi-line source kept verbatim
    - Comments and blank lines
    """

    def __init__(self, stream: TextIO, indent: int = 0, indent_width: int = 2) -> None:
        """Initialize the emitter.

        Args:
            stream: Output stream where JavaScript is written.
            indent: Starting indentation, in spaces.
            indent_width: Spaces added per nesting level.
        """
        self.stream = stream
        self.indent = indent
        self.indent_width = indent_width

    # =========================================================================
    # Core Emission
    # =========================================================================

    def line(self, code: str) -> None:
        """Emit a single line with proper indentation."""
        if code:
            self.stream.write(" " * self.indent + code + "\n")
        else:
            self.stream.write("\n")

    def text(self, code: str) -> None:
        """Emit multi-line code, preserving its relative indentation.

        The common leading whitespace of the block is removed first, so source
        sliced out of a deeper nesting level lands at the current indentation.
        Lines continuing a multi-line string or template literal belong to the
        literal's value and are written exactly as given.
        """
        for ln, in_literal in _layout_block(code):
            if in_literal:
                self.stream.write(ln + "\n")
            else:
                self.line(ln)

    def comment(self, text: str, column: int = 0) -> None:
        """Emit a comment sliced from source.

        Args:
            text: Comment source, including its `//` or `/* */` markers.
            column: Column the comment started at in its source line.
                Continuation lines move left by the same amount.
        """
        first, *rest = text.split("\n")
        self.line(first.rstrip())
        for ln in rest:
            shift = min(column, len(ln) - len(ln.lstrip()))
            self.line(ln[shift:].rstrip())

    def blank(self) -> None:
        """Emit an empty line."""
        self.line("")

    def indent_inc(self) -> None:
        """Increase indentation by one level."""
        self.indent += self.indent_width

    def indent_dec(self) -> None:
        """Decrease indentation by one level."""
        self.indent -= self.indent_width


def _literal_line_breaks(code: str) -> set[int]:
    """Return offsets of line breaks inside string or template literals."""
    if "`" not in code and "\\\n" not in code and "\\\r" not in code:
        return set()

    breaks: set[int] = set()
    for token in esprima.tokenize(code, {"range": True}):
        if token.type not in ("String", "Template"):
            continue
        start, end = token.range
        pos = code.find("\n", start, end)
        while pos != -1:
            breaks.add(pos)
            pos = code.find("\n", pos + 1, end)
    return breaks


def _layout_block(code: str) -> list[tuple[str, bool]]:
    """Split a block into (line, in_literal) pairs ready for re-indentation.

    Surrounding blank lines and trailing whitespace are dropped and the common
    indentation is removed. The first line of a sliced statement usually
    starts at its own column while the following lines keep their absolute
    indentation, so it is dedented separately from the rest. Lines flagged
    `in_literal` start inside a string or template literal and are left
    untouched, as is the end of any line that breaks inside one.
    """
    breaks = _literal_line_breaks(code)

    lines: list[tuple[str, bool]] = []
    offset = 0
    in_literal = False
    for raw in code.split("\n"):
        end = offset + len(raw)
        breaks_in_literal = end in breaks
        lines.append((raw if breaks_in_literal else raw.rstrip(), in_literal))
        in_literal = breaks_in_literal
        offset = end + 1

    while lines and not lines[-1][1] and not lines[-1][0]:
        lines.pop()
    while len(lines) > 1 and not lines[0][0].strip():
        lines.pop(0)
    if not lines:
        return [("", False)]

    plain = [i for i in range(1, len(lines)) if not lines[i][1]]
    if plain:
        dedented = textwrap.dedent("\n".join(lines[i][0] for i in plain))
        for i, ln in zip(plain, dedented.split("\n"), strict=True):
            lines[i] = (ln, False)
    lines[0] = (lines[0][0].lstrip(), False)
    return lines


__all__ = ["JSEmitter"]
