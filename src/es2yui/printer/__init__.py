"""Printer package - renders syntax trees back to JavaScript source."""
# ruff: noqa: I001 - Import order is intentional (handlers must follow dispatchers)

from __future__ import annotations

from io import StringIO

# Import dispatchers first
from es2yui.printer.expressions import print_expr
from es2yui.printer.statements import print_stmt

# Import handlers to register them with the dispatchers
from es2yui.printer import expr_handlers as _expr_handlers  # noqa: F401
from es2yui.printer import stmt_handlers as _stmt_handlers  # noqa: F401

from es2yui.emitter import JSEmitter
from es2yui.nodes import File, Program
from es2yui.printer.context import PrintContext


def print_file(tree: File | Program, indent_width: int = 2) -> str:
    """Print a whole module tree as JavaScript source.

    Args:
        tree: A File (or bare Program) to print.
        indent_width: Spaces per nesting level.

    Returns:
        The JavaScript source, ending with a newline.
    """
    program = tree.program if isinstance(tree, File) else tree
    ctx = PrintContext(emitter=JSEmitter(StringIO(), indent_width=indent_width))
    for stmt in program.body:
        print_stmt(stmt, ctx)
    return ctx.getvalue()


__all__ = ["print_expr", "print_file", "print_stmt"]
