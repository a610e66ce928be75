"""Expression printing dispatcher.

This module contains only the singledispatch function with no handlers.
Handlers are registered in expr_handlers.py which must be imported
to activate them.
"""

from __future__ import annotations

from functools import singledispatch
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from es2yui.nodes import Node
    from es2yui.printer.context import PrintContext


@singledispatch
def print_expr(node: Node, ctx: PrintContext) -> str:
    """Print an expression, returning its (possibly multi-line) source."""
    msg = f"Expression not printable: {type(node).__name__}"
    raise NotImplementedError(msg)
