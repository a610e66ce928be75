"""Statement printing dispatcher.

This module contains only the singledispatch function with no handlers.
Handlers are registered in stmt_handlers.py which must be imported
to activate them.
"""

from __future__ import annotations

from functools import singledispatch
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from es2yui.nodes import Node
    from es2yui.printer.context import PrintContext


@singledispatch
def print_stmt(node: Node, ctx: PrintContext) -> None:
    """Print a statement through the context's emitter."""
    msg = f"Statement not printable: {type(node).__name__}"
    raise NotImplementedError(msg)
