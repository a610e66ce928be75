"""Formatter capability table.

A Formatter bundles every decision a target module format makes while
rewriting: per-statement hooks, per-reference hooks and the final assembly.
Hooks return None to leave a node exactly as written. A new format can start
from an existing one and override single entries:

    custom = dataclasses.replace(YUI, local_reference=my_hook)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from es2yui.nodes import (
    CallExpression,
    Expression,
    ExpressionStatement,
    Identifier,
    Literal,
    MemberExpression,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from es2yui.formatters.replacement import NodePath, ReferencePath, Replacement
    from es2yui.modules import Module
    from es2yui.nodes import File
    from es2yui.rewriter import RewrittenModule

    StatementHook = Callable[[Module, NodePath], Replacement | None]
    ReferenceHook = Callable[[Module, ReferencePath], Expression | None]

# Names visible inside every wrapped module factory
EXPORT_FUNCTION = "__es6_export__"
IMPORTS_TABLE = "__imports__"
EXPORTS_TABLE = "__exports__"

VERSION_MARKER = "@VERSION@"


@dataclass(frozen=True)
class BuildOptions:
    """Options for the final assembly step.

    Attributes:
        version: Version marker passed to the loader.
    """

    version: str = VERSION_MARKER


def leave_as_is(module: Module, path: NodePath | ReferencePath) -> None:
    """Hook that never rewrites anything."""
    return None


@dataclass(frozen=True)
class Formatter:
    """Per-format rewriting decisions."""

    name: str
    reference: Callable[[Module, Identifier | str], MemberExpression]
    process_import_declaration: StatementHook
    process_export_declaration: StatementHook
    build: Callable[[Sequence[RewrittenModule], BuildOptions], list[File]]
    process_variable_declaration: StatementHook = leave_as_is
    process_function_declaration: StatementHook = leave_as_is
    process_export_reassignment: StatementHook = leave_as_is
    local_reference: ReferenceHook = leave_as_is
    exported_reference: ReferenceHook = leave_as_is
    imported_reference: ReferenceHook = leave_as_is


def export_call(name: str, value: Expression) -> ExpressionStatement:
    """Build `__es6_export__("<name>", <value>);`."""
    return ExpressionStatement(
        CallExpression(Identifier(EXPORT_FUNCTION), [Literal(name), value])
    )


def import_table_entry(module_name: str, export_name: str | None = None) -> Expression:
    """Build `__imports__["<module>"]` or `__imports__["<module>"]["<name>"]`."""
    entry: Expression = MemberExpression(
        Identifier(IMPORTS_TABLE), Literal(module_name), computed=True
    )
    if export_name is not None:
        entry = MemberExpression(entry, Literal(export_name), computed=True)
    return entry
