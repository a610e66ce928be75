"""Per-node rewrite pass (stage one).

Walks the top level of each module once and applies the formatter's hooks:
first to identifier references, then to statements. The result is a
RewrittenModule, the only input the formatter's `build` step accepts. By then
no import or export statement is left in the module body.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from es2yui.errors import ResolutionError
from es2yui.formatters.replacement import NodePath, ReferencePath
from es2yui.nodes import (
    AssignmentExpression,
    ExportDeclaration,
    ExpressionStatement,
    FunctionDeclaration,
    Identifier,
    ImportDeclaration,
    VariableDeclaration,
)

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from es2yui.formatters.base import Formatter, StatementHook
    from es2yui.formatters.replacement import Replacement
    from es2yui.modules import Module
    from es2yui.nodes import Statement

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RewrittenModule:
    """A module whose imports and exports have been rewritten, not yet wrapped."""

    module: Module

    @property
    def name(self) -> str:
        return self.module.name


def rewrite_module(module: Module, formatter: Formatter) -> RewrittenModule:
    """Apply the formatter's per-node hooks to one module.

    Raises:
        UnsupportedSyntaxError: From the formatter, for unsupported exports.
        ResolutionError: If an import or export statement survives the pass.
    """
    body = module.ast.program.body

    _rewrite_references(module, formatter)

    replacements: list[Replacement] = []
    for index, stmt in enumerate(body):
        hook = _statement_hook(module, stmt, formatter)
        if hook is None:
            continue
        replacement = hook(module, NodePath(body, index))
        if replacement is not None:
            replacements.append(replacement)

    for replacement in reversed(replacements):
        replacement.apply()

    leftover = [
        stmt for stmt in body if isinstance(stmt, (ImportDeclaration, ExportDeclaration))
    ]
    if leftover:
        msg = (
            f"{module.relative_path}: {type(leftover[0]).__name__} left after "
            f"rewriting with the {formatter.name} format"
        )
        raise ResolutionError(msg)

    logger.debug(
        "rewrote %s (%d statement replacements)", module.name, len(replacements)
    )
    return RewrittenModule(module)


def rewrite_modules(
    modules: Sequence[Module], formatter: Formatter
) -> list[RewrittenModule]:
    """Rewrite every module, keeping the given order."""
    return [rewrite_module(module, formatter) for module in modules]


def _statement_hook(
    module: Module, stmt: Statement, formatter: Formatter
) -> StatementHook | None:
    match stmt:
        case ImportDeclaration():
            return formatter.process_import_declaration
        case ExportDeclaration():
            return formatter.process_export_declaration
        case VariableDeclaration():
            return formatter.process_variable_declaration
        case FunctionDeclaration():
            return formatter.process_function_declaration
        case ExpressionStatement(
            expression=AssignmentExpression(left=Identifier(name=name))
        ) if name in _exported_bindings(module):
            return formatter.process_export_reassignment
    return None


def _exported_bindings(module: Module) -> set[str]:
    """Local names exported by the module itself (not re-exports)."""
    return {
        spec.from_
        for info in module.exports
        if info.source is None
        for spec in info.specifiers
        if spec.from_ is not None
    }


def _rewrite_references(module: Module, formatter: Formatter) -> None:
    imported = set(module.imports.names)
    exported = _exported_bindings(module)

    for path in _reference_paths(module.ast.program.body):
        name = path.node.name
        if name in imported:
            hook = formatter.imported_reference
        elif name in exported:
            hook = formatter.exported_reference
        else:
            hook = formatter.local_reference
        replacement = hook(module, path)
        if replacement is not None:
            path.replace(replacement)


def _reference_paths(body: list[Statement]) -> Iterator[ReferencePath]:
    """Yield identifier references held directly by top-level statements."""
    for stmt in body:
        match stmt:
            case ExpressionStatement(expression=AssignmentExpression() as assignment):
                if isinstance(assignment.right, Identifier):
                    yield ReferencePath(assignment, "right")
            case VariableDeclaration() | ExportDeclaration(
                declaration=VariableDeclaration()
            ):
                declaration = (
                    stmt.declaration if isinstance(stmt, ExportDeclaration) else stmt
                )
                for declarator in declaration.declarations:
                    if isinstance(declarator.init, Identifier):
                        yield ReferencePath(declarator, "init")
            case ExportDeclaration(default=True, declaration=Identifier()):
                yield ReferencePath(stmt, "declaration")


__all__ = ["RewrittenModule", "rewrite_module", "rewrite_modules"]
