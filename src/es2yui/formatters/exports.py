"""Export declaration rewriting.

Every `export` statement is first classified into one of a closed set of
forms, then each form maps to the statements that replace it:

    export function f() {}         FunctionExport
    export var a = 1, b = 2;       VariableExport
    export { a, b as c };          SpecifierListExport
    export { z } from "./other";   ReExport (forwarded by the prelude)
    export default function f() {} DefaultDeclarationExport
    export default <expression>;   DefaultExpressionExport

Declarations are kept so their names stay usable inside the module; the
`__es6_export__` calls registering them follow immediately after.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import singledispatch

from es2yui.errors import UnsupportedSyntaxError
from es2yui.formatters.base import export_call
from es2yui.nodes import (
    ClassDeclaration,
    ClassExpression,
    ExportDeclaration,
    ExportSpecifier,
    Expression,
    FunctionDeclaration,
    FunctionExpression,
    Identifier,
    Statement,
    VariableDeclaration,
)


@dataclass(frozen=True)
class FunctionExport:
    declaration: FunctionDeclaration


@dataclass(frozen=True)
class VariableExport:
    declaration: VariableDeclaration


@dataclass(frozen=True)
class SpecifierListExport:
    specifiers: tuple[ExportSpecifier, ...]


@dataclass(frozen=True)
class ReExport:
    node: ExportDeclaration


@dataclass(frozen=True)
class DefaultDeclarationExport:
    declaration: FunctionDeclaration | ClassDeclaration


@dataclass(frozen=True)
class DefaultExpressionExport:
    expression: Expression


ExportForm = (
    FunctionExport
    | VariableExport
    | SpecifierListExport
    | ReExport
    | DefaultDeclarationExport
    | DefaultExpressionExport
)


def _unexpected(declaration: object) -> UnsupportedSyntaxError:
    msg = (
        "unexpected export style, found a declaration of type: "
        f"{type(declaration).__name__}"
    )
    return UnsupportedSyntaxError(msg)


def classify_export(node: ExportDeclaration) -> ExportForm:
    """Classify an export statement.

    Raises:
        UnsupportedSyntaxError: For any shape outside the supported forms.
    """
    declaration = node.declaration

    if node.default:
        match declaration:
            case FunctionDeclaration(id=Identifier()) | ClassDeclaration(
                id=Identifier()
            ):
                return DefaultDeclarationExport(declaration)
            case FunctionDeclaration():
                # export default function () {}
                return DefaultExpressionExport(
                    FunctionExpression(
                        id=None,
                        params=declaration.params,
                        body=declaration.body,
                        is_async=declaration.is_async,
                        generator=declaration.generator,
                    )
                )
            case ClassDeclaration():
                return DefaultExpressionExport(
                    ClassExpression(
                        id=None,
                        super_class=declaration.super_class,
                        body=declaration.body,
                    )
                )
            case Expression():
                return DefaultExpressionExport(declaration)
        raise _unexpected(declaration)

    if node.source is not None:
        return ReExport(node)

    match declaration:
        case FunctionDeclaration(id=Identifier()):
            return FunctionExport(declaration)
        case VariableDeclaration(declarations=declarators):
            for declarator in declarators:
                if not isinstance(declarator.id, Identifier):
                    msg = (
                        "exported variables must be plain identifiers, found "
                        f"binding pattern `{declarator.id.text}`"
                    )
                    raise UnsupportedSyntaxError(msg)
            return VariableExport(declaration)
        case None:
            return SpecifierListExport(tuple(node.specifiers))
    raise _unexpected(declaration)


@singledispatch
def emit_export(form: ExportForm) -> list[Statement]:
    """Return the statements replacing an export of the given form."""
    raise _unexpected(form)


@emit_export.register
def _function(form: FunctionExport) -> list[Statement]:
    name = form.declaration.id
    return [form.declaration, export_call(name.name, name)]


@emit_export.register
def _variable(form: VariableExport) -> list[Statement]:
    statements: list[Statement] = [form.declaration]
    for declarator in form.declaration.declarations:
        statements.append(export_call(declarator.id.name, declarator.id))
    return statements


@emit_export.register
def _specifiers(form: SpecifierListExport) -> list[Statement]:
    return [export_call(spec.exported_name, spec.local) for spec in form.specifiers]


@emit_export.register
def _re_export(form: ReExport) -> list[Statement]:
    # Forwarded from the import table by the prelude
    return []


@emit_export.register
def _default_declaration(form: DefaultDeclarationExport) -> list[Statement]:
    return [form.declaration, export_call("default", form.declaration.id)]


@emit_export.register
def _default_expression(form: DefaultExpressionExport) -> list[Statement]:
    return [export_call("default", form.expression)]


__all__ = [
    "DefaultDeclarationExport",
    "DefaultExpressionExport",
    "ExportForm",
    "FunctionExport",
    "ReExport",
    "SpecifierListExport",
    "VariableExport",
    "classify_export",
    "emit_export",
]
