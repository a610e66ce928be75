"""ES module front end.

Parses module source with esprima and converts the top level into es2yui
syntax tree nodes. Only the parts the formatter inspects become structural
nodes: import/export declarations, function, class and variable declarations,
and assignments to plain identifiers. Everything else (function bodies,
initializers, unrelated statements) is kept as `Verbatim` source text sliced
from the original by node ranges. Comments between top-level statements
become `Comment` nodes.
"""

from __future__ import annotations

from typing import Any

import esprima
from esprima.error_handler import Error as EsprimaError

from es2yui.errors import ParseError, UnsupportedSyntaxError
from es2yui.nodes import (
    AssignmentExpression,
    BlockStatement,
    ClassDeclaration,
    Comment,
    ExportDeclaration,
    ExportSpecifier,
    Expression,
    ExpressionStatement,
    FunctionDeclaration,
    Identifier,
    ImportDeclaration,
    ImportDefaultSpecifier,
    ImportNamespaceSpecifier,
    ImportSpecifier,
    Literal,
    Program,
    Statement,
    VariableDeclaration,
    VariableDeclarator,
    Verbatim,
)


def parse_module(source: str, filename: str | None = None) -> Program:
    """Parse ES module source into a Program.

    Comments between top-level statements (license banners included) are
    kept as `Comment` statements in source order.

    Args:
        source: Module source text.
        filename: Used in error messages only.

    Returns:
        The module's Program node.

    Raises:
        ParseError: On a syntax error.
        UnsupportedSyntaxError: On `export * from`.
    """
    try:
        tree = esprima.parseModule(source, {"range": True, "comment": True})
    except EsprimaError as e:
        raise ParseError(str(e), filename) from e

    converter = _Converter(source, filename)
    ranges = [node.range for node in tree.body]
    entries: list[tuple[int, Statement]] = [
        (node.range[0], converter.statement(node)) for node in tree.body
    ]
    # Comments inside a statement travel with its source text, if at all
    for comment in tree.comments:
        start = comment.range[0]
        if not any(lo <= start < hi for lo, hi in ranges):
            entries.append((start, converter.comment(comment)))
    entries.sort(key=lambda entry: entry[0])
    return Program(body=[stmt for _, stmt in entries])


class _Converter:
    """Converts esprima nodes into es2yui nodes."""

    def __init__(self, source: str, filename: str | None) -> None:
        self.source = source
        self.filename = filename

    def text(self, node: Any) -> str:
        start, end = node.range
        return self.source[start:end]

    def comment(self, node: Any) -> Comment:
        start = node.range[0]
        column = start - (self.source.rfind("\n", 0, start) + 1)
        return Comment(self.text(node), column)

    # =========================================================================
    # Statements
    # =========================================================================

    def statement(self, node: Any) -> Statement:
        match node.type:
            case "ImportDeclaration":
                return self.import_declaration(node)
            case "ExportNamedDeclaration":
                return self.export_named(node)
            case "ExportDefaultDeclaration":
                return self.export_default(node)
            case "ExportAllDeclaration":
                where = f" in {self.filename}" if self.filename else ""
                msg = f"`export * from` is not supported{where}"
                raise UnsupportedSyntaxError(msg)
            case "FunctionDeclaration":
                return self.function(node)
            case "ClassDeclaration":
                return self.class_declaration(node)
            case "VariableDeclaration":
                return self.variable_declaration(node)
            case "ExpressionStatement" if (
                node.expression.type == "AssignmentExpression"
                and node.expression.left.type == "Identifier"
            ):
                assignment = node.expression
                return ExpressionStatement(
                    AssignmentExpression(
                        operator=assignment.operator,
                        left=Identifier(assignment.left.name),
                        right=self.expression(assignment.right),
                    )
                )
            case _:
                return Verbatim(self.text(node))

    def import_declaration(self, node: Any) -> ImportDeclaration:
        specifiers: list[
            ImportSpecifier | ImportDefaultSpecifier | ImportNamespaceSpecifier
        ] = []
        for spec in node.specifiers:
            local = Identifier(spec.local.name)
            match spec.type:
                case "ImportDefaultSpecifier":
                    specifiers.append(ImportDefaultSpecifier(local=local))
                case "ImportNamespaceSpecifier":
                    specifiers.append(ImportNamespaceSpecifier(local=local))
                case _:
                    specifiers.append(
                        ImportSpecifier(
                            local=local, imported=Identifier(spec.imported.name)
                        )
                    )
        return ImportDeclaration(
            specifiers=specifiers, source=Literal(node.source.value)
        )

    def export_named(self, node: Any) -> ExportDeclaration:
        if node.declaration is not None:
            return ExportDeclaration(
                default=False, declaration=self.statement(node.declaration)
            )

        specifiers = []
        for spec in node.specifiers:
            local = Identifier(spec.local.name)
            exported = None
            if spec.exported is not None and spec.exported.name != local.name:
                exported = Identifier(spec.exported.name)
            specifiers.append(ExportSpecifier(local=local, exported=exported))
        source = Literal(node.source.value) if node.source is not None else None
        return ExportDeclaration(default=False, specifiers=specifiers, source=source)

    def export_default(self, node: Any) -> ExportDeclaration:
        declaration = node.declaration
        match declaration.type:
            case "FunctionDeclaration":
                converted = self.function(declaration)
            case "ClassDeclaration":
                converted = self.class_declaration(declaration)
            case _:
                converted = self.expression(declaration)
        return ExportDeclaration(default=True, declaration=converted)

    def function(self, node: Any) -> FunctionDeclaration:
        return FunctionDeclaration(
            id=Identifier(node.id.name) if node.id is not None else None,
            params=[self.expression(p) for p in node.params],
            body=self.block(node.body),
            is_async=self.text(node).startswith("async"),
            generator=bool(node.generator),
        )

    def class_declaration(self, node: Any) -> ClassDeclaration:
        super_class = None
        if node.superClass is not None:
            super_class = self.expression(node.superClass)
        return ClassDeclaration(
            id=Identifier(node.id.name) if node.id is not None else None,
            super_class=super_class,
            body=Verbatim(self.text(node.body)),
        )

    def variable_declaration(self, node: Any) -> VariableDeclaration:
        declarators = []
        for decl in node.declarations:
            if decl.id.type == "Identifier":
                binding: Identifier | Verbatim = Identifier(decl.id.name)
            else:
                binding = Verbatim(self.text(decl.id))
            init = self.expression(decl.init) if decl.init is not None else None
            declarators.append(VariableDeclarator(id=binding, init=init))
        return VariableDeclaration(kind=node.kind, declarations=declarators)

    def block(self, node: Any) -> BlockStatement:
        """Keep a block's statements as one verbatim chunk."""
        start, end = node.range
        inner = self.source[start + 1 : end - 1]
        return BlockStatement(body=[Verbatim(inner)] if inner.strip() else [])

    # =========================================================================
    # Expressions
    # =========================================================================

    def expression(self, node: Any) -> Expression:
        match node.type:
            case "Identifier":
                return Identifier(node.name)
            case "SequenceExpression":
                # Keep the comma operator from splitting call arguments
                return Verbatim(f"({self.text(node)})")
            case _:
                return Verbatim(self.text(node))


__all__ = ["parse_module"]
