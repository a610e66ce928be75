"""Statement printing handlers.

This module registers all handlers for print_stmt.
Import this module to activate the handlers.
"""

from __future__ import annotations

from es2yui.nodes import (
    BlockStatement,
    ClassDeclaration,
    Comment,
    ExportDeclaration,
    ExpressionStatement,
    FunctionDeclaration,
    ImportDeclaration,
    ImportDefaultSpecifier,
    ImportNamespaceSpecifier,
    ReturnStatement,
    VariableDeclaration,
    Verbatim,
)
from es2yui.printer.context import PrintContext  # noqa: TC001
from es2yui.printer.expr_handlers import render_block, render_class, render_function
from es2yui.printer.expressions import print_expr
from es2yui.printer.statements import print_stmt


def render_variable_declaration(node: VariableDeclaration, ctx: PrintContext) -> str:
    """Render `kind a = 1, b` without the trailing semicolon."""
    parts = []
    for declarator in node.declarations:
        binding = print_expr(declarator.id, ctx)
        if declarator.init is not None:
            binding += f" = {print_expr(declarator.init, ctx)}"
        parts.append(binding)
    return f"{node.kind} {', '.join(parts)}"


@print_stmt.register
def _verbatim(node: Verbatim, ctx: PrintContext) -> None:
    ctx.emitter.text(node.text)


@print_stmt.register
def _comment(node: Comment, ctx: PrintContext) -> None:
    ctx.emitter.comment(node.text, node.column)


@print_stmt.register
def _expression(node: ExpressionStatement, ctx: PrintContext) -> None:
    ctx.emitter.text(print_expr(node.expression, ctx) + ";")


@print_stmt.register
def _block(node: BlockStatement, ctx: PrintContext) -> None:
    ctx.emitter.text(render_block(node, ctx))


@print_stmt.register
def _return(node: ReturnStatement, ctx: PrintContext) -> None:
    if node.argument is None:
        ctx.emitter.line("return;")
    else:
        ctx.emitter.text(f"return {print_expr(node.argument, ctx)};")


@print_stmt.register
def _variable(node: VariableDeclaration, ctx: PrintContext) -> None:
    ctx.emitter.text(render_variable_declaration(node, ctx) + ";")


@print_stmt.register
def _function(node: FunctionDeclaration, ctx: PrintContext) -> None:
    ctx.emitter.text(
        render_function(
            node.id,
            node.params,
            node.body,
            ctx,
            is_async=node.is_async,
            generator=node.generator,
        )
    )


@print_stmt.register
def _class(node: ClassDeclaration, ctx: PrintContext) -> None:
    ctx.emitter.text(render_class(node.id, node.super_class, node.body, ctx))


@print_stmt.register
def _import(node: ImportDeclaration, ctx: PrintContext) -> None:
    source = print_expr(node.source, ctx)
    if not node.specifiers:
        ctx.emitter.line(f"import {source};")
        return

    clauses = []
    named = []
    for spec in node.specifiers:
        match spec:
            case ImportDefaultSpecifier(local=local):
                clauses.append(local.name)
            case ImportNamespaceSpecifier(local=local):
                clauses.append(f"* as {local.name}")
            case _:
                if spec.imported.name == spec.local.name:
                    named.append(spec.local.name)
                else:
                    named.append(f"{spec.imported.name} as {spec.local.name}")
    if named:
        clauses.append("{ " + ", ".join(named) + " }")
    ctx.emitter.line(f"import {', '.join(clauses)} from {source};")


@print_stmt.register
def _export(node: ExportDeclaration, ctx: PrintContext) -> None:
    declaration = node.declaration
    if node.default:
        match declaration:
            case FunctionDeclaration() | ClassDeclaration():
                inner = ctx.nested()
                print_stmt(declaration, inner)
                ctx.emitter.text("export default " + inner.getvalue().strip())
            case _:
                ctx.emitter.text(f"export default {print_expr(declaration, ctx)};")
        return

    if declaration is not None:
        inner = ctx.nested()
        print_stmt(declaration, inner)
        ctx.emitter.text("export " + inner.getvalue().strip())
        return

    names = []
    for spec in node.specifiers:
        if spec.exported is None or spec.exported.name == spec.local.name:
            names.append(spec.local.name)
        else:
            names.append(f"{spec.local.name} as {spec.exported.name}")
    line = "export { " + ", ".join(names) + " }" if names else "export {}"
    if node.source is not None:
        line += f" from {print_expr(node.source, ctx)}"
    ctx.emitter.line(line + ";")
