"""Expression printing handlers.

This module registers all handlers for print_expr.
Import this module to activate the handlers.
"""

from __future__ import annotations

import json

from es2yui.nodes import (
    ArrayExpression,
    AssignmentExpression,
    BlockStatement,
    CallExpression,
    ClassExpression,
    FunctionExpression,
    Identifier,
    Literal,
    MemberExpression,
    Node,
    ObjectExpression,
    Verbatim,
)
from es2yui.printer.context import PrintContext  # noqa: TC001
from es2yui.printer.expressions import print_expr
from es2yui.printer.statements import print_stmt


def render_block(block: BlockStatement, ctx: PrintContext) -> str:
    """Render a block as `{ ... }` with its statements one level deeper."""
    if not block.body:
        return "{}"
    inner = ctx.nested()
    for stmt in block.body:
        print_stmt(stmt, inner)
    return "{\n" + inner.getvalue().rstrip("\n") + "\n}"


def render_function(
    keyword_id: Identifier | None,
    params: list,
    body: BlockStatement,
    ctx: PrintContext,
    *,
    is_async: bool = False,
    generator: bool = False,
) -> str:
    """Render a function declaration or expression."""
    head = "async function" if is_async else "function"
    if generator:
        head += "*"
    if keyword_id is not None:
        head += f" {keyword_id.name}"
    args = ", ".join(print_expr(p, ctx) for p in params)
    return f"{head}({args}) {render_block(body, ctx)}"


def render_class(
    class_id: Identifier | None,
    super_class: Node | None,
    body: Verbatim,
    ctx: PrintContext,
) -> str:
    """Render a class declaration or expression; the body is kept verbatim."""
    head = "class"
    if class_id is not None:
        head += f" {class_id.name}"
    if super_class is not None:
        head += f" extends {print_expr(super_class, ctx)}"
    return f"{head} {body.text}"


def render_literal(value: object) -> str:
    """Render a Python value as a JavaScript literal."""
    match value:
        case None:
            return "null"
        case bool():
            return "true" if value else "false"
        case str():
            return json.dumps(value, ensure_ascii=False)
        case _:
            return repr(value)


@print_expr.register
def _verbatim(node: Verbatim, ctx: PrintContext) -> str:
    return node.text


@print_expr.register
def _identifier(node: Identifier, ctx: PrintContext) -> str:
    return node.name


@print_expr.register
def _literal(node: Literal, ctx: PrintContext) -> str:
    return render_literal(node.value)


@print_expr.register
def _member(node: MemberExpression, ctx: PrintContext) -> str:
    obj = print_expr(node.object, ctx)
    if isinstance(node.object, (FunctionExpression, ClassExpression)):
        obj = f"({obj})"
    if node.computed:
        return f"{obj}[{print_expr(node.property, ctx)}]"
    return f"{obj}.{print_expr(node.property, ctx)}"


@print_expr.register
def _call(node: CallExpression, ctx: PrintContext) -> str:
    callee = print_expr(node.callee, ctx)
    if isinstance(node.callee, (FunctionExpression, ClassExpression)):
        callee = f"({callee})"
    args = ", ".join(print_expr(arg, ctx) for arg in node.arguments)
    return f"{callee}({args})"


@print_expr.register
def _assignment(node: AssignmentExpression, ctx: PrintContext) -> str:
    left = print_expr(node.left, ctx)
    right = print_expr(node.right, ctx)
    return f"{left} {node.operator} {right}"


@print_expr.register
def _array(node: ArrayExpression, ctx: PrintContext) -> str:
    return "[" + ", ".join(print_expr(el, ctx) for el in node.elements) + "]"


@print_expr.register
def _object(node: ObjectExpression, ctx: PrintContext) -> str:
    if not node.properties:
        return "{}"
    props = ", ".join(
        f"{print_expr(prop.key, ctx)}: {print_expr(prop.value, ctx)}"
        for prop in node.properties
    )
    return "{" + props + "}"


@print_expr.register
def _function(node: FunctionExpression, ctx: PrintContext) -> str:
    return render_function(
        node.id,
        node.params,
        node.body,
        ctx,
        is_async=node.is_async,
        generator=node.generator,
    )


@print_expr.register
def _class(node: ClassExpression, ctx: PrintContext) -> str:
    return render_class(node.id, node.super_class, node.body, ctx)
