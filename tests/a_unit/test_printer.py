"""Unit tests for the JavaScript emitter and printer."""

from __future__ import annotations

from io import StringIO

import pytest

from es2yui.emitter import JSEmitter
from es2yui.nodes import (
    ArrayExpression,
    BlockStatement,
    CallExpression,
    ExportDeclaration,
    ExportSpecifier,
    ExpressionStatement,
    FunctionDeclaration,
    FunctionExpression,
    Identifier,
    ImportDeclaration,
    ImportDefaultSpecifier,
    ImportNamespaceSpecifier,
    ImportSpecifier,
    Literal,
    MemberExpression,
    ObjectExpression,
    Program,
    Property,
    ReturnStatement,
    VariableDeclaration,
    VariableDeclarator,
    Verbatim,
)
from es2yui.printer import print_expr, print_file
from es2yui.printer.context import PrintContext


def _ctx() -> PrintContext:
    return PrintContext(emitter=JSEmitter(StringIO()))


class TestJSEmitter:
    """Tests for the emitter's layout primitives."""

    def test_line_indentation(self) -> None:
        stream = StringIO()
        emitter = JSEmitter(stream)
        emitter.line("a();")
        emitter.indent_inc()
        emitter.line("b();")
        emitter.indent_dec()
        emitter.line("c();")
        assert stream.getvalue() == "a();\n  b();\nc();\n"

    def test_blank_line_has_no_indentation(self) -> None:
        stream = StringIO()
        JSEmitter(stream, indent=4).blank()
        assert stream.getvalue() == "\n"

    def test_comment(self) -> None:
        stream = StringIO()
        JSEmitter(stream, indent=2).comment("// generated")
        assert stream.getvalue() == "  // generated\n"

    def test_block_comment_keeps_alignment(self) -> None:
        stream = StringIO()
        JSEmitter(stream).comment("/*\n   * License\n   */", column=2)
        assert stream.getvalue() == "/*\n * License\n */\n"

    def test_text_reindents_sliced_source(self) -> None:
        stream = StringIO()
        emitter = JSEmitter(stream, indent=2)
        emitter.text("if (x) {\n      y();\n    }")
        assert stream.getvalue() == "  if (x) {\n    y();\n  }\n"

    def test_text_keeps_template_literal_lines(self) -> None:
        stream = StringIO()
        JSEmitter(stream, indent=2).text("var s = `a\n    b  \nc`;")
        assert stream.getvalue() == "  var s = `a\n    b  \nc`;\n"

    def test_text_reindents_around_template_literal(self) -> None:
        stream = StringIO()
        JSEmitter(stream).text("function f() {\n    return `x\n  y`;\n  }")
        assert stream.getvalue() == "function f() {\n  return `x\n  y`;\n}\n"

    def test_text_keeps_string_line_continuation(self) -> None:
        stream = StringIO()
        JSEmitter(stream, indent=4).text('var s = "a\\\n  b";')
        assert stream.getvalue() == '    var s = "a\\\n  b";\n'

    def test_text_drops_surrounding_blank_lines(self) -> None:
        stream = StringIO()
        JSEmitter(stream).text("\n\n    return 1;\n  ")
        assert stream.getvalue() == "return 1;\n"


class TestPrintExpr:
    """Tests for expression printing."""

    def test_literals(self) -> None:
        ctx = _ctx()
        assert print_expr(Literal('say "hi"'), ctx) == '"say \\"hi\\""'
        assert print_expr(Literal(True), ctx) == "true"
        assert print_expr(Literal(False), ctx) == "false"
        assert print_expr(Literal(None), ctx) == "null"
        assert print_expr(Literal(3), ctx) == "3"

    def test_member_expressions(self) -> None:
        ctx = _ctx()
        dotted = MemberExpression(Identifier("YUI"), Identifier("add"))
        computed = MemberExpression(
            Identifier("__imports__"), Literal("lib/math"), computed=True
        )
        assert print_expr(dotted, ctx) == "YUI.add"
        assert print_expr(computed, ctx) == '__imports__["lib/math"]'

    def test_object_and_array(self) -> None:
        config = ObjectExpression([
            Property("init", Literal("es"), Literal(True)),
            Property("init", Literal("requires"), ArrayExpression([Literal("a")])),
        ])
        assert print_expr(config, _ctx()) == '{"es": true, "requires": ["a"]}'
        assert print_expr(ObjectExpression(), _ctx()) == "{}"

    def test_function_callee_is_parenthesized(self) -> None:
        fn = FunctionExpression(None, [], BlockStatement())
        assert print_expr(CallExpression(fn, []), _ctx()) == "(function() {})()"

    def test_verbatim(self) -> None:
        assert print_expr(Verbatim("a + b"), _ctx()) == "a + b"

    def test_unknown_node(self) -> None:
        with pytest.raises(NotImplementedError):
            print_expr(ReturnStatement(), _ctx())


class TestPrintFile:
    """Tests for statement printing."""

    def test_variable_declaration(self) -> None:
        program = Program([
            VariableDeclaration("var", [VariableDeclarator(Identifier("x"))]),
            VariableDeclaration(
                "let",
                [
                    VariableDeclarator(Identifier("a"), Literal(1)),
                    VariableDeclarator(Identifier("b"), Verbatim("f()")),
                ],
            ),
        ])
        assert print_file(program) == "var x;\nlet a = 1, b = f();\n"

    def test_function_declaration(self) -> None:
        fn = FunctionDeclaration(
            Identifier("f"),
            [Identifier("a")],
            BlockStatement([ReturnStatement(Identifier("a"))]),
        )
        assert print_file(Program([fn])) == "function f(a) {\n  return a;\n}\n"

    def test_empty_function_body(self) -> None:
        fn = FunctionDeclaration(Identifier("f"), [], BlockStatement())
        assert print_file(Program([fn])) == "function f() {}\n"

    def test_nested_blocks_indent_once_per_level(self) -> None:
        inner = FunctionExpression(
            None, [], BlockStatement([ReturnStatement(Literal(1))])
        )
        outer = FunctionDeclaration(
            Identifier("outer"), [], BlockStatement([ReturnStatement(inner)])
        )
        assert print_file(Program([outer])) == (
            "function outer() {\n"
            "  return function() {\n"
            "    return 1;\n"
            "  };\n"
            "}\n"
        )

    def test_indent_width(self) -> None:
        fn = FunctionDeclaration(
            Identifier("f"), [], BlockStatement([ReturnStatement()])
        )
        assert print_file(Program([fn]), indent_width=4) == (
            "function f() {\n    return;\n}\n"
        )

    def test_expression_statement(self) -> None:
        call = CallExpression(Identifier("__es6_export__"), [Literal("a"), Identifier("a")])
        assert print_file(Program([ExpressionStatement(call)])) == (
            '__es6_export__("a", a);\n'
        )

    def test_import_declaration(self) -> None:
        program = Program([
            ImportDeclaration(
                [
                    ImportDefaultSpecifier(Identifier("a")),
                    ImportSpecifier(Identifier("c"), Identifier("b")),
                    ImportSpecifier(Identifier("d"), Identifier("d")),
                ],
                Literal("./m"),
            ),
            ImportDeclaration(
                [ImportNamespaceSpecifier(Identifier("ns"))], Literal("./n")
            ),
        ])
        assert print_file(program) == (
            'import a, { b as c, d } from "./m";\nimport * as ns from "./n";\n'
        )

    def test_export_declarations(self) -> None:
        program = Program([
            ExportDeclaration(
                default=False,
                specifiers=[
                    ExportSpecifier(Identifier("x"), Identifier("y")),
                    ExportSpecifier(Identifier("z")),
                ],
            ),
            ExportDeclaration(
                default=False,
                specifiers=[ExportSpecifier(Identifier("q"))],
                source=Literal("./other"),
            ),
            ExportDeclaration(default=True, declaration=Identifier("x")),
        ])
        assert print_file(program) == (
            "export { x as y, z };\n"
            'export { q } from "./other";\n'
            "export default x;\n"
        )
