"""Unit tests for the esprima front end."""

from __future__ import annotations

import pytest

from es2yui.errors import ParseError, UnsupportedSyntaxError
from es2yui.nodes import (
    AssignmentExpression,
    BlockStatement,
    ClassDeclaration,
    Comment,
    ExportDeclaration,
    ExpressionStatement,
    FunctionDeclaration,
    Identifier,
    ImportDeclaration,
    ImportDefaultSpecifier,
    ImportNamespaceSpecifier,
    ImportSpecifier,
    VariableDeclaration,
    Verbatim,
)
from es2yui.parser import parse_module


def _single(source: str):
    body = parse_module(source).body
    assert len(body) == 1
    return body[0]


class TestImports:
    """Tests for import declarations."""

    def test_default_and_named(self) -> None:
        node = _single('import a, { b as c, d } from "./m";')
        assert isinstance(node, ImportDeclaration)
        assert node.source.value == "./m"
        default, aliased, plain = node.specifiers
        assert isinstance(default, ImportDefaultSpecifier)
        assert default.local.name == "a"
        assert isinstance(aliased, ImportSpecifier)
        assert (aliased.imported.name, aliased.local.name) == ("b", "c")
        assert (plain.imported.name, plain.local.name) == ("d", "d")

    def test_namespace(self) -> None:
        node = _single("import * as ns from './m';")
        assert isinstance(node.specifiers[0], ImportNamespaceSpecifier)
        assert node.specifiers[0].local.name == "ns"

    def test_side_effect_only(self) -> None:
        node = _single("import './polyfill';")
        assert node.specifiers == []
        assert node.source.value == "./polyfill"


class TestExports:
    """Tests for export declarations."""

    def test_function(self) -> None:
        node = _single("export function add(a, b) {\n  return a + b;\n}")
        assert isinstance(node, ExportDeclaration)
        assert node.default is False
        fn = node.declaration
        assert isinstance(fn, FunctionDeclaration)
        assert fn.id.name == "add"
        assert fn.params == [Identifier("a"), Identifier("b")]
        assert isinstance(fn.body, BlockStatement)
        assert "return a + b;" in fn.body.body[0].text

    def test_async_and_generator_functions(self) -> None:
        node = _single("export async function load() {}")
        assert node.declaration.is_async is True
        assert node.declaration.body.body == []
        node = _single("export function* items() { yield 1; }")
        assert node.declaration.generator is True

    def test_variables(self) -> None:
        node = _single("export var a = 10, b;")
        declaration = node.declaration
        assert isinstance(declaration, VariableDeclaration)
        assert declaration.kind == "var"
        first, second = declaration.declarations
        assert first.id == Identifier("a")
        assert first.init == Verbatim("10")
        assert second.init is None

    def test_destructuring_keeps_pattern_text(self) -> None:
        node = _single("export const { a, b } = obj;")
        declarator = node.declaration.declarations[0]
        assert declarator.id == Verbatim("{ a, b }")
        assert declarator.init == Identifier("obj")

    def test_specifiers(self) -> None:
        node = parse_module("var x = 1;\nexport { x as y, x };").body[1]
        aliased, plain = node.specifiers
        assert aliased.exported.name == "y"
        assert aliased.exported_name == "y"
        assert plain.exported is None
        assert plain.exported_name == "x"
        assert node.source is None

    def test_re_export(self) -> None:
        node = _single("export { z, default as d } from './other';")
        assert node.source.value == "./other"
        assert [s.local.name for s in node.specifiers] == ["z", "default"]
        assert [s.exported_name for s in node.specifiers] == ["z", "d"]

    def test_default_identifier(self) -> None:
        node = _single("export default add;")
        assert node.default is True
        assert node.declaration == Identifier("add")

    def test_default_expression(self) -> None:
        node = _single("export default 1 + 2;")
        assert node.declaration == Verbatim("1 + 2")

    def test_default_named_function(self) -> None:
        node = _single("export default function isEven(n) { return n % 2 === 0; }")
        assert isinstance(node.declaration, FunctionDeclaration)
        assert node.declaration.id.name == "isEven"

    def test_default_anonymous_function_and_class(self) -> None:
        node = _single("export default function () {}")
        assert isinstance(node.declaration, FunctionDeclaration)
        assert node.declaration.id is None
        node = _single("export default class {}")
        assert isinstance(node.declaration, ClassDeclaration)
        assert node.declaration.id is None

    def test_class_with_superclass(self) -> None:
        node = _single("export class B extends A { m() {} }")
        cls = node.declaration
        assert isinstance(cls, ClassDeclaration)
        assert cls.super_class == Identifier("A")
        assert cls.body == Verbatim("{ m() {} }")

    def test_export_all_is_rejected(self) -> None:
        with pytest.raises(UnsupportedSyntaxError, match="export \\* from"):
            parse_module("export * from './m';")


class TestOtherStatements:
    """Tests for statements outside import/export."""

    def test_identifier_assignment(self) -> None:
        node = _single("count = next;")
        assert isinstance(node, ExpressionStatement)
        assert node.expression == AssignmentExpression(
            "=", Identifier("count"), Identifier("next")
        )

    def test_member_assignment_is_verbatim(self) -> None:
        assert _single("a.b = c;") == Verbatim("a.b = c;")

    def test_other_statements_are_verbatim(self) -> None:
        source = "if (x) {\n  console.log(x);\n}"
        assert _single(source) == Verbatim(source)



class TestComments:
    """Tests for comments between top-level statements."""

    def test_comments_keep_their_place(self) -> None:
        body = parse_module(
            "/* License */\nimport a from './a';\n// note\nexport default a;"
        ).body
        assert [type(node) for node in body] == [
            Comment,
            ImportDeclaration,
            Comment,
            ExportDeclaration,
        ]
        assert body[0] == Comment("/* License */", 0)
        assert body[2] == Comment("// note", 0)

    def test_comment_column(self) -> None:
        body = parse_module("var a = 1;  // one\n  /*\n   * two\n   */").body
        assert body[1] == Comment("// one", 12)
        assert body[2] == Comment("/*\n   * two\n   */", 2)

    def test_comments_inside_statements_stay_there(self) -> None:
        source = "function f() {\n  // inside\n  return 1;\n}"
        (node,) = parse_module(source).body
        assert isinstance(node, FunctionDeclaration)
        assert "// inside" in node.body.body[0].text


class TestErrors:
    """Tests for parse errors."""

    def test_syntax_error(self) -> None:
        with pytest.raises(ParseError) as excinfo:
            parse_module("var = ;", filename="bad.js")
        assert str(excinfo.value).startswith("bad.js: ")
        assert excinfo.value.filename == "bad.js"
