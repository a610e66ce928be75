"""JavaScript syntax tree nodes.

ESTree-shaped dataclasses covering the node kinds the formatter builds or
inspects. Anything the formatter never rewrites (function bodies, arbitrary
expressions, unrelated statements) is kept as a `Verbatim` node holding the
original source text.

Nodes are mutable: formatters rewrite module bodies in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Node:
    """Base class for all syntax tree nodes."""


@dataclass
class Expression(Node):
    """Base class for expression nodes."""


@dataclass
class Statement(Node):
    """Base class for statement nodes."""


# =========================================================================
# Verbatim source
# =========================================================================


@dataclass
class Verbatim(Expression, Statement):
    """Source text kept exactly as written.

    Usable both as an expression and as a statement.
    """

    text: str


# =========================================================================
# Expressions
# =========================================================================


@dataclass
class Identifier(Expression):
    name: str


@dataclass
class Literal(Expression):
    """String, number, boolean or null literal."""

    value: str | int | float | bool | None


@dataclass
class MemberExpression(Expression):
    """`object.property` or, when computed, `object[property]`."""

    object: Expression
    property: Expression
    computed: bool = False


@dataclass
class CallExpression(Expression):
    callee: Expression
    arguments: list[Expression] = field(default_factory=list)


@dataclass
class AssignmentExpression(Expression):
    operator: str
    left: Expression
    right: Expression


@dataclass
class ArrayExpression(Expression):
    elements: list[Expression] = field(default_factory=list)


@dataclass
class Property(Node):
    """Object literal property; `kind` is "init" for plain `key: value`."""

    kind: str
    key: Expression
    value: Expression


@dataclass
class ObjectExpression(Expression):
    properties: list[Property] = field(default_factory=list)


@dataclass
class FunctionExpression(Expression):
    id: Identifier | None
    params: list[Expression]
    body: BlockStatement
    is_async: bool = False
    generator: bool = False


@dataclass
class ClassExpression(Expression):
    id: Identifier | None
    super_class: Expression | None
    body: Verbatim


# =========================================================================
# Statements
# =========================================================================


@dataclass
class ExpressionStatement(Statement):
    expression: Expression


@dataclass
class BlockStatement(Statement):
    body: list[Statement] = field(default_factory=list)


@dataclass
class ReturnStatement(Statement):
    argument: Expression | None = None


@dataclass
class VariableDeclarator(Node):
    """One binding of a variable declaration.

    `id` is an `Identifier` for plain bindings and a `Verbatim` pattern for
    destructuring.
    """

    id: Identifier | Verbatim
    init: Expression | None = None


@dataclass
class VariableDeclaration(Statement):
    kind: str
    declarations: list[VariableDeclarator]


@dataclass
class FunctionDeclaration(Statement):
    id: Identifier | None
    params: list[Expression]
    body: BlockStatement
    is_async: bool = False
    generator: bool = False


@dataclass
class ClassDeclaration(Statement):
    id: Identifier | None
    super_class: Expression | None
    body: Verbatim


@dataclass
class Comment(Statement):
    """A comment standing between top-level statements.

    `text` includes the comment markers; `column` is where it started in its
    source line.
    """

    text: str
    column: int = 0


# =========================================================================
# Module declarations
# =========================================================================


@dataclass
class ImportSpecifier(Node):
    """`{ imported as local }`."""

    local: Identifier
    imported: Identifier


@dataclass
class ImportDefaultSpecifier(Node):
    """`local` in `import local from "m"`."""

    local: Identifier


@dataclass
class ImportNamespaceSpecifier(Node):
    """`* as local`."""

    local: Identifier


@dataclass
class ImportDeclaration(Statement):
    specifiers: list[ImportSpecifier | ImportDefaultSpecifier | ImportNamespaceSpecifier]
    source: Literal


@dataclass
class ExportSpecifier(Node):
    """`{ local as exported }`; `exported` is None when not aliased."""

    local: Identifier
    exported: Identifier | None = None

    @property
    def exported_name(self) -> str:
        return (self.exported or self.local).name


@dataclass
class ExportDeclaration(Statement):
    """Any `export` statement.

    - `default` is set for `export default ...`; `declaration` then holds the
      exported declaration or expression.
    - Named exports hold either a `declaration` or a list of `specifiers`.
    - `source` is set for re-exports (`export { a } from "m"`).
    """

    default: bool
    declaration: Node | None = None
    specifiers: list[ExportSpecifier] = field(default_factory=list)
    source: Literal | None = None


# =========================================================================
# Program
# =========================================================================


@dataclass
class Program(Node):
    body: list[Statement] = field(default_factory=list)


@dataclass
class File(Node):
    """Root of a module's tree; `filename` is a hint for printing."""

    program: Program
    filename: str | None = None


__all__ = [
    "ArrayExpression",
    "AssignmentExpression",
    "BlockStatement",
    "CallExpression",
    "ClassDeclaration",
    "ClassExpression",
    "Comment",
    "ExportDeclaration",
    "ExportSpecifier",
    "Expression",
    "ExpressionStatement",
    "File",
    "FunctionDeclaration",
    "FunctionExpression",
    "Identifier",
    "ImportDeclaration",
    "ImportDefaultSpecifier",
    "ImportNamespaceSpecifier",
    "ImportSpecifier",
    "Literal",
    "MemberExpression",
    "Node",
    "ObjectExpression",
    "Program",
    "Property",
    "ReturnStatement",
    "Statement",
    "VariableDeclaration",
    "VariableDeclarator",
    "Verbatim",
]
