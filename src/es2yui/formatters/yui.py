"""The `YUI.add` module format.

Produces code that registers each module with the YUI loader:

    YUI.add("math", function (Y, NAME, __imports__, __exports__) {
      "use strict";
      function __es6_export__(name, value) {
        __exports__[name] = value;
      }
      ...
      return __exports__;
    }, "@VERSION@", {"es": true, "requires": [...]});

Exported values are registered right where they are declared, so local code
referencing its own declarations never needs rewriting, and imported names are
rebound to local variables of the same name by the prelude. Only import and
export statements change shape.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from es2yui.errors import ResolutionError
from es2yui.formatters.base import (
    EXPORT_FUNCTION,
    EXPORTS_TABLE,
    IMPORTS_TABLE,
    BuildOptions,
    Formatter,
)
from es2yui.formatters.exports import classify_export, emit_export
from es2yui.formatters.prelude import build_dependencies, build_prelude
from es2yui.formatters.replacement import Replacement
from es2yui.nodes import (
    AssignmentExpression,
    BlockStatement,
    CallExpression,
    ExportDeclaration,
    ExpressionStatement,
    File,
    FunctionDeclaration,
    FunctionExpression,
    Identifier,
    Literal,
    MemberExpression,
    ObjectExpression,
    Property,
    ReturnStatement,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from es2yui.formatters.replacement import NodePath
    from es2yui.modules import Module
    from es2yui.rewriter import RewrittenModule

logger = logging.getLogger(__name__)


def reference(module: Module, identifier: Identifier | str) -> MemberExpression:
    """Return an expression reading `identifier` off the module's namespace.

    For example, the default export of rsvp/defer is `rsvp$defer$$.default`
    and `isFunction` from rsvp/utils is `rsvp$utils$$.isFunction`.
    """
    prop = identifier if isinstance(identifier, Identifier) else Identifier(identifier)
    return MemberExpression(Identifier(module.id), prop, computed=False)


def process_import_declaration(module: Module, path: NodePath) -> Replacement:
    """Remove the import; the prelude rebuilds its bindings at the top."""
    return Replacement.removes(path)


def process_export_declaration(module: Module, path: NodePath) -> Replacement:
    """Replace an export with its declaration and registration calls."""
    node = path.node
    if not isinstance(node, ExportDeclaration):
        msg = (
            f"{module.relative_path}: expected an export declaration, "
            f"found {type(node).__name__}"
        )
        raise ResolutionError(msg)
    form = classify_export(node)
    logger.debug("%s: %s", module.name, type(form).__name__)
    return Replacement.swaps(path, emit_export(form))


def build(
    modules: Sequence[RewrittenModule], options: BuildOptions | None = None
) -> list[File]:
    """Wrap every rewritten module in a `YUI.add()` call.

    Args:
        modules: Rewritten modules in execution order.
        options: Assembly options.

    Returns:
        One File per module, in the same order.
    """
    options = options or BuildOptions()
    return [_wrap(rewritten.module, options) for rewritten in modules]


def _wrap(module: Module, options: BuildOptions) -> File:
    body = module.ast.program.body

    # Named imports and re-exports
    body[0:0] = build_prelude(module)

    body[0:0] = [
        # Module body runs in strict mode
        ExpressionStatement(Literal("use strict")),
        # function __es6_export__(name, value) sets named exports
        FunctionDeclaration(
            Identifier(EXPORT_FUNCTION),
            [Identifier("name"), Identifier("value")],
            BlockStatement([
                ExpressionStatement(
                    AssignmentExpression(
                        "=",
                        MemberExpression(
                            Identifier(EXPORTS_TABLE), Identifier("name"), computed=True
                        ),
                        Identifier("value"),
                    )
                )
            ]),
        ),
    ]

    body.append(ReturnStatement(Identifier(EXPORTS_TABLE)))

    factory = FunctionExpression(
        None,
        [
            Identifier("Y"),
            Identifier("NAME"),
            Identifier(IMPORTS_TABLE),
            Identifier(EXPORTS_TABLE),
        ],
        BlockStatement(body),
    )
    config = ObjectExpression([
        Property("init", Literal("es"), Literal(True)),
        Property("init", Literal("requires"), build_dependencies(module)),
    ])
    module.ast.program.body = [
        ExpressionStatement(
            CallExpression(
                MemberExpression(Identifier("YUI"), Identifier("add")),
                [Literal(module.name), factory, Literal(options.version), config],
            )
        )
    ]

    module.ast.filename = module.relative_path
    logger.debug("wrapped %s", module.name)
    return module.ast


YUI = Formatter(
    name="yui",
    reference=reference,
    process_import_declaration=process_import_declaration,
    process_export_declaration=process_export_declaration,
    build=build,
)


__all__ = [
    "YUI",
    "build",
    "process_export_declaration",
    "process_import_declaration",
    "reference",
]
