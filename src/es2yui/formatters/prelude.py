"""Module prelude and dependency list.

Both are computed from a module's resolved import/export collections:

- the dependency list feeds the loader's `requires` option;
- the prelude materializes every imported name as a local variable and
  forwards every re-exported name straight from the import table.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from es2yui.errors import ResolutionError
from es2yui.formatters.base import export_call, import_table_entry
from es2yui.nodes import (
    ArrayExpression,
    AssignmentExpression,
    ExpressionStatement,
    Identifier,
    Literal,
    Statement,
    VariableDeclaration,
    VariableDeclarator,
)

if TYPE_CHECKING:
    from es2yui.modules import Module

logger = logging.getLogger(__name__)


def dependency_names(module: Module) -> list[str]:
    """Return the names of the modules `module` depends on.

    Imports come first, then re-exports; each module appears once, at its
    first occurrence.

    Raises:
        ResolutionError: If a source module has no declaration referencing it.
    """
    required: list[Module] = []
    names: list[str] = []

    # `(import|export) { ... } from "math"`
    for declarations in (module.imports, module.exports):
        for source_module in declarations.modules:
            if any(source_module is seen for seen in required):
                continue
            required.append(source_module)

            matching = next(
                (d for d in declarations.declarations if d.source is source_module),
                None,
            )
            if matching is None:
                msg = (
                    "no matching declaration for source module: "
                    f"{source_module.relative_path}"
                )
                raise ResolutionError(msg)

            names.append(source_module.name)

    logger.debug("%s requires %s", module.name, names)
    return names


def build_dependencies(module: Module) -> ArrayExpression:
    """Build the `requires` array, e.g. `["path/to/foo", "path/to/bar"]`."""
    return ArrayExpression([Literal(name) for name in dependency_names(module)])


def build_prelude(module: Module) -> list[Statement]:
    """Bind every named import and forward every re-export.

    Raises:
        ResolutionError: If a name has no specifier, or an import has no
            resolved source module.
    """
    prelude: list[Statement] = []

    # import { foo } from "foo"; hoists a variable declaration
    for name in module.imports.names:
        specifier = module.imports.find_specifier_by_name(name)
        if specifier is None:
            msg = (
                f"no import specifier found for import name `{name}` "
                f"from {module.relative_path}"
            )
            raise ResolutionError(msg)
        source = specifier.declaration.source
        if source is None:
            msg = f"import `{name}` in {module.relative_path} has no source module"
            raise ResolutionError(msg)

        prelude.append(
            VariableDeclaration("var", [VariableDeclarator(Identifier(specifier.name))])
        )
        # import { value } from "./a"; import a from "./a";  -> one export
        # import * as a from "./a";                          -> whole table
        prelude.append(
            ExpressionStatement(
                AssignmentExpression(
                    "=",
                    Identifier(specifier.name),
                    import_table_entry(source.name, specifier.from_),
                )
            )
        )

    for name in module.exports.names:
        specifier = module.exports.find_specifier_by_name(name)
        if specifier is None:
            msg = (
                f"no export specifier found for export name `{name}` "
                f"from {module.relative_path}"
            )
            raise ResolutionError(msg)

        source = specifier.declaration.source
        if source is None:
            # Local export, registered where it is declared
            continue
        prelude.append(
            export_call(
                specifier.name, import_table_entry(source.name, specifier.from_)
            )
        )

    return prelude


__all__ = ["build_dependencies", "build_prelude", "dependency_names"]
