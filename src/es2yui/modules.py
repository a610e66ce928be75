"""Module graph: modules, resolved declarations and the container owning them.

A Module is one translation unit. Its `imports` and `exports` collections hold
the import/export declarations found at the top level of its tree, each with
its source module already resolved. The ModuleContainer owns every Module;
declarations only hold plain references to sibling modules and never mutate
them.
"""

from __future__ import annotations

import logging
import posixpath
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from es2yui.errors import ResolutionError, UnresolvedImportError
from es2yui.nodes import (
    ClassDeclaration,
    ExportDeclaration,
    File,
    FunctionDeclaration,
    Identifier,
    ImportDeclaration,
    ImportDefaultSpecifier,
    ImportNamespaceSpecifier,
    VariableDeclaration,
)
from es2yui.parser import parse_module

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

logger = logging.getLogger(__name__)

_NON_IDENTIFIER_CHARS = re.compile(r"[^A-Za-z0-9_$]")


@dataclass(eq=False)
class Module:
    """One translation unit.

    Modules compare by identity: two modules are the same dependency only if
    they are the same object.

    Attributes:
        name: Loader registry key, e.g. "rsvp/defer".
        relative_path: Path of the source file relative to the root.
        ast: The module's syntax tree, rewritten in place.
        imports: Resolved import declarations.
        exports: Resolved export declarations.
    """

    name: str
    relative_path: str
    ast: File
    imports: ImportDeclarationList = field(init=False)
    exports: ExportDeclarationList = field(init=False)

    def __post_init__(self) -> None:
        self.imports = ImportDeclarationList(self)
        self.exports = ExportDeclarationList(self)

    @property
    def id(self) -> str:
        """Identifier-safe namespace name, e.g. "rsvp/defer" -> "rsvp$defer$$"."""
        return _NON_IDENTIFIER_CHARS.sub("$", self.name) + "$$"

    def __repr__(self) -> str:
        return f"Module({self.name!r})"


@dataclass(eq=False)
class DeclarationInfo:
    """One import/export declaration of a module.

    Attributes:
        node: The declaration node in the module's tree.
        source: The module it imports from or re-exports from, if any.
        specifiers: Specifiers introduced by this declaration.
    """

    node: ImportDeclaration | ExportDeclaration
    source: Module | None
    specifiers: list[Specifier] = field(default_factory=list)


@dataclass(eq=False)
class Specifier:
    """One name clause of a declaration.

    Attributes:
        name: For imports, the local binding name. For exports, the name other
            modules see.
        from_: The name in the source module (or the local name for plain
            exports). None for namespace imports and for default exports of
            anonymous values.
        declaration: The declaration that introduced this specifier.
    """

    name: str
    from_: str | None
    declaration: DeclarationInfo = field(repr=False)


class DeclarationList:
    """Base for a module's import or export declarations.

    `names` keeps declaration order and holds each name once; every name has
    exactly one specifier.
    """

    kind = "declaration"

    def __init__(self, module: Module) -> None:
        self.module = module
        self.names: list[str] = []
        self.modules: list[Module] = []
        self.declarations: list[DeclarationInfo] = []
        self._specifiers: dict[str, Specifier] = {}

    def __iter__(self) -> Iterator[DeclarationInfo]:
        return iter(self.declarations)

    def __len__(self) -> int:
        return len(self.declarations)

    def find_specifier_by_name(self, name: str) -> Specifier | None:
        """Return the specifier that introduced `name`, if any."""
        return self._specifiers.get(name)

    def add_declaration(
        self,
        node: ImportDeclaration | ExportDeclaration,
        source: Module | None,
        names: list[tuple[str, str | None]],
    ) -> DeclarationInfo:
        """Record a declaration and its (name, from) specifier pairs."""
        info = DeclarationInfo(node=node, source=source)
        for name, from_ in names:
            if name in self._specifiers:
                msg = (
                    f"duplicate {self.kind} name `{name}` "
                    f"in {self.module.relative_path}"
                )
                raise ResolutionError(msg)
            specifier = Specifier(name=name, from_=from_, declaration=info)
            info.specifiers.append(specifier)
            self._specifiers[name] = specifier
            self.names.append(name)

        self.declarations.append(info)
        if source is not None and not any(m is source for m in self.modules):
            self.modules.append(source)
        return info


class ImportDeclarationList(DeclarationList):
    """Import declarations of a module."""

    kind = "import"

    def add(self, node: ImportDeclaration, source: Module) -> DeclarationInfo:
        names: list[tuple[str, str | None]] = []
        for spec in node.specifiers:
            match spec:
                case ImportDefaultSpecifier(local=local):
                    names.append((local.name, "default"))
                case ImportNamespaceSpecifier(local=local):
                    names.append((local.name, None))
                case _:
                    names.append((spec.local.name, spec.imported.name))
        return self.add_declaration(node, source, names)


class ExportDeclarationList(DeclarationList):
    """Export declarations of a module."""

    kind = "export"

    def add(self, node: ExportDeclaration, source: Module | None) -> DeclarationInfo:
        return self.add_declaration(node, source, list(_export_names(node)))


def _export_names(node: ExportDeclaration) -> Iterator[tuple[str, str | None]]:
    """Yield (exported name, from name) pairs for an export declaration."""
    declaration = node.declaration
    if node.default:
        match declaration:
            case FunctionDeclaration(id=Identifier(name=name)) | ClassDeclaration(
                id=Identifier(name=name)
            ):
                yield "default", name
            case _:
                yield "default", None
        return

    match declaration:
        case FunctionDeclaration(id=Identifier(name=name)) | ClassDeclaration(
            id=Identifier(name=name)
        ):
            yield name, name
        case VariableDeclaration(declarations=declarators):
            # Destructuring patterns are rejected when the export is rewritten
            for declarator in declarators:
                if isinstance(declarator.id, Identifier):
                    yield declarator.id.name, declarator.id.name
        case None:
            for spec in node.specifiers:
                yield spec.exported_name, spec.local.name


# =========================================================================
# Module name resolution
# =========================================================================


def resolve_module_name(import_path: str, importer: str | None = None) -> str:
    """Normalize an import source into a module name.

    Relative sources ("./x", "../x") resolve against the importer's directory;
    anything else is taken relative to the root. A ".js" suffix is dropped.

    Raises:
        UnresolvedImportError: If the source escapes the root.
    """
    path = import_path
    if path.startswith(("./", "../")) and importer is not None:
        path = posixpath.join(posixpath.dirname(importer), path)
    name = posixpath.normpath(path)
    if name.endswith(".js"):
        name = name[: -len(".js")]
    if name.startswith("../") or name in {".", ".."} or name.startswith("/"):
        msg = f"cannot resolve `{import_path}`" + (
            f" from `{importer}`" if importer else ""
        )
        raise UnresolvedImportError(msg)
    return name


class Resolver(Protocol):
    """Locates module source by module name."""

    def locate(self, name: str) -> tuple[str, str]:
        """Return (relative_path, source) for a module name."""
        ...


class FileResolver:
    """Reads modules from `<root>/<name>.js` (or `<root>/<name>` verbatim)."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    def locate(self, name: str) -> tuple[str, str]:
        for candidate in (f"{name}.js", name):
            path = self.root / candidate
            if path.is_file():
                return candidate, path.read_text(encoding="utf-8")
        msg = f"no module file for `{name}` under {self.root}"
        raise UnresolvedImportError(msg)


class SourceResolver:
    """Serves modules from an in-memory {name: source} mapping."""

    def __init__(self, sources: Mapping[str, str]) -> None:
        self.sources = {resolve_module_name(k): v for k, v in sources.items()}

    def locate(self, name: str) -> tuple[str, str]:
        if name not in self.sources:
            msg = f"no source for module `{name}`"
            raise UnresolvedImportError(msg)
        return f"{name}.js", self.sources[name]


class ModuleContainer:
    """Owns every module of a run and resolves import sources to modules.

    Modules are loaded in discovery order and handed out in dependency order
    by `get_modules`.
    """

    def __init__(self, resolver: Resolver) -> None:
        self.resolver = resolver
        self._modules: dict[str, Module] = {}

    def get_module(self, import_path: str, importer: Module | None = None) -> Module:
        """Return the module for an import source, loading it on first use."""
        name = resolve_module_name(import_path, importer.name if importer else None)
        if name in self._modules:
            return self._modules[name]

        relative_path, source = self.resolver.locate(name)
        program = parse_module(source, filename=relative_path)
        module = Module(
            name=name,
            relative_path=relative_path,
            ast=File(program=program, filename=relative_path),
        )
        # Register before collecting so import cycles find this module.
        self._modules[name] = module
        logger.debug("loaded module %s from %s", name, relative_path)
        self._collect(module)
        return module

    def get_modules(self) -> list[Module]:
        """Return all loaded modules, each after the modules it depends on.

        This is a depth-first post-order over imports, then re-exports. An
        import cycle is broken at the first of its modules to be visited, and
        modules with no dependency between them keep their discovery order.
        """
        ordered: list[Module] = []
        visited: set[str] = set()

        def visit(module: Module) -> None:
            if module.name in visited:
                return
            visited.add(module.name)
            for dependency in (*module.imports.modules, *module.exports.modules):
                visit(dependency)
            ordered.append(module)

        for module in self._modules.values():
            visit(module)
        return ordered

    def _collect(self, module: Module) -> None:
        """Fill the module's import/export collections from its tree."""
        for stmt in module.ast.program.body:
            match stmt:
                case ImportDeclaration(source=source):
                    module.imports.add(
                        stmt, self.get_module(str(source.value), module)
                    )
                case ExportDeclaration(source=None):
                    module.exports.add(stmt, None)
                case ExportDeclaration(source=source):
                    module.exports.add(
                        stmt, self.get_module(str(source.value), module)
                    )


__all__ = [
    "DeclarationInfo",
    "DeclarationList",
    "ExportDeclarationList",
    "FileResolver",
    "ImportDeclarationList",
    "Module",
    "ModuleContainer",
    "Resolver",
    "SourceResolver",
    "Specifier",
    "resolve_module_name",
]
