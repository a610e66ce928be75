"""Transpile pipeline - simple functional design.

    resolve modules -> rewrite each module -> build (wrap) -> print
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from es2yui.errors import UnresolvedImportError
from es2yui.formatters import YUI, BuildOptions
from es2yui.modules import FileResolver, ModuleContainer, SourceResolver
from es2yui.printer import print_file
from es2yui.rewriter import rewrite_modules

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from es2yui.formatters import Formatter
    from es2yui.modules import Module
    from es2yui.nodes import File

logger = logging.getLogger(__name__)


def transpile(
    modules: Sequence[Module],
    formatter: Formatter = YUI,
    options: BuildOptions | None = None,
) -> list[File]:
    """Rewrite and wrap resolved modules.

    Args:
        modules: Resolved modules, in execution order.
        formatter: Target module format.
        options: Assembly options.

    Returns:
        One wrapped File per module, in the same order.
    """
    rewritten = rewrite_modules(modules, formatter)
    return formatter.build(rewritten, options or BuildOptions())


def transpile_container(
    container: ModuleContainer,
    entries: Iterable[str],
    formatter: Formatter = YUI,
    options: BuildOptions | None = None,
) -> list[tuple[Module, str]]:
    """Load entry modules (and everything they reach), transpile and print them.

    Returns:
        (module, printed source) pairs in execution order (dependencies first).
    """
    for entry in entries:
        container.get_module(entry)
    modules = container.get_modules()
    files = transpile(modules, formatter, options)
    logger.debug("transpiled %d modules", len(files))
    return [
        (module, print_file(tree)) for module, tree in zip(modules, files, strict=True)
    ]


def transpile_sources(
    sources: Mapping[str, str],
    entries: Iterable[str] | None = None,
    formatter: Formatter = YUI,
    options: BuildOptions | None = None,
) -> dict[str, str]:
    """Transpile in-memory modules.

    Args:
        sources: Module source keyed by module name ("math" or "lib/math.js").
        entries: Modules to start from; defaults to every module in `sources`.
        formatter: Target module format.
        options: Assembly options.

    Returns:
        Printed output keyed by module name.
    """
    container = ModuleContainer(SourceResolver(sources))
    results = transpile_container(
        container, entries if entries is not None else sources, formatter, options
    )
    return {module.name: code for module, code in results}


def transpile_files(
    paths: Iterable[Path | str],
    root: Path | str,
    formatter: Formatter = YUI,
    options: BuildOptions | None = None,
) -> list[tuple[Module, str]]:
    """Transpile module files under `root`, starting from `paths`."""
    container = ModuleContainer(FileResolver(root))
    return transpile_container(container, entry_names(paths, root), formatter, options)


def entry_names(paths: Iterable[Path | str], root: Path | str) -> list[str]:
    """Turn entry file paths into root-relative module paths.

    Raises:
        UnresolvedImportError: If a path lies outside `root`.
    """
    root = Path(root).resolve()
    entries = []
    for path in paths:
        try:
            entries.append(Path(path).resolve().relative_to(root).as_posix())
        except ValueError:
            msg = f"{path} is not inside the module root {root}"
            raise UnresolvedImportError(msg) from None
    return entries


__all__ = [
    "entry_names",
    "transpile",
    "transpile_container",
    "transpile_files",
    "transpile_sources",
]
