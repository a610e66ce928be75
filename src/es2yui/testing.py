"""Testing utilities for es2yui."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from es2yui.runner import evaluate
from es2yui.transpiler import transpile_sources

if TYPE_CHECKING:
    from collections.abc import Mapping


def transpile_and_evaluate(sources: Mapping[str, str], expression: str) -> Any:
    """Transpile in-memory modules and evaluate an expression over them in Node.

    Args:
        sources: ES module source keyed by module name.
        expression: JavaScript expression; `use(name)` returns a module's
            export table.

    Returns:
        The JSON-decoded value of the expression.
    """
    outputs = transpile_sources(sources)
    return evaluate(outputs.values(), expression)


def load_fixtures(directory: Path | str) -> dict[str, str]:
    """Read every `.js` file under a directory, keyed by module name.

    Args:
        directory: Fixture root; names are relative to it.

    Returns:
        {module name: source}.
    """
    dir_path = Path(directory)
    if not dir_path.exists():
        return {}
    return {
        path.relative_to(dir_path).with_suffix("").as_posix(): path.read_text(
            encoding="utf-8"
        )
        for path in sorted(dir_path.rglob("*.js"))
    }
