"""Module runner: execute wrapped modules with Node.js and a minimal YUI loader."""

from __future__ import annotations

import json
import subprocess
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable

# Just enough of YUI to register modules and instantiate them with their
# `requires` resolved first.
_YUI_SHIM = """\
'use strict';
const __registry = new Map();

const YUI = {
  add(name, factory, version, config) {
    __registry.set(name, { factory, version, config, exports: null });
  },
};

function __use(name) {
  const entry = __registry.get(name);
  if (!entry) {
    throw new Error('module not registered: ' + name);
  }
  if (entry.exports === null) {
    entry.exports = {};
    const imports = {};
    for (const dep of (entry.config && entry.config.requires) || []) {
      imports[dep] = __use(dep);
    }
    const result = entry.factory(YUI, name, imports, entry.exports);
    if (result !== entry.exports) {
      throw new Error('factory for ' + name + ' did not return its exports');
    }
  }
  return entry.exports;
}
"""

_REPORT = """
const __result = (function (use) {{
  return ({expression});
}})(__use);
process.stdout.write(JSON.stringify(__result === undefined ? null : __result));
"""


def build_script(modules: Iterable[str], expression: str) -> str:
    """Assemble a Node.js script: loader shim, modules, then the result report.

    Args:
        modules: Wrapped module sources (each a `YUI.add(...)` call).
        expression: JavaScript expression evaluated after loading; `use(name)`
            returns a module's export table.

    Returns:
        The script source.
    """
    parts = [_YUI_SHIM, *modules, _REPORT.format(expression=expression)]
    return "\n".join(parts)


def run_js(script: str) -> str:
    """Run JavaScript with Node.js and return its output.

    Raises:
        subprocess.CalledProcessError: If Node.js execution fails.
    """
    with tempfile.NamedTemporaryFile(mode="w", suffix=".js", delete=False) as js_file:
        js_file.write(script)
        js_path = Path(js_file.name)

    try:
        result = subprocess.run(
            ["node", str(js_path)],
            check=True,
            capture_output=True,
            text=True,
            encoding="utf-8",
        )
        return result.stdout
    finally:
        js_path.unlink(missing_ok=True)


def evaluate(modules: Iterable[str], expression: str) -> Any:
    """Load wrapped modules in Node.js and evaluate `expression`.

    Returns:
        The JSON-decoded value of the expression (undefined becomes None).
    """
    return json.loads(run_js(build_script(modules, expression)))


def has_node() -> bool:
    """Check if Node.js is available."""
    try:
        subprocess.run(["node", "--version"], check=True, capture_output=True)
        return True
    except (subprocess.CalledProcessError, FileNotFoundError):
        return False


__all__ = ["build_script", "evaluate", "has_node", "run_js"]
