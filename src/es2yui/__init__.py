"""es2yui: ES module to YUI.add() module transpiler."""

from __future__ import annotations

import sys

from es2yui.transpiler import transpile, transpile_files, transpile_sources


def main() -> None:
    """Entry point for the es2yui CLI."""
    from es2yui.cli import main as cli_main

    sys.exit(cli_main())


__all__ = ["main", "transpile", "transpile_files", "transpile_sources"]
