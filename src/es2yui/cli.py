"""Command-line interface.

Provides the `es2yui` command with subcommands for:
- Building (wrapping) modules into YUI.add() files
- Listing each module's dependencies
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from es2yui.config import BuildConfig, find_build_config, load_build_config
from es2yui.errors import TranspileError
from es2yui.formatters import BuildOptions, get_formatter
from es2yui.formatters.prelude import dependency_names
from es2yui.modules import FileResolver, ModuleContainer
from es2yui.transpiler import entry_names, transpile_files

logger = logging.getLogger("es2yui")


def _load_config(args: argparse.Namespace) -> BuildConfig:
    """Read the configuration file (explicit or discovered) and apply flags."""
    if args.config:
        config = load_build_config(args.config)
    else:
        found = find_build_config(Path.cwd())
        config = load_build_config(found) if found else BuildConfig()

    if args.root:
        config.root = Path(args.root)
    if getattr(args, "out", None):
        config.output_dir = Path(args.out)
    if getattr(args, "version_marker", None):
        config.version = args.version_marker
    return config


def _entry_paths(args: argparse.Namespace, config: BuildConfig) -> list[Path]:
    if args.files:
        return [Path(f) for f in args.files]
    return [config.root / m for m in config.modules]


def cmd_build(args: argparse.Namespace) -> int:
    """Transpile modules and write (or print) the wrapped output."""
    config = _load_config(args)
    entries = _entry_paths(args, config)
    if not entries:
        logger.error("no modules given (pass files or list `modules` in es2yui.yaml)")
        return 1

    formatter = get_formatter(config.format)
    results = transpile_files(
        entries, config.root, formatter, BuildOptions(version=config.version)
    )

    for module, code in results:
        if config.output_dir is None:
            sys.stdout.write(code)
            continue
        target = config.output_dir / module.relative_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(code, encoding="utf-8")
        logger.info("wrote %s", target)
    return 0


def cmd_deps(args: argparse.Namespace) -> int:
    """Print the `requires` list of every module reached from the entries."""
    config = _load_config(args)
    entries = _entry_paths(args, config)
    if not entries:
        logger.error("no modules given (pass files or list `modules` in es2yui.yaml)")
        return 1

    container = ModuleContainer(FileResolver(config.root))
    for entry in entry_names(entries, config.root):
        container.get_module(entry)

    for module in container.get_modules():
        print(f"{module.name}: {', '.join(dependency_names(module)) or '-'}")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="es2yui",
        description="Rewrite ES modules as YUI.add() modules",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every step",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only log errors",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "files",
        nargs="*",
        help="Entry module files (default: `modules` from the configuration)",
    )
    common.add_argument(
        "--root",
        help="Directory module names are relative to (default: current directory)",
    )
    common.add_argument(
        "--config",
        help="Path to es2yui.yaml (default: search from the current directory)",
    )

    # build command
    build_parser = subparsers.add_parser(
        "build", parents=[common], help="Transpile modules"
    )
    build_parser.add_argument(
        "-o",
        "--out",
        help="Output directory (default: print to stdout)",
    )
    build_parser.add_argument(
        "--version-marker",
        help="Version passed to YUI.add (default: @VERSION@)",
    )
    build_parser.set_defaults(func=cmd_build)

    # deps command
    deps_parser = subparsers.add_parser(
        "deps", parents=[common], help="Show module dependencies"
    )
    deps_parser.set_defaults(func=cmd_deps)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if not args.command:
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except TranspileError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
