"""magic-lamp CLI — list, show, and dump fixtures from a shell.

Entry point registered as ``magic-lamp`` in ``pyproject.toml``::

    [project.scripts]
    magic-lamp = "magic_lamp.cli:main"
"""

import argparse
import logging
import sys

from magic_lamp.config import LampConfig


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``magic-lamp`` command."""
    parser = argparse.ArgumentParser(
        prog="magic-lamp",
        description="magic-lamp — render named view fixtures for front-end tests.",
    )
    parser.add_argument("--root", default=".", help="Project root containing spec/ or test/")
    parser.add_argument(
        "--template-dir",
        default="templates",
        help="Template directory, relative to the root",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log loaded files")
    subparsers = parser.add_subparsers(dest="command")

    # -- magic-lamp list --------------------------------------------------
    subparsers.add_parser("list", help="List registered fixture names")

    # -- magic-lamp show --------------------------------------------------
    show_parser = subparsers.add_parser("show", help="Render one fixture")
    show_parser.add_argument("name", help="Fixture name (e.g. orders/order)")

    # -- magic-lamp dump --------------------------------------------------
    dump_parser = subparsers.add_parser("dump", help="Render every fixture as JSON")
    dump_parser.add_argument("-o", "--output", default=None, help="Write JSON to this file")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    config = LampConfig(
        root=args.root,
        template_dir=args.template_dir,
        log_level="debug" if args.verbose else "warning",
    )
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    from magic_lamp.cli._commands import run_command

    run_command(args, config)
