"""Subcommand implementations for the ``magic-lamp`` CLI.

Every command loads the lamp files first. Fixture authoring errors, bare
TypeErrors from fixture bodies and layout errors print to stderr and exit
with code 1.
"""

import argparse
import json
import sys
from pathlib import Path

from magic_lamp.config import LampConfig
from magic_lamp.errors import REPORTED_ERRORS, ConfigurationError
from magic_lamp.registry import FixtureRegistry


def run_command(args: argparse.Namespace, config: LampConfig) -> None:
    """Load the registry and dispatch to the chosen subcommand."""
    registry = FixtureRegistry(config)
    try:
        registry.load_lamp_files()
        if args.command == "list":
            _list(registry)
        elif args.command == "show":
            _show(registry, args.name)
        elif args.command == "dump":
            _dump(registry, args.output)
    except (*REPORTED_ERRORS, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


def _list(registry: FixtureRegistry) -> None:
    for name in registry.names():
        print(name)


def _show(registry: FixtureRegistry, name: str) -> None:
    print(registry.generate_fixture(name) or "", end="")


def _dump(registry: FixtureRegistry, output: str | None) -> None:
    payload = json.dumps(registry.generate_all_fixtures(), indent=2, sort_keys=True)
    if output is None:
        print(payload)
        return
    Path(output).write_text(payload + "\n", encoding="utf-8")
    print(f"Wrote {len(registry)} fixtures to {output}")
