"""Filesystem discovery of lamp files.

Lamp files are ordinary Python modules named ``*_lamp.py`` under the
fixtures directory (``spec/magic_lamp`` or ``test/magic_lamp``). Each
one registers fixtures when executed. The tree is walked in sorted
order so the same files always register in the same order.
Directories starting with ``_`` or ``.`` are skipped.
"""

from __future__ import annotations

import importlib.util
import logging
import sys
from pathlib import Path
from types import ModuleType

from magic_lamp.errors import ConfigurationError

logger = logging.getLogger("magic_lamp.discovery")


def resolve_fixtures_root(root: str | Path) -> Path:
    """Return ``<root>/spec`` when it exists, otherwise ``<root>/test``."""
    base = Path(root)
    spec_root = base / "spec"
    if spec_root.is_dir():
        return spec_root
    return base / "test"


def find_lamp_files(directory: str | Path, suffix: str = "_lamp.py") -> list[Path]:
    """Walk *directory* and return every lamp file, sorted.

    Raises:
        ConfigurationError: If *directory* does not exist.
    """
    root = Path(directory)
    if not root.is_dir():
        msg = f"Fixtures directory not found: {root}"
        raise ConfigurationError(msg)

    files: list[Path] = []
    _walk_directory(root, suffix, files)
    return files


def _walk_directory(directory: Path, suffix: str, files: list[Path]) -> None:
    entries = sorted(directory.iterdir())
    files.extend(item for item in entries if item.is_file() and item.name.endswith(suffix))
    for item in entries:
        if not item.is_dir():
            continue
        if item.name.startswith("_") or item.name.startswith("."):
            continue
        _walk_directory(item, suffix, files)


def find_config_file(directories: list[Path], file_name: str) -> Path | None:
    """Return the first ``file_name`` found in *directories*, if any."""
    for directory in directories:
        candidate = directory / file_name
        if candidate.is_file():
            return candidate
    return None


def exec_file(path: Path) -> ModuleType:
    """Execute a Python file as a fresh module and return it.

    The module gets a unique name so re-executing a file on every load
    never reuses a cached module. It sits in ``sys.modules`` only while
    the file executes, long enough for dataclasses and typing to resolve
    the module by name.
    """
    module_name = f"_magic_lamp_{path.stem}_{id(path)}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        msg = f"Cannot load {path} as a Python module."
        raise ConfigurationError(msg)
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    finally:
        sys.modules.pop(module_name, None)
    logger.debug("Executed %s", path)
    return module
