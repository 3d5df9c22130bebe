"""The current registry, via ContextVar.

Lamp files register fixtures with the module-level API
(``magic_lamp.register_fixture``). Those calls land in whichever
registry is current: the one loading the files, or the process-wide
default registry otherwise.

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local across
    threads. No locks needed.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from magic_lamp.registry import FixtureRegistry

registry_var: ContextVar[FixtureRegistry | None] = ContextVar("magic_lamp_registry", default=None)
"""The registry lamp files register into. Set while a registry loads."""

_default: FixtureRegistry | None = None


def default_registry() -> FixtureRegistry:
    """Return the process-wide registry, creating it on first use."""
    global _default
    if _default is None:
        from magic_lamp.registry import FixtureRegistry

        _default = FixtureRegistry()
    return _default


def get_registry() -> FixtureRegistry:
    """Return the current registry."""
    registry = registry_var.get()
    if registry is None:
        return default_registry()
    return registry


@contextmanager
def use_registry(registry: FixtureRegistry) -> Iterator[FixtureRegistry]:
    """Make *registry* current for the duration of the block."""
    token = registry_var.set(registry)
    try:
        yield registry
    finally:
        registry_var.reset(token)
