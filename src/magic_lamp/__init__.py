"""magic_lamp — render named view fixtures for front-end and view tests.

Register fixtures in ``spec/magic_lamp/*_lamp.py`` (or ``test/magic_lamp``)::

    import magic_lamp
    from myapp.controllers import OrdersController

    magic_lamp.register_fixture(lambda c: c.render("index"))

    @magic_lamp.fixture(controller=OrdersController)
    def order(c):
        c.render(partial="order", order=Order(id=1))

Then generate them::

    magic_lamp.load_lamp_files()
    magic_lamp.generate_fixture("orders/order")

or serve them to a JavaScript test runner (``pip install magic-lamp``)::

    from magic_lamp.server import FixturesApp
    app = FixturesApp()

The module-level functions act on the current registry: the registry
that is loading lamp files, or a process-wide default registry.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

from magic_lamp.context import get_registry

__version__ = "0.1.0-dev"
__all__ = [
    "AlreadyRegisteredFixtureError",
    "AmbiguousFixtureNameError",
    "ArgumentError",
    "Configuration",
    "ConfigurationError",
    "Controller",
    "FixtureRegistry",
    "FixturesApp",
    "LampConfig",
    "MagicLampError",
    "RenderCatcher",
    "UnregisteredFixtureError",
    "configure",
    "fixture",
    "generate_all_fixtures",
    "generate_fixture",
    "get_registry",
    "load_config",
    "load_lamp_files",
    "path",
    "register_fixture",
    "registered",
    "rub",
    "wish",
]


def register_fixture(
    body: Callable[[Any], Any] | None = None,
    *,
    controller: Any = None,
    name: str | None = None,
) -> Any:
    """Register a fixture in the current registry."""
    return get_registry().register_fixture(body, controller=controller, name=name)


rub = register_fixture
wish = register_fixture


def fixture(
    body: Callable[[Any], Any] | None = None,
    *,
    controller: Any = None,
    name: str | None = None,
) -> Any:
    """Decorator that registers a fixture in the current registry."""
    return get_registry().fixture(body, controller=controller, name=name)


def configure(setup: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Call *setup* with the current registry's configuration."""
    return get_registry().configure(setup)


def registered(name: str) -> bool:
    """Whether the current registry has a fixture called *name*."""
    return get_registry().registered(name)


def generate_fixture(name: str) -> str | None:
    """Render one fixture from the current registry."""
    return get_registry().generate_fixture(name)


def generate_all_fixtures() -> dict[str, str | None]:
    """Render every fixture in the current registry."""
    return get_registry().generate_all_fixtures()


def load_lamp_files(directory: str | Path | None = None) -> dict[str, Any]:
    """Reload the current registry from lamp files."""
    return get_registry().load_lamp_files(directory)


def load_config(directory: str | Path | None = None) -> Any:
    """Re-run the config file for the current registry."""
    return get_registry().load_config(directory)


def path() -> Path:
    """The fixtures root of the current registry."""
    return get_registry().path()


def __getattr__(name: str) -> object:
    """Lazy imports for public classes.

    Keeps ``import magic_lamp`` inside lamp files fast.
    """
    if name == "FixtureRegistry":
        from magic_lamp.registry import FixtureRegistry

        return FixtureRegistry

    if name == "LampConfig":
        from magic_lamp.config import LampConfig

        return LampConfig

    if name == "Configuration":
        from magic_lamp.callbacks import Configuration

        return Configuration

    if name == "Controller":
        from magic_lamp.controller import Controller

        return Controller

    if name == "RenderCatcher":
        from magic_lamp.catcher import RenderCatcher

        return RenderCatcher

    if name == "FixturesApp":
        from magic_lamp.server import FixturesApp

        return FixturesApp

    if name in (
        "AlreadyRegisteredFixtureError",
        "AmbiguousFixtureNameError",
        "ArgumentError",
        "ConfigurationError",
        "MagicLampError",
        "UnregisteredFixtureError",
    ):
        from magic_lamp import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
