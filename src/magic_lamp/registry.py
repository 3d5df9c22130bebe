"""The fixture registry.

Maps fixture names to the controller and body that produce them::

    registry = FixtureRegistry(LampConfig(root="."))

    registry.register_fixture(lambda c: c.render("index"))
    registry.register_fixture(
        lambda c: c.render(partial="order", order=order),
        controller=OrdersController,
    )

    registry.generate_fixture("orders/order")   # rendered HTML

Lifecycle:
    A registry starts empty. ``load_lamp_files()`` swaps in a brand-new
    mapping built by executing every lamp file; it never merges into or
    returns the previous one. ``register_fixture()`` and
    ``generate_fixture()`` work on whatever mapping is current.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from kida import Environment

from magic_lamp.callbacks import Configuration
from magic_lamp.catcher import FixtureBody, RenderCatcher
from magic_lamp.config import LampConfig
from magic_lamp.context import use_registry
from magic_lamp.controller import Controller
from magic_lamp.discovery import exec_file, find_config_file, find_lamp_files, resolve_fixtures_root
from magic_lamp.errors import (
    AlreadyRegisteredFixtureError,
    AmbiguousFixtureNameError,
    ArgumentError,
    UnregisteredFixtureError,
)
from magic_lamp.render_argument import describe, infer_fixture_name
from magic_lamp.templating import create_environment

logger = logging.getLogger("magic_lamp.registry")


@dataclass(frozen=True, slots=True)
class RegisteredFixture:
    """A named render call waiting to be generated."""

    name: str
    controller: type[Controller]
    body: FixtureBody


class FixtureRegistry:
    """Named fixtures, the configuration they load with, and their renderer."""

    def __init__(self, config: LampConfig | None = None, *, env: Environment | None = None) -> None:
        self.config = config or LampConfig()
        self.registered_fixtures: dict[str, RegisteredFixture] = {}
        self.configuration = Configuration()
        self._env = env

    # -- Setup --

    @property
    def environment(self) -> Environment:
        """The kida environment controllers render with. Created on first use."""
        if self._env is None:
            self._env = create_environment(self.config)
        return self._env

    @property
    def default_controller(self) -> type[Controller]:
        """Controller used when none is given at registration."""
        return self.configuration.global_defaults.get("controller", Controller)

    def configure(self, setup: Callable[[Configuration], Any]) -> Callable[[Configuration], Any]:
        """Call *setup* with this registry's configuration. Usable as a decorator."""
        setup(self.configuration)
        return setup

    # -- Registration --

    def register_fixture(
        self,
        body: FixtureBody | None = None,
        *,
        controller: type[Controller] | None = None,
        name: str | None = None,
    ) -> RegisteredFixture:
        """Register *body* as a fixture.

        When *name* is omitted it is inferred from the body's render call.
        Under any controller but the default one the name is prefixed
        with the controller's name, unless it already starts with it.

        Raises:
            ArgumentError: No body was given.
            AmbiguousFixtureNameError: No name was given and none could be
                inferred.
            AlreadyRegisteredFixtureError: The resolved name is taken.
        """
        if body is None or not callable(body):
            msg = "register_fixture requires a block (a callable fixture body)"
            raise ArgumentError(msg)

        controller = controller or self.default_controller
        if name is None:
            name = self._infer_name(body)
        name = self._prefix(str(name), controller)

        if self.registered(name):
            raise AlreadyRegisteredFixtureError(name)

        fixture = RegisteredFixture(name=name, controller=controller, body=body)
        self.registered_fixtures[name] = fixture
        logger.debug("Registered fixture %r (%s)", name, controller.__name__)
        return fixture

    rub = register_fixture
    wish = register_fixture

    def fixture(
        self,
        body: FixtureBody | None = None,
        *,
        controller: type[Controller] | None = None,
        name: str | None = None,
    ) -> Any:
        """Decorator form of :meth:`register_fixture`.

        Usage::

            @registry.fixture(controller=OrdersController)
            def order(c):
                c.render(partial="order", order=Order(id=1))
        """
        if body is not None:
            self.register_fixture(body, controller=controller, name=name)
            return body

        def decorator(func: FixtureBody) -> FixtureBody:
            self.register_fixture(func, controller=controller, name=name)
            return func

        return decorator

    def _infer_name(self, body: FixtureBody) -> str:
        if not self.configuration.infer_names:
            msg = "name inference is disabled; pass name= explicitly"
            raise AmbiguousFixtureNameError(msg)
        argument = RenderCatcher(configuration=self.configuration).first_render_argument(body)
        name = infer_fixture_name(argument)
        if name is None:
            raise AmbiguousFixtureNameError(describe(argument))
        return name

    def _prefix(self, name: str, controller: type[Controller]) -> str:
        if controller is Controller or controller is self.default_controller:
            return name
        prefix = controller.controller_name()
        if not prefix or name.startswith(f"{prefix}/"):
            return name
        return f"{prefix}/{name}"

    # -- Lookup --

    def registered(self, name: str) -> bool:
        """Whether a fixture called *name* exists."""
        return name in self.registered_fixtures

    def names(self) -> list[str]:
        """Registered fixture names, sorted."""
        return sorted(self.registered_fixtures)

    def __contains__(self, name: object) -> bool:
        return name in self.registered_fixtures

    def __iter__(self) -> Iterator[str]:
        return iter(self.registered_fixtures)

    def __len__(self) -> int:
        return len(self.registered_fixtures)

    # -- Loading --

    def path(self) -> Path:
        """The fixtures root: ``<root>/spec``, or ``<root>/test`` without one."""
        return resolve_fixtures_root(self.config.root)

    def fixtures_path(self) -> Path:
        """The directory lamp files are loaded from."""
        return self.path() / self.config.fixtures_dir_name

    def load_config(self, directory: str | Path | None = None) -> Configuration:
        """Reset the configuration and execute the config file, if any.

        The config file is looked up in the fixtures directory first, then
        in its parent.
        """
        directory = Path(directory) if directory is not None else self.fixtures_path()
        self.configuration = Configuration()
        config_file = find_config_file([directory, directory.parent], self.config.config_file_name)
        if config_file is not None:
            with use_registry(self):
                exec_file(config_file)
            logger.debug("Loaded config %s", config_file)
        return self.configuration

    def load_lamp_files(self, directory: str | Path | None = None) -> dict[str, RegisteredFixture]:
        """Replace the registry with the fixtures the lamp files define.

        Always installs a new mapping. If a lamp file raises, the previous
        mapping and configuration are restored and the error propagates.
        """
        directory = Path(directory) if directory is not None else self.fixtures_path()
        previous = (self.registered_fixtures, self.configuration)
        self.registered_fixtures = {}
        try:
            self.load_config(directory)
            with use_registry(self):
                for lamp_file in find_lamp_files(directory, self.config.lamp_file_suffix):
                    exec_file(lamp_file)
        except BaseException:
            self.registered_fixtures, self.configuration = previous
            raise

        logger.info("Loaded %d fixtures from %s", len(self.registered_fixtures), directory)
        return self.registered_fixtures

    load = load_lamp_files

    # -- Generation --

    def generate_fixture(self, name: str) -> str | None:
        """Render the fixture called *name*.

        Instantiates the fixture's controller and runs the body on a
        :class:`RenderCatcher` bound to it, with the configured callbacks
        around it.

        Raises:
            UnregisteredFixtureError: No fixture called *name*.
        """
        fixture = self.registered_fixtures.get(name)
        if fixture is None:
            raise UnregisteredFixtureError(name)

        controller = fixture.controller(
            self.environment, template_suffix=self.config.template_suffix
        )
        rendered = RenderCatcher(controller, self.configuration).capture(fixture.body)
        logger.debug("Generated fixture %r", name)
        return rendered

    generate = generate_fixture

    def generate_all_fixtures(self) -> dict[str, str | None]:
        """Render every fixture. Stops at the first failure."""
        return {name: self.generate_fixture(name) for name in list(self.registered_fixtures)}

    generate_all = generate_all_fixtures

    def __repr__(self) -> str:
        return f"<FixtureRegistry {len(self)} fixtures root={str(self.config.root)!r}>"
