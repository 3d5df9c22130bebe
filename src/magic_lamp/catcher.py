"""RenderCatcher — a stand-in controller that records the render call.

A fixture body is a callable that receives a controller-like object and
calls ``render`` on it exactly once::

    def body(c):
        c.assign(order=Order(id=1))
        c.render(partial="order")

Unbound, the catcher only records the render argument; that is how
fixture names are inferred at registration time. Bound to a real
controller, it also renders and keeps the output.

Any other attribute access or call on the catcher is a no-op that
returns the catcher, so helper calls inside a body never raise.
"""

from collections.abc import Callable
from contextlib import AbstractContextManager, nullcontext
from typing import Any

from magic_lamp.callbacks import Configuration
from magic_lamp.controller import Controller
from magic_lamp.render_argument import RenderArgument, parse_render_call

FixtureBody = Callable[[Any], Any]


class RenderCatcher:
    """Records the first argument of a render call."""

    def __init__(
        self,
        controller: Controller | None = None,
        configuration: Configuration | None = None,
    ) -> None:
        self.controller = controller
        self.configuration = configuration
        self.render_argument: RenderArgument | None = None
        self.rendered: str | None = None

    def render(self, *args: Any, **kwargs: Any) -> Any:
        """Record the render argument; render for real when bound."""
        self.render_argument = parse_render_call(args, kwargs)
        if self.controller is None:
            return self
        self.rendered = self.controller.render(*args, **kwargs)
        return self.rendered

    def first_render_argument(self, body: FixtureBody) -> RenderArgument | None:
        """Run *body* and return the argument its render call received."""
        with self._around():
            body(self)
        return self.render_argument

    def capture(self, body: FixtureBody) -> str | None:
        """Run *body* and return what the bound controller rendered.

        A body that never calls ``render`` but returns a string has that
        string passed through as the output.
        """
        with self._around():
            result = body(self)
        if self.render_argument is None and isinstance(result, str):
            return result
        return self.rendered

    def _around(self) -> AbstractContextManager[None]:
        if self.configuration is None:
            return nullcontext()
        return self.configuration.around()

    # -- Catch-all --

    def __getattr__(self, name: str) -> Any:
        # Only reached for attributes the catcher itself lacks.
        if name.startswith("__"):
            raise AttributeError(name)
        controller = self.__dict__.get("controller")
        if controller is not None and hasattr(controller, name):
            return getattr(controller, name)
        return self

    def __call__(self, *args: Any, **kwargs: Any) -> "RenderCatcher":
        return self

    def __getitem__(self, key: Any) -> "RenderCatcher":
        return self

    def __setitem__(self, key: Any, value: Any) -> None:
        pass

    def __repr__(self) -> str:
        return f"<RenderCatcher controller={self.controller!r} argument={self.render_argument!r}>"
