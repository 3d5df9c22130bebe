"""Authoring-time configuration and the callbacks run around each fixture.

A registry owns one :class:`Configuration`. ``magic_lamp_config.py`` fills
it in on every load::

    import magic_lamp

    @magic_lamp.configure
    def setup(config):
        config.before_each(seed_database)
        config.after_each(clear_database)
        config.global_defaults["controller"] = ApplicationController
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

Callback = Callable[[], Any]


class Configuration:
    """Mutable per-registry options set by the config file."""

    __slots__ = ("after_callbacks", "before_callbacks", "global_defaults", "infer_names")

    def __init__(self) -> None:
        self.before_callbacks: list[Callback] = []
        self.after_callbacks: list[Callback] = []
        self.global_defaults: dict[str, Any] = {}
        self.infer_names = True

    def before_each(self, callback: Callback) -> Callback:
        """Run *callback* before every fixture body. Usable as a decorator."""
        self.before_callbacks.append(callback)
        return callback

    def after_each(self, callback: Callback) -> Callback:
        """Run *callback* after every fixture body. Usable as a decorator."""
        self.after_callbacks.append(callback)
        return callback

    @contextmanager
    def around(self) -> Iterator[None]:
        """Bracket a block with the before and after callbacks.

        After callbacks run even when the block raises.
        """
        for callback in self.before_callbacks:
            callback()
        try:
            yield
        finally:
            for callback in self.after_callbacks:
                callback()

    def __repr__(self) -> str:
        return (
            f"<Configuration before={len(self.before_callbacks)} "
            f"after={len(self.after_callbacks)} infer_names={self.infer_names}>"
        )
