"""Controllers — the handler types fixtures render in.

A controller decides where templates live and renders them through
kida. Subclass :class:`Controller` once per group of views::

    class OrdersController(Controller):
        pass

    OrdersController.controller_name()   # "orders"

Under ``OrdersController``, ``render("show")`` resolves to
``orders/show.html`` and ``render(partial="order")`` to
``orders/_order.html``. Names that already contain a ``/`` are used as
given.
"""

import json
import re
from collections.abc import Mapping
from pathlib import PurePosixPath
from typing import Any, ClassVar

from kida import Environment

from magic_lamp.errors import ArgumentError, ConfigurationError
from magic_lamp.templating import render_block, render_inline, render_template

# Render options that are not template context
_OPTION_KEYS = frozenset(
    {
        "as",
        "as_",
        "block",
        "collection",
        "html",
        "inline",
        "json",
        "locals",
        "partial",
        "plain",
        "template",
        "text",
    }
)

_ACRONYM_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CAMEL_RE = re.compile(r"([a-z\d])([A-Z])")


def underscore(name: str) -> str:
    """Convert a CamelCase name to snake_case (``LineItems`` -> ``line_items``)."""
    name = _ACRONYM_RE.sub(r"\1_\2", name)
    return _CAMEL_RE.sub(r"\1_\2", name).lower()


class Controller:
    """The generic controller.

    Fixtures registered without a controller render here and keep their
    names unprefixed. Set the ``name`` class attribute to override the
    name derived from the class name.
    """

    name: ClassVar[str | None] = None

    def __init__(self, env: Environment | None = None, *, template_suffix: str = ".html") -> None:
        self.env = env
        self.template_suffix = template_suffix
        self.assigns: dict[str, Any] = {}

    @classmethod
    def controller_name(cls) -> str:
        """Conventional name: the class name without ``Controller``, snake_cased."""
        if cls.name is not None:
            return cls.name
        return underscore(cls.__name__.removesuffix("Controller"))

    def assign(self, **values: Any) -> "Controller":
        """Add values to the context of every render on this controller."""
        self.assigns.update(values)
        return self

    def resolve_template(self, name: str, *, partial: bool = False) -> str:
        """Resolve a template or partial name relative to this controller."""
        directory, _, base = str(name).rpartition("/")
        if partial and not base.startswith("_"):
            base = f"_{base}"
        if not directory:
            directory = self.controller_name()
        path = f"{directory}/{base}" if directory else base
        if not PurePosixPath(base).suffix:
            path += self.template_suffix
        return path

    def render(self, *args: Any, **options: Any) -> str:
        """Render to a string.

        ``render("show", order=order)`` renders a template with the keyword
        arguments as context. Without a positional argument the keywords
        are render options: ``template``, ``partial`` (with ``collection``
        and ``as_``), ``block``, ``locals``, ``inline``, ``json``,
        ``plain``/``text`` and ``html``. Unrecognised keywords join the
        context.
        """
        if args and not isinstance(args[0], Mapping):
            context = {**self.assigns, **options.pop("locals", {}), **options}
            return self._render_file(self.resolve_template(args[0]), context)
        fields = {**args[0], **options} if args else options
        return self._render_options(fields)

    render_to_string = render

    def _render_options(self, fields: Mapping[str, Any]) -> str:
        if "json" in fields:
            value = fields["json"]
            return value if isinstance(value, str) else json.dumps(value)
        for key in ("plain", "text", "html"):
            if key in fields:
                return str(fields[key])

        context = {
            **self.assigns,
            **fields.get("locals", {}),
            **{k: v for k, v in fields.items() if k not in _OPTION_KEYS},
        }
        block = fields.get("block")

        if "inline" in fields:
            return render_inline(self._environment(), fields["inline"], context)

        if fields.get("partial") is not None:
            partial = str(fields["partial"])
            template = self.resolve_template(partial, partial=True)
            if "collection" in fields:
                item_name = fields.get("as_") or fields.get("as") or PurePosixPath(partial).stem
                return "".join(
                    self._render_file(template, {**context, item_name: item}, block)
                    for item in fields["collection"]
                )
            return self._render_file(template, context, block)

        if fields.get("template") is not None:
            return self._render_file(self.resolve_template(fields["template"]), context, block)

        keys = ", ".join(sorted(fields)) or "nothing"
        msg = f"render needs a template, partial, inline, json, plain or html option; got {keys}"
        raise ArgumentError(msg)

    def _render_file(self, name: str, context: dict[str, Any], block: str | None = None) -> str:
        env = self._environment()
        if block is not None:
            return render_block(env, name, block, context)
        return render_template(env, name, context)

    def _environment(self) -> Environment:
        if self.env is None:
            msg = f"{type(self).__name__} has no template environment to render with."
            raise ConfigurationError(msg)
        return self.env

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.controller_name()!r}>"
