"""Render argument variants and fixture name inference.

A render call has one meaningful argument: the first one. In Python it
comes in two shapes::

    c.render("orders/show", order=order)        # ScalarArgument("orders/show")
    c.render(partial="order", locals={...})     # MappingArgument({...})

Inference looks at the scalar itself, or at the ``template`` then
``partial`` key of the mapping.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, TypeAlias

# Keys of a render mapping that name a template, in lookup order
NAME_KEYS: tuple[str, ...] = ("template", "partial")


@dataclass(frozen=True, slots=True)
class ScalarArgument:
    """A render call whose first argument is a single value."""

    value: Any


@dataclass(frozen=True, slots=True)
class MappingArgument:
    """A render call whose first argument is an options mapping."""

    fields: dict[str, Any] = field(default_factory=dict)


RenderArgument: TypeAlias = ScalarArgument | MappingArgument


def parse_render_call(args: tuple[Any, ...], kwargs: Mapping[str, Any]) -> RenderArgument:
    """Collapse a render call's arguments into its first render argument.

    The first positional argument wins; a positional mapping counts as
    a mapping argument. With no positional argument the keyword
    arguments are the mapping. Everything after the first argument is
    dropped.
    """
    if args:
        first = args[0]
        if isinstance(first, Mapping):
            return MappingArgument(dict(first))
        return ScalarArgument(first)
    return MappingArgument(dict(kwargs))


def infer_fixture_name(argument: RenderArgument | None) -> str | None:
    """Return the fixture name a render argument implies, or ``None``."""
    match argument:
        case ScalarArgument(value=value) if value is not None:
            name = str(value)
        case MappingArgument(fields=fields):
            name = next(
                (str(fields[key]) for key in NAME_KEYS if fields.get(key) is not None),
                "",
            )
        case _:
            name = ""
    return name or None


def describe(argument: RenderArgument | None) -> str:
    """Human description of a render argument for error messages."""
    match argument:
        case None:
            return "render was never called"
        case ScalarArgument(value=value):
            return f"render was called with {value!r}"
        case MappingArgument(fields=fields):
            keys = ", ".join(repr(k) for k in fields) or "no keys"
            return (
                f"render was called with a mapping of {keys}; "
                f"expected one of {', '.join(repr(k) for k in NAME_KEYS)}"
            )
    return repr(argument)
