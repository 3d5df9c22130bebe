"""magic_lamp exception hierarchy.

Shared across the registry, the HTTP surface, and the CLI so every
boundary catches the same types.
"""

from dataclasses import dataclass


class MagicLampError(Exception):
    """Base for all magic_lamp-specific errors."""


class ArgumentError(MagicLampError, TypeError):
    """Raised when a fixture is registered without a body."""


class AlreadyRegisteredFixtureError(MagicLampError):
    """Raised when two fixtures resolve to the same name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"a fixture called '{name}' has already been registered")


class AmbiguousFixtureNameError(MagicLampError):
    """Raised when no fixture name can be inferred from the render call.

    *description* says what was inspected, e.g. the keys of the mapping
    passed to ``render``.
    """

    def __init__(self, description: str) -> None:
        self.description = description
        super().__init__(f"Unable to infer fixture name: {description}")


class UnregisteredFixtureError(MagicLampError):
    """Raised when generating a fixture that was never registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"'{name}' is not a registered fixture")


class ConfigurationError(MagicLampError):
    """Raised when the fixture layout or template setup is invalid."""


# Authoring mistakes raised by magic_lamp itself.
FIXTURE_ERRORS: tuple[type[MagicLampError], ...] = (
    ArgumentError,
    AlreadyRegisteredFixtureError,
    AmbiguousFixtureNameError,
    UnregisteredFixtureError,
)

# Reported by the HTTP and CLI boundaries: the authoring errors plus a bare
# TypeError from a fixture body calling a helper with the wrong arguments.
# Anything else propagates.
REPORTED_ERRORS: tuple[type[Exception], ...] = (*FIXTURE_ERRORS, TypeError)


@dataclass(frozen=True, slots=True)
class HTTPError(MagicLampError):
    """An error that maps directly to an HTTP status code.

    Raised by the router of :class:`~magic_lamp.server.FixturesApp` and
    turned into a plain-text response by the ASGI handler.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """405 — route exists but not for this HTTP method."""

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )
