"""Immutable HTTP request.

Frozen metadata parsed once from the ASGI scope. Fixture endpoints only
read the method and path, so there is no body or header access.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from magic_lamp._internal.asgi import Scope


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request."""

    method: str
    path: str
    path_params: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_asgi(cls, scope: Scope) -> Request:
        """Build a Request from a raw ASGI HTTP scope."""
        return cls(method=scope["method"], path=scope["path"])

    def with_path_params(self, path_params: dict[str, str]) -> Request:
        """Return a copy carrying the matched route's path parameters."""
        return replace(self, path_params=path_params)
