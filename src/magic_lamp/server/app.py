"""FixturesApp — serves fixtures over HTTP to JavaScript test runners.

Two endpoints under ``LampConfig.mount_path`` (default ``/magic_lamp``):

- ``GET /magic_lamp/fixtures/{name}`` reloads every lamp file, then
  returns the named fixture as plain text.
- ``GET /magic_lamp/fixtures`` returns a JSON object of every fixture.
  It never reloads a loaded registry. As a deliberate deviation from a
  strict no-reload index, it loads lamp files once while the registry
  is empty.

Run it with any ASGI server, e.g. ``uvicorn --factory magic_lamp.server:create_app``.
"""

import logging

from magic_lamp._internal.asgi import Receive, Scope, Send
from magic_lamp.config import LampConfig
from magic_lamp.errors import REPORTED_ERRORS, HTTPError
from magic_lamp.http.request import Request
from magic_lamp.http.response import Response
from magic_lamp.registry import FixtureRegistry
from magic_lamp.server.errors import handle_fixture_error, handle_http_error
from magic_lamp.server.routing import Router
from magic_lamp.server.sender import send_response

logger = logging.getLogger("magic_lamp.server")


class FixturesApp:
    """ASGI application around one :class:`FixtureRegistry`.

    Pass the registry explicitly to serve an isolated one; otherwise the
    app builds its own from *config*.
    """

    __slots__ = ("config", "registry", "router")

    def __init__(
        self,
        registry: FixtureRegistry | None = None,
        *,
        config: LampConfig | None = None,
    ) -> None:
        self.registry = registry if registry is not None else FixtureRegistry(config)
        self.config = self.registry.config
        self.router = Router()

        mount = self.config.mount_path.rstrip("/")
        self.router.add(f"{mount}/fixtures", self.index)
        self.router.add(f"{mount}/fixtures/{{name:path}}", self.show)

    # -- Actions --

    def show(self, request: Request) -> Response:
        """Reload lamp files and render one fixture."""
        self.registry.load_lamp_files()
        rendered = self.registry.generate_fixture(request.path_params["name"])
        return Response(body=rendered or "")

    def index(self, request: Request) -> Response:  # noqa: ARG002
        """Render every fixture as a JSON object.

        Deviation from a strict no-reload index: an empty registry has
        its lamp files loaded once. A loaded registry is never reloaded
        here, so edits to lamp files only show up through ``show``.
        """
        if not len(self.registry):
            self.registry.load_lamp_files()
        return Response.json_response(self.registry.generate_all_fixtures())

    # -- ASGI --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        request = Request.from_asgi(scope)
        try:
            match = self.router.match(request.method, request.path)
            response = match.route.handler(request.with_path_params(match.path_params))
        except REPORTED_ERRORS as exc:
            response = handle_fixture_error(exc, request)
        except HTTPError as exc:
            response = handle_http_error(exc, request)

        await send_response(response, send)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Acknowledge the ASGI lifespan protocol. Nothing to set up."""
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                logger.debug("Serving fixtures from %s", self.registry.fixtures_path())
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
