"""Error boundary of the fixtures app.

Fixture authoring mistakes and bare TypeErrors raised by fixture bodies
become a 500 carrying the error message, and the message plus the
backtrace go to the ``magic_lamp.server`` logger.
Routing errors keep their own status. Every other exception is a bug
and is left to propagate.
"""

import logging
import traceback

from magic_lamp.errors import HTTPError
from magic_lamp.http.request import Request
from magic_lamp.http.response import Response

logger = logging.getLogger("magic_lamp.server")

_BACKTRACE_INDENT = "\n    "


def format_error(exc: BaseException, message: str | None = None) -> str:
    """The message followed by the backtrace, one indented frame per line."""
    message = str(exc) if message is None else message
    frames = [line.rstrip() for line in traceback.format_tb(exc.__traceback__)]
    return _BACKTRACE_INDENT.join([message, *frames])


def handle_fixture_error(exc: Exception, request: Request) -> Response:
    """Map a fixture authoring error or a bare TypeError to a plain-text 500."""
    message = str(exc)
    logger.error("%s %s failed: %s", request.method, request.path, format_error(exc, message))
    return Response(body=message, status=500)


def handle_http_error(exc: HTTPError, request: Request) -> Response:
    """Map a routing error to a plain-text response with its status."""
    logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)
    response = Response(body=exc.detail or f"Error {exc.status}", status=exc.status)
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response
