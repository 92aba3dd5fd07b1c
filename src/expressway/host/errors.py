"""Error handling pipeline for host requests.

Maps HTTPError exceptions and unexpected failures to JSON error
responses, using registered error handlers when there are any.
"""

import inspect
import logging
from collections.abc import Callable
from typing import Any, TypeAlias

from expressway.errors import HTTPError
from expressway.host.negotiation import negotiate
from expressway.http.request import Request
from expressway.http.response import Response

logger = logging.getLogger("expressway.server")

ErrorHandler: TypeAlias = Callable[..., Any]


def error_body(code: str, message: str, status: int) -> dict[str, Any]:
    """The default JSON error payload."""
    return {"code": code, "message": message, "data": {"status": status}}


def call_error_handler(handler: ErrorHandler, request: Request, exc: Exception) -> Response:
    """Invoke a user-registered error handler with introspected arguments.

    Error handlers may accept zero, one (request), or two (request, exc) args.
    """
    params = list(inspect.signature(handler).parameters.values())

    if len(params) >= 2:
        result = handler(request, exc)
    elif len(params) == 1:
        result = handler(request)
    else:
        result = handler()

    return negotiate(result)


def handle_http_error(
    exc: HTTPError,
    request: Request,
    error_handlers: dict[int | type, ErrorHandler],
) -> Response:
    """Map an HTTPError to a Response using registered error handlers."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    # Try exact exception type, then status code
    handler = error_handlers.get(type(exc)) or error_handlers.get(exc.status)
    if handler is not None:
        response = call_error_handler(handler, request, exc)
        # Keep the exception's status unless the handler chose its own
        if response.status == 200:
            response = response.with_status(exc.status)
        return response

    detail = exc.detail or f"Error {exc.status}"
    resp = Response.from_data(error_body(exc.code, detail, exc.status), status=exc.status)
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


def handle_internal_error(
    exc: Exception,
    request: Request,
    error_handlers: dict[int | type, ErrorHandler],
    debug: bool,
) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)

    handler = error_handlers.get(500) or error_handlers.get(type(exc))
    if handler is not None:
        return call_error_handler(handler, request, exc).with_status(500)

    message = f"{type(exc).__name__}: {exc}" if debug else "Internal Server Error"
    return Response.from_data(error_body("internal_server_error", message, 500), status=500)
