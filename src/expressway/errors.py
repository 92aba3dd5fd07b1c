"""Expressway exception hierarchy.

Shared across the registry, the host server, and the adapter so every
module raises and catches the same types.

Nothing in the routing core raises for a route that does not apply:
a failed match is a plain ``False``. These types exist for the host,
which has to turn "nothing handled this" into a network response.
"""

from dataclasses import dataclass


class ExpresswayError(Exception):
    """Base for all expressway-specific errors."""


class ConfigurationError(ExpresswayError):
    """Raised when router or host configuration is invalid.

    Typically surfaces while the server freezes its route table.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(ExpresswayError):
    """An error that maps directly to an HTTP status code.

    Raised by the host dispatcher or by middleware. The ASGI handler
    catches these and dispatches to the matching ``@server.error()``
    handler, or renders the default JSON error body.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()
    code: str = "rest_error"

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no registered route matched the request path."""

    def __init__(self, detail: str = "No route was found matching the URL and request method.") -> None:
        super().__init__(status=404, detail=detail, code="rest_no_route")


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — route exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
            code="rest_method_not_allowed",
        )
