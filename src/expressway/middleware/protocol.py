"""Middleware protocol and the tagged accumulator.

A middleware receives the request and the value accumulated so far and
returns the next value::

    def load_item(request: Request, acc: dict) -> dict:
        return {**acc, "id": request.path_params["id"]}

Returning a ``Response`` (or wrapping any value in ``Final``) ends the
chain. Everything else is intermediate and is handed to the next
middleware.
"""

from dataclasses import dataclass
from typing import Any, Protocol, TypeAlias

from expressway.http.request import Request


class Middleware(Protocol):
    """Protocol for expressway middleware.

    Accepts both functions and callable objects::

        # Function middleware
        def require_json(request: Request, acc: Any) -> Any:
            if request.content_type != "application/json":
                return Response.from_data({"error": "json only"}, status=415)
            return acc

        # Class middleware
        class Counter:
            def __call__(self, request: Request, acc: Any) -> Any:
                ...
    """

    def __call__(self, request: Request, accumulator: Any, /) -> Any: ...


@dataclass(frozen=True, slots=True)
class Intermediate:
    """A value still on its way through the chain."""

    value: Any


@dataclass(frozen=True, slots=True)
class Final:
    """A terminal value, ready for the host to send. Ends the chain."""

    response: Any

    @property
    def value(self) -> Any:
        return self.response


# One step of chain execution
Step: TypeAlias = Intermediate | Final
