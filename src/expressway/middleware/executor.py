"""Middleware chain execution.

Runs a route's middlewares in registration order, threading an
accumulator through them, and stops as soon as one produces a terminal
value. Strictly sequential and synchronous: no reordering, no retries,
and exceptions raised by a middleware propagate to the caller as is.
"""

import logging
from collections.abc import Iterator, Sequence
from typing import Any

from expressway.http.request import Request
from expressway.http.response import Response
from expressway.middleware.protocol import Final, Intermediate, Middleware, Step

logger = logging.getLogger("expressway.middleware")


def classify(value: Any) -> Step:
    """Tag a middleware's return value as intermediate or terminal."""
    match value:
        case Final() | Intermediate():
            return value
        case Response():
            return Final(value)
        case _:
            return Intermediate(value)


def iter_chain(middlewares: Sequence[Middleware], request: Request) -> Iterator[Step]:
    """Lazily run *middlewares*, yielding one step per middleware.

    The first middleware receives a fresh empty dict as its accumulator;
    each later one receives the unwrapped value of the previous step.
    Nothing runs until the iterator is advanced, and a consumer that
    stops iterating stops the chain.
    """
    accumulator: Any = {}
    for middleware in middlewares:
        step = classify(middleware(request, accumulator))
        yield step
        accumulator = step.value


def resolve(middlewares: Sequence[Middleware], request: Request) -> Step | None:
    """Drive the chain to its first terminal step or to its end.

    Returns the terminal step if one was produced, otherwise the last
    step, or ``None`` for an empty chain.
    """
    last: Step | None = None
    for index, step in enumerate(iter_chain(middlewares, request)):
        last = step
        match step:
            case Final():
                if index < len(middlewares) - 1:
                    logger.debug(
                        "%s %s: chain ended at middleware %d of %d",
                        request.method,
                        request.path,
                        index + 1,
                        len(middlewares),
                    )
                break
    return last


def execute(middlewares: Sequence[Middleware], request: Request) -> Any:
    """Run a middleware chain and return its result.

    The result is the terminal value if a middleware produced one,
    otherwise whatever the last middleware returned, even when that is
    not response-shaped. Interpreting it is up to the host.
    """
    step = resolve(middlewares, request)
    if step is None:
        return None
    return step.value
