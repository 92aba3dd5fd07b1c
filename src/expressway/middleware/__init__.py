"""Middleware — plain callables composed into ordered chains.

A middleware is any callable matching::

    def mw(request: Request, accumulator: Any) -> Any

No base class required. Chains run in registration order and stop at
the first terminal value (a ``Response`` or ``Final``).
"""

from expressway.middleware.executor import classify, execute, iter_chain, resolve
from expressway.middleware.protocol import Final, Intermediate, Middleware, Step

__all__ = [
    "Final",
    "Intermediate",
    "Middleware",
    "Step",
    "classify",
    "execute",
    "iter_chain",
    "resolve",
]
