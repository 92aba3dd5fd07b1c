"""Route registry — ordered, append-only collection of routes.

One registry per router instance. Routes are registered during setup;
``freeze()`` ends that phase and the registry is read-only from then
on, so concurrent request handling never sees it change.
"""

import logging
from collections.abc import Iterable, Iterator

from expressway.middleware.protocol import Middleware
from expressway.routing.matcher import RequestView, matches
from expressway.routing.route import Route
from expressway.routing.template import compile_template

logger = logging.getLogger("expressway.routing")


class Registry:
    """Insertion-ordered route collection.

    Usage::

        registry = Registry()
        registry.register("GET", "/items/:id", [load_item, render])
        registry.freeze()
        for route in registry.matching(request):
            ...
    """

    __slots__ = ("_frozen", "_routes")

    def __init__(self) -> None:
        self._routes: list[Route] = []
        self._frozen = False

    def register(
        self,
        method: str,
        template: str,
        middlewares: Iterable[Middleware] = (),
    ) -> Route:
        """Compile *template* and append a new route. Must be called before freeze().

        No deduplication and no check that *method* is a known verb.
        """
        if self._frozen:
            msg = "Cannot register routes after the registry is frozen."
            raise RuntimeError(msg)

        route = Route(
            method=method,
            template=compile_template(template),
            middlewares=tuple(middlewares),
        )
        self._routes.append(route)
        logger.debug("registered %s (%d middleware)", route, len(route.middlewares))
        return route

    def freeze(self) -> None:
        """End the setup phase. No more routes can be registered."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def routes(self) -> tuple[Route, ...]:
        """All registered routes, in registration order."""
        return tuple(self._routes)

    def matching(self, request: RequestView) -> list[Route]:
        """Every route that structurally matches *request*, first registered first."""
        return [route for route in self._routes if matches(route, request)]

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)
