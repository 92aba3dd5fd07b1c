"""Structural route matching.

Decides whether a registered route applies to a request the host has
already parsed. Needed wherever the router attaches itself to a host
filter point that fires for every request: there the host's own route
identity is opaque, so applicability is re-derived from the template
and the request's method, concrete path, and extracted parameters.

There is no precedence here. Each route answers yes or no on its own;
when several routes match, registration order decides who runs first.
"""

import logging
from collections.abc import Mapping
from typing import Protocol

from expressway.routing.route import Route

logger = logging.getLogger("expressway.routing")


class RequestView(Protocol):
    """What the matcher reads from a request.

    ``path_params`` must preserve the order in which the parameters
    appear in ``path``.
    """

    @property
    def method(self) -> str: ...

    @property
    def path(self) -> str: ...

    @property
    def path_params(self) -> Mapping[str, str]: ...


def matches(route: Route, request: RequestView) -> bool:
    """Return True if *route* is the route that should handle *request*.

    Checks run in order and stop at the first failure:

    1. same HTTP method (case-sensitive)
    2. as many extracted parameters as the template declares
    3. same number of ``/`` tokens in template and concrete path
    4. same parameter names in the same order
    5. every template token that differs from the concrete token at the
       same position is one of the template's declared parameters
    """
    template = route.template

    if request.method != route.method:
        return False

    params = request.path_params
    if len(params) != len(template.param_names):
        return False

    concrete = request.path.split("/")
    if len(concrete) != len(template.tokens):
        return False

    if list(params) != list(template.param_names):
        return False

    declared = template.param_tokens
    for expected, actual in zip(template.tokens, concrete, strict=True):
        if expected == actual:
            continue
        if expected not in declared:
            logger.debug("%s rejected %s: %r != %r", route, request.path, expected, actual)
            return False

    return True
