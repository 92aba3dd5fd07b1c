"""Route frozen dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from expressway.routing.template import PathTemplate

if TYPE_CHECKING:
    from expressway.middleware.protocol import Middleware


@dataclass(frozen=True, slots=True)
class Route:
    """A registered route definition.

    Created at registration time and never mutated afterwards.
    """

    method: str
    template: PathTemplate
    middlewares: tuple[Middleware, ...] = ()

    @property
    def path(self) -> str:
        """The template as it was authored."""
        return self.template.source

    def __str__(self) -> str:
        return f"{self.method} {self.template.source}"
