"""Path template compilation.

Turns an Express-style template such as ``/users/:id`` into an ordered
tuple of segments. Parameters are numeric only: a ``:name`` segment is
understood to match one or more decimal digits and nothing else. Slugs
and other parameter kinds are not supported.

Compilation is lenient and never raises. Tokens that do not look like a
parameter (``:id2``, ``::x``, ``users``) are kept as literals.
"""

import re
from dataclasses import dataclass
from functools import cached_property

# Regex fragment a parameter segment renders to in host patterns
NUMERIC_PARAM_PATTERN = r"\d+"

_PARAM_TOKEN = re.compile(r":([A-Za-z]+)")


@dataclass(frozen=True, slots=True)
class Segment:
    """A parsed segment of a path template.

    Literal: ``users``  (is_param=False)
    Param:   ``:id``    (is_param=True, param_name="id")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None


@dataclass(frozen=True)
class PathTemplate:
    """A compiled path template. Immutable once created.

    ``source`` is kept verbatim: depth and positional comparisons in the
    matcher work on its raw ``/`` tokens, empty ones included.
    """

    source: str
    segments: tuple[Segment, ...]

    @cached_property
    def tokens(self) -> tuple[str, ...]:
        """Raw ``/``-delimited tokens of the source, empty tokens kept."""
        return tuple(self.source.split("/"))

    @cached_property
    def param_names(self) -> tuple[str, ...]:
        """Declared parameter names, left to right."""
        return tuple(s.param_name for s in self.segments if s.param_name is not None)

    @cached_property
    def param_tokens(self) -> frozenset[str]:
        """Declared parameter tokens in their ``:name`` form."""
        return frozenset(s.value for s in self.segments if s.is_param)

    @property
    def has_params(self) -> bool:
        return bool(self.param_names)

    @cached_property
    def host_pattern(self) -> str:
        """The template rendered as a host route regex.

        A template with no ``:`` at all is handed to the host verbatim.
        Otherwise each parameter becomes a named numeric group::

            "/items/:id" -> "/items/(?P<id>\\d+)"
        """
        if ":" not in self.source:
            return self.source
        parts: list[str] = []
        for seg in self.segments:
            if seg.is_param:
                parts.append(f"(?P<{seg.param_name}>{NUMERIC_PARAM_PATTERN})")
            else:
                parts.append(seg.value)
        return "".join(f"/{part}" for part in parts)

    def __str__(self) -> str:
        return self.source


def parse_segment(token: str) -> Segment:
    """Classify one non-empty token as a literal or a parameter."""
    found = _PARAM_TOKEN.fullmatch(token)
    if found is None:
        return Segment(value=token)
    return Segment(value=token, is_param=True, param_name=found.group(1))


def compile_template(template: str) -> PathTemplate:
    """Compile a path template string.

    Examples::

        "/users"          -> (Segment("users"),)
        "/users/:id"      -> (Segment("users"), Segment(":id", is_param=True, param_name="id"))
        "//users///"      -> (Segment("users"),)
    """
    segments = tuple(parse_segment(t) for t in template.split("/") if t)
    return PathTemplate(source=template, segments=segments)
