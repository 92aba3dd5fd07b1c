"""Immutable HTTP request.

Frozen metadata plus an eagerly read body. Middlewares are synchronous,
so the host reads the body before dispatch and the request carries it
as plain bytes.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any
from urllib.parse import parse_qsl

from expressway._internal.asgi import Receive, Scope
from expressway.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``path_params`` is filled in by the host once its route table has
    matched, in the order the parameters appear in ``path``.
    """

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    query: Mapping[str, str] = field(default_factory=dict)
    path_params: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""
    http_version: str = "1.1"
    client: tuple[str, int] | None = None

    # -- Computed properties --

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def params(self) -> Mapping[str, str]:
        """Path parameters first, then query parameters that don't clash."""
        return {**self.query, **self.path_params}

    # -- Body access --

    def text(self) -> str:
        """The body decoded as UTF-8."""
        return self.body.decode("utf-8")

    def json(self) -> Any:
        """The body parsed as JSON. ``None`` for an empty body."""
        if not self.body:
            return None
        return json_module.loads(self.body)

    # -- Derivation --

    def with_path_params(self, path_params: Mapping[str, str]) -> Request:
        """Return a copy carrying the parameters the host extracted."""
        return replace(self, path_params=dict(path_params))

    # -- Factory --

    @classmethod
    async def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI scope, reading the full body."""
        chunks: list[bytes] = []
        while True:
            message = await receive()
            chunk = message.get("body", b"")
            if chunk:
                chunks.append(chunk)
            if not message.get("more_body", False):
                break

        client = scope.get("client")
        query_string = scope.get("query_string", b"").decode("latin-1")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers.from_asgi(scope.get("headers", ())),
            query=dict(parse_qsl(query_string, keep_blank_values=True)),
            body=b"".join(chunks),
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
        )
