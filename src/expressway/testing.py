"""Async test client for expressway servers.

Uses the same Request and Response types as production.
No wrapper translation layer.
"""

import json as json_module
from typing import Any

from expressway.host.server import RestServer
from expressway.http.response import JSON_CONTENT_TYPE, Response


class TestClient:
    __test__ = False  # Tell pytest this is not a test class
    """Async test client for a RestServer.

    Returns the same ``Response`` type used in production. Sends requests
    through the ASGI interface directly — no HTTP involved.

    Usage::

        async with TestClient(server) as client:
            response = await client.get("/api/items/7")
            assert response.status == 200
    """

    __slots__ = ("app",)

    def __init__(self, app: RestServer) -> None:
        self.app = app

    async def __aenter__(self) -> "TestClient":
        self.app._ensure_frozen()
        return self

    async def __aexit__(self, *args: object) -> None:
        return None

    async def get(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        """Send a GET request."""
        return await self.request("GET", path, headers=headers)

    async def post(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        json: Any = None,
    ) -> Response:
        """Send a POST request."""
        return await self._send_with_body("POST", path, headers, body, json)

    async def put(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        json: Any = None,
    ) -> Response:
        """Send a PUT request."""
        return await self._send_with_body("PUT", path, headers, body, json)

    async def patch(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        json: Any = None,
    ) -> Response:
        """Send a PATCH request."""
        return await self._send_with_body("PATCH", path, headers, body, json)

    async def delete(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        """Send a DELETE request."""
        return await self.request("DELETE", path, headers=headers)

    async def _send_with_body(
        self,
        method: str,
        path: str,
        headers: dict[str, str] | None,
        body: bytes | None,
        json: Any,
    ) -> Response:
        extra_headers: dict[str, str] = {}
        request_body = body or b""

        if json is not None:
            request_body = json_module.dumps(json).encode("utf-8")
            extra_headers["content-type"] = "application/json"

        merged = {**extra_headers, **(headers or {})}
        return await self.request(method, path, headers=merged, body=request_body)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> Response:
        """Send one request through the ASGI app and collect the response."""
        path_part, _, query_string = path.partition("?")
        scope: dict[str, Any] = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method.upper(),
            "path": path_part,
            "query_string": query_string.encode("latin-1"),
            "headers": [
                (name.lower().encode("latin-1"), value.encode("latin-1"))
                for name, value in (headers or {}).items()
            ],
            "client": ("127.0.0.1", 0),
        }
        pending = [{"type": "http.request", "body": body or b"", "more_body": False}]
        sent: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return pending.pop() if pending else {"type": "http.disconnect"}

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await self.app(scope, receive, send)

        start = next(m for m in sent if m["type"] == "http.response.start")
        fields = [(name.decode("latin-1"), value.decode("latin-1")) for name, value in start["headers"]]
        return Response(
            body=b"".join(m.get("body", b"") for m in sent if m["type"] == "http.response.body"),
            status=start["status"],
            content_type=dict(fields).get("content-type", JSON_CONTENT_TYPE),
            headers=tuple(f for f in fields if f[0] not in {"content-type", "content-length"}),
        )
