"""End-to-end tests — Router mounted on RestServer, driven through ASGI."""

from typing import Any

from expressway.host.server import RestServer
from expressway.http.request import Request
from expressway.http.response import Response
from expressway.router import Router
from expressway.testing import TestClient


def echo_id(request: Request, _acc: Any) -> dict:
    return {"id": request.path_params["id"]}


def _serve(router: Router) -> RestServer:
    server = RestServer()
    router.mount(server)
    return server


class TestRoutes:
    async def test_echo_id(self) -> None:
        router = Router()
        router.get("/items/:id", echo_id)

        async with TestClient(_serve(router)) as client:
            response = await client.get("/api/items/7")
            assert response.status == 200
            assert response.json() == {"id": "7"}

    async def test_non_numeric_param_is_404(self) -> None:
        router = Router()
        router.get("/items/:id", echo_id)

        async with TestClient(_serve(router)) as client:
            response = await client.get("/api/items/abc")
            assert response.status == 404

    async def test_custom_namespace(self) -> None:
        router = Router("shop/v1")
        router.get("/items/:id", echo_id)

        async with TestClient(_serve(router)) as client:
            assert (await client.get("/shop/v1/items/3")).json() == {"id": "3"}
            assert (await client.get("/api/items/3")).status == 404

    async def test_static_route(self) -> None:
        router = Router()
        router.get("/status", lambda req, acc: {"ok": True})

        async with TestClient(_serve(router)) as client:
            assert (await client.get("/api/status")).json() == {"ok": True}

    async def test_templates_without_leading_slash(self) -> None:
        router = Router()
        router.get("status", lambda req, acc: {"ok": True})
        router.get("items/:id", echo_id)
        router.get("ping/", lambda req, acc: "pong")

        async with TestClient(_serve(router)) as client:
            assert (await client.get("/api/status")).json() == {"ok": True}
            assert (await client.get("/api/items/5")).json() == {"id": "5"}
            assert (await client.get("/api/ping")).json() == "pong"

    async def test_chain_accumulates(self) -> None:
        def load(request: Request, acc: dict) -> dict:
            return {**acc, "id": int(request.path_params["id"])}

        def enrich(request: Request, acc: dict) -> dict:
            return {**acc, "name": f"item-{acc['id']}"}

        router = Router()
        router.get("/items/:id", load, enrich)

        async with TestClient(_serve(router)) as client:
            response = await client.get("/api/items/5")
            assert response.json() == {"id": 5, "name": "item-5"}

    async def test_short_circuit_response(self) -> None:
        calls: list[str] = []

        def auth(request: Request, acc: Any) -> Any:
            if request.headers.get("authorization") is None:
                return Response.from_data({"error": "unauthorized"}, status=401)
            return acc

        def handler(request: Request, acc: Any) -> dict:
            calls.append("handler")
            return {"secret": 42}

        router = Router()
        router.get("/secret", auth, handler)

        async with TestClient(_serve(router)) as client:
            denied = await client.get("/api/secret")
            assert denied.status == 401
            assert calls == []

            allowed = await client.get("/api/secret", headers={"Authorization": "Bearer x"})
            assert allowed.json() == {"secret": 42}
            assert calls == ["handler"]

    async def test_post_body(self) -> None:
        def create(request: Request, acc: Any) -> Any:
            return (request.json(), 201)

        router = Router()
        router.post("/items", create)

        async with TestClient(_serve(router)) as client:
            response = await client.post("/api/items", json={"name": "box"})
            assert response.status == 201
            assert response.json() == {"name": "box"}

    async def test_method_not_allowed(self) -> None:
        router = Router()
        router.get("/items/:id", echo_id)

        async with TestClient(_serve(router)) as client:
            response = await client.delete("/api/items/1")
            assert response.status == 405
            assert ("allow", "GET") in response.headers

    async def test_middleware_error_is_500(self) -> None:
        def broken(request: Request, acc: Any) -> Any:
            raise RuntimeError("boom")

        router = Router()
        router.get("/broken", broken)

        async with TestClient(_serve(router)) as client:
            assert (await client.get("/api/broken")).status == 500

    async def test_empty_result_is_204(self) -> None:
        router = Router()
        router.delete("/items/:id", lambda req, acc: None)

        async with TestClient(_serve(router)) as client:
            response = await client.delete("/api/items/1")
            assert response.status == 204
            assert response.body == b""

    async def test_query_string_is_not_part_of_matching(self) -> None:
        router = Router()
        router.get("/items/:id", lambda req, acc: dict(req.params))

        async with TestClient(_serve(router)) as client:
            response = await client.get("/api/items/4?fields=name")
            assert response.json() == {"fields": "name", "id": "4"}


class TestHooks:
    async def test_hook_existing_native_route(self) -> None:
        server = RestServer()

        @server.on_init
        def native() -> None:
            server.register_rest_route(
                "wp/v2", r"/posts/(?P<id>\d+)", ["GET"], lambda r: {"post": r.path_params["id"]}
            )

        def add_author(request: Request, response: Response) -> dict:
            return {**response.json(), "author": "admin"}

        router = Router()
        router.hook("GET", "/wp/v2/posts/:id", add_author)
        router.mount(server)

        async with TestClient(server) as client:
            response = await client.get("/wp/v2/posts/9")
            assert response.json() == {"post": "9", "author": "admin"}

    async def test_hook_skips_other_requests(self) -> None:
        router = Router()
        router.get("/items/:id", echo_id)
        router.get("/users/:id", echo_id)
        router.hook("GET", "/api/items/:id", lambda req, resp: resp.with_header("X-Hooked", "yes"))

        async with TestClient(_serve(router)) as client:
            hooked = await client.get("/api/items/1")
            plain = await client.get("/api/users/1")
            assert ("x-hooked", "yes") in hooked.headers
            assert ("x-hooked", "yes") not in plain.headers

    async def test_each_hook_middleware_applies_in_order(self) -> None:
        def first(request: Request, response: Response) -> Response:
            return response.with_header("X-Order", "first")

        def second(request: Request, response: Response) -> Response:
            return response.with_header("X-Order", "second")

        router = Router()
        router.get("/items/:id", echo_id)
        router.hook("GET", "/api/items/:id", first, second)

        async with TestClient(_serve(router)) as client:
            response = await client.get("/api/items/1")
            orders = [v for k, v in response.headers if k == "x-order"]
            assert orders == ["first", "second"]


class TestGuards:
    async def test_guard_blocks_endpoint(self) -> None:
        deleted: list[str] = []

        def delete(request: Request, acc: Any) -> Any:
            deleted.append(request.path_params["id"])
            return None

        def read_only(request: Request, acc: Any) -> Any:
            return Response.from_data({"error": "read only"}, status=403)

        router = Router()
        router.delete("/items/:id", delete)
        router.guard("DELETE", "/api/items/:id", read_only)

        async with TestClient(_serve(router)) as client:
            response = await client.delete("/api/items/3")
            assert response.status == 403
            assert deleted == []

    async def test_guard_passes_when_chain_does_not_end_early(self) -> None:
        router = Router()
        router.get("/items/:id", echo_id)
        router.guard("GET", "/api/items/:id", lambda req, acc: {"checked": True})

        async with TestClient(_serve(router)) as client:
            assert (await client.get("/api/items/2")).json() == {"id": "2"}
