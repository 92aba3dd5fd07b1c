"""Items — a JSON store built from middleware chains.

Net-new ``/shop/v1/items`` endpoints are Express-style chains: each
middleware receives the request and what the previous one returned, and
the first one to return a ``Response`` ends the chain. A guard checks an
API key before any write, and a hook stamps a header onto a route the
server already had before the router was mounted.

Run:
    cd examples/items && python app.py
"""

import threading
from typing import Any

from expressway import Request, Response, RestServer, Router

API_KEY = "letmein"

router = Router("shop/v1")

# ---------------------------------------------------------------------------
# In-memory storage
# ---------------------------------------------------------------------------

_items: dict[int, dict[str, Any]] = {}
_next_id = 1
_lock = threading.Lock()


def _get_next_id() -> int:
    global _next_id
    with _lock:
        n = _next_id
        _next_id += 1
        return n


# ---------------------------------------------------------------------------
# Middlewares
# ---------------------------------------------------------------------------


def require_key(request: Request, acc: dict) -> Any:
    """Answer 401 unless the caller sent the API key."""
    if request.headers.get("x-api-key") != API_KEY:
        return Response.from_data({"error": "unauthorized"}, status=401)
    return acc


def load_item(request: Request, acc: dict) -> Any:
    item_id = int(request.path_params["id"])
    with _lock:
        item = _items.get(item_id)
    if item is None:
        return Response.from_data({"error": "Not found"}, status=404)
    return {**acc, "item": item}


def parse_body(request: Request, acc: dict) -> Any:
    body = request.json() or {}
    title = str(body.get("title", "")).strip()
    if not title:
        return Response.from_data({"error": "title is required"}, status=400)
    return {**acc, "title": title}


def list_items(request: Request, acc: dict) -> list:
    with _lock:
        return [_items[k] for k in sorted(_items)]


def show_item(request: Request, acc: dict) -> dict:
    return {"data": acc["item"]}


def create_item(request: Request, acc: dict) -> tuple:
    item = {"id": _get_next_id(), "title": acc["title"]}
    with _lock:
        _items[item["id"]] = item
    return {"data": item}, 201


def rename_item(request: Request, acc: dict) -> dict:
    item = {**acc["item"], "title": acc["title"]}
    with _lock:
        _items[item["id"]] = item
    return {"data": item}


def delete_item(request: Request, acc: dict) -> None:
    with _lock:
        _items.pop(acc["item"]["id"], None)


def stamp_version(request: Request, response: Response) -> Response:
    return response.with_header("X-Shop-Version", "1")


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

router.get("/items", list_items)
router.get("/items/:id", load_item, show_item)
router.post("/items", parse_body, create_item)
router.put("/items/:id", load_item, parse_body, rename_item)
router.delete("/items/:id", load_item, delete_item)

for verb in ("POST", "PUT", "DELETE"):
    router.guard(verb, "/shop/v1/items", require_key)
    router.guard(verb, "/shop/v1/items/:id", require_key)

router.hook("GET", "/legacy/v1/stock/:sku", stamp_version)

# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------

server = RestServer()


@server.on_init
def register_legacy_routes() -> None:
    server.register_rest_route(
        "legacy/v1",
        r"/stock/(?P<sku>\d+)",
        ["GET"],
        lambda request: {"sku": request.path_params["sku"], "stock": 3},
    )


router.mount(server)


if __name__ == "__main__":
    server.run()
