"""Tests for expressway.routing.registry — ordered route collection."""

from dataclasses import dataclass, field

import pytest

from expressway.routing.registry import Registry
from expressway.routing.route import Route


@dataclass(frozen=True)
class View:
    method: str
    path: str
    path_params: dict[str, str] = field(default_factory=dict)


def _noop(request, acc):
    return acc


class TestRegister:
    def test_returns_compiled_route(self) -> None:
        registry = Registry()
        route = registry.register("GET", "/items/:id", [_noop])
        assert isinstance(route, Route)
        assert route.method == "GET"
        assert route.template.param_names == ("id",)
        assert route.middlewares == (_noop,)

    def test_insertion_order(self) -> None:
        registry = Registry()
        registry.register("GET", "/a")
        registry.register("POST", "/b")
        registry.register("GET", "/c")
        assert [r.path for r in registry] == ["/a", "/b", "/c"]
        assert len(registry) == 3

    def test_no_deduplication(self) -> None:
        registry = Registry()
        registry.register("GET", "/a")
        registry.register("GET", "/a")
        assert len(registry.routes) == 2

    def test_any_method_string_accepted(self) -> None:
        registry = Registry()
        route = registry.register("BREW", "/coffee")
        assert route.method == "BREW"

    def test_middlewares_snapshot(self) -> None:
        chain = [_noop]
        registry = Registry()
        route = registry.register("GET", "/a", chain)
        chain.append(_noop)
        assert len(route.middlewares) == 1


class TestFreeze:
    def test_register_after_freeze_raises(self) -> None:
        registry = Registry()
        registry.freeze()
        assert registry.frozen is True
        with pytest.raises(RuntimeError, match="frozen"):
            registry.register("GET", "/a")

    def test_routes_readable_after_freeze(self) -> None:
        registry = Registry()
        registry.register("GET", "/a")
        registry.freeze()
        assert len(registry.routes) == 1


class TestMatching:
    def test_all_matches_in_registration_order(self) -> None:
        registry = Registry()
        first = registry.register("GET", "/items/:id")
        registry.register("GET", "/users/:id")
        second = registry.register("GET", "/items/:id")
        found = registry.matching(View("GET", "/items/3", {"id": "3"}))
        assert found == [first, second]
        assert found[0] is first

    def test_no_match_is_empty(self) -> None:
        registry = Registry()
        registry.register("GET", "/items/:id")
        assert registry.matching(View("POST", "/items/3", {"id": "3"})) == []
