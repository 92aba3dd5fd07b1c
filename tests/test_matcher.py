"""Tests for expressway.routing.matcher — structural route matching."""

from dataclasses import dataclass, field

from expressway.routing.matcher import matches
from expressway.routing.route import Route
from expressway.routing.template import compile_template


@dataclass(frozen=True)
class View:
    method: str
    path: str
    path_params: dict[str, str] = field(default_factory=dict)


def _route(method: str, template: str) -> Route:
    return Route(method=method, template=compile_template(template))


class TestStaticTemplates:
    def test_equal_paths_match(self) -> None:
        assert matches(_route("GET", "/users"), View("GET", "/users"))

    def test_different_literal_fails(self) -> None:
        assert not matches(_route("GET", "/users"), View("GET", "/posts"))

    def test_nested_equal(self) -> None:
        assert matches(_route("GET", "/api/v2/users"), View("GET", "/api/v2/users"))

    def test_nested_one_segment_off(self) -> None:
        assert not matches(_route("GET", "/api/v2/users"), View("GET", "/api/v3/users"))

    def test_trailing_slash_changes_depth(self) -> None:
        assert not matches(_route("GET", "/users"), View("GET", "/users/"))


class TestMethod:
    def test_method_mismatch_fails_on_equal_path(self) -> None:
        route = _route("GET", "/users/:id")
        assert not matches(route, View("POST", "/users/42", {"id": "42"}))

    def test_method_is_case_sensitive(self) -> None:
        assert not matches(_route("GET", "/users"), View("get", "/users"))


class TestParamCount:
    def test_no_params_extracted(self) -> None:
        assert not matches(_route("GET", "/users/:id"), View("GET", "/users/42"))

    def test_extra_param_extracted(self) -> None:
        view = View("GET", "/users/42", {"id": "42", "other": "1"})
        assert not matches(_route("GET", "/users/:id"), view)

    def test_static_template_with_params_fails(self) -> None:
        assert not matches(_route("GET", "/users/42"), View("GET", "/users/42", {"id": "42"}))


class TestDepth:
    def test_deeper_path_fails(self) -> None:
        view = View("GET", "/users/42/edit", {"id": "42"})
        assert not matches(_route("GET", "/users/:id"), view)

    def test_shallower_path_fails(self) -> None:
        view = View("GET", "/users", {"id": "42"})
        assert not matches(_route("GET", "/users/:id"), view)


class TestParamNamesAndOrder:
    def test_single_param(self) -> None:
        view = View("GET", "/users/42", {"id": "42"})
        assert matches(_route("GET", "/users/:id"), view)

    def test_two_params_in_order(self) -> None:
        view = View("GET", "/users/1/posts/2", {"id": "1", "postId": "2"})
        assert matches(_route("GET", "/users/:id/posts/:postId"), view)

    def test_same_names_reordered_fails(self) -> None:
        view = View("GET", "/users/1/posts/2", {"postId": "2", "id": "1"})
        assert not matches(_route("GET", "/users/:id/posts/:postId"), view)

    def test_different_name_fails(self) -> None:
        view = View("GET", "/users/42", {"userId": "42"})
        assert not matches(_route("GET", "/users/:id"), view)


class TestLiteralDifference:
    def test_literal_mismatch_next_to_param(self) -> None:
        view = View("GET", "/posts/42", {"id": "42"})
        assert not matches(_route("GET", "/users/:id"), view)

    def test_literal_mismatch_is_positional(self) -> None:
        # "a" appears in the concrete path, but not at the position of the second "a"
        view = View("GET", "/a/b/7", {"id": "7"})
        assert not matches(_route("GET", "/a/a/:id"), view)

    def test_colon_literal_must_be_equal(self) -> None:
        # ":id2" is not a parameter, so it has to appear verbatim
        route = _route("GET", "/items/:id2/:id")
        assert matches(route, View("GET", "/items/:id2/5", {"id": "5"}))
        assert not matches(route, View("GET", "/items/9/5", {"id": "5"}))

    def test_param_value_may_equal_placeholder(self) -> None:
        view = View("GET", "/users/:id", {"id": ":id"})
        assert matches(_route("GET", "/users/:id"), view)


class TestExamples:
    def test_item_with_numeric_id(self) -> None:
        view = View("GET", "/items/7", {"id": "7"})
        assert matches(_route("GET", "/items/:id"), view)

    def test_item_with_non_numeric_id_has_no_params(self) -> None:
        # The host extracts nothing for /items/abc, so the count check fails
        view = View("GET", "/items/abc", {})
        assert not matches(_route("GET", "/items/:id"), view)

    def test_namespaced_hook_template(self) -> None:
        view = View("GET", "/wp/v2/posts/12", {"id": "12"})
        assert matches(_route("GET", "/wp/v2/posts/:id"), view)
