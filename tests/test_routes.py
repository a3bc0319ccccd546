# Tests for custom route validation and matching
# Created: 2026-10-14

import pytest

from socketpaw.errors import CustomRouteInitializationError
from socketpaw.routes import CustomRoute, build_custom_routes, match_custom_route


def handler(request, response):
    pass


def other_handler(request, response):
    pass


class TestBuildCustomRoutes:
    def test_empty_and_none(self):
        assert build_custom_routes(None) == ()
        assert build_custom_routes([]) == ()

    def test_single_method_string(self):
        (route,) = build_custom_routes([{"path": "/health", "method": "get", "handler": handler}])
        assert route.path == "/health"
        assert route.methods == frozenset({"GET"})
        assert route.handler is handler

    def test_method_list_is_upper_cased(self):
        (route,) = build_custom_routes(
            [{"path": "/test", "method": ["get", "POST"], "handler": handler}]
        )
        assert route.methods == frozenset({"GET", "POST"})

    def test_keeps_registration_order(self):
        routes = build_custom_routes(
            [
                {"path": "/a", "method": "GET", "handler": handler},
                {"path": "/b", "method": "GET", "handler": other_handler},
            ]
        )
        assert [r.path for r in routes] == ["/a", "/b"]

    def test_accepts_custom_route_instances(self):
        route = CustomRoute(path="/x", methods=frozenset({"PUT"}), handler=handler)
        assert build_custom_routes([route]) == (route,)

    def test_missing_path_and_method(self):
        with pytest.raises(CustomRouteInitializationError) as exc_info:
            build_custom_routes([{"handler": handler}])
        assert "missing path, method" in str(exc_info.value)

    def test_missing_handler(self):
        with pytest.raises(CustomRouteInitializationError):
            build_custom_routes([{"path": "/x", "method": "GET"}])

    def test_handler_must_be_callable(self):
        with pytest.raises(CustomRouteInitializationError):
            build_custom_routes([{"path": "/x", "method": "GET", "handler": "nope"}])

    @pytest.mark.parametrize("method", ["", [], [""]])
    def test_empty_method(self, method):
        with pytest.raises(CustomRouteInitializationError):
            build_custom_routes([{"path": "/x", "method": method, "handler": handler}])

    @pytest.mark.parametrize("method", [5, ["GET", None, 7], b"GET", {"GET": True}])
    def test_method_of_wrong_type(self, method):
        with pytest.raises(CustomRouteInitializationError) as exc_info:
            build_custom_routes([{"path": "/x", "method": method, "handler": handler}])
        assert exc_info.value.problems == ["route 0 (/x): missing method"]

    def test_path_must_be_a_string(self):
        with pytest.raises(CustomRouteInitializationError):
            build_custom_routes([{"path": 5, "method": "GET", "handler": handler}])

    def test_reports_every_bad_route(self):
        with pytest.raises(CustomRouteInitializationError) as exc_info:
            build_custom_routes(
                [
                    {"path": "/ok", "method": "GET", "handler": handler},
                    {"method": "GET", "handler": handler},
                    {"path": "/no-handler", "method": "GET"},
                ]
            )
        problems = exc_info.value.problems
        assert len(problems) == 2
        assert problems[0].startswith("route 1")
        assert problems[1].startswith("route 2 (/no-handler)")


class TestMatchCustomRoute:
    @pytest.fixture
    def routes(self):
        return build_custom_routes(
            [
                {"path": "/test", "method": ["get", "POST"], "handler": handler},
                {"path": "/test", "method": "GET", "handler": other_handler},
                {"path": "/other", "method": "DELETE", "handler": other_handler},
            ]
        )

    def test_case_insensitive_method(self, routes):
        assert match_custom_route(routes, "/test", "get").handler is handler
        assert match_custom_route(routes, "/test", "POST").handler is handler

    def test_first_registered_route_wins(self, routes):
        assert match_custom_route(routes, "/test", "GET") is routes[0]

    def test_method_not_in_set(self, routes):
        assert match_custom_route(routes, "/test", "UNHANDLED_METHOD") is None

    def test_exact_path_only(self, routes):
        assert match_custom_route(routes, "/test/", "GET") is None
        assert match_custom_route(routes, "/tes", "GET") is None
        assert match_custom_route(routes, "/TEST", "GET") is None

    def test_unknown_path(self, routes):
        assert match_custom_route(routes, "/nope", "GET") is None
