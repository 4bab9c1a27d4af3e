# =============================================================================
# tests/test_server.py - Server Facade Tests
# =============================================================================
# Event emitter, route announcements, plugin realms and request tracking.
# =============================================================================

from types import SimpleNamespace

import pytest
from fastapi import APIRouter, FastAPI, Request
from fastapi.testclient import TestClient

from app.server import LogEvent, ResponseInfo, Server, request_log, tag_map


@pytest.fixture
def server():
    return Server(FastAPI())


async def ok():
    return {"ok": True}


class TestEvents:
    """Tests for on/once/off/emit."""

    def test_listeners_called_in_order(self, server):
        calls = []
        server.on("thing", lambda value: calls.append(("a", value)))
        server.on("thing", lambda value: calls.append(("b", value)))

        server.emit("thing", 1)

        assert calls == [("a", 1), ("b", 1)]

    def test_once(self, server):
        calls = []
        server.once("thing", calls.append)

        server.emit("thing", 1)
        server.emit("thing", 2)

        assert calls == [1]

    def test_off(self, server):
        calls = []
        server.on("thing", calls.append)
        server.off("thing", calls.append)
        server.off("other", calls.append)

        server.emit("thing", 1)

        assert calls == []

    def test_log_emits_log_event(self, server):
        events = []
        server.on("log", lambda event, tags: events.append((event, tags)))

        server.log(["server", "debug"], {"a": 1})

        event, tags = events[0]
        assert isinstance(event, LogEvent)
        assert event.tags == ["server", "debug"]
        assert event.data == {"a": 1}
        assert tags == {"server": True, "debug": True}

    def test_stop_emits_and_clears(self, server):
        calls = []
        server.on("stop", lambda: calls.append("stopped"))

        server.stop()
        server.emit("stop")

        assert calls == ["stopped"]

    def test_tag_map(self):
        assert tag_map(["a", "b"]) == {"a": True, "b": True}


class TestRoutes:
    """Tests for route() and include_router()."""

    def test_route_emits_route_event(self, server):
        routes = []
        server.on("route", routes.append)

        server.route("POST", "/things", ok)

        assert routes[0].method == "post"
        assert routes[0].path == "/things"
        assert routes[0].plugin is None
        assert TestClient(server.app).post("/things").json() == {"ok": True}

    def test_include_router_announces_each_route(self, server):
        router = APIRouter()
        router.add_api_route("", ok, methods=["GET"])
        router.add_api_route("/{name}", ok, methods=["GET", "DELETE"])
        routes = []
        server.on("route", routes.append)

        server.include_router(router, prefix="/admin")

        assert [(r.method, r.path) for r in routes] == [
            ("get", "/admin"),
            ("delete", "/admin/{name}"),
            ("get", "/admin/{name}"),
        ]

    def test_routes_added_by_plugin_carry_its_name(self, server):
        routes = []
        server.on("route", routes.append)
        plugin = SimpleNamespace(
            name="things",
            register=lambda srv, options: srv.route("GET", options["path"], ok),
        )

        server.register(plugin, {"path": "/things"})
        server.route("GET", "/other", ok)

        assert routes[0].plugin == "things"
        assert routes[1].plugin is None
        assert server.plugins["things"] is plugin

    def test_plugin_errors_propagate(self, server):
        def fail(srv, options):
            raise RuntimeError("nope")

        with pytest.raises(RuntimeError, match="nope"):
            server.register(SimpleNamespace(name="broken", register=fail))

        assert "broken" not in server.plugins


class TestRequestTracking:
    """Tests for request ids, request_log and response events."""

    def test_request_id_format(self, server):
        first = server.next_request_id().split(":")
        second = server.next_request_id().split(":")

        assert len(first) == 4
        assert first[0].isdigit()
        assert int(second[3]) == int(first[3]) + 1

    def test_request_log_emits_request_event(self, server):
        events = []
        server.on("request", lambda request, event, tags: events.append((request, event, tags)))

        async def handler(request: Request):
            request_log(request, ["user", "debug"], {"id": 1})
            return {"id": request.state.request_id}

        server.route("GET", "/user", handler)
        response = TestClient(server.app).get("/user")

        request, event, tags = events[0]
        assert event.request == response.json()["id"]
        assert event.tags == ["user", "debug"]
        assert event.data == {"id": 1}
        assert tags == {"user": True, "debug": True}
        assert request.url.path == "/user"

    def test_response_event(self, server):
        responses = []
        server.on("response", lambda request, info: responses.append(info))
        server.route("GET", "/ok", ok)

        TestClient(server.app).get("/ok")

        info = responses[0]
        assert isinstance(info, ResponseInfo)
        assert (info.method, info.path, info.status_code) == ("get", "/ok", 200)
        assert info.duration_ms >= 0

    def test_request_error_event(self, server):
        errors = []
        server.on("request-error", lambda request, exc: errors.append(exc))

        async def broken():
            raise RuntimeError("kaboom")

        server.route("GET", "/broken", broken)
        response = TestClient(server.app, raise_server_exceptions=False).get("/broken")

        assert response.status_code == 500
        assert isinstance(errors[0], RuntimeError)
