# =============================================================================
# app/server.py - Server Facade and Lifecycle Events
# =============================================================================
# Wraps the FastAPI application with a small event emitter so plugins can
# observe what the server does without patching FastAPI itself.
#
# Events:
#   - route:    (RouteInfo)                         a route was added
#   - request:  (Request, RequestEvent, tags)       a handler logged against its request
#   - response: (Request, ResponseInfo)             a response was sent
#   - request-error: (Request, Exception)           a handler raised
#   - log:      (LogEvent, tags)                    the server logged
#   - stop:     ()                                  the server is shutting down
#
# Usage:
#   server = Server(FastAPI())
#   server.on("route", lambda route: print(route.path))
#   server.route("GET", "/", handler)
#
#   # Inside a handler
#   request_log(request, ["debug", "user"], {"id": 1})
# =============================================================================

import itertools
import logging
import os
import socket
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from fastapi import APIRouter, FastAPI, Request
from fastapi.routing import APIRoute

logger = logging.getLogger(__name__)


# =============================================================================
# Event Payloads
# =============================================================================

@dataclass
class RouteInfo:
    """A route added to the server."""
    method: str
    path: str
    plugin: str | None = None


@dataclass
class RequestEvent:
    """A log entry a handler attached to its request."""
    request: str  # request id
    tags: list[str]
    data: Any = None
    timestamp: float = field(default_factory=time.time)


@dataclass
class ResponseInfo:
    """Summary of a completed request."""
    id: str
    method: str
    path: str
    status_code: int
    duration_ms: float


@dataclass
class LogEvent:
    """A server-level log entry."""
    tags: list[str]
    data: Any = None
    timestamp: float = field(default_factory=time.time)


def tag_map(tags: Iterable[str]) -> dict[str, bool]:
    """Index tags for quick membership tests, e.g. tags["debug"]."""
    return {tag: True for tag in tags}


# =============================================================================
# Server
# =============================================================================

class Server:
    """
    Event-emitting facade over a FastAPI application.

    Routes and plugins are added through the server so that listeners
    see every route, request log and response.
    """

    def __init__(self, app: FastAPI):
        self.app = app
        self.plugins: dict[str, Any] = {}
        self.listeners: dict[str, list[Callable[..., Any]]] = {}

        # Name of the plugin currently registering, reported with its routes
        self._realm: str | None = None

        hostname = socket.gethostname().replace(":", "-")
        self._id_prefix = f"{hostname}:{os.getpid()}"
        self._counter = itertools.count(1)

        app.state.server = self
        app.middleware("http")(self._track_request)

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    def on(self, event: str, listener: Callable[..., Any]) -> None:
        """Subscribe a listener to an event."""
        self.listeners.setdefault(event, []).append(listener)

    def once(self, event: str, listener: Callable[..., Any]) -> None:
        """Subscribe a listener that is removed after its first call."""
        def wrapper(*args: Any) -> None:
            self.off(event, wrapper)
            listener(*args)

        self.on(event, wrapper)

    def off(self, event: str, listener: Callable[..., Any]) -> None:
        """Unsubscribe a listener; unknown listeners are ignored."""
        listeners = self.listeners.get(event, [])
        if listener in listeners:
            listeners.remove(listener)

    def emit(self, event: str, *args: Any) -> None:
        """Call every listener of an event in subscription order."""
        for listener in list(self.listeners.get(event, [])):
            listener(*args)

    def log(self, tags: Iterable[str], data: Any = None) -> None:
        """Emit a server-level log event."""
        tags = list(tags)
        self.emit("log", LogEvent(tags=tags, data=data), tag_map(tags))

    # -------------------------------------------------------------------------
    # Routes and Plugins
    # -------------------------------------------------------------------------

    def route(self, method: str, path: str, endpoint: Callable[..., Any], **options: Any) -> None:
        """Add a single route and announce it."""
        self.app.add_api_route(path, endpoint, methods=[method.upper()], **options)
        self.emit("route", RouteInfo(method=method.lower(), path=path, plugin=self._realm))

    def include_router(self, router: APIRouter, prefix: str = "", **options: Any) -> None:
        """Mount a router and announce each of its routes."""
        self.app.include_router(router, prefix=prefix, **options)
        for route in router.routes:
            if isinstance(route, APIRoute):
                for method in sorted(route.methods):
                    self.emit("route", RouteInfo(
                        method=method.lower(),
                        path=f"{prefix}{route.path}",
                        plugin=self._realm,
                    ))

    def register(self, plugin: Any, options: dict[str, Any] | None = None) -> None:
        """
        Register a plugin.

        A plugin is any object (usually a module) with a `name` attribute and
        a `register(server, options)` callable. Errors raised by the plugin
        propagate to the caller.
        """
        previous, self._realm = self._realm, plugin.name
        try:
            plugin.register(self, options)
        finally:
            self._realm = previous

        self.plugins[plugin.name] = plugin
        logger.debug(f"Registered plugin: {plugin.name}")

    def stop(self) -> None:
        """Notify plugins that the server is going away."""
        self.emit("stop")
        self.listeners.clear()

    # -------------------------------------------------------------------------
    # Request Tracking
    # -------------------------------------------------------------------------

    def next_request_id(self) -> str:
        """Request ids look like `<ms>:<host>:<pid>:<sequence>`."""
        return f"{int(time.time() * 1000)}:{self._id_prefix}:{next(self._counter)}"

    async def _track_request(self, request: Request, call_next: Callable) -> Any:
        request.state.request_id = self.next_request_id()
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            self.emit("request-error", request, exc)
            raise

        self.emit("response", request, ResponseInfo(
            id=request.state.request_id,
            method=request.method.lower(),
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        ))
        return response


def request_log(request: Request, tags: Iterable[str], data: Any = None) -> None:
    """
    Log an event against the current request.

    The server emits it as a `request` event; plugins decide where it goes.
    """
    server: Server = request.app.state.server
    tags = list(tags)
    request_id = getattr(request.state, "request_id", None) or server.next_request_id()
    server.emit("request", request, RequestEvent(request=request_id, tags=tags, data=data), tag_map(tags))
