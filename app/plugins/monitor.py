# =============================================================================
# app/plugins/monitor.py - Monitoring Plugin
# =============================================================================
# Re-emits server lifecycle events as server logs and installs the console
# reporter pipeline.
#
# - route:   logged with tags [server, route, debug] and {plugin, method, path}
# - request: logged with the event's own tags; in debug mode the data is
#            wrapped with the request id, path and client address
#
# MONITOR_DEBUG also widens the console reporter to route and response events.
# =============================================================================

import logging
from typing import Any

from app.config import settings
from app.plugins import reporter

logger = logging.getLogger(__name__)

name = "monitor"

ROUTE_TAGS = ["server", "route", "debug"]


def reporter_options(debug: bool) -> dict[str, Any]:
    """
    Reporter chain for the console.

    Log, error and request events are always reported; route and
    response events only in debug mode.
    """
    selection: dict[str, Any] = {"log": "*", "error": "*", "request": "*"}
    if debug:
        selection.update({"response": "*", "route": "*"})

    return {
        "reporters": {
            "console": [
                {"module": "event-filter", "args": [selection]},
                {"module": "console", "args": [{"stream": "stdout"}]},
            ]
        }
    }


def request_summary(request: Any, event: Any) -> dict[str, Any]:
    """Request id, path and client address around the event data."""
    forwarded_for = request.headers.get("x-forwarded-for")
    client = getattr(request, "client", None)

    return {
        "id": event.request.split(":")[3],
        "path": request.url.path,
        "address": forwarded_for or (client.host if client else None),
        "info": event.data,
    }


def register(server: Any, options: dict[str, Any] | None = None) -> None:
    """
    Plugin registration function.

    Raises:
        Exception: Whatever the reporter registration raised, unchanged
    """
    debug = settings.MONITOR_DEBUG

    server.register(reporter, reporter_options(debug))

    def on_route(route: Any) -> None:
        server.log(ROUTE_TAGS, {
            "plugin": route.plugin,
            "method": route.method,
            "path": route.path,
        })

    def on_request(request: Any, event: Any, tags: Any = None) -> None:
        data = request_summary(request, event) if debug else event.data
        server.log(event.tags, data)

    server.on("route", on_route)
    server.on("request", on_request)

    logger.debug(f"Monitor registered (debug={debug})")
