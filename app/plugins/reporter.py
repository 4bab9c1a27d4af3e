# =============================================================================
# app/plugins/reporter.py - Console Reporter Pipeline
# =============================================================================
# Turns server events into log records on the `noire.server` logger and
# writes the selected ones to the console.
#
# Options (built by app.plugins.monitor.reporter_options):
#   {
#       "reporters": {
#           "console": [
#               {"module": "event-filter", "args": [{"log": "*", "request": "*"}]},
#               {"module": "console", "args": [{"stream": "stdout"}]},
#           ]
#       }
#   }
#
# Filter args map an event type to "*" (everything) or a list of tags,
# at least one of which must be present on the event.
# =============================================================================

import logging
import sys
from typing import Any

name = "reporter"

EVENT_LOGGER = "noire.server"

# Event types understood by the filter
EVENT_TYPES = ("log", "request", "error", "response", "route")

FORMAT = "%(asctime)s [%(event)s] %(tags)s %(message)s"


class EventFilter(logging.Filter):
    """Keep records whose event type (and tags) the reporter asked for."""

    def __init__(self, selection: dict[str, Any]):
        super().__init__()
        self.selection = selection

    def filter(self, record: logging.LogRecord) -> bool:
        wanted = self.selection.get(getattr(record, "event", None))
        if wanted is None:
            return False
        if wanted == "*":
            return True
        tags = getattr(record, "tags", [])
        return any(tag in tags for tag in wanted)


class ConsoleReporter(logging.StreamHandler):
    """StreamHandler tagged so it can be found and removed on server stop."""


def _level_for(tags: list[str], default: int = logging.INFO) -> int:
    if "error" in tags:
        return logging.ERROR
    if "warning" in tags or "warn" in tags:
        return logging.WARNING
    if "debug" in tags:
        return logging.DEBUG
    return default


def build_handler(console: list[dict[str, Any]]) -> ConsoleReporter:
    """
    Build the console handler from the reporter chain.

    Raises:
        ValueError: If a chain link names an unknown module
    """
    stream = sys.stdout
    handler_filters = []

    for link in console:
        module = link.get("module")
        args = link.get("args") or [{}]
        if module == "event-filter":
            unknown = set(args[0]) - set(EVENT_TYPES)
            if unknown:
                raise ValueError(f"Unknown event types in reporter filter: {sorted(unknown)}")
            handler_filters.append(EventFilter(args[0]))
        elif module == "console":
            stream = sys.stderr if args[0].get("stream") == "stderr" else sys.stdout
        else:
            raise ValueError(f"Unknown reporter module: {module}")

    handler = ConsoleReporter(stream)
    handler.setFormatter(logging.Formatter(FORMAT))
    for handler_filter in handler_filters:
        handler.addFilter(handler_filter)
    return handler


def register(server: Any, options: dict[str, Any] | None = None) -> None:
    """
    Subscribe to server events and write them through the console reporter.

    Raises:
        ValueError: If the options describe an unknown reporter chain
    """
    reporters = (options or {}).get("reporters", {})
    handler = build_handler(reporters.get("console", []))

    event_logger = logging.getLogger(EVENT_LOGGER)

    def write(event: str, tags: list[str], message: str, data: Any = None, level: int | None = None) -> None:
        event_logger.log(
            level if level is not None else _level_for(tags),
            message,
            extra={"event": event, "tags": tags, "data": data},
        )

    server.on("log", lambda event, tags: write("log", event.tags, repr(event.data), event.data))
    server.on("request", lambda request, event, tags: write(
        "request", event.tags, f"{event.request} {request.url.path} {event.data!r}", event.data
    ))
    server.on("response", lambda request, info: write(
        "response", ["response"],
        f"{info.method} {info.path} {info.status_code} ({info.duration_ms}ms)",
        info, logging.INFO,
    ))
    server.on("route", lambda route: write(
        "route", ["route"], f"{route.method} {route.path} ({route.plugin or 'server'})", route, logging.DEBUG
    ))
    server.on("request-error", lambda request, exc: write(
        "error", ["error"], f"{request.method.lower()} {request.url.path} failed: {exc!r}", exc, logging.ERROR
    ))
    server.on("stop", lambda: event_logger.removeHandler(handler))

    # attached only once every subscription is in place
    event_logger.setLevel(logging.DEBUG)
    event_logger.propagate = False
    event_logger.addHandler(handler)
