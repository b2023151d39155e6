"""In-process telemetry bus used by the mode policy and selection helpers.

Events are plain dicts tagged with ``"event"``. Listeners get their own copy,
and a failing listener is logged without affecting the caller.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

LOGGER = logging.getLogger(__name__)

TelemetryListener = Callable[[dict[str, Any]], None]

_LISTENERS: dict[str, list[TelemetryListener]] = {}


def register_event_listener(event_name: str, callback: TelemetryListener) -> None:
    if not event_name:
        return
    bucket = _LISTENERS.setdefault(event_name, [])
    if callback not in bucket:
        bucket.append(callback)


def unregister_event_listener(event_name: str, callback: TelemetryListener) -> None:
    bucket = _LISTENERS.get(event_name, [])
    if callback in bucket:
        bucket.remove(callback)
    if not bucket:
        _LISTENERS.pop(event_name, None)


def clear_event_listeners() -> None:
    _LISTENERS.clear()


def emit(event_name: str, payload: Mapping[str, Any] | None = None) -> None:
    """Deliver *event_name* with *payload* to every registered listener."""

    if not event_name:
        return
    event = {"event": event_name, **(payload or {})}
    LOGGER.debug("telemetry %s %s", event_name, event)
    for listener in tuple(_LISTENERS.get(event_name, ())):
        try:
            listener(dict(event))
        except Exception:
            LOGGER.debug("Telemetry listener %r raised for %s", listener, event_name, exc_info=True)


__all__ = [
    "TelemetryListener",
    "clear_event_listeners",
    "emit",
    "register_event_listener",
    "unregister_event_listener",
]
