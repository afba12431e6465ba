"""Request reporters.

AuthenticatedClient never logs on its own; it emits events to an
injected reporter. The default reporter forwards them to structlog.
"""

from typing import Any, Protocol, runtime_checkable

import structlog

# Events not listed here are logged at debug level
_EVENT_LEVELS: dict[str, str] = {
    "request_client_error": "warning",
    "request_server_error": "warning",
    "request_transport_failure": "warning",
    "request_cancelled": "info",
    "request_retries_exhausted": "error",
}


@runtime_checkable
class RequestReporter(Protocol):
    """Receives client events as an event name plus key-value context."""

    def report(self, event: str, **fields: Any) -> None: ...


class StructlogReporter:
    """Reporter that writes events through a structlog logger."""

    def __init__(self, logger: Any = None) -> None:
        self._log = logger or structlog.get_logger("suiteforge.client")

    def report(self, event: str, **fields: Any) -> None:
        level = _EVENT_LEVELS.get(event, "debug")
        getattr(self._log, level)(event, **fields)


class NullReporter:
    """Reporter that discards every event."""

    def report(self, event: str, **fields: Any) -> None:
        return None


class RecordingReporter:
    """Reporter that keeps events in memory, for assertions in tests."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def report(self, event: str, **fields: Any) -> None:
        self.events.append((event, fields))

    def names(self) -> list[str]:
        return [event for event, _ in self.events]
