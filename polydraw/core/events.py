"""Synchronous domain event bus and its payload types.

Listeners run in registration order at the moment ``emit`` is called, so
events reach the host in the same order the mutations happened.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from polydraw.common.errors import raise_with_remedy
from polydraw.core.features import Feature


@dataclass(frozen=True)
class CreateEvent:
    feature: Feature


@dataclass(frozen=True)
class UpdateEvent:
    feature: Feature
    old_feature: Feature


@dataclass(frozen=True)
class DeleteEvent:
    feature: Feature


@dataclass(frozen=True)
class SelectionChangeEvent:
    selected_ids: list[str]


@dataclass(frozen=True)
class ModeChangeEvent:
    mode: str
    previous_mode: str


EVENT_TYPES: dict[str, type] = {
    "create": CreateEvent,
    "update": UpdateEvent,
    "delete": DeleteEvent,
    "selectionchange": SelectionChangeEvent,
    "modechange": ModeChangeEvent,
}
"""Supported event names and the payload type delivered for each."""

Listener = Callable[[Any], None]


class EventBus:
    """Register, remove and emit editor events."""

    def __init__(self):
        self._listeners: dict[str, list[Listener]] = {}

    @staticmethod
    def _check_type(event_type: str) -> None:
        if event_type not in EVENT_TYPES:
            raise_with_remedy(
                f"Unknown event type: {event_type!r}",
                f"Use one of: {', '.join(EVENT_TYPES)}.",
            )

    def on(self, event_type: str, listener: Listener) -> None:
        """Register ``listener`` for ``event_type`` (duplicates are ignored)."""
        self._check_type(event_type)
        listeners = self._listeners.setdefault(event_type, [])
        if listener not in listeners:
            listeners.append(listener)

    def off(self, event_type: str, listener: Listener) -> None:
        """Remove a previously registered listener; unknown listeners are ignored."""
        self._check_type(event_type)
        listeners = self._listeners.get(event_type, [])
        if listener in listeners:
            listeners.remove(listener)

    def emit(self, event_type: str, payload: Any) -> None:
        """Invoke every listener of ``event_type`` with ``payload``."""
        self._check_type(event_type)
        for listener in list(self._listeners.get(event_type, [])):
            listener(payload)

    def remove_all_listeners(self) -> None:
        self._listeners.clear()
