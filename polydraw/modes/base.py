"""Mode interface, normalized input events and the shared mode context."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from polydraw.common.types import InputType, Position, ScreenPoint
from polydraw.core.actions import Action
from polydraw.core.config import EditorConfig
from polydraw.core.events import EventBus
from polydraw.core.feature_store import FeatureStore
from polydraw.core.history import HistoryManager
from polydraw.host import RenderHost


@dataclass
class PointerEvent:
    """Pointer or gesture event, already normalized by the host."""

    lng_lat: Position
    """Geographic position under the pointer."""

    point: ScreenPoint
    """Screen pixel position of the pointer."""

    input_type: InputType = InputType.MOUSE
    original_event: Any = None
    """Raw host event, passed through untouched."""

    default_prevented: bool = False

    def prevent_default(self) -> None:
        """Ask the host to skip its native handling of this event."""
        self.default_prevented = True


@dataclass
class ModeContext:
    """Collaborators shared by all modes of one editor instance."""

    store: FeatureStore
    history: HistoryManager
    events: EventBus
    host: RenderHost
    config: EditorConfig = field(default_factory=EditorConfig)

    def render_features(self) -> None:
        self.host.render_features(self.store.get_all())

    def commit(self, action: Action, event_type: str, payload: Any) -> None:
        """Record a finished gesture in history and announce it."""
        self.history.push(action)
        logger.info(f"Committed {action.type.value} action")
        self.events.emit(event_type, payload)


class Mode(ABC):
    """Interaction mode.

    Modes are activated and deactivated by the ``ModeManager``. Handlers of an
    inactive mode do nothing, and ``deactivate`` drops every bit of gesture
    state so switching mid-gesture never leaks state into the next session.
    """

    def __init__(self, context: ModeContext):
        self.context = context
        self.is_active = False

    @abstractmethod
    def activate(self) -> None:
        """Called when the mode becomes current."""

    @abstractmethod
    def deactivate(self) -> None:
        """Called when the mode stops being current."""

    def on_pointer_down(self, event: PointerEvent) -> None:
        """Mouse button press or touch start."""

    def on_pointer_move(self, event: PointerEvent) -> None:
        """Pointer movement."""

    def on_pointer_up(self, event: PointerEvent) -> None:
        """Mouse button release or touch end."""

    def on_double_click(self, event: PointerEvent) -> None:
        """Double click or double tap."""

    def on_long_press(self, event: PointerEvent) -> None:
        """Touch hold."""

    def on_key_down(self, key: str, event: Any = None) -> None:
        """Key press; ``key`` is the raw key name, e.g. ``"Escape"``."""
