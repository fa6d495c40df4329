"""Interaction modes of the polygon editor."""

from polydraw.modes.base import Mode, ModeContext, PointerEvent
from polydraw.modes.draw import DrawMode
from polydraw.modes.idle import IdleMode
from polydraw.modes.select import DragSession, SelectMode

__all__ = [
    "DragSession",
    "DrawMode",
    "IdleMode",
    "Mode",
    "ModeContext",
    "PointerEvent",
    "SelectMode",
]
