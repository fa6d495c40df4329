"""
Module specifying types used in polydraw
"""

from enum import Enum

# Geometry types
Position = tuple[float, float]
"""Geographic coordinate ``(lng, lat)``; lng in [-180, 180], lat in [-90, 90]."""

Ring = tuple[Position, ...]
"""Closed ring of positions; first == last and at least 4 entries."""

ScreenPoint = tuple[float, float]
"""Screen pixel coordinate ``(x, y)`` as produced by the host projection."""

Segment = tuple[Position, Position]


class InputType(Enum):
    """Pointer modality that generated an input event."""

    MOUSE = "mouse"
    TOUCH = "touch"


class ModeName(Enum):
    """Editor interaction modes."""

    IDLE = "idle"
    """No interaction."""

    DRAW = "draw"
    """Creating a new polygon."""

    SELECT = "select"
    """Selecting and reshaping existing polygons."""
