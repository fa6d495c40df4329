"""
Common utilities for polydraw.

Shared type definitions, the editor error type and logging setup.
"""

from polydraw.common.errors import PolyDrawError, raise_with_remedy, warn_soft_degrade
from polydraw.common.logging import configure_logging
from polydraw.common.types import InputType, ModeName, Position, Ring, ScreenPoint, Segment

__all__ = [
    "InputType",
    "ModeName",
    "PolyDrawError",
    "Position",
    "Ring",
    "ScreenPoint",
    "Segment",
    "configure_logging",
    "raise_with_remedy",
    "warn_soft_degrade",
]
