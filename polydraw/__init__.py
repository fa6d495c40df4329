"""polydraw: interactive polygon editing engine with undo/redo."""

from polydraw.common.errors import PolyDrawError
from polydraw.common.logging import configure_logging
from polydraw.common.types import InputType, ModeName
from polydraw.core.config import EditorConfig, load_editor_config
from polydraw.core.features import Feature
from polydraw.editor import PolygonEditor
from polydraw.host import HeadlessHost, RenderHost
from polydraw.modes.base import PointerEvent

__all__ = [
    "EditorConfig",
    "Feature",
    "HeadlessHost",
    "InputType",
    "ModeName",
    "PointerEvent",
    "PolyDrawError",
    "PolygonEditor",
    "RenderHost",
    "configure_logging",
    "load_editor_config",
]
