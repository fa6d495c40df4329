"""Rendering host interface consumed by the editing core.

Purpose
-------
The core never draws anything itself. It projects geographic positions to
screen pixels for hit tests and issues synchronous render requests, which a
host is free to coalesce (e.g. defer to the next paint).

Interface
---------
A host provides:
- project(position) -> ScreenPoint: geographic to screen-pixel projection
- render_features(features) -> None: redraw all committed features
- render_preview(coordinates) / clear_preview(): in-progress draw outline
- render_vertices(feature_id, vertices, midpoints, highlight_index) /
  clear_vertices(): vertex and midpoint handles of the selected feature
- set_drag_pan(enabled) -> None: suspend/restore native map panning

Example
-------
```python
from polydraw import PolygonEditor
from polydraw.host import HeadlessHost

editor = PolygonEditor(HeadlessHost(scale=10.0))
```
"""

from __future__ import annotations

from typing import Protocol

from polydraw.common.types import Position, ScreenPoint
from polydraw.core.features import Feature


class RenderHost(Protocol):
    """Projection and rendering collaborator of the editor."""

    def project(self, position: Position) -> ScreenPoint:
        """Project a geographic position to a screen pixel coordinate."""

    def render_features(self, features: list[Feature]) -> None:
        """Redraw every committed feature, in render order."""

    def render_preview(self, coordinates: list[Position]) -> None:
        """Draw the outline of the polygon being drawn.

        Parameters
        ----------
        coordinates : list[Position]
            Committed vertices, optionally the cursor position, and a closing
            copy of the first vertex.
        """

    def clear_preview(self) -> None:
        """Remove the draw preview."""

    def render_vertices(
        self,
        feature_id: str,
        vertices: list[Position],
        midpoints: list[Position],
        highlight_index: int | None = None,
    ) -> None:
        """Draw vertex and midpoint handles of the selected feature.

        Parameters
        ----------
        feature_id : str
            Id of the selected feature.
        vertices : list[Position]
            Unique ring vertices (no closing duplicate).
        midpoints : list[Position]
            Midpoint of every edge, edge ``i`` running from vertex ``i``.
        highlight_index : int | None
            Vertex under the pointer, drawn highlighted.
        """

    def clear_vertices(self) -> None:
        """Remove all vertex and midpoint handles."""

    def set_drag_pan(self, enabled: bool) -> None:
        """Enable or disable the host's native drag panning."""


class HeadlessHost:
    """Host without a display.

    Projects with a fixed linear scale and ignores render requests. Useful for
    scripted editing and tests where screen coordinates are synthetic.
    """

    def __init__(self, scale: float = 1.0, offset: ScreenPoint = (0.0, 0.0)):
        self.scale = scale
        self.offset = offset
        self.drag_pan_enabled = True

    def project(self, position: Position) -> ScreenPoint:
        return (
            position[0] * self.scale + self.offset[0],
            position[1] * self.scale + self.offset[1],
        )

    def unproject(self, point: ScreenPoint) -> Position:
        """Inverse of :meth:`project`."""
        return (
            (point[0] - self.offset[0]) / self.scale,
            (point[1] - self.offset[1]) / self.scale,
        )

    def render_features(self, features: list[Feature]) -> None:
        pass

    def render_preview(self, coordinates: list[Position]) -> None:
        pass

    def clear_preview(self) -> None:
        pass

    def render_vertices(
        self,
        feature_id: str,
        vertices: list[Position],
        midpoints: list[Position],
        highlight_index: int | None = None,
    ) -> None:
        pass

    def clear_vertices(self) -> None:
        pass

    def set_drag_pan(self, enabled: bool) -> None:
        self.drag_pan_enabled = enabled
