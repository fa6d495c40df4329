"""Polygon drawing mode.

Each click adds a vertex. The polygon is finalized by clicking back on the
first vertex or by double-clicking, in both cases only with at least three
vertices and a closing edge that does not cross the outline. A long press
removes the last vertex and Escape abandons the drawing.

Clicks that would make the outline cross itself are ignored.
"""

from typing import Any

from loguru import logger

from polydraw.common.types import Position
from polydraw.core.actions import CreateAction
from polydraw.core.events import CreateEvent
from polydraw.core.feature_store import new_feature_id
from polydraw.core.features import Feature
from polydraw.geometry import (
    MIN_VERTICES,
    close_ring,
    pixel_distance,
    would_closing_intersect,
    would_new_vertex_intersect,
)
from polydraw.modes.base import Mode, ModeContext, PointerEvent


class DrawMode(Mode):
    """Accumulates vertices and turns them into a new feature."""

    def __init__(self, context: ModeContext):
        super().__init__(context)
        self._vertices: list[Position] = []
        # True when the latest pointer-down appended a vertex
        self._last_click_added = False

    @property
    def vertices(self) -> list[Position]:
        """Committed vertices of the polygon being drawn (copy)."""
        return list(self._vertices)

    def activate(self) -> None:
        self.is_active = True
        self._reset()

    def deactivate(self) -> None:
        self.is_active = False
        self._reset()
        self.context.host.clear_preview()

    def on_pointer_down(self, event: PointerEvent) -> None:
        if not self.is_active:
            return
        self._last_click_added = False

        if len(self._vertices) >= MIN_VERTICES and self._is_near_first_vertex(event):
            if would_closing_intersect(self._vertices):
                logger.debug("Closing edge would self-intersect, click ignored")
                return
            self.finalize()
            return

        candidate = (float(event.lng_lat[0]), float(event.lng_lat[1]))
        if would_new_vertex_intersect(self._vertices, candidate):
            logger.debug(f"Vertex {candidate} would self-intersect, click ignored")
            return

        self._vertices.append(candidate)
        self._last_click_added = True
        self._update_preview(candidate)

    def on_pointer_move(self, event: PointerEvent) -> None:
        if not self.is_active or not self._vertices:
            return
        self._update_preview((float(event.lng_lat[0]), float(event.lng_lat[1])))

    def on_double_click(self, event: PointerEvent) -> None:
        if not self.is_active:
            return

        # the first click of the double-click already added a vertex
        if self._last_click_added and self._vertices:
            self._vertices.pop()
        self._last_click_added = False

        if len(self._vertices) >= MIN_VERTICES and not would_closing_intersect(self._vertices):
            self.finalize()
        elif self._vertices:
            self.context.host.render_preview(self._preview_coordinates())

        event.prevent_default()

    def on_long_press(self, event: PointerEvent) -> None:
        if not self.is_active or not self._vertices:
            return

        self._vertices.pop()
        self._last_click_added = False
        if self._vertices:
            self.context.host.render_preview(self._preview_coordinates())
        else:
            self.context.host.clear_preview()

    def on_key_down(self, key: str, event: Any = None) -> None:
        if not self.is_active:
            return
        if key == "Escape":
            logger.debug("Drawing cancelled")
            self._reset()
            self.context.host.clear_preview()

    def finalize(self) -> Feature | None:
        """Close the ring and store it as a new feature.

        Returns:
            The stored feature, or None with fewer than three vertices.
        """
        if len(self._vertices) < MIN_VERTICES:
            return None

        ctx = self.context
        feature = Feature(id=new_feature_id(), ring=close_ring(self._vertices), properties={})
        stored = ctx.store.add(feature)
        ctx.commit(CreateAction(stored), "create", CreateEvent(feature=stored))
        ctx.render_features()

        self._reset()
        ctx.host.clear_preview()
        return stored

    def _reset(self) -> None:
        self._vertices = []
        self._last_click_added = False

    def _is_near_first_vertex(self, event: PointerEvent) -> bool:
        first_px = self.context.host.project(self._vertices[0])
        return pixel_distance(event.point, first_px) <= self.context.config.close_threshold_px

    def _preview_coordinates(self, cursor: Position | None = None) -> list[Position]:
        coords = list(self._vertices)
        if cursor is not None:
            coords.append(cursor)
        if coords:
            coords.append(coords[0])
        return coords

    def _update_preview(self, cursor: Position) -> None:
        self.context.host.render_preview(self._preview_coordinates(cursor))
