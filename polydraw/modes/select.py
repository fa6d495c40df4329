"""Selection and reshaping mode.

With a feature selected, a pointer-down is hit-tested in strict order:

1. an existing vertex within the hit threshold starts a vertex drag,
2. an edge midpoint within the threshold inserts a vertex there and drags it,
3. a point inside the selected polygon starts a whole-polygon drag,
4. anything else falls through to (re)selection.

Every drag candidate is validated against self-intersection; rejected
positions are dropped and the geometry stays at the last valid state. A
gesture produces at most one history entry, committed on pointer-up.
"""

from dataclasses import dataclass
from typing import Any

from loguru import logger

from polydraw.common.types import Position, ScreenPoint
from polydraw.core.actions import DeleteAction, UpdateAction
from polydraw.core.events import DeleteEvent, SelectionChangeEvent, UpdateEvent
from polydraw.core.features import Feature
from polydraw.geometry import (
    insert_vertex,
    midpoints,
    pixel_distance,
    point_in_ring,
    remove_vertex,
    replace_vertex,
    ring_has_self_intersection,
    translate_ring,
    unique_vertices,
)
from polydraw.modes.base import Mode, ModeContext, PointerEvent

DELETE_KEYS = ("Delete", "Backspace")


@dataclass
class DragSession:
    """Transient state between drag-start pointer-down and pointer-up."""

    feature_id: str
    start_feature: Feature
    """Snapshot taken before the gesture touched the feature."""

    start_position: Position
    vertex_index: int | None = None
    """Dragged vertex, or None for a whole-polygon drag."""


class SelectMode(Mode):
    """Single-selection editing of existing polygons."""

    def __init__(self, context: ModeContext):
        super().__init__(context)
        self._selected_id: str | None = None
        self._drag: DragSession | None = None
        self._highlight_index: int | None = None

    # ====================================================================
    # Lifecycle
    # ====================================================================

    def activate(self) -> None:
        self.is_active = True

    def deactivate(self) -> None:
        self._cancel_drag()
        self.is_active = False
        self._highlight_index = None
        self.context.host.clear_vertices()
        if self._selected_id is not None:
            self._selected_id = None
            self._notify_selection_change()

    def get_selected_ids(self) -> list[str]:
        return [self._selected_id] if self._selected_id is not None else []

    @property
    def is_dragging(self) -> bool:
        return self._drag is not None

    # ====================================================================
    # Pointer handlers
    # ====================================================================

    def on_pointer_down(self, event: PointerEvent) -> None:
        if not self.is_active:
            return
        if self._drag is not None:
            # the release of the previous gesture never arrived
            self._finish_drag()
            self.context.host.set_drag_pan(True)

        selected = self._selected_feature()
        if selected is not None and self._try_start_drag(selected, event):
            return

        self._reselect(event.lng_lat)

    def on_pointer_move(self, event: PointerEvent) -> None:
        if not self.is_active:
            return
        if self._drag is not None:
            self._drag_to(event.lng_lat)
            return

        selected = self._selected_feature()
        if selected is None:
            return
        index = self._find_vertex_at_pixel(selected, event)
        if index != self._highlight_index:
            self._highlight_index = index
            self._render_handles()

    def on_pointer_up(self, event: PointerEvent) -> None:
        if not self.is_active:
            return
        if self._drag is not None:
            self._finish_drag()
        self.context.host.set_drag_pan(True)

    def on_double_click(self, event: PointerEvent) -> None:
        if not self.is_active:
            return
        selected = self._selected_feature()
        if selected is None:
            return
        index = self._find_vertex_at_pixel(selected, event)
        if index is None:
            return
        self._delete_vertex(selected, index)
        event.prevent_default()

    def on_long_press(self, event: PointerEvent) -> None:
        if not self.is_active:
            return
        selected = self._selected_feature()
        if selected is None:
            return
        index = self._find_vertex_at_pixel(selected, event)
        if index is not None:
            self._delete_vertex(selected, index)
        elif point_in_ring(selected.ring, event.lng_lat):
            self.delete_selected()

    def on_key_down(self, key: str, event: Any = None) -> None:
        if not self.is_active:
            return
        if key in DELETE_KEYS:
            self.delete_selected()

    # ====================================================================
    # Programmatic selection
    # ====================================================================

    def select_feature(self, feature_id: str) -> bool:
        """Select a feature by id, cancelling any drag in progress.

        Returns:
            False if the mode is inactive or the id is unknown.
        """
        if not self.is_active or self.context.store.get_by_id(feature_id) is None:
            return False
        self._cancel_drag()
        if self._selected_id != feature_id:
            self._set_selection(feature_id)
        else:
            self._render_handles()
        return True

    def clear_selection(self) -> None:
        """Deselect, cancelling any drag in progress."""
        if not self.is_active or self._selected_id is None:
            return
        self._cancel_drag()
        self._set_selection(None)

    def refresh_vertex_handles(self) -> None:
        """Re-sync handles after an out-of-band geometry change such as undo."""
        if self._selected_id is None:
            return
        if self.context.store.get_by_id(self._selected_id) is None:
            self._cancel_drag()
            self._set_selection(None)
            return
        self._render_handles()

    def delete_selected(self) -> None:
        """Delete the selected feature as one undoable action."""
        if self._selected_id is None:
            return
        self._cancel_drag()
        ctx = self.context
        feature = ctx.store.remove(self._selected_id)
        self._selected_id = None
        self._highlight_index = None
        if feature is not None:
            ctx.commit(DeleteAction(feature), "delete", DeleteEvent(feature=feature))
        ctx.host.clear_vertices()
        self._notify_selection_change()
        ctx.render_features()

    # ====================================================================
    # Hit testing
    # ====================================================================

    def _threshold(self, event: PointerEvent) -> float:
        return self.context.config.hit_threshold(event.input_type)

    def _find_vertex_at_pixel(self, feature: Feature, event: PointerEvent) -> int | None:
        return self._find_handle(unique_vertices(feature.ring), event)

    def _find_midpoint_at_pixel(self, feature: Feature, event: PointerEvent) -> int | None:
        return self._find_handle(midpoints(feature.ring), event)

    def _find_handle(self, positions: list[Position], event: PointerEvent) -> int | None:
        threshold = self._threshold(event)
        for idx, position in enumerate(positions):
            screen: ScreenPoint = self.context.host.project(position)
            if pixel_distance(event.point, screen) <= threshold:
                return idx
        return None

    def _feature_at(self, position: Position) -> Feature | None:
        """Topmost feature containing ``position``."""
        for feature in reversed(self.context.store.get_all()):
            if point_in_ring(feature.ring, position):
                return feature
        return None

    # ====================================================================
    # Selection
    # ====================================================================

    def _selected_feature(self) -> Feature | None:
        if self._selected_id is None:
            return None
        return self.context.store.get_by_id(self._selected_id)

    def _reselect(self, position: Position) -> None:
        hit = self._feature_at(position)
        if hit is None:
            new_id = None
        elif hit.id == self._selected_id:
            new_id = None
        else:
            new_id = hit.id

        if new_id != self._selected_id:
            self._set_selection(new_id)

    def _set_selection(self, feature_id: str | None) -> None:
        self._selected_id = feature_id
        self._highlight_index = None
        self._notify_selection_change()
        self.context.render_features()
        self._render_handles()

    def _notify_selection_change(self) -> None:
        self.context.events.emit(
            "selectionchange", SelectionChangeEvent(selected_ids=self.get_selected_ids())
        )

    def _render_handles(self) -> None:
        feature = self._selected_feature()
        if feature is None:
            self.context.host.clear_vertices()
            return
        self.context.host.render_vertices(
            feature.id,
            unique_vertices(feature.ring),
            midpoints(feature.ring),
            self._highlight_index,
        )

    # ====================================================================
    # Dragging
    # ====================================================================

    def _try_start_drag(self, feature: Feature, event: PointerEvent) -> bool:
        start = (float(event.lng_lat[0]), float(event.lng_lat[1]))
        snapshot = self.context.store.clone(feature)

        vertex_index = self._find_vertex_at_pixel(feature, event)
        if vertex_index is not None:
            self._begin_drag(DragSession(feature.id, snapshot, start, vertex_index))
            return True

        edge_index = self._find_midpoint_at_pixel(feature, event)
        if edge_index is not None:
            # new vertex lands between edge_index and edge_index + 1
            mid = midpoints(feature.ring)[edge_index]
            ring = insert_vertex(feature.ring, edge_index + 1, mid)
            self.context.store.update(feature.id, feature.with_ring(ring))
            self._begin_drag(DragSession(feature.id, snapshot, start, edge_index + 1))
            self.context.render_features()
            self._render_handles()
            return True

        if point_in_ring(feature.ring, start):
            self._begin_drag(DragSession(feature.id, snapshot, start))
            return True

        return False

    def _begin_drag(self, session: DragSession) -> None:
        self._drag = session
        self._highlight_index = None
        self.context.host.set_drag_pan(False)

    def _drag_to(self, position: Position) -> None:
        drag = self._drag
        feature = self.context.store.get_by_id(drag.feature_id)
        if feature is None:
            logger.debug(f"Drag target {drag.feature_id} vanished, drag dropped")
            self._cancel_drag()
            return

        if drag.vertex_index is not None:
            candidate = replace_vertex(feature.ring, drag.vertex_index, position)
        else:
            dx = position[0] - drag.start_position[0]
            dy = position[1] - drag.start_position[1]
            candidate = translate_ring(drag.start_feature.ring, dx, dy)

        if ring_has_self_intersection(candidate):
            logger.debug("Drag candidate self-intersects, position rejected")
            return

        self.context.store.update(feature.id, feature.with_ring(candidate))
        self.context.render_features()
        self._highlight_index = drag.vertex_index
        self._render_handles()

    def _finish_drag(self) -> None:
        """Record a single update action for the completed drag."""
        drag = self._drag
        self._drag = None
        self._highlight_index = None

        current = self.context.store.get_by_id(drag.feature_id)
        if current is not None and current != drag.start_feature:
            after = self.context.store.clone(current)
            self.context.commit(
                UpdateAction(drag.feature_id, drag.start_feature, after),
                "update",
                UpdateEvent(feature=after, old_feature=drag.start_feature),
            )
        self._render_handles()

    def _cancel_drag(self) -> None:
        """Abort a drag and put the feature back to its pre-gesture snapshot."""
        drag = self._drag
        if drag is None:
            return
        self._drag = None
        current = self.context.store.get_by_id(drag.feature_id)
        if current is not None and current != drag.start_feature:
            self.context.store.update(drag.feature_id, drag.start_feature)
            self.context.render_features()
        self.context.host.set_drag_pan(True)

    def _delete_vertex(self, feature: Feature, index: int) -> None:
        ring = remove_vertex(feature.ring, index)
        if ring is None:
            logger.debug("Vertex deletion would leave fewer than 3 vertices, ignored")
            return
        if ring_has_self_intersection(ring):
            logger.debug("Vertex deletion would self-intersect, ignored")
            return

        ctx = self.context
        before = ctx.store.clone(feature)
        drag = self._drag
        if drag is not None:
            # the press that started this gesture opened a drag; fold it into the deletion
            self._drag = None
            ctx.host.set_drag_pan(True)
            if drag.feature_id == feature.id:
                before = drag.start_feature

        after = feature.with_ring(ring)
        ctx.store.update(feature.id, after)
        self._highlight_index = None
        if after == before:
            ctx.render_features()
            self._render_handles()
            return
        ctx.commit(
            UpdateAction(feature.id, before, after),
            "update",
            UpdateEvent(feature=after, old_feature=before),
        )
        ctx.render_features()
        self._render_handles()
