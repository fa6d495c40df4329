"""Public facade wiring the editing core to a rendering host.

Example
-------
```python
from polydraw import PolygonEditor
from polydraw.host import HeadlessHost

editor = PolygonEditor(HeadlessHost(scale=10.0))
editor.on("create", lambda event: print(event.feature.id))
editor.set_mode("draw")
```

Every public method raises ``PolyDrawError`` once ``destroy`` was called.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

from loguru import logger

from polydraw.common.errors import raise_with_remedy
from polydraw.common.types import ModeName
from polydraw.core.actions import DeleteAction
from polydraw.core.config import EditorConfig, load_editor_config
from polydraw.core.events import DeleteEvent, EventBus, ModeChangeEvent
from polydraw.core.feature_store import FeatureStore
from polydraw.core.features import Feature
from polydraw.core.history import HistoryManager
from polydraw.core.mode_manager import ModeManager
from polydraw.host import RenderHost
from polydraw.modes.base import ModeContext, PointerEvent
from polydraw.modes.draw import DrawMode
from polydraw.modes.idle import IdleMode
from polydraw.modes.select import SelectMode
from polydraw.validation.geojson import validate_feature_collection, validate_features


class PolygonEditor:
    """Interactive polygon editor bound to one host.

    Args:
        host: Projection and rendering collaborator.
        config: Editor options; defaults are used when omitted.
    """

    def __init__(self, host: RenderHost, config: EditorConfig | None = None):
        self.config = (config or EditorConfig()).validate()
        self.host = host
        self._destroyed = False

        self._store = FeatureStore()
        self._history = HistoryManager(limit=self.config.history_limit)
        self._events = EventBus()
        self._context = ModeContext(
            store=self._store,
            history=self._history,
            events=self._events,
            host=host,
            config=self.config,
        )

        self._draw_mode = DrawMode(self._context)
        self._select_mode = SelectMode(self._context)
        self._modes = ModeManager()
        self._modes.register_mode(ModeName.IDLE, IdleMode(self._context))
        self._modes.register_mode(ModeName.DRAW, self._draw_mode)
        self._modes.register_mode(ModeName.SELECT, self._select_mode)
        self._modes.set_on_mode_change(self._on_mode_change)

    @classmethod
    def from_config_file(cls, host: RenderHost, config_file: str | Path) -> PolygonEditor:
        """Create an editor with options read from a YAML file."""
        return cls(host, load_editor_config(config_file))

    def _assert_not_destroyed(self) -> None:
        if self._destroyed:
            raise_with_remedy(
                "This PolygonEditor instance has been destroyed.",
                "Create a new PolygonEditor instead of reusing a destroyed one.",
            )

    def _on_mode_change(self, mode: ModeName, previous: ModeName) -> None:
        # drawing needs clicks; panning stays on in select mode until a drag starts
        self.host.set_drag_pan(mode != ModeName.DRAW)
        self._events.emit(
            "modechange", ModeChangeEvent(mode=mode.value, previous_mode=previous.value)
        )

    def _render(self) -> None:
        self.host.render_features(self._store.get_all())

    # ====================================================================
    # Modes
    # ====================================================================

    def set_mode(self, mode: ModeName | str) -> None:
        """Switch mode (``"idle"``, ``"draw"`` or ``"select"``)."""
        self._assert_not_destroyed()
        self._modes.set_mode(mode)

    def get_mode(self) -> str:
        self._assert_not_destroyed()
        return self._modes.get_mode().value

    # ====================================================================
    # Features
    # ====================================================================

    def get_features(self) -> list[Feature]:
        self._assert_not_destroyed()
        return self._store.get_all()

    def get_feature_by_id(self, feature_id: str) -> Feature | None:
        self._assert_not_destroyed()
        return self._store.get_by_id(feature_id)

    def to_geojson(self) -> dict[str, Any]:
        """Export all features as a GeoJSON FeatureCollection dict."""
        self._assert_not_destroyed()
        return self._store.to_geojson()

    def set_features(self, geojson: dict[str, Any]) -> None:
        """Replace all features with a validated FeatureCollection.

        History is cleared, since earlier actions refer to replaced features.

        Raises:
            PolyDrawError: If the collection is invalid; nothing is replaced then.
        """
        self._assert_not_destroyed()
        features = validate_feature_collection(geojson)
        self._store.replace_all(features)
        self._history.clear()
        logger.info(f"Loaded {len(features)} features")
        self._render()
        self._select_mode.refresh_vertex_handles()

    def add_features(self, features: list[dict[str, Any]]) -> list[Feature]:
        """Validate then add GeoJSON features, keeping existing ones and history.

        Returns:
            The stored features with their ids.

        Raises:
            PolyDrawError: If any feature is invalid; nothing is added then.
        """
        self._assert_not_destroyed()
        validated = validate_features(features)
        stored = [self._store.add(feature) for feature in validated]
        self._render()
        return stored

    def delete_feature(self, feature_id: str) -> Feature | None:
        """Delete a feature as an undoable action.

        Returns:
            The deleted feature, or None if the id is unknown.
        """
        self._assert_not_destroyed()
        feature = self._store.get_by_id(feature_id)
        if feature is None:
            return None

        if feature_id in self._select_mode.get_selected_ids():
            self._select_mode.clear_selection()

        self._store.remove(feature_id)
        self._context.commit(DeleteAction(feature), "delete", DeleteEvent(feature=feature))
        self._render()
        return feature

    # ====================================================================
    # Selection
    # ====================================================================

    def select_feature(self, feature_id: str) -> None:
        """Select a feature, switching to select mode first if needed.

        Raises:
            PolyDrawError: If no feature with this id exists.
        """
        self._assert_not_destroyed()
        if self._store.get_by_id(feature_id) is None:
            raise_with_remedy(
                f"Feature not found: {feature_id}",
                "Pass an id returned by get_features() or a create event.",
            )
        if self._modes.get_mode() != ModeName.SELECT:
            self._modes.set_mode(ModeName.SELECT)
        self._select_mode.select_feature(feature_id)

    def clear_selection(self) -> None:
        self._assert_not_destroyed()
        self._select_mode.clear_selection()

    def get_selected_feature_ids(self) -> list[str]:
        self._assert_not_destroyed()
        return self._select_mode.get_selected_ids()

    # ====================================================================
    # History
    # ====================================================================

    def undo(self) -> bool:
        """Revert the last action; returns False if there is nothing to undo."""
        self._assert_not_destroyed()
        result = self._history.undo(self._store)
        if result:
            self._render()
            self._select_mode.refresh_vertex_handles()
        return result

    def redo(self) -> bool:
        """Re-apply the last undone action; returns False if there is nothing to redo."""
        self._assert_not_destroyed()
        result = self._history.redo(self._store)
        if result:
            self._render()
            self._select_mode.refresh_vertex_handles()
        return result

    def can_undo(self) -> bool:
        self._assert_not_destroyed()
        return self._history.can_undo()

    def can_redo(self) -> bool:
        self._assert_not_destroyed()
        return self._history.can_redo()

    # ====================================================================
    # Events
    # ====================================================================

    def on(self, event_type: str, listener: Callable[[Any], None]) -> None:
        """Register a listener for ``create``, ``update``, ``delete``,
        ``selectionchange`` or ``modechange``."""
        self._assert_not_destroyed()
        self._events.on(event_type, listener)

    def off(self, event_type: str, listener: Callable[[Any], None]) -> None:
        self._assert_not_destroyed()
        self._events.off(event_type, listener)

    # ====================================================================
    # Input dispatch
    # ====================================================================

    def pointer_down(self, event: PointerEvent) -> None:
        self._assert_not_destroyed()
        self._modes.get_current_mode().on_pointer_down(event)

    def pointer_move(self, event: PointerEvent) -> None:
        self._assert_not_destroyed()
        self._modes.get_current_mode().on_pointer_move(event)

    def pointer_up(self, event: PointerEvent) -> None:
        self._assert_not_destroyed()
        self._modes.get_current_mode().on_pointer_up(event)

    def double_click(self, event: PointerEvent) -> None:
        self._assert_not_destroyed()
        self._modes.get_current_mode().on_double_click(event)

    def long_press(self, event: PointerEvent) -> None:
        self._assert_not_destroyed()
        self._modes.get_current_mode().on_long_press(event)

    def key_down(self, key: str, event: Any = None) -> None:
        self._assert_not_destroyed()
        self._modes.get_current_mode().on_key_down(key, event)

    # ====================================================================
    # Teardown
    # ====================================================================

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def destroy(self) -> None:
        """Tear down the editor; safe to call more than once."""
        if self._destroyed:
            return
        self._modes.set_mode(ModeName.IDLE)
        self._destroyed = True
        self._events.remove_all_listeners()
        self._history.clear()
        self._store.clear()
        self._render()
        logger.debug("PolygonEditor destroyed")
