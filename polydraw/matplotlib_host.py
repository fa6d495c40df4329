"""Interactive Matplotlib host for the polygon editor.

Usage:
    from polydraw import PolygonEditor
    from polydraw.matplotlib_host import MatplotlibHost

    host = MatplotlibHost(xlim=(0, 20), ylim=(0, 20))
    editor = PolygonEditor(host)
    host.attach(editor)
    host.run()

Controls:
    D            Draw mode
    E            Select (edit) mode
    I            Idle mode
    Click        Add vertex / select / start drag
    Double-click Finish polygon / delete vertex
    Right-click  Long press: remove last point / delete vertex or polygon
    Escape       Cancel current drawing
    Delete       Delete selected polygon
    Ctrl+Z       Undo
    Ctrl+Y       Redo
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import matplotlib.patches as mpatches
import matplotlib.pyplot as plt
from loguru import logger

from polydraw.common.errors import warn_soft_degrade
from polydraw.common.types import InputType, ModeName, Position, ScreenPoint
from polydraw.core.features import Feature
from polydraw.modes.base import PointerEvent

if TYPE_CHECKING:
    from matplotlib.axes import Axes

    from polydraw.editor import PolygonEditor

FEATURE_STYLE = {"facecolor": "tab:blue", "edgecolor": "navy", "alpha": 0.35, "linewidth": 1.5}
PREVIEW_STYLE = {"color": "tab:orange", "linestyle": "--", "linewidth": 1.5}
NON_INTERACTIVE_BACKENDS = {"agg", "pdf", "ps", "svg", "pgf", "cairo", "template"}

# matplotlib key names -> editor key names
KEY_NAMES = {
    "escape": "Escape",
    "delete": "Delete",
    "backspace": "Backspace",
}


class MatplotlibHost:
    """Renders editor state on a Matplotlib axes and feeds it mouse/key input.

    Args:
        ax: Axes to draw on; a new figure is created when omitted.
        xlim: Initial horizontal data range.
        ylim: Initial vertical data range.
    """

    def __init__(
        self,
        ax: Axes | None = None,
        xlim: tuple[float, float] = (-180.0, 180.0),
        ylim: tuple[float, float] = (-90.0, 90.0),
    ):
        if ax is None:
            self.fig, self.ax = plt.subplots(figsize=(10, 8))
        else:
            self.fig, self.ax = ax.figure, ax
        self.ax.set_xlim(*xlim)
        self.ax.set_ylim(*ylim)
        self.ax.set_aspect("equal", adjustable="box")

        self.editor: PolygonEditor | None = None
        self.drag_pan_enabled = True
        self._feature_artists: list[Any] = []
        self._preview_artists: list[Any] = []
        self._handle_artists: list[Any] = []
        self._connection_ids: list[int] = []
        self._last_pointer: PointerEvent | None = None

    # ========================================================================
    # RenderHost
    # ========================================================================

    def project(self, position: Position) -> ScreenPoint:
        x, y = self.ax.transData.transform((position[0], position[1]))
        return (float(x), float(y))

    def render_features(self, features: list[Feature]) -> None:
        self._remove(self._feature_artists)
        for feature in features:
            patch = mpatches.Polygon(feature.ring, closed=True, **FEATURE_STYLE)
            self.ax.add_patch(patch)
            self._feature_artists.append(patch)
        self._draw_idle()

    def render_preview(self, coordinates: list[Position]) -> None:
        self._remove(self._preview_artists)
        if coordinates:
            xs, ys = zip(*coordinates)
            self._preview_artists.extend(self.ax.plot(xs, ys, **PREVIEW_STYLE))
            self._preview_artists.extend(self.ax.plot(xs[:-1], ys[:-1], "o", color="tab:orange"))
        self._draw_idle()

    def clear_preview(self) -> None:
        self._remove(self._preview_artists)
        self._draw_idle()

    def render_vertices(
        self,
        feature_id: str,
        vertices: list[Position],
        midpoints: list[Position],
        highlight_index: int | None = None,
    ) -> None:
        self._remove(self._handle_artists)
        if midpoints:
            mx, my = zip(*midpoints)
            self._handle_artists.extend(
                self.ax.plot(mx, my, "o", markersize=5, color="white", markeredgecolor="navy")
            )
        for idx, (x, y) in enumerate(vertices):
            color = "red" if idx == highlight_index else "navy"
            self._handle_artists.extend(self.ax.plot([x], [y], "o", markersize=8, color=color))
        self._draw_idle()

    def clear_vertices(self) -> None:
        self._remove(self._handle_artists)
        self._draw_idle()

    def set_drag_pan(self, enabled: bool) -> None:
        self.drag_pan_enabled = enabled
        # toolbar pan/zoom skips axes with navigation off
        self.ax.set_navigate(enabled)
        logger.debug(f"Drag pan {'enabled' if enabled else 'disabled'}")

    # ========================================================================
    # Input
    # ========================================================================

    def attach(self, editor: PolygonEditor) -> None:
        """Route this figure's mouse and key events to ``editor``."""
        self.detach()
        self.editor = editor
        canvas = self.fig.canvas
        self._connection_ids = [
            canvas.mpl_connect("button_press_event", self._on_click),
            canvas.mpl_connect("button_release_event", self._on_button_release),
            canvas.mpl_connect("motion_notify_event", self._on_motion),
            canvas.mpl_connect("key_press_event", self._on_key_press),
        ]
        self._update_title()

    def detach(self) -> None:
        for cid in self._connection_ids:
            self.fig.canvas.mpl_disconnect(cid)
        self._connection_ids = []
        self.editor = None
        self._last_pointer = None

    def _to_pointer_event(self, event: Any) -> PointerEvent | None:
        if self.editor is None or self.editor.destroyed or not event.inaxes:
            return None
        if event.xdata is None or event.ydata is None:
            return None
        self._last_pointer = PointerEvent(
            lng_lat=(float(event.xdata), float(event.ydata)),
            point=(float(event.x), float(event.y)),
            input_type=InputType.MOUSE,
            original_event=event,
        )
        return self._last_pointer

    def _on_click(self, event: Any) -> None:
        pointer = self._to_pointer_event(event)
        if pointer is None:
            return
        if event.button == 1:
            # the first press of a double click was already delivered as pointer-down
            if event.dblclick:
                self.editor.double_click(pointer)
            else:
                self.editor.pointer_down(pointer)
        elif event.button == 3:
            self.editor.long_press(pointer)

    def _on_button_release(self, event: Any) -> None:
        if event.button != 1:
            return
        pointer = self._to_pointer_event(event)
        if pointer is None and self.editor is not None and not self.editor.destroyed:
            # released outside the axes: end the gesture where the pointer was last seen
            pointer = self._last_pointer
        if pointer is not None:
            self.editor.pointer_up(pointer)

    def _on_motion(self, event: Any) -> None:
        pointer = self._to_pointer_event(event)
        if pointer is not None:
            self.editor.pointer_move(pointer)

    def _on_key_press(self, event: Any) -> None:
        if event.key is None or self.editor is None or self.editor.destroyed:
            return
        logger.debug(f"Key pressed: {event.key}")

        key_actions = {
            "d": lambda: self.editor.set_mode(ModeName.DRAW),
            "e": lambda: self.editor.set_mode(ModeName.SELECT),
            "i": lambda: self.editor.set_mode(ModeName.IDLE),
            "ctrl+z": self.editor.undo,
            "ctrl+y": self.editor.redo,
        }
        action = key_actions.get(event.key)
        if action:
            action()
            self._update_title()
            return

        self.editor.key_down(KEY_NAMES.get(event.key, event.key), event)

    # ========================================================================
    # Display
    # ========================================================================

    def _update_title(self) -> None:
        if self.editor is None or self.editor.destroyed:
            return
        self.fig.suptitle(
            f"polydraw | Mode: {self.editor.get_mode()} | "
            f"Polygons: {len(self.editor.get_features())}",
            fontsize=12,
        )
        self._draw_idle()

    @staticmethod
    def _remove(artists: list[Any]) -> None:
        for artist in artists:
            artist.remove()
        artists.clear()

    def _draw_idle(self) -> None:
        self.fig.canvas.draw_idle()

    def run(self, blocking: bool = True) -> None:
        """Show the editor window.

        Args:
            blocking: If True, blocks until window is closed
        """
        if blocking and plt.get_backend().lower() in NON_INTERACTIVE_BACKENDS:
            warn_soft_degrade(
                "matplotlib backend",
                f"backend {plt.get_backend()!r} cannot open a window",
                "headless editing without a window",
            )
            return
        logger.info("Editor window opened. D: draw, E: select, Ctrl+Z/Ctrl+Y: undo/redo.")
        if blocking:
            plt.show()

    def close(self) -> None:
        """Close the editor window."""
        self.detach()
        plt.close(self.fig)
        logger.info("Editor window closed")
