"""Finite-state machine over the editor modes."""

from collections.abc import Callable

from loguru import logger

from polydraw.common.errors import raise_with_remedy
from polydraw.common.types import ModeName

ModeChangeCallback = Callable[[ModeName, ModeName], None]


def parse_mode_name(name: ModeName | str) -> ModeName:
    """Normalize a mode given as enum or string.

    Raises:
        PolyDrawError: If the name is not a known mode.
    """
    if isinstance(name, ModeName):
        return name
    try:
        return ModeName(name)
    except ValueError:
        raise_with_remedy(
            f"Unknown mode: {name!r}",
            f"Use one of: {', '.join(m.value for m in ModeName)}.",
        )


class ModeManager:
    """Owns the registered modes and switches between them.

    Exactly one mode is current at a time; the initial mode is ``idle``.
    Switching deactivates the old mode before activating the new one, so a
    mode never sees gesture state leak in from a previous session.
    """

    def __init__(self):
        self._modes: dict = {}
        self._current: ModeName = ModeName.IDLE
        self._on_mode_change: ModeChangeCallback | None = None

    def register_mode(self, name: ModeName, mode) -> None:
        self._modes[name] = mode

    def set_on_mode_change(self, callback: ModeChangeCallback | None) -> None:
        """Set the callback receiving ``(new_mode, previous_mode)``."""
        self._on_mode_change = callback

    def set_mode(self, name: ModeName | str) -> None:
        """Switch to ``name``; no-op if it is already current."""
        target = parse_mode_name(name)
        if target == self._current:
            return

        previous = self._current
        current_mode = self._modes.get(previous)
        if current_mode is not None:
            current_mode.deactivate()

        self._current = target
        next_mode = self._modes.get(target)
        if next_mode is not None:
            next_mode.activate()

        logger.debug(f"Mode changed: {previous.value} -> {target.value}")
        if self._on_mode_change is not None:
            self._on_mode_change(target, previous)

    def get_mode(self) -> ModeName:
        return self._current

    def get_current_mode(self):
        """Live mode object that input events should be routed to (None if unregistered)."""
        return self._modes.get(self._current)
