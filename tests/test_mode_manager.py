"""Tests for the mode state machine."""

from unittest.mock import MagicMock

import pytest

from polydraw.common.errors import PolyDrawError
from polydraw.common.types import ModeName
from polydraw.core.mode_manager import ModeManager, parse_mode_name


@pytest.fixture
def manager():
    manager = ModeManager()
    manager.modes = {name: MagicMock(name=name.value) for name in ModeName}
    for name, mode in manager.modes.items():
        manager.register_mode(name, mode)
    return manager


class TestModeManager:
    """Test transitions between idle, draw and select."""

    def test_initial_mode_is_idle(self, manager):
        assert manager.get_mode() == ModeName.IDLE
        assert manager.get_current_mode() is manager.modes[ModeName.IDLE]

    def test_transition_order(self, manager):
        calls = MagicMock()
        calls.attach_mock(manager.modes[ModeName.IDLE].deactivate, "idle_deactivate")
        calls.attach_mock(manager.modes[ModeName.DRAW].activate, "draw_activate")
        callback = MagicMock()
        calls.attach_mock(callback, "callback")
        manager.set_on_mode_change(callback)

        manager.set_mode(ModeName.DRAW)

        assert [c[0] for c in calls.mock_calls] == ["idle_deactivate", "draw_activate", "callback"]
        callback.assert_called_once_with(ModeName.DRAW, ModeName.IDLE)

    def test_same_mode_is_noop(self, manager):
        callback = MagicMock()
        manager.set_on_mode_change(callback)
        manager.set_mode("idle")

        manager.modes[ModeName.IDLE].deactivate.assert_not_called()
        manager.modes[ModeName.IDLE].activate.assert_not_called()
        callback.assert_not_called()

    def test_exclusivity(self, manager):
        """Each real transition activates and deactivates exactly once."""
        manager.set_mode("draw")
        manager.set_mode("select")
        manager.set_mode("select")
        manager.set_mode("draw")

        draw = manager.modes[ModeName.DRAW]
        select = manager.modes[ModeName.SELECT]
        assert draw.activate.call_count == 2
        assert draw.deactivate.call_count == 1
        assert select.activate.call_count == 1
        assert select.deactivate.call_count == 1
        assert manager.get_current_mode() is draw

    def test_string_names(self):
        assert parse_mode_name("select") == ModeName.SELECT
        assert parse_mode_name(ModeName.DRAW) == ModeName.DRAW

    def test_unknown_mode(self, manager):
        with pytest.raises(PolyDrawError, match=r"(?s)Unknown mode.*Remediation"):
            manager.set_mode("erase")
        assert manager.get_mode() == ModeName.IDLE
