"""Tests for error policy application.

Validates that error handling follows the established policy:
- API misuse and malformed input raise PolyDrawError with a remediation message
- Optional components degrade with a warning instead of failing
- Interactive guards never raise
"""

import pytest
from loguru import logger

from polydraw import HeadlessHost, PolygonEditor
from polydraw.common.errors import PolyDrawError, raise_with_remedy, warn_soft_degrade
from polydraw.common.logging import configure_logging
from polydraw.core.config import load_editor_config
from polydraw.modes.base import PointerEvent


@pytest.fixture
def captured_warnings():
    messages = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="WARNING")
    yield messages
    logger.remove(handler_id)


class TestErrorPolicyHelpers:
    """Test the core error policy helper functions."""

    def test_raise_with_remedy_format(self):
        """Verify the error includes a remediation message."""
        with pytest.raises(PolyDrawError, match=r"(?s)Test error.*Remediation.*Fix it"):
            raise_with_remedy("Test error", "Fix it")

    def test_error_is_runtime_error(self):
        assert issubclass(PolyDrawError, RuntimeError)

    def test_warn_soft_degrade_logs_warning(self, captured_warnings):
        warn_soft_degrade("test_component", "test issue", "test fallback")
        assert any("test_component" in m and "test fallback" in m for m in captured_warnings)

    def test_missing_config_degrades(self, tmp_path, captured_warnings):
        load_editor_config(tmp_path / "missing.yaml")
        assert any("editor config" in m for m in captured_warnings)


class TestInteractiveGuards:
    """Gesture-level guards never raise."""

    def test_events_on_empty_editor(self):
        editor = PolygonEditor(HeadlessHost(scale=10.0))
        event = PointerEvent(lng_lat=(1, 1), point=(10, 10))
        for mode in ("idle", "draw", "select"):
            editor.set_mode(mode)
            editor.pointer_down(event)
            editor.pointer_move(event)
            editor.pointer_up(event)
            editor.double_click(event)
            editor.long_press(event)
            editor.key_down("Delete")
            editor.key_down("Escape")
        assert editor.get_features() == []
        assert editor.undo() is False
        assert editor.redo() is False


class TestLogging:
    """Test logging configuration helpers."""

    def test_configure_logging_is_idempotent(self):
        configure_logging(verbose=True)
        configure_logging(verbose=False)

    def test_configure_logging_level(self, capsys):
        configure_logging(verbose=False)
        logger.debug("rejected vertex")
        logger.info("feature created")
        err = capsys.readouterr().err
        assert "feature created" in err
        assert "rejected vertex" not in err
