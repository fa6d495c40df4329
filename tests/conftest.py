"""Shared pytest configuration: headless graphics and editor fixtures."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import pytest

from polydraw.common.types import InputType
from polydraw.core.events import EVENT_TYPES, EventBus
from polydraw.core.feature_store import FeatureStore
from polydraw.core.features import Feature
from polydraw.core.history import HistoryManager
from polydraw.host import HeadlessHost
from polydraw.modes.base import ModeContext, PointerEvent

if TYPE_CHECKING:
    from collections.abc import Generator

SQUARE_RING = ((0, 0), (10, 0), (10, 10), (0, 10), (0, 0))
TRIANGLE_RING = ((0, 0), (10, 0), (5, 10), (0, 0))
SCREEN_SCALE = 10.0


@pytest.fixture(scope="session", autouse=True)
def headless_matplotlib_environment() -> Generator[None, None, None]:
    originals: dict[str, str | None] = {
        "DISPLAY": os.environ.get("DISPLAY"),
        "MPLBACKEND": os.environ.get("MPLBACKEND"),
    }
    os.environ.update({"DISPLAY": "", "MPLBACKEND": "Agg"})
    yield
    for k, v in originals.items():
        if v is None:
            os.environ.pop(k, None)
        else:
            os.environ[k] = v


@pytest.fixture
def host() -> MagicMock:
    """Host recording every call; projects geographic (x, y) to screen (10x, 10y)."""
    return MagicMock(wraps=HeadlessHost(scale=SCREEN_SCALE))


@pytest.fixture
def context(host) -> ModeContext:
    return ModeContext(store=FeatureStore(), history=HistoryManager(), events=EventBus(), host=host)


@pytest.fixture
def recorded_events(context) -> list[tuple[str, object]]:
    """Every event emitted on the context bus, as ``(type, payload)``."""
    received: list[tuple[str, object]] = []
    for event_type in EVENT_TYPES:
        context.events.on(event_type, lambda payload, t=event_type: received.append((t, payload)))
    return received


@pytest.fixture
def square() -> Feature:
    return Feature(id="sq", ring=SQUARE_RING)


@pytest.fixture
def triangle() -> Feature:
    return Feature(id="tri", ring=TRIANGLE_RING)


@pytest.fixture
def make_event():
    """Factory for pointer events whose screen point is ``10 * (x, y)``."""

    def _make(x: float, y: float, input_type: InputType = InputType.MOUSE) -> PointerEvent:
        return PointerEvent(
            lng_lat=(x, y),
            point=(x * SCREEN_SCALE, y * SCREEN_SCALE),
            input_type=input_type,
        )

    return _make
