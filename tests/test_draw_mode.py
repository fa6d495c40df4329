"""Tests for the polygon drawing mode."""

import random

import pytest

from polydraw.core.actions import ActionType
from polydraw.geometry import ring_has_self_intersection
from polydraw.modes.draw import DrawMode

# open chain whose closing edge (10, 8) -> (0, 0) crosses the edge (5, 0) -> (5, 5)
HOOK_CHAIN = [(0, 0), (5, 0), (5, 5), (-5, 5), (-5, -5), (10, -5), (10, 8)]


@pytest.fixture
def draw(context):
    mode = DrawMode(context)
    mode.activate()
    return mode


def _click_all(draw, make_event, points):
    for x, y in points:
        draw.on_pointer_down(make_event(x, y))


def _ring_of_only_feature(context):
    (feature,) = context.store.get_all()
    return feature.ring


class TestVertexPlacement:
    """Test adding vertices and the live preview."""

    def test_inactive_mode_ignores_input(self, context, make_event):
        mode = DrawMode(context)
        mode.on_pointer_down(make_event(1, 1))
        assert mode.vertices == []

    def test_click_adds_vertex_and_preview(self, draw, host, make_event):
        draw.on_pointer_down(make_event(0, 0))
        assert draw.vertices == [(0.0, 0.0)]
        host.render_preview.assert_called_with([(0.0, 0.0), (0.0, 0.0), (0.0, 0.0)])

    def test_pointer_move_uses_provisional_vertex(self, draw, host, make_event):
        draw.on_pointer_move(make_event(3, 4))
        host.render_preview.assert_not_called()

        draw.on_pointer_down(make_event(0, 0))
        draw.on_pointer_move(make_event(3, 4))
        host.render_preview.assert_called_with([(0.0, 0.0), (3.0, 4.0), (0.0, 0.0)])
        assert draw.vertices == [(0.0, 0.0)]

    def test_self_intersecting_vertex_rejected(self, draw, context, make_event):
        _click_all(draw, make_event, [(0, 0), (10, 0), (10, 10)])
        draw.on_pointer_down(make_event(5, -5))
        assert draw.vertices == [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0)]
        assert len(context.store) == 0


class TestFinalize:
    """Test closing the polygon."""

    def test_click_on_first_vertex_closes(self, draw, context, recorded_events, make_event):
        _click_all(draw, make_event, [(0, 0), (10, 0), (10, 10)])
        # exactly 10px from the first vertex
        draw.on_pointer_down(make_event(-0.6, 0.8))

        features = context.store.get_all()
        assert len(features) == 1
        assert features[0].ring == ((0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 0.0))
        assert [t for t, _ in recorded_events] == ["create"]
        assert draw.vertices == []

    def test_click_just_outside_threshold_adds_vertex(self, draw, context, make_event):
        _click_all(draw, make_event, [(0, 0), (10, 0), (10, 10)])
        draw.on_pointer_down(make_event(-0.61, 0.8))
        assert len(draw.vertices) == 4
        assert len(context.store) == 0

    def test_closing_rejected_when_it_would_intersect(self, draw, context, make_event):
        _click_all(draw, make_event, HOOK_CHAIN)
        assert len(draw.vertices) == len(HOOK_CHAIN)

        draw.on_pointer_down(make_event(0.2, 0.2))
        assert len(context.store) == 0
        assert len(draw.vertices) == len(HOOK_CHAIN)

        draw.on_double_click(make_event(0.2, 0.2))
        assert len(context.store) == 0

    def test_finalize_needs_three_vertices(self, draw, context, make_event):
        _click_all(draw, make_event, [(0, 0), (10, 0)])
        assert draw.finalize() is None
        assert len(context.store) == 0

    def test_finalize_records_create_action(self, draw, context, host, make_event):
        _click_all(draw, make_event, [(0, 0), (10, 0), (10, 10)])
        stored = draw.finalize()

        assert stored.id
        assert stored.properties == {}
        assert context.history.undo_stack[-1].type == ActionType.CREATE
        host.render_features.assert_called_with([stored])
        host.clear_preview.assert_called()


class TestDoubleClick:
    """Test double-click finalization."""

    def test_scenario_triangle(self, draw, context, recorded_events, make_event):
        """Click three corners, double-click: one feature, undo/redo keep its id."""
        _click_all(draw, make_event, [(0, 0), (10, 0), (10, 10)])
        draw.on_pointer_down(make_event(5, 5))
        event = make_event(5, 5)
        draw.on_double_click(event)

        features = context.store.get_all()
        assert len(features) == 1
        assert features[0].ring == ((0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 0.0))
        assert [t for t, _ in recorded_events].count("create") == 1
        assert event.default_prevented

        feature_id = features[0].id
        assert context.history.undo(context.store)
        assert len(context.store) == 0
        assert context.history.redo(context.store)
        assert context.store.get_by_id(feature_id) is not None

    def test_rejected_preceding_click_pops_nothing(self, draw, context, make_event):
        """A double-click whose first click was rejected keeps every committed vertex."""
        _click_all(draw, make_event, [(0, 0), (10, 0), (10, 10), (0, 10)])
        draw.on_pointer_down(make_event(5, -5))
        assert len(draw.vertices) == 4

        draw.on_double_click(make_event(5, -5))
        features = context.store.get_all()
        assert len(features) == 1
        assert len(features[0].ring) == 5

    def test_double_click_with_too_few_vertices(self, draw, context, make_event):
        _click_all(draw, make_event, [(0, 0), (10, 0), (10, 10)])
        event = make_event(10, 10)
        draw.on_double_click(event)
        # the last click added (10, 10), which is discarded
        assert len(context.store) == 0
        assert draw.vertices == [(0.0, 0.0), (10.0, 0.0)]
        assert event.default_prevented


    def test_double_click_after_closing_press(self, draw, context, recorded_events, make_event):
        """The first press of the double-click lands within 10px and already closes."""
        _click_all(draw, make_event, [(0, 0), (10, 0), (10, 10)])
        draw.on_pointer_down(make_event(-0.6, 0.8))
        assert len(context.store) == 1

        event = make_event(-0.6, 0.8)
        draw.on_double_click(event)

        assert len(context.store) == 1
        assert _ring_of_only_feature(context) == ((0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 0.0))
        assert [t for t, _ in recorded_events] == ["create"]
        assert draw.vertices == []
        assert event.default_prevented

    def test_double_click_just_outside_close_tolerance(self, draw, context, make_event):
        """Just past 10px the press adds a vertex, which the double-click discards."""
        _click_all(draw, make_event, [(0, 0), (10, 0), (10, 10)])
        draw.on_pointer_down(make_event(-0.61, 0.8))
        assert len(draw.vertices) == 4

        draw.on_double_click(make_event(-0.61, 0.8))

        assert len(context.store) == 1
        assert _ring_of_only_feature(context) == ((0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 0.0))
        assert draw.vertices == []


class TestCancellation:
    """Test long press, Escape and deactivate."""

    def test_long_press_removes_last_vertex(self, draw, host, make_event):
        _click_all(draw, make_event, [(0, 0), (10, 0)])
        draw.on_long_press(make_event(10, 0))
        assert draw.vertices == [(0.0, 0.0)]
        host.render_preview.assert_called_with([(0.0, 0.0), (0.0, 0.0)])

        draw.on_long_press(make_event(0, 0))
        assert draw.vertices == []
        host.clear_preview.assert_called_once()

    def test_long_press_without_vertices(self, draw, host, make_event):
        draw.on_long_press(make_event(0, 0))
        host.clear_preview.assert_not_called()

    def test_escape_abandons_drawing(self, draw, context, host, make_event):
        _click_all(draw, make_event, [(0, 0), (10, 0), (10, 10)])
        draw.on_key_down("Escape")
        assert draw.vertices == []
        assert len(context.store) == 0
        host.clear_preview.assert_called_once()

    def test_other_keys_ignored(self, draw, make_event):
        draw.on_pointer_down(make_event(0, 0))
        draw.on_key_down("Enter")
        assert len(draw.vertices) == 1

    def test_deactivate_resets_state(self, draw, host, make_event):
        _click_all(draw, make_event, [(0, 0), (10, 0)])
        draw.deactivate()
        assert draw.vertices == []
        host.clear_preview.assert_called_once()

        draw.on_pointer_down(make_event(1, 1))
        assert draw.vertices == []


class TestDrawProperties:
    """Accepted drawings always form valid simple rings."""

    def test_random_drawings_are_simple_closed_rings(self, context, make_event):
        rng = random.Random(7)
        draw = DrawMode(context)
        draw.activate()
        for _ in range(40):
            for _ in range(rng.randint(3, 9)):
                draw.on_pointer_down(make_event(rng.uniform(-50, 50), rng.uniform(-50, 50)))
            draw.on_double_click(make_event(0, 0))
            draw.on_key_down("Escape")

        assert len(context.store) > 0
        for feature in context.store.get_all():
            assert len(feature.ring) >= 4
            assert feature.ring[0] == feature.ring[-1]
            assert not ring_has_self_intersection(feature.ring)
