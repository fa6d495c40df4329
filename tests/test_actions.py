"""Tests for the reversible store actions."""

import pytest

from polydraw.core.actions import ActionType, CreateAction, DeleteAction, UpdateAction
from polydraw.core.feature_store import FeatureStore


def _state(store: FeatureStore):
    return [(f.id, f.ring, f.properties) for f in store.get_all()]


@pytest.fixture
def moved(square):
    return square.with_ring(((1, 1), (11, 1), (11, 11), (1, 11), (1, 1)))


class TestActionTypes:
    """Test action tagging."""

    def test_type_tags(self, square, moved):
        assert CreateAction(square).type == ActionType.CREATE
        assert UpdateAction("sq", square, moved).type == ActionType.UPDATE
        assert DeleteAction(square).type == ActionType.DELETE


class TestInverseLaw:
    """apply and revert are mutual inverses; applying twice equals applying once."""

    def test_create(self, square, triangle):
        store = FeatureStore()
        store.add(triangle)
        before = _state(store)
        action = CreateAction(square)

        action.apply(store)
        after = _state(store)
        action.revert(store)
        assert _state(store) == before
        action.apply(store)
        assert _state(store) == after
        action.apply(store)
        assert _state(store) == after

    def test_update(self, square, moved):
        store = FeatureStore()
        store.add(square)
        before = _state(store)
        action = UpdateAction("sq", square, moved)

        action.apply(store)
        after = _state(store)
        assert store.get_by_id("sq").ring == moved.ring
        action.revert(store)
        assert _state(store) == before
        action.apply(store)
        action.apply(store)
        assert _state(store) == after

    def test_delete(self, square, triangle):
        store = FeatureStore()
        store.add(square)
        store.add(triangle)
        before = _state(store)
        action = DeleteAction(triangle)

        action.apply(store)
        after = _state(store)
        assert "tri" not in store
        action.revert(store)
        assert _state(store) == before
        action.apply(store)
        action.apply(store)
        assert _state(store) == after

    def test_snapshot_not_shared_with_store(self, square, moved):
        store = FeatureStore()
        store.add(square)
        action = UpdateAction("sq", FeatureStore.clone(square), moved)
        action.apply(store)
        store.update("sq", square.with_ring(((2, 2), (3, 2), (3, 3), (2, 2))))
        action.revert(store)
        assert store.get_by_id("sq").ring == square.ring
