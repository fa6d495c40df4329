"""In-memory keyed collection of polygon features."""

import uuid
from typing import Any

from loguru import logger

from polydraw.core.features import Feature, clone_feature


def new_feature_id() -> str:
    """Generate a fresh unique feature id."""
    return str(uuid.uuid4())


class FeatureStore:
    """Features keyed by id, iterated in insertion (render) order.

    Mutation always goes through an id, never a positional index. Stored
    features are private copies; callers never share references with the store.
    """

    def __init__(self):
        self._features: dict[str, Feature] = {}

    def __len__(self) -> int:
        return len(self._features)

    def __contains__(self, feature_id: object) -> bool:
        return feature_id in self._features

    def add(self, feature: Feature) -> Feature:
        """Add a feature, assigning a new id if it has none.

        Returns:
            The stored copy (with its id).
        """
        feature_id = feature.id or new_feature_id()
        stored = clone_feature(feature).with_id(feature_id)
        self._features[feature_id] = stored
        return stored

    def update(self, feature_id: str, feature: Feature) -> None:
        """Replace the feature stored under ``feature_id``; no-op if absent."""
        if feature_id not in self._features:
            logger.debug(f"Update ignored, unknown feature id {feature_id}")
            return
        self._features[feature_id] = clone_feature(feature).with_id(feature_id)

    def remove(self, feature_id: str) -> Feature | None:
        """Remove a feature by id.

        Returns:
            The removed feature, or None if not found.
        """
        return self._features.pop(feature_id, None)

    def get_by_id(self, feature_id: str) -> Feature | None:
        return self._features.get(feature_id)

    def get_all(self) -> list[Feature]:
        """Snapshot list of all features in render order."""
        return list(self._features.values())

    def clear(self) -> None:
        self._features.clear()

    def replace_all(self, features: list[Feature]) -> None:
        """Clear the store and add ``features``, generating missing ids."""
        self._features.clear()
        for feature in features:
            self.add(feature)

    @staticmethod
    def clone(feature: Feature) -> Feature:
        """Deep value copy suitable for an Update "before" snapshot."""
        return clone_feature(feature)

    def to_geojson(self) -> dict[str, Any]:
        """Export all features as a GeoJSON FeatureCollection dict."""
        return {
            "type": "FeatureCollection",
            "features": [feature.to_geojson() for feature in self._features.values()],
        }
