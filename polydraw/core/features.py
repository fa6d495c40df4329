"""Polygon feature value type.

A feature is never patched in place: geometry and properties are replaced
wholesale, so history snapshots stay plain value copies.
"""

import copy
from dataclasses import dataclass, field, replace
from typing import Any

from polydraw.common.types import Ring


@dataclass(frozen=True)
class Feature:
    """Single polygon feature with one outer ring."""

    id: str
    """Unique opaque identifier; empty until a store assigns one."""

    ring: Ring
    """Closed outer ring ``((x0, y0), ..., (x0, y0))``."""

    properties: dict[str, Any] = field(default_factory=dict)
    """Arbitrary user properties, carried through unchanged."""

    def __post_init__(self):
        ring = tuple((float(pos[0]), float(pos[1])) for pos in self.ring)
        object.__setattr__(self, "ring", ring)

    def with_ring(self, ring: Ring) -> "Feature":
        """Copy of this feature with a new ring."""
        return replace(self, ring=ring)

    def with_id(self, feature_id: str) -> "Feature":
        """Copy of this feature with a new id."""
        return replace(self, id=feature_id)

    def to_geojson(self) -> dict[str, Any]:
        """Convert to a GeoJSON ``Feature`` dict with Polygon geometry."""
        return {
            "id": self.id,
            "type": "Feature",
            "geometry": {
                "type": "Polygon",
                "coordinates": [[[x, y] for x, y in self.ring]],
            },
            "properties": copy.deepcopy(self.properties),
        }

    @classmethod
    def from_geojson(cls, data: dict[str, Any]) -> "Feature":
        """Reconstruct from an already validated GeoJSON feature dict."""
        outer = data["geometry"]["coordinates"][0]
        return cls(
            id=str(data.get("id") or ""),
            ring=tuple((pos[0], pos[1]) for pos in outer),
            properties=copy.deepcopy(data.get("properties") or {}),
        )


def clone_feature(feature: Feature) -> Feature:
    """Deep value copy of a feature, used for history snapshots."""
    return Feature(
        id=feature.id,
        ring=tuple(feature.ring),
        properties=copy.deepcopy(feature.properties),
    )
