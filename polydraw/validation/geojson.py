"""Shape checks for GeoJSON polygon features entering the editor.

Only single-ring ``Polygon`` features are admitted. Collections are validated
completely before anything is converted, so a failing element never leaves
a partially imported batch behind.
"""

import math
from collections.abc import Sequence
from typing import Any

from polydraw.common.errors import PolyDrawError
from polydraw.core.features import Feature

LNG_RANGE = (-180.0, 180.0)
LAT_RANGE = (-90.0, 90.0)
MIN_RING_POSITIONS = 4


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _validate_position(position: Any) -> None:
    if not isinstance(position, (list, tuple)) or len(position) < 2:
        raise PolyDrawError("Each position in a ring must be an array of at least 2 numbers.")
    lng, lat = position[0], position[1]
    if not _is_number(lng) or not _is_number(lat):
        raise PolyDrawError(
            f"Invalid coordinate: expected [number, number], "
            f"got [{type(lng).__name__}, {type(lat).__name__}]"
        )
    if not math.isfinite(lng) or not LNG_RANGE[0] <= lng <= LNG_RANGE[1]:
        raise PolyDrawError(f"Invalid longitude: {lng}. Must be between -180 and 180.")
    if not math.isfinite(lat) or not LAT_RANGE[0] <= lat <= LAT_RANGE[1]:
        raise PolyDrawError(f"Invalid latitude: {lat}. Must be between -90 and 90.")


def _validate_ring(ring: Any) -> None:
    if not isinstance(ring, (list, tuple)):
        raise PolyDrawError("Ring must be an array of positions.")
    if len(ring) < MIN_RING_POSITIONS:
        raise PolyDrawError(
            f"Ring must have at least {MIN_RING_POSITIONS} positions (got {len(ring)}). "
            "A valid polygon ring requires 3 unique vertices plus a closing vertex."
        )
    for position in ring:
        _validate_position(position)
    first, last = ring[0], ring[-1]
    if first[0] != last[0] or first[1] != last[1]:
        raise PolyDrawError("Ring is not closed. The first and last positions must be identical.")


def validate_feature(data: Any) -> Feature:
    """Validate one GeoJSON feature dict and convert it.

    Args:
        data: Parsed GeoJSON ``Feature`` object.

    Returns:
        The feature; its id is empty if the input had none.

    Raises:
        PolyDrawError: Describing the first violation found.
    """
    if not isinstance(data, dict):
        raise PolyDrawError("Feature must be a non-null object.")
    if data.get("type") != "Feature":
        raise PolyDrawError(f'Feature.type must be "Feature", got "{data.get("type")}".')

    geometry = data.get("geometry")
    if not isinstance(geometry, dict):
        raise PolyDrawError("Feature.geometry must be a non-null object.")
    if geometry.get("type") != "Polygon":
        raise PolyDrawError(
            f'Feature.geometry.type must be "Polygon", got "{geometry.get("type")}".'
        )

    coordinates = geometry.get("coordinates")
    if not isinstance(coordinates, (list, tuple)):
        raise PolyDrawError("Feature.geometry.coordinates must be an array.")
    if len(coordinates) == 0:
        raise PolyDrawError("Polygon must have at least one ring (outer ring).")
    if len(coordinates) > 1:
        raise PolyDrawError(
            f"Polygon must have exactly one ring, got {len(coordinates)}. Holes are not supported."
        )
    _validate_ring(coordinates[0])

    properties = data.get("properties")
    if properties is not None and not isinstance(properties, dict):
        raise PolyDrawError("Feature.properties must be an object or null.")

    return Feature.from_geojson(data)


def validate_features(features: Sequence[Any]) -> list[Feature]:
    """Validate a list of features, all or nothing.

    Raises:
        PolyDrawError: ``Invalid feature at index {i}: ...`` for the first bad element.
    """
    validated = []
    for i, item in enumerate(features):
        try:
            validated.append(validate_feature(item))
        except PolyDrawError as e:
            raise PolyDrawError(f"Invalid feature at index {i}: {e}") from e
    return validated


def validate_feature_collection(data: Any) -> list[Feature]:
    """Validate a GeoJSON ``FeatureCollection`` dict and convert its features.

    Raises:
        PolyDrawError: If the collection or any of its features is invalid.
    """
    if not isinstance(data, dict):
        raise PolyDrawError("GeoJSON must be a non-null object.")
    if data.get("type") != "FeatureCollection":
        raise PolyDrawError(f'GeoJSON.type must be "FeatureCollection", got "{data.get("type")}".')
    features = data.get("features")
    if not isinstance(features, list):
        raise PolyDrawError("GeoJSON.features must be an array.")
    return validate_features(features)
