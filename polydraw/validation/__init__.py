"""Import validation for GeoJSON polygon data."""

from polydraw.validation.geojson import (
    validate_feature,
    validate_feature_collection,
    validate_features,
)

__all__ = ["validate_feature", "validate_feature_collection", "validate_features"]
