"""Geometry helpers: self-intersection predicates and ring operations."""

from polydraw.geometry.intersection import (
    ring_has_self_intersection,
    segments_intersect,
    would_closing_intersect,
    would_new_vertex_intersect,
)
from polydraw.geometry.ring import (
    MIN_VERTICES,
    close_ring,
    insert_vertex,
    midpoints,
    pixel_distance,
    point_in_ring,
    remove_vertex,
    replace_vertex,
    translate_ring,
    unique_vertices,
)

__all__ = [
    "MIN_VERTICES",
    "close_ring",
    "insert_vertex",
    "midpoints",
    "pixel_distance",
    "point_in_ring",
    "remove_vertex",
    "replace_vertex",
    "ring_has_self_intersection",
    "segments_intersect",
    "translate_ring",
    "unique_vertices",
    "would_closing_intersect",
    "would_new_vertex_intersect",
]
