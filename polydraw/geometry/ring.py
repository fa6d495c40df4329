"""Ring helpers shared by the interactive modes.

Rings are tuples of ``(x, y)`` positions whose last entry repeats the first.
Every helper returns a new ring; inputs are never modified.
"""

import math
from collections.abc import Sequence

import numpy as np
from loguru import logger
from shapely.errors import GEOSException
from shapely.geometry import Point, Polygon

from polydraw.common.types import Position, Ring, ScreenPoint

MIN_VERTICES = 3
"""Minimum number of unique vertices of a polygon."""


def close_ring(vertices: Sequence[Position]) -> Ring:
    """Append a copy of the first vertex to an open vertex list.

    Returns:
        Closed ring as a tuple of position tuples.
    """
    ring = [(float(x), float(y)) for x, y in vertices]
    return tuple([*ring, ring[0]])


def unique_vertices(ring: Sequence[Position]) -> list[Position]:
    """Return the ring without its closing duplicate."""
    return [tuple(pos) for pos in ring[:-1]]


def midpoints(ring: Sequence[Position]) -> list[Position]:
    """Midpoint of every edge of a closed ring, edge ``i`` being ``ring[i] -> ring[i+1]``."""
    coords = np.asarray(ring, dtype=float)
    mids = (coords[:-1] + coords[1:]) / 2.0
    return [(float(x), float(y)) for x, y in mids]


def translate_ring(ring: Sequence[Position], dx: float, dy: float) -> Ring:
    """Shift every position of a ring by ``(dx, dy)``."""
    shifted = np.asarray(ring, dtype=float) + np.array([dx, dy], dtype=float)
    return tuple((float(x), float(y)) for x, y in shifted)


def replace_vertex(ring: Sequence[Position], index: int, position: Position) -> Ring:
    """Move vertex ``index`` of a closed ring.

    Index 0 and the last index are the same vertex; both copies move together.
    """
    coords = [tuple(pos) for pos in ring]
    last = len(coords) - 1
    new_pos = (float(position[0]), float(position[1]))
    coords[index] = new_pos
    if index == 0:
        coords[last] = new_pos
    elif index == last:
        coords[0] = new_pos
    return tuple(coords)


def insert_vertex(ring: Sequence[Position], index: int, position: Position) -> Ring:
    """Insert a new vertex so that it ends up at ``index`` of the closed ring."""
    coords = unique_vertices(ring)
    coords.insert(index, (float(position[0]), float(position[1])))
    return close_ring(coords)


def remove_vertex(ring: Sequence[Position], index: int) -> Ring | None:
    """Remove a vertex and recompute the closing duplicate.

    Returns:
        The shortened ring, or None when fewer than ``MIN_VERTICES`` unique
        vertices would remain.
    """
    coords = unique_vertices(ring)
    if len(coords) <= MIN_VERTICES:
        return None
    del coords[index % len(coords)]
    return close_ring(coords)


def point_in_ring(ring: Sequence[Position], position: Position) -> bool:
    """Check whether ``position`` lies inside the ring or on its boundary."""
    try:
        return Polygon(ring).covers(Point(position))
    except (ValueError, TypeError, GEOSException) as e:
        logger.debug(f"Point-in-polygon test failed: {e}")
        return False


def pixel_distance(a: ScreenPoint, b: ScreenPoint) -> float:
    """Euclidean distance between two screen points."""
    return math.hypot(a[0] - b[0], a[1] - b[1])
