"""Self-intersection predicates for polygon rings.

All functions are pure and operate on plain ``(x, y)`` tuples. A ``True``
result means the caller must discard the pending edit; nothing here raises.

Segments that share an endpoint are never reported as intersecting, so the
two edges meeting at a ring vertex do not flag each other.
"""

from collections.abc import Sequence

from polydraw.common.types import Position

_EPSILON = 1e-10

_COLLINEAR = 0
_CLOCKWISE = 1
_COUNTER_CLOCKWISE = 2


def _orientation(p: Position, q: Position, r: Position) -> int:
    """Orientation of the ordered triplet ``(p, q, r)``.

    Returns:
        0 if collinear (within epsilon), 1 if clockwise, 2 if counter-clockwise.
    """
    val = (q[1] - p[1]) * (r[0] - q[0]) - (q[0] - p[0]) * (r[1] - q[1])
    if abs(val) < _EPSILON:
        return _COLLINEAR
    return _CLOCKWISE if val > 0 else _COUNTER_CLOCKWISE


def _on_segment(p: Position, q: Position, r: Position) -> bool:
    """Whether ``q`` lies within the bounding box of segment ``pr``.

    Only meaningful when the three points are already known to be collinear.
    """
    return min(p[0], r[0]) <= q[0] <= max(p[0], r[0]) and min(p[1], r[1]) <= q[1] <= max(
        p[1], r[1]
    )


def _same_position(a: Position, b: Position) -> bool:
    return abs(a[0] - b[0]) < _EPSILON and abs(a[1] - b[1]) < _EPSILON


def segments_intersect(a1: Position, a2: Position, b1: Position, b2: Position) -> bool:
    """Check whether segments ``a1-a2`` and ``b1-b2`` cross or overlap.

    Args:
        a1: First endpoint of segment A.
        a2: Second endpoint of segment A.
        b1: First endpoint of segment B.
        b2: Second endpoint of segment B.

    Returns:
        True for a proper crossing or a collinear overlap, False otherwise.
        Segments sharing an endpoint always return False.
    """
    if (
        _same_position(a1, b1)
        or _same_position(a1, b2)
        or _same_position(a2, b1)
        or _same_position(a2, b2)
    ):
        return False

    o1 = _orientation(a1, a2, b1)
    o2 = _orientation(a1, a2, b2)
    o3 = _orientation(b1, b2, a1)
    o4 = _orientation(b1, b2, a2)

    if o1 != o2 and o3 != o4:
        return True

    # Collinear touching / overlapping cases
    if o1 == _COLLINEAR and _on_segment(a1, b1, a2):
        return True
    if o2 == _COLLINEAR and _on_segment(a1, b2, a2):
        return True
    if o3 == _COLLINEAR and _on_segment(b1, a1, b2):
        return True
    if o4 == _COLLINEAR and _on_segment(b1, a2, b2):
        return True

    return False


def ring_has_self_intersection(ring: Sequence[Position]) -> bool:
    """Test every pair of non-adjacent edges of a closed ring.

    O(n^2) in the number of edges, which is fine for hand-drawn polygons.

    Args:
        ring: Closed ring (first == last).

    Returns:
        True if any two non-adjacent edges intersect.
    """
    n = len(ring) - 1
    if n < 3:
        return False

    for i in range(n):
        for j in range(i + 2, n):
            # first and last edge share the closing vertex
            if i == 0 and j == n - 1:
                continue
            if segments_intersect(ring[i], ring[i + 1], ring[j], ring[j + 1]):
                return True
    return False


def would_new_vertex_intersect(vertices: Sequence[Position], candidate: Position) -> bool:
    """Check the prospective trailing edge ``last -> candidate``.

    Args:
        vertices: Open vertex list (no closing duplicate).
        candidate: Vertex about to be appended.

    Returns:
        True if the new edge would cross an existing edge other than the one
        ending at the current last vertex.
    """
    if len(vertices) < 2:
        return False

    last = vertices[-1]
    for i in range(len(vertices) - 2):
        if segments_intersect(last, candidate, vertices[i], vertices[i + 1]):
            return True
    return False


def would_closing_intersect(vertices: Sequence[Position]) -> bool:
    """Check the prospective closing edge ``last -> first``.

    Args:
        vertices: Open vertex list (no closing duplicate).

    Returns:
        True if the closing edge would cross any edge except the first and
        the last, which share its endpoints.
    """
    if len(vertices) < 3:
        return False

    first = vertices[0]
    last = vertices[-1]
    for i in range(1, len(vertices) - 2):
        if segments_intersect(last, first, vertices[i], vertices[i + 1]):
            return True
    return False
