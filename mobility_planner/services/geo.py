# mobility_planner/services/geo.py
"""
Geometric primitives shared by the selector and the leg router.

Containment uses shapely predicates with this boundary convention:
- a point on the outer ring (edge or vertex) is inside the polygon;
- a point on a hole's ring is not strictly inside the hole, so it also
  counts as inside the polygon;
- a ring with fewer than 3 distinct vertices encloses nothing.
"""
import math
from typing import Iterator, Optional

from shapely.geometry import Point
from shapely.geometry import Polygon as ShapelyPolygon

from mobility_planner.models.geo import Coordinate, MultiPolygon, Polygon, Ring

EARTH_RADIUS_M = 6_371_000.0


def haversine_distance_m(a: Coordinate, b: Coordinate) -> float:
    """
    Compute great-circle distance between two points (lat/lon in degrees), in metres.
    """
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    dlat = math.radians(b.lat - a.lat)
    dlon = math.radians(b.lon - a.lon)

    h = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    )
    # rounding can push h just outside [0, 1] for near-antipodal points
    h = min(1.0, max(0.0, h))
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def _ring_shape(ring: Ring) -> Optional[ShapelyPolygon]:
    points = [(c.lon, c.lat) for c in ring]
    if len(set(points)) < 3:
        return None
    return ShapelyPolygon(points)


def point_in_polygon(point: Coordinate, polygon: Polygon) -> bool:
    """
    True if `point` lies within the outer ring and strictly inside none of the holes.
    """
    if not polygon:
        return False

    outer = _ring_shape(polygon[0])
    p = Point(point.lon, point.lat)
    if outer is None or not outer.covers(p):
        return False

    for ring in polygon[1:]:
        hole = _ring_shape(ring)
        if hole is not None and hole.contains(p):
            return False

    return True


def point_in_multipolygon(point: Coordinate, multipolygon: MultiPolygon) -> bool:
    return any(point_in_polygon(point, polygon) for polygon in multipolygon)


def iter_vertices(multipolygon: MultiPolygon) -> Iterator[Coordinate]:
    """
    Yield every vertex of every ring of every polygon, in order.
    """
    for polygon in multipolygon:
        for ring in polygon:
            yield from ring
