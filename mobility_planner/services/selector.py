# mobility_planner/services/selector.py
import math
from typing import Callable, Iterable, Optional

from mobility_planner.core.logger import logger
from mobility_planner.models.geo import Coordinate, ParkingZone, Vehicle
from mobility_planner.services.geo import haversine_distance_m, iter_vertices

# Distance in metres from a coordinate to a zone, used to rank parking zones.
ZoneProximity = Callable[[Coordinate, ParkingZone], float]


def vertex_proximity(coord: Coordinate, zone: ParkingZone) -> float:
    """
    Distance to the zone's nearest vertex (not the nearest point on its edges).

    Zones without vertices score infinity.
    """
    return min(
        (haversine_distance_m(coord, vertex) for vertex in iter_vertices(zone.geometry)),
        default=math.inf,
    )


NEAREST_VERTEX: ZoneProximity = vertex_proximity


def nearest_vehicle(coord: Coordinate, vehicles: Iterable[Vehicle]) -> Optional[Vehicle]:
    """
    Closest vehicle to `coord`; ties go to the first one in input order.
    """
    nearest: Optional[Vehicle] = None
    best_dist = math.inf

    for vehicle in vehicles:
        d = haversine_distance_m(coord, vehicle.location)
        if d < best_dist:
            best_dist = d
            nearest = vehicle

    if nearest is not None:
        logger.debug(
            "Nearest vehicle to ({:.6f}, {:.6f}) is {} at {:.1f} m",
            coord.lat, coord.lon, nearest.id, best_dist,
        )
    return nearest


def nearest_parking_zone(
    coord: Coordinate,
    zones: Iterable[ParkingZone],
    proximity: ZoneProximity = NEAREST_VERTEX,
) -> Optional[ParkingZone]:
    """
    Closest zone flagged as parking, ranked by `proximity`.

    Returns None when no parking zone (with at least one vertex) exists.
    """
    nearest: Optional[ParkingZone] = None
    best_dist = math.inf

    for zone in zones:
        if not zone.is_parking_zone:
            continue
        d = proximity(coord, zone)
        if d < best_dist:
            best_dist = d
            nearest = zone

    if nearest is not None:
        logger.debug(
            "Nearest parking zone to ({:.6f}, {:.6f}) is {} at {:.1f} m",
            coord.lat, coord.lon, nearest.id or nearest.name, best_dist,
        )
    return nearest


def closest_point_in_zone(zone: ParkingZone, target: Coordinate) -> Coordinate:
    """
    Vertex of `zone` closest to `target`, used as the dropoff point.
    """
    vertices = list(iter_vertices(zone.geometry))
    if not vertices:
        raise ValueError(f"Parking zone {zone.id!r} has no vertices")
    return min(vertices, key=lambda vertex: haversine_distance_m(vertex, target))
