# mobility_planner/services/leg_router.py
"""
Route a single leg: walk to the nearest vehicle, drive it to the nearest
parking zone, then walk on to the destination if the zone does not contain it.

Vehicle positions moved by earlier legs of the same trip are passed in as an
immutable mapping and a new mapping is returned; nothing is mutated.
"""
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence, Tuple

from mobility_planner.core.logger import logger
from mobility_planner.models.geo import Coordinate, ParkingZone, Vehicle
from mobility_planner.models.planning import (
    Leg,
    PathMode,
    PathSegment,
    RoutedLeg,
    VehicleUsage,
)
from mobility_planner.services.geo import haversine_distance_m, point_in_multipolygon
from mobility_planner.services.selector import (
    NEAREST_VERTEX,
    ZoneProximity,
    closest_point_in_zone,
    nearest_parking_zone,
    nearest_vehicle,
)

# vehicle id -> last dropoff location within the current trip
VehiclePositions = Mapping[str, Coordinate]

EMPTY_POSITIONS: VehiclePositions = MappingProxyType({})


def apply_position_overrides(
    vehicles: Sequence[Vehicle],
    positions: VehiclePositions,
) -> List[Vehicle]:
    """
    Copies of `vehicles` relocated to their overridden positions; originals are untouched.
    """
    if not positions:
        return list(vehicles)
    return [
        vehicle.model_copy(update={"location": positions[vehicle.id]})
        if vehicle.id in positions
        else vehicle
        for vehicle in vehicles
    ]


def advance_positions(
    positions: VehiclePositions,
    usage: Optional[VehicleUsage],
) -> VehiclePositions:
    """
    Return a new mapping with the used vehicle moved to its dropoff location.
    """
    if usage is None:
        return positions
    updated = dict(positions)
    updated[usage.vehicle_id] = usage.dropoff_location
    return MappingProxyType(updated)


def build_segment(mode: PathMode, start: Coordinate, end: Coordinate) -> PathSegment:
    return PathSegment(
        mode=mode,
        coords=(start, end),
        distance=haversine_distance_m(start, end),
    )


def route_leg(
    leg: Leg,
    vehicles: Sequence[Vehicle],
    zones: Sequence[ParkingZone],
    positions: VehiclePositions = EMPTY_POSITIONS,
    zone_proximity: ZoneProximity = NEAREST_VERTEX,
) -> Tuple[RoutedLeg, VehiclePositions]:
    """
    Route one leg against a snapshot of vehicles and zones.

    Returns the routed leg and the vehicle positions to use for the next leg.
    """
    paths: List[PathSegment] = []
    usage: Optional[VehicleUsage] = None

    vehicle = nearest_vehicle(leg.start_coord, apply_position_overrides(vehicles, positions))
    if vehicle is None:
        logger.warning(
            "No vehicle available for leg starting at ({:.6f}, {:.6f})",
            leg.start_coord.lat,
            leg.start_coord.lon,
        )
    else:
        pickup = vehicle.location
        paths.append(build_segment(PathMode.WALK, leg.start_coord, pickup))

        zone = nearest_parking_zone(leg.end_coord, zones, proximity=zone_proximity)
        if zone is None:
            logger.warning(
                "No parking zone found near ({:.6f}, {:.6f}); leg ends at vehicle {}",
                leg.end_coord.lat,
                leg.end_coord.lon,
                vehicle.id,
            )
        else:
            if point_in_multipolygon(leg.end_coord, zone.geometry):
                dropoff = leg.end_coord
                paths.append(build_segment(PathMode.DRIVE, pickup, dropoff))
            else:
                dropoff = closest_point_in_zone(zone, leg.end_coord)
                paths.append(build_segment(PathMode.DRIVE, pickup, dropoff))
                paths.append(build_segment(PathMode.WALK, dropoff, leg.end_coord))

            usage = VehicleUsage(
                vehicle_id=vehicle.id,
                pickup_location=pickup,
                dropoff_location=dropoff,
            )

    routed = RoutedLeg(
        start_coord=leg.start_coord,
        start_time=leg.start_time,
        end_coord=leg.end_coord,
        end_time=leg.end_time,
        paths=tuple(paths),
        vehicle_usage=usage,
    )
    logger.info(
        "Routed leg with {} segment(s), vehicle={}",
        len(routed.paths),
        usage.vehicle_id if usage else None,
    )
    return routed, advance_positions(positions, usage)
