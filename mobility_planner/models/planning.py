# mobility_planner/models/planning.py

from enum import Enum
from typing import Optional, Tuple

from mobility_planner.models.base import ValueModel
from mobility_planner.models.geo import Coordinate


class PathMode(str, Enum):
    WALK = "walk"
    DRIVE = "drive"


class Leg(ValueModel):
    """
    One requested point-to-point leg. Times are epoch milliseconds.
    """
    start_coord: Coordinate
    start_time: int
    end_coord: Coordinate
    end_time: int


class PathSegment(ValueModel):
    """
    Straight-line piece of a routed leg, travelled in a single mode.
    """
    mode: PathMode
    coords: Tuple[Coordinate, Coordinate]
    distance: float  # metres


class VehicleUsage(ValueModel):
    vehicle_id: str
    pickup_location: Coordinate
    dropoff_location: Coordinate


class RoutedLeg(ValueModel):
    """
    A leg after routing.

    `paths` holds 0 segments when no vehicle was found, 2 when the vehicle
    can be parked at the destination and 3 when a final walk is needed.
    """
    start_coord: Coordinate
    start_time: int
    end_coord: Coordinate
    end_time: int
    paths: Tuple[PathSegment, ...] = ()
    vehicle_usage: Optional[VehicleUsage] = None


class TripRequest(ValueModel):
    legs: Tuple[Leg, ...]


class VehiclePosition(ValueModel):
    vehicle_id: str
    location: Coordinate


class TripPlan(ValueModel):
    legs: Tuple[RoutedLeg, ...]
    updated_vehicle_positions: Tuple[VehiclePosition, ...] = ()
