# mobility_planner/models/geo.py

from typing import Optional, Tuple

from pydantic import Field

from mobility_planner.models.base import ValueModel


class Coordinate(ValueModel):
    """
    WGS84 coordinate in degrees, `{lng, lat}` on the wire.
    """
    lon: float = Field(alias="lng")
    lat: float


# ring 0 is the outer boundary, rings 1..n are holes; rings are implicitly closed
Ring = Tuple[Coordinate, ...]
Polygon = Tuple[Ring, ...]
MultiPolygon = Tuple[Polygon, ...]


class Vehicle(ValueModel):
    """
    A shared vehicle as reported by the provider.
    """
    id: str
    location: Coordinate
    model: Optional[str] = None
    availability: Optional[str] = None


class ParkingZone(ValueModel):
    """
    Geozone polygon; only zones flagged as parking are used for dropoff.
    """
    id: Optional[str] = None
    name: Optional[str] = None
    is_parking_zone: bool
    geometry: MultiPolygon = ()
