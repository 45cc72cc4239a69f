# tests/conftest.py
import os
import sys

import pytest

# Add the project root directory to sys.path so that "import mobility_planner" works
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from mobility_planner.models.geo import Coordinate, ParkingZone, Vehicle  # noqa: E402
from mobility_planner.models.pricing import PricingSchedules  # noqa: E402


def square_ring(lon: float, lat: float, size: float):
    """Counter-clockwise square ring with its lower-left corner at (lon, lat)."""
    return (
        Coordinate(lon=lon, lat=lat),
        Coordinate(lon=lon + size, lat=lat),
        Coordinate(lon=lon + size, lat=lat + size),
        Coordinate(lon=lon, lat=lat + size),
    )


def square_zone(lon: float, lat: float, size: float, parking: bool = True, zone_id: str = "zone") -> ParkingZone:
    return ParkingZone(
        id=zone_id,
        is_parking_zone=parking,
        geometry=((square_ring(lon, lat, size),),),
    )


class FakeProvider:
    """In-memory stand-in for MobilityDataProvider."""

    def __init__(self, vehicles=(), zones=(), schedules=None, error=None):
        self.vehicles = list(vehicles)
        self.zones = list(zones)
        self.schedules = schedules
        self.error = error
        self.calls = []

    async def list_vehicles(self):
        self.calls.append("vehicles")
        if self.error:
            raise self.error
        return list(self.vehicles)

    async def list_parking_zones(self):
        self.calls.append("geozones")
        if self.error:
            raise self.error
        return list(self.zones)

    async def get_pricing_schedules(self):
        self.calls.append("pricing")
        if self.error:
            raise self.error
        return self.schedules


PRICING_PAYLOAD = {
    "pricingPerKilometer": {
        "uuid": "17d14c67-aa04-4433-81a0-4fcb1988bd5e",
        "tier": "M",
        "unlockFee": 827,
        "minutePrice": 0,
        "pauseUnitPrice": 248,
        "kilometerPrice": 1017,
        "bookUnitPrice": 27,
        "dayCapPrice": 40496,
        "includedKilometers": 0,
        "type": "kilometer",
    },
    "pricingPerMinute": {
        "uuid": "cae26d12-5fd7-444b-85bd-284af7cf81b7",
        "tier": "M",
        "unlockFee": 827,
        "minutePrice": 405,
        "pauseUnitPrice": 248,
        "kilometerPrice": 620,
        "bookUnitPrice": 27,
        "dayCapPrice": 90083,
        "includedKilometers": 100,
        "type": "minute",
    },
    "smartPricing": {"unlockFee": 826, "minutePrice": 273},
}


@pytest.fixture
def schedules() -> PricingSchedules:
    return PricingSchedules.model_validate(PRICING_PAYLOAD)


@pytest.fixture
def vehicle():
    def _vehicle(vehicle_id: str, lon: float, lat: float) -> Vehicle:
        return Vehicle(id=vehicle_id, location=Coordinate(lon=lon, lat=lat))

    return _vehicle
