# mobility_planner/services/provider.py
"""HTTP client for the upstream mobility-data provider.

Fetches the three read-only feeds the planner needs (vehicles, geozones and
pricing) and converts them into domain models. Failed reads are not retried;
they surface as ``ProviderError``.
"""
from time import perf_counter
from typing import Any, Dict, List, Optional

import httpx

from mobility_planner.core.config import settings
from mobility_planner.core.exceptions import ProviderError
from mobility_planner.core.logger import logger
from mobility_planner.models.geo import Coordinate, MultiPolygon, ParkingZone, Vehicle
from mobility_planner.models.pricing import PricingSchedules

PARKING_GEOFENCING_TYPE = "parking"


def _unwrap_list(feed: str, payload: Any) -> List[Dict[str, Any]]:
    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        payload = payload["data"]
    if not isinstance(payload, list):
        raise ProviderError(feed, f"expected a list, got {type(payload).__name__}")
    return payload


def parse_vehicle(raw: Dict[str, Any]) -> Vehicle:
    """
    Build a Vehicle from either flat (`locationLatitude`/`locationLongitude`)
    or nested (`location.latitude`/`location.longitude`) provider fields.
    """
    if "locationLatitude" in raw:
        lat, lon = raw["locationLatitude"], raw["locationLongitude"]
    else:
        lat, lon = raw["location"]["latitude"], raw["location"]["longitude"]

    return Vehicle(
        id=str(raw["id"]),
        location=Coordinate(lon=lon, lat=lat),
        model=raw.get("model"),
        availability=raw.get("availability"),
    )


def _parse_multipolygon(geometry: Dict[str, Any]) -> MultiPolygon:
    coordinates = geometry.get("coordinates") or []
    if geometry.get("type") == "Polygon":
        coordinates = [coordinates]

    return tuple(
        tuple(
            tuple(Coordinate(lon=point[0], lat=point[1]) for point in ring)
            for ring in polygon
        )
        for polygon in coordinates
    )


def parse_geozone(raw: Dict[str, Any]) -> ParkingZone:
    geom = raw.get("geom") or {}
    geometry = geom.get("geometry", geom)
    return ParkingZone(
        id=str(raw["id"]) if raw.get("id") is not None else None,
        name=raw.get("name"),
        is_parking_zone=raw.get("geofencingType") == PARKING_GEOFENCING_TYPE,
        geometry=_parse_multipolygon(geometry),
    )


class MobilityDataProvider:
    """
    Read-only access to vehicle locations, parking geozones and pricing.
    """

    def __init__(
        self,
        vehicles_url: Optional[str] = None,
        zones_url: Optional[str] = None,
        pricing_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.vehicles_url = vehicles_url or settings.PROVIDER_VEHICLES_URL
        self.zones_url = zones_url or settings.PROVIDER_ZONES_URL
        self.pricing_url = pricing_url or settings.PROVIDER_PRICING_URL
        self.timeout = timeout if timeout is not None else settings.PROVIDER_TIMEOUT_S
        # Only set in tests (httpx.MockTransport)
        self.transport = transport

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    async def list_vehicles(self) -> List[Vehicle]:
        payload = await self._get_json("vehicles", self.vehicles_url)
        try:
            vehicles = [parse_vehicle(raw) for raw in _unwrap_list("vehicles", payload)]
        except (KeyError, TypeError, ValueError) as exc:
            raise ProviderError("vehicles", f"malformed vehicle record: {exc}") from exc

        logger.info("Fetched {} vehicles", len(vehicles))
        return vehicles

    async def list_parking_zones(self) -> List[ParkingZone]:
        payload = await self._get_json("geozones", self.zones_url)
        try:
            zones = [parse_geozone(raw) for raw in _unwrap_list("geozones", payload)]
        except (KeyError, TypeError, ValueError, IndexError) as exc:
            raise ProviderError("geozones", f"malformed geozone record: {exc}") from exc

        parking = sum(1 for zone in zones if zone.is_parking_zone)
        logger.info("Fetched {} geozones ({} parking)", len(zones), parking)
        return zones

    async def get_pricing_schedules(self) -> PricingSchedules:
        payload = await self._get_json("pricing", self.pricing_url)
        try:
            return PricingSchedules.model_validate(payload)
        except ValueError as exc:
            raise ProviderError("pricing", f"malformed pricing payload: {exc}") from exc

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _get_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            transport=self.transport,
        )

    async def _get_json(self, feed: str, url: Optional[str]) -> Any:
        if not url:
            raise ProviderError(feed, "feed URL is not configured")

        t0 = perf_counter()
        try:
            async with self._get_client() as client:
                response = await client.get(url)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPError as exc:
            logger.error("Provider request for {} failed: {}", feed, exc)
            raise ProviderError(feed, str(exc)) from exc
        except ValueError as exc:
            logger.error("Provider returned invalid JSON for {}: {}", feed, exc)
            raise ProviderError(feed, "invalid JSON") from exc

        logger.debug(
            "Fetched {} from {} in {:.2f} ms", feed, url, (perf_counter() - t0) * 1000.0
        )
        return payload
