# tests/test_api.py
from fastapi.testclient import TestClient

from conftest import FakeProvider, square_zone
from mobility_planner.api.v1 import routes_planning, routes_pricing
from mobility_planner.core.exceptions import ProviderError
from mobility_planner.main import app
from mobility_planner.services.pricing import PriceEstimationService
from mobility_planner.services.trip_router import TripPlanningService

client = TestClient(app)

MINUTE_MS = 60_000

PLAN_PAYLOAD = {
    "legs": [
        {
            "startCoord": {"lng": 4.3501, "lat": 50.8501},
            "startTime": 0,
            "endCoord": {"lng": 4.3605, "lat": 50.8605},
            "endTime": 20 * MINUTE_MS,
        },
        {
            "startCoord": {"lng": 4.3606, "lat": 50.8606},
            "startTime": 50 * MINUTE_MS,
            "endCoord": {"lng": 4.375, "lat": 50.875},
            "endTime": 65 * MINUTE_MS,
        },
    ]
}


def _use_planning_provider(monkeypatch, provider, **kwargs):
    monkeypatch.setattr(
        routes_planning, "planning_service", TripPlanningService(provider=provider, **kwargs)
    )


def _use_pricing_provider(monkeypatch, provider):
    monkeypatch.setattr(routes_pricing, "pricing_service", PriceEstimationService(provider=provider))


def test_plan_journey(monkeypatch, vehicle):
    provider = FakeProvider(
        vehicles=[vehicle("v1", 4.350, 50.850)],
        zones=[square_zone(4.360, 50.860, 0.002, zone_id="z1"), square_zone(4.370, 50.870, 0.002, zone_id="z2")],
    )
    _use_planning_provider(monkeypatch, provider)

    response = client.post("/journey-planner/plan", json=PLAN_PAYLOAD)
    assert response.status_code == 200

    data = response.json()
    first, second = data["legs"]

    # destination inside z1: walk + drive
    assert [p["mode"] for p in first["paths"]] == ["walk", "drive"]
    assert first["vehicleUsage"]["vehicleId"] == "v1"

    # destination outside z2: walk + drive + walk, starting from the first dropoff
    assert [p["mode"] for p in second["paths"]] == ["walk", "drive", "walk"]
    assert second["vehicleUsage"]["pickupLocation"] == {"lng": 4.3605, "lat": 50.8605}
    assert second["paths"][0]["coords"][1] == {"lng": 4.3605, "lat": 50.8605}

    positions = data["updatedVehiclePositions"]
    assert len(positions) == 1
    assert positions[0]["vehicleId"] == "v1"
    assert positions[0]["location"] == second["vehicleUsage"]["dropoffLocation"]


def test_plan_journey_without_vehicles(monkeypatch):
    _use_planning_provider(monkeypatch, FakeProvider())

    response = client.post("/journey-planner/plan", json=PLAN_PAYLOAD)

    assert response.status_code == 200
    data = response.json()
    assert all(leg["paths"] == [] for leg in data["legs"])
    assert all(leg["vehicleUsage"] is None for leg in data["legs"])
    assert data["updatedVehiclePositions"] == []


def test_plan_journey_provider_failure(monkeypatch):
    _use_planning_provider(monkeypatch, FakeProvider(error=ProviderError("vehicles", "down")))

    response = client.post("/journey-planner/plan", json=PLAN_PAYLOAD)

    assert response.status_code == 502
    assert "vehicles" in response.json()["detail"]


def test_plan_journey_deadline(monkeypatch, vehicle):
    provider = FakeProvider(vehicles=[vehicle("v1", 4.350, 50.850)])
    _use_planning_provider(monkeypatch, provider, deadline_s=-1.0)

    response = client.post("/journey-planner/plan", json=PLAN_PAYLOAD)

    assert response.status_code == 504


def test_plan_journey_rejects_invalid_body():
    response = client.post("/journey-planner/plan", json={"legs": [{"startCoord": 1}]})
    assert response.status_code == 422


def test_estimate_price(monkeypatch, schedules):
    _use_pricing_provider(monkeypatch, FakeProvider(schedules=schedules))
    payload = {
        "legs": [
            {
                "startCoord": {"lng": 4.35, "lat": 50.85},
                "startTime": 0,
                "endCoord": {"lng": 4.36, "lat": 50.86},
                "endTime": 25 * MINUTE_MS,
                "paths": [
                    {
                        "mode": "drive",
                        "coords": [{"lng": 4.35, "lat": 50.85}, {"lng": 4.36, "lat": 50.86}],
                        "distance": 1000,
                    }
                ],
                "vehicleUsage": {
                    "vehicleId": "v1",
                    "pickupLocation": {"lng": 4.35, "lat": 50.85},
                    "dropoffLocation": {"lng": 4.36, "lat": 50.86},
                },
            }
        ]
    }

    response = client.post("/price-estimation/estimate", json=payload)
    assert response.status_code == 200

    data = response.json()
    breakdown = data["perKilometer"]["legs"][0]["priceBreakdown"]
    assert breakdown == {
        "bookUnitPrice": 270,
        "pauseUnitPrice": 0,
        "unlockFee": 827,
        "minutePrice": 0,
        "kilometerPrice": 1017,
    }
    assert data["perKilometer"]["estimatedPrice"] == 827 + 270 + 1017
    assert data["perKilometer"]["pricingType"] == "perKilometer"
    assert data["perMinute"]["pricingType"] == "perMinute"
    assert data["cheapestOption"] in ("perKilometer", "perMinute")


def test_estimate_price_provider_failure(monkeypatch):
    _use_pricing_provider(monkeypatch, FakeProvider(error=ProviderError("pricing", "down")))

    response = client.post("/price-estimation/estimate", json={"legs": []})

    assert response.status_code == 502


def test_estimate_price_rejects_unknown_mode():
    payload = {
        "legs": [
            {
                "startCoord": {"lng": 4.35, "lat": 50.85},
                "startTime": 0,
                "endCoord": {"lng": 4.36, "lat": 50.86},
                "endTime": 0,
                "paths": [
                    {
                        "mode": "teleport",
                        "coords": [{"lng": 4.35, "lat": 50.85}, {"lng": 4.36, "lat": 50.86}],
                        "distance": 1,
                    }
                ],
            }
        ]
    }

    response = client.post("/price-estimation/estimate", json=payload)
    assert response.status_code == 422
