# mobility_planner/services/trip_router.py

import asyncio
from time import perf_counter
from typing import Optional, Sequence, Tuple

from mobility_planner.core.config import settings
from mobility_planner.core.exceptions import PlanningDeadlineExceeded
from mobility_planner.core.logger import logger
from mobility_planner.models.geo import ParkingZone, Vehicle
from mobility_planner.models.planning import (
    Leg,
    RoutedLeg,
    TripPlan,
    TripRequest,
    VehiclePosition,
)
from mobility_planner.services.leg_router import (
    EMPTY_POSITIONS,
    VehiclePositions,
    route_leg,
)
from mobility_planner.services.provider import MobilityDataProvider


def positions_to_list(positions: VehiclePositions) -> Tuple[VehiclePosition, ...]:
    return tuple(
        VehiclePosition(vehicle_id=vehicle_id, location=location)
        for vehicle_id, location in positions.items()
    )


# Routed legs so far and the vehicle positions the next leg must see.
TripState = Tuple[Tuple[RoutedLeg, ...], VehiclePositions]


def start_trip(positions: Optional[VehiclePositions] = None) -> TripState:
    return (), positions if positions is not None else EMPTY_POSITIONS


def advance_trip(
    state: TripState,
    leg: Leg,
    vehicles: Sequence[Vehicle],
    zones: Sequence[ParkingZone],
) -> TripState:
    """
    Route the next leg and return the new state; `state` itself is left untouched.
    """
    routed, positions = state
    routed_leg, positions = route_leg(leg, vehicles, zones, positions)
    return routed + (routed_leg,), positions


def finish_trip(state: TripState) -> TripPlan:
    routed, positions = state
    return TripPlan(
        legs=routed,
        updated_vehicle_positions=positions_to_list(positions),
    )


def route_trip(
    legs: Sequence[Leg],
    vehicles: Sequence[Vehicle],
    zones: Sequence[ParkingZone],
    positions: Optional[VehiclePositions] = None,
) -> TripPlan:
    """
    Route all legs in order against one vehicle/zone snapshot.

    Each leg sees the dropoff locations of the vehicles used by the legs before it.
    """
    state = start_trip(positions)
    for leg in legs:
        state = advance_trip(state, leg, vehicles, zones)
    return finish_trip(state)


class TripPlanningService:
    """
    Plans trips against live provider data:
    - legs are routed strictly one after another
    - vehicles and parking zones are fetched concurrently for each leg
    - an optional deadline is checked between legs, never mid-leg
    """

    def __init__(
        self,
        provider: MobilityDataProvider | None = None,
        deadline_s: Optional[float] = None,
    ) -> None:
        self.provider = provider or MobilityDataProvider()
        self.deadline_s = deadline_s if deadline_s is not None else settings.PLANNING_DEADLINE_S
        logger.info("TripPlanningService initialised.")

    async def plan_trip(self, request: TripRequest) -> TripPlan:
        t0 = perf_counter()
        total = len(request.legs)
        logger.info("Planning trip with {} leg(s)", total)

        state = start_trip()

        for index, leg in enumerate(request.legs):
            if index > 0:
                self._check_deadline(t0, index, total)

            vehicles, zones = await asyncio.gather(
                self.provider.list_vehicles(),
                self.provider.list_parking_zones(),
            )
            state = advance_trip(state, leg, vehicles, zones)

        plan = finish_trip(state)
        logger.info(
            "Trip planned: {} leg(s), {} vehicle(s) moved, {:.2f} ms",
            total,
            len(plan.updated_vehicle_positions),
            (perf_counter() - t0) * 1000.0,
        )
        return plan

    def _check_deadline(self, t0: float, routed_legs: int, total_legs: int) -> None:
        if self.deadline_s is None:
            return
        if perf_counter() - t0 > self.deadline_s:
            logger.warning(
                "Planning deadline of {:.1f} s exceeded after {}/{} legs",
                self.deadline_s,
                routed_legs,
                total_legs,
            )
            raise PlanningDeadlineExceeded(routed_legs, total_legs, self.deadline_s)
