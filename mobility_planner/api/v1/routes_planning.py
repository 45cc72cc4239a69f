# mobility_planner/api/v1/routes_planning.py
from fastapi import APIRouter, HTTPException

from mobility_planner.core.exceptions import PlanningDeadlineExceeded, ProviderError
from mobility_planner.core.logger import logger
from mobility_planner.models.planning import TripPlan, TripRequest
from mobility_planner.services.trip_router import TripPlanningService

router = APIRouter(
    prefix="/journey-planner",
    tags=["journey-planner"],
)

# Single shared instance
planning_service = TripPlanningService()


@router.post(
    "/plan",
    response_model=TripPlan,
    summary="Plan walk/drive/walk routes for the legs of a trip",
)
async def plan_journey(request: TripRequest) -> TripPlan:
    """
    Route each leg in order with the nearest shared vehicle and parking zone.

    - Paths are straight-line approximations.
    - A vehicle dropped off by one leg is picked up from there by later legs.
    """
    try:
        return await planning_service.plan_trip(request)
    except ProviderError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    except PlanningDeadlineExceeded as exc:
        logger.error("Trip planning aborted: {}", exc)
        raise HTTPException(status_code=504, detail=str(exc)) from exc
