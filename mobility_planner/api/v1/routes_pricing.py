# mobility_planner/api/v1/routes_pricing.py
from fastapi import APIRouter, HTTPException

from mobility_planner.core.exceptions import ProviderError
from mobility_planner.models.pricing import PriceEstimationRequest, TripPriceEstimate
from mobility_planner.services.pricing import PriceEstimationService

router = APIRouter(
    prefix="/price-estimation",
    tags=["price-estimation"],
)

# Single shared instance
pricing_service = PriceEstimationService()


@router.post(
    "/estimate",
    response_model=TripPriceEstimate,
    summary="Estimate the price of routed legs under both pricing models",
)
async def estimate_price(request: PriceEstimationRequest) -> TripPriceEstimate:
    """
    Price the legs per kilometer and per minute and report the cheaper option.
    """
    try:
        return await pricing_service.estimate_price(request.legs)
    except ProviderError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
