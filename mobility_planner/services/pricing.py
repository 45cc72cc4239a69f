# mobility_planner/services/pricing.py
"""
Price estimation for routed legs under the per-kilometer and per-minute schedules.

All amounts are in thousandths of the currency unit. Each breakdown field is
rounded on its own for display; the leg price rounds the unrounded sum once.
"""
import math
from typing import List, Optional, Sequence

from mobility_planner.core.logger import logger
from mobility_planner.models.planning import PathMode, RoutedLeg
from mobility_planner.models.pricing import (
    PriceBreakdown,
    PricedLeg,
    PriceEstimate,
    PricingOption,
    PricingSchedule,
    PricingSchedules,
    TripPriceEstimate,
)
from mobility_planner.services.provider import MobilityDataProvider

MS_PER_MINUTE = 60_000
FREE_BOOKING_MINUTES = 15.0
# Driving time is estimated from distance, not measured.
AVERAGE_DRIVING_SPEED_KMH = 30.0


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def pause_minutes_between(leg: RoutedLeg, next_leg: Optional[RoutedLeg]) -> float:
    """
    Idle minutes before `next_leg` picks up the same vehicle again, else 0.

    Overlapping legs give a negative value, which is passed through.
    """
    if next_leg is None or leg.vehicle_usage is None or next_leg.vehicle_usage is None:
        return 0.0
    if leg.vehicle_usage.vehicle_id != next_leg.vehicle_usage.vehicle_id:
        return 0.0

    pause = (next_leg.start_time - leg.end_time) / MS_PER_MINUTE
    if pause < 0:
        logger.warning(
            "Negative pause of {:.2f} min for vehicle {}; legs overlap",
            pause,
            leg.vehicle_usage.vehicle_id,
        )
    return pause


def price_leg(
    leg: RoutedLeg,
    schedule: PricingSchedule,
    pause_minutes: float = 0.0,
) -> PricedLeg:
    drive_paths = [path for path in leg.paths if path.mode == PathMode.DRIVE]

    unlock_fee = schedule.unlock_fee if drive_paths else 0

    duration_minutes = (leg.end_time - leg.start_time) / MS_PER_MINUTE
    booking_minutes = max(0.0, duration_minutes - FREE_BOOKING_MINUTES)
    booking_price = booking_minutes * schedule.book_unit_price

    drive_km = sum(path.distance for path in drive_paths) / 1000.0
    driving_minutes = (drive_km / AVERAGE_DRIVING_SPEED_KMH) * 60.0
    minute_price_total = driving_minutes * schedule.minute_price

    excess_km = max(0.0, drive_km - schedule.included_kilometers)
    kilometer_price_total = excess_km * schedule.kilometer_price

    pause_price_total = pause_minutes * schedule.pause_unit_price

    total = (
        unlock_fee
        + booking_price
        + minute_price_total
        + kilometer_price_total
        + pause_price_total
    )

    return PricedLeg(
        estimated_price=round_half_up(total),
        price_breakdown=PriceBreakdown(
            book_unit_price=round_half_up(booking_price),
            pause_unit_price=round_half_up(pause_price_total),
            unlock_fee=unlock_fee,
            minute_price=round_half_up(minute_price_total),
            kilometer_price=round_half_up(kilometer_price_total),
        ),
    )


def price_trip(
    legs: Sequence[RoutedLeg],
    schedule: PricingSchedule,
    option: PricingOption,
) -> PriceEstimate:
    """
    Price every leg under one schedule; pauses are charged to the earlier leg.
    """
    priced: List[PricedLeg] = []
    for index, leg in enumerate(legs):
        next_leg = legs[index + 1] if index + 1 < len(legs) else None
        priced.append(price_leg(leg, schedule, pause_minutes_between(leg, next_leg)))

    return PriceEstimate(
        pricing_type=option,
        estimated_price=sum(leg.estimated_price for leg in priced),
        legs=tuple(priced),
    )


def estimate_trip_price(
    legs: Sequence[RoutedLeg],
    schedules: PricingSchedules,
) -> TripPriceEstimate:
    per_kilometer = price_trip(legs, schedules.per_kilometer, PricingOption.PER_KILOMETER)
    per_minute = price_trip(legs, schedules.per_minute, PricingOption.PER_MINUTE)

    if per_kilometer.estimated_price <= per_minute.estimated_price:
        cheapest = PricingOption.PER_KILOMETER
    else:
        cheapest = PricingOption.PER_MINUTE

    return TripPriceEstimate(
        per_kilometer=per_kilometer,
        per_minute=per_minute,
        cheapest_option=cheapest,
    )


class PriceEstimationService:
    """
    Fetches the current pricing schedules and estimates a trip under both.
    """

    def __init__(self, provider: MobilityDataProvider | None = None) -> None:
        self.provider = provider or MobilityDataProvider()
        logger.info("PriceEstimationService initialised.")

    async def estimate_price(self, legs: Sequence[RoutedLeg]) -> TripPriceEstimate:
        schedules = await self.provider.get_pricing_schedules()
        estimate = estimate_trip_price(legs, schedules)
        logger.info(
            "Priced {} leg(s): perKilometer={}, perMinute={}, cheapest={}",
            len(legs),
            estimate.per_kilometer.estimated_price,
            estimate.per_minute.estimated_price,
            estimate.cheapest_option.value,
        )
        return estimate
