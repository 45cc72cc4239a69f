# mobility_planner/models/pricing.py

from enum import Enum
from typing import Tuple

from pydantic import Field

from mobility_planner.models.base import ValueModel
from mobility_planner.models.planning import RoutedLeg


class PricingSchedule(ValueModel):
    """
    Per-unit rates of one commercial model, in thousandths of the currency.

    Unknown provider fields (tier, caps, uuid, ...) are ignored.
    """
    unlock_fee: int
    book_unit_price: int
    minute_price: int
    kilometer_price: int
    pause_unit_price: int
    included_kilometers: float = 0.0


class PricingSchedules(ValueModel):
    per_kilometer: PricingSchedule = Field(alias="pricingPerKilometer")
    per_minute: PricingSchedule = Field(alias="pricingPerMinute")


class PricingOption(str, Enum):
    PER_KILOMETER = "perKilometer"
    PER_MINUTE = "perMinute"


class PriceBreakdown(ValueModel):
    """
    Computed amounts per charge, each rounded on its own.
    """
    book_unit_price: int
    pause_unit_price: int
    unlock_fee: int
    minute_price: int
    kilometer_price: int


class PricedLeg(ValueModel):
    estimated_price: int
    price_breakdown: PriceBreakdown


class PriceEstimate(ValueModel):
    pricing_type: PricingOption
    estimated_price: int
    legs: Tuple[PricedLeg, ...]


class TripPriceEstimate(ValueModel):
    per_kilometer: PriceEstimate
    per_minute: PriceEstimate
    cheapest_option: PricingOption


class PriceEstimationRequest(ValueModel):
    legs: Tuple[RoutedLeg, ...]
