# mobility_planner/core/exceptions.py
"""Exceptions raised by the planner services.

Missing vehicles or parking zones are not errors: they show up as shorter
``paths`` and an absent ``vehicle_usage`` on the routed leg.
"""


class PlannerError(Exception):
    """Base class for planner failures."""


class ProviderError(PlannerError):
    """The upstream mobility-data provider could not deliver a feed."""

    def __init__(self, feed: str, message: str):
        self.feed = feed
        super().__init__(f"[{feed}] {message}")


class PlanningDeadlineExceeded(PlannerError):
    """The trip plan ran past its deadline; raised between legs only."""

    def __init__(self, routed_legs: int, total_legs: int, deadline_s: float):
        self.routed_legs = routed_legs
        self.total_legs = total_legs
        self.deadline_s = deadline_s
        super().__init__(
            f"Planning deadline of {deadline_s:.1f} s exceeded after "
            f"{routed_legs}/{total_legs} legs"
        )
