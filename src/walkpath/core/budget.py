"""Time budget arithmetic for walking paths.

Forward: how long a route of a given distance and stop count takes.
Inverse: how far, and through how many stops, a time budget allows.
All durations are in minutes, distances in kilometres.
"""

import math
from typing import Optional

from walkpath.errors import InsufficientBudgetError, InvalidSpeedError
from .distance import travel_time
from .models import RoutingConfig, TimeBreakdown

_DEFAULT_CONFIG = RoutingConfig()


def _per_place(per_place_minutes: Optional[float], config: RoutingConfig) -> float:
    return config.default_dwell_minutes if per_place_minutes is None else per_place_minutes


def walking_time(distance_km: float, speed_kmh: float) -> int:
    """Minutes needed to walk ``distance_km``, rounded up."""
    return travel_time(distance_km, speed_kmh)


def time_breakdown(
    distance_km: float,
    speed_kmh: float,
    place_count: int,
    per_place_minutes: Optional[float] = None,
    config: Optional[RoutingConfig] = None,
) -> TimeBreakdown:
    config = config or _DEFAULT_CONFIG
    walking = walking_time(distance_km, speed_kmh)
    dwell = place_count * _per_place(per_place_minutes, config)
    return TimeBreakdown(
        walking_time_minutes=walking,
        dwell_time_minutes=dwell,
        buffer_minutes=config.buffer_minutes,
        total_time_minutes=walking + dwell + config.buffer_minutes,
    )


def max_walking_time(
    total_budget_minutes: float,
    place_count: int,
    per_place_minutes: Optional[float] = None,
    config: Optional[RoutingConfig] = None,
) -> float:
    """Minutes left for walking after dwell time and the safety buffer.

    Raises InsufficientBudgetError when nothing is left.
    """
    config = config or _DEFAULT_CONFIG
    fixed = place_count * _per_place(per_place_minutes, config) + config.buffer_minutes
    remaining = total_budget_minutes - fixed
    if remaining <= 0:
        raise InsufficientBudgetError(total_budget_minutes, fixed, place_count)
    return remaining


def max_distance(walking_time_minutes: float, speed_kmh: float) -> float:
    if speed_kmh <= 0:
        raise InvalidSpeedError(speed_kmh)
    return walking_time_minutes / 60 * speed_kmh


def optimal_place_count(
    total_budget_minutes: float,
    max_distance_km: float,
    speed_kmh: float,
    per_place_minutes: Optional[float] = None,
    config: Optional[RoutingConfig] = None,
) -> int:
    """How many stops fit once walking ``max_distance_km`` and the buffer are paid for."""
    config = config or _DEFAULT_CONFIG
    available = total_budget_minutes - config.buffer_minutes - walking_time(max_distance_km, speed_kmh)
    per_place = _per_place(per_place_minutes, config)
    if available <= 0:
        return 0
    if per_place <= 0:
        return config.max_place_count
    return max(0, min(math.floor(available / per_place), config.max_place_count))


def fits_within_time_limit(
    distance_km: float,
    place_count: int,
    speed_kmh: float,
    limit_minutes: float,
    per_place_minutes: Optional[float] = None,
    config: Optional[RoutingConfig] = None,
) -> bool:
    breakdown = time_breakdown(distance_km, speed_kmh, place_count, per_place_minutes, config)
    return breakdown.total_time_minutes <= limit_minutes
