"""Budget-driven preselection of candidate places before sequencing."""

import logging
from typing import Optional

from walkpath.errors import InsufficientCandidatesError
from walkpath.models import Coordinate, Place
from .budget import walking_time
from .distance import great_circle_distance
from .geometry import place_coordinates
from .models import RoutingConfig

logger = logging.getLogger(__name__)


def select_candidates(
    places: list[Place],
    max_places: int,
    max_distance_km: float,
    total_time_minutes: float,
    speed_kmh: float,
    start_place_id: Optional[str] = None,
    start: Optional[Coordinate] = None,
    end_place_id: Optional[str] = None,
    per_place_minutes: Optional[float] = None,
    config: Optional[RoutingConfig] = None,
) -> list[Place]:
    """Greedily pick the nearest places that still fit the budget.

    Walks outward from the start place (or ``start`` coordinate), adding
    the closest remaining place by straight-line distance until
    ``max_places`` is reached or the next pick would break the distance or
    time budget. The end place is appended if it was not picked.

    Raises:
        ValueError: neither a start place nor a start coordinate was given.
        InsufficientCandidatesError: fewer than two places were selected.
    """
    config = config or RoutingConfig()
    per_place = config.default_dwell_minutes if per_place_minutes is None else per_place_minutes

    selected: list[Place] = []
    remaining = list(places)
    total_distance = 0.0

    start_place = next((p for p in remaining if p.id == start_place_id), None) if start_place_id else None
    if start_place is not None:
        selected.append(start_place)
        remaining.remove(start_place)
        current = place_coordinates(start_place)
    elif start is not None:
        current = start
    else:
        raise ValueError("Start point must be specified")

    while remaining and len(selected) < max_places:
        nearest = None
        nearest_distance = float("inf")
        for place in remaining:
            d = great_circle_distance(current, place_coordinates(place), config)
            if d < nearest_distance:
                nearest_distance = d
                nearest = place

        candidate_distance = total_distance + nearest_distance
        if candidate_distance > max_distance_km:
            logger.info(
                "Stopping: distance limit reached (%.2f > %s)", candidate_distance, max_distance_km
            )
            break

        total_time = (
            walking_time(candidate_distance, speed_kmh)
            + (len(selected) + 1) * per_place
            + config.buffer_minutes
        )
        if total_time > total_time_minutes:
            logger.info("Stopping: time limit reached (%s > %s)", total_time, total_time_minutes)
            break

        selected.append(nearest)
        remaining.remove(nearest)
        total_distance = candidate_distance
        current = place_coordinates(nearest)

    if end_place_id and end_place_id != start_place_id:
        end_place = next((p for p in remaining if p.id == end_place_id), None)
        if end_place is not None:
            selected.append(end_place)

    logger.info("Selected %d places, total distance: %.2f km", len(selected), total_distance)
    if len(selected) < 2:
        raise InsufficientCandidatesError(
            "Could not find enough places within the given constraints"
        )
    return selected
