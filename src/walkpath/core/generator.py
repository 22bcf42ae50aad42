"""Path generation pipeline: candidates in, ordered stops with metrics out."""

import logging
import math
from typing import Optional

from walkpath.errors import InvalidSpeedError, RoutingServiceError
from walkpath.models import Coordinate, Place
from .budget import max_distance, max_walking_time
from .distance import great_circle_distance, travel_time
from .geometry import locate_places, place_coordinates
from .metrics import build_path
from .models import GeneratedPath, GenerationConstraints, RoutingConfig, Stop
from .osrm import OsrmRouteProvider
from .routing import GreatCircleRouteProvider, RouteDistanceProvider
from .selection import select_candidates
from .sequencer import sequence_places
from .trimmer import trim_to_budget

logger = logging.getLogger(__name__)


def _nearest_place_id(places: list[Place], coord: Coordinate, config: RoutingConfig) -> str:
    nearest = min(places, key=lambda p: great_circle_distance(coord, place_coordinates(p), config))
    return nearest.id


def _preselect(
    places: list[Place],
    constraints: GenerationConstraints,
    end_place_id: Optional[str],
    speed: float,
    dwell: float,
    config: RoutingConfig,
) -> list[Place]:
    distance_budget = constraints.max_distance_km if constraints.max_distance_km is not None else math.inf
    time_budget = math.inf
    if constraints.max_duration_minutes is not None:
        time_budget = constraints.max_duration_minutes
        walking = max_walking_time(time_budget, constraints.max_places, dwell, config)
        distance_budget = min(distance_budget, max_distance(walking, speed))
    logger.info(
        "Preselecting up to %d places within %.2f km", constraints.max_places, distance_budget
    )

    start = None
    if constraints.start_place_id is None or all(p.id != constraints.start_place_id for p in places):
        start = constraints.start_coordinate or place_coordinates(places[0])
    return select_candidates(
        places,
        max_places=constraints.max_places,
        max_distance_km=distance_budget,
        total_time_minutes=time_budget,
        speed_kmh=speed,
        start_place_id=constraints.start_place_id,
        start=start,
        end_place_id=end_place_id,
        per_place_minutes=dwell,
        config=config,
    )


def generate_path(
    places: list[Place],
    constraints: Optional[GenerationConstraints] = None,
    config: Optional[RoutingConfig] = None,
    provider: Optional[RouteDistanceProvider] = None,
) -> GeneratedPath:
    """Generate one walking path from a pool of candidate places.

    Steps: validate every geometry, optionally preselect up to
    ``max_places`` candidates, order them nearest-neighbour between the
    anchors, trim interior stops to fit the budget, then number the stops.
    A free start coordinate makes the nearest candidate the start anchor.
    A round trip ignores the end anchor and closes with a final stop back
    at the first place, with no second dwell there.
    Geometry and speed errors propagate. A budget that cannot be met
    yields the shortest start+end path rather than an error.
    """
    constraints = constraints or GenerationConstraints()
    config = config or RoutingConfig()
    provider = provider or GreatCircleRouteProvider(config)
    speed = (
        config.sightseeing_speed_kmh
        if constraints.walking_speed_kmh is None
        else constraints.walking_speed_kmh
    )
    dwell = (
        config.default_dwell_minutes
        if constraints.dwell_minutes_per_place is None
        else constraints.dwell_minutes_per_place
    )

    if not places:
        return GeneratedPath()
    locate_places(places)

    start_id = constraints.start_place_id
    end_id = constraints.end_place_id
    if constraints.is_circular:
        if end_id is not None and end_id != start_id:
            logger.debug("Round trip requested; ignoring end place %s", end_id)
        end_id = None

    candidates = list(places)
    if constraints.max_places is not None:
        candidates = _preselect(candidates, constraints, end_id, speed, dwell, config)

    start_coord = constraints.start_coordinate
    if start_coord is not None and all(p.id != start_id for p in candidates):
        start_id = _nearest_place_id(candidates, start_coord, config)
        logger.debug(
            "Starting from %s, nearest to (%s, %s)", start_id, start_coord.latitude, start_coord.longitude
        )

    sequence = sequence_places(candidates, start_id, end_id, provider)
    if constraints.is_circular and len(sequence) > 1:
        sequence.append(sequence[0])

    if constraints.has_budget:
        result = trim_to_budget(
            sequence, dwell,
            max_duration_minutes=constraints.max_duration_minutes,
            max_distance_km=constraints.max_distance_km,
            speed_kmh=speed, config=config, provider=provider,
        )
        if result.removed_place_ids:
            logger.info("Trimmed %d stops to fit budget", len(result.removed_place_ids))
        if not result.satisfied:
            logger.warning("Budget cannot be met; returning best-effort %d-stop path", len(result.sequence))
        sequence = result.sequence

    path = build_path(sequence, {p.id: dwell for p in sequence}, speed, config, provider)
    logger.info(
        "Generated path: %d stops, %.2f km, %.0f min",
        len(path.stops), path.total_distance_km, path.total_time_minutes,
    )
    return path


async def route_generated_path(
    path: GeneratedPath,
    places: list[Place],
    provider: OsrmRouteProvider,
    speed_kmh: Optional[float] = None,
    config: Optional[RoutingConfig] = None,
) -> GeneratedPath:
    """Replace estimated segment metrics with legs from a routing service.

    Travel times are recomputed from the routed leg distances at
    ``speed_kmh``; dwell times are kept. A round trip is routed through its
    closing stop, so the geometry ends back at the start. Returns a new path
    with the route geometry attached.

    Raises:
        InvalidSpeedError: ``speed_kmh`` is zero or negative.
    """
    config = config or RoutingConfig()
    speed = speed_kmh if speed_kmh is not None else config.sightseeing_speed_kmh
    if speed <= 0:
        raise InvalidSpeedError(speed)
    if len(path.stops) < 2:
        logger.warning("Path has fewer than 2 stops; cannot route it")
        return path

    by_id = {p.id: p for p in places}
    missing = [s.place_id for s in path.stops if s.place_id not in by_id]
    if missing:
        raise ValueError(f"Places missing for stops: {', '.join(missing)}")
    coords = [place_coordinates(by_id[s.place_id]) for s in path.stops]

    route = await provider.route(coords)
    if len(route.legs) != len(path.stops) - 1:
        raise RoutingServiceError(
            f"Routing service returned {len(route.legs)} legs for {len(path.stops)} stops"
        )

    stops = [path.stops[0].model_copy()]
    for stop, leg in zip(path.stops[1:], route.legs):
        stops.append(Stop(
            place_id=stop.place_id,
            order=stop.order,
            dwell_time_minutes=stop.dwell_time_minutes,
            distance_from_previous=leg.distance_km,
            travel_time_from_previous=travel_time(leg.distance_km, speed),
        ))
    return GeneratedPath(
        stops=stops,
        total_distance_km=sum(s.distance_from_previous for s in stops),
        total_time_minutes=sum(s.travel_time_from_previous + s.dwell_time_minutes for s in stops),
        geometry=route,
    )
