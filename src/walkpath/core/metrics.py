"""Per-segment and total distance/time for an ordered sequence of places."""

from collections.abc import Mapping
from typing import Optional

from walkpath.models import Place
from .distance import travel_time
from .geometry import locate_places
from .models import GeneratedPath, PathMetrics, RoutingConfig, Segment, Stop
from .routing import GreatCircleRouteProvider, RouteDistanceProvider


def _dwell_for(place: Place, dwell_times: Mapping[str, float], config: RoutingConfig) -> float:
    return dwell_times.get(place.id, config.default_dwell_minutes)


def _dwell_times(
    sequence: list[Place], dwell_times: Mapping[str, float], config: RoutingConfig,
) -> list[float]:
    # A place revisited later in the sequence (the closing stop of a round
    # trip) is passed through, not visited again.
    seen: set[str] = set()
    result = []
    for place in sequence:
        result.append(0.0 if place.id in seen else _dwell_for(place, dwell_times, config))
        seen.add(place.id)
    return result


def aggregate(
    sequence: list[Place],
    dwell_times_by_place: Mapping[str, float],
    speed_kmh: Optional[float] = None,
    config: Optional[RoutingConfig] = None,
    provider: Optional[RouteDistanceProvider] = None,
) -> PathMetrics:
    """Sum segment distances, travel times and dwell times for a sequence.

    Distances come from ``provider`` (pedestrian great-circle by default) and
    travel times from ``speed_kmh`` (sightseeing pace by default). Places
    missing from ``dwell_times_by_place`` get the configured default dwell.
    A geometry failure on any place fails the whole aggregation.
    """
    config = config or RoutingConfig()
    provider = provider or GreatCircleRouteProvider(config)
    speed = speed_kmh if speed_kmh is not None else config.sightseeing_speed_kmh

    dwell_total = sum(_dwell_times(sequence, dwell_times_by_place, config))
    if len(sequence) <= 1:
        return PathMetrics(segments=[], total_distance_km=0.0, total_time_minutes=dwell_total)

    coords = locate_places(sequence)
    segments = []
    for i in range(len(sequence) - 1):
        distance = provider.distance_km(coords[i], coords[i + 1])
        segments.append(Segment(
            from_place_id=sequence[i].id,
            to_place_id=sequence[i + 1].id,
            distance_km=distance,
            travel_time_minutes=travel_time(distance, speed),
        ))

    return PathMetrics(
        segments=segments,
        total_distance_km=sum(s.distance_km for s in segments),
        total_time_minutes=sum(s.travel_time_minutes for s in segments) + dwell_total,
    )


def stops_from_metrics(
    sequence: list[Place],
    metrics: PathMetrics,
    dwell_times_by_place: Mapping[str, float],
    config: Optional[RoutingConfig] = None,
) -> GeneratedPath:
    """Turn a sequence and its segments into numbered stops plus totals."""
    config = config or RoutingConfig()
    dwells = _dwell_times(sequence, dwell_times_by_place, config)
    stops = []
    for i, place in enumerate(sequence):
        inbound = metrics.segments[i - 1] if i > 0 else None
        stops.append(Stop(
            place_id=place.id,
            order=i,
            dwell_time_minutes=dwells[i],
            distance_from_previous=inbound.distance_km if inbound else 0.0,
            travel_time_from_previous=inbound.travel_time_minutes if inbound else 0,
        ))
    return GeneratedPath(
        stops=stops,
        total_distance_km=sum(s.distance_from_previous for s in stops),
        total_time_minutes=sum(s.travel_time_from_previous + s.dwell_time_minutes for s in stops),
    )


def build_path(
    sequence: list[Place],
    dwell_times_by_place: Mapping[str, float],
    speed_kmh: Optional[float] = None,
    config: Optional[RoutingConfig] = None,
    provider: Optional[RouteDistanceProvider] = None,
) -> GeneratedPath:
    """Aggregate a sequence and return it as a GeneratedPath."""
    metrics = aggregate(sequence, dwell_times_by_place, speed_kmh, config, provider)
    return stops_from_metrics(sequence, metrics, dwell_times_by_place, config)
