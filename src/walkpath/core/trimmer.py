"""Shorten a sequence until it fits a duration and/or distance budget."""

import logging
from typing import Optional

from walkpath.models import Place
from .metrics import aggregate
from .models import PathMetrics, RoutingConfig, TrimResult
from .routing import GreatCircleRouteProvider, RouteDistanceProvider

logger = logging.getLogger(__name__)


def _within_budget(
    metrics: PathMetrics,
    max_duration_minutes: Optional[float],
    max_distance_km: Optional[float],
) -> bool:
    if max_duration_minutes is not None and metrics.total_time_minutes > max_duration_minutes:
        return False
    if max_distance_km is not None and metrics.total_distance_km > max_distance_km:
        return False
    return True


def trim_to_budget(
    sequence: list[Place],
    dwell_minutes: float,
    max_duration_minutes: Optional[float] = None,
    max_distance_km: Optional[float] = None,
    speed_kmh: Optional[float] = None,
    config: Optional[RoutingConfig] = None,
    provider: Optional[RouteDistanceProvider] = None,
) -> TrimResult:
    """Drop interior stops until every supplied constraint is met.

    The stop removed each round is the one just before the final stop, so
    the first and last stops are always kept. When even the two-stop
    sequence exceeds the budget it is returned with ``satisfied=False``.
    """
    config = config or RoutingConfig()
    provider = provider or GreatCircleRouteProvider(config)

    def measure(seq: list[Place]) -> PathMetrics:
        return aggregate(seq, {p.id: dwell_minutes for p in seq}, speed_kmh, config, provider)

    current = list(sequence)
    metrics = measure(current)
    if _within_budget(metrics, max_duration_minutes, max_distance_km):
        return TrimResult(sequence=current, metrics=metrics)
    if len(current) < 3:
        return TrimResult(sequence=current, metrics=metrics, satisfied=False)

    removed: list[str] = []
    while len(current) > 2:
        dropped = current.pop(-2)
        removed.append(dropped.id)
        metrics = measure(current)
        logger.debug(
            "Trimmed %s: %d stops, %.2f km, %.0f min",
            dropped.id, len(current), metrics.total_distance_km, metrics.total_time_minutes,
        )
        if _within_budget(metrics, max_duration_minutes, max_distance_km):
            return TrimResult(sequence=current, metrics=metrics, removed_place_ids=removed)

    logger.info(
        "Budget not met after trimming to start and end (%.2f km, %.0f min)",
        metrics.total_distance_km, metrics.total_time_minutes,
    )
    return TrimResult(
        sequence=current, metrics=metrics, removed_place_ids=removed, satisfied=False,
    )
