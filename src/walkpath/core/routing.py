"""Route distance providers used by the sequencer and metrics aggregator."""

from typing import Optional, Protocol, runtime_checkable

import numpy as np

from walkpath.models import Coordinate
from .distance import great_circle_distance, great_circle_matrix, pedestrian_distance
from .models import RoutingConfig


@runtime_checkable
class RouteDistanceProvider(Protocol):
    """Synchronous leg-distance capability (km between two coordinates)."""

    def distance_km(self, a: Coordinate, b: Coordinate) -> float:
        ...


class GreatCircleRouteProvider:
    """Default provider: Haversine distance, optionally pedestrian-inflated."""

    def __init__(self, config: Optional[RoutingConfig] = None, pedestrian: bool = True):
        self.config = config or RoutingConfig()
        self.pedestrian = pedestrian

    @property
    def factor(self) -> float:
        return self.config.pedestrian_factor if self.pedestrian else 1.0

    def distance_km(self, a: Coordinate, b: Coordinate) -> float:
        if self.pedestrian:
            return pedestrian_distance(a, b, self.config)
        return great_circle_distance(a, b, self.config)

    def distance_matrix(self, coords: list[Coordinate]) -> np.ndarray:
        """Pairwise distances for all coordinates, shape (n, n)."""
        lats = np.array([c.latitude for c in coords], dtype=np.float64)
        lons = np.array([c.longitude for c in coords], dtype=np.float64)
        return great_circle_matrix(lats, lons, self.config.earth_radius_km) * self.factor


def distance_matrix(
    provider: RouteDistanceProvider, coords: list[Coordinate],
) -> np.ndarray:
    """Pairwise distance matrix, vectorised when the provider supports it."""
    if hasattr(provider, "distance_matrix"):
        return provider.distance_matrix(coords)
    n = len(coords)
    matrix = np.zeros((n, n))
    for i in range(n):
        for j in range(n):
            if i != j:
                matrix[i, j] = provider.distance_km(coords[i], coords[j])
    return matrix
