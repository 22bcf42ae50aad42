"""Great-circle and pedestrian distance, and walking travel time."""

import math
from typing import Optional

import numpy as np

from walkpath.errors import InvalidSpeedError
from walkpath.models import Coordinate
from .models import RoutingConfig

_DEFAULT_CONFIG = RoutingConfig()


def great_circle_distance(
    a: Coordinate, b: Coordinate, config: Optional[RoutingConfig] = None,
) -> float:
    """Haversine distance in kilometres."""
    radius = (config or _DEFAULT_CONFIG).earth_radius_km
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    d_phi = math.radians(b.latitude - a.latitude)
    d_lam = math.radians(b.longitude - a.longitude)
    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lam / 2) ** 2
    return 2 * radius * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def pedestrian_distance(
    a: Coordinate, b: Coordinate, config: Optional[RoutingConfig] = None,
) -> float:
    """Straight-line distance inflated to approximate a walking route (km).

    The factor is a fixed approximation, not derived from a street graph.
    """
    config = config or _DEFAULT_CONFIG
    return great_circle_distance(a, b, config) * config.pedestrian_factor


def great_circle_matrix(
    lats: np.ndarray, lons: np.ndarray, radius_km: float = 6371.0,
) -> np.ndarray:
    """Pairwise Haversine distances (km) for arrays of lat/lon in degrees."""
    phi = np.radians(np.asarray(lats, dtype=np.float64))
    lam = np.radians(np.asarray(lons, dtype=np.float64))
    d_phi = phi[:, None] - phi[None, :]
    d_lam = lam[:, None] - lam[None, :]
    h = np.sin(d_phi / 2) ** 2 + np.cos(phi)[:, None] * np.cos(phi)[None, :] * np.sin(d_lam / 2) ** 2
    h = np.clip(h, 0.0, 1.0)
    return 2 * radius_km * np.arctan2(np.sqrt(h), np.sqrt(1 - h))


def travel_time(distance_km: float, speed_kmh: float) -> int:
    """Walking time in whole minutes, rounded up."""
    if speed_kmh <= 0:
        raise InvalidSpeedError(speed_kmh)
    return math.ceil(distance_km / speed_kmh * 60)
