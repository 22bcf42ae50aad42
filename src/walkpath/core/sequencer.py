"""Greedy nearest-neighbour ordering of candidate places.

This is a heuristic, not an exact shortest-path solver. It costs O(n^2)
distance evaluations, which is fine for the tens of candidates callers
pass in.
"""

import logging
from typing import Optional

from walkpath.models import Place
from .geometry import locate_places
from .routing import GreatCircleRouteProvider, RouteDistanceProvider, distance_matrix

logger = logging.getLogger(__name__)


def _find_index(places: list[Place], place_id: Optional[str]) -> Optional[int]:
    if place_id is None:
        return None
    for i, p in enumerate(places):
        if p.id == place_id:
            return i
    return None


def sequence_places(
    places: list[Place],
    start_id: Optional[str] = None,
    end_id: Optional[str] = None,
    provider: Optional[RouteDistanceProvider] = None,
) -> list[Place]:
    """Order places into a visiting sequence.

    The start anchor (if found) becomes stop 0. Each following stop is the
    remaining candidate nearest to the last placed one; ties go to the
    earliest candidate in the remaining pool. The end anchor (if found) is
    then moved to the last position. Returns a permutation of ``places``.
    """
    if len(places) <= 2:
        return list(places)

    provider = provider or GreatCircleRouteProvider()
    coords = locate_places(places)
    matrix = distance_matrix(provider, coords)

    pool = list(range(len(places)))
    order: list[int] = []

    start_idx = _find_index(places, start_id)
    if start_idx is not None:
        order.append(start_idx)
        pool.remove(start_idx)
    elif start_id is not None:
        logger.debug("Start place %s not among candidates; ignoring anchor", start_id)

    while pool:
        nearest = pool[0]
        if order:
            current = order[-1]
            best = float("inf")
            for idx in pool:
                d = matrix[current, idx]
                if d < best:
                    best = d
                    nearest = idx
        order.append(nearest)
        pool.remove(nearest)

    sequence = [places[i] for i in order]

    end_idx = _find_index(sequence, end_id)
    if end_idx is None:
        if end_id is not None:
            logger.debug("End place %s not among candidates; ignoring anchor", end_id)
    elif end_idx != len(sequence) - 1:
        sequence.append(sequence.pop(end_idx))

    logger.debug("Sequenced %d places: %s", len(sequence), [p.id for p in sequence])
    return sequence
