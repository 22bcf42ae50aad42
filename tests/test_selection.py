"""Tests for budget-driven candidate preselection."""
import pytest

from walkpath.models import Coordinate, Place


def _place(pid: str, lat: float, lon: float) -> Place:
    return Place(id=pid, coordinates=f"POINT({lon} {lat})")


def _ids(places):
    return [p.id for p in places]


# 0.01 deg of longitude on the equator is ~1.11 km
A = _place("A", 0, 0)
B = _place("B", 0, 0.01)
C = _place("C", 0, 0.02)
FAR = _place("F", 0, 5)
POOL = [FAR, C, A, B]


def _select(**kwargs):
    from walkpath.core.selection import select_candidates
    params = dict(
        max_places=10, max_distance_km=100.0, total_time_minutes=1000, speed_kmh=5.0,
    )
    params.update(kwargs)
    return select_candidates(POOL, **params)


def test_greedy_from_start_place():
    assert _ids(_select(start_place_id="A", max_places=3)) == ["A", "B", "C"]


def test_max_places_caps_selection():
    assert _ids(_select(start_place_id="A", max_places=2)) == ["A", "B"]


def test_stops_at_distance_limit():
    assert _ids(_select(start_place_id="A", max_distance_km=1.5)) == ["A", "B"]


def test_stops_at_time_limit():
    # A->B: 14 min walking + 2 x 15 dwell + 15 buffer = 59
    assert _ids(_select(start_place_id="A", total_time_minutes=60)) == ["A", "B"]


def test_start_coordinate_without_start_place():
    result = _select(start=Coordinate(latitude=0, longitude=0.021), max_places=3)
    assert _ids(result) == ["C", "B", "A"]


def test_missing_start_raises():
    with pytest.raises(ValueError, match="Start point must be specified"):
        _select()


def test_end_place_appended_when_not_reached():
    result = _select(start_place_id="A", end_place_id="F", max_distance_km=1.5)
    assert _ids(result) == ["A", "B", "F"]


def test_end_place_not_duplicated():
    result = _select(start_place_id="A", end_place_id="B", max_places=3)
    assert _ids(result) == ["A", "B", "C"]


def test_too_few_candidates_raises():
    from walkpath.errors import InsufficientCandidatesError
    with pytest.raises(InsufficientCandidatesError):
        _select(start_place_id="A", max_distance_km=0.5)


def test_input_not_mutated():
    before = _ids(POOL)
    _select(start_place_id="A")
    assert _ids(POOL) == before
