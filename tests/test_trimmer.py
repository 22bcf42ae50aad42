"""Tests for budget-driven trimming of a sequence."""
import pytest

from walkpath.models import Place


def _place(pid: str, lat: float, lon: float) -> Place:
    return Place(id=pid, coordinates=f"POINT({lon} {lat})")


def _ids(places):
    return [p.id for p in places]


def test_within_budget_returned_as_is():
    from walkpath.core.trimmer import trim_to_budget
    seq = [_place(f"p{i}", 0, i * 0.001) for i in range(5)]
    result = trim_to_budget(seq, dwell_minutes=10, max_distance_km=100.0)
    assert _ids(result.sequence) == _ids(seq)
    assert result.satisfied
    assert result.removed_place_ids == []


def test_no_constraints_returned_as_is():
    from walkpath.core.trimmer import trim_to_budget
    seq = [_place(f"p{i}", 0, i) for i in range(4)]
    result = trim_to_budget(seq, dwell_minutes=10)
    assert _ids(result.sequence) == _ids(seq)
    assert result.satisfied


def test_fewer_than_three_stops_not_trimmed():
    from walkpath.core.trimmer import trim_to_budget
    seq = [_place("a", 0, 0), _place("b", 0, 5)]
    result = trim_to_budget(seq, dwell_minutes=10, max_distance_km=1.0)
    assert _ids(result.sequence) == ["a", "b"]
    assert not result.satisfied
    assert result.removed_place_ids == []


def test_removes_stop_before_last_first():
    from walkpath.core.trimmer import trim_to_budget
    seq = [
        _place("first", 0, 0),
        _place("near", 0, 0.1),
        _place("detour", 1, 0),
        _place("back", 0, 0.2),
        _place("last", 0, 0.3),
    ]
    result = trim_to_budget(seq, dwell_minutes=0, max_distance_km=50.0)
    assert result.removed_place_ids == ["back", "detour"]
    assert _ids(result.sequence) == ["first", "near", "last"]
    assert result.metrics.total_distance_km <= 50.0
    assert result.satisfied


def test_unsatisfiable_distance_floors_at_start_and_end():
    from walkpath.core.trimmer import trim_to_budget
    seq = [_place(f"p{i}", 0, i) for i in range(5)]
    result = trim_to_budget(seq, dwell_minutes=15, max_distance_km=300.0)
    assert _ids(result.sequence) == ["p0", "p4"]
    assert result.removed_place_ids == ["p3", "p2", "p1"]
    assert not result.satisfied
    assert result.metrics.total_distance_km > 300.0


def test_five_stop_scenario_keeps_endpoints():
    from walkpath.core.trimmer import trim_to_budget
    coords = [(0.0, 0.0), (0.2, 0.3), (0.5, -0.1), (0.9, 0.4), (1.0, 1.0)]
    seq = [_place(f"s{i}", lat, lon) for i, (lat, lon) in enumerate(coords)]
    for budget in (50.0, 150.0, 200.0, 260.0):
        result = trim_to_budget(seq, dwell_minutes=15, max_distance_km=budget)
        assert result.sequence[0].id == "s0"
        assert result.sequence[-1].id == "s4"
        assert len(result.sequence) <= 5
        assert result.metrics.total_distance_km <= budget or len(result.sequence) == 2


def test_duration_budget():
    from walkpath.core.trimmer import trim_to_budget
    lons = [0.0, 0.001, 0.002, 0.003, 0.004]
    seq = [_place(f"p{i}", 0, lon) for i, lon in enumerate(lons)]
    result = trim_to_budget(seq, dwell_minutes=20, max_duration_minutes=70)
    assert _ids(result.sequence) == ["p0", "p1", "p4"]
    assert result.metrics.total_time_minutes <= 70
    assert result.satisfied


def test_both_constraints_must_hold():
    from walkpath.core.trimmer import trim_to_budget
    lons = [0.0, 0.001, 0.002, 0.003, 0.004]
    seq = [_place(f"p{i}", 0, lon) for i, lon in enumerate(lons)]
    # Distance already fits; only the duration forces trimming.
    result = trim_to_budget(seq, dwell_minutes=20, max_duration_minutes=70, max_distance_km=10.0)
    assert _ids(result.sequence) == ["p0", "p1", "p4"]


def test_input_sequence_not_mutated():
    from walkpath.core.trimmer import trim_to_budget
    seq = [_place(f"p{i}", 0, i) for i in range(5)]
    trim_to_budget(seq, dwell_minutes=15, max_distance_km=1.0)
    assert len(seq) == 5


def test_metrics_match_returned_sequence():
    from walkpath.core.metrics import aggregate
    from walkpath.core.trimmer import trim_to_budget
    seq = [_place(f"p{i}", 0, i * 0.01) for i in range(6)]
    result = trim_to_budget(seq, dwell_minutes=30, max_duration_minutes=100)
    expected = aggregate(result.sequence, {p.id: 30 for p in result.sequence})
    assert result.metrics.total_distance_km == pytest.approx(expected.total_distance_km)
    assert result.metrics.total_time_minutes == expected.total_time_minutes
