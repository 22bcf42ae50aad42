"""Tests for session state."""
import pytest


def _place(pid, lon=0.0, lat=0.0):
    from walkpath.models import Place
    return Place(id=pid, coordinates=f"POINT({lon} {lat})")


class TestSessionState:
    def test_defaults(self):
        from walkpath.state import SessionState
        s = SessionState()
        assert s.places == []
        assert s.path is None
        assert s.constraints.has_budget is False
        assert s.config.sightseeing_speed_kmh == 4.0

    def test_find_place(self):
        from walkpath.state import SessionState
        s = SessionState(places=[_place("a"), _place("b")])
        assert s.find_place("b").id == "b"
        assert s.find_place("zzz") is None

    def test_instances_do_not_share_lists(self):
        from walkpath.state import SessionState
        s1 = SessionState()
        s2 = SessionState()
        s1.places.append(_place("a"))
        assert s2.places == []

    def test_clear_path(self):
        from walkpath.state import SessionState
        from walkpath.core.models import GeneratedPath
        s = SessionState(path=GeneratedPath())
        s.clear_path()
        assert s.path is None


class TestSummary:
    def test_summary_without_path(self):
        from walkpath.state import SessionState
        summary = SessionState(places=[_place("a")]).summary()
        assert summary["places"] == {"count": 1, "ids": ["a"]}
        assert summary["path"] == {"generated": False}
        assert summary["constraints"]["start_place_id"] is None
        assert summary["config"]["buffer_minutes"] == 15.0

    def test_summary_with_path(self):
        from walkpath.state import SessionState
        from walkpath.core.generator import generate_path
        places = [_place("a", 0, 0), _place("b", 0.01, 0)]
        s = SessionState(places=places)
        s.path = generate_path(places)
        summary = s.summary()
        assert summary["path"]["generated"] is True
        assert summary["path"]["stops"] == ["a", "b"]
        assert summary["path"]["total_distance_km"] == pytest.approx(1.279, abs=0.001)
