"""Candidate places from GPX waypoints."""

import gpxpy
from walkpath.models import Coordinate, Place, PointGeometry


def parse_gpx_places(filepath: str) -> list[Place]:
    """Read GPX waypoints as candidate places.

    Waypoint names become place ids; unnamed waypoints get ``wpt-<n>``.
    Later duplicates of a name get a ``-<n>`` suffix so ids stay unique.
    """
    with open(filepath, "r") as f:
        gpx = gpxpy.parse(f)

    places = []
    seen: set[str] = set()
    for i, wp in enumerate(gpx.waypoints, 1):
        base_id = (wp.name or "").strip() or f"wpt-{i}"
        place_id = base_id
        n = 2
        while place_id in seen:
            place_id = f"{base_id}-{n}"
            n += 1
        seen.add(place_id)

        coord = Coordinate(latitude=wp.latitude, longitude=wp.longitude)
        places.append(Place(
            id=place_id,
            name=wp.description or wp.name or "",
            coordinates=PointGeometry.from_coordinate(coord),
        ))
    return places
