"""Point geometry parsing: WKT and GeoJSON-style points to lat/lon."""

import math
import re

from pydantic import ValidationError

from walkpath.errors import GeometryParseError
from walkpath.models import Coordinate, Place, PointGeometry

# PostGIS WKT/EWKT form: "[SRID=<n>;]POINT(<lon> <lat>)"
_WKT_POINT = re.compile(
    r"^\s*(?:SRID=\d+\s*;\s*)?POINT\s*\(\s*([-+]?\d*\.?\d+(?:[eE][-+]?\d+)?)\s+([-+]?\d*\.?\d+(?:[eE][-+]?\d+)?)\s*\)\s*$",
    re.IGNORECASE,
)


def _to_coordinate(lon: object, lat: object, place_id: str, geometry: object) -> Coordinate:
    if isinstance(lon, bool) or isinstance(lat, bool):
        raise GeometryParseError(place_id, geometry, "coordinates must be numeric")
    try:
        lon_f = float(lon)
        lat_f = float(lat)
    except (TypeError, ValueError):
        raise GeometryParseError(place_id, geometry, "coordinates must be numeric")
    if not (math.isfinite(lon_f) and math.isfinite(lat_f)):
        raise GeometryParseError(place_id, geometry, "coordinates must be finite")
    try:
        return Coordinate(latitude=lat_f, longitude=lon_f)
    except ValidationError:
        raise GeometryParseError(place_id, geometry, "coordinates out of range")


def extract_coordinates(geometry: object, place_id: str) -> Coordinate:
    """Parse a point geometry into a Coordinate.

    Accepts a WKT string ``"POINT(<lon> <lat>)"``, a point object
    ``{"type": "Point", "coordinates": [lon, lat]}`` or a PointGeometry.
    Raises GeometryParseError naming ``place_id`` for anything else.
    """
    if isinstance(geometry, PointGeometry):
        lon, lat = geometry.coordinates
        return _to_coordinate(lon, lat, place_id, geometry)

    if isinstance(geometry, dict):
        coords = geometry.get("coordinates")
        if geometry.get("type") != "Point":
            raise GeometryParseError(place_id, geometry, "type must be 'Point'")
        if not isinstance(coords, (list, tuple)) or len(coords) != 2:
            raise GeometryParseError(place_id, geometry, "expected [lon, lat]")
        return _to_coordinate(coords[0], coords[1], place_id, geometry)

    if isinstance(geometry, str):
        match = _WKT_POINT.match(geometry)
        if not match:
            raise GeometryParseError(place_id, geometry, "not a WKT POINT")
        return _to_coordinate(match.group(1), match.group(2), place_id, geometry)

    raise GeometryParseError(place_id, geometry, f"unsupported type {type(geometry).__name__}")


def place_coordinates(place: Place) -> Coordinate:
    """Coordinates of a candidate place."""
    return extract_coordinates(place.coordinates, place.id)


def locate_places(places: list[Place]) -> list[Coordinate]:
    """Extract coordinates for every place, in order. Fails on the first bad geometry."""
    return [place_coordinates(p) for p in places]
