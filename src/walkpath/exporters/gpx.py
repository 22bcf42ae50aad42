"""GPX route export for generated paths."""

import gpxpy
import gpxpy.gpx

from ..core.geometry import place_coordinates
from ..core.models import GeneratedPath
from ..models import Place


def path_to_gpx(path: GeneratedPath, places: list[Place], name: str = "Walking path") -> str:
    """Render a generated path as a GPX document with one route point per stop."""
    by_id = {p.id: p for p in places}
    gpx = gpxpy.gpx.GPX()
    route = gpxpy.gpx.GPXRoute(name=name)
    for stop in path.stops:
        place = by_id.get(stop.place_id)
        if place is None:
            raise ValueError(f"No place found for stop {stop.order} ({stop.place_id})")
        coord = place_coordinates(place)
        point = gpxpy.gpx.GPXRoutePoint(
            latitude=coord.latitude, longitude=coord.longitude, name=place.label,
        )
        point.comment = (
            f"stop {stop.order}: {stop.dwell_time_minutes:g} min, "
            f"{stop.distance_from_previous:.2f} km from previous"
        )
        route.points.append(point)
    gpx.routes.append(route)
    return gpx.to_xml()


def export_gpx(
    path: GeneratedPath, places: list[Place], output_path: str, name: str = "Walking path",
) -> dict:
    """Write the path as a GPX file."""
    xml = path_to_gpx(path, places, name)
    with open(output_path, "w") as f:
        f.write(xml)
    return {"points": len(path.stops), "path": output_path}
