"""Candidate place tools: add_place, add_place_geometry, load_places_from_gpx, list_places, clear_places."""

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import ValidationError

from ..state import state
from ..core.geometry import place_coordinates
from ..core.gpx import parse_gpx_places
from ..errors import GeometryParseError
from ..models import Place, PointGeometry, Coordinate


def _store_place(place: Place) -> str:
    """Validate a place's geometry and add or replace it in the pool."""
    coord = place_coordinates(place)
    replaced = state.find_place(place.id) is not None
    state.places = [p for p in state.places if p.id != place.id] + [place]
    state.clear_path()
    verb = "Replaced" if replaced else "Added"
    return (
        f"{verb} place '{place.id}' at ({coord.latitude:.6f}, {coord.longitude:.6f}). "
        f"{len(state.places)} candidate(s) in pool."
    )


def register_place_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def add_place(place_id: str, latitude: float, longitude: float, name: str = "") -> str:
        """Add a candidate place by latitude/longitude.

        A place with the same id is replaced.
        **Next:** add more places, then set_constraints (optional), then generate_path.

        Args:
            place_id: Unique identifier of the place.
            latitude: Latitude in degrees (-90..90).
            longitude: Longitude in degrees (-180..180).
            name: Optional display name.
        """
        try:
            coord = Coordinate(latitude=latitude, longitude=longitude)
            place = Place(id=place_id, name=name, coordinates=PointGeometry.from_coordinate(coord))
        except ValidationError as e:
            return f"Error: {e.errors()[0]['msg']}"
        return _store_place(place)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def add_place_geometry(place_id: str, geometry: str | dict, name: str = "") -> str:
        """Add a candidate place from a stored geometry value.

        Accepts WKT ``"POINT(<lon> <lat>)"`` or ``{"type": "Point", "coordinates": [lon, lat]}``.
        Longitude comes first in both forms.

        Args:
            place_id: Unique identifier of the place.
            geometry: WKT point string or point object.
            name: Optional display name.
        """
        try:
            place = Place(id=place_id, name=name, coordinates=geometry)
            return _store_place(place)
        except (ValidationError, GeometryParseError) as e:
            return f"Error: {e}"

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def load_places_from_gpx(file_path: str, replace: bool = True) -> str:
        """Load GPX waypoints as candidate places.

        Waypoint names become place ids.
        **Next:** set_constraints (optional), then generate_path.

        Args:
            file_path: Absolute path to a .gpx file.
            replace: Replace the current pool (default) or append to it.
        """
        try:
            loaded = parse_gpx_places(file_path)
        except FileNotFoundError:
            return f"Error: GPX file not found: {file_path}"

        if not loaded:
            return "Error: GPX file has no waypoints."

        if replace:
            state.places = loaded
        else:
            ids = {p.id for p in loaded}
            state.places = [p for p in state.places if p.id not in ids] + loaded
        state.clear_path()
        return f"Loaded {len(loaded)} waypoint(s) from GPX. {len(state.places)} candidate(s) in pool."

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def list_places() -> str:
        """List the candidate places currently in the pool."""
        if not state.places:
            return "No candidate places. Use add_place or load_places_from_gpx."
        lines = [f"{len(state.places)} candidate place(s):"]
        for p in state.places:
            try:
                c = place_coordinates(p)
                lines.append(f"- {p.id} ({p.label}): {c.latitude:.6f}, {c.longitude:.6f}")
            except GeometryParseError as e:
                lines.append(f"- {p.id}: invalid geometry ({e})")
        return "\n".join(lines)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True))
    def clear_places() -> str:
        """Remove every candidate place and the generated path."""
        count = len(state.places)
        state.places = []
        state.clear_path()
        return f"Cleared {count} place(s)."
