"""Configuration tools: set_constraints, set_routing_config."""

from mcp.server.fastmcp import FastMCP
from pydantic import ValidationError

from ..state import state
from ..core.models import GenerationConstraints


def register_constraint_tools(mcp: FastMCP):

    @mcp.tool()
    def set_constraints(
        start_place_id: str | None = None,
        end_place_id: str | None = None,
        max_duration_minutes: float | None = None,
        max_distance_km: float | None = None,
        walking_speed_kmh: float | None = None,
        dwell_minutes_per_place: float | None = None,
        max_places: int | None = None,
        start_latitude: float | None = None,
        start_longitude: float | None = None,
        is_circular: bool | None = None,
        reset: bool = False,
    ) -> str:
        """Set anchors and budget for the next generate_path call.

        Omitted arguments keep their current value; pass reset=True to clear
        everything first.
        **Next:** generate_path.

        Args:
            start_place_id: Place pinned as the first stop.
            end_place_id: Place pinned as the last stop.
            max_duration_minutes: Total time budget (walking + dwell).
            max_distance_km: Total walking distance budget.
            walking_speed_kmh: Walking speed (default: sightseeing pace, 4 km/h).
            dwell_minutes_per_place: Time spent at each stop (default 15).
            max_places: Preselect at most this many places before ordering.
            start_latitude: Latitude of a free start point; the nearest place leads.
            start_longitude: Longitude of the free start point.
            is_circular: Return to the first stop at the end (ignores end_place_id).
            reset: Clear all constraints before applying the others.
        """
        if reset:
            state.constraints = GenerationConstraints()
        c = state.constraints
        for name, value in [
            ("start_place_id", start_place_id), ("end_place_id", end_place_id),
            ("max_duration_minutes", max_duration_minutes),
            ("max_distance_km", max_distance_km),
            ("walking_speed_kmh", walking_speed_kmh),
            ("dwell_minutes_per_place", dwell_minutes_per_place),
            ("max_places", max_places),
            ("start_latitude", start_latitude),
            ("start_longitude", start_longitude),
            ("is_circular", is_circular),
        ]:
            if value is not None:
                try:
                    setattr(c, name, value)
                except ValidationError as e:
                    return f"Error: {name}: {e.errors()[0]['msg']}"

        state.clear_path()
        set_values = c.model_dump(exclude_defaults=True)
        return f"Constraints: {set_values or 'none'}"

    @mcp.tool()
    def set_routing_config(
        pedestrian_factor: float | None = None,
        plain_speed_kmh: float | None = None,
        sightseeing_speed_kmh: float | None = None,
        default_dwell_minutes: float | None = None,
        buffer_minutes: float | None = None,
        max_place_count: int | None = None,
    ) -> str:
        """Override routing constants used by distance and budget arithmetic.

        Args:
            pedestrian_factor: Straight-line to walking-route multiplier (default 1.15).
            plain_speed_kmh: Generic walking speed (default 5).
            sightseeing_speed_kmh: Slower sightseeing pace (default 4).
            default_dwell_minutes: Dwell time per stop when none is given (default 15).
            buffer_minutes: Safety buffer added to time budgets (default 15).
            max_place_count: Upper bound for recommended stop counts (default 20).
        """
        cfg = state.config
        for name, value in [
            ("pedestrian_factor", pedestrian_factor),
            ("plain_speed_kmh", plain_speed_kmh),
            ("sightseeing_speed_kmh", sightseeing_speed_kmh),
            ("default_dwell_minutes", default_dwell_minutes),
            ("buffer_minutes", buffer_minutes),
            ("max_place_count", max_place_count),
        ]:
            if value is not None:
                try:
                    setattr(cfg, name, value)
                except ValidationError as e:
                    return f"Error: {name}: {e.errors()[0]['msg']}"

        state.clear_path()
        return f"Routing config: {cfg.model_dump()}"
