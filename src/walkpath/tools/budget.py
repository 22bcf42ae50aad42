"""Time budget tools: calculate_time_breakdown, plan_time_budget."""

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import state
from ..core.budget import max_distance, max_walking_time, optimal_place_count, time_breakdown
from ..errors import InsufficientBudgetError, InvalidSpeedError


def register_budget_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def calculate_time_breakdown(
        distance_km: float,
        place_count: int,
        walking_speed_kmh: float | None = None,
        per_place_minutes: float | None = None,
    ) -> str:
        """Estimate the total duration of a walk.

        Total = walking time (rounded up) + dwell time per place + safety buffer.

        Args:
            distance_km: Walking distance.
            place_count: Number of stops.
            walking_speed_kmh: Walking speed (default: plain pace, 5 km/h).
            per_place_minutes: Dwell time per stop (default 15).
        """
        speed = walking_speed_kmh if walking_speed_kmh is not None else state.config.plain_speed_kmh
        try:
            b = time_breakdown(distance_km, speed, place_count, per_place_minutes, state.config)
        except InvalidSpeedError as e:
            return f"Error: {e}"
        return (
            f"Walking {b.walking_time_minutes} min + places {b.dwell_time_minutes:g} min "
            f"+ buffer {b.buffer_minutes:g} min = {b.total_time_minutes:g} min"
        )

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def plan_time_budget(
        total_minutes: float,
        place_count: int,
        walking_speed_kmh: float | None = None,
        per_place_minutes: float | None = None,
    ) -> str:
        """Work out how far a time budget lets you walk.

        Reports the walking time left after dwell and buffer, the matching
        maximum distance, and how many stops fit if that whole distance is walked.
        **Next:** set_constraints with the resulting max_distance_km.

        Args:
            total_minutes: Total time budget.
            place_count: Number of stops planned.
            walking_speed_kmh: Walking speed (default: plain pace, 5 km/h).
            per_place_minutes: Dwell time per stop (default 15).
        """
        speed = walking_speed_kmh if walking_speed_kmh is not None else state.config.plain_speed_kmh
        try:
            walking = max_walking_time(total_minutes, place_count, per_place_minutes, state.config)
            distance = max_distance(walking, speed)
            places = optimal_place_count(total_minutes, distance, speed, per_place_minutes, state.config)
        except (InsufficientBudgetError, InvalidSpeedError) as e:
            return f"Error: {e}"
        return (
            f"Max walking time: {walking:g} min, max distance: {distance:.2f} km "
            f"at {speed:g} km/h, stops that fit at that distance: {places}"
        )
