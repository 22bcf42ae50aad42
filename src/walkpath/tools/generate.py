"""Generation tools: generate_path, route_path."""

import logging

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import state
from ..core.generator import generate_path as do_generate_path, route_generated_path
from ..core.models import GeneratedPath
from ..core.osrm import DEFAULT_OSRM_URL, OsrmRouteProvider
from ..errors import (
    GeometryParseError, InsufficientBudgetError, InsufficientCandidatesError,
    InvalidSpeedError, RoutingServiceError,
)
from ._prereqs import require_state

logger = logging.getLogger(__name__)


def _describe(path: GeneratedPath) -> str:
    lines = [
        f"Path: {len(path.stops)} stop(s), {path.total_distance_km:.2f} km, "
        f"{path.total_time_minutes:g} min"
    ]
    for s in path.stops:
        lines.append(
            f"{s.order}. {s.place_id} (+{s.distance_from_previous:.2f} km, "
            f"+{s.travel_time_from_previous} min walk, {s.dwell_time_minutes:g} min stay)"
        )
    return "\n".join(lines)


def register_generate_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def generate_path() -> str:
        """Generate an ordered walking path from the candidate pool.

        Orders places nearest-first between the start/end anchors and drops
        interior stops until the budget fits. If even start+end exceeds the
        budget, that two-stop path is returned as a best effort.
        **Requires:** add_place or load_places_from_gpx.
        **Next:** route_path (optional), then export_gpx.
        """
        try:
            require_state(state, places=True)
        except ValueError as e:
            return f"Error: {e}"

        try:
            path = do_generate_path(state.places, state.constraints, state.config)
        except (
            GeometryParseError, InvalidSpeedError,
            InsufficientBudgetError, InsufficientCandidatesError,
        ) as e:
            return f"Error: {e}"

        state.path = path
        return _describe(path)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False, openWorldHint=True))
    async def route_path(osrm_url: str = DEFAULT_OSRM_URL, profile: str = "foot") -> str:
        """Refine the generated path with real pedestrian routes from OSRM.

        Replaces estimated segment distances with routed leg distances and
        attaches the route geometry.
        **Requires:** generate_path.
        **Next:** export_gpx.

        Args:
            osrm_url: Base URL of the OSRM server.
            profile: OSRM routing profile (default 'foot').
        """
        try:
            require_state(state, path=True)
        except ValueError as e:
            return f"Error: {e}"

        provider = OsrmRouteProvider(base_url=osrm_url, profile=profile)
        try:
            routed = await route_generated_path(
                state.path, state.places, provider,
                speed_kmh=state.constraints.walking_speed_kmh, config=state.config,
            )
        except (RoutingServiceError, ValueError) as e:
            logger.warning("route_path failed: %s", e)
            return f"Error: {e}"

        state.path = routed
        return _describe(routed)
