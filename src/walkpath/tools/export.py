"""Export tools: export_gpx."""

import logging
import os
from pathlib import Path
from mcp.server.fastmcp import FastMCP

from ..state import state
from ..exporters.gpx import export_gpx as do_export_gpx
from ._prereqs import require_state

logger = logging.getLogger(__name__)


def _validate_output_path(output_path: str) -> None:
    """Raise ValueError if output_path resolves outside the user's home directory."""
    resolved = Path(output_path).resolve()
    home = Path.home().resolve()
    try:
        resolved.relative_to(home)
    except ValueError:
        raise ValueError(
            f"Output path {output_path!r} is outside the home directory. "
            "Use a path within your home directory."
        )


def register_export_tools(mcp: FastMCP):

    @mcp.tool()
    def export_gpx(output_path: str, name: str = "Walking path") -> str:
        """Export the generated path as a GPX route (one route point per stop).

        **Requires:** generate_path.

        Args:
            output_path: Where to save the .gpx file (absolute path)
            name: Route name written into the file.
        """
        try:
            require_state(state, path=True)
            _validate_output_path(output_path)
        except ValueError as e:
            return f"Error: {e}"

        os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
        try:
            result = do_export_gpx(state.path, state.places, output_path, name=name)
        except ValueError as e:
            return f"Error: {e}"
        logger.info("GPX exported to %s", output_path)
        return f"GPX exported to {output_path} ({result['points']} route points)"
