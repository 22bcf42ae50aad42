"""Session persistence tools: save_session, load_session."""

import json
import logging
from pathlib import Path

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import ValidationError

from ..state import state
from ..core.models import GenerationConstraints, RoutingConfig
from ..models import Place

logger = logging.getLogger(__name__)


def _default_path() -> Path:
    return Path.home() / ".cache" / "walkpath" / "session.json"


def register_session_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True))
    def save_session(path: str | None = None) -> str:
        """Save the current session to a JSON file for later resumption.

        Saves candidate places, constraints and routing config.
        Does NOT save the generated path (re-run generate_path after loading).

        Args:
            path: Where to save. Default: ~/.cache/walkpath/session.json
        """
        save_path = Path(path) if path else _default_path()
        save_path.parent.mkdir(parents=True, exist_ok=True)

        data: dict = {
            "places": [p.model_dump(mode="json") for p in state.places],
            "constraints": state.constraints.model_dump(),
            "config": state.config.model_dump(),
        }

        with open(save_path, "w") as f:
            json.dump(data, f, indent=2)

        logger.info("Session saved to %s", save_path)
        return f"Session saved to {save_path}"

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def load_session(path: str | None = None) -> str:
        """Load a previously saved session from a JSON file.

        Restores candidate places, constraints and routing config, and
        clears any generated path.
        **Next:** generate_path.

        Args:
            path: Path to load from. Default: ~/.cache/walkpath/session.json
        """
        load_path = Path(path) if path else _default_path()

        if not load_path.exists():
            return f"Error: Session file not found at {load_path}"

        try:
            with open(load_path) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            return f"Error: Invalid session file: {e}"

        try:
            places = [Place(**p) for p in data.get("places", [])]
            constraints = GenerationConstraints(**(data.get("constraints") or {}))
            config = RoutingConfig(**(data.get("config") or {}))
        except ValidationError as e:
            return f"Error: Invalid session file: {e}"

        state.places = places
        state.constraints = constraints
        state.config = config
        state.clear_path()

        return (
            f"Session restored from {load_path}. "
            f"Restored: {len(places)} place(s), constraints, config. "
            "Still needed: generate_path."
        )
