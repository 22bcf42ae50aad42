"""Prerequisite checking helpers for MCP tools."""


def require_state(state, *, places: bool = False, path: bool = False) -> None:
    """Raise ValueError with a descriptive message if required state is not set.

    Usage in a tool:
        try:
            require_state(state, places=True)
        except ValueError as e:
            return f"Error: {e}"
    """
    if places and not state.places:
        raise ValueError(
            "Add candidate places first with add_place or load_places_from_gpx."
        )
    if path and state.path is None:
        raise ValueError(
            "Generate a path first with generate_path."
        )
