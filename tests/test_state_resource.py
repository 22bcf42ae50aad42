"""Tests for state://session MCP resource."""
import json
import pytest


@pytest.mark.anyio
async def test_state_resource_registered():
    """state://session resource should be listed by the server."""
    from walkpath.server import mcp

    resources = {str(r.uri) for r in await mcp.list_resources()}
    assert "state://session" in resources, (
        f"state://session not registered. Registered: {resources}"
    )


@pytest.mark.anyio
async def test_state_resource_content_matches_summary():
    """Resource content should return valid JSON with expected keys."""
    from walkpath.server import mcp
    from walkpath.state import state

    contents = list(await mcp.read_resource("state://session"))
    assert len(contents) == 1
    parsed = json.loads(contents[0].content)
    expected = state.summary()
    assert parsed.keys() == expected.keys()
    assert parsed["places"]["count"] == len(state.places)
