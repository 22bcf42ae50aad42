"""MCP server for walkpath.

Registers all tools and runs via stdio transport.
"""

from mcp.server.fastmcp import FastMCP

from .tools.places import register_place_tools
from .tools.constraints import register_constraint_tools
from .tools.budget import register_budget_tools
from .tools.generate import register_generate_tools
from .tools.export import register_export_tools
from .tools.session import register_session_tools
from .tools.status import register_status_tools

mcp = FastMCP(
    "walkpath",
    instructions="Plan walking paths through points of interest within a time and distance budget",
)

# Register all tool groups
register_place_tools(mcp)
register_constraint_tools(mcp)
register_budget_tools(mcp)
register_generate_tools(mcp)
register_export_tools(mcp)
register_session_tools(mcp)
register_status_tools(mcp)


def main():
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
