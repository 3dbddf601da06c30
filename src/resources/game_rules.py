# src/resources/game_rules.py

from pathlib import Path
from mcp.server.fastmcp import FastMCP


BASE_DIR = Path(__file__).parent


def register_resources(mcp: FastMCP) -> None:
    """
    Register timeline game rule resources for the MCP server.
    """

    @mcp.resource(
        "timeline://rules/placement",
        mime_type="text/markdown",
        description="How placements, slot difficulty and slot relevance are decided"
    )
    def placement_rules() -> str:
        path = BASE_DIR / "placement_rules.md"
        return path.read_text(encoding="utf-8")
