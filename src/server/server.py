"""Server bootstrap for the Timeline MCP service.

Creates the FastMCP instance, builds the shared cache and back end client,
wires them into the tools, registers resources and prompts, and starts the
MCP server (stdio transport).
"""

import logging
import sys
from contextlib import asynccontextmanager

from mcp.server.fastmcp import FastMCP

from clients.timeline_api import TimelineApiClient
from config import (
    CACHE_CLEANUP_INTERVAL,
    CACHE_DEFAULT_TTL,
    CACHE_MAX_SIZE,
    HTTP_TIMEOUT,
    HTTP_VERIFY,
    LOG_LEVEL,
    RUNTIME_ENV,
    TIMELINE_API_BASE_URL,
)
from core.cache import TTLCache
from core.cleanup import PeriodicCleanup
from leaderboards.cache import LeaderboardCache
from leaderboards.service import LeaderboardService

from tools.events import register as register_events
from tools.leaderboards import register as register_leaderboards
from tools.placement import register as register_placement

from resources.game_rules import register_resources
from prompts.timeline_prompt import register_prompts

logger = logging.getLogger(__name__)

# One cache per process, shared by every tool through DI
cache = TTLCache(ttl_seconds=CACHE_DEFAULT_TTL, maxsize=CACHE_MAX_SIZE)
cleanup = PeriodicCleanup(cache, interval_seconds=CACHE_CLEANUP_INTERVAL)


@asynccontextmanager
async def lifespan(_server):
    # Background sweeps only run in production
    if RUNTIME_ENV == "production":
        cleanup.start()
    try:
        yield {}
    finally:
        await cleanup.stop()


mcp = FastMCP("timeline-mcp", lifespan=lifespan)


def register_tools() -> None:
    api_client = TimelineApiClient(base_url=TIMELINE_API_BASE_URL, timeout=HTTP_TIMEOUT, verify=HTTP_VERIFY)
    leaderboard_service = LeaderboardService(backend=api_client, cache=LeaderboardCache(cache))

    register_placement(mcp)
    register_events(mcp, api_client=api_client)
    register_leaderboards(mcp, leaderboard_service=leaderboard_service)


def register_all() -> None:
    register_tools()
    register_resources(mcp)
    register_prompts(mcp)


register_all()


def main() -> None:
    # stdout carries the stdio transport, so logs go to stderr
    logging.basicConfig(
        level=LOG_LEVEL,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting timeline-mcp (env=%s, api=%s)", RUNTIME_ENV, TIMELINE_API_BASE_URL)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
