"""FastMCP server with lifespan management and tool registration."""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP

from ux_kb.config import get_db_path, get_embedding_provider, get_log_level
from ux_kb.services import create_services
from ux_kb.tools.ux_build_context import register_ux_build_context
from ux_kb.tools.ux_recommendations import register_ux_recommendations
from ux_kb.tools.ux_search import register_ux_search
from ux_kb.tools.ux_verify import register_ux_verify


def configure_logging() -> None:
    """Send log records to stderr (stdout is the MCP stdio transport)."""
    logging.basicConfig(
        level=getattr(logging, get_log_level(), logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """Manage database connection and embedding client lifecycle."""
    configure_logging()
    logger = logging.getLogger(__name__)

    logger.info("Opening database at %s", get_db_path())
    services = await create_services()
    logger.info("Embedding provider: %s", get_embedding_provider())

    try:
        yield {
            "services": services,
            "store": services.store,
            "engine": services.engine,
            "builder": services.builder,
        }
    finally:
        await services.close()
        logger.info("Database connection closed")


_INSTRUCTIONS = """\
This server holds a curated knowledge base of UX research: usability \
principles, accessibility standards, conversion benchmarks and competitor \
design patterns, searchable by meaning.

- ux_search: Find research entries (or competitor patterns) similar to a \
question. Narrow with categories, industries, the category hierarchy or a \
complexity level.
- ux_build_context: Turn a design feedback request into a research-backed \
prompt for a generative model. Always returns a usable prompt.
- ux_recommendations: Given the model's analysis text, return categorized, \
prioritized recommendations with supporting research citations.
- ux_verify: Check that the knowledge base is populated and embedded.
"""


def create_server() -> FastMCP:
    """Create and configure the MCP server with all tools."""
    mcp = FastMCP(
        "ux-kb",
        instructions=_INSTRUCTIONS,
        lifespan=lifespan,
    )

    register_ux_search(mcp)
    register_ux_build_context(mcp)
    register_ux_recommendations(mcp)
    register_ux_verify(mcp)

    return mcp
