"""ux_build_context MCP tool: research-backed prompt assembly."""

from typing import Annotated

from fastmcp import FastMCP
from fastmcp.server.context import Context
from pydantic import Field

from ux_kb.rag.context_builder import RAGContextBuilder
from ux_kb.tools.formatters import format_rag_context


def register_ux_build_context(mcp: FastMCP) -> None:
    """Register the ux_build_context tool with the MCP server."""

    @mcp.tool()
    async def ux_build_context(
        query: Annotated[str, Field(description="The design feedback request")],
        max_results: Annotated[
            int, Field(description="Research entries to include", ge=1, le=50)
        ] = 8,
        similarity_threshold: Annotated[
            float, Field(description="Minimum cosine similarity (0-1)", ge=0.0, le=1.0)
        ] = 0.5,
        categories: Annotated[list[str] | None, Field(description="Restrict to categories")] = None,
        industries: Annotated[list[str] | None, Field(description="Restrict to industries")] = None,
        ctx: Context | None = None,
    ) -> str:
        """Build a research-enhanced prompt for a generative model.

        Always returns a usable prompt; when retrieval fails the standard
        analysis prompt is returned and the header says why.
        """
        if ctx is None:
            raise RuntimeError("Context not injected")
        builder: RAGContextBuilder = ctx.lifespan_context["builder"]
        context = await builder.build_rag_context(
            query,
            max_results=max_results,
            similarity_threshold=similarity_threshold,
            category_filter=categories,
            industry_filter=industries,
        )
        return format_rag_context(context)
