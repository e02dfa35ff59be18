"""ux_recommendations MCP tool: cite research for generated analysis text."""

from typing import Annotated

from fastmcp import FastMCP
from fastmcp.server.context import Context
from pydantic import Field

from ux_kb.rag.context_builder import RAGContextBuilder
from ux_kb.rag.recommendations import format_research_backed_recommendations
from ux_kb.tools.formatters import format_analysis


def register_ux_recommendations(mcp: FastMCP) -> None:
    """Register the ux_recommendations tool with the MCP server."""

    @mcp.tool()
    async def ux_recommendations(
        query: Annotated[str, Field(description="The original design feedback request")],
        analysis_text: Annotated[
            str,
            Field(description="Model output with one bulleted or numbered recommendation per line"),
        ],
        similarity_threshold: Annotated[
            float, Field(description="Minimum cosine similarity (0-1)", ge=0.0, le=1.0)
        ] = 0.5,
        ctx: Context | None = None,
    ) -> str:
        """Turn analysis text into categorized, prioritized, research-backed recommendations."""
        if ctx is None:
            raise RuntimeError("Context not injected")
        builder: RAGContextBuilder = ctx.lifespan_context["builder"]
        context = await builder.build_rag_context(query, similarity_threshold=similarity_threshold)
        return format_analysis(format_research_backed_recommendations(analysis_text, context))
