"""ux_search MCP tool: faceted similarity search."""

from typing import Annotated

from fastmcp import FastMCP
from fastmcp.server.context import Context
from pydantic import Field

from ux_kb.models.search import SearchFilters
from ux_kb.search.engine import SimilaritySearchEngine, complexity_levels_for
from ux_kb.tools.formatters import format_pattern_result, format_result_list, format_search_result


def register_ux_search(mcp: FastMCP) -> None:
    """Register the ux_search tool with the MCP server."""

    @mcp.tool()
    async def ux_search(
        query: Annotated[
            str, Field(description="Natural-language description of the design question")
        ],
        categories: Annotated[
            list[str] | None, Field(description="Only these categories (any of)")
        ] = None,
        industries: Annotated[
            list[str] | None, Field(description="Only entries tagged with any of these industries")
        ] = None,
        primary_category: Annotated[str | None, Field(description="Primary category")] = None,
        secondary_category: Annotated[str | None, Field(description="Secondary category")] = None,
        complexity_level: Annotated[
            str | None, Field(description="beginner, intermediate or advanced")
        ] = None,
        include_higher: Annotated[
            bool, Field(description="Also include levels above complexity_level")
        ] = False,
        competitor_patterns: Annotated[
            bool, Field(description="Search competitor patterns instead of research entries")
        ] = False,
        limit: Annotated[
            int, Field(description="Maximum results to return (1-50)", ge=1, le=50)
        ] = 10,
        threshold: Annotated[
            float, Field(description="Minimum cosine similarity (0-1)", ge=0.0, le=1.0)
        ] = 0.5,
        ctx: Context | None = None,
    ) -> str:
        """Search the UX research knowledge base by embedding similarity.

        Every supplied facet must match; values inside one list facet are
        alternatives. Returns an empty result (not an error) when the
        embedding provider or the store is unavailable.
        """
        if ctx is None:
            raise RuntimeError("Context not injected")
        engine: SimilaritySearchEngine = ctx.lifespan_context["engine"]

        if competitor_patterns:
            industry = industries[0] if industries else None
            patterns = await engine.search_patterns(
                query, industry, None, max_results=limit, threshold=threshold
            )
            return format_result_list([format_pattern_result(p) for p in patterns])

        filters = SearchFilters(
            max_results=limit,
            confidence_threshold=threshold,
            categories=categories or [],
            industries=industries or [],
            primary_category=primary_category,
            secondary_category=secondary_category,
            complexity_levels=(
                complexity_levels_for(complexity_level, include_higher) if complexity_level else []
            ),
        )
        results = await engine.search(query, filters)
        return format_result_list([format_search_result(r) for r in results])
