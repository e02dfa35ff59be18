"""ux_verify MCP tool: knowledge base health report."""

from fastmcp import FastMCP
from fastmcp.server.context import Context

from ux_kb.diagnostics.verify import format_report, verify_knowledge_base


def register_ux_verify(mcp: FastMCP) -> None:
    """Register the ux_verify tool with the MCP server."""

    @mcp.tool()
    async def ux_verify(ctx: Context | None = None) -> str:
        """Report entry counts, category breakdown and embedding coverage."""
        if ctx is None:
            raise RuntimeError("Context not injected")
        report = await verify_knowledge_base(ctx.lifespan_context["store"])
        return format_report(report)
