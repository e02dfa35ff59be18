"""Compact output formatters for CLI and MCP tool responses."""

from ux_kb.models.rag import RAGContext, ResearchBackedAnalysis
from ux_kb.models.search import PatternResult, SearchResult


def format_search_result(result: SearchResult) -> str:
    """Format: [ux-00001] ux-patterns | Title (87%) plus a taxonomy line."""
    entry = result.entry
    lines = [f"[{entry.id}] {entry.category} | {entry.title} ({result.similarity:.0%})"]
    meta: list[str] = []
    if entry.primary_category:
        path = entry.primary_category
        if entry.secondary_category:
            path = f"{path}/{entry.secondary_category}"
        meta.append(path)
    if entry.complexity_level:
        meta.append(entry.complexity_level)
    if entry.industry_tags:
        meta.append(" ".join(f"#{t}" for t in entry.industry_tags))
    if meta:
        lines.append(f"  {' | '.join(meta)}")
    if entry.source:
        lines.append(f"  source: {entry.source}")
    return "\n".join(lines)


def format_pattern_result(result: PatternResult) -> str:
    """Format: [pat-00001] industry/type | Pattern name (81%)."""
    p = result.pattern
    kind = "/".join(x for x in (p.industry, p.pattern_type) if x) or "pattern"
    return f"[{p.id}] {kind} | {p.pattern_name} ({result.similarity:.0%})"


def format_result_list(entries: list[str], note: str | None = None) -> str:
    """Join formatted entries with blank lines, with an optional leading note."""
    if not entries:
        body = "No results found."
    else:
        body = "\n\n".join(entries)
    return f"{note}\n\n{body}" if note else body


def format_rag_context(context: RAGContext) -> str:
    """Summary header followed by the enhanced prompt."""
    meta = context.retrieval_metadata
    lines = [
        f"Entries: {context.total_relevant_entries}"
        f" | categories: {', '.join(context.categories) or '(none)'}"
        f" | industry: {meta.industry_context}"
        f" | {meta.queries_generated} sub-queries in {meta.processing_time_ms:.0f}ms",
    ]
    if meta.error:
        lines.append(f"Retrieval degraded: {meta.error}")
    lines += ["", context.enhanced_prompt]
    return "\n".join(lines)


def format_analysis(analysis: ResearchBackedAnalysis) -> str:
    """Numbered recommendations with their citations."""
    summary = analysis.research_summary
    lines = [
        f"Confidence: {summary.confidence_score:.0%}"
        f" | sources: {summary.total_sources_cited}"
        f" | categories: {', '.join(summary.primary_categories) or '(none)'}",
        analysis.methodology,
    ]
    for i, rec in enumerate(analysis.recommendations, start=1):
        lines += ["", f"{i}. [{rec.priority}] {rec.category} | {rec.recommendation}"]
        if rec.reasoning:
            lines.append(f"   why: {rec.reasoning}")
        for src in rec.supporting_research:
            lines.append(f"   - {src.title} ({src.relevance_score:.0%}, {src.source})")
        lines.append(f"   how: {rec.implementation_guidance}")
    if not analysis.recommendations:
        lines += ["", "No recommendations found in the analysis text."]
    return "\n".join(lines)
