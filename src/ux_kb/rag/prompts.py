"""Prompt templates for research-backed analysis."""

from ux_kb.models.search import SearchResult

DEFAULT_SOURCE = "UX Research Database"
EXCERPT_CHARS = 200

ANALYSIS_REQUIREMENTS = (
    "Reference specific research findings in your recommendations",
    'Include phrases like "Research shows...", "Studies indicate...", '
    '"According to UX research..."',
    "Cite sources when making claims (e.g., \"Nielsen's usability heuristics suggest...\")",
    "Prioritize recommendations based on research-backed evidence",
    "Provide specific statistics or findings when available",
    "Connect recommendations to established UX principles",
)

FALLBACK_CHECKLIST = (
    "Provide specific, actionable feedback for each issue",
    "Cite established design principles and usability heuristics",
    "Check accessibility against WCAG guidelines",
    "Note conversion optimization considerations",
    "Order recommendations by priority, most impactful first",
)


def _excerpt(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


def build_research_prompt(user_prompt: str, knowledge: list[SearchResult]) -> str:
    """Weave retrieved research into a prompt for the generative model."""
    lines = ["RESEARCH-BACKED UX ANALYSIS", ""]
    if user_prompt.strip():
        lines += [f"PRIMARY REQUEST: {user_prompt.strip()}", ""]

    if knowledge:
        lines += [
            "RESEARCH CONTEXT:",
            f"You have access to {len(knowledge)} relevant UX research insights.",
            "",
            "KEY RESEARCH FINDINGS:",
        ]
        for i, result in enumerate(knowledge, start=1):
            entry = result.entry
            lines += [
                f'{i}. "{entry.title}" ({result.similarity * 100:.1f}% relevant)',
                f"   Research: {_excerpt(entry.content, EXCERPT_CHARS)}",
                f"   Source: {entry.source or DEFAULT_SOURCE}",
                f"   Category: {entry.category}",
                "",
            ]
        lines.append("ANALYSIS REQUIREMENTS:")
        lines += [f"- {req}" for req in ANALYSIS_REQUIREMENTS]
        lines.append("")
    else:
        lines += [
            "STANDARD UX ANALYSIS:",
            "While no specific research context was found, provide analysis based on "
            "established UX principles and best practices.",
            "",
        ]

    lines.append("Please provide detailed, evidence-based UX feedback annotations.")
    return "\n".join(lines)


def build_fallback_prompt(user_request: str | None, entry_count: int = 0) -> str:
    """Fixed prompt used when no research context could be assembled."""
    lines = ["UX DESIGN ANALYSIS", ""]
    if user_request and user_request.strip():
        lines += [f"REQUEST: {user_request.strip()}", ""]

    if entry_count > 0:
        lines.append(f"RESEARCH CONTEXT: Research context found ({entry_count} entries)")
    else:
        lines.append("RESEARCH CONTEXT: No research context found (0 entries)")
    lines += ["", "Please analyze this design based on established UX principles:"]
    lines += [f"- {item}" for item in FALLBACK_CHECKLIST]
    return "\n".join(lines)
