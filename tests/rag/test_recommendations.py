"""Tests for research-backed recommendation formatting."""

import pytest

from ux_kb.models.entry import KnowledgeEntry
from ux_kb.models.rag import RAGContext
from ux_kb.models.search import SearchResult
from ux_kb.rag.prompts import DEFAULT_SOURCE
from ux_kb.rag.recommendations import (
    IMPLEMENTATION_GUIDANCE,
    classify_category,
    classify_priority,
    confidence_score,
    format_research_backed_recommendations,
    parse_recommendations,
)

CATEGORIES = {"ux", "visual", "accessibility", "conversion", "general"}
PRIORITIES = {"high", "medium", "low"}


def _context(n: int) -> RAGContext:
    knowledge = [
        SearchResult(
            entry=KnowledgeEntry(
                id=f"ux-{i:05d}",
                title=f"Finding {i}",
                content="x" * 300,
                source="" if i == 0 else f"Study {i}",
                category="accessibility" if i % 2 else "ux-patterns",
            ),
            similarity=0.9 - i / 100,
        )
        for i in range(n)
    ]
    return RAGContext(
        relevant_knowledge=knowledge,
        total_relevant_entries=n,
        categories=list(dict.fromkeys(r.entry.category for r in knowledge)),
    )


def test_single_bullet_with_reasoning():
    text = "- Improve button contrast because studies indicate higher contrast boosts clicks"
    analysis = format_research_backed_recommendations(text, _context(5))
    assert len(analysis.recommendations) == 1
    rec = analysis.recommendations[0]
    assert rec.category == "accessibility"
    assert rec.priority == "medium"
    assert rec.reasoning.startswith("because studies indicate")
    assert len(rec.supporting_research) <= 3
    assert rec.implementation_guidance == IMPLEMENTATION_GUIDANCE["accessibility"]


def test_supporting_research_is_top_three():
    analysis = format_research_backed_recommendations("1. Simplify the form", _context(5))
    sources = analysis.recommendations[0].supporting_research
    assert [s.title for s in sources] == ["Finding 0", "Finding 1", "Finding 2"]
    assert sources[0].source == DEFAULT_SOURCE
    assert sources[1].source == "Study 1"
    assert len(sources[0].key_insight) == 150
    assert sources[0].relevance_score == pytest.approx(0.9)


def test_markers_and_continuation_reasoning():
    text = "\n".join(
        [
            "Intro paragraph that is not a recommendation.",
            "* Add a visible focus ring",
            "  Research shows keyboard users lose their place without one.",
            "2) Critical: fix the checkout funnel drop-off",
            "• Minor spacing tweak in the footer",
        ]
    )
    parsed = parse_recommendations(text)
    assert [r for r, _ in parsed] == [
        "Add a visible focus ring",
        "Critical: fix the checkout funnel drop-off",
        "Minor spacing tweak in the footer",
    ]
    assert parsed[0][1] == "Research shows keyboard users lose their place without one."
    assert parsed[1][1] == ""


def test_no_markers_gives_no_recommendations():
    analysis = format_research_backed_recommendations("Looks good overall.", _context(2))
    assert analysis.recommendations == []
    assert analysis.research_summary.total_sources_cited == 2


@pytest.mark.parametrize(
    "text,expected",
    [
        ("Improve navigation between steps", "ux"),
        ("Use a larger font for body copy", "visual"),
        ("Add alt text to product images", "accessibility"),
        ("Make the CTA stand out", "conversion"),
        ("Rewrite the legal copy", "general"),
        ("Increase color contrast on links", "visual"),
    ],
)
def test_classify_category(text, expected):
    assert classify_category(text) == expected


def test_classify_category_matches_whole_words():
    assert classify_category("Reduce the fontsize") == "general"


@pytest.mark.parametrize(
    "text,expected",
    [
        ("Critical bug in signup", "high"),
        ("Urgent: minor wording", "high"),
        ("Minor enhancement to icons", "low"),
        ("Tidy the header", "medium"),
    ],
)
def test_classify_priority(text, expected):
    assert classify_priority(text) == expected


def test_labels_are_always_documented_buckets():
    for line in ["- anything at all", "- WCAG failure is critical", "- nice colour"]:
        rec = format_research_backed_recommendations(line, _context(0)).recommendations[0]
        assert rec.category in CATEGORIES
        assert rec.priority in PRIORITIES


@pytest.mark.parametrize(
    "n,expected",
    [(0, 0.3), (1, 0.68), (2, 0.76), (3, 0.84), (4, 0.92), (5, 0.9), (12, 0.9)],
)
def test_confidence_score(n, expected):
    assert confidence_score(n) == pytest.approx(expected)


def test_summary_uses_context():
    analysis = format_research_backed_recommendations("- x", _context(3))
    assert analysis.research_summary.confidence_score == pytest.approx(0.84)
    assert analysis.research_summary.primary_categories == ["ux-patterns", "accessibility"]
    assert "3 UX research sources" in analysis.methodology


def test_empty_context_still_formats():
    analysis = format_research_backed_recommendations("- Add labels to inputs", RAGContext())
    assert analysis.research_summary.confidence_score == 0.3
    assert analysis.recommendations[0].supporting_research == []
