"""Tests for prompt templates."""

from tests.conftest import FITTS
from ux_kb.models.entry import KnowledgeEntry
from ux_kb.models.search import SearchResult
from ux_kb.rag.prompts import (
    DEFAULT_SOURCE,
    FALLBACK_CHECKLIST,
    build_fallback_prompt,
    build_research_prompt,
)


def _result(content: str = FITTS.content, source: str = FITTS.source) -> SearchResult:
    fields = FITTS.model_dump(exclude={"content", "source"})
    entry = KnowledgeEntry(**fields, content=content, source=source, id="ux-00001")
    return SearchResult(entry=entry, similarity=0.876)


def test_research_prompt_lists_findings():
    prompt = build_research_prompt("Review my signup form", [_result()])
    assert "PRIMARY REQUEST: Review my signup form" in prompt
    assert "You have access to 1 relevant UX research insights." in prompt
    assert f'1. "{FITTS.title}" (87.6% relevant)' in prompt
    assert f"Source: {FITTS.source}" in prompt
    assert "ANALYSIS REQUIREMENTS:" in prompt


def test_research_prompt_truncates_long_content():
    prompt = build_research_prompt("x", [_result(content="a" * 250)])
    assert "Research: " + "a" * 200 + "..." in prompt
    assert "a" * 201 not in prompt


def test_research_prompt_default_source():
    prompt = build_research_prompt("x", [_result(source="")])
    assert f"Source: {DEFAULT_SOURCE}" in prompt


def test_research_prompt_without_knowledge():
    prompt = build_research_prompt("Review", [])
    assert "STANDARD UX ANALYSIS:" in prompt
    assert "KEY RESEARCH FINDINGS" not in prompt


def test_fallback_prompt_order():
    prompt = build_fallback_prompt("Audit the pricing page")
    request = prompt.index("REQUEST: Audit the pricing page")
    banner = prompt.index("RESEARCH CONTEXT: No research context found (0 entries)")
    checklist = prompt.index(FALLBACK_CHECKLIST[0])
    assert request < banner < checklist
    for item in FALLBACK_CHECKLIST:
        assert f"- {item}" in prompt


def test_fallback_prompt_without_request():
    prompt = build_fallback_prompt("   ")
    assert "REQUEST:" not in prompt
    assert "No research context found" in prompt


def test_fallback_prompt_with_entries():
    assert "Research context found (3 entries)" in build_fallback_prompt("x", 3)


def test_fallback_prompt_is_deterministic():
    assert build_fallback_prompt("same") == build_fallback_prompt("same")
