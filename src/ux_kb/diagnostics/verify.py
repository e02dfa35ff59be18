"""Read-only health report over the knowledge store."""

import logging
from enum import StrEnum

from pydantic import BaseModel, Field

from ux_kb.models.entry import KnowledgeEntry
from ux_kb.store.knowledge_store import KnowledgeStore

logger = logging.getLogger(__name__)

# Share of entries that must carry an embedding for a PASS
PASS_COVERAGE = 0.9
SAMPLE_SIZE = 5


class Verdict(StrEnum):
    """Overall health of the knowledge base."""

    PASS = "PASS"
    PARTIAL = "PARTIAL"
    FAIL = "FAIL"


class VerificationReport(BaseModel):
    """Aggregates gathered by :func:`verify_knowledge_base`."""

    total_entries: int
    category_breakdown: list[tuple[str, int]] = Field(default_factory=list)
    sample_entries: list[KnowledgeEntry] = Field(default_factory=list)
    with_embeddings: int = 0
    without_embeddings: int = 0
    coverage: float = Field(default=0.0, ge=0.0, le=1.0)
    verdict: Verdict


def classify(total: int, coverage: float) -> Verdict:
    """FAIL for an empty store, PARTIAL below the coverage bar, else PASS."""
    if total == 0:
        return Verdict.FAIL
    if coverage < PASS_COVERAGE:
        return Verdict.PARTIAL
    return Verdict.PASS


async def verify_knowledge_base(store: KnowledgeStore) -> VerificationReport:
    """Gather counts, a sample and embedding coverage.

    Raises StoreConnectionError when the store is unreachable.
    """
    await store.ping()

    total = await store.count_entries()
    stats = await store.embedding_stats()
    coverage = float(stats["coverage"])
    report = VerificationReport(
        total_entries=total,
        category_breakdown=await store.category_breakdown(),
        sample_entries=await store.sample_entries(SAMPLE_SIZE),
        with_embeddings=int(stats["with_embeddings"]),
        without_embeddings=int(stats["without_embeddings"]),
        coverage=coverage,
        verdict=classify(total, coverage),
    )
    logger.info("Verification: %d entries, coverage %.2f, %s", total, coverage, report.verdict)
    return report


def format_report(report: VerificationReport) -> str:
    """Render a report for the terminal."""
    lines = [
        "KNOWLEDGE BASE VERIFICATION",
        "===========================",
        "",
        f"Total entries: {report.total_entries}",
        "",
        "Category breakdown:",
    ]
    if report.category_breakdown:
        lines += [f"  {category}: {count}" for category, count in report.category_breakdown]
    else:
        lines.append("  (none)")

    lines += ["", "Sample entries:"]
    for i, entry in enumerate(report.sample_entries, start=1):
        lines.append(f"  {i}. {entry.title} [{entry.category}]")
        lines.append(f"     embedding: {'yes' if entry.has_embedding else 'no'}")
    if not report.sample_entries:
        lines.append("  (none)")

    lines += [
        "",
        "Embeddings:",
        f"  with: {report.with_embeddings}",
        f"  without: {report.without_embeddings}",
        f"  coverage: {report.coverage * 100:.1f}%",
        "",
    ]

    if report.verdict is Verdict.PASS:
        lines.append("PASS: knowledge base is populated and searchable")
    elif report.verdict is Verdict.PARTIAL:
        lines.append(
            f"PARTIAL: only {report.coverage * 100:.1f}% of entries have embeddings "
            f"(need {PASS_COVERAGE * 100:.0f}%); re-run populate"
        )
    else:
        lines.append("FAIL: knowledge base is empty; run populate first")
    return "\n".join(lines)
