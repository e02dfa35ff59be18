"""Search-related models."""

from pydantic import BaseModel, Field

from ux_kb.models.entry import CompetitorPattern, KnowledgeEntry


class SearchFilters(BaseModel):
    """Parameters for a similarity search.

    Every supplied facet is a hard filter and facets combine with AND.
    Values inside a list facet combine with OR.
    """

    max_results: int = Field(default=10, ge=1, le=50)
    confidence_threshold: float = Field(default=0.5, ge=0.0, le=1.0)
    categories: list[str] = Field(default_factory=list)
    industries: list[str] = Field(default_factory=list)
    primary_category: str | None = None
    secondary_category: str | None = None
    complexity_levels: list[str] = Field(default_factory=list)


class SearchResult(BaseModel):
    """A knowledge entry paired with its similarity to one query."""

    entry: KnowledgeEntry
    similarity: float = Field(ge=0.0, le=1.0)


class PatternResult(BaseModel):
    """A competitor pattern paired with its similarity to one query."""

    pattern: CompetitorPattern
    similarity: float = Field(ge=0.0, le=1.0)
