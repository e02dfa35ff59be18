"""RAG context and research-backed recommendation models."""

from pydantic import BaseModel, Field

from ux_kb.models.search import SearchResult


class RetrievalMetadata(BaseModel):
    """How a RAG context was retrieved."""

    search_queries: list[str] = Field(default_factory=list)
    queries_generated: int = 0
    processing_time_ms: float = 0.0
    threshold: float | None = None
    industry_context: str = "general"
    error: str | None = None


class RAGContext(BaseModel):
    """The aggregate output of one retrieval request. Built fresh per request."""

    relevant_knowledge: list[SearchResult] = Field(default_factory=list)
    total_relevant_entries: int = 0
    categories: list[str] = Field(default_factory=list)
    search_query: str = ""
    enhanced_prompt: str = ""
    retrieval_metadata: RetrievalMetadata = Field(default_factory=RetrievalMetadata)


class ResearchSource(BaseModel):
    """A knowledge entry cited in support of a recommendation."""

    title: str
    source: str
    relevance_score: float
    key_insight: str


class Recommendation(BaseModel):
    """A single recommendation parsed from generated analysis text."""

    category: str
    priority: str
    recommendation: str
    reasoning: str = ""
    supporting_research: list[ResearchSource] = Field(default_factory=list)
    implementation_guidance: str = ""


class ResearchSummary(BaseModel):
    """Session-level summary of the research behind an analysis."""

    total_sources_cited: int
    primary_categories: list[str] = Field(default_factory=list)
    confidence_score: float


class ResearchBackedAnalysis(BaseModel):
    """Recommendations plus the research summary they were derived with."""

    research_summary: ResearchSummary
    methodology: str
    recommendations: list[Recommendation] = Field(default_factory=list)
