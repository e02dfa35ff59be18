"""Knowledge entry and competitor pattern models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Conventional complexity ladder, lowest first
COMPLEXITY_LADDER: tuple[str, ...] = ("beginner", "intermediate", "advanced")

MAX_FRESHNESS = 1.0


class ApplicationContext(BaseModel):
    """Where and how a piece of knowledge applies.

    The known keys are optional; any other keys are kept as-is so that
    datasets can carry extra context (environment, users, regulations...).
    """

    model_config = ConfigDict(extra="allow")

    compliance: str | list[str] | None = None
    security: str | None = None
    scalability: str | None = None
    integration: str | list[str] | None = None


class KnowledgeEntryCreate(BaseModel):
    """A candidate entry for ingestion: everything except store-assigned fields."""

    title: str
    content: str
    source: str = ""
    category: str
    primary_category: str | None = None
    secondary_category: str | None = None
    industry_tags: list[str] = Field(default_factory=list)
    complexity_level: str | None = None
    use_cases: list[str] = Field(default_factory=list)
    related_patterns: list[str] = Field(default_factory=list)
    application_context: ApplicationContext = Field(default_factory=ApplicationContext)
    tags: list[str] = Field(default_factory=list)
    metadata: dict[str, object] = Field(default_factory=dict)

    @field_validator("title", "content", "category")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @property
    def embedding_text(self) -> str:
        """Text used for generating embeddings."""
        return f"{self.title} {self.content}"


class KnowledgeEntry(KnowledgeEntryCreate):
    """A stored knowledge entry."""

    id: str
    freshness_score: float = Field(default=MAX_FRESHNESS, ge=0.0, le=1.0)
    has_embedding: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CompetitorPatternCreate(BaseModel):
    """A candidate competitor design pattern for ingestion."""

    pattern_name: str
    description: str
    industry: str | None = None
    pattern_type: str | None = None
    tags: list[str] = Field(default_factory=list)
    metadata: dict[str, object] = Field(default_factory=dict)

    @field_validator("pattern_name", "description")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @property
    def embedding_text(self) -> str:
        """Text used for generating embeddings."""
        return f"{self.pattern_name} {self.description}"


class CompetitorPattern(CompetitorPatternCreate):
    """A stored competitor design pattern."""

    id: str
    has_embedding: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
