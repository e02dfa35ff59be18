"""Query expansion for multi-query retrieval."""

BASE_QUERIES: tuple[str, ...] = (
    "UX design principles",
    "usability best practices",
    "user interface guidelines",
    "conversion optimization",
    "accessibility standards",
)

# Ordered: queries are appended in table order when the keyword appears in the prompt
KEYWORD_QUERIES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("button", ("button design UX", "call to action buttons", "button accessibility")),
    ("form", ("form design conversion", "form usability", "form validation patterns")),
    ("checkout", ("checkout optimization", "ecommerce checkout flow", "cart abandonment")),
    ("mobile", ("mobile UX patterns", "responsive design", "mobile usability")),
    ("navigation", ("navigation UX", "menu design patterns", "navigation accessibility")),
    ("landing", ("landing page conversion", "landing page optimization", "page layout design")),
    ("dashboard", ("dashboard UX design", "data visualization", "admin interface design")),
    ("search", ("search UX patterns", "search functionality", "filters and sorting")),
    ("signup", ("signup flow optimization", "registration forms", "onboarding UX")),
    ("color", ("color theory UX", "color accessibility", "brand color usage")),
    ("typography", ("typography UX", "font readability", "text hierarchy")),
    ("spacing", ("layout spacing", "white space design", "visual hierarchy")),
)

INDUSTRY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("ecommerce", ("ecommerce", "shop", "cart")),
    ("saas", ("saas", "software")),
    ("fintech", ("fintech", "finance")),
    ("healthcare", ("healthcare", "medical")),
)

# The prompt itself is only a useful sub-query within these length bounds (exclusive)
MIN_PROMPT_QUERY_LEN = 10
MAX_PROMPT_QUERY_LEN = 100


def generate_search_queries(prompt: str | None) -> list[str]:
    """Expand a user prompt into de-duplicated sub-queries, base queries first."""
    queries = list(BASE_QUERIES)
    if not prompt:
        return queries

    lowered = prompt.lower()
    for keyword, related in KEYWORD_QUERIES:
        if keyword in lowered:
            queries.extend(related)

    if MIN_PROMPT_QUERY_LEN < len(prompt) < MAX_PROMPT_QUERY_LEN:
        queries.append(prompt.strip())

    return list(dict.fromkeys(queries))


def infer_industry(prompt: str | None) -> str:
    """Guess the industry a prompt is about, or ``general``."""
    if not prompt:
        return "general"
    lowered = prompt.lower()
    for industry, keywords in INDUSTRY_KEYWORDS:
        if any(k in lowered for k in keywords):
            return industry
    return "general"
