"""Data models for mail search using msgspec for performance."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

import msgspec


class TermType(str, Enum):
    """Kinds of typed terms extracted from text."""

    PERSON = "person"
    DATE = "date"
    AMOUNT = "amount"
    ADDRESS = "address"
    KEYWORD = "keyword"


class Category(str, Enum):
    """Semantic categories a query can be classified into."""

    SENDER = "sender"
    SUBJECT = "subject"
    CONTENT = "content"
    DATE = "date"
    WEB3 = "web3"
    FINANCIAL = "financial"
    MIXED = "mixed"


class MatchField(str, Enum):
    """Document fields that can match a query."""

    SUBJECT = "subject"
    BODY = "body"
    FROM = "from"


class MessageFlags(msgspec.Struct, frozen=True, kw_only=True):
    """User-visible message flags."""

    important: bool = False
    starred: bool = False


class Document(msgspec.Struct, frozen=True, kw_only=True):
    """A mail message as handed over by the mail collaborator.

    The search engine only reads documents. The sender is stored as
    ``sender`` and encoded as ``from`` so that mail-server payloads convert
    directly.
    """

    id: str
    subject: str = ""
    body: str = ""
    sender: str = msgspec.field(default="", name="from")
    date: datetime = msgspec.field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    flags: MessageFlags = msgspec.field(default_factory=MessageFlags)

    @property
    def text(self) -> str:
        """Subject and body joined, as used for phrase and similarity checks."""
        return f"{self.subject} {self.body}"


class IndexEntry(msgspec.Struct, frozen=True, kw_only=True):
    """Index record built for a single document."""

    document_id: str
    tokens: list[str] = msgspec.field(default_factory=list)
    entities: list[str] = msgspec.field(default_factory=list)
    categories: list[str] = msgspec.field(default_factory=list)
    weights: dict[str, float] = msgspec.field(default_factory=dict)


class TypedTerm(msgspec.Struct, frozen=True, kw_only=True):
    """A typed term detected in a query or document."""

    type: TermType
    value: str
    confidence: float


class QueryCategory(msgspec.Struct, frozen=True, kw_only=True):
    """Classification of a raw query string."""

    category: Category
    confidence: float
    extracted_terms: list[TypedTerm] = msgspec.field(default_factory=list)

    def terms_of_type(self, term_type: TermType) -> list[TypedTerm]:
        """Get the extracted terms of one type, in detection order."""
        return [t for t in self.extracted_terms if t.type == term_type]


class Highlight(msgspec.Struct, frozen=True, kw_only=True):
    """Highlighted snippet for one field."""

    field: MatchField
    snippet: str


class SearchResult(msgspec.Struct, kw_only=True):
    """A ranked, highlighted search hit."""

    document: Document
    relevance: float
    matched_fields: list[MatchField] = msgspec.field(default_factory=list)
    summary: str = ""
    highlights: list[Highlight] = msgspec.field(default_factory=list)


class QueryLogEntry(msgspec.Struct, frozen=True, kw_only=True):
    """A past query as recorded by the query log."""

    query: str
    timestamp: datetime
    results_count: int = 0
    selected_result: int | None = None


class TermFrequency(msgspec.Struct, frozen=True, kw_only=True):
    term: str
    frequency: int


class CategoryShare(msgspec.Struct, frozen=True, kw_only=True):
    category: str
    percentage: int


class SearchPatterns(msgspec.Struct, frozen=True, kw_only=True):
    """When and what users search for."""

    time_of_day: list[int] = msgspec.field(default_factory=lambda: [0] * 24)
    common_categories: list[CategoryShare] = msgspec.field(default_factory=list)


class InsightSuggestions(msgspec.Struct, frozen=True, kw_only=True):
    saved_searches: list[str] = msgspec.field(default_factory=list)
    improvements: list[str] = msgspec.field(default_factory=list)


class Insights(msgspec.Struct, frozen=True, kw_only=True):
    """Aggregated usage statistics over a query log."""

    top_search_terms: list[TermFrequency] = msgspec.field(default_factory=list)
    search_patterns: SearchPatterns = msgspec.field(default_factory=SearchPatterns)
    suggestions: InsightSuggestions = msgspec.field(
        default_factory=InsightSuggestions
    )

    @property
    def is_empty(self) -> bool:
        """Check if no query contributed to the statistics."""
        return sum(self.search_patterns.time_of_day) == 0
