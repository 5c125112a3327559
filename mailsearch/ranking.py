"""Relevance scoring for mail search.

A document's raw score combines weighted exact token matches, a flat bonus per
query token with partial matches, a multiplier for exact phrase matches and a
small recency bonus. The raw score is normalized by the query length and
clamped to [0, 1].
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

from .config import SearchConfig
from .models import Document, IndexEntry, MatchField
from .tokenizer import tokenize

SECONDS_PER_DAY = 24 * 60 * 60

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Interpret naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class RelevanceScorer:
    """Scores documents against a tokenized query using the search index."""

    def __init__(self, config: SearchConfig | None = None, clock: Clock | None = None):
        """Initialize scorer.

        Args:
            config: Search configuration (default: SearchConfig())
            clock: Callable returning the current time, for recency
        """
        self.config = config or SearchConfig()
        self.clock = clock or utc_now

    def score(
        self,
        document: Document,
        entry: IndexEntry,
        query_tokens: list[str],
        query: str,
    ) -> float:
        """Calculate the normalized relevance of a document.

        Args:
            document: Document being scored
            entry: Index entry built from the document
            query_tokens: Stop-word-filtered query tokens
            query: Original query string, for the phrase bonus

        Returns:
            Relevance in [0, 1]
        """
        indexed = set(entry.tokens)
        score = 0.0

        for token in query_tokens:
            if token in indexed:
                score += entry.weights.get(token, 1.0)

            if any(token in other or other in token for other in indexed):
                score += self.config.partial_match_bonus

        if query and query.lower() in document.text.lower():
            score *= self.config.phrase_multiplier

        score += self.recency_bonus(document.date)

        max_possible = len(query_tokens) * 2 + 1
        return max(0.0, min(score / max_possible, 1.0))

    def recency_bonus(self, date: datetime) -> float:
        """Bonus that decays linearly to zero over the recency window."""
        window = self.config.recency_window_days
        age = as_utc(self.clock()) - as_utc(date)
        days_since = age.total_seconds() / SECONDS_PER_DAY
        return max(0.0, (window - days_since) / window) * self.config.recency_weight

    def matched_fields(
        self, document: Document, query_tokens: list[str]
    ) -> list[MatchField]:
        """Determine which fields of a document match the query.

        A field matches when a query token occurs in it, or when one of its
        tokens occurs inside a query token ("pay" for "payment").
        """
        fields = []
        for field, text in (
            (MatchField.SUBJECT, document.subject),
            (MatchField.BODY, document.body),
            (MatchField.FROM, document.sender),
        ):
            if _field_matches(text, query_tokens):
                fields.append(field)
        return fields


def _field_matches(text: str, query_tokens: list[str]) -> bool:
    if not text or not query_tokens:
        return False

    text_lower = text.lower()
    if any(token in text_lower for token in query_tokens):
        return True

    field_tokens = set(tokenize(text))
    return any(
        other in token for token in query_tokens for other in field_tokens
    )
