"""Usage insights aggregated from the query log."""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Sequence

from .classifier import QueryClassifier
from .models import (
    CategoryShare,
    InsightSuggestions,
    Insights,
    QueryLogEntry,
    SearchPatterns,
    TermFrequency,
)
from .tokenizer import tokenize_query

HOURS_PER_DAY = 24
TOP_TERMS = 10
MAX_SAVED_SEARCHES = 5
MANY_RESULTS = 100

CANNED_SAVED_SEARCHES = (
    "unread emails from this week",
    "important emails with attachments",
    "web3 transactions last month",
)

NO_RESULTS_TIP = "Try using broader search terms or check spelling"
TOO_MANY_RESULTS_TIP = "Use more specific search terms to narrow results"
CANNED_TIPS = (
    "Use quotes for exact phrase matches",
    "Try searching by sender, date range, or keywords",
    "Use filters to narrow down results by category",
)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class InsightsAggregator:
    """Builds term, time and category statistics over past queries."""

    def __init__(self, classifier: QueryClassifier | None = None):
        self.classifier = classifier or QueryClassifier()

    def summarize(self, query_log: Sequence[QueryLogEntry]) -> Insights:
        """Aggregate a query log.

        An empty log yields empty term and category lists and 24 zero hourly
        buckets; the canned suggestions are still provided.
        """
        term_frequency: Counter[str] = Counter()
        time_of_day = [0] * HOURS_PER_DAY
        category_count: Counter[str] = Counter()

        for entry in query_log:
            term_frequency.update(tokenize_query(entry.query))
            time_of_day[entry.timestamp.hour] += 1
            category = self.classifier.classify(entry.query).category
            category_count[category.value] += 1

        top_terms = [
            TermFrequency(term=term, frequency=count)
            for term, count in term_frequency.most_common(TOP_TERMS)
        ]

        return Insights(
            top_search_terms=top_terms,
            search_patterns=SearchPatterns(
                time_of_day=time_of_day,
                common_categories=self._category_shares(
                    category_count, len(query_log)
                ),
            ),
            suggestions=InsightSuggestions(
                saved_searches=self.saved_search_suggestions(top_terms),
                improvements=self.improvement_tips(query_log),
            ),
        )

    def _category_shares(
        self, category_count: Counter[str], total: int
    ) -> list[CategoryShare]:
        if total == 0:
            return []

        shares = [
            CategoryShare(
                category=category, percentage=round_half_up(count / total * 100)
            )
            for category, count in category_count.items()
        ]
        shares.sort(key=lambda share: share.percentage, reverse=True)
        return shares

    def saved_search_suggestions(self, top_terms: list[TermFrequency]) -> list[str]:
        """Suggest saved searches from the most frequent terms."""
        suggestions = []
        if len(top_terms) >= 2:
            suggestions.append(f"{top_terms[0].term} AND {top_terms[1].term}")

        suggestions.extend(CANNED_SAVED_SEARCHES)
        return suggestions[:MAX_SAVED_SEARCHES]

    def improvement_tips(self, query_log: Sequence[QueryLogEntry]) -> list[str]:
        """Suggest search improvements based on past result counts."""
        tips = []
        if any(entry.results_count == 0 for entry in query_log):
            tips.append(NO_RESULTS_TIP)
        if any(entry.results_count > MANY_RESULTS for entry in query_log):
            tips.append(TOO_MANY_RESULTS_TIP)

        tips.extend(CANNED_TIPS)
        return tips
