"""Search engine facade for mail documents."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence

from .classifier import QueryClassifier
from .config import SearchConfig
from .highlighting import Highlighter, SummaryGenerator
from .history import QueryHistory
from .indexing import SearchIndex
from .insights import InsightsAggregator
from .models import Document, Insights, QueryCategory, QueryLogEntry, SearchResult
from .ranking import Clock, RelevanceScorer
from .similarity import SimilarityEngine
from .suggestions import suggest_queries
from .tokenizer import tokenize_query

logger = logging.getLogger(__name__)


class SearchEngine:
    """Search engine for mail documents.

    Owns the search index for one session and coordinates scoring,
    highlighting, similarity, query classification and insights. The index
    is built lazily on the first search; call ``build_index`` or
    ``invalidate`` whenever the document collection changes.
    """

    def __init__(
        self,
        config: SearchConfig | None = None,
        index: SearchIndex | None = None,
        history: QueryHistory | None = None,
        clock: Clock | None = None,
    ):
        """Initialize search engine.

        Args:
            config: Search configuration (default: SearchConfig())
            index: Index to use (default: a new empty index)
            history: Query history that searches are recorded into
            clock: Callable returning the current time, for recency
        """
        self.config = config or SearchConfig()
        self.index = index if index is not None else SearchIndex.from_config(self.config)
        self.history = history
        self.scorer = RelevanceScorer(self.config, clock)
        self.highlighter = Highlighter(
            highlight_tag=self.config.highlight_tag,
            body_length=self.config.body_snippet_length,
            sender_length=self.config.sender_snippet_length,
        )
        self.summarizer = SummaryGenerator(self.config.summary_length)
        self.similarity = SimilarityEngine(self.config)
        self.classifier = QueryClassifier()
        self.insights = InsightsAggregator(self.classifier)
        self._last_query_time_ms = 0.0

    def build_index(self, documents: Sequence[Document]) -> None:
        """Rebuild the index from a document snapshot."""
        self.index.build(documents)
        logger.info(f"Indexed {len(self.index)} documents")

    def invalidate(self) -> None:
        """Discard the index; the next search rebuilds it."""
        self.index.invalidate()

    def search(self, query: str, documents: Sequence[Document]) -> list[SearchResult]:
        """Search documents for a free-text query.

        Args:
            query: Query string
            documents: Current document collection

        Returns:
            Results ordered by descending relevance, at most max_results.
            Blank queries and internal failures both yield an empty list.
        """
        if not query or not query.strip():
            return []

        start_time = time.perf_counter()
        try:
            results = self._search(query, documents)
        except Exception:
            logger.exception(f"Search failed for query {query!r}")
            results = []

        self._last_query_time_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(
            f"Query {query!r} returned {len(results)} results "
            f"in {self._last_query_time_ms:.1f}ms"
        )

        if self.history is not None:
            try:
                self.history.record(query, len(results))
            except Exception:
                logger.exception("Could not record query history")

        return results

    def _search(self, query: str, documents: Sequence[Document]) -> list[SearchResult]:
        if self.index.is_empty:
            self.build_index(documents)

        query_tokens = tokenize_query(query)
        scored = []

        for document in documents:
            entry = self.index.get(document.id)
            if entry is None:
                continue

            relevance = self.scorer.score(document, entry, query_tokens, query)
            if relevance > self.config.min_relevance:
                scored.append((document, relevance))

        scored.sort(key=lambda item: item[1], reverse=True)

        return [
            SearchResult(
                document=document,
                relevance=relevance,
                matched_fields=self.scorer.matched_fields(document, query_tokens),
                summary=self.summarizer.summarize(document.body, query),
                highlights=self.highlighter.highlight_document(document, query_tokens),
            )
            for document, relevance in scored[: self.config.max_results]
        ]

    def find_similar(
        self, document: Document, candidates: Sequence[Document]
    ) -> list[Document]:
        """Find documents similar to ``document``; failures yield []."""
        try:
            return self.similarity.find_similar(document, candidates)
        except Exception:
            logger.exception(f"Similarity search failed for document {document.id}")
            return []

    def classify(self, query: str) -> QueryCategory:
        """Classify a raw query string."""
        return self.classifier.classify(query)

    def summarize(self, query_log: Sequence[QueryLogEntry] | None = None) -> Insights:
        """Aggregate insights over a query log (default: the attached history)."""
        if query_log is None:
            query_log = self.history.entries if self.history is not None else []
        return self.insights.summarize(query_log)

    def suggest(self, user_input: str) -> list[str]:
        """Suggest complete queries for partial input."""
        return suggest_queries(user_input)

    def get_statistics(self) -> dict:
        """Get engine statistics."""
        return {
            "index_size": len(self.index),
            "last_query_time_ms": self._last_query_time_ms,
            "history_size": len(self.history) if self.history is not None else 0,
        }


def create_engine(
    config: SearchConfig | None = None,
    enable_history: bool = False,
    clock: Clock | None = None,
) -> SearchEngine:
    """Create a SearchEngine from configuration.

    Args:
        config: Search configuration (default: SearchConfig())
        enable_history: Record searches into the configured history directory
        clock: Callable returning the current time
    """
    config = config or SearchConfig()
    history = QueryHistory(config.history_dir) if enable_history else None
    return SearchEngine(config=config, history=history, clock=clock)
