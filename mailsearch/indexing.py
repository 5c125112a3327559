"""In-memory search index over mail documents.

The index is rebuilt wholesale: ``SearchIndex.build`` computes a fresh map of
entries from one snapshot of documents and swaps it in, so readers never see a
mix of old and new entries. There is no incremental update path; callers
rebuild (or ``invalidate``) whenever their document collection changes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from .config import FieldWeights, SearchConfig
from .exceptions import IndexBuildError
from .extractors import extract_entities
from .models import Document, IndexEntry
from .tokenizer import tokenize

logger = logging.getLogger(__name__)

# Substrings of subject + body that tag a document
CATEGORY_KEYWORDS = {
    "financial": ("transaction", "payment"),
    "web3": ("nft", "defi"),
}


def categorize_document(document: Document) -> list[str]:
    """Derive coarse category tags for a document."""
    content = document.text.lower()
    categories = [
        category
        for category, keywords in CATEGORY_KEYWORDS.items()
        if any(keyword in content for keyword in keywords)
    ]

    if document.flags.important:
        categories.append("important")
    if document.flags.starred:
        categories.append("starred")

    return categories


class IndexBuilder:
    """Builds index entries for individual documents."""

    def __init__(self, weights: FieldWeights | None = None):
        """Initialize builder.

        Args:
            weights: Field weights (default: subject 2, sender 1.5, body 1)
        """
        self.weights = weights or FieldWeights()

    def build_entry(self, document: Document) -> IndexEntry:
        """Create the index entry for a document.

        Raises:
            IndexBuildError: If the document fields cannot be analyzed
        """
        try:
            subject_tokens = tokenize(document.subject)
            body_tokens = tokenize(document.body)
            sender_tokens = tokenize(document.sender)

            weights: dict[str, float] = {}
            for tokens, weight in (
                (subject_tokens, self.weights.subject),
                (body_tokens, self.weights.body),
                (sender_tokens, self.weights.sender),
            ):
                for token in tokens:
                    weights[token] = weights.get(token, 0.0) + weight

            return IndexEntry(
                document_id=document.id,
                tokens=subject_tokens + body_tokens + sender_tokens,
                entities=extract_entities(document.text),
                categories=categorize_document(document),
                weights=weights,
            )
        except (AttributeError, TypeError) as e:
            raise IndexBuildError(getattr(document, "id", "<unknown>"), str(e))


class SearchIndex:
    """Mapping of document id to index entry for one search session."""

    def __init__(self, builder: IndexBuilder | None = None):
        """Initialize an empty index.

        Args:
            builder: Entry builder to use (default: IndexBuilder())
        """
        self.builder = builder or IndexBuilder()
        self._entries: dict[str, IndexEntry] = {}

    @classmethod
    def from_config(cls, config: SearchConfig) -> SearchIndex:
        """Create an empty index using the configured field weights."""
        return cls(IndexBuilder(config.weights))

    def build(self, documents: Iterable[Document]) -> None:
        """Replace the index contents with entries for ``documents``.

        The previous entries are kept if any document fails to index.

        Raises:
            IndexBuildError: If a document cannot be indexed
        """
        entries = {}
        for document in documents:
            entries[document.id] = self.builder.build_entry(document)

        self._entries = entries
        logger.debug(f"Built search index with {len(entries)} entries")

    def invalidate(self) -> None:
        """Drop all entries; the next search rebuilds lazily."""
        self._entries = {}

    def get(self, document_id: str) -> IndexEntry | None:
        """Get the entry for a document, if indexed."""
        return self._entries.get(document_id)

    @property
    def is_empty(self) -> bool:
        return not self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, document_id: object) -> bool:
        return document_id in self._entries

    def __iter__(self) -> Iterator[IndexEntry]:
        return iter(self._entries.values())


def build_search_index(
    documents: Iterable[Document], index: SearchIndex | None = None
) -> SearchIndex:
    """Build (or rebuild) an index over documents.

    Args:
        documents: Document snapshot to index
        index: Existing index to rebuild in place (default: a new one)

    Returns:
        The populated index
    """
    index = index if index is not None else SearchIndex()
    index.build(documents)
    return index
