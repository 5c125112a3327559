"""Document similarity based on token-set overlap."""

from __future__ import annotations

from collections.abc import Iterable

from .config import SearchConfig
from .models import Document
from .tokenizer import tokenize


def jaccard_similarity(first: set[str], second: set[str]) -> float:
    """Compute |intersection| / |union| of two sets.

    Two empty sets have no overlap to measure and score 0.0.
    """
    union = first | second
    if not union:
        return 0.0
    return len(first & second) / len(union)


def document_tokens(document: Document) -> set[str]:
    """Token set of a document's subject and body."""
    return set(tokenize(document.text))


class SimilarityEngine:
    """Finds documents similar to a given one, independent of the index."""

    def __init__(self, config: SearchConfig | None = None):
        self.config = config or SearchConfig()

    def similarity(self, first: Document, second: Document) -> float:
        """Symmetric similarity of two documents in [0, 1]."""
        return jaccard_similarity(document_tokens(first), document_tokens(second))

    def find_similar(
        self, document: Document, candidates: Iterable[Document]
    ) -> list[Document]:
        """Rank candidates by similarity to document.

        Args:
            document: Source document; never part of the result
            candidates: Documents to compare against

        Returns:
            Up to max_similar documents above the similarity threshold, most
            similar first
        """
        source_tokens = document_tokens(document)
        scored = []

        for candidate in candidates:
            if candidate.id == document.id:
                continue

            score = jaccard_similarity(source_tokens, document_tokens(candidate))
            if score > self.config.similarity_threshold:
                scored.append((candidate, score))

        scored.sort(key=lambda item: item[1], reverse=True)
        return [candidate for candidate, _ in scored[: self.config.max_similar]]
