"""Tests for document similarity."""

import pytest

from mailsearch.config import SearchConfig
from mailsearch.similarity import SimilarityEngine, jaccard_similarity


class TestJaccardSimilarity:
    """Test the set overlap measure."""

    def test_identical_sets(self):
        assert jaccard_similarity({"a", "b"}, {"a", "b"}) == 1.0

    def test_disjoint_sets(self):
        assert jaccard_similarity({"a"}, {"b"}) == 0.0

    def test_partial_overlap(self):
        assert jaccard_similarity({"a", "b", "c"}, {"b", "c", "d"}) == pytest.approx(0.5)

    def test_empty_sets(self):
        """Two empty sets score zero."""
        assert jaccard_similarity(set(), set()) == 0.0
        assert jaccard_similarity(set(), {"a"}) == 0.0


class TestSimilarityEngine:
    """Test similar-message search."""

    def test_similarity_symmetric(self, make_document):
        """Similarity does not depend on argument order."""
        first = make_document("1", subject="Budget review meeting")
        second = make_document("2", subject="Budget review notes")
        engine = SimilarityEngine()

        assert engine.similarity(first, second) == pytest.approx(0.5)
        assert engine.similarity(second, first) == engine.similarity(first, second)

    def test_identical_documents(self, make_document):
        """Documents with the same text score one."""
        first = make_document("1", subject="Budget", body="Numbers attached")
        second = make_document("2", subject="Budget", body="Numbers attached")

        assert SimilarityEngine().similarity(first, second) == 1.0

    def test_sender_is_ignored(self, make_document):
        """Only subject and body are compared."""
        first = make_document("1", subject="Budget", sender="alice@corp.com")
        second = make_document("2", subject="Budget", sender="bob@corp.com")

        assert SimilarityEngine().similarity(first, second) == 1.0

    def test_find_similar_ordering(self, make_document):
        """Matches above the threshold come back most similar first."""
        source = make_document("src", subject="alpha beta gamma delta")
        candidates = [
            make_document("weak", subject="alpha beta omega sigma"),
            make_document("none", subject="alpha omega sigma theta"),
            make_document("same", subject="alpha beta gamma delta"),
            make_document("close", subject="alpha beta gamma omega"),
        ]

        similar = SimilarityEngine().find_similar(source, candidates)

        assert [doc.id for doc in similar] == ["same", "close", "weak"]

    def test_excludes_source(self, make_document):
        """The source document never appears in its own results."""
        source = make_document("src", subject="alpha beta gamma")
        candidates = [source, make_document("copy", subject="alpha beta gamma")]

        similar = SimilarityEngine().find_similar(source, candidates)

        assert [doc.id for doc in similar] == ["copy"]

    def test_threshold_is_exclusive(self, make_document):
        """A score equal to the threshold is not enough."""
        source = make_document("1", subject="Budget review meeting")
        candidate = make_document("2", subject="Budget review notes")
        engine = SimilarityEngine(SearchConfig(similarity_threshold=0.5))

        assert engine.find_similar(source, [candidate]) == []

    def test_max_similar(self, make_document):
        """At most max_similar documents are returned."""
        source = make_document("src", subject="alpha beta gamma")
        candidates = [
            make_document(str(i), subject="alpha beta gamma") for i in range(5)
        ]
        engine = SimilarityEngine(SearchConfig(max_similar=2))

        assert len(engine.find_similar(source, candidates)) == 2

    def test_no_candidates(self, make_document):
        source = make_document("src", subject="alpha")

        assert SimilarityEngine().find_similar(source, []) == []
