"""Query classification into semantic categories."""

from __future__ import annotations

from dataclasses import dataclass

from .extractors import (
    Extractor,
    extract_amounts,
    extract_dates,
    extract_emails,
    extract_keywords,
    extract_wallet_addresses,
)
from .models import Category, QueryCategory, TypedTerm

DEFAULT_CONFIDENCE = 0.5


@dataclass(frozen=True)
class Detector:
    """Extractor plus the category it signals when it fires."""

    extractor: Extractor
    category: Category
    confidence: float


class QueryClassifier:
    """Classifies raw query strings and extracts typed terms.

    Detectors run in priority order. The first one that finds anything sets
    the category; every detector still contributes its terms. Keyword terms
    are always collected last and never set the category.
    """

    DETECTORS = (
        Detector(extract_emails, Category.SENDER, 0.8),
        Detector(extract_wallet_addresses, Category.WEB3, 0.9),
        Detector(extract_dates, Category.DATE, 0.7),
        Detector(extract_amounts, Category.FINANCIAL, 0.8),
    )

    def __init__(self, detectors: tuple[Detector, ...] | None = None):
        self.detectors = detectors if detectors is not None else self.DETECTORS

    def classify(self, query: str) -> QueryCategory:
        """Classify a query.

        Args:
            query: Raw query string

        Returns:
            Category, confidence and extracted terms; ``mixed`` at 0.5 when
            no detector fires
        """
        category = Category.MIXED
        confidence = DEFAULT_CONFIDENCE
        terms: list[TypedTerm] = []
        decided = False

        if not query or not query.strip():
            return QueryCategory(category=category, confidence=confidence)

        for detector in self.detectors:
            found = detector.extractor(query)
            if not found:
                continue

            terms.extend(found)
            if not decided:
                category = detector.category
                confidence = detector.confidence
                decided = True

        terms.extend(extract_keywords(query))

        return QueryCategory(
            category=category, confidence=confidence, extracted_terms=terms
        )
