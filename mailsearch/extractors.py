"""Typed term and entity extraction.

Each extractor is a plain function ``text -> list[TypedTerm]`` that enumerates
all matches of its own patterns with ``finditer``. Nothing keeps match state
between calls, so the extractors can be composed in any order and called
repeatedly on the same text.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from .models import TermType, TypedTerm
from .tokenizer import tokenize_query

EMAIL_PATTERN = re.compile(r"[\w.-]+@[\w.-]+\.\w+")
WALLET_ADDRESS_PATTERN = re.compile(r"0x[a-fA-F0-9]{40}")
NAME_SERVICE_PATTERN = re.compile(r"[\w-]+\.(?:eth|sol)\b", re.IGNORECASE)

DATE_PATTERNS = (
    re.compile(r"\b\d{1,2}[-/]\d{1,2}[-/]\d{4}\b"),
    re.compile(r"\b(?:today|yesterday|tomorrow)\b", re.IGNORECASE),
    re.compile(r"\b(?:last|next)\s+(?:week|month|year)\b", re.IGNORECASE),
    re.compile(
        r"\b(?:january|february|march|april|may|june|july|august"
        r"|september|october|november|december)\b",
        re.IGNORECASE,
    ),
)

AMOUNT_PATTERN = re.compile(
    r"[$€£¥]\s*\d+(?:,\d{3})*(?:\.\d{2})?|\d+\s*(?:ETH|BTC|USD|EUR)",
    re.IGNORECASE,
)

MIN_KEYWORD_LENGTH = 4

Extractor = Callable[[str], list[TypedTerm]]


def _terms(
    pattern: re.Pattern[str], text: str, term_type: TermType, confidence: float
) -> list[TypedTerm]:
    return [
        TypedTerm(type=term_type, value=match.group(0), confidence=confidence)
        for match in pattern.finditer(text or "")
    ]


def extract_emails(text: str) -> list[TypedTerm]:
    """Find email addresses; each is a person term."""
    return _terms(EMAIL_PATTERN, text, TermType.PERSON, 0.9)


def extract_wallet_addresses(text: str) -> list[TypedTerm]:
    """Find hex wallet addresses (0x followed by 40 hex digits)."""
    return _terms(WALLET_ADDRESS_PATTERN, text, TermType.ADDRESS, 0.95)


def extract_name_service_domains(text: str) -> list[TypedTerm]:
    """Find ENS (.eth) and SNS (.sol) names."""
    return _terms(NAME_SERVICE_PATTERN, text, TermType.ADDRESS, 0.85)


def extract_dates(text: str) -> list[TypedTerm]:
    """Find absolute and relative date expressions.

    Matches are grouped by pattern: numeric dates first, then relative days,
    relative periods and month names.
    """
    terms: list[TypedTerm] = []
    for pattern in DATE_PATTERNS:
        terms.extend(_terms(pattern, text, TermType.DATE, 0.8))
    return terms


def extract_amounts(text: str) -> list[TypedTerm]:
    """Find currency amounts such as ``$1,200.50`` or ``2 ETH``."""
    return _terms(AMOUNT_PATTERN, text, TermType.AMOUNT, 0.85)


def extract_keywords(text: str) -> list[TypedTerm]:
    """Turn significant query tokens into keyword terms."""
    return [
        TypedTerm(type=TermType.KEYWORD, value=token, confidence=0.6)
        for token in tokenize_query(text)
        if len(token) >= MIN_KEYWORD_LENGTH
    ]


# Entity extractors in the order their matches are reported
ENTITY_EXTRACTORS: tuple[Extractor, ...] = (
    extract_wallet_addresses,
    extract_name_service_domains,
    extract_emails,
)


def extract_entities(text: str) -> list[str]:
    """Extract address-like entities from text.

    Args:
        text: Text to scan

    Returns:
        Verbatim matches of wallet addresses, name-service domains and email
        addresses, each reported once in first-seen order
    """
    if not text:
        return []

    seen: set[str] = set()
    entities = []
    for extractor in ENTITY_EXTRACTORS:
        for term in extractor(text):
            if term.value not in seen:
                seen.add(term.value)
                entities.append(term.value)
    return entities
