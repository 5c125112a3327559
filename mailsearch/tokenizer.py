"""Text tokenization for indexing and query analysis.

Both tokenizers lowercase the input, turn every character other than word
characters, whitespace, ``@`` and ``.`` into a separator, and drop tokens of
two characters or fewer. Keeping ``@`` and ``.`` leaves email addresses and
name-service domains intact as single tokens.
"""

import re

STOP_WORDS = frozenset(
    {
        "a",
        "an",
        "and",
        "are",
        "as",
        "at",
        "be",
        "by",
        "for",
        "from",
        "has",
        "he",
        "in",
        "is",
        "it",
        "its",
        "of",
        "on",
        "that",
        "the",
        "to",
        "was",
        "will",
        "with",
        "you",
        "your",
        "have",
        "had",
        "this",
    }
)

MIN_TOKEN_LENGTH = 3

_SEPARATOR = re.compile(r"[^\w\s@.]")


def tokenize(text: str | None) -> list[str]:
    """Split text into lowercase terms.

    Args:
        text: Input text

    Returns:
        Tokens in order of appearance, duplicates kept
    """
    if not text:
        return []

    cleaned = _SEPARATOR.sub(" ", text.lower())
    return [token for token in cleaned.split() if len(token) >= MIN_TOKEN_LENGTH]


def tokenize_query(text: str | None) -> list[str]:
    """Tokenize a query, additionally dropping stop words."""
    return [token for token in tokenize(text) if token not in STOP_WORDS]
