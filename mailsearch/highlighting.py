"""Search result highlighting and summary generation."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .models import Document, Highlight, MatchField
from .tokenizer import tokenize, tokenize_query

ELLIPSIS = "..."


@dataclass
class Span:
    """Matched region of the original text."""

    start_offset: int
    end_offset: int


class Highlighter:
    """Wraps query term occurrences in highlight tags."""

    def __init__(
        self,
        highlight_tag: str = "mark",
        body_length: int = 200,
        sender_length: int = 100,
    ):
        """Initialize highlighter.

        Args:
            highlight_tag: HTML tag to use for highlights
            body_length: Maximum snippet length for message bodies
            sender_length: Maximum snippet length for senders
        """
        self.highlight_tag = highlight_tag
        self.body_length = body_length
        self.sender_length = sender_length

    def highlight(
        self, text: str, query_tokens: list[str], max_length: int | None = None
    ) -> str:
        """Highlight every occurrence of the query tokens in text.

        Args:
            text: Text to highlight
            query_tokens: Tokens to mark (matched case-insensitively)
            max_length: Truncate longer output to a window around the first
                match (default: no truncation)

        Returns:
            Marked text, or an empty string when no token occurs in text
        """
        spans = self.find_spans(text, query_tokens)
        if not spans:
            return ""

        marked = self.apply_tags(text, spans)
        if max_length is None or len(marked) <= max_length:
            return marked

        start = max(0, spans[0].start_offset - max_length // 3)
        end = min(len(text), start + max_length)

        window = [
            Span(max(span.start_offset, start) - start, min(span.end_offset, end) - start)
            for span in spans
            if span.start_offset < end and span.end_offset > start
        ]
        snippet = self.apply_tags(text[start:end], window)

        if start > 0:
            snippet = ELLIPSIS + snippet
        if end < len(text):
            snippet = snippet + ELLIPSIS
        return snippet

    def highlight_document(
        self, document: Document, query_tokens: list[str]
    ) -> list[Highlight]:
        """Generate highlights for subject, body and sender.

        The sender is only included when something in it was marked.
        """
        highlights = []

        subject = self.highlight(document.subject, query_tokens)
        if subject:
            highlights.append(Highlight(field=MatchField.SUBJECT, snippet=subject))

        body = self.highlight(document.body, query_tokens, self.body_length)
        if body:
            highlights.append(Highlight(field=MatchField.BODY, snippet=body))

        sender = self.highlight(document.sender, query_tokens, self.sender_length)
        if sender and sender != document.sender:
            highlights.append(Highlight(field=MatchField.FROM, snippet=sender))

        return highlights

    def find_spans(self, text: str, query_tokens: list[str]) -> list[Span]:
        """Find merged, ordered match spans for all tokens."""
        if not text or not query_tokens:
            return []

        spans = []
        for token in set(query_tokens):
            if not token:
                continue
            pattern = re.compile(re.escape(token), re.IGNORECASE)
            spans.extend(Span(m.start(), m.end()) for m in pattern.finditer(text))

        return _merge_overlapping_spans(spans)

    def apply_tags(self, text: str, spans: list[Span]) -> str:
        """Wrap spans of text in highlight tags."""
        tag = self.highlight_tag
        parts = []
        position = 0
        for span in sorted(spans, key=lambda s: s.start_offset):
            if span.start_offset < position or span.start_offset >= span.end_offset:
                continue
            parts.append(text[position : span.start_offset])
            parts.append(f"<{tag}>{text[span.start_offset : span.end_offset]}</{tag}>")
            position = span.end_offset
        parts.append(text[position:])
        return "".join(parts)


def _merge_overlapping_spans(spans: list[Span]) -> list[Span]:
    """Merge overlapping spans; adjacent spans stay separate."""
    if not spans:
        return []

    sorted_spans = sorted(spans, key=lambda s: (s.start_offset, -s.end_offset))
    merged = [Span(sorted_spans[0].start_offset, sorted_spans[0].end_offset)]

    for span in sorted_spans[1:]:
        current = merged[-1]
        if span.start_offset < current.end_offset:
            current.end_offset = max(current.end_offset, span.end_offset)
        else:
            merged.append(Span(span.start_offset, span.end_offset))

    return merged


class SummaryGenerator:
    """Picks the sentence of a message body that best matches a query."""

    SENTENCE_SPLIT = re.compile(r"[.!?]+")
    MIN_SENTENCE_LENGTH = 10

    def __init__(self, summary_length: int = 150):
        self.summary_length = summary_length

    def summarize(self, body: str, query: str) -> str:
        """Build a short summary of body for a query.

        Returns the most query-dense sentence, or the start of the body when
        no sentence contains a query term. Either is cut at summary_length.
        """
        sentence = self.most_relevant_sentence(body, query)
        return self._truncate(sentence or body or "")

    def most_relevant_sentence(self, text: str, query: str) -> str:
        """Find the sentence containing the most query tokens.

        Ties go to the earliest sentence; an empty string is returned when no
        sentence contains any token.
        """
        if not text:
            return ""

        query_tokens = tokenize_query(query)
        best_sentence = ""
        best_score = 0

        for sentence in self.SENTENCE_SPLIT.split(text):
            if len(sentence) <= self.MIN_SENTENCE_LENGTH:
                continue

            sentence_tokens = tokenize(sentence)
            match_count = sum(
                1
                for token in query_tokens
                if any(token in other for other in sentence_tokens)
            )

            if match_count > best_score:
                best_score = match_count
                best_sentence = sentence.strip()

        return best_sentence

    def _truncate(self, text: str) -> str:
        if len(text) > self.summary_length:
            return text[: self.summary_length] + ELLIPSIS
        return text
