"""Tests for typed term and entity extraction."""

from mailsearch.extractors import (
    extract_amounts,
    extract_dates,
    extract_emails,
    extract_entities,
    extract_keywords,
    extract_name_service_domains,
    extract_wallet_addresses,
)
from mailsearch.models import TermType

ADDRESS = "0x" + "ab12" * 10


class TestExtractors:
    """Test individual extractor functions."""

    def test_emails(self):
        """Email addresses become person terms."""
        terms = extract_emails("cc john.doe@example.com and ops@mail.example.org")

        assert [t.value for t in terms] == [
            "john.doe@example.com",
            "ops@mail.example.org",
        ]
        assert all(t.type == TermType.PERSON for t in terms)
        assert all(t.confidence == 0.9 for t in terms)

    def test_wallet_addresses(self):
        """Hex addresses of exactly 40 digits are detected verbatim."""
        terms = extract_wallet_addresses(f"send to {ADDRESS} not 0x1234")

        assert [t.value for t in terms] == [ADDRESS]
        assert terms[0].type == TermType.ADDRESS
        assert terms[0].confidence == 0.95

    def test_name_service_domains(self):
        """ENS and SNS names are detected, other domains are not."""
        terms = extract_name_service_domains("pay vitalik.eth or toly.sol, not ethereum.org")

        assert [t.value for t in terms] == ["vitalik.eth", "toly.sol"]

    def test_dates(self):
        """Numeric, relative and month-name dates are detected."""
        terms = extract_dates("due 12/31/2025, sent yesterday, last week in March")

        assert [t.value for t in terms] == [
            "12/31/2025",
            "yesterday",
            "last week",
            "March",
        ]
        assert all(t.type == TermType.DATE and t.confidence == 0.8 for t in terms)

    def test_amounts(self):
        """Symbol-prefixed and currency-suffixed amounts are detected."""
        terms = extract_amounts("paid $1,200.50 and 3 ETH, then 20 eur")

        assert [t.value for t in terms] == ["$1,200.50", "3 ETH", "20 eur"]
        assert all(t.type == TermType.AMOUNT and t.confidence == 0.85 for t in terms)

    def test_keywords(self):
        """Only stop-word-free tokens longer than three characters count."""
        terms = extract_keywords("the big invoice from acme corp")

        assert [t.value for t in terms] == ["invoice", "acme", "corp"]
        assert all(t.type == TermType.KEYWORD and t.confidence == 0.6 for t in terms)

    def test_repeated_calls_are_stable(self):
        """Calling an extractor twice on the same text finds the same matches."""
        text = f"{ADDRESS} and {ADDRESS}"

        first = extract_wallet_addresses(text)
        second = extract_wallet_addresses(text)

        assert len(first) == 2
        assert first == second

    def test_empty_text(self):
        """Extractors return nothing for empty text."""
        assert extract_emails("") == []
        assert extract_dates("") == []
        assert extract_keywords("") == []


class TestExtractEntities:
    """Test entity extraction used by the index."""

    def test_order_and_verbatim(self):
        """Addresses come first, then names, then emails, unnormalized."""
        text = f"From Bob@Example.com: sent to {ADDRESS} (alice.eth)"

        assert extract_entities(text) == [ADDRESS, "alice.eth", "Bob@Example.com"]

    def test_duplicates_reported_once(self):
        """Each entity appears once."""
        text = "ping bob@example.com, again bob@example.com"

        assert extract_entities(text) == ["bob@example.com"]

    def test_no_entities(self):
        """Plain text has no entities."""
        assert extract_entities("lunch on friday?") == []
        assert extract_entities("") == []
