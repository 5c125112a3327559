"""Shared fixtures for mail search tests."""

import os
from datetime import datetime, timedelta, timezone

import pytest

from mailsearch.engine import SearchEngine
from mailsearch.models import Document, MessageFlags

NOW = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)
OLD = NOW - timedelta(days=90)


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch, tmp_path):
    """Isolate environment variables and config lookup for each test."""
    original_env = os.environ.copy()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.chdir(tmp_path)

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def clock():
    """Clock frozen at a fixed instant."""
    return lambda: NOW


@pytest.fixture
def make_document():
    """Factory for documents old enough to get no recency bonus."""

    def _make(
        id: str,
        subject: str = "",
        body: str = "",
        sender: str = "someone@example.com",
        date: datetime = OLD,
        **flags,
    ) -> Document:
        return Document(
            id=id,
            subject=subject,
            body=body,
            sender=sender,
            date=date,
            flags=MessageFlags(**flags),
        )

    return _make


@pytest.fixture
def sample_documents(make_document) -> list[Document]:
    """Mailbox with diverse content for search testing."""
    return [
        make_document(
            "invoice",
            subject="Invoice #42",
            body="Please pay $100 by Friday",
            sender="billing@vendor.com",
        ),
        make_document(
            "defi",
            subject="DeFi yield farming",
            body="Your liquidity position earned rewards this week. "
            "Check the dashboard for details.",
            sender="alerts@defi.example",
        ),
        make_document(
            "nft",
            subject="NFT marketplace sale",
            body="Your NFT sold for 2 ETH to 0x1111111111111111111111111111111111111111.",
            sender="market@nft.example",
            starred=True,
        ),
        make_document(
            "meeting",
            subject="Team meeting tomorrow",
            body="Agenda: quarterly planning and hiring. Bring your notes.",
            sender="alice@company.com",
            important=True,
        ),
        make_document(
            "newsletter",
            subject="Weekly newsletter",
            body="Top stories about gardening, cooking and travel.",
            sender="news@letters.example",
        ),
    ]


@pytest.fixture
def engine(clock) -> SearchEngine:
    """Search engine with a frozen clock."""
    return SearchEngine(clock=clock)
