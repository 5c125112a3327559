"""Persistent query history.

Stores past queries with their result counts so that usage insights can be
computed across sessions.
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path

import msgspec

from .exceptions import HistoryError
from .models import QueryLogEntry

logger = logging.getLogger(__name__)

MAX_ENTRIES = 1000


def default_history_dir() -> Path:
    return Path.home() / ".cache" / "mailsearch" / "history"


class QueryHistory:
    """Query log kept in memory and mirrored to a JSON file."""

    def __init__(self, data_dir: Path | None = None):
        """Initialize history.

        Args:
            data_dir: Directory for the history file
                (default: ~/.cache/mailsearch/history)
        """
        self.data_dir = data_dir or default_history_dir()
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.history_file = self.data_dir / "history.json"
        self._entries = self._load()

    def _load(self) -> list[QueryLogEntry]:
        if not self.history_file.exists():
            return []

        try:
            with open(self.history_file) as f:
                data = json.load(f)
            return msgspec.convert(data, list[QueryLogEntry])
        except (json.JSONDecodeError, msgspec.ValidationError) as e:
            logger.warning(f"Ignoring corrupt query history {self.history_file}: {e}")
            return []

    def _save(self) -> None:
        self._entries = self._entries[-MAX_ENTRIES:]
        data = msgspec.to_builtins(self._entries)

        try:
            with open(self.history_file, "w") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            raise HistoryError(str(self.history_file), str(e))

    def record(
        self,
        query: str,
        results_count: int,
        selected_result: int | None = None,
        timestamp: datetime | None = None,
    ) -> QueryLogEntry:
        """Append a query to the history.

        Args:
            query: The search query
            results_count: Number of results returned
            selected_result: Index of the result the user opened, if any
            timestamp: When the query ran (default: now)

        Returns:
            The recorded entry
        """
        entry = QueryLogEntry(
            query=query,
            timestamp=timestamp or datetime.now(timezone.utc),
            results_count=results_count,
            selected_result=selected_result,
        )
        self._entries.append(entry)
        self._save()
        return entry

    @property
    def entries(self) -> list[QueryLogEntry]:
        """All recorded queries, oldest first."""
        return list(self._entries)

    def recent(self, limit: int = 10) -> list[QueryLogEntry]:
        """Most recent queries, newest first."""
        return self._entries[-limit:][::-1]

    def popular(self, limit: int = 10) -> list[tuple[str, int]]:
        """Most frequent queries with their counts."""
        counter = Counter(entry.query for entry in self._entries)
        return counter.most_common(limit)

    def clear(self) -> None:
        """Remove all recorded queries."""
        self._entries = []
        self._save()

    def __len__(self) -> int:
        return len(self._entries)
