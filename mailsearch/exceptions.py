"""Exception classes for the mail search package."""


class SearchError(Exception):
    """Base exception for search-related errors."""

    pass


class IndexBuildError(SearchError):
    """Raised when a document cannot be indexed."""

    def __init__(self, document_id: str, details: str = ""):
        """Initialize with document ID and details."""
        self.document_id = document_id
        message = f"Failed to index document {document_id}"
        if details:
            message += f": {details}"
        super().__init__(message)


class ConfigError(SearchError, ValueError):
    """Raised when configuration cannot be loaded or is invalid."""

    def __init__(self, message: str, path: str | None = None):
        """Initialize with message and optional source path."""
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)


class HistoryError(SearchError):
    """Raised when the query history cannot be written."""

    def __init__(self, path: str, details: str = ""):
        """Initialize with path and details."""
        self.path = path
        message = f"Cannot write query history at {path}"
        if details:
            message += f": {details}"
        super().__init__(message)
