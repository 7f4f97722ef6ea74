"""Custom exceptions for podfeed.

Exception Hierarchy:
    FeedError (base)
    ├── MalformedDocumentError - The tokenizer rejected the document
    └── FeedFetchError - The feed could not be retrieved
"""

from typing import Optional


class FeedError(Exception):
    """Base exception for all feed errors.

    Attributes:
        message: Human-readable error message
        source: Optional feed location (URL or path) the error relates to
        suggestion: Optional suggestion for resolving the error
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        self.message = message
        self.source = source
        self.suggestion = suggestion
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message with source and suggestion."""
        parts = [f"[{self.source}] {self.message}" if self.source else self.message]
        if self.suggestion:
            parts.append(f"Suggestion: {self.suggestion}")
        return " ".join(parts)


class MalformedDocumentError(FeedError):
    """Raised when the XML tokenizer rejects a feed document.

    The parse is abandoned; no partial podcast is produced. The original
    tokenizer exception is available as ``__cause__``.

    Example:
        >>> raise MalformedDocumentError(
        ...     message="syntax error",
        ...     line=1,
        ...     column=0,
        ... )
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message=message, source=source, suggestion=suggestion)


class FeedFetchError(FeedError):
    """Raised when a feed cannot be downloaded.

    Common causes:
    - DNS or connection failures
    - HTTP error status after retries
    """

    def __init__(self, url: str, message: str = "Failed to fetch feed") -> None:
        self.url = url
        super().__init__(
            message=message,
            source=url,
            suggestion="Check the feed URL and your network connection",
        )
