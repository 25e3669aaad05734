"""
Custom exceptions for page-digest.

Provides a hierarchy of exceptions for precise error handling.
All exceptions inherit from PageDigestError.

Exception Hierarchy:
    PageDigestError (base)
    ├── ConfigurationError
    ├── ExtractionError
    │   ├── TraversalError
    │   └── ResolutionError
    └── FetchError

Extraction errors never leave ContentExtractor: they are caught at its
boundary and turned into the fallback summary. FetchError belongs to the
command-line host, which is the only component that touches the network.
"""

from typing import Any


class PageDigestError(Exception):
    """
    Base exception for all page-digest errors.

    Attributes:
        message: Human-readable error description
        details: Optional dictionary with additional context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(
                f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(PageDigestError):
    """
    Error in configuration loading or validation.

    Raised when:
    - Configuration file is missing or malformed
    - Setting values fail validation
    """

    pass


# =============================================================================
# Extraction Errors
# =============================================================================


class ExtractionError(PageDigestError):
    """
    Base error for content extraction operations.

    Carries the page URL when known.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if url:
            details["url"] = url
        super().__init__(message, details)
        self.url = url


class TraversalError(ExtractionError):
    """
    Error while walking the document tree.

    Raised when:
    - The document could not be parsed
    - A node throws during visitation (detached or malformed tree)

    Traversal is not a recoverable partial operation, so there is no retry.
    """

    pass


class ResolutionError(ExtractionError):
    """
    Error inside one finishing stage (title, description, key points,
    images, brand colors or metrics).

    Attributes:
        stage: Name of the stage that failed
    """

    def __init__(
        self,
        message: str,
        stage: str,
        url: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["stage"] = stage
        super().__init__(message, url=url, details=details)
        self.stage = stage


# =============================================================================
# Fetch Errors
# =============================================================================


class FetchError(PageDigestError):
    """
    Error fetching a page over HTTP from the command line.

    Raised when:
    - The host is unreachable or the request times out
    - The server answers with an error status
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if url:
            details["url"] = url
        if status_code:
            details["status_code"] = status_code
        super().__init__(message, details)
        self.url = url
        self.status_code = status_code
