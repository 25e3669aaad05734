"""
Core module for page-digest.

Contains the exception hierarchy shared by every subsystem.
"""

from page_digest.core.exceptions import (
    PageDigestError,
    ConfigurationError,
    ExtractionError,
    TraversalError,
    ResolutionError,
    FetchError,
)

__all__ = [
    # Base
    "PageDigestError",
    "ConfigurationError",
    # Extraction
    "ExtractionError",
    "TraversalError",
    "ResolutionError",
    # Host
    "FetchError",
]
