"""
page-digest - Single-pass webpage content extraction.

This package turns a parsed webpage into a compact summary: title,
description, ranked key points, representative images and an inferred
brand color pair.
"""

from page_digest.config import Settings, load_config
from page_digest.utils.logging import setup_logging, get_logger
from page_digest.core.exceptions import PageDigestError
from page_digest.extraction import ContentExtractor, PageSummary

__version__ = "0.1.0"
__author__ = "Page Digest Team"

__all__ = [
    "Settings",
    "load_config",
    "setup_logging",
    "get_logger",
    "PageDigestError",
    "ContentExtractor",
    "PageSummary",
]
