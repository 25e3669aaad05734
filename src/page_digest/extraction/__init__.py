"""
Extraction module for page-digest.

Provides single-pass content extraction including:
- Document traversal and element classification
- Main-content location and text quality filtering
- Title, description, key-point, image and brand color resolution
- Readability metrics
"""

from page_digest.extraction.models import (
    BrandColors,
    ContentMetrics,
    ExtractionContext,
    ExtractionReport,
    ExtractionState,
    PageSummary,
)
from page_digest.extraction.quality import (
    is_navigation_text,
    is_quality_key_point,
    is_quality_text,
)
from page_digest.extraction.locator import (
    is_main_content,
    is_in_chrome,
)
from page_digest.extraction.styles import (
    InlineStyleResolver,
    StyleResolver,
)
from page_digest.extraction.traversal import (
    ClassifiedBuckets,
    ClassifiedElement,
    ElementCategory,
    TraversalEngine,
    classify_element,
)
from page_digest.extraction.resolvers import (
    DescriptionResolver,
    TitleResolver,
)
from page_digest.extraction.key_points import KeyPointExtractor
from page_digest.extraction.images import ImageExtractor
from page_digest.extraction.colors import BrandColorResolver
from page_digest.extraction.readability import MetricsCalculator
from page_digest.extraction.content_extractor import ContentExtractor

__all__ = [
    # Models
    "BrandColors",
    "ContentMetrics",
    "ExtractionContext",
    "ExtractionReport",
    "ExtractionState",
    "PageSummary",
    # Filters
    "is_navigation_text",
    "is_quality_key_point",
    "is_quality_text",
    "is_main_content",
    "is_in_chrome",
    # Traversal
    "InlineStyleResolver",
    "StyleResolver",
    "ClassifiedBuckets",
    "ClassifiedElement",
    "ElementCategory",
    "TraversalEngine",
    "classify_element",
    # Finishing stages
    "TitleResolver",
    "DescriptionResolver",
    "KeyPointExtractor",
    "ImageExtractor",
    "BrandColorResolver",
    "MetricsCalculator",
    # Orchestration
    "ContentExtractor",
]
