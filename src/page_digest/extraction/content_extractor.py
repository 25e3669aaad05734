"""
Extraction orchestrator.

Runs the single traversal, then the six finishing stages, and assembles
the immutable PageSummary. Any failure along the way is logged and turns
into a fallback summary, so callers always get a complete result.
"""

import time

from bs4 import BeautifulSoup
from bs4.element import Tag

from page_digest.config.settings import ExtractionSettings
from page_digest.core.exceptions import (
    ExtractionError,
    ResolutionError,
    TraversalError,
)
from page_digest.extraction.colors import BrandColorResolver
from page_digest.extraction.images import ImageExtractor
from page_digest.extraction.key_points import KeyPointExtractor
from page_digest.extraction.models import (
    BrandColors,
    ContentMetrics,
    ExtractionContext,
    ExtractionReport,
    ExtractionState,
    PageSummary,
)
from page_digest.extraction.readability import MetricsCalculator
from page_digest.extraction.resolvers import DescriptionResolver, TitleResolver
from page_digest.extraction.stages import FinishingStage
from page_digest.extraction.styles import StyleResolver
from page_digest.extraction.traversal import ClassifiedBuckets, TraversalEngine
from page_digest.utils.logging import get_logger, get_logger_with_context

logger = get_logger(__name__)

DocumentInput = str | bytes | Tag


class ContentExtractor:
    """
    Turns a document tree (or raw HTML) into a PageSummary.

    The extractor holds only settings and the style resolver; every call
    gets a fresh accumulator, so one instance can be reused freely.

    Example:
        >>> extractor = ContentExtractor()
        >>> summary = extractor.extract(html, "https://example.com/post")
        >>> print(summary.title)
        >>> print(summary.brand_colors.primary)
    """

    def __init__(
        self,
        settings: ExtractionSettings | None = None,
        style_resolver: StyleResolver | None = None,
    ) -> None:
        """
        Initialize content extractor.

        Args:
            settings: Extraction limits and defaults
            style_resolver: Source of computed style, inline styles by default
        """
        self.settings = settings or ExtractionSettings()
        self.engine = TraversalEngine(style_resolver)
        self.stages: list[FinishingStage] = [
            TitleResolver(self.settings),
            DescriptionResolver(self.settings),
            KeyPointExtractor(self.settings),
            ImageExtractor(self.settings),
            BrandColorResolver(self.settings),
            MetricsCalculator(self.settings),
        ]

    def extract(self, document: DocumentInput, url: str = "") -> PageSummary:
        """
        Extract a summary from a document.

        Args:
            document: Parsed BeautifulSoup/Tag or raw HTML
            url: Page URL, used as the base for relative image URLs

        Returns:
            PageSummary, the fallback summary if extraction failed
        """
        return self.extract_with_report(document, url).summary

    def extract_with_report(self, document: DocumentInput, url: str = "") -> ExtractionReport:
        """
        Extract a summary together with metrics and timing.

        Args:
            document: Parsed BeautifulSoup/Tag or raw HTML
            url: Page URL

        Returns:
            ExtractionReport whose state tells whether the fallback was used
        """
        log = get_logger_with_context(__name__, url=url or "-")
        start = time.perf_counter()
        state = ExtractionState.IDLE
        context = ExtractionContext(url=url)
        nodes_processed = 0

        try:
            state = ExtractionState.TRAVERSING
            buckets = self.engine.traverse(self._parse(document))
            nodes_processed = buckets.nodes_processed

            state = ExtractionState.RESOLVING
            for stage in self.stages:
                self._run_stage(stage, buckets, context)

            summary = self._assemble(context)
            metrics = context.metrics
            state = ExtractionState.ASSEMBLED

        except ExtractionError as e:
            state = ExtractionState.FAILED
            log.warning(f"Content extraction failed, returning fallback: {e}")
            summary = self._fallback(document, url)
            metrics = ContentMetrics()
            state = ExtractionState.FALLBACK_ASSEMBLED

        duration_ms = (time.perf_counter() - start) * 1000
        log.debug(
            f"Extraction {state.value} in {duration_ms:.1f}ms "
            f"({nodes_processed} nodes, {len(summary.key_points)} key points, "
            f"{len(summary.images)} images)"
        )

        return ExtractionReport(
            summary=summary,
            metrics=metrics,
            state=state,
            nodes_processed=nodes_processed,
            duration_ms=duration_ms,
        )

    def _parse(self, document: DocumentInput) -> Tag:
        """Parse raw HTML; pass trees through unchanged."""
        if isinstance(document, Tag):
            return document
        if isinstance(document, (str, bytes)):
            try:
                return BeautifulSoup(document, "html.parser")
            except Exception as e:
                raise TraversalError(f"Failed to parse HTML: {e}") from e
        raise TraversalError(
            "Unsupported document type",
            details={"type": type(document).__name__},
        )

    def _run_stage(
        self,
        stage: FinishingStage,
        buckets: ClassifiedBuckets,
        context: ExtractionContext,
    ) -> None:
        try:
            stage.apply(buckets, context)
        except Exception as e:
            raise ResolutionError(
                f"Stage '{stage.name}' failed: {e}",
                stage=stage.name,
                url=context.url,
            ) from e

    def _assemble(self, context: ExtractionContext) -> PageSummary:
        try:
            return context.build_summary(
                max_key_points=self.settings.max_key_points,
                max_images=self.settings.max_images,
            )
        except ValueError as e:
            raise ExtractionError(str(e), url=context.url) from e

    def _fallback(self, document: DocumentInput, url: str) -> PageSummary:
        """Minimal summary built without trusting the traversal."""
        return PageSummary(
            url=url,
            title=self._raw_title(document) or self.settings.fallback_title,
            description=self.settings.fallback_description,
            key_points=(),
            images=(),
            brand_colors=BrandColors(
                primary=self.settings.default_primary_color,
                secondary=self.settings.default_secondary_color,
            ),
        )

    def _raw_title(self, document: DocumentInput) -> str | None:
        """The document's <title> text, if it can be read at all."""
        try:
            if isinstance(document, (str, bytes)):
                document = BeautifulSoup(document, "html.parser")
            if not isinstance(document, Tag):
                return None
            title = document.find("title")
            if title is None:
                return None
            return title.get_text(" ", strip=True) or None
        except Exception as e:
            logger.debug(f"Could not read document title for fallback: {e}")
            return None
