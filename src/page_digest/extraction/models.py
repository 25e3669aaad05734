"""
Data models for page summaries.

PageSummary is the immutable value handed to callers. ExtractionContext
is the mutable accumulator that exists only for the duration of one
extraction call and is filled in by the finishing stages.
"""

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class BrandColors:
    """Primary/secondary color pair as lowercase #rrggbb strings."""

    primary: str
    secondary: str

    def to_dict(self) -> dict:
        return {"primary": self.primary, "secondary": self.secondary}


@dataclass(frozen=True)
class ContentMetrics:
    """
    Informational text metrics computed from the raw text stream.

    Attributes:
        word_count: Whitespace-separated tokens
        readability_score: Flesch Reading Ease normalized to [0, 1]
        semantic_density: Unique lowercase words / total words
    """

    word_count: int = 0
    readability_score: float = 0.0
    semantic_density: float = 0.0

    def to_dict(self) -> dict:
        return {
            "word_count": self.word_count,
            "readability_score": round(self.readability_score, 4),
            "semantic_density": round(self.semantic_density, 4),
        }


@dataclass(frozen=True)
class PageSummary:
    """
    Compact structured summary of one page.

    Title and description are never empty, key points are unique ignoring
    case and capped at 8, images are absolute URLs capped at 5.
    """

    url: str
    title: str
    description: str
    key_points: tuple[str, ...]
    images: tuple[str, ...]
    brand_colors: BrandColors

    def to_dict(self) -> dict:
        """Convert to a plain dictionary."""
        return {
            "url": self.url,
            "title": self.title,
            "description": self.description,
            "key_points": list(self.key_points),
            "images": list(self.images),
            "brand_colors": self.brand_colors.to_dict(),
        }


class ExtractionState(str, Enum):
    """Lifecycle of one extraction call."""

    IDLE = "idle"
    TRAVERSING = "traversing"
    RESOLVING = "resolving"
    ASSEMBLED = "assembled"
    FAILED = "failed"
    FALLBACK_ASSEMBLED = "fallback_assembled"


@dataclass(frozen=True)
class ExtractionReport:
    """A summary together with metrics and timing of the call that built it."""

    summary: PageSummary
    metrics: ContentMetrics
    state: ExtractionState
    nodes_processed: int = 0
    duration_ms: float = 0.0

    @property
    def succeeded(self) -> bool:
        """True unless the fallback summary was returned."""
        return self.state == ExtractionState.ASSEMBLED

    def to_dict(self) -> dict:
        return {
            "summary": self.summary.to_dict(),
            "metrics": self.metrics.to_dict(),
            "state": self.state.value,
            "nodes_processed": self.nodes_processed,
            "duration_ms": round(self.duration_ms, 2),
        }


@dataclass
class ExtractionContext:
    """
    Mutable accumulator for a single extraction call.

    Key points are deduplicated ignoring case, image URLs exactly; both
    keep insertion order.
    """

    url: str
    title: str = ""
    description: str = ""
    brand_colors: BrandColors | None = None
    metrics: ContentMetrics = field(default_factory=ContentMetrics)
    _key_points: dict[str, str] = field(default_factory=dict, repr=False)
    _images: dict[str, None] = field(default_factory=dict, repr=False)

    @property
    def key_points(self) -> list[str]:
        return list(self._key_points.values())

    @property
    def images(self) -> list[str]:
        return list(self._images)

    def add_key_point(self, text: str) -> bool:
        """Add a key point unless an equal one (ignoring case) is present."""
        normalized = text.lower()
        if normalized in self._key_points:
            return False
        self._key_points[normalized] = text
        return True

    def replace_key_points(self, ranked: list[str]) -> None:
        """Replace the key points with an already ranked list."""
        self._key_points.clear()
        for text in ranked:
            self.add_key_point(text)

    def add_image(self, url: str) -> bool:
        """Add an image URL unless already present."""
        if url in self._images:
            return False
        self._images[url] = None
        return True

    def build_summary(self, max_key_points: int, max_images: int) -> PageSummary:
        """
        Freeze the accumulated fields into a PageSummary.

        Raises:
            ValueError: If a required field was never resolved
        """
        if not self.title or not self.description:
            raise ValueError("title and description must be resolved before assembly")
        if self.brand_colors is None:
            raise ValueError("brand colors must be resolved before assembly")

        return PageSummary(
            url=self.url,
            title=self.title,
            description=self.description,
            key_points=tuple(self.key_points[:max_key_points]),
            images=tuple(self.images[:max_images]),
            brand_colors=self.brand_colors,
        )
