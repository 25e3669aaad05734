"""
Representative image selection.

The social-preview image always comes first. Page images follow when they
render larger than the size floor on both axes and their URL does not look
like an icon, logo or avatar. All URLs are made absolute before
deduplication; anything that does not resolve to an http(s) URL is dropped.
"""

from urllib.parse import urljoin, urlparse

from page_digest.extraction.models import ExtractionContext
from page_digest.extraction.stages import FinishingStage
from page_digest.extraction.traversal import ClassifiedBuckets, ClassifiedElement
from page_digest.utils.logging import get_logger

logger = get_logger(__name__)

SOCIAL_IMAGE_KEYS = ("og:image", "twitter:image")
EXCLUDED_URL_TERMS = ("icon", "logo", "avatar")


def resolve_base_url(page_url: str, base_href: str = "") -> str:
    """Effective base URL: <base href> resolved against the page URL."""
    if not base_href:
        return page_url
    try:
        return urljoin(page_url, base_href)
    except ValueError:
        return page_url


def make_absolute_url(url: str, base_url: str = "") -> str | None:
    """
    Resolve a URL against a base and validate it.

    Returns:
        Absolute http(s) URL, or None if it cannot be resolved

    >>> make_absolute_url("/img/a.png", "https://example.com/post/1")
    'https://example.com/img/a.png'
    >>> make_absolute_url("data:image/png;base64,AAAA", "https://example.com/") is None
    True
    """
    url = (url or "").strip()
    if not url:
        return None

    try:
        absolute = urljoin(base_url, url) if base_url else url
        parsed = urlparse(absolute)
    except ValueError:
        return None

    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return None
    return absolute


class ImageExtractor(FinishingStage):
    """Selects up to the configured number of representative images."""

    name = "images"

    def is_quality_image(self, image: ClassifiedElement, absolute_url: str) -> bool:
        """Large enough on both axes and not an icon, logo or avatar."""
        floor = self.settings.min_image_size
        if image.width is None or image.height is None:
            return False
        if image.width <= floor or image.height <= floor:
            return False
        lowered = absolute_url.lower()
        return not any(term in lowered for term in EXCLUDED_URL_TERMS)

    def resolve(self, buckets: ClassifiedBuckets, base_url: str = "") -> list[str]:
        base = resolve_base_url(base_url, buckets.metadata.base_href)
        images: dict[str, None] = {}
        limit = self.settings.max_images

        social = buckets.metadata.first(*SOCIAL_IMAGE_KEYS)
        if social:
            absolute = make_absolute_url(social, base)
            if absolute:
                images[absolute] = None
            else:
                logger.debug(f"Dropped unresolvable social image: {social!r}")

        for image in buckets.images:
            if len(images) >= limit:
                break
            absolute = make_absolute_url(image.src, base)
            if absolute and self.is_quality_image(image, absolute):
                images.setdefault(absolute, None)

        return list(images)[:limit]

    def apply(self, buckets: ClassifiedBuckets, context: ExtractionContext) -> None:
        for url in self.resolve(buckets, context.url):
            context.add_image(url)
