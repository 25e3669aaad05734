"""
Title and description resolution.

Both resolvers are strict priority chains: each candidate is looked at only
when every earlier one failed, and the chain ends in a literal default so
the result is never empty.
"""

import re

from page_digest.extraction.models import ExtractionContext
from page_digest.extraction.quality import is_quality_text
from page_digest.extraction.stages import FinishingStage
from page_digest.extraction.traversal import ClassifiedBuckets

SOCIAL_TITLE_KEYS = ("og:title", "twitter:title")
SOCIAL_DESCRIPTION_KEYS = ("og:description", "twitter:description")

# Minimum length for a heading of any level used as the title
MIN_HEADING_TITLE_LENGTH = 10

# " - ", " | ", " – ", " — ", "|" and ": " separate a site suffix from the title
_TITLE_SEPARATOR_PATTERN = re.compile(r"\s+[-–—]\s+|\s*\|\s*|\s*:\s+")


def clean_title(title: str) -> str:
    """
    Strip the segment after the last title separator.

    >>> clean_title("Bread Basics: A Primer | Baker's Journal")
    'Bread Basics: A Primer'
    >>> clean_title("Well-known sourdough starters")
    'Well-known sourdough starters'
    """
    title = title.strip()
    matches = list(_TITLE_SEPARATOR_PATTERN.finditer(title))
    if not matches:
        return title
    return title[: matches[-1].start()].strip()


class TitleResolver(FinishingStage):
    """
    Resolves the page title.

    Priority:
    1. Social-preview title metadata
    2. Document <title> without its site suffix
    3. First main-content h1
    4. First main-content heading of any level
    5. The configured default ("Content Page")
    """

    name = "title"

    def resolve(self, buckets: ClassifiedBuckets, base_url: str = "") -> str:
        metadata = buckets.metadata

        for key in SOCIAL_TITLE_KEYS:
            candidate = metadata.meta.get(key, "").strip()
            if is_quality_text(candidate):
                return candidate

        if metadata.title:
            candidate = clean_title(metadata.title)
            if is_quality_text(candidate):
                return candidate

        for heading in buckets.headings:
            if heading.level == 1 and heading.is_main_content and is_quality_text(heading.text):
                return heading.text

        for heading in buckets.headings:
            if heading.is_main_content and is_quality_text(heading.text, min_length=MIN_HEADING_TITLE_LENGTH):
                return heading.text

        return self.settings.default_title

    def apply(self, buckets: ClassifiedBuckets, context: ExtractionContext) -> None:
        context.title = self.resolve(buckets, context.url)


class DescriptionResolver(FinishingStage):
    """
    Resolves the page description.

    Priority:
    1. `description` meta tag
    2. Social-preview description metadata
    3. First suitably sized paragraph, main content first, truncated
    4. The configured default ("No description available")
    """

    name = "description"

    def resolve(self, buckets: ClassifiedBuckets, base_url: str = "") -> str:
        metadata = buckets.metadata
        min_meta_length = self.settings.min_meta_description_length

        for key in ("description", *SOCIAL_DESCRIPTION_KEYS):
            candidate = metadata.meta.get(key, "").strip()
            if len(candidate) > min_meta_length:
                return candidate

        paragraph = self._first_paragraph(buckets, main_only=True)
        if paragraph is None:
            paragraph = self._first_paragraph(buckets, main_only=False)
        if paragraph is not None:
            return paragraph[: self.settings.max_description_length].rstrip()

        return self.settings.default_description

    def _first_paragraph(self, buckets: ClassifiedBuckets, main_only: bool) -> str | None:
        low = self.settings.min_paragraph_length
        high = self.settings.max_paragraph_length
        for paragraph in buckets.paragraphs:
            if main_only and not paragraph.is_main_content:
                continue
            if low <= len(paragraph.text) < high:
                return paragraph.text
        return None

    def apply(self, buckets: ClassifiedBuckets, context: ExtractionContext) -> None:
        context.description = self.resolve(buckets, context.url)
