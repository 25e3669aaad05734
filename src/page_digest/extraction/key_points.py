"""
Key-point extraction and ranking.

Candidates come from three sources, merged in this order into one
case-insensitive deduplicating set:

- sub-headings (h2-h6) in main content
- the first sentence of list items outside page chrome
- emphasized inline text in main content

The merged set is ranked by an importance score that favors actionable,
numeric and interrogative phrasing, then cut to the configured maximum.
"""

import re

from page_digest.extraction.models import ExtractionContext
from page_digest.extraction.quality import is_quality_key_point, is_quality_text
from page_digest.extraction.stages import FinishingStage
from page_digest.extraction.traversal import ClassifiedBuckets
from page_digest.utils.logging import get_logger

logger = get_logger(__name__)

ACTION_WORDS = ("how", "why", "what", "when", "guide", "tips", "step")

MAX_LIST_SENTENCE_LENGTH = 150

LENGTH_WEIGHT = 0.1
DIGIT_BONUS = 10.0
QUESTION_BONUS = 15.0
ACTION_BONUS = 20.0

_SENTENCE_SPLIT_PATTERN = re.compile(r"[.!?]+")
_DIGIT_PATTERN = re.compile(r"\d")


def importance_score(text: str) -> float:
    """
    Score a key point.

    0.1 per character, +10 for a digit, +15 for a question mark and +20 for
    an actionable word (how, why, what, when, guide, tips, step).

    >>> round(importance_score("Ten quick wins"), 1)
    1.4
    >>> round(importance_score("How to plant 3 trees?"), 1)
    47.1
    """
    score = len(text) * LENGTH_WEIGHT

    if _DIGIT_PATTERN.search(text):
        score += DIGIT_BONUS
    if "?" in text:
        score += QUESTION_BONUS

    lowered = text.lower()
    if any(word in lowered for word in ACTION_WORDS):
        score += ACTION_BONUS

    return score


def first_sentence(text: str) -> str:
    """Text up to the first sentence terminator, trimmed."""
    return _SENTENCE_SPLIT_PATTERN.split(text, maxsplit=1)[0].strip()


class KeyPointExtractor(FinishingStage):
    """
    Builds the ranked key-point list.

    Example:
        >>> extractor = KeyPointExtractor()
        >>> points = extractor.resolve(buckets)
        >>> len(points) <= 8
        True
    """

    name = "key_points"

    def collect(self, buckets: ClassifiedBuckets) -> list[str]:
        """
        Gather deduplicated candidates in source order.

        Deduplication is case-insensitive on the full source text, and
        the emitted strings are themselves unique ignoring case.
        """
        candidates: dict[str, str] = {}
        seen_sources: set[str] = set()

        def add(source_text: str, emitted: str) -> None:
            source_key = source_text.lower()
            emitted_key = emitted.lower()
            if source_key in seen_sources or emitted_key in candidates:
                return
            seen_sources.add(source_key)
            candidates[emitted_key] = emitted

        for heading in buckets.headings:
            if heading.level == 1 or not heading.is_main_content:
                continue
            if is_quality_key_point(heading.text):
                add(heading.text, heading.text)

        for item in buckets.list_items:
            if item.in_chrome_region or not is_quality_key_point(item.text):
                continue
            sentence = first_sentence(item.text)
            if len(sentence) < MAX_LIST_SENTENCE_LENGTH and is_quality_text(sentence):
                add(item.text, sentence)

        for element in buckets.emphasis:
            if element.is_main_content and is_quality_key_point(element.text):
                add(element.text, element.text)

        return list(candidates.values())

    def rank(self, candidates: list[str]) -> list[str]:
        """Sort by importance, highest first, keeping source order on ties."""
        ranked = sorted(candidates, key=importance_score, reverse=True)
        return ranked[: self.settings.max_key_points]

    def resolve(self, buckets: ClassifiedBuckets, base_url: str = "") -> list[str]:
        candidates = self.collect(buckets)
        ranked = self.rank(candidates)
        logger.debug(f"Ranked {len(ranked)} of {len(candidates)} key point candidates")
        return ranked

    def apply(self, buckets: ClassifiedBuckets, context: ExtractionContext) -> None:
        context.replace_key_points(self.resolve(buckets, context.url))
