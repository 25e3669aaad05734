"""
Text metrics over the raw text stream.

These numbers are informational and never influence the summary itself.
"""

import re

from page_digest.extraction.models import ContentMetrics, ExtractionContext
from page_digest.extraction.stages import FinishingStage
from page_digest.extraction.traversal import ClassifiedBuckets

_SENTENCE_PATTERN = re.compile(r"[.!?]+")
_VOWEL_GROUP_PATTERN = re.compile(r"[aeiouy]+")
_NON_LETTER_PATTERN = re.compile(r"[^a-z]")


def count_words(text: str) -> int:
    """Number of whitespace-separated tokens."""
    return len(text.split())


def count_syllables(word: str) -> int:
    """
    Estimate syllables as vowel groups, ignoring a trailing silent 'e'.

    >>> count_syllables("reading")
    2
    >>> count_syllables("bake")
    1
    """
    letters = _NON_LETTER_PATTERN.sub("", word.lower())
    if not letters:
        return 0
    if letters.endswith("e") and not letters.endswith("le") and len(letters) > 2:
        letters = letters[:-1]
    return max(1, len(_VOWEL_GROUP_PATTERN.findall(letters)))


def readability_score(text: str) -> float:
    """
    Flesch Reading Ease clamped to [0, 100] and scaled to [0, 1].

    Returns 0.0 for text without words.
    """
    words = text.split()
    if not words:
        return 0.0

    sentences = [s for s in _SENTENCE_PATTERN.split(text) if s.strip()]
    sentence_count = max(1, len(sentences))
    syllables = sum(count_syllables(word) for word in words)

    flesch = (
        206.835
        - 1.015 * (len(words) / sentence_count)
        - 84.6 * (syllables / len(words))
    )
    return max(0.0, min(100.0, flesch)) / 100


def semantic_density(text: str) -> float:
    """Unique lowercase words divided by total words; 0.0 for empty text."""
    words = text.lower().split()
    if not words:
        return 0.0
    return len(set(words)) / len(words)


def compute_metrics(text: str) -> ContentMetrics:
    """Compute all metrics for a block of text."""
    return ContentMetrics(
        word_count=count_words(text),
        readability_score=readability_score(text),
        semantic_density=semantic_density(text),
    )


class MetricsCalculator(FinishingStage):
    """Fills in word count, readability and semantic density."""

    name = "metrics"

    def resolve(self, buckets: ClassifiedBuckets, base_url: str = "") -> ContentMetrics:
        return compute_metrics(buckets.raw_text)

    def apply(self, buckets: ClassifiedBuckets, context: ExtractionContext) -> None:
        context.metrics = self.resolve(buckets, context.url)
