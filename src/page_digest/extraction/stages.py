"""
Base class for finishing stages.

A finishing stage reads the classified buckets and writes exactly one
field of the extraction context. Stages do not depend on each other.
"""

from abc import ABC, abstractmethod
from typing import Any

from page_digest.config.settings import ExtractionSettings
from page_digest.extraction.models import ExtractionContext
from page_digest.extraction.traversal import ClassifiedBuckets


class FinishingStage(ABC):
    """One independent step that turns buckets into a summary field."""

    name: str = "stage"

    def __init__(self, settings: ExtractionSettings | None = None) -> None:
        self.settings = settings or ExtractionSettings()

    @abstractmethod
    def resolve(self, buckets: ClassifiedBuckets, base_url: str = "") -> Any:
        """Compute this stage's value from the buckets."""

    @abstractmethod
    def apply(self, buckets: ClassifiedBuckets, context: ExtractionContext) -> None:
        """Compute the value and store it on the context."""
