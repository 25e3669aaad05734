"""
Tests for the text quality filter.

Tests length bounds, exclusion patterns and the navigation vocabulary.
"""

import pytest

from page_digest.extraction.quality import (
    MAX_TEXT_LENGTH,
    is_navigation_text,
    is_quality_key_point,
    is_quality_text,
    matches_exclusion_pattern,
)


CLEAN_SENTENCE = (
    "Gardeners who rotate crops each season see healthier soil and larger harvests. " * 4
)[:250]


class TestIsQualityText:
    """Tests for is_quality_text."""

    def test_too_short_rejected(self):
        """Strings under ten characters should be rejected."""
        assert is_quality_text("ok") is False
        assert is_quality_text("Fresh figs") is True

    def test_navigation_term_rejected(self):
        """A bare navigation term should be rejected."""
        assert is_quality_text("menu") is False

    def test_long_clean_sentence_accepted(self):
        """A 250-character clean sentence should pass."""
        assert len(CLEAN_SENTENCE) == 250
        assert is_quality_text(CLEAN_SENTENCE) is True

    def test_too_long_rejected(self):
        """Strings over the maximum length should be rejected."""
        text = "a" * 10 + " word" * ((MAX_TEXT_LENGTH // 5) + 1)
        assert len(text) > MAX_TEXT_LENGTH
        assert is_quality_text(text) is False

    def test_length_measured_after_trimming(self):
        """Surrounding whitespace should not count towards the length."""
        assert is_quality_text("   short    ") is False
        assert is_quality_text("   Roasted beet salad   ") is True

    def test_empty_and_none(self):
        """Empty input should be rejected."""
        assert is_quality_text("") is False
        assert is_quality_text(None) is False

    def test_custom_min_length(self):
        """min_length should be configurable."""
        assert is_quality_text("Bean soup", min_length=5) is True
        assert is_quality_text("Bean soup", min_length=12) is False

    @pytest.mark.parametrize("text", [
        "Skip to content",
        "About our company",
        "Contact the editors",
        "Sign in to continue",
        "Read more",
        "Click here",
        "1234567890123",
        "We use cookies to improve things",
        "Privacy statement for readers",
        "Terms and conditions apply here",
    ])
    def test_boilerplate_rejected(self, text: str):
        """Boilerplate and chrome phrases should be rejected."""
        assert is_quality_text(text) is False

    @pytest.mark.parametrize("text", [
        "Open the search panel to begin",
        "Main navigation links",
        "Toggle dark mode for readers",
        "Footer links for the archive",
    ])
    def test_navigation_words_rejected(self, text: str):
        """Text containing a navigation word should be rejected."""
        assert is_quality_text(text) is False

    def test_navigation_word_inside_longer_word_allowed(self):
        """Only whole-word navigation terms should count."""
        assert is_quality_text("Homemade bread in under an hour") is True
        assert is_quality_text("Menus of the great coastal kitchens") is True


class TestIsQualityKeyPoint:
    """Tests for is_quality_key_point."""

    def test_short_quality_text_rejected(self):
        """Key points need at least fifteen characters."""
        assert is_quality_text("Fresh figs here") is True
        assert is_quality_key_point("Fresh figs") is False
        assert is_quality_key_point("Fresh figs from the market") is True

    def test_upper_bound(self):
        """Key points longer than 200 characters should be rejected."""
        assert is_quality_text(CLEAN_SENTENCE) is True
        assert is_quality_key_point(CLEAN_SENTENCE) is False
        assert is_quality_key_point(CLEAN_SENTENCE[:200]) is True

    def test_none(self):
        """None should be rejected."""
        assert is_quality_key_point(None) is False


class TestHelpers:
    """Tests for the individual predicates."""

    def test_is_navigation_text(self):
        """Navigation vocabulary should match exactly or as a word."""
        assert is_navigation_text("Breadcrumb") is True
        assert is_navigation_text("the sidebar widgets") is True
        assert is_navigation_text("Navigational charts of the coast") is False

    def test_matches_exclusion_pattern(self):
        """Exclusion patterns should be case-insensitive."""
        assert matches_exclusion_pattern("CANCEL") is True
        assert matches_exclusion_pattern("abc") is True
        assert matches_exclusion_pattern("Crop rotation basics") is False
