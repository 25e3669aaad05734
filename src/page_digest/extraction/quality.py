"""
Quality predicates for candidate text.

Pure functions deciding whether a string is usable content rather than
chrome, boilerplate or a stray label. They do not touch the document tree
and can be used on any string.
"""

import re

MIN_TEXT_LENGTH = 10
MAX_TEXT_LENGTH = 300

MIN_KEY_POINT_LENGTH = 15
MAX_KEY_POINT_LENGTH = 200

# Words that mark navigation and page chrome. Matched against the whole
# string and as whole words inside it.
NAVIGATION_TERMS = frozenset({
    "menu",
    "navigation",
    "nav",
    "home",
    "login",
    "signin",
    "signup",
    "search",
    "skip",
    "toggle",
    "breadcrumb",
    "sidebar",
    "footer",
    "header",
})

_NAVIGATION_WORD_PATTERN = re.compile(
    r"\b(" + "|".join(sorted(NAVIGATION_TERMS)) + r")\b"
)

EXCLUDE_PATTERNS = [
    # Chrome-leading phrases ("Skip to content", "About us", "Sign in")
    re.compile(r"^(skip|menu|nav|home|about|contact|login|sign)\b", re.I),
    # Calls to action
    re.compile(r"^(more|read more|click here|learn more|see more|show more)$", re.I),
    # Single-word acknowledgements
    re.compile(r"^(yes|no|ok|okay|cancel|submit|close|accept|dismiss)$", re.I),
    # Pure numerals
    re.compile(r"^[0-9]+$"),
    # 1-3 letter tokens
    re.compile(r"^[a-z]{1,3}$", re.I),
    # Legal boilerplate
    re.compile(r"cookie|privacy|terms|disclaimer", re.I),
]


def is_navigation_text(text: str) -> bool:
    """
    Check whether text is, or contains as a whole word, a navigation term.

    >>> is_navigation_text("Main Menu")
    True
    >>> is_navigation_text("Menus of the world's great restaurants")
    False
    """
    lowered = text.strip().lower()
    if lowered in NAVIGATION_TERMS:
        return True
    return _NAVIGATION_WORD_PATTERN.search(lowered) is not None


def matches_exclusion_pattern(text: str) -> bool:
    """Check text against the fixed boilerplate exclusion patterns."""
    return any(pattern.search(text) for pattern in EXCLUDE_PATTERNS)


def is_quality_text(text: str | None, min_length: int = MIN_TEXT_LENGTH) -> bool:
    """
    Decide whether a candidate string is acceptable content.

    Rejects text outside [min_length, 300] characters, text matching an
    exclusion pattern and text that is or contains a navigation term.

    Args:
        text: Candidate string
        min_length: Minimum length after trimming

    Returns:
        True if the text passes every filter

    >>> is_quality_text("ok")
    False
    >>> is_quality_text("menu")
    False
    >>> is_quality_text("Seven practical ways to cut your energy bill")
    True
    """
    if not text:
        return False

    candidate = text.strip()
    if len(candidate) < min_length or len(candidate) > MAX_TEXT_LENGTH:
        return False

    if matches_exclusion_pattern(candidate):
        return False

    return not is_navigation_text(candidate)


def is_quality_key_point(text: str | None) -> bool:
    """Stricter variant of is_quality_text bounded to [15, 200] characters."""
    if not is_quality_text(text):
        return False
    length = len(text.strip())
    return MIN_KEY_POINT_LENGTH <= length <= MAX_KEY_POINT_LENGTH
