"""
Main-content location by ancestor-chain inspection.

An element is main content when it sits inside a recognized content
container, or when nothing above it is recognized as page chrome. The
second rule means a page without any landmarks counts as main content
everywhere, which keeps extraction working on poorly structured markup.

The container predicates are also used by the traversal engine, which
carries them down the tree instead of re-walking ancestors.
"""

from typing import Iterator

from bs4 import BeautifulSoup
from bs4.element import PageElement, Tag

CONTENT_TAGS = frozenset({"main", "article"})
CONTENT_CLASSES = frozenset({"content", "main", "post", "article"})
CONTENT_IDS = frozenset({"content", "main"})
CONTENT_ROLES = frozenset({"main"})

CHROME_TAGS = frozenset({"nav", "header", "footer", "aside"})
CHROME_CLASSES = frozenset({"nav", "menu", "navigation", "sidebar"})
CHROME_ROLES = frozenset({"navigation", "banner", "contentinfo", "complementary"})


def element_classes(tag: Tag) -> set[str]:
    """Lowercased class names of a tag."""
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    return {c.lower() for c in classes}


def _attr(tag: Tag, name: str) -> str:
    value = tag.get(name) or ""
    if isinstance(value, list):
        value = " ".join(value)
    return value.strip().lower()


def _matches(
    tag: Tag,
    tags: frozenset[str],
    classes: frozenset[str],
    roles: frozenset[str],
    ids: frozenset[str] = frozenset(),
) -> bool:
    if tag.name in tags:
        return True
    if _attr(tag, "role") in roles:
        return True
    if ids and _attr(tag, "id") in ids:
        return True
    return not classes.isdisjoint(element_classes(tag))


def is_content_container(tag: Tag) -> bool:
    """Check whether a tag is itself a recognized content container."""
    return _matches(tag, CONTENT_TAGS, CONTENT_CLASSES, CONTENT_ROLES, CONTENT_IDS)


def is_chrome_container(tag: Tag) -> bool:
    """Check whether a tag is navigation, header, footer or sidebar chrome."""
    return _matches(tag, CHROME_TAGS, CHROME_CLASSES, CHROME_ROLES)


def ancestors_or_self(element: PageElement) -> Iterator[Tag]:
    """Yield the element (if a tag) and then each enclosing tag."""
    if isinstance(element, Tag) and not isinstance(element, BeautifulSoup):
        yield element
    for parent in element.parents:
        if isinstance(parent, BeautifulSoup):
            break
        yield parent


def is_main_content(element: PageElement) -> bool:
    """
    Check whether an element lies in the page's main content.

    True if the ancestor-or-self chain holds a content container, or holds
    no chrome container at all.
    """
    has_chrome = False
    for tag in ancestors_or_self(element):
        if is_content_container(tag):
            return True
        if not has_chrome and is_chrome_container(tag):
            has_chrome = True
    return not has_chrome


def is_in_chrome(element: PageElement) -> bool:
    """
    Check whether an element sits inside page chrome.

    Unlike is_main_content, an enclosing content container does not
    override this: a sidebar nested in an article is still chrome.
    """
    return any(is_chrome_container(tag) for tag in ancestors_or_self(element))
