"""
Tests for main-content location.

Tests content and chrome container detection through the ancestor chain.
"""

import pytest
from bs4 import BeautifulSoup

from page_digest.extraction.locator import (
    ancestors_or_self,
    element_classes,
    is_chrome_container,
    is_content_container,
    is_in_chrome,
    is_main_content,
)


def _find(html: str, selector: str):
    return BeautifulSoup(html, "html.parser").select_one(selector)


class TestContainers:
    """Tests for container predicates."""

    def test_content_containers(self):
        """Semantic tags, classes, ids and roles should mark content."""
        soup = BeautifulSoup(
            '<main></main><article></article><div class="Post"></div>'
            '<div id="content"></div><div role="main"></div><div class="card"></div>',
            "html.parser",
        )
        tags = soup.find_all(recursive=False)

        assert [is_content_container(tag) for tag in tags] == [
            True, True, True, True, True, False]

    def test_chrome_containers(self):
        """Chrome tags, classes and roles should mark chrome."""
        soup = BeautifulSoup(
            '<nav></nav><aside></aside><div class="sidebar"></div>'
            '<div role="banner"></div><section></section>',
            "html.parser",
        )
        tags = soup.find_all(recursive=False)

        assert [is_chrome_container(tag) for tag in tags] == [
            True, True, True, True, False]

    def test_element_classes_lowercased(self):
        """Class names should be normalized to lowercase."""
        tag = _find('<div class="Hero MAIN"></div>', "div")
        assert element_classes(tag) == {"hero", "main"}

    def test_ancestors_or_self_order(self):
        """The chain should start at the element and stop below the document."""
        tag = _find("<main><section><p>x</p></section></main>", "p")
        assert [t.name for t in ancestors_or_self(tag)] == ["p", "section", "main"]


class TestIsMainContent:
    """Tests for is_main_content."""

    def test_inside_main(self):
        """Elements inside <main> should be main content."""
        tag = _find("<main><section><p>Text</p></section></main>", "p")
        assert is_main_content(tag) is True

    def test_inside_footer(self):
        """Elements inside chrome only should not be main content."""
        tag = _find("<footer><p>Text</p></footer>", "p")
        assert is_main_content(tag) is False

    def test_no_landmarks_counts_as_content(self):
        """A page without chrome markers should count as content everywhere."""
        tag = _find("<div><section><p>Text</p></section></div>", "p")
        assert is_main_content(tag) is True

    def test_content_inside_chrome(self):
        """A content container wins even when chrome encloses it."""
        tag = _find('<aside><div class="post"><p>Text</p></div></aside>', "p")
        assert is_main_content(tag) is True

    def test_text_node(self):
        """Text nodes should be judged by their enclosing elements."""
        tag = _find("<nav><span>Link text</span></nav>", "span")
        assert is_main_content(tag.string) is False


class TestIsInChrome:
    """Tests for is_in_chrome."""

    def test_list_in_nav(self):
        """List items under <nav> should be chrome."""
        tag = _find("<nav><ul><li>Archive</li></ul></nav>", "li")
        assert is_in_chrome(tag) is True

    def test_menu_class(self):
        """A menu class anywhere above should mark chrome."""
        tag = _find('<div class="menu"><ul><li>Archive</li></ul></div>', "li")
        assert is_in_chrome(tag) is True

    @pytest.mark.parametrize("html", [
        "<aside><ul><li>Related reading</li></ul></aside>",
        '<div class="sidebar"><ul><li>Related reading</li></ul></div>',
        '<div role="complementary"><ul><li>Related reading</li></ul></div>',
    ])
    def test_sidebar_is_chrome(self, html: str):
        """Sidebars should count as chrome."""
        assert is_in_chrome(_find(html, "li")) is True

    def test_content_does_not_override(self):
        """A sidebar inside an article is still chrome."""
        tag = _find("<article><aside><ul><li>Related</li></ul></aside></article>", "li")
        assert is_in_chrome(tag) is True
        assert is_main_content(tag) is True

    def test_content_list(self):
        """Lists in content should not be chrome."""
        tag = _find("<article><ul><li>Step one</li></ul></article>", "li")
        assert is_in_chrome(tag) is False
