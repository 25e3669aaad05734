"""
Single-pass document traversal and element classification.

The TraversalEngine walks the tree exactly once, in document order,
rejecting invisible and non-content subtrees. Each element it keeps is
snapshotted into a ClassifiedElement together with its region flags
(inside content, inside chrome), so the finishing
stages work from the buckets alone and never query the tree again.

Head metadata (title, meta tags, base href) and root CSS custom
properties are harvested during the same walk.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

from page_digest.core.exceptions import TraversalError
from page_digest.extraction.locator import (
    element_classes,
    is_chrome_container,
    is_content_container,
)
from page_digest.extraction.styles import (
    InlineStyleResolver,
    StyleResolver,
    background_color,
    custom_properties,
    is_hidden,
    parse_inline_style,
)
from page_digest.utils.logging import get_logger

logger = get_logger(__name__)

HEADING_TAGS = {"h1": 1, "h2": 2, "h3": 3, "h4": 4, "h5": 5, "h6": 6}
EMPHASIS_TAGS = frozenset({"strong", "b", "em", "i", "mark"})

# Subtrees that never hold readable content
NON_CONTENT_TAGS = frozenset({
    "script",
    "style",
    "noscript",
    "template",
    "iframe",
    "embed",
    "object",
    "svg",
    "canvas",
})

MIN_TEXT_SEGMENT_LENGTH = 5

_ROOT_RULE_PATTERN = re.compile(r"(?:^|[\s,}])(?::root|html)\s*\{([^}]*)\}", re.I)
_WHITESPACE_PATTERN = re.compile(r"\s+")


class ElementCategory(str, Enum):
    """Structural role of an element."""

    HEADING = "heading"
    LIST_ITEM = "list_item"
    EMPHASIS = "emphasis"
    IMAGE = "image"
    PARAGRAPH = "paragraph"
    OTHER = "other"


@dataclass(frozen=True)
class ClassifiedElement:
    """
    Snapshot of one element taken during traversal.

    Region flags cover the element itself and all of its ancestors.
    """

    category: ElementCategory
    tag_name: str
    text: str
    level: int = 0  # For headings (1-6)
    in_content_region: bool = False
    in_chrome_region: bool = False
    src: str = ""  # For images
    width: float | None = None
    height: float | None = None

    @property
    def is_main_content(self) -> bool:
        """Content container above, or no chrome container above."""
        return self.in_content_region or not self.in_chrome_region


@dataclass(frozen=True)
class ColorSample:
    """Background color of an element that may carry the brand color."""

    slot: int
    tag_name: str
    background: str


# Brand color sample slots in priority order
COLOR_SAMPLE_SLOTS = ("header", "nav", ".navbar/.header", "button/.btn")


@dataclass(frozen=True)
class PageMetadata:
    """Document-level metadata harvested from the head and root styles."""

    title: str = ""
    meta: dict[str, str] = field(default_factory=dict)
    base_href: str = ""
    custom_properties: dict[str, str] = field(default_factory=dict)

    def first(self, *names: str) -> str:
        """Return the first non-empty meta value among names."""
        for name in names:
            value = self.meta.get(name.lower(), "")
            if value:
                return value
        return ""


@dataclass(frozen=True)
class ClassifiedBuckets:
    """
    Everything the finishing stages need, built by one traversal.

    Lists are in document order.
    """

    headings: tuple[ClassifiedElement, ...] = ()
    list_items: tuple[ClassifiedElement, ...] = ()
    emphasis: tuple[ClassifiedElement, ...] = ()
    images: tuple[ClassifiedElement, ...] = ()
    paragraphs: tuple[ClassifiedElement, ...] = ()
    color_samples: tuple[ColorSample, ...] = ()
    text_segments: tuple[str, ...] = ()
    metadata: PageMetadata = field(default_factory=PageMetadata)
    nodes_processed: int = 0

    @property
    def raw_text(self) -> str:
        """The raw text stream joined with spaces."""
        return " ".join(self.text_segments)


def classify_element(tag: Tag) -> tuple[ElementCategory, int]:
    """
    Assign a structural category to an element.

    Returns:
        (category, heading level or 0)
    """
    name = tag.name.lower()

    if name in HEADING_TAGS:
        return ElementCategory.HEADING, HEADING_TAGS[name]
    if name == "li":
        return ElementCategory.LIST_ITEM, 0
    if name in EMPHASIS_TAGS:
        return ElementCategory.EMPHASIS, 0
    if name == "img":
        return ElementCategory.IMAGE, 0
    if name == "p":
        return ElementCategory.PARAGRAPH, 0
    return ElementCategory.OTHER, 0


def _clean_text(text: str) -> str:
    return _WHITESPACE_PATTERN.sub(" ", text).strip()


def _color_slots(tag: Tag) -> list[int]:
    """Indexes into COLOR_SAMPLE_SLOTS that this element fills."""
    classes = element_classes(tag)
    slots = []
    if tag.name == "header":
        slots.append(0)
    if tag.name == "nav":
        slots.append(1)
    if "navbar" in classes or "header" in classes:
        slots.append(2)
    if tag.name == "button" or "btn" in classes:
        slots.append(3)
    return slots


@dataclass
class _BucketBuilder:
    headings: list[ClassifiedElement] = field(default_factory=list)
    list_items: list[ClassifiedElement] = field(default_factory=list)
    emphasis: list[ClassifiedElement] = field(default_factory=list)
    images: list[ClassifiedElement] = field(default_factory=list)
    paragraphs: list[ClassifiedElement] = field(default_factory=list)
    color_samples: list[ColorSample] = field(default_factory=list)
    text_segments: list[str] = field(default_factory=list)
    title: str = ""
    meta: dict[str, str] = field(default_factory=dict)
    base_href: str = ""
    custom_properties: dict[str, str] = field(default_factory=dict)
    nodes_processed: int = 0

    def freeze(self) -> ClassifiedBuckets:
        return ClassifiedBuckets(
            headings=tuple(self.headings),
            list_items=tuple(self.list_items),
            emphasis=tuple(self.emphasis),
            images=tuple(self.images),
            paragraphs=tuple(self.paragraphs),
            color_samples=tuple(sorted(self.color_samples, key=lambda s: s.slot)),
            text_segments=tuple(self.text_segments),
            metadata=PageMetadata(
                title=self.title,
                meta=dict(self.meta),
                base_href=self.base_href,
                custom_properties=dict(self.custom_properties),
            ),
            nodes_processed=self.nodes_processed,
        )


class TraversalEngine:
    """
    Walks a document tree once and buckets its elements.

    Example:
        >>> soup = BeautifulSoup("<main><h2>Why tides change</h2></main>", "html.parser")
        >>> buckets = TraversalEngine().traverse(soup)
        >>> buckets.headings[0].text
        'Why tides change'
    """

    def __init__(self, style_resolver: StyleResolver | None = None) -> None:
        """
        Initialize traversal engine.

        Args:
            style_resolver: Source of computed style. Defaults to inline styles.
        """
        self.style_resolver = style_resolver or InlineStyleResolver()

    def traverse(self, root: Tag) -> ClassifiedBuckets:
        """
        Walk the tree under root in document order.

        Args:
            root: Parsed document or any element

        Returns:
            Immutable classified buckets

        Raises:
            TraversalError: If the tree cannot be walked
        """
        if not isinstance(root, Tag):
            raise TraversalError(
                "Unsupported document node",
                details={"type": type(root).__name__},
            )

        try:
            builder = self._walk(root)
        except TraversalError:
            raise
        except Exception as e:
            raise TraversalError(f"Document traversal failed: {e}") from e

        logger.debug(
            f"Traversal visited {builder.nodes_processed} nodes: "
            f"{len(builder.headings)} headings, {len(builder.list_items)} list items, "
            f"{len(builder.emphasis)} emphasis, {len(builder.images)} images, "
            f"{len(builder.paragraphs)} paragraphs"
        )
        return builder.freeze()

    def _walk(self, root: Tag) -> _BucketBuilder:
        builder = _BucketBuilder()

        # (node, in_content, in_chrome)
        if isinstance(root, BeautifulSoup):
            stack = [(child, False, False) for child in reversed(root.contents)]
        else:
            stack = [(root, False, False)]

        while stack:
            node, in_content, in_chrome = stack.pop()
            builder.nodes_processed += 1

            if isinstance(node, Tag):
                flags = self._visit_element(node, builder, in_content, in_chrome)
                if flags is None:
                    continue
                stack.extend(
                    (child, *flags) for child in reversed(node.contents)
                )
            elif isinstance(node, NavigableString) and not isinstance(node, PreformattedString):
                text = str(node).strip()
                if len(text) > MIN_TEXT_SEGMENT_LENGTH:
                    builder.text_segments.append(_clean_text(text))

        return builder

    def _visit_element(
        self,
        tag: Tag,
        builder: _BucketBuilder,
        in_content: bool,
        in_chrome: bool,
    ) -> tuple[bool, bool] | None:
        """
        Process one element.

        Returns:
            Region flags for its children, or None to reject the subtree
        """
        name = (tag.name or "").lower()

        if name == "meta":
            self._harvest_meta(tag, builder)
            return None
        if name == "title":
            if not builder.title:
                builder.title = _clean_text(tag.get_text(" "))
            return None
        if name == "base":
            if not builder.base_href and tag.get("href"):
                builder.base_href = str(tag["href"]).strip()
            return None
        if name == "style":
            self._harvest_stylesheet(tag, builder)
            return None
        if name in NON_CONTENT_TAGS:
            return None
        if is_hidden(tag, self.style_resolver):
            return None

        in_content = in_content or is_content_container(tag)
        in_chrome = in_chrome or is_chrome_container(tag)

        if name == "html":
            builder.custom_properties.update(
                custom_properties(self.style_resolver.computed_style(tag)))

        category, level = classify_element(tag)
        if category != ElementCategory.OTHER:
            self._record(tag, category, level, builder, in_content, in_chrome)

        slots = _color_slots(tag)
        if slots:
            background = background_color(self.style_resolver.computed_style(tag))
            if background:
                for slot in slots:
                    builder.color_samples.append(
                        ColorSample(slot=slot, tag_name=name, background=background))

        return in_content, in_chrome

    def _record(
        self,
        tag: Tag,
        category: ElementCategory,
        level: int,
        builder: _BucketBuilder,
        in_content: bool,
        in_chrome: bool,
    ) -> None:
        if category == ElementCategory.IMAGE:
            size = self.style_resolver.rendered_size(tag)
            element = ClassifiedElement(
                category=category,
                tag_name=tag.name,
                text=_clean_text(str(tag.get("alt", ""))),
                in_content_region=in_content,
                in_chrome_region=in_chrome,
                src=str(tag.get("src") or tag.get("data-src") or "").strip(),
                width=size[0] if size else None,
                height=size[1] if size else None,
            )
            builder.images.append(element)
            return

        element = ClassifiedElement(
            category=category,
            tag_name=tag.name,
            text=_clean_text(tag.get_text(" ")),
            level=level,
            in_content_region=in_content,
            in_chrome_region=in_chrome,
        )

        if category == ElementCategory.HEADING:
            builder.headings.append(element)
        elif category == ElementCategory.LIST_ITEM:
            builder.list_items.append(element)
        elif category == ElementCategory.EMPHASIS:
            builder.emphasis.append(element)
        elif category == ElementCategory.PARAGRAPH:
            builder.paragraphs.append(element)

    def _harvest_meta(self, tag: Tag, builder: _BucketBuilder) -> None:
        key = tag.get("property") or tag.get("name") or tag.get("itemprop")
        content = tag.get("content")
        if not key or content is None:
            return
        key = str(key).strip().lower()
        content = str(content).strip()
        if key and content and key not in builder.meta:
            builder.meta[key] = content

    def _harvest_stylesheet(self, tag: Tag, builder: _BucketBuilder) -> None:
        css = tag.string or tag.get_text()
        if not css:
            return
        for match in _ROOT_RULE_PATTERN.finditer(css):
            for name, value in custom_properties(parse_inline_style(match.group(1))).items():
                builder.custom_properties.setdefault(name, value)
