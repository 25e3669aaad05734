"""
Computed-style access for document elements.

A parsed markup tree carries no layout, so style questions (is this element
visible, how large is this image, what is its background) go through a
StyleResolver. The default InlineStyleResolver answers from inline style
declarations and presentational attributes. A host with a rendering engine
can pass its own resolver returning real computed values.
"""

import re
from typing import Mapping, Protocol

from bs4 import Tag

_LENGTH_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(px)?\s*$", re.I)

# Color tokens inside a `background` shorthand
_COLOR_TOKEN_PATTERN = re.compile(
    r"(#[0-9a-f]{3,8}\b|rgba?\([^)]*\)|\btransparent\b)", re.I
)


class StyleResolver(Protocol):
    """Supplies computed style and rendered box size for elements."""

    def computed_style(self, element: Tag) -> Mapping[str, str]:
        """Return lowercase CSS property names mapped to their values."""
        ...

    def rendered_size(self, element: Tag) -> tuple[float, float] | None:
        """Return (width, height) in pixels, or None if unknown."""
        ...


def parse_inline_style(style: str | None) -> dict[str, str]:
    """
    Parse a `style` attribute into a property map.

    >>> parse_inline_style("display: none; Color:RED !important")
    {'display': 'none', 'color': 'RED'}
    """
    declarations: dict[str, str] = {}
    if not style:
        return declarations

    for declaration in style.split(";"):
        name, sep, value = declaration.partition(":")
        if not sep:
            continue
        name = name.strip().lower()
        value = re.sub(r"\s*!important\s*$", "", value.strip(), flags=re.I)
        if name and value:
            declarations[name] = value

    return declarations


def parse_length(value: str | None) -> float | None:
    """Parse a pixel or unitless length; other units are unknown."""
    if not value:
        return None
    match = _LENGTH_PATTERN.match(str(value))
    if not match:
        return None
    return float(match.group(1))


class InlineStyleResolver:
    """
    StyleResolver backed by inline `style` attributes.

    Width and height come from inline style first, then from the
    `width`/`height` attributes.
    """

    def computed_style(self, element: Tag) -> Mapping[str, str]:
        style = element.get("style")
        if isinstance(style, list):
            style = " ".join(style)
        return parse_inline_style(style)

    def rendered_size(self, element: Tag) -> tuple[float, float] | None:
        style = self.computed_style(element)
        width = parse_length(style.get("width")) or parse_length(element.get("width"))
        height = parse_length(style.get("height")) or parse_length(element.get("height"))
        if width is None or height is None:
            return None
        return width, height


def is_hidden(element: Tag, resolver: StyleResolver) -> bool:
    """
    Check whether an element is invisible.

    Hidden means any of: `hidden` attribute, aria-hidden="true", a hidden
    input, display:none, visibility:hidden/collapse or zero opacity.
    """
    if element.has_attr("hidden"):
        return True
    if str(element.get("aria-hidden", "")).lower() == "true":
        return True
    if element.name == "input" and str(element.get("type", "")).lower() == "hidden":
        return True

    style = resolver.computed_style(element)

    if style.get("display", "").strip().lower() == "none":
        return True
    if style.get("visibility", "").strip().lower() in ("hidden", "collapse"):
        return True

    opacity = style.get("opacity")
    if opacity is not None:
        try:
            if float(opacity.strip().rstrip("%")) == 0:
                return True
        except ValueError:
            pass

    return False


def background_color(style: Mapping[str, str]) -> str | None:
    """
    Get the background color declared in a style map.

    Falls back to the first color token of the `background` shorthand.
    """
    value = style.get("background-color")
    if value:
        return value.strip()

    shorthand = style.get("background")
    if shorthand:
        match = _COLOR_TOKEN_PATTERN.search(shorthand)
        if match:
            return match.group(1)

    return None


def custom_properties(declarations: Mapping[str, str]) -> dict[str, str]:
    """Keep only CSS custom properties (`--name`) from a declaration map."""
    return {
        name: value for name, value in declarations.items()
        if name.startswith("--")
    }
