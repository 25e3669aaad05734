"""
Brand color inference.

The primary color comes from the first source that yields a usable value:
the theme-color meta tag, the backgrounds of header/nav/navbar/button
elements, then root CSS custom properties such as --primary-color. The
secondary color is always derived from the primary by a fixed channel
shift, so the pair stays visually coherent. Malformed colors count as
missing; nothing here raises on bad input.
"""

import re

from page_digest.extraction.models import BrandColors, ExtractionContext
from page_digest.extraction.stages import FinishingStage
from page_digest.extraction.traversal import ClassifiedBuckets
from page_digest.utils.logging import get_logger

logger = get_logger(__name__)

SECONDARY_SHIFT = (30, 20, 40)

CUSTOM_PROPERTY_NAMES = (
    "--primary-color",
    "--main-color",
    "--brand-color",
    "--accent-color",
)

NAMED_COLORS = {
    "black": (0, 0, 0),
    "white": (255, 255, 255),
    "red": (255, 0, 0),
    "green": (0, 128, 0),
    "blue": (0, 0, 255),
    "navy": (0, 0, 128),
    "teal": (0, 128, 128),
    "purple": (128, 0, 128),
    "orange": (255, 165, 0),
    "yellow": (255, 255, 0),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
}

_NEUTRAL_COLORS = frozenset({"#000000", "#ffffff"})

_HEX_PATTERN = re.compile(r"^#([0-9a-f]{3}|[0-9a-f]{6})$", re.I)
_RGB_PATTERN = re.compile(
    r"^rgba?\(\s*(\d{1,3})\s*[,\s]\s*(\d{1,3})\s*[,\s]\s*(\d{1,3})"
    r"\s*(?:[,/]\s*(\d*\.?\d+)(%?)\s*)?\)$",
    re.I,
)

# theme-color accepts only hex and opaque rgb(); names, rgba() and
# transparent count as missing
_THEME_COLOR_PATTERN = re.compile(
    r"^(#([0-9a-f]{3}|[0-9a-f]{6})|rgb\(\s*\d{1,3}\s*,\s*\d{1,3}\s*,\s*\d{1,3}\s*\))$",
    re.I,
)


def parse_color(value: str | None) -> tuple[int, int, int, float] | None:
    """
    Parse a CSS color into (r, g, b, alpha).

    Supports #rgb, #rrggbb, rgb(), rgba(), `transparent` and a few names.
    Channels above 255 are clamped.

    >>> parse_color("#1a2")
    (17, 170, 34, 1.0)
    >>> parse_color("rgba(10, 20, 30, 0.5)")
    (10, 20, 30, 0.5)
    >>> parse_color("rgb(abc)") is None
    True
    """
    if not value:
        return None

    value = value.strip().lower()

    if value == "transparent":
        return 0, 0, 0, 0.0
    if value in NAMED_COLORS:
        r, g, b = NAMED_COLORS[value]
        return r, g, b, 1.0

    match = _HEX_PATTERN.match(value)
    if match:
        digits = match.group(1)
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16), 1.0

    match = _RGB_PATTERN.match(value)
    if match:
        r, g, b = (min(255, int(match.group(i))) for i in (1, 2, 3))
        alpha = 1.0
        if match.group(4) is not None:
            alpha = float(match.group(4))
            if match.group(5):
                alpha /= 100
        return r, g, b, max(0.0, min(1.0, alpha))

    return None


def to_hex(r: int, g: int, b: int) -> str:
    """Format channels as lowercase #rrggbb."""
    return "#%02x%02x%02x" % (r, g, b)


def normalize_color(value: str | None) -> str | None:
    """Convert a CSS color to #rrggbb, ignoring alpha; None if malformed."""
    parsed = parse_color(value)
    if parsed is None:
        return None
    return to_hex(*parsed[:3])


def derive_secondary(primary: str) -> str:
    """
    Shift a #rrggbb color by (+30, +20, +40), clamped to [0, 255].

    >>> derive_secondary("#112233")
    '#2f365b'
    >>> derive_secondary("#f0f0f0")
    '#ffffff'
    """
    r, g, b, _ = parse_color(primary)
    dr, dg, db = SECONDARY_SHIFT
    return to_hex(
        max(0, min(255, r + dr)),
        max(0, min(255, g + dg)),
        max(0, min(255, b + db)),
    )


def theme_color(value: str | None) -> str | None:
    """
    Hex form of a theme-color meta value, or None unless it is hex or rgb().

    >>> theme_color("rgb(46, 125, 50)")
    '#2e7d32'
    >>> theme_color("red") is None
    True
    """
    if not value or not _THEME_COLOR_PATTERN.match(value.strip()):
        return None
    return normalize_color(value)


def usable_sample(value: str | None) -> str | None:
    """Hex form of a sampled background unless transparent, black or white."""
    parsed = parse_color(value)
    if parsed is None or parsed[3] == 0:
        return None
    hex_color = to_hex(*parsed[:3])
    if hex_color in _NEUTRAL_COLORS:
        return None
    return hex_color


class BrandColorResolver(FinishingStage):
    """Infers the brand color pair, falling back to the configured defaults."""

    name = "brand_colors"

    def resolve_primary(self, buckets: ClassifiedBuckets) -> str | None:
        """Find the primary color, or None when nothing usable exists."""
        theme = theme_color(buckets.metadata.meta.get("theme-color"))
        if theme:
            return theme

        for sample in buckets.color_samples:
            hex_color = usable_sample(sample.background)
            if hex_color:
                logger.debug(f"Brand color {hex_color} sampled from <{sample.tag_name}>")
                return hex_color

        properties = buckets.metadata.custom_properties
        for name in CUSTOM_PROPERTY_NAMES:
            hex_color = usable_sample(properties.get(name))
            if hex_color:
                return hex_color

        return None

    def resolve(self, buckets: ClassifiedBuckets, base_url: str = "") -> BrandColors:
        primary = self.resolve_primary(buckets)
        if primary is None:
            return BrandColors(
                primary=self.settings.default_primary_color,
                secondary=self.settings.default_secondary_color,
            )
        return BrandColors(primary=primary, secondary=derive_secondary(primary))

    def apply(self, buckets: ClassifiedBuckets, context: ExtractionContext) -> None:
        context.brand_colors = self.resolve(buckets, context.url)
