"""Style registry defaults and per-segment font variant / size resolution"""

from typing import Mapping, Optional

from mdsync.config import Settings
from mdsync.core.models import (
    FontVariant, ResolvedStyle, StyleConfig, StyleContext, StyledSegment, StyleName,
)


REGULAR = "Regular"
BOLD = "Bold"
ITALIC = "Italic"
BOLD_ITALIC = "Bold Italic"

HEADING_SCALE: dict[int, float] = {0: 1.0, 1: 2.0, 2: 1.5, 3: 1.25}

HEADING_STYLES = {1: StyleName.h1, 2: StyleName.h2, 3: StyleName.h3}


def default_styles(settings: Settings) -> dict[StyleName, StyleConfig]:
    """Registry entries created in a document that does not have them yet."""
    family, size = settings.font_family, settings.base_size_pt
    heading = {
        name: StyleConfig(
            font_family=family, font_sub_style=BOLD,
            size_pt=size * HEADING_SCALE[level], line_height_percent=120,
        )
        for level, name in HEADING_STYLES.items()
    }
    return {
        **heading,
        StyleName.body:  StyleConfig(font_family=family, size_pt=size, line_height_percent=150),
        StyleName.code:  StyleConfig(font_family=settings.code_font_family, size_pt=size, line_height_percent=140),
        StyleName.list:  StyleConfig(font_family=family, size_pt=size, line_height_percent=150),
        StyleName.quote: StyleConfig(font_family=family, size_pt=size, line_height_percent=150),
    }


def style_name_for(context: StyleContext) -> StyleName:
    """Derive the block-level base style from a segment's context."""
    if context.header_level:
        return HEADING_STYLES.get(context.header_level, StyleName.h3)
    if context.code:
        return StyleName.code
    if context.quote:
        return StyleName.quote
    if context.list_depth:
        return StyleName.list
    return StyleName.body


def is_bold(style: StyleConfig) -> bool:
    """True when the style's own sub-style is a bold weight."""
    return BOLD.lower() in style.font_sub_style.lower().split()


def variant_style(bold: bool, italic: bool) -> str:
    if bold and italic:
        return BOLD_ITALIC
    if bold:
        return BOLD
    if italic:
        return ITALIC
    return REGULAR


def resolve_style(
    segment: StyledSegment,
    registry: Mapping[StyleName, StyleConfig],
    base_style_name: Optional[StyleName] = None,
    ) -> ResolvedStyle:
    """Pick the font variant and point size for one segment.

    Code wins over emphasis. Bold comes from the segment or from a base style
    that is bold by default (headings), so emphasis only adds italic there.
    Size is the Body size scaled by the heading level.
    """
    ctx = segment.context
    base = registry[base_style_name or style_name_for(ctx)]
    size = registry[StyleName.body].size_pt * HEADING_SCALE.get(min(ctx.header_level, 3), 1.0)

    if ctx.code:
        font = FontVariant(registry[StyleName.code].font_family, REGULAR)
    else:
        font = FontVariant(base.font_family, variant_style(ctx.bold or is_bold(base), ctx.italic))
    return ResolvedStyle(font=font, size_pt=size)
