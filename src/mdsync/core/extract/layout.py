"""Block to segment layout: literal separators around each block's styled text"""

from mdsync.core.extract.inline import flatten
from mdsync.core.models import Block, BlockKind, StyleContext, StyledSegment


HEADING_BREAK = "\n"
PARAGRAPH_BREAK = "\n\n"
ITEM_BREAK = "\n"
INDENT = "  "


def _body(block: Block, context: StyleContext, inline_styles: bool = True) -> list[StyledSegment]:
    """Flattened inline content, or the raw text when styling is not resolved."""
    if inline_styles and block.inline_tokens is not None:
        return flatten(block.inline_tokens, context)
    return [StyledSegment(block.raw_text, context)]


def block_segments(block: Block, list_inline_styles: bool = True) -> list[StyledSegment]:
    """Return the segments for one block, separators included as literal text."""
    if block.kind == BlockKind.heading:
        ctx = StyleContext(header_level=block.heading_level or 1)
        return _body(block, ctx) + [StyledSegment(HEADING_BREAK, ctx)]

    if block.kind == BlockKind.paragraph:
        ctx = StyleContext()
        return _body(block, ctx) + [StyledSegment(PARAGRAPH_BREAK, ctx)]

    if block.kind == BlockKind.list_item:
        depth = block.list_depth or 1
        ctx = StyleContext(list_depth=depth)
        prefix = StyledSegment(f"{INDENT * (depth - 1)}{block.list_marker or '•'} ", ctx)
        return [prefix] + _body(block, ctx, list_inline_styles) + [StyledSegment(ITEM_BREAK, ctx)]

    if block.kind == BlockKind.code:
        return [StyledSegment(block.raw_text + PARAGRAPH_BREAK, StyleContext(code=True))]

    if block.kind == BlockKind.quote:
        return [StyledSegment(block.raw_text + PARAGRAPH_BREAK, StyleContext(quote=True))]

    # separators carry no text
    return []


def layout_blocks(blocks: list[Block], list_inline_styles: bool = True) -> list[StyledSegment]:
    """Concatenate the segments of every block in document order."""
    segments: list[StyledSegment] = []
    for block in blocks:
        segments.extend(block_segments(block, list_inline_styles))
    return segments
