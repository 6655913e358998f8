"""Run text assembly and range instruction computation"""

from typing import Mapping, Optional

from mdsync.core.models import RangeInstruction, StyleConfig, StyledSegment, StyleName
from mdsync.core.style import resolve_style


def utf16_len(text: str) -> int:
    """Length of text in UTF-16 code units, the unit host text ranges are indexed in."""
    return len(text.encode('utf-16-le')) // 2


def apply_ranges(
    segments: list[StyledSegment],
    registry: Mapping[StyleName, StyleConfig],
    base_style_name: Optional[StyleName] = None,
    ) -> tuple[str, list[RangeInstruction]]:
    """Return (full_text, instructions) for a segment sequence.

    Instructions tile [0, utf16_len(full_text)) in ascending order; empty
    segments produce no instruction.
    """
    instructions: list[RangeInstruction] = []
    cursor = 0
    for segment in segments:
        end = cursor + utf16_len(segment.text)
        if end > cursor:
            resolved = resolve_style(segment, registry, base_style_name)
            instructions.append(RangeInstruction(cursor, end, resolved.font, resolved.size_pt))
        cursor = end
    return ''.join(s.text for s in segments), instructions
