"""Intermediate data models for the parse, style and import pipeline"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class BlockKind(str, Enum):
    """Closed set of paragraph-level units produced by block extraction"""
    heading = "heading"
    paragraph = "paragraph"
    list_item = "list_item"
    code = "code"
    quote = "quote"
    separator = "separator"


class StyleName(str, Enum):
    """Names of the style registry entries materialized in a target document"""
    h1 = "H1"
    h2 = "H2"
    h3 = "H3"
    body = "Body"
    code = "Code"
    list = "List"
    quote = "Quote"


class ElementKind(str, Enum):
    """Host element types; only text elements receive imported content"""
    text = "text"
    frame = "frame"
    shape = "shape"
    group = "group"


@dataclass(frozen=True)
class Block:
    """One paragraph-level unit of a markdown document.

    inline_tokens holds markdown-it inline children for kinds that resolve
    inline styling; code, separator and quote blocks only carry raw_text.
    """
    kind:          BlockKind
    raw_text:      str = ""
    heading_level: Optional[int] = None     # 1-3, headings only
    list_depth:    Optional[int] = None     # >= 1, list items only
    list_marker:   Optional[str] = None     # bullet or ordinal, list items only
    code_language: Optional[str] = None
    inline_tokens: Optional[list] = None    # markdown-it Token objects


@dataclass(frozen=True)
class StyleContext:
    """Cascading emphasis and structure flags threaded through inline flattening."""
    bold:         bool = False
    italic:       bool = False
    code:         bool = False
    quote:        bool = False
    header_level: int = 0
    list_depth:   int = 0

    def derive(
        self,
        bold: bool = False,
        italic: bool = False,
        code: bool = False,
        quote: bool = False,
        header_level: int = 0,
        list_depth: int = 0,
        ) -> "StyleContext":
        """Return a child context; flags can only be added and levels only raised."""
        return replace(
            self,
            bold=self.bold or bold,
            italic=self.italic or italic,
            code=self.code or code,
            quote=self.quote or quote,
            header_level=max(self.header_level, header_level),
            list_depth=max(self.list_depth, list_depth),
        )


@dataclass(frozen=True)
class StyledSegment:
    text:    str
    context: StyleContext = StyleContext()


@dataclass(frozen=True)
class FontVariant:
    family: str
    style:  str = "Regular"

    def __str__(self) -> str:
        return f"{self.family} {self.style}"


@dataclass(frozen=True)
class ResolvedStyle:
    font:    FontVariant
    size_pt: float


@dataclass(frozen=True)
class RangeInstruction:
    """A [start, end) span of the run text in UTF-16 code units and the style to set on it."""
    start:   int
    end:     int
    font:    FontVariant
    size_pt: float


# geometry of elements created without explicit size
DEFAULT_WIDTH = 400.0
DEFAULT_HEIGHT = 100.0


@dataclass(frozen=True)
class Element:
    """Snapshot of a named host element."""
    id:     str
    name:   str
    kind:   ElementKind = ElementKind.text
    x:      float = 0.0
    y:      float = 0.0
    width:  float = 0.0
    height: float = 0.0
    index:  int = 0


class StyleConfig(BaseModel):
    """A named style registry entry."""
    font_family:         str
    font_sub_style:      str = "Regular"
    size_pt:             float = Field(..., gt=0)
    line_height_percent: float = Field(default=120.0, gt=0)


class SourceFile(BaseModel):
    """An in-memory markdown file delivered by the transport layer."""
    name:    str
    content: str


@dataclass(frozen=True)
class Placement:
    """Where a task without a target creates its text container."""
    name:     str
    x:        float
    y:        float
    index:    Optional[int] = None
    replaces: Optional[Element] = None   # differently-typed element holding the same name


@dataclass(frozen=True)
class ImportTask:
    """One (file, target) pairing; target is None when the task creates its container."""
    file:      SourceFile
    target:    Optional[Element] = None
    placement: Optional[Placement] = None


class ImportOutcome(str, Enum):
    updated = "updated"
    partial = "partial"
    all_failed = "all_failed"
    no_matches = "no_matches"


@dataclass(frozen=True)
class ImportResult:
    """Aggregate counts of a batch run."""
    attempted: int = 0
    succeeded: int = 0
    failed:    int = 0

    @property
    def outcome(self) -> ImportOutcome:
        if self.attempted == 0:
            return ImportOutcome.no_matches
        if self.succeeded == 0:
            return ImportOutcome.all_failed
        if self.failed:
            return ImportOutcome.partial
        return ImportOutcome.updated

    @property
    def message(self) -> str:
        """Single user-facing status line for the batch."""
        if self.outcome == ImportOutcome.no_matches:
            return "No matching text elements found to update."
        if self.outcome == ImportOutcome.all_failed:
            return f"Failed to update {self.failed} text element{'' if self.failed == 1 else 's'}."
        plural = "" if self.succeeded == 1 else "s"
        message = f"Successfully updated {self.succeeded} text element{plural}."
        if self.failed:
            message += f" {self.failed} failed."
        return message
