from __future__ import annotations
from dataclasses import dataclass, field, replace
from uuid import uuid4

from mdsync.core.models import (
    DEFAULT_HEIGHT, DEFAULT_WIDTH, Element, ElementKind, FontVariant, RangeInstruction, StyleConfig,
)
from mdsync.core.ranges import utf16_len
from mdsync.host.base import DocumentHost


@dataclass
class MemoryHost(DocumentHost):
    """In-memory document; fonts=None means every font is installed."""
    fonts: set[tuple[str, str]] | None = None
    _elements: list[Element] = field(default_factory=list)
    _selected: list[str] = field(default_factory=list)
    _texts: dict[str, str] = field(default_factory=dict)
    _runs: dict[str, list[RangeInstruction]] = field(default_factory=dict)
    _styles: dict[str, StyleConfig] = field(default_factory=dict)
    created_styles: list[str] = field(default_factory=list)
    loaded_fonts: list[tuple[str, str]] = field(default_factory=list)

    def add(
        self,
        name: str,
        kind: ElementKind = ElementKind.text,
        x: float = 0.0,
        y: float = 0.0,
        width: float = DEFAULT_WIDTH,
        height: float = DEFAULT_HEIGHT,
        selected: bool = False,
    ) -> Element:
        """Seed an element (synchronously) and optionally select it."""
        el = Element(id=uuid4().hex, name=name, kind=kind, x=x, y=y, width=width, height=height,
                     index=len(self._elements))
        self._elements.append(el)
        if kind == ElementKind.text:
            self._texts[el.id] = ""
            self._runs[el.id] = []
        if selected:
            self._selected.append(el.id)
        return el

    def get(self, name: str) -> Element | None:
        return next((e for e in self._elements if e.name == name), None)

    def _reindex(self) -> None:
        self._elements = [replace(e, index=i) for i, e in enumerate(self._elements)]

    def _require_text(self, element_id: str) -> None:
        if element_id not in self._texts:
            raise KeyError(f"No text element with id {element_id}")

    async def list_elements(self) -> list[Element]:
        return list(self._elements)

    async def selection(self) -> list[Element]:
        return [e for e in self._elements if e.id in self._selected]

    async def read_text(self, element_id: str) -> tuple[str, list[RangeInstruction]]:
        self._require_text(element_id)
        return self._texts[element_id], list(self._runs[element_id])

    async def set_text(self, element_id: str, text: str) -> None:
        self._require_text(element_id)
        self._texts[element_id] = text
        self._runs[element_id] = []

    async def set_range_style(self, element_id: str, start: int, end: int, font: FontVariant, size_pt: float) -> None:
        self._require_text(element_id)
        if not 0 <= start < end <= utf16_len(self._texts[element_id]):
            raise ValueError(f"Range [{start}, {end}) outside text of {element_id}")
        if self.fonts is not None and (font.family, font.style) not in self.fonts:
            raise RuntimeError(f"Font {font} is not loaded")
        self._runs[element_id].append(RangeInstruction(start, end, font, size_pt))

    async def get_style(self, name: str) -> StyleConfig | None:
        return self._styles.get(name)

    async def create_style(self, name: str, config: StyleConfig) -> StyleConfig:
        if name in self._styles:
            raise ValueError(f"Style {name} already exists")
        self._styles[name] = config
        self.created_styles.append(name)
        return config

    async def create_text_element(self, name: str, x: float, y: float, index: int | None = None) -> Element:
        el = Element(id=uuid4().hex, name=name, kind=ElementKind.text, x=x, y=y,
                     width=DEFAULT_WIDTH, height=DEFAULT_HEIGHT)
        pos = len(self._elements) if index is None else max(0, min(index, len(self._elements)))
        self._elements.insert(pos, el)
        self._texts[el.id] = ""
        self._runs[el.id] = []
        self._reindex()
        return self._elements[pos]

    async def remove_element(self, element_id: str) -> None:
        self._elements = [e for e in self._elements if e.id != element_id]
        self._selected = [i for i in self._selected if i != element_id]
        self._texts.pop(element_id, None)
        self._runs.pop(element_id, None)
        self._reindex()

    async def load_font(self, family: str, style: str) -> bool:
        self.loaded_fonts.append((family, style))
        return self.fonts is None or (family, style) in self.fonts
