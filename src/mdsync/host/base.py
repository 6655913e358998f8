from __future__ import annotations
from abc import ABC, abstractmethod

from mdsync.core.models import Element, FontVariant, RangeInstruction, StyleConfig


class FontService(ABC):
    @abstractmethod
    async def load_font(self, family: str, style: str) -> bool:
        """Make family/style usable for range writes. Return False when it is not installed."""
        raise NotImplementedError


class DocumentHost(FontService):
    """Injected host document API: named elements, text runs and the style registry."""

    @abstractmethod
    async def list_elements(self) -> list[Element]:
        """All named elements of the document in index order."""
        raise NotImplementedError

    @abstractmethod
    async def selection(self) -> list[Element]:
        raise NotImplementedError

    @abstractmethod
    async def read_text(self, element_id: str) -> tuple[str, list[RangeInstruction]]:
        raise NotImplementedError

    @abstractmethod
    async def set_text(self, element_id: str, text: str) -> None:
        """Replace the element's characters and drop every existing range style."""
        raise NotImplementedError

    @abstractmethod
    async def set_range_style(self, element_id: str, start: int, end: int, font: FontVariant, size_pt: float) -> None:
        raise NotImplementedError

    @abstractmethod
    async def get_style(self, name: str) -> StyleConfig | None:
        raise NotImplementedError

    @abstractmethod
    async def create_style(self, name: str, config: StyleConfig) -> StyleConfig:
        raise NotImplementedError

    @abstractmethod
    async def create_text_element(self, name: str, x: float, y: float, index: int | None = None) -> Element:
        """Insert a text element at index (appended when None), shifting later elements."""
        raise NotImplementedError

    @abstractmethod
    async def remove_element(self, element_id: str) -> None:
        raise NotImplementedError
