"""SQL-backed document host: element lookup, text/run writes, style registry and fonts"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import func
from sqlmodel import Session, select

from mdsync.core.models import (
    DEFAULT_HEIGHT, DEFAULT_WIDTH, Element, ElementKind, FontVariant, RangeInstruction, StyleConfig,
)
from mdsync.core.ranges import utf16_len
from mdsync.host.base import DocumentHost
from mdsync.host.tables import ElementRow, FontRow, StyleRow, TextRunRow


def _to_element(row: ElementRow) -> Element:
    return Element(
        id=str(row.id), name=row.name, kind=row.kind,
        x=row.x, y=row.y, width=row.width, height=row.height, index=row.position,
    )


def _next_position(session: Session) -> int:
    top = session.exec(select(func.max(ElementRow.position))).one()
    return 0 if top is None else top + 1


def add_element(
    session: Session,
    name: str,
    kind: ElementKind = ElementKind.text,
    x: float = 0.0,
    y: float = 0.0,
    width: float = DEFAULT_WIDTH,
    height: float = DEFAULT_HEIGHT,
    ) -> ElementRow:
    """Append an element on top of the document stack and commit."""
    row = ElementRow(name=name, kind=kind, x=x, y=y, width=width, height=height, position=_next_position(session))
    session.add(row)
    session.commit()
    session.refresh(row)
    return row


def add_font(session: Session, family: str, style: str) -> FontRow:
    """Register an installed font variant (idempotent)."""
    row = session.get(FontRow, (family, style))
    if row is None:
        row = FontRow(family=family, style=style)
        session.add(row)
        session.commit()
    return row


def get_by_name(session: Session, name: str) -> list[ElementRow]:
    """Return every element with the given name in stacking order."""
    return list(session.exec(
        select(ElementRow).where(ElementRow.name == name).order_by(ElementRow.position)
    ).all())


class SQLHost(DocumentHost):
    """Document host over an open session; selected names stand in for the user's selection."""

    def __init__(self, session: Session, selected: list[str] | None = None):
        self.session = session
        self.selected = set(selected or [])

    def _row(self, element_id: str) -> ElementRow:
        row = self.session.get(ElementRow, UUID(element_id))
        if row is None:
            raise KeyError(f"No element with id {element_id}")
        return row

    def _text_row(self, element_id: str) -> ElementRow:
        row = self._row(element_id)
        if row.kind != ElementKind.text:
            raise ValueError(f"Element {row.name} is a {row.kind.value} element, not text")
        return row

    def _clear_runs(self, row: ElementRow) -> None:
        for run in self.session.exec(select(TextRunRow).where(TextRunRow.element_id == row.id)).all():
            self.session.delete(run)

    async def list_elements(self) -> list[Element]:
        rows = self.session.exec(select(ElementRow).order_by(ElementRow.position)).all()
        return [_to_element(r) for r in rows]

    async def selection(self) -> list[Element]:
        return [e for e in await self.list_elements() if e.name in self.selected]

    async def read_text(self, element_id: str) -> tuple[str, list[RangeInstruction]]:
        row = self._text_row(element_id)
        runs = self.session.exec(
            select(TextRunRow).where(TextRunRow.element_id == row.id).order_by(TextRunRow.start_offset)
        ).all()
        return row.text, [
            RangeInstruction(r.start_offset, r.end_offset, FontVariant(r.font_family, r.font_style), r.size_pt)
            for r in runs
        ]

    async def set_text(self, element_id: str, text: str) -> None:
        row = self._text_row(element_id)
        self._clear_runs(row)
        row.text = text
        row.updated_at = datetime.now()
        self.session.add(row)
        self.session.commit()

    async def set_range_style(self, element_id: str, start: int, end: int, font: FontVariant, size_pt: float) -> None:
        row = self._text_row(element_id)
        if not 0 <= start < end <= utf16_len(row.text):
            raise ValueError(f"Range [{start}, {end}) outside text of {row.name}")
        self.session.add(TextRunRow(
            element_id=row.id, start_offset=start, end_offset=end,
            font_family=font.family, font_style=font.style, size_pt=size_pt,
        ))
        self.session.commit()

    async def get_style(self, name: str) -> StyleConfig | None:
        row = self.session.get(StyleRow, name)
        if row is None:
            return None
        return StyleConfig(
            font_family=row.font_family, font_sub_style=row.font_sub_style,
            size_pt=row.size_pt, line_height_percent=row.line_height_percent,
        )

    async def create_style(self, name: str, config: StyleConfig) -> StyleConfig:
        self.session.add(StyleRow(name=name, **config.model_dump()))
        self.session.commit()
        return config

    async def create_text_element(self, name: str, x: float, y: float, index: int | None = None) -> Element:
        if index is None:
            index = _next_position(self.session)
        else:
            later = self.session.exec(select(ElementRow).where(ElementRow.position >= index)).all()
            for r in later:
                r.position += 1
                self.session.add(r)
        row = ElementRow(name=name, kind=ElementKind.text, x=x, y=y, position=index)
        self.session.add(row)
        self.session.commit()
        self.session.refresh(row)
        return _to_element(row)

    async def remove_element(self, element_id: str) -> None:
        row = self._row(element_id)
        removed_at = row.position
        self._clear_runs(row)
        self.session.delete(row)
        later = self.session.exec(select(ElementRow).where(ElementRow.position > removed_at)).all()
        for r in later:
            r.position -= 1
            self.session.add(r)
        self.session.commit()

    async def load_font(self, family: str, style: str) -> bool:
        if self.session.exec(select(FontRow)).first() is None:
            return True
        return self.session.get(FontRow, (family, style)) is not None
