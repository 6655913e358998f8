"""Database table definitions for a persisted document: elements, text runs, styles and fonts"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Column, DateTime, Text
from sqlmodel import Field, SQLModel

from mdsync.core.models import DEFAULT_HEIGHT, DEFAULT_WIDTH, ElementKind


class ElementRow(SQLModel, table=True):
    """A named element of the document; only text elements hold characters"""
    __tablename__ = "elements"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(..., index=True, nullable=False)
    kind: ElementKind = Field(default=ElementKind.text, nullable=False)
    x: float = Field(default=0.0, nullable=False)
    y: float = Field(default=0.0, nullable=False)
    width: float = Field(default=DEFAULT_WIDTH, nullable=False)
    height: float = Field(default=DEFAULT_HEIGHT, nullable=False)
    position: int = Field(..., nullable=False, description="Stacking index of the element within the document")
    text: str = Field(default="", sa_column=Column(Text, nullable=False))
    updated_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))


class TextRunRow(SQLModel, table=True):
    """Font and size applied to a [start_offset, end_offset) span of an element's text"""
    __tablename__ = "text_runs"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    element_id: UUID = Field(..., foreign_key="elements.id", index=True, nullable=False)
    start_offset: int = Field(..., nullable=False, description="UTF-16 code unit offset, inclusive")
    end_offset: int = Field(..., nullable=False, description="UTF-16 code unit offset, exclusive")
    font_family: str = Field(..., nullable=False)
    font_style: str = Field(..., nullable=False)
    size_pt: float = Field(..., nullable=False)


class StyleRow(SQLModel, table=True):
    """Named style registry entry, reused by name across imports"""
    __tablename__ = "styles"
    name: str = Field(primary_key=True)
    font_family: str = Field(..., nullable=False)
    font_sub_style: str = Field(..., nullable=False)
    size_pt: float = Field(..., nullable=False)
    line_height_percent: float = Field(..., nullable=False)


class FontRow(SQLModel, table=True):
    """Installed font variants; an empty table means every variant is available"""
    __tablename__ = "fonts"
    family: str = Field(primary_key=True)
    style: str = Field(primary_key=True)
