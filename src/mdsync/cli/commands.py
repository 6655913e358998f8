"""CLI command implementations"""

import asyncio
from pathlib import Path
from typing import Annotated, List, Optional

import typer
from sqlmodel import Session

from mdsync.config import Settings, load_config
from mdsync.core.models import DEFAULT_HEIGHT, DEFAULT_WIDTH, ElementKind, ImportOutcome, SourceFile
from mdsync.core.pipeline import import_batch
from mdsync.core.reconcile import SOURCE_SUFFIX_RE
from mdsync.host.database import init_db, make_engine, reset_db
from mdsync.host.sql import SQLHost, add_element, add_font, get_by_name
from mdsync.utils.logger import setup_logger


def _fail(msg: str, cause: Exception = None) -> None:
    """Abort the command: report what could not be done on stderr, exit code 1."""
    detail = f" ({type(cause).__name__}: {cause})" if cause else ""
    typer.echo(f"Error: {msg}{detail}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    setup_logger(settings.log_level)
    return settings


def _engine(settings: Settings):
    engine = make_engine(settings.db_url)
    init_db(engine)
    return engine


def _read_sources(paths: list[Path]) -> list[SourceFile]:
    """Read markdown/text files into SourceFiles; any unreadable file aborts the batch."""
    files = []
    for p in paths:
        if not SOURCE_SUFFIX_RE.search(p.name):
            _fail(f"Unsupported file type: {p.name} (expected .md, .markdown or .txt)")
        try:
            files.append(SourceFile(name=p.name, content=p.read_text(encoding="utf-8")))
        except (OSError, UnicodeDecodeError) as e:
            _fail(f"Could not read {p}", e)
    return files


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all tables")] = False,
    ):
    """Initialize the document database. Use --reset to clear existing data."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    if reset:
        reset_db(engine)
        typer.echo("Existing data cleared.")
    init_db(engine)
    typer.echo(f"Document initialized at: {settings.db_url}")


def add_element_cmd(
    name: Annotated[str, typer.Argument(help="Element name")],
    kind: Annotated[ElementKind, typer.Option("--kind", help="Element type")] = ElementKind.text,
    x: Annotated[float, typer.Option("--x")] = 0.0,
    y: Annotated[float, typer.Option("--y")] = 0.0,
    width: Annotated[float, typer.Option("--width")] = DEFAULT_WIDTH,
    height: Annotated[float, typer.Option("--height")] = DEFAULT_HEIGHT,
    ):
    """Add a named element on top of the document."""
    settings = _settings()
    with Session(_engine(settings)) as session:
        row = add_element(session, name, kind, x, y, width, height)
        typer.echo(f"Added {row.kind.value} element '{row.name}' at index {row.position}")


def elements_cmd():
    """List the document's elements in stacking order."""
    settings = _settings()
    with Session(_engine(settings)) as session:
        elements = asyncio.run(SQLHost(session).list_elements())
    if not elements:
        typer.echo("No elements in document.")
        raise typer.Exit(1)
    for e in elements:
        typer.echo(f"  {e.index:>3}  {e.kind.value:<6} {e.name}  ({e.x:g}, {e.y:g})")


def font_add_cmd(
    family: Annotated[str, typer.Argument(help="Font family, e.g. 'Inter'")],
    style: Annotated[str, typer.Argument(help="Font style, e.g. 'Bold Italic'")] = "Regular",
    ):
    """Register an installed font. With no fonts registered every font loads."""
    settings = _settings()
    with Session(_engine(settings)) as session:
        add_font(session, family, style)
    typer.echo(f"Registered font: {family} {style}")


def import_cmd(
    paths: Annotated[List[Path], typer.Argument(exists=True, dir_okay=False, help="Markdown files to import")],
    select: Annotated[Optional[List[str]], typer.Option("--select", help="Treat elements with this name as selected")] = None,
    create: Annotated[Optional[bool], typer.Option("--create/--no-create", help="Create text elements for unmatched files")] = None,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    ):
    """Import markdown files into the text elements they match."""
    settings = _settings(overrides={"parser_config": parser, "create_missing": create})
    files = _read_sources(paths)
    if not files:
        _fail("No files to import.")

    with Session(_engine(settings)) as session:
        host = SQLHost(session, selected=select)
        result = asyncio.run(import_batch(host, files, settings))

    typer.echo(result.message)
    if result.outcome == ImportOutcome.all_failed:
        raise typer.Exit(1)


def show_cmd(
    name: Annotated[str, typer.Argument(help="Text element name")],
    ):
    """Print an element's text and its styled ranges."""
    settings = _settings()
    with Session(_engine(settings)) as session:
        rows = [r for r in get_by_name(session, name) if r.kind == ElementKind.text]
        if not rows:
            _fail(f"No text element named '{name}'.")
        text, runs = asyncio.run(SQLHost(session).read_text(str(rows[0].id)))
    typer.echo(text)
    for r in runs:
        typer.echo(f"  [{r.start}, {r.end})  {r.font}  {r.size_pt:g}pt")
