"""Pipeline step functions: convert, write, and batch import orchestration"""

import logging
from typing import Mapping

from mdsync.config import Settings
from mdsync.core.extract.blocks import extract_blocks
from mdsync.core.extract.layout import layout_blocks
from mdsync.core.models import (
    Element, ImportResult, ImportTask, Placement, RangeInstruction, SourceFile, StyleConfig, StyleName,
)
from mdsync.core.parse import lex, strip_frontmatter
from mdsync.core.ranges import apply_ranges
from mdsync.core.reconcile import reconcile
from mdsync.core.registry import FontLoader, StyleRegistry
from mdsync.core.style import default_styles
from mdsync.host.base import DocumentHost


logger = logging.getLogger(__name__)


def convert_markdown(
    markdown: str,
    registry: Mapping[StyleName, StyleConfig],
    settings: Settings,
    ) -> tuple[str, list[RangeInstruction]]:
    """Markdown text -> (run text, range instructions). Pure; touches no host."""
    _, body = strip_frontmatter(markdown)
    blocks = extract_blocks(lex(body, settings.parser_config))
    segments = layout_blocks(blocks, settings.list_inline_styles)
    return apply_ranges(segments, registry)


async def write_markdown(
    host: DocumentHost,
    element: Element,
    markdown: str,
    styles: StyleRegistry,
    fonts: FontLoader,
    settings: Settings,
    ) -> int:
    """Convert markdown and write it into one text element. Returns the number of ranges set."""
    registry = await styles.materialize()
    text, instructions = convert_markdown(markdown, registry, settings)

    # fonts must be loaded before any range can use them
    loaded = {ins.font: await fonts.resolve(ins.font) for ins in instructions}

    await host.set_text(element.id, text)
    for ins in instructions:
        await host.set_range_style(element.id, ins.start, ins.end, loaded[ins.font], ins.size_pt)
    logger.debug("Wrote %d chars, %d ranges to %s", len(text), len(instructions), element.name)
    return len(instructions)


async def _place(host: DocumentHost, placement: Placement) -> Element:
    """Create the container for a task without a target, replacing a same-named element.

    The replaced element is removed first, so a failed removal creates nothing.
    """
    if placement.replaces is not None:
        logger.info("Replacing %s element %s", placement.replaces.kind.value, placement.replaces.name)
        await host.remove_element(placement.replaces.id)
    return await host.create_text_element(placement.name, placement.x, placement.y, placement.index)


async def run_tasks(tasks: list[ImportTask], host: DocumentHost, settings: Settings) -> ImportResult:
    """Run tasks one at a time in order; a failing task is logged and counted, not raised."""
    styles = StyleRegistry(host, default_styles(settings))
    fonts = FontLoader(host, settings.font_family)
    placed: dict[Placement, Element] = {}
    succeeded = failed = 0

    for task in tasks:
        label = task.target.name if task.target else task.placement.name
        try:
            element = task.target or placed.get(task.placement)
            if element is None:
                element = placed[task.placement] = await _place(host, task.placement)
            await write_markdown(host, element, task.file.content, styles, fonts, settings)
            succeeded += 1
        except Exception:
            logger.warning("Failed to import %s into %s", task.file.name, label, exc_info=True)
            failed += 1

    return ImportResult(attempted=len(tasks), succeeded=succeeded, failed=failed)


async def import_batch(
    host: DocumentHost,
    files: list[SourceFile],
    settings: Settings,
    create_missing: bool | None = None,
    ) -> ImportResult:
    """Match files to the host's elements and import them.

    Raises ValueError for an empty batch before anything is written.
    """
    if not files:
        raise ValueError("No files in import batch")
    if create_missing is None:
        create_missing = settings.create_missing

    elements = await host.list_elements()
    selection = await host.selection()
    tasks = reconcile(files, elements, selection, create_missing)
    logger.info("Matched %d file(s) to %d target(s)", len(files), len(tasks))
    return await run_tasks(tasks, host, settings)
