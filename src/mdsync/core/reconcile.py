"""Matching of source files to named target elements"""

import re

from mdsync.core.models import DEFAULT_HEIGHT, Element, ElementKind, ImportTask, Placement, SourceFile


SOURCE_SUFFIX_RE = re.compile(r'\.(md|markdown|txt)$', re.IGNORECASE)
CREATE_SPACING = 24.0


def base_name(filename: str) -> str:
    """Strip a .md/.markdown/.txt suffix (any case): 'Usage.md' -> 'Usage'."""
    return SOURCE_SUFFIX_RE.sub('', filename)


def _matches(file: SourceFile, elements: list[Element]) -> list[Element]:
    names = {file.name, base_name(file.name)}
    return [e for e in elements if e.name in names]


def _free_y(elements: list[Element]) -> float:
    """First y below every element in the document."""
    if not elements:
        return 0.0
    return max(e.y + e.height for e in elements) + CREATE_SPACING


def reconcile(
    files: list[SourceFile],
    elements: list[Element],
    selection: list[Element],
    create_missing: bool = False,
    ) -> list[ImportTask]:
    """Pair each file with its target text elements.

    One file with a text selection fans out to every selected text element.
    Otherwise each file goes to every text element named like the file, with
    or without its suffix. Unmatched files are skipped, or get a new text
    container when create_missing is set. Files sharing a base name share
    one placement, and an element is replaced by at most one placement.
    """
    texts = [e for e in elements if e.kind == ElementKind.text]
    selected = [e for e in selection if e.kind == ElementKind.text]

    if len(files) == 1 and selected:
        return [ImportTask(file=files[0], target=el) for el in selected]

    tasks: list[ImportTask] = []
    planned: dict[str, Placement] = {}
    replacing: dict[str, Placement] = {}
    x = min((e.x for e in elements), default=0.0)
    y = _free_y(elements)
    for file in files:
        targets = _matches(file, texts)
        if targets:
            tasks.extend(ImportTask(file=file, target=el) for el in targets)
            continue
        if not create_missing:
            continue

        name = base_name(file.name)
        occupied = _matches(file, [e for e in elements if e.kind != ElementKind.text])
        if name in planned:
            placement = planned[name]
        elif occupied and occupied[0].id in replacing:
            placement = replacing[occupied[0].id]
        elif occupied:
            old = occupied[0]
            placement = Placement(name=name, x=old.x, y=old.y, index=old.index, replaces=old)
            replacing[old.id] = placement
        else:
            placement = Placement(name=name, x=x, y=y)
            y += DEFAULT_HEIGHT + CREATE_SPACING
        planned[name] = placement
        tasks.append(ImportTask(file=file, placement=placement))
    return tasks
