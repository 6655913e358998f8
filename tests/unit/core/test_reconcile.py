"""Unit tests for core/reconcile.py"""

import pytest

from mdsync.core.models import DEFAULT_HEIGHT, Element, ElementKind, SourceFile
from mdsync.core.reconcile import CREATE_SPACING, base_name, reconcile


def _el(name: str, kind: ElementKind = ElementKind.text, index: int = 0, **geometry) -> Element:
    return Element(id=f"{name}-{index}", name=name, kind=kind, index=index, **geometry)


def _file(name: str) -> SourceFile:
    return SourceFile(name=name, content="# Hi\n")


@pytest.mark.parametrize("name,expected", [
    ("Usage.md", "Usage"),
    ("notes.markdown", "notes"),
    ("README.MD", "README"),
    ("todo.TXT", "todo"),
    ("page.mdx", "page.mdx"),
    ("archive.md.bak", "archive.md.bak"),
])
def test_base_name(name, expected):
    """Only a trailing .md/.markdown/.txt suffix is stripped, in any case."""
    assert base_name(name) == expected


def test_selection_fan_out():
    """One file with selected text elements targets every selected element."""
    a, b = _el("A", index=0), _el("B", index=1)
    tasks = reconcile([_file("x.md")], [a, b], selection=[a, b])
    assert [t.target for t in tasks] == [a, b]
    assert all(t.file.name == "x.md" for t in tasks)


def test_selection_ignored_for_multiple_files():
    """Several files always match by name, even with an active selection."""
    a = _el("a", index=0)
    tasks = reconcile([_file("a.md"), _file("b.md")], [a], selection=[a])
    assert [t.target for t in tasks] == [a]


def test_non_text_selection_falls_back_to_names():
    """A selection without text elements does not trigger fan-out."""
    frame = _el("Frame", ElementKind.frame, index=0)
    usage = _el("Usage", index=1)
    tasks = reconcile([_file("Usage.md")], [frame, usage], selection=[frame])
    assert [t.target for t in tasks] == [usage]


def test_name_matching_full_and_base_names():
    """Usage.md matches 'Usage' by base name; Notes.txt matches 'Notes.txt' by full name."""
    usage, notes = _el("Usage", index=0), _el("Notes.txt", index=1)
    tasks = reconcile([_file("Usage.md"), _file("Notes.txt")], [usage, notes], selection=[])
    assert [(t.file.name, t.target) for t in tasks] == [("Usage.md", usage), ("Notes.txt", notes)]


def test_every_matching_element_is_targeted():
    """A file fans out to all elements named like it, full or base name."""
    els = [_el("Usage", index=0), _el("Usage.md", index=1), _el("Usage", index=2), _el("Other", index=3)]
    tasks = reconcile([_file("Usage.md"), _file("z.md")], els, selection=[])
    assert [t.target.index for t in tasks] == [0, 1, 2]


def test_unmatched_files_skipped_in_replace_mode():
    """Without creation, non-matching files yield no task."""
    frame = _el("Usage", ElementKind.frame)
    assert reconcile([_file("Usage.md"), _file("Other.md")], [frame], selection=[]) == []


def test_create_mode_stacks_new_containers_below_content():
    """Created containers are placed below the lowest element, one after another."""
    els = [_el("Top", x=10, y=0, height=50, index=0), _el("Low", x=40, y=200, height=100, index=1)]
    tasks = reconcile([_file("a.md"), _file("b.md")], els, selection=[], create_missing=True)
    placements = [t.placement for t in tasks]
    assert all(t.target is None for t in tasks)
    assert [p.name for p in placements] == ["a", "b"]
    assert [(p.x, p.y) for p in placements] == [
        (10, 300 + CREATE_SPACING),
        (10, 300 + CREATE_SPACING + DEFAULT_HEIGHT + CREATE_SPACING),
    ]
    assert all(p.index is None and p.replaces is None for p in placements)


def test_create_mode_empty_document_origin():
    """The first container of an empty document goes to the origin."""
    (task,) = reconcile([_file("a.md")], [], selection=[], create_missing=True)
    assert (task.placement.x, task.placement.y) == (0, 0)


def test_create_mode_replaces_differently_typed_element():
    """A non-text element holding the name is replaced at its position and index."""
    frame = _el("Usage", ElementKind.frame, x=30, y=60, index=2)
    (task,) = reconcile([_file("Usage.md")], [_el("Other", index=0), frame], selection=[], create_missing=True)
    assert task.placement.replaces == frame
    assert (task.placement.x, task.placement.y, task.placement.index) == (30, 60, 2)
    assert task.placement.name == "Usage"


def test_create_mode_keeps_matched_files_as_updates():
    """Creation only applies to files without a text match."""
    usage = _el("Usage")
    (task,) = reconcile([_file("Usage.md")], [usage], selection=[], create_missing=True)
    assert task.target == usage
    assert task.placement is None


def test_create_mode_same_base_name_shares_placement():
    """Usage.md and Usage.txt plan one container, not two."""
    tasks = reconcile([_file("Usage.md"), _file("Usage.txt"), _file("b.md")], [], selection=[], create_missing=True)
    usage_md, usage_txt, b = (t.placement for t in tasks)
    assert usage_md is usage_txt
    assert b.y == DEFAULT_HEIGHT + CREATE_SPACING


def test_create_mode_replaced_element_targeted_once():
    """Every file landing on the same frame shares the placement that replaces it."""
    frame = _el("Usage.txt", ElementKind.frame, index=0)
    files = [_file("Usage.txt"), _file("Usage.txt.md"), _file("Usage.md")]
    placements = [t.placement for t in reconcile(files, [frame], selection=[], create_missing=True)]
    assert placements[0] is placements[1] is placements[2]
    assert placements[0].replaces == frame
    assert placements[0].name == "Usage"
