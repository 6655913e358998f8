"""Unit tests for core/parse.py"""

import pytest

from mdsync.core.parse import lex, strip_frontmatter


def test_strip_frontmatter_with_yaml():
    """strip_frontmatter extracts the YAML header and returns the body."""
    text = "---\ntitle: Hello\n---\n# Body\n"
    fm, body = strip_frontmatter(text)
    assert fm == {"title": "Hello"}
    assert body == "# Body\n"


def test_strip_frontmatter_no_frontmatter():
    """strip_frontmatter returns an empty dict and the full text when there is no header."""
    text = "# No frontmatter\n"
    fm, body = strip_frontmatter(text)
    assert fm == {}
    assert body == text


def test_strip_frontmatter_only_at_offset_zero():
    """A '---' fenced block in the middle of the document is left untouched."""
    text = "# Title\n\n---\ntitle: not frontmatter\n---\n\nBody\n"
    fm, body = strip_frontmatter(text)
    assert fm == {}
    assert body == text


def test_strip_frontmatter_leading_blank_line():
    """A fence that does not start at offset 0 is not frontmatter."""
    text = "\n---\ntitle: x\n---\nBody\n"
    assert strip_frontmatter(text) == ({}, text)


@pytest.mark.parametrize("text,body", [
    ("---\n---\nBody\n", "Body\n"),
    ("---\ntitle: x\n---", ""),
    ("---\r\ntitle: x\r\n---\r\nBody\r\n", "Body\r\n"),
])
def test_strip_frontmatter_fence_variants(text, body):
    """Empty headers, headers closing at EOF and CRLF fences are all stripped."""
    assert strip_frontmatter(text)[1] == body


@pytest.mark.parametrize("header", [
    "is this: [unclosed",
    "- a list\n- not a mapping",
])
def test_strip_frontmatter_lenient_on_bad_yaml(header):
    """Invalid or non-mapping YAML is still stripped and yields an empty dict."""
    fm, body = strip_frontmatter(f"---\n{header}\n---\n# Body\n")
    assert fm == {}
    assert body == "# Body\n"


def test_lex_returns_block_tokens():
    """lex produces markdown-it block tokens with inline children."""
    tokens = lex("# Hello\n\nWorld\n")
    assert [t.type for t in tokens] == [
        "heading_open", "inline", "heading_close",
        "paragraph_open", "inline", "paragraph_close",
    ]
    assert tokens[1].children[0].content == "Hello"


def test_lex_is_deterministic():
    """Identical input produces identical token streams."""
    md = "**a** _b_ `c`\n"
    first = [(t.type, t.content) for t in lex(md)]
    second = [(t.type, t.content) for t in lex(md)]
    assert first == second
