"""Unit tests for core/extract/inline.py"""

import pytest

from mdsync.core.extract.inline import flatten
from mdsync.core.models import StyleContext, StyledSegment
from mdsync.core.parse import lex


def _inline(md: str) -> list:
    """Inline children of the first inline token in md."""
    return next(t for t in lex(md) if t.type == "inline").children


def _texts(segments):
    return [s.text for s in segments]


def test_plain_text_single_segment():
    """Plain text yields one segment with the context unchanged."""
    assert flatten(_inline("hello world")) == [StyledSegment("hello world", StyleContext())]


def test_strong_sets_bold():
    """strong children are flattened with bold set; siblings stay plain."""
    segments = flatten(_inline("a **b** c"))
    assert _texts(segments) == ["a ", "b", " c"]
    assert [s.context.bold for s in segments] == [False, True, False]


def test_em_nested_in_strong_keeps_both_flags():
    """'**a *b* c**' yields 'b' with bold and italic, never overwriting the outer bold."""
    segments = flatten(_inline("**a *b* c**"))
    assert _texts(segments) == ["a ", "b", " c"]
    assert all(s.context.bold for s in segments)
    assert [s.context.italic for s in segments] == [False, True, False]


def test_strong_nested_in_em():
    """Nesting in the other direction accumulates the same way."""
    segments = flatten(_inline("*x **y***"))
    y = next(s for s in segments if s.text == "y")
    assert y.context.bold and y.context.italic


def test_code_span_is_leaf():
    """Code spans emit one code segment; markup inside them stays literal."""
    segments = flatten(_inline("use `x **y**` now"))
    assert _texts(segments) == ["use ", "x **y**", " now"]
    assert segments[1].context.code
    assert not segments[1].context.bold


def test_code_span_inherits_outer_emphasis():
    """A code span inside strong carries both flags; the resolver lets code win."""
    (segment,) = flatten(_inline("**`c`**"))
    assert segment.context.code and segment.context.bold


def test_link_downgraded_to_label():
    """Links emit their visible label only; the target is dropped."""
    segments = flatten(_inline("see [the **docs**](http://example.com) ok"))
    assert _texts(segments) == ["see ", "the docs", " ok"]
    assert "example.com" not in "".join(_texts(segments))


def test_image_emits_alt_text():
    """Images emit their alt text."""
    assert _texts(flatten(_inline("![alt text](photo.png)"))) == ["alt text"]


def test_strikethrough_emits_plain_text():
    """Containers without a style case keep their text with the current context."""
    segments = flatten(_inline("**~~gone~~**"))
    assert _texts(segments) == ["gone"]
    assert segments[0].context.bold


def test_softbreak_emits_newline():
    """Soft line breaks inside a paragraph become newline segments."""
    assert _texts(flatten(_inline("a\nb"))) == ["a", "\n", "b"]


def test_initial_context_is_inherited():
    """Every segment inherits the starting context."""
    segments = flatten(_inline("a *b*"), StyleContext(header_level=2))
    assert all(s.context.header_level == 2 for s in segments)


@pytest.mark.parametrize("tokens", [None, []])
def test_empty_input(tokens):
    """No tokens yields no segments."""
    assert flatten(tokens) == []


def test_flatten_is_pure():
    """Repeated calls with equal inputs return equal, independent lists."""
    children = _inline("x **y *z*** `w` [l](u)")
    first = flatten(children)
    second = flatten(children)
    assert first == second
    assert first is not second


def test_context_derive_is_monotonic():
    """derive only adds flags and raises levels."""
    ctx = StyleContext(bold=True, header_level=2, list_depth=3)
    child = ctx.derive(italic=True, header_level=1, list_depth=1)
    assert child == StyleContext(bold=True, italic=True, header_level=2, list_depth=3)
    assert ctx == StyleContext(bold=True, header_level=2, list_depth=3)
