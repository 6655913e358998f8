"""Inline token flattening into styled segments"""

import logging

from markdown_it.tree import SyntaxTreeNode

from mdsync.core.models import StyleContext, StyledSegment
from mdsync.core.utils.tokens import plain_text


logger = logging.getLogger(__name__)

BREAKS = ('softbreak', 'hardbreak')


def _label(node: SyntaxTreeNode) -> str:
    """Visible text of a node and its descendants."""
    if node.type in BREAKS:
        return '\n'
    if node.type == 'image' or not node.children:
        return node.token.content if node.token else ''
    return ''.join(_label(child) for child in node.children)


def _leaf(text: str, context: StyleContext) -> list[StyledSegment]:
    return [StyledSegment(text, context)] if text else []


def _node_segments(node: SyntaxTreeNode, context: StyleContext) -> list[StyledSegment]:
    kind = node.type
    if kind == 'strong':
        return _walk(node.children, context.derive(bold=True))
    if kind == 'em':
        return _walk(node.children, context.derive(italic=True))
    if kind == 'code_inline':
        # code spans are leaves; emphasis markers inside them are literal text
        return _leaf(node.content, context.derive(code=True))
    if kind == 'text':
        if node.children:
            return _walk(node.children, context)
        return _leaf(node.content, context)
    if kind in BREAKS:
        return _leaf('\n', context)
    # links keep only their label; images their alt text; anything else its plain text
    return _leaf(_label(node), context)


def _walk(nodes: list[SyntaxTreeNode], context: StyleContext) -> list[StyledSegment]:
    segments: list[StyledSegment] = []
    for node in nodes:
        segments.extend(_node_segments(node, context))
    return segments


def flatten(inline_tokens: list | None, context: StyleContext = StyleContext()) -> list[StyledSegment]:
    """Flatten markdown-it inline tokens into document-ordered StyledSegments.

    Each call builds a new list; nested emphasis accumulates in the context
    passed down, so '**a *b* c**' yields 'b' with both bold and italic set.
    """
    if not inline_tokens:
        return []
    try:
        root = SyntaxTreeNode(inline_tokens)
    except ValueError as e:
        logger.debug("Unbalanced inline tokens, emitting plain text: %s", e)
        return _leaf(plain_text(inline_tokens), context)
    return _walk(root.children, context)
