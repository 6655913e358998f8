"""Top-level token to Block conversion"""

from markdown_it.token import Token

from mdsync.core.models import Block, BlockKind
from mdsync.core.utils.tokens import LIST_OPEN, clamp_heading, close_index, heading_level, plain_text


BULLET = "•"


def _inline_children(tokens: list, start: int, end: int) -> list:
    """Return the children of the first inline token in tokens[start:end]."""
    for tok in tokens[start:end]:
        if tok.type == 'inline':
            return list(tok.children or [])
    return []


def _heading(tokens: list, i: int, end: int) -> Block:
    children = _inline_children(tokens, i, end)
    return Block(
        kind=BlockKind.heading,
        raw_text=plain_text(children),
        heading_level=clamp_heading(heading_level(tokens[i]) or 1),
        inline_tokens=children,
    )


def _paragraph(tokens: list, i: int, end: int) -> Block:
    children = _inline_children(tokens, i, end)
    return Block(kind=BlockKind.paragraph, raw_text=plain_text(children), inline_tokens=children)


def _code(tok) -> Block:
    info = (tok.info or '').strip()
    return Block(
        kind=BlockKind.code,
        raw_text=tok.content.rstrip('\n'),
        code_language=info.split()[0] if info else None,
    )


def _quote(tokens: list, i: int, end: int) -> Block:
    """Blockquotes collapse to the plain text of everything inside them."""
    lines = []
    for tok in tokens[i + 1:end]:
        if tok.type == 'inline':
            lines.append(plain_text(tok.children))
        elif tok.type in ('fence', 'code_block'):
            lines.append(tok.content.rstrip('\n'))
    return Block(kind=BlockKind.quote, raw_text='\n'.join(lines))


def _table(tokens: list, i: int, end: int) -> Block:
    """Tables degrade to one paragraph: cells joined by tabs, rows by newlines."""
    rows: list[list[str]] = []
    for tok in tokens[i + 1:end]:
        if tok.type == 'tr_open':
            rows.append([])
        elif tok.type == 'inline' and rows:
            rows[-1].append(plain_text(tok.children))
    return Block(kind=BlockKind.paragraph, raw_text='\n'.join('\t'.join(r) for r in rows))


def _list_marker(list_tok, item_tok) -> str:
    if list_tok.type == 'ordered_list_open':
        return f"{item_tok.info}{item_tok.markup}"
    return BULLET


def _list_items(tokens: list, start: int, end: int, depth: int) -> list[Block]:
    """One Block per list item; nested lists follow their parent item at depth + 1."""
    blocks: list[Block] = []
    i = start + 1
    while i < end:
        tok = tokens[i]
        if tok.type != 'list_item_open':
            i += 1
            continue
        close = close_index(tokens, i)
        blocks.extend(_list_item(tokens, i, close, depth, _list_marker(tokens[start], tok)))
        i = close + 1
    return blocks


def _list_item(tokens: list, start: int, end: int, depth: int, marker: str) -> list[Block]:
    children: list = []
    nested: list[Block] = []
    i = start + 1
    while i < end:
        tok = tokens[i]
        if tok.type in LIST_OPEN:
            close = close_index(tokens, i)
            nested.extend(_list_items(tokens, i, close, depth + 1))
            i = close + 1
            continue
        if tok.type == 'inline':
            # Loose items hold several paragraphs; keep them on separate lines.
            if children:
                children.append(Token('softbreak', 'br', 0))
            children.extend(tok.children or [])
        i += 1

    text = plain_text(children)
    item = Block(
        kind=BlockKind.list_item,
        raw_text=text,
        list_depth=depth,
        list_marker=marker,
        inline_tokens=children,
    )
    return ([item] if text.strip() else []) + nested


def extract_blocks(tokens: list) -> list[Block]:
    """Classify top-level markdown-it tokens into an ordered list of Blocks.

    Unknown token types are skipped and blocks without text are dropped, so
    malformed input degrades to whatever text can be recovered.
    """
    blocks: list[Block] = []
    i = 0
    while i < len(tokens):
        tok = tokens[i]
        end = close_index(tokens, i)

        if tok.type == 'heading_open':
            block = _heading(tokens, i, end)
        elif tok.type == 'paragraph_open':
            block = _paragraph(tokens, i, end)
        elif tok.type in ('fence', 'code_block'):
            block = _code(tok)
        elif tok.type == 'blockquote_open':
            block = _quote(tokens, i, end)
        elif tok.type == 'table_open':
            block = _table(tokens, i, end)
        elif tok.type == 'html_block':
            block = Block(kind=BlockKind.paragraph, raw_text=tok.content.strip())
        elif tok.type == 'hr':
            block = Block(kind=BlockKind.separator)
        elif tok.type in LIST_OPEN:
            blocks.extend(_list_items(tokens, i, end, depth=1))
            i = end + 1
            continue
        else:
            block = None

        if block is not None and (block.kind == BlockKind.separator or block.raw_text.strip()):
            blocks.append(block)
        i = end + 1

    return blocks
