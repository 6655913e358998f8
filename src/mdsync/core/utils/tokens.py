"""Shared markdown-it token utilities"""

MAX_HEADING_LEVEL = 3

LIST_OPEN = ('bullet_list_open', 'ordered_list_open')


def heading_level(token) -> int | None:
    """Return the heading level (1-6) for a heading_open token, else None."""
    if token.type == 'heading_open' and token.tag and token.tag[0] == 'h' and token.tag[1:].isdigit():
        return int(token.tag[1:])
    return None


def clamp_heading(level: int) -> int:
    """Map markdown heading depths onto the H1-H3 style range (h4-h6 render as h3)."""
    return max(1, min(level, MAX_HEADING_LEVEL))


def close_index(tokens: list, start: int) -> int:
    """Return the index of the token closing tokens[start]; start itself for leaf tokens."""
    if tokens[start].nesting != 1:
        return start
    depth = 0
    for i in range(start, len(tokens)):
        depth += tokens[i].nesting
        if depth == 0:
            return i
    return len(tokens) - 1


def plain_text(children: list | None) -> str:
    """Concatenate the visible text of a flat list of inline tokens."""
    parts = []
    for tok in children or []:
        if tok.type in ('text', 'code_inline', 'html_inline', 'image'):
            parts.append(tok.content)
        elif tok.type in ('softbreak', 'hardbreak'):
            parts.append('\n')
    return ''.join(parts)
