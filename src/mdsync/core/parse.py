"""Frontmatter stripping and markdown-it tokenization"""

import logging
import re
from typing import Any

import yaml
from markdown_it import MarkdownIt


logger = logging.getLogger(__name__)

# Only a fence opening at offset 0 counts; a later '---' is a thematic break.
FRONTMATTER_RE = re.compile(r'^---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)', re.DOTALL)


def make_parser(preset: str = 'gfm-like') -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with a leading YAML header removed.

    The header is always removed when fenced; a body that is not a YAML
    mapping yields an empty dict instead of failing the import.
    """
    m = FRONTMATTER_RE.match(text)
    if not m:
        return {}, text
    try:
        fm = yaml.safe_load(m.group(1) or "") or {}
    except yaml.YAMLError as e:
        logger.warning("Ignoring invalid YAML frontmatter: %s", e)
        fm = {}
    if not isinstance(fm, dict):
        logger.debug("Frontmatter is a %s, not a mapping; ignoring", type(fm).__name__)
        fm = {}
    return fm, text[m.end():]


def lex(markdown: str, parser_config: str = 'gfm-like') -> list:
    """Tokenize markdown (frontmatter already stripped) into markdown-it block tokens."""
    return make_parser(parser_config).parse(markdown)
