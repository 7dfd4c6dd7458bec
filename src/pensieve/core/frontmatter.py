"""Front matter detection, scalar coercion, and the line-based subset-of-YAML decoder"""

import logging
import re
from typing import Any

from pensieve.core.models import ParsedNote


logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*\n', re.DOTALL)
INT_RE = re.compile(r'[0-9]+')
FLOAT_RE = re.compile(r'[0-9]+\.[0-9]+')
QUOTES = ('"', "'")


def coerce_value(token: str) -> str | int | float | bool:
    """Convert a raw scalar token to str/int/float/bool; falls back to the token itself."""
    for q in QUOTES:
        if token.startswith(q) and token.endswith(q):
            return token[1:-1]
    if INT_RE.fullmatch(token):
        return int(token)
    if FLOAT_RE.fullmatch(token):
        return float(token)
    if token == 'true':
        return True
    if token == 'false':
        return False
    return token


def _inline_array(value: str) -> list[str]:
    """Split `[a, 'b', "c"]` into strings. Elements are never coerced."""
    return [piece.strip().strip('\'"') for piece in value[1:-1].split(',')]


def parse_simple_yaml(block: str) -> dict[str, Any]:
    """Decode a front matter block into an insertion-ordered mapping.

    Supports `key: value` scalars, `key: [a, b]` inline arrays and `key:`
    followed by `- item` lines. Blank lines, `#` comments and anything else
    are skipped. A repeated key overwrites the earlier value.
    """
    result: dict[str, Any] = {}
    current_key = None
    in_array = False

    for line in block.split('\n'):
        line = line.strip()
        if not line or line.startswith('#'):
            continue

        if ':' in line:
            key, _, value = line.partition(':')
            key, value = key.strip(), value.strip()
            if not value:
                current_key = key
                in_array = True
                result[key] = []
            elif value.startswith('[') and value.endswith(']'):
                result[key] = _inline_array(value)
                in_array = False
            else:
                result[key] = coerce_value(value)
                in_array = False
        elif line.startswith('-') and in_array and current_key:
            result[current_key].append(coerce_value(line[1:].strip()))

    return result


def split_frontmatter(raw: str) -> tuple[str | None, str]:
    """Return (block, body); block is None when raw has no leading `---` fenced header."""
    m = FRONTMATTER_RE.match(raw)
    if m is None:
        return None, raw
    return m.group(1), raw[m.end():]


def parse_frontmatter(raw: str) -> ParsedNote:
    """Split raw into front matter and body. Decoding failures fall back to a plain note."""
    block, body = split_frontmatter(raw)
    if block is None:
        return ParsedNote(frontmatter={}, body=raw)
    try:
        frontmatter = parse_simple_yaml(block)
    except Exception:
        logger.exception("Failed to parse frontmatter")
        return ParsedNote(frontmatter={}, body=raw)
    return ParsedNote(frontmatter=frontmatter, body=body)
