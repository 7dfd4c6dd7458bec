"""Inline link substitution and HTML escaping for a single block's text"""

import re

from markdown_it.common.utils import escapeHtml


LINK_RE = re.compile(r'\[([^\]]+)\]\(([^)]+)\)')
LINK_HTML = '<a href="{url}" target="_blank" rel="noopener noreferrer">{label}</a>'
INLINE_MODES = ('source', 'live')


def _link(label: str, url: str) -> str:
    return LINK_HTML.format(url=url, label=label)


def process_inline(text: str, mode: str = 'source') -> str:
    """Replace `[label](url)` with anchors and escape the result.

    mode='source' substitutes links first and then escapes the whole string,
    so the anchors come out as literal `&lt;a ...&gt;` text. mode='live'
    escapes the literal text and link parts separately and keeps the anchors.
    """
    if mode == 'source':
        return escapeHtml(LINK_RE.sub(lambda m: _link(m.group(1), m.group(2)), text))
    if mode != 'live':
        raise ValueError(f"Unknown inline mode: {mode!r} (expected one of {INLINE_MODES})")

    parts = []
    pos = 0
    for m in LINK_RE.finditer(text):
        parts.append(escapeHtml(text[pos:m.start()]))
        parts.append(_link(escapeHtml(m.group(1)), escapeHtml(m.group(2))))
        pos = m.end()
    parts.append(escapeHtml(text[pos:]))
    return ''.join(parts)
