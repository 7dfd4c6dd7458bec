"""HTML rendering of parsed notes: note fragment, plain markdown fallback, error state, standalone page"""

from typing import Any

from markdown_it.common.utils import escapeHtml

from pensieve.core.blocks import group_blocks
from pensieve.core.inline import process_inline
from pensieve.core.models import Block, Heading, Image, ListGroup, Stylesheet


RECIPE_FIELDS = ('servings', 'prep_time', 'cook_time', 'total_time', 'source')
LIST_TAGS = {'unordered': 'ul', 'ordered': 'ol'}


def _text(value: Any) -> str:
    """Display string for a front matter value (lowercase booleans, comma-joined lists)."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, list):
        return ','.join(_text(v) for v in value)
    return str(value)


def _present(value: Any) -> bool:
    """Whether a front matter value is shown: empty lists count, other falsy values do not."""
    return isinstance(value, list) or bool(value)


def render_blocks(blocks: list[Block], inline_mode: str = 'source') -> str:
    """Render body blocks as HTML lines; consecutive same-kind list items share one container."""
    lines = []
    for item in group_blocks(blocks):
        if isinstance(item, ListGroup):
            tag = LIST_TAGS[item.kind]
            lines.append(f"<{tag}>")
            lines.extend(f"<li>{process_inline(text, inline_mode)}</li>" for text in item.items)
            lines.append(f"</{tag}>")
        elif isinstance(item, Heading):
            lines.append(f"<h{item.level}>{escapeHtml(item.text)}</h{item.level}>")
        elif isinstance(item, Image):
            target = escapeHtml(item.target)
            lines.append(f'<img src="{target}" alt="{target}">')
        else:
            lines.append(f"<p>{process_inline(item.text, inline_mode)}</p>")
    return "\n".join(lines)


def render_frontmatter(frontmatter: dict[str, Any]) -> str:
    """Header with title, date, tags and recipe fields; empty string when none apply."""
    parts = []
    if _present(frontmatter.get('title')):
        parts.append(f'<h1 class="pensieve-title">{escapeHtml(_text(frontmatter["title"]))}</h1>')
    if _present(frontmatter.get('date')):
        parts.append(f'<div class="pensieve-date">{escapeHtml(_text(frontmatter["date"]))}</div>')

    tags = frontmatter.get('tags')
    if isinstance(tags, list):
        items = "".join(f'<li class="pensieve-tag">{escapeHtml(_text(t))}</li>' for t in tags)
        parts.append(f'<ul class="pensieve-tags">{items}</ul>')

    if frontmatter.get('type') == 'recipe':
        for name in RECIPE_FIELDS:
            if _present(frontmatter.get(name)):
                parts.append(
                    f'<div class="pensieve-recipe-{name}">{escapeHtml(_text(frontmatter[name]))}</div>'
                )

    if not parts:
        return ""
    return '<header class="pensieve-frontmatter">' + "".join(parts) + '</header>'


def render_note(frontmatter: dict[str, Any], blocks: list[Block], inline_mode: str = 'source') -> str:
    """Render a schema-governed note: wrapper classes, front matter header, content."""
    classes = ['pensieve-note']
    if _present(frontmatter.get('type')):
        classes.append(f"pensieve-{escapeHtml(_text(frontmatter['type']))}")
    header = render_frontmatter(frontmatter)
    content = f'<main class="pensieve-content">\n{render_blocks(blocks, inline_mode)}\n</main>'
    return f'<div class="{" ".join(classes)}">{header}{content}</div>'


def render_markdown(body: str) -> str:
    """Plain markdown fallback: the body as escaped preformatted text."""
    return f'<div class="pensieve-markdown"><pre>{escapeHtml(body)}</pre></div>'


def render_error(message: str, detail: str = "") -> str:
    """Visible error state with a readable message and the underlying failure detail."""
    return (
        '<div class="pensieve-error">'
        '<h3>Pensieve Error</h3>'
        f'<p>{escapeHtml(message)}</p>'
        '<details><summary>Details</summary>'
        f'<pre>{escapeHtml(detail or message)}</pre>'
        '</details></div>'
    )


def render_page(fragment: str, stylesheets: list[Stylesheet] = (), title: str = "Pensieve") -> str:
    """Standalone HTML page with each loaded stylesheet inlined in <head>."""
    styles = "\n".join(f'<style id="{s.id}">\n{s.css}\n</style>' for s in stylesheets)
    return (
        "<!DOCTYPE html>\n"
        "<html>\n<head>\n"
        '<meta charset="utf-8">\n'
        f"<title>{escapeHtml(title)}</title>\n"
        f"{styles}\n"
        "</head>\n<body>\n"
        f'<div id="pensieve">{fragment}</div>\n'
        "</body>\n</html>\n"
    )
