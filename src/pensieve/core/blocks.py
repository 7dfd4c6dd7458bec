"""Line classification of a note body into typed blocks, and list grouping"""

import re
from typing import Optional

from pensieve.core.models import (
    Block, Heading, Image, ListGroup, OrderedItem, Paragraph, UnorderedItem,
)


# Order is precedence: heading beats list item beats image beats paragraph.
HEADING_RE   = re.compile(r'(#{1,6})\s+(.+)')
UNORDERED_RE = re.compile(r'[*+-]\s+(.+)')
ORDERED_RE   = re.compile(r'[0-9]+\.\s+(.+)')
IMAGE_RE     = re.compile(r'!\[\[(.+?)\]\]')

LIST_KINDS = {
    'unordered_item': 'unordered',
    'ordered_item':   'ordered',
}


def parse_blocks(body: str) -> list[Block]:
    """Classify each trimmed line of body into a Block, in document order.

    Blank lines emit nothing. List containers are left to group_blocks, which
    only looks at block kind and order.
    """
    blocks: list[Block] = []

    for line in body.split('\n'):
        trimmed = line.strip()
        if not trimmed:
            continue

        if m := HEADING_RE.fullmatch(trimmed):
            blocks.append(Heading(level=len(m.group(1)), text=m.group(2)))
        elif m := UNORDERED_RE.fullmatch(trimmed):
            blocks.append(UnorderedItem(text=m.group(1)))
        elif m := ORDERED_RE.fullmatch(trimmed):
            blocks.append(OrderedItem(text=m.group(1)))
        elif m := IMAGE_RE.fullmatch(trimmed):
            blocks.append(Image(target=m.group(1)))
        else:
            blocks.append(Paragraph(text=trimmed))

    return blocks


def group_blocks(blocks: list[Block]) -> list[Block | ListGroup]:
    """Merge runs of consecutive same-kind list items into ListGroups; other blocks pass through."""
    grouped: list[Block | ListGroup] = []
    run_kind: Optional[str] = None
    run: list[str] = []

    def _flush() -> None:
        if run:
            grouped.append(ListGroup(kind=run_kind, items=tuple(run)))
            run.clear()

    for block in blocks:
        kind = LIST_KINDS.get(block.kind)
        if kind is None:
            _flush()
            run_kind = None
            grouped.append(block)
            continue
        if kind != run_kind:
            _flush()
            run_kind = kind
        run.append(block.text)
    _flush()

    return grouped


def _serialize(block: Block) -> str:
    if isinstance(block, Heading):
        return f"{'#' * block.level} {block.text}"
    if isinstance(block, UnorderedItem):
        return f"- {block.text}"
    if isinstance(block, OrderedItem):
        return f"1. {block.text}"
    if isinstance(block, Image):
        return f"![[{block.target}]]"
    return block.text


def serialize_blocks(blocks: list[Block]) -> str:
    """Write blocks back out as markdown, one block per blank-line separated chunk."""
    return "\n\n".join(_serialize(b) for b in blocks)
