"""Pipeline orchestration: front matter -> schema -> styles -> blocks -> HTML"""

import logging
import traceback
from pathlib import Path
from typing import Optional

from pensieve.config import Settings
from pensieve.core.blocks import parse_blocks
from pensieve.core.errors import SchemaLoadError
from pensieve.core.fetch import HttpFetcher
from pensieve.core.frontmatter import parse_frontmatter
from pensieve.core.models import RenderedNote
from pensieve.core.render import render_error, render_markdown, render_note
from pensieve.core.schema import (
    SCHEMA_FIELD, declared_schema, load_schema, load_stylesheets, resolve_styles, validate_frontmatter,
)


logger = logging.getLogger(__name__)


def process_content(
    raw: str,
    settings: Settings,
    fetcher: HttpFetcher,
    prefers_dark: Optional[bool] = None,
    ) -> RenderedNote:
    """Run the full pipeline on one raw note. Raises SchemaLoadError if the schema is unreachable.

    Notes without a `pensive_schema` field never touch the network and render
    as plain markdown. Stylesheet failures only drop that stylesheet.
    """
    parsed = parse_frontmatter(raw)
    logger.debug("Parsed frontmatter: %s", parsed.frontmatter)

    declared = declared_schema(parsed.frontmatter)
    if declared is None:
        logger.debug("No %s found, treating as regular markdown", SCHEMA_FIELD)
        return RenderedNote(
            mode="markdown",
            html=render_markdown(parsed.body),
            frontmatter=parsed.frontmatter,
            body=parsed.body,
        )

    location = settings.schema_location()
    schema = load_schema(fetcher, declared, **location)
    validate_frontmatter(schema, parsed.frontmatter)

    dark = settings.prefers_dark if prefers_dark is None else prefers_dark
    styles = resolve_styles(schema, declared, **location)
    stylesheets = load_stylesheets(fetcher, styles, dark)

    blocks = parse_blocks(parsed.body)
    logger.debug("Rendered Pensieve note (%d blocks, %d stylesheets)", len(blocks), len(stylesheets))
    return RenderedNote(
        mode="note",
        html=render_note(parsed.frontmatter, blocks, settings.inline_mode),
        frontmatter=parsed.frontmatter,
        body=parsed.body,
        blocks=blocks,
        styles=styles,
        stylesheets=stylesheets,
    )


def render_document(
    raw: str,
    settings: Optional[Settings] = None,
    fetcher: Optional[HttpFetcher] = None,
    prefers_dark: Optional[bool] = None,
    ) -> RenderedNote:
    """Entry point for host programs: never raises on schema failure, returns an error note instead.

    A fetcher is created from settings (and closed afterwards) when none is given.
    """
    settings = settings or Settings()
    owns_fetcher = fetcher is None
    if owns_fetcher:
        fetcher = HttpFetcher(timeout=settings.fetch_timeout)
    try:
        return process_content(raw, settings, fetcher, prefers_dark)
    except SchemaLoadError as e:
        logger.error("Failed to process content: %s", e)
        detail = "".join(traceback.format_exception(e))
        return RenderedNote(mode="error", html=render_error(str(e), detail), error=str(e))
    finally:
        if owns_fetcher:
            fetcher.close()


def render_file(
    path: Path,
    settings: Optional[Settings] = None,
    fetcher: Optional[HttpFetcher] = None,
    prefers_dark: Optional[bool] = None,
    ) -> RenderedNote:
    """Read a UTF-8 note from disk (a leading BOM is dropped) and render it."""
    raw = Path(path).read_text(encoding="utf-8-sig")
    if not raw.strip():
        logger.debug("No content found in %s", path)
    return render_document(raw, settings, fetcher, prefers_dark)
