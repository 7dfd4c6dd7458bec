"""CLI command implementations"""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer

from pensieve.config import Settings, load_config
from pensieve.core.blocks import parse_blocks
from pensieve.core.errors import SchemaLoadError
from pensieve.core.fetch import HttpFetcher
from pensieve.core.frontmatter import parse_frontmatter
from pensieve.core.pipeline import render_document
from pensieve.core.render import render_page
from pensieve.core.schema import SCHEMA_FIELD, declared_schema, load_schema, resolve_styles
from pensieve.observability import setup_logging


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    setup_logging(settings.debug)
    return settings


def _read(path: str) -> str:
    """Read a UTF-8 note, dropping a leading BOM; unreadable files go through _fail."""
    try:
        return Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        _fail(f"Cannot read {path}", e)


def render_cmd(
    path: Annotated[str, typer.Argument(help="Note file to render")],
    out: Annotated[Optional[str], typer.Option("--out", help="Output HTML file (default: <output_dir>/<stem>.html)")] = None,
    dev: Annotated[Optional[bool], typer.Option("--dev/--no-dev", help="Rewrite canonical schema URLs to the local origin")] = None,
    local: Annotated[Optional[str], typer.Option("--local-base-url", help="Local origin used in development mode")] = None,
    dark: Annotated[Optional[bool], typer.Option("--dark/--light", help="Theme stylesheet to load")] = None,
    inline: Annotated[Optional[str], typer.Option("--inline-mode", help="Link escaping order: source or live")] = None,
    debug: Annotated[bool, typer.Option("--debug", help="Verbose logging")] = False,
    ):
    """Render a note to a standalone HTML page with its schema stylesheets inlined."""
    settings = _settings(overrides={
        "development": dev, "local_base_url": local, "prefers_dark": dark,
        "inline_mode": inline, "debug": debug or None,
    })
    raw = _read(path)

    with HttpFetcher(timeout=settings.fetch_timeout) as fetcher:
        note = render_document(raw, settings, fetcher)

    out_path = Path(out) if out else Path(settings.output_dir) / f"{Path(path).stem}.html"
    out_path.parent.mkdir(parents=True, exist_ok=True)
    title = str(note.frontmatter.get("title") or Path(path).stem)
    out_path.write_text(render_page(note.html, note.stylesheets, title), encoding="utf-8")

    if note.mode == "error":
        typer.echo(f"  {path} -> {out_path} (error page)")
        _fail(note.error)
    typer.echo(f"  {path} -> {out_path} ({note.mode}, {len(note.stylesheets)} stylesheet(s))")


def parse_cmd(
    path: Annotated[str, typer.Argument(help="Note file to parse")],
    ):
    """Print front matter, body and blocks as JSON. Does not fetch anything."""
    _settings()
    parsed = parse_frontmatter(_read(path))
    data = {
        "frontmatter": parsed.frontmatter,
        "body": parsed.body,
        "blocks": [b.model_dump() for b in parse_blocks(parsed.body)],
    }
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


def styles_cmd(
    path: Annotated[str, typer.Argument(help="Note file whose schema stylesheets to resolve")],
    dev: Annotated[Optional[bool], typer.Option("--dev/--no-dev", help="Rewrite canonical schema URLs to the local origin")] = None,
    local: Annotated[Optional[str], typer.Option("--local-base-url", help="Local origin used in development mode")] = None,
    dark: Annotated[Optional[bool], typer.Option("--dark/--light", help="Theme stylesheet to select")] = None,
    ):
    """Fetch the note's schema and print the stylesheet URLs that would be loaded."""
    settings = _settings(overrides={"development": dev, "local_base_url": local, "prefers_dark": dark})
    parsed = parse_frontmatter(_read(path))
    location = settings.schema_location()
    try:
        declared = declared_schema(parsed.frontmatter)
        if declared is None:
            _fail(f"{path} has no {SCHEMA_FIELD} field")
        with HttpFetcher(timeout=settings.fetch_timeout) as fetcher:
            schema = load_schema(fetcher, declared, **location)
    except SchemaLoadError as e:
        _fail("Schema load failed", e)

    selected = resolve_styles(schema, declared, **location).selected(settings.prefers_dark)
    if not selected:
        typer.echo("Schema declares no stylesheets.")
        return
    for element_id, url in selected:
        typer.echo(f"{element_id}\t{url}")
