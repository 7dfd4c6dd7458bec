"""Schema loading, front matter validation hook, and stylesheet resolution/loading"""

import logging
from typing import Any

from pensieve.core.errors import SchemaLoadError
from pensieve.core.fetch import FETCH_ERRORS, HttpFetcher
from pensieve.core.models import ResolvedStyleSet, Schema, Stylesheet
from pensieve.core.urls import CANONICAL_BASE_URL, resolve_relative, schema_fetch_url


logger = logging.getLogger(__name__)

SCHEMA_FIELD = "pensive_schema"


def declared_schema(frontmatter: dict[str, Any]) -> str | None:
    """Schema location declared by the front matter, or None for a plain note.

    Missing, empty, 0 and false values mean plain markdown. Any other value
    that is not a single URL string (a number, true, a list) raises
    SchemaLoadError.
    """
    declared = frontmatter.get(SCHEMA_FIELD)
    if isinstance(declared, str):
        return declared or None
    if isinstance(declared, list) or declared:
        raise SchemaLoadError(f"Could not load schema: {SCHEMA_FIELD} must be a URL, got {declared!r}")
    return None


def load_schema(
    fetcher: HttpFetcher,
    declared_url: str,
    development: bool = False,
    local_base_url: str = "",
    canonical_base_url: str = CANONICAL_BASE_URL,
    ) -> Schema:
    """Fetch and decode `<declared_url>/schema.json`. Raises SchemaLoadError on any failure."""
    url = schema_fetch_url(declared_url, development, local_base_url, canonical_base_url)
    logger.debug("Loading schema from: %s", url)
    try:
        data = fetcher.fetch_json(url)
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        return Schema.model_validate(data)
    except FETCH_ERRORS + (ValueError,) as e:
        logger.error("Failed to load schema from: %s (%s)", declared_url, e)
        raise SchemaLoadError(f"Could not load schema: {e}", url=url) from e


def validate_frontmatter(schema: Schema, frontmatter: dict[str, Any]) -> None:
    """Hook for checking front matter against schema.frontmatter_schema. Currently a no-op."""
    if not schema.frontmatter_schema:
        logger.debug("No frontmatter schema to validate against")
        return
    logger.debug("Frontmatter validation not implemented; %d field(s) unchecked", len(frontmatter))


def resolve_styles(
    schema: Schema,
    declared_url: str,
    development: bool = False,
    local_base_url: str = "",
    canonical_base_url: str = CANONICAL_BASE_URL,
    ) -> ResolvedStyleSet:
    """Resolve every stylesheet the schema declares against the schema location."""
    css = schema.styling.css if schema.styling else None
    if css is None:
        logger.debug("No styling information in schema")
        return ResolvedStyleSet()

    def _resolve(path: str | None) -> str | None:
        if not path:
            return None
        return resolve_relative(declared_url, path, development, local_base_url, canonical_base_url)

    return ResolvedStyleSet(
        main=_resolve(css.main),
        tokens=_resolve(css.tokens),
        theme_light=_resolve(css.theme_light),
        theme_dark=_resolve(css.theme_dark),
    )


def load_stylesheets(
    fetcher: HttpFetcher,
    styles: ResolvedStyleSet,
    prefers_dark: bool = False,
    ) -> list[Stylesheet]:
    """Fetch main, tokens and the selected theme. A failed fetch is logged and skipped."""
    loaded = []
    for element_id, url in styles.selected(prefers_dark):
        try:
            css = fetcher.fetch_text(url)
        except FETCH_ERRORS as e:
            logger.error("Failed to load CSS: %s (%s)", url, e)
            continue
        logger.debug("Loaded CSS: %s", url)
        loaded.append(Stylesheet(id=element_id, url=url, css=css))
    return loaded
