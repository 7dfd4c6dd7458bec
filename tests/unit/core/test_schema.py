"""Unit tests for core/schema.py"""

import logging

import httpx
import pytest

from pensieve.core.errors import SchemaLoadError
from pensieve.core.models import ResolvedStyleSet, Schema, StylingCss, Styling
from pensieve.core.schema import (
    declared_schema, load_schema, load_stylesheets, resolve_styles, validate_frontmatter,
)
from tests.remote import LOCAL_SCHEMA_URL, SCHEMA_URL


LOCAL = "http://localhost:8080"


def test_load_schema(fetcher, remote):
    schema = load_schema(fetcher, SCHEMA_URL)
    assert schema.styling.css.main == "./style.css"
    assert schema.styling.css.theme_dark == "./themes/dark.css"
    assert schema.frontmatter_schema == {"type": "object", "required": ["title"]}
    assert remote.requested == [f"{SCHEMA_URL}/schema.json"]


def test_load_schema_development_fetches_local(fetcher, remote):
    load_schema(fetcher, SCHEMA_URL, development=True, local_base_url=LOCAL)
    assert remote.requested == [f"{LOCAL_SCHEMA_URL}/schema.json"]


def test_load_schema_not_found(fetcher):
    with pytest.raises(SchemaLoadError, match="Could not load schema") as exc_info:
        load_schema(fetcher, "https://example.org/missing")
    assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)
    assert exc_info.value.url == "https://example.org/missing/schema.json"


@pytest.mark.parametrize("body", ["not json {", ["a", "list"], {"styling": {"css": {"main": 5}}}])
def test_load_schema_bad_document(fetcher, remote, body):
    remote.routes[f"{SCHEMA_URL}/schema.json"] = body
    with pytest.raises(SchemaLoadError):
        load_schema(fetcher, SCHEMA_URL)


def test_load_schema_transport_error(fetcher, remote):
    remote.routes[f"{SCHEMA_URL}/schema.json"] = httpx.ConnectError("connection refused")
    with pytest.raises(SchemaLoadError, match="connection refused"):
        load_schema(fetcher, SCHEMA_URL)


def test_schema_accepts_unknown_fields():
    schema = Schema.model_validate({"name": "recipe", "version": 2})
    assert schema.styling is None
    assert schema.frontmatter_schema is None


def test_validate_frontmatter_is_noop():
    schema = Schema.model_validate({"frontmatterSchema": {"required": ["title"]}})
    assert validate_frontmatter(schema, {}) is None
    assert validate_frontmatter(Schema(), {"title": "x"}) is None


def test_resolve_styles():
    schema = Schema(styling=Styling(css=StylingCss(
        main="./style.css", tokens="https://cdn.example/tokens.css", themeLight="light.css",
    )))
    styles = resolve_styles(schema, SCHEMA_URL)
    assert styles == ResolvedStyleSet(
        main=f"{SCHEMA_URL}/style.css",
        tokens="https://cdn.example/tokens.css",
        theme_light=f"{SCHEMA_URL}/light.css",
        theme_dark=None,
    )


def test_resolve_styles_development():
    schema = Schema.model_validate({"styling": {"css": {"main": "./style.css"}}})
    styles = resolve_styles(schema, SCHEMA_URL, development=True, local_base_url=LOCAL)
    assert styles.main == f"{LOCAL_SCHEMA_URL}/style.css"


@pytest.mark.parametrize("data", [{}, {"styling": {}}, {"styling": {"css": {}}}])
def test_resolve_styles_without_css(data):
    assert resolve_styles(Schema.model_validate(data), SCHEMA_URL) == ResolvedStyleSet()


def test_selected_picks_theme_by_preference():
    styles = ResolvedStyleSet(main="m", tokens="t", theme_light="l", theme_dark="d")
    assert styles.selected(False) == [("pensieve-main-style", "m"), ("pensieve-tokens", "t"), ("pensieve-theme", "l")]
    assert styles.selected(True)[-1] == ("pensieve-theme", "d")


def test_selected_skips_missing():
    assert ResolvedStyleSet(theme_light="l").selected(True) == []


def test_load_stylesheets(fetcher):
    styles = ResolvedStyleSet(
        main=f"{SCHEMA_URL}/style.css",
        theme_light=f"{SCHEMA_URL}/themes/light.css",
        theme_dark=f"{SCHEMA_URL}/themes/dark.css",
    )
    sheets = load_stylesheets(fetcher, styles, prefers_dark=True)
    assert [(s.id, s.css) for s in sheets] == [
        ("pensieve-main-style", "body { margin: 0; }"),
        ("pensieve-theme", "body { background: black; }"),
    ]


def test_failed_stylesheet_is_skipped(fetcher, caplog):
    """One failing stylesheet is logged and omitted; the rest still load."""
    styles = ResolvedStyleSet(
        main=f"{SCHEMA_URL}/missing.css",
        tokens=f"{SCHEMA_URL}/tokens.css",
    )
    with caplog.at_level(logging.ERROR, logger="pensieve"):
        sheets = load_stylesheets(fetcher, styles)
    assert [s.id for s in sheets] == ["pensieve-tokens"]
    assert "Failed to load CSS" in caplog.text


def test_load_schema_malformed_url(fetcher):
    with pytest.raises(SchemaLoadError, match="Could not load schema") as exc_info:
        load_schema(fetcher, "http://example.com:abc/schemas/x")
    assert isinstance(exc_info.value.__cause__, httpx.InvalidURL)


def test_malformed_stylesheet_url_is_skipped(fetcher, caplog):
    styles = ResolvedStyleSet(
        main="http://cdn.example:abc/x.css",
        tokens=f"{SCHEMA_URL}/tokens.css",
    )
    with caplog.at_level(logging.ERROR, logger="pensieve"):
        sheets = load_stylesheets(fetcher, styles)
    assert [s.id for s in sheets] == ["pensieve-tokens"]
    assert "Failed to load CSS: http://cdn.example:abc/x.css" in caplog.text


@pytest.mark.parametrize("data", [
    {"frontmatterSchema": "recipe-v1", "styling": {"css": {"main": "./style.css"}}},
    {"frontmatterSchema": ["title"], "styling": {"css": {"main": "./style.css"}}},
])
def test_frontmatter_schema_is_not_checked(data):
    schema = Schema.model_validate(data)
    assert schema.frontmatter_schema == data["frontmatterSchema"]
    assert resolve_styles(schema, SCHEMA_URL).main == f"{SCHEMA_URL}/style.css"


@pytest.mark.parametrize("data", [{"styling": "dark"}, {"styling": {"css": ["main.css"]}}, {"styling": None}])
def test_non_object_styling_is_ignored(data):
    assert resolve_styles(Schema.model_validate(data), SCHEMA_URL) == ResolvedStyleSet()


@pytest.mark.parametrize("frontmatter,expected", [
    ({}, None),
    ({"pensive_schema": ""}, None),
    ({"pensive_schema": 0}, None),
    ({"pensive_schema": False}, None),
    ({"pensive_schema": SCHEMA_URL}, SCHEMA_URL),
])
def test_declared_schema(frontmatter, expected):
    assert declared_schema(frontmatter) == expected


@pytest.mark.parametrize("value", [5, 1.5, True, [], [SCHEMA_URL]])
def test_declared_schema_rejects_non_url(value):
    with pytest.raises(SchemaLoadError, match="pensive_schema must be a URL"):
        declared_schema({"pensive_schema": value})
