"""Unit tests for core/inline.py"""

import pytest

from pensieve.core.inline import process_inline


LIVE_DOCS = '<a href="https://x.io" target="_blank" rel="noopener noreferrer">docs</a>'


def test_plain_text_is_escaped():
    assert process_inline("a < b & c > d") == "a &lt; b &amp; c &gt; d"


def test_source_mode_escapes_inserted_anchor():
    """Default order substitutes first and escapes after, so the anchor is literal text."""
    out = process_inline("See [docs](https://x.io)")
    assert out == (
        "See &lt;a href=&quot;https://x.io&quot; target=&quot;_blank&quot; "
        "rel=&quot;noopener noreferrer&quot;&gt;docs&lt;/a&gt;"
    )
    assert "<a" not in out


def test_live_mode_keeps_anchor():
    assert process_inline("See [docs](https://x.io) & more", mode="live") == f"See {LIVE_DOCS} &amp; more"


def test_live_mode_replaces_every_link_in_order():
    out = process_inline("[one](u1) and [two](u2)", mode="live")
    assert out.index('href="u1"') < out.index('href="u2"')
    assert out.count("<a ") == 2
    assert ">one</a> and <a" in out


def test_live_mode_escapes_link_parts():
    out = process_inline('[<b>](http://x?a=1&b="2")', mode="live")
    assert out == (
        '<a href="http://x?a=1&amp;b=&quot;2&quot;" target="_blank" '
        'rel="noopener noreferrer">&lt;b&gt;</a>'
    )


@pytest.mark.parametrize("text", ["[](u)", "[label]()", "[label] (u)", "plain"])
def test_non_links_left_as_text(text):
    assert process_inline(text, mode="live") == text
    assert process_inline(text) == text


def test_unknown_mode_rejected():
    with pytest.raises(ValueError, match="Unknown inline mode"):
        process_inline("x", mode="raw")
