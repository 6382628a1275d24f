"""Tests for front matter parsing."""

from datetime import date

import pytest

from blog_site.core.frontmatter import FrontMatterError, parse_front_matter, split_front_matter


def test_parse_front_matter_round_trips_declared_fields():
    text = (
        "---\n"
        "title: Go Slices\n"
        "date: 2023-08-20\n"
        "tags: [go, data-structures]\n"
        "draft: false\n"
        "summary: About slices\n"
        "---\n"
        "\n"
        "Body text.\n"
    )

    meta, body = parse_front_matter(text)

    assert meta["title"] == "Go Slices"
    assert meta["date"] == date(2023, 8, 20)
    assert meta["tags"] == ["go", "data-structures"]
    assert meta["draft"] is False
    assert body == "Body text.\n"


def test_document_without_front_matter_is_all_body():
    meta, body = parse_front_matter("# Just a heading\n")

    assert meta == {}
    assert body == "# Just a heading\n"


def test_empty_front_matter_block():
    meta, body = parse_front_matter("---\n---\nBody")

    assert meta == {}
    assert body == "Body"


def test_crlf_and_bom_are_normalised():
    raw, body = split_front_matter("\ufeff---\r\ntitle: A\r\n---\r\nBody\r\n")

    assert raw == "title: A"
    assert body == "Body\n"


def test_unclosed_front_matter_raises():
    with pytest.raises(FrontMatterError, match="never closed"):
        parse_front_matter("---\ntitle: A\nBody\n")


def test_invalid_yaml_raises():
    with pytest.raises(FrontMatterError, match="Invalid YAML"):
        parse_front_matter("---\ntitle: [unclosed\n---\nBody\n")


def test_non_mapping_front_matter_raises():
    with pytest.raises(FrontMatterError, match="mapping"):
        parse_front_matter("---\n- a\n- b\n---\nBody\n")
