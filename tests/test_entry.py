"""Tests for entry loading and derived fields."""

from datetime import date
from pathlib import Path

import pytest

from blog_site.config import ContentConfig, SiteMetadata
from blog_site.core.entry import build_entry, extract_toc, load_entry, structured_data
from blog_site.core.frontmatter import FrontMatterError, parse_front_matter
from blog_site.core.reading_time import count_words, reading_time
from blog_site.core.slugger import Slugger, slug
from blog_site.core.types import TocHeading

REPO_CONTENT = Path(__file__).resolve().parent.parent / "data" / "blog"


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_load_entry_derives_slug_and_path(tmp_path: Path):
    content_dir = tmp_path / "blog"
    path = _write(
        content_dir / "go" / "slices.mdx",
        "---\ntitle: Go Slices\ndate: 2023-08-20\ntags: [go]\n---\nBody\n",
    )

    entry = load_entry(path, content_dir, ContentConfig())

    assert entry.slug == "go/slices"
    assert entry.path == "blog/go/slices"
    assert entry.source_path == path
    assert entry.layout == "PostLayout"
    assert entry.authors == ("default",)


def test_front_matter_round_trips_through_entry():
    meta = {
        "title": "Bitfield RBAC",
        "date": date(2023, 9, 2),
        "tags": ["go", "security", "go"],
        "draft": True,
        "summary": "Permissions as bits",
        "images": ["/static/images/rbac.png"],
        "canonicalUrl": "https://example.com/rbac",
        "series": "go-internals",
    }

    entry = build_entry(meta, "Body", "rbac", ContentConfig())

    assert entry.front_matter() == meta
    assert entry.extra == {"series": "go-internals"}


def test_front_matter_omits_defaults_and_keeps_empty_values():
    meta = {"title": "T", "date": date(2023, 1, 1), "images": []}

    entry = build_entry(meta, "Body", "t", ContentConfig())

    assert entry.front_matter() == meta
    assert entry.authors == ("default",)
    assert entry.layout == "PostLayout"
    assert entry.draft is False


def test_front_matter_returns_a_copy():
    entry = build_entry({"title": "T", "date": "2023-01-01", "tags": ["go"]}, "", "t", ContentConfig())

    entry.front_matter()["tags"].append("mutated")

    assert entry.front_matter()["tags"] == ["go"]


def test_repo_posts_round_trip_their_front_matter():
    paths = sorted(REPO_CONTENT.rglob("*.mdx"))
    assert paths

    for path in paths:
        declared, _ = parse_front_matter(path.read_text(encoding="utf-8"))
        entry = load_entry(path, REPO_CONTENT, ContentConfig())

        assert entry.front_matter() == declared, path.name


def test_single_string_tag_and_iso_date_string():
    entry = build_entry(
        {"title": "T", "date": "2023-10-11", "tags": "go", "lastmod": "2023-10-12T08:00:00Z"},
        "",
        "t",
        ContentConfig(),
    )

    assert entry.tags == ("go",)
    assert entry.date == date(2023, 10, 11)
    assert entry.lastmod == date(2023, 10, 12)


def test_missing_title_names_the_file(tmp_path: Path):
    path = _write(tmp_path / "blog" / "untitled.md", "---\ndate: 2023-01-01\n---\nBody\n")

    with pytest.raises(FrontMatterError, match="untitled.md: missing required field 'title'"):
        load_entry(path, tmp_path / "blog", ContentConfig())


def test_missing_date_raises():
    with pytest.raises(FrontMatterError, match="'date'"):
        build_entry({"title": "T"}, "", "t", ContentConfig())


def test_invalid_date_raises():
    with pytest.raises(FrontMatterError, match="invalid date"):
        build_entry({"title": "T", "date": "yesterday"}, "", "t", ContentConfig())


def test_draft_string_values():
    entry = build_entry({"title": "T", "date": "2023-01-01", "draft": "true"}, "", "t", ContentConfig())

    assert entry.draft is True


def test_extract_toc_skips_code_and_dedupes_anchors():
    body = (
        "## Intro\n"
        "text\n"
        "```python\n"
        "# not a heading\n"
        "```\n"
        "## Intro\n"
        "### Details `code`\n"
    )

    assert extract_toc(body) == [
        TocHeading(value="Intro", url="#intro", depth=2),
        TocHeading(value="Intro", url="#intro-1", depth=2),
        TocHeading(value="Details code", url="#details-code", depth=3),
    ]


def test_slug_follows_github_rules():
    assert slug("Hello World!") == "hello-world"
    assert slug("Go Slices: Under the Hood") == "go-slices-under-the-hood"
    assert slug("data-structures") == "data-structures"
    assert slug("snake_case") == "snake_case"


def test_slugger_suffixes_repeats():
    slugger = Slugger()

    assert [slugger.slug("A"), slugger.slug("A"), slugger.slug("A")] == ["a", "a-1", "a-2"]
    slugger.reset()
    assert slugger.slug("A") == "a"


def test_reading_time_for_plain_words():
    result = reading_time("word " * 400)

    assert result.words == 400
    assert result.minutes == 2.0
    assert result.time == 120000
    assert result.text == "2 min read"


def test_reading_time_rounds_up():
    result = reading_time("word " * 220)

    assert result.text == "2 min read"


def test_reading_time_of_empty_text():
    result = reading_time("")

    assert result.words == 0
    assert result.text == "0 min read"


def test_cjk_characters_count_as_words():
    assert count_words("\u4f60\u597d\u4e16\u754c") == 4
    assert count_words("\u4f60\u597d\uff0c\u4e16\u754c") == 4
    assert count_words("hello \u4e16\u754c") == 3


def test_reading_time_rejects_non_positive_speed():
    with pytest.raises(ValueError):
        reading_time("text", words_per_minute=0)


def test_structured_data_uses_site_url_and_banner():
    site = SiteMetadata(
        title="Blog",
        author="Jose",
        site_url="https://josestg.io/",
        social_banner="/static/images/twitter-card.png",
    )
    entry = build_entry(
        {"title": "Post", "date": "2023-08-20", "summary": "S"}, "", "post", ContentConfig()
    )

    data = structured_data(entry, site)

    assert data["@type"] == "BlogPosting"
    assert data["headline"] == "Post"
    assert data["datePublished"] == "2023-08-20"
    assert data["dateModified"] == "2023-08-20"
    assert data["image"] == "https://josestg.io/static/images/twitter-card.png"
    assert data["url"] == "https://josestg.io/blog/post"
    assert data["author"]["name"] == "Jose"
