"""Tests for site metadata and build configuration loading."""

from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from blog_site.config import (
    SITE_METADATA_KEYS,
    AppConfig,
    GiscusConfig,
    SiteMetadata,
    load_config,
    load_site_metadata,
)

REPO_METADATA = Path(__file__).resolve().parent.parent / "data" / "site_metadata.yaml"


def test_site_metadata_exposes_exactly_documented_keys():
    site = load_site_metadata(str(REPO_METADATA), env={})
    data = site.to_dict()

    assert set(data) == SITE_METADATA_KEYS
    assert set(data["analytics"]) == {"googleAnalytics"}
    assert set(data["analytics"]["googleAnalytics"]) == {"googleAnalyticsId"}
    assert set(data["comments"]) == {"provider", "giscusConfig"}
    assert set(data["comments"]["giscusConfig"]) == {
        "repo",
        "repositoryId",
        "category",
        "categoryId",
        "mapping",
        "reactions",
        "metadata",
        "theme",
        "darkTheme",
        "themeURL",
        "lang",
    }
    assert set(data["search"]) == {"provider", "kbarConfig"}
    assert set(data["search"]["kbarConfig"]) == {"searchDocumentsPath"}
    assert set(data["newsletter"]) == {"provider"}


def test_repo_metadata_values():
    site = load_site_metadata(str(REPO_METADATA), env={})

    assert site.title == "josestg.io"
    assert site.site_url == "https://josestg.io"
    assert site.social_banner == "/static/images/twitter-card.png"
    assert (REPO_METADATA.parent.parent / site.social_banner.lstrip("/")).is_file()
    assert site.analytics.google_analytics.google_analytics_id == "G-7LG3NNV50C"
    assert site.comments.provider == "giscus"
    assert site.search.provider == "kbar"
    assert site.search.kbar_config.search_documents_path == "search.json"
    assert site.newsletter.provider == "mailchimp"


def test_loading_twice_yields_equal_values():
    env = {"GISCUS_REPO": "josestg/josestg.io"}
    first = load_site_metadata(str(REPO_METADATA), env=env)
    second = load_site_metadata(str(REPO_METADATA), env=env)

    assert first == second
    assert first.to_dict() == second.to_dict()


def test_unset_comment_repository_leaves_field_empty():
    site = load_site_metadata(str(REPO_METADATA), env={})

    assert site.comments.giscus_config.repo is None
    assert site.comments.giscus_config.repository_id is None
    assert site.comments_enabled is False


def test_environment_values_are_substituted():
    env = {
        "GISCUS_REPO": "josestg/josestg.io",
        "GISCUS_REPOSITORY_ID": "R_kgDOexample",
        "GISCUS_CATEGORY": "Announcements",
        "GISCUS_CATEGORY_ID": "DIC_kwDOexample",
    }
    site = load_site_metadata(str(REPO_METADATA), env=env)
    giscus = site.comments.giscus_config

    assert giscus.repo == "josestg/josestg.io"
    assert giscus.repository_id == "R_kgDOexample"
    assert giscus.category == "Announcements"
    assert giscus.category_id == "DIC_kwDOexample"
    assert site.comments_enabled is True


def test_giscus_defaults_read_environment_without_a_file():
    site = load_site_metadata(None, env={"GISCUS_REPO": "owner/repo"})

    assert site.comments.giscus_config.repo == "owner/repo"
    assert site.title == ""


def test_embedded_reference_to_missing_variable_becomes_empty(tmp_path: Path):
    path = tmp_path / "site.yaml"
    path.write_text("siteRepo: https://github.com/${OWNER}/blog\n", encoding="utf-8")

    site = load_site_metadata(str(path), env={})

    assert site.site_repo == "https://github.com//blog"


def test_unknown_keys_are_ignored_and_sections_merge(tmp_path: Path):
    path = tmp_path / "site.yaml"
    path.write_text(
        "title: Example\n"
        "unknownKey: value\n"
        "comments:\n"
        "  provider: giscus\n"
        "  giscusConfig:\n"
        "    theme: dark\n",
        encoding="utf-8",
    )

    site = load_site_metadata(str(path), env={})

    assert site.title == "Example"
    assert "unknownKey" not in site.to_dict()
    assert site.comments.giscus_config.theme == "dark"
    assert site.comments.giscus_config.mapping == "pathname"


def test_null_section_keeps_defaults(tmp_path: Path):
    path = tmp_path / "site.yaml"
    path.write_text("comments:\nsearch: null\ntwitter: null\n", encoding="utf-8")

    site = load_site_metadata(str(path), env={})

    assert site.comments.provider is None
    assert site.search.kbar_config.search_documents_path == "search.json"
    assert site.twitter is None


def test_site_metadata_is_immutable():
    site = load_site_metadata(None, env={})

    with pytest.raises(FrozenInstanceError):
        site.title = "changed"  # type: ignore[misc]


def test_non_mapping_metadata_is_rejected(tmp_path: Path):
    path = tmp_path / "site.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ValueError, match="mapping"):
        load_site_metadata(str(path), env={})


@pytest.mark.parametrize("document", ["[]\n", "false\n", "0\n"])
def test_falsy_non_mapping_metadata_is_rejected(tmp_path: Path, document: str):
    path = tmp_path / "site.yaml"
    path.write_text(document, encoding="utf-8")

    with pytest.raises(ValueError, match="mapping"):
        load_site_metadata(str(path), env={})


def test_empty_metadata_file_uses_defaults(tmp_path: Path):
    path = tmp_path / "site.yaml"
    path.write_text("", encoding="utf-8")

    assert load_site_metadata(str(path), env={}) == load_site_metadata(None, env={})


def test_giscus_theme_follows_site_theme():
    giscus = GiscusConfig(theme="light", dark_theme="transparent_dark")

    assert giscus.theme_for("light") == "light"
    assert giscus.theme_for("dark") == "transparent_dark"
    assert giscus.theme_for("system") == "preferred_color_scheme"
    assert GiscusConfig(theme_url="https://example.com/t.css").theme_for("dark") == "https://example.com/t.css"


def test_base_url_and_social_links():
    site = SiteMetadata(site_url="https://example.com/", email="me@example.com", github="https://github.com/me")

    assert site.base_url == "https://example.com"
    assert site.social_links == [
        ("mail", "mailto:me@example.com"),
        ("github", "https://github.com/me"),
    ]


def test_load_config_defaults_without_path():
    cfg = load_config(None)

    assert cfg == AppConfig()
    assert cfg.output.posts_per_page == 5
    assert cfg.content.words_per_minute == 200


def test_load_config_merges_sections(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "output:\n"
        "  posts_per_page: 10\n"
        "content:\n"
        "  include_drafts: true\n"
        "other: ignored\n",
        encoding="utf-8",
    )

    cfg = load_config(str(path))

    assert cfg.output.posts_per_page == 10
    assert cfg.output.home_posts == 5
    assert cfg.content.include_drafts is True
    assert cfg.content.content_dir == "data/blog"
