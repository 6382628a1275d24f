"""
Configuration management using YAML files and dataclasses.

Two kinds of configuration live here:

- SiteMetadata: the site-wide record (title, author, URLs, social profiles,
  analytics, comments/search/newsletter providers). Frozen once loaded and
  passed explicitly to every stage that renders pages.
- AppConfig: build settings (content location, Markdown options, output
  options, logging). Mutable so CLI options can override it.

Configuration sections:
- ContentConfig: where content lives and how entries are read
- MarkdownConfig: Markdown extensions and highlighting
- OutputConfig: which files are generated
- LoggingConfig: Logging behavior
- AppConfig: Root build configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
import re
from typing import Any, Mapping

import yaml


_ENV_REF_RE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


@dataclass(frozen=True)
class GoogleAnalyticsConfig:
    google_analytics_id: str | None = None


@dataclass(frozen=True)
class AnalyticsConfig:
    google_analytics: GoogleAnalyticsConfig = field(default_factory=GoogleAnalyticsConfig)


@dataclass(frozen=True)
class GiscusConfig:
    """Settings passed through to the giscus comments widget.

    Attributes:
        repo: GitHub repository in "owner/name" form
        repository_id: giscus repository id
        category: Discussion category name
        category_id: giscus discussion category id
        mapping: How pages map to discussions ("pathname", "url", "title", ...)
        reactions: "1" to show reactions, "0" to hide them
        metadata: "1" to emit discussion metadata, "0" otherwise
        theme: Theme used in light mode
        dark_theme: Theme used in dark mode
        theme_url: Custom theme URL, empty for none
        lang: Widget language
    """

    repo: str | None = None
    repository_id: str | None = None
    category: str | None = None
    category_id: str | None = None
    mapping: str = "pathname"
    reactions: str = "1"
    metadata: str = "0"
    theme: str = "light"
    dark_theme: str = "transparent_dark"
    theme_url: str = ""
    lang: str = "en"

    def theme_for(self, site_theme: str) -> str:
        """Widget theme for the site's color mode.

        A custom theme URL wins. A "system" site follows the reader's color
        scheme through giscus' own ``preferred_color_scheme`` theme.
        """
        if self.theme_url:
            return self.theme_url
        if site_theme == "dark":
            return self.dark_theme
        if site_theme == "system":
            return "preferred_color_scheme"
        return self.theme


@dataclass(frozen=True)
class CommentsConfig:
    provider: str | None = None
    giscus_config: GiscusConfig = field(default_factory=GiscusConfig)


@dataclass(frozen=True)
class KbarConfig:
    search_documents_path: str = "search.json"


@dataclass(frozen=True)
class SearchConfig:
    provider: str | None = None
    kbar_config: KbarConfig = field(default_factory=KbarConfig)


@dataclass(frozen=True)
class NewsletterConfig:
    provider: str | None = None


@dataclass(frozen=True)
class SiteMetadata:
    """Site-wide metadata consumed by every rendered page.

    The declaration file and ``to_dict()`` use the camelCase key names
    (``siteUrl``, ``socialBanner``, ...); attributes are snake_case.
    """

    title: str = ""
    author: str = ""
    header_title: str = ""
    description: str = ""
    language: str = "en-us"
    theme: str = "system"
    site_url: str = ""
    site_repo: str | None = None
    site_logo: str | None = None
    social_banner: str | None = None
    email: str | None = None
    github: str | None = None
    twitter: str | None = None
    youtube: str | None = None
    linkedin: str | None = None
    threads: str | None = None
    locale: str = "en-US"
    analytics: AnalyticsConfig = field(default_factory=AnalyticsConfig)
    comments: CommentsConfig = field(default_factory=CommentsConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    newsletter: NewsletterConfig = field(default_factory=NewsletterConfig)

    @property
    def base_url(self) -> str:
        return (self.site_url or "").rstrip("/")

    @property
    def comments_enabled(self) -> bool:
        giscus = self.comments.giscus_config
        return self.comments.provider == "giscus" and bool(giscus.repo and giscus.repository_id)

    @property
    def social_links(self) -> list[tuple[str, str]]:
        """Configured social profiles as (name, url) pairs, in display order."""
        links = [
            ("mail", f"mailto:{self.email}" if self.email else None),
            ("github", self.github),
            ("twitter", self.twitter),
            ("youtube", self.youtube),
            ("linkedin", self.linkedin),
            ("threads", self.threads),
        ]
        return [(name, url) for name, url in links if url]

    def to_dict(self) -> dict[str, Any]:
        return _site_asdict(self)


SITE_METADATA_KEYS = frozenset(
    {
        "title",
        "author",
        "headerTitle",
        "description",
        "language",
        "theme",
        "siteUrl",
        "siteRepo",
        "siteLogo",
        "socialBanner",
        "email",
        "github",
        "twitter",
        "youtube",
        "linkedin",
        "threads",
        "locale",
        "analytics",
        "comments",
        "search",
        "newsletter",
    }
)

# giscus identifiers are read from the environment unless the file sets them.
DEFAULT_SITE_METADATA: dict[str, Any] = {
    "comments": {
        "provider": None,
        "giscusConfig": {
            "repo": "${GISCUS_REPO}",
            "repositoryId": "${GISCUS_REPOSITORY_ID}",
            "category": "${GISCUS_CATEGORY}",
            "categoryId": "${GISCUS_CATEGORY_ID}",
        },
    },
}


def load_site_metadata(path: str | None, env: Mapping[str, str] | None = None) -> SiteMetadata:
    """Load the site metadata record from a YAML file with defaults.

    ``${NAME}`` references in string values are substituted from ``env``
    (``os.environ`` when omitted). A missing variable leaves the field empty.
    """
    if env is None:
        env = os.environ

    raw: Any = {}
    if path:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"Site metadata must be a mapping, got {type(raw).__name__}")

    data = _site_asdict(SiteMetadata())
    _merge_into(data, DEFAULT_SITE_METADATA)
    _merge_into(data, raw)
    return _site_fromdict(_interpolate(data, env))


def _merge_into(data: dict[str, Any], raw: Mapping[str, Any]) -> None:
    """Merge ``raw`` into ``data`` in place, recursing into nested sections."""
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(data[key], dict):
            if isinstance(value, dict):
                _merge_into(data[key], value)
            continue
        data[key] = value


def _interpolate(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, dict):
        return {key: _interpolate(item, env) for key, item in value.items()}
    if not isinstance(value, str):
        return value
    whole = _ENV_REF_RE.fullmatch(value)
    if whole:
        return env.get(whole.group(1)) or None
    return _ENV_REF_RE.sub(lambda match: env.get(match.group(1), ""), value)


def _site_asdict(site: SiteMetadata) -> dict[str, Any]:
    """Convert SiteMetadata to its camelCase nested dictionary."""
    giscus = site.comments.giscus_config
    return {
        "title": site.title,
        "author": site.author,
        "headerTitle": site.header_title,
        "description": site.description,
        "language": site.language,
        "theme": site.theme,
        "siteUrl": site.site_url,
        "siteRepo": site.site_repo,
        "siteLogo": site.site_logo,
        "socialBanner": site.social_banner,
        "email": site.email,
        "github": site.github,
        "twitter": site.twitter,
        "youtube": site.youtube,
        "linkedin": site.linkedin,
        "threads": site.threads,
        "locale": site.locale,
        "analytics": {
            "googleAnalytics": {
                "googleAnalyticsId": site.analytics.google_analytics.google_analytics_id,
            },
        },
        "comments": {
            "provider": site.comments.provider,
            "giscusConfig": {
                "repo": giscus.repo,
                "repositoryId": giscus.repository_id,
                "category": giscus.category,
                "categoryId": giscus.category_id,
                "mapping": giscus.mapping,
                "reactions": giscus.reactions,
                "metadata": giscus.metadata,
                "theme": giscus.theme,
                "darkTheme": giscus.dark_theme,
                "themeURL": giscus.theme_url,
                "lang": giscus.lang,
            },
        },
        "search": {
            "provider": site.search.provider,
            "kbarConfig": {
                "searchDocumentsPath": site.search.kbar_config.search_documents_path,
            },
        },
        "newsletter": {
            "provider": site.newsletter.provider,
        },
    }


def _site_fromdict(data: dict[str, Any]) -> SiteMetadata:
    """Reconstruct SiteMetadata from its camelCase nested dictionary."""
    analytics = data["analytics"]
    comments = data["comments"]
    giscus = comments["giscusConfig"]
    search = data["search"]
    return SiteMetadata(
        title=data["title"],
        author=data["author"],
        header_title=data["headerTitle"],
        description=data["description"],
        language=data["language"],
        theme=data["theme"],
        site_url=data["siteUrl"],
        site_repo=data["siteRepo"],
        site_logo=data["siteLogo"],
        social_banner=data["socialBanner"],
        email=data["email"],
        github=data["github"],
        twitter=data["twitter"],
        youtube=data["youtube"],
        linkedin=data["linkedin"],
        threads=data["threads"],
        locale=data["locale"],
        analytics=AnalyticsConfig(
            google_analytics=GoogleAnalyticsConfig(
                google_analytics_id=analytics["googleAnalytics"]["googleAnalyticsId"],
            ),
        ),
        comments=CommentsConfig(
            provider=comments["provider"],
            giscus_config=GiscusConfig(
                repo=giscus["repo"],
                repository_id=giscus["repositoryId"],
                category=giscus["category"],
                category_id=giscus["categoryId"],
                mapping=giscus["mapping"],
                reactions=giscus["reactions"],
                metadata=giscus["metadata"],
                theme=giscus["theme"],
                dark_theme=giscus["darkTheme"],
                theme_url=giscus["themeURL"],
                lang=giscus["lang"],
            ),
        ),
        search=SearchConfig(
            provider=search["provider"],
            kbar_config=KbarConfig(
                search_documents_path=search["kbarConfig"]["searchDocumentsPath"],
            ),
        ),
        newsletter=NewsletterConfig(provider=data["newsletter"]["provider"]),
    )


@dataclass
class ContentConfig:
    """Configuration for reading authored content.

    Attributes:
        content_dir: Directory holding the posts (searched recursively)
        metadata_path: YAML file declaring the site metadata
        static_dir: Directory copied verbatim into the output
        extensions: File suffixes treated as posts
        include_drafts: Whether draft posts are published (preview builds)
        default_layout: Layout used when a post does not name one
        default_authors: Authors used when a post does not name any
        words_per_minute: Reading speed for reading-time estimates
    """

    content_dir: str = "data/blog"
    metadata_path: str = "data/site_metadata.yaml"
    static_dir: str = "static"
    extensions: list[str] = field(default_factory=lambda: [".md", ".mdx"])
    include_drafts: bool = False
    default_layout: str = "PostLayout"
    default_authors: list[str] = field(default_factory=lambda: ["default"])
    words_per_minute: int = 200


@dataclass
class MarkdownConfig:
    """Configuration for the Markdown to HTML transform.

    Attributes:
        extensions: Python-Markdown extension names
        highlight_css_class: CSS class wrapping highlighted code blocks
        math: Whether $...$ and $$...$$ are passed through for KaTeX
        toc_depth: Heading levels that receive anchors
    """

    extensions: list[str] = field(
        default_factory=lambda: [
            "fenced_code",
            "tables",
            "footnotes",
            "codehilite",
            "toc",
            "sane_lists",
        ]
    )
    highlight_css_class: str = "highlight"
    math: bool = True
    toc_depth: str = "2-6"


@dataclass
class OutputConfig:
    """Configuration for generated files.

    Attributes:
        output_dir: Directory the static site is written to
        posts_per_page: Posts per page on the paginated blog listing
        home_posts: Number of latest posts on the home page
        rss: Whether to write the site RSS feed
        rss_path: File name of RSS feeds (site root and per tag)
        tag_feeds: Whether to write one RSS feed per tag
        sitemap: Whether to write sitemap.xml
        robots: Whether to write robots.txt
        tag_data_path: File name of the tag count JSON
    """

    output_dir: str = "public"
    posts_per_page: int = 5
    home_posts: int = 5
    rss: bool = True
    rss_path: str = "feed.xml"
    tag_feeds: bool = True
    sitemap: bool = True
    robots: bool = True
    tag_data_path: str = "tag-data.json"


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the build log file
        directory: Directory the build log file is written to
    """

    level: str = "INFO"
    console: bool = True
    file: bool = True
    format: str = "jsonl"
    filename: str = "build.jsonl"
    directory: str = "logs"


@dataclass
class AppConfig:
    """Root build configuration container aggregating all config sections."""

    content: ContentConfig = field(default_factory=ContentConfig)
    markdown: MarkdownConfig = field(default_factory=MarkdownConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load build configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "content": {
            "content_dir": cfg.content.content_dir,
            "metadata_path": cfg.content.metadata_path,
            "static_dir": cfg.content.static_dir,
            "extensions": list(cfg.content.extensions),
            "include_drafts": cfg.content.include_drafts,
            "default_layout": cfg.content.default_layout,
            "default_authors": list(cfg.content.default_authors),
            "words_per_minute": cfg.content.words_per_minute,
        },
        "markdown": {
            "extensions": list(cfg.markdown.extensions),
            "highlight_css_class": cfg.markdown.highlight_css_class,
            "math": cfg.markdown.math,
            "toc_depth": cfg.markdown.toc_depth,
        },
        "output": {
            "output_dir": cfg.output.output_dir,
            "posts_per_page": cfg.output.posts_per_page,
            "home_posts": cfg.output.home_posts,
            "rss": cfg.output.rss,
            "rss_path": cfg.output.rss_path,
            "tag_feeds": cfg.output.tag_feeds,
            "sitemap": cfg.output.sitemap,
            "robots": cfg.output.robots,
            "tag_data_path": cfg.output.tag_data_path,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
            "directory": cfg.logging.directory,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        content=ContentConfig(**data["content"]),
        markdown=MarkdownConfig(**data["markdown"]),
        output=OutputConfig(**data["output"]),
        logging=LoggingConfig(**data["logging"]),
    )
