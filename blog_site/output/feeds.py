"""
RSS feeds, sitemap and robots.txt.

All three are derived from the published posts and the site metadata;
the XML documents are rendered from Jinja2 templates with autoescaping.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from email.utils import format_datetime
from pathlib import Path
from typing import Any, Sequence

from ..config import SiteMetadata
from ..core.collection import published, sort_posts
from ..core.tags import entries_by_tag
from ..core.types import ContentEntry
from .renderer import build_environment


STATIC_ROUTES = ("", "blog", "tags")


def rfc822(value: date) -> str:
    """Format a date as an RFC 822 timestamp (midnight UTC)."""
    return format_datetime(datetime.combine(value, time.min, tzinfo=timezone.utc))


def write_rss(
    entries: Sequence[ContentEntry],
    site: SiteMetadata,
    output_dir: Path,
    path: str = "feed.xml",
    title: str | None = None,
    include_drafts: bool = False,
) -> Path:
    """Write an RSS 2.0 feed of the given posts to ``output_dir / path``."""
    posts = sort_posts(published(entries, include_drafts))
    items = [
        {
            "url": f"{site.base_url}/{post.path}",
            "title": post.title,
            "summary": post.summary,
            "pub_date": rfc822(post.date),
            "tags": post.tags,
        }
        for post in posts
    ]
    target = output_dir / path
    xml = build_environment().get_template("rss.xml").render(
        site=site,
        title=title or site.title,
        feed_url=f"{site.base_url}/{path}",
        last_build=rfc822(posts[0].date) if posts else None,
        items=items,
    )
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(xml, encoding="utf-8")
    return target


def write_tag_feeds(
    entries: Sequence[ContentEntry],
    site: SiteMetadata,
    output_dir: Path,
    filename: str = "feed.xml",
    include_drafts: bool = False,
) -> list[Path]:
    """Write one feed per tag at ``tags/<tag>/<filename>``."""
    written = []
    for tag, tag_posts in entries_by_tag(entries, include_drafts).items():
        written.append(
            write_rss(
                tag_posts,
                site,
                output_dir,
                path=f"tags/{tag}/{filename}",
                title=f"{site.title} - {tag}",
                include_drafts=include_drafts,
            )
        )
    return written


def sitemap_urls(
    entries: Sequence[ContentEntry], site: SiteMetadata, include_drafts: bool = False
) -> list[dict[str, Any]]:
    today = datetime.now(timezone.utc).date().isoformat()
    urls = [
        {"loc": f"{site.base_url}/{route}" if route else site.base_url or "/", "lastmod": today}
        for route in STATIC_ROUTES
    ]
    for post in sort_posts(published(entries, include_drafts)):
        urls.append(
            {
                "loc": f"{site.base_url}/{post.path}",
                "lastmod": (post.lastmod or post.date).isoformat(),
            }
        )
    return urls


def write_sitemap(
    entries: Sequence[ContentEntry],
    site: SiteMetadata,
    output_dir: Path,
    include_drafts: bool = False,
) -> Path:
    target = output_dir / "sitemap.xml"
    xml = build_environment().get_template("sitemap.xml").render(
        urls=sitemap_urls(entries, site, include_drafts),
    )
    output_dir.mkdir(parents=True, exist_ok=True)
    target.write_text(xml, encoding="utf-8")
    return target


def write_robots(site: SiteMetadata, output_dir: Path) -> Path:
    lines = [
        "User-agent: *",
        "Allow: /",
        "",
        f"Sitemap: {site.base_url}/sitemap.xml",
        f"Host: {site.base_url}",
        "",
    ]
    target = output_dir / "robots.txt"
    output_dir.mkdir(parents=True, exist_ok=True)
    target.write_text("\n".join(lines), encoding="utf-8")
    return target
