"""Loading of individual posts into ContentEntry objects.

A post is a Markdown/MDX document with YAML front matter. Besides the
declared fields, each entry gets derived fields: its slug and site path,
a reading-time estimate and a table of contents.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from pathlib import Path
from typing import Any

from ..config import ContentConfig, SiteMetadata
from .frontmatter import FrontMatterError, parse_front_matter
from .reading_time import reading_time
from .slugger import Slugger
from .types import ContentEntry, TocHeading


BLOG_PREFIX = "blog"

HEADING_RE = re.compile(r"^(#{1,6})[ \t]+(.+?)[ \t]*#*[ \t]*$")
FENCE_RE = re.compile(r"^[ \t]{0,3}(`{3,}|~{3,})")
_INLINE_MARKUP_RE = re.compile(r"(`|\*\*|__|\*|_|~~)")
_LINK_RE = re.compile(r"!?\[([^\]]*)\]\([^)]*\)")

KNOWN_KEYS = {
    "title",
    "date",
    "tags",
    "lastmod",
    "draft",
    "summary",
    "images",
    "authors",
    "layout",
    "canonicalUrl",
}


def load_entry(path: Path, content_dir: Path, cfg: ContentConfig) -> ContentEntry:
    """Read one document and build its ContentEntry.

    Args:
        path: Document to read
        content_dir: Root of the content tree, used to derive the slug
        cfg: Content configuration (defaults, reading speed)

    Raises:
        FrontMatterError: If the front matter is malformed or lacks
            a title or date
    """
    text = path.read_text(encoding="utf-8")
    try:
        meta, body = parse_front_matter(text)
        return build_entry(meta, body, slug_for(path, content_dir), cfg, source_path=path)
    except FrontMatterError as exc:
        raise FrontMatterError(f"{path}: {exc}") from exc


def build_entry(
    meta: dict[str, Any],
    body: str,
    slug: str,
    cfg: ContentConfig,
    source_path: Path | None = None,
) -> ContentEntry:
    """Build a ContentEntry from parsed front matter and body."""
    title = meta.get("title")
    if title is None or str(title).strip() == "":
        raise FrontMatterError("missing required field 'title'")
    if meta.get("date") is None:
        raise FrontMatterError("missing required field 'date'")

    authors = _as_tuple(meta.get("authors")) or tuple(cfg.default_authors)
    return ContentEntry(
        title=str(title),
        date=_as_date(meta["date"], "date"),
        slug=slug,
        path=f"{BLOG_PREFIX}/{slug}",
        body=body,
        tags=_as_tuple(meta.get("tags")),
        lastmod=_as_date(meta["lastmod"], "lastmod") if meta.get("lastmod") else None,
        draft=_as_bool(meta.get("draft", False)),
        summary=meta.get("summary"),
        images=_as_tuple(meta.get("images")),
        authors=authors,
        layout=meta.get("layout") or cfg.default_layout,
        canonical_url=meta.get("canonicalUrl"),
        source_path=source_path,
        reading_time=reading_time(body, cfg.words_per_minute),
        toc=extract_toc(body),
        extra={key: value for key, value in meta.items() if key not in KNOWN_KEYS},
        declared=dict(meta),
    )


def slug_for(path: Path, content_dir: Path) -> str:
    """Return the slug of a document: its relative path without extension."""
    relative = path.relative_to(content_dir).with_suffix("")
    return relative.as_posix()


def extract_toc(body: str) -> list[TocHeading]:
    """Collect ATX headings outside fenced code blocks.

    Anchors are generated with one Slugger per document, so they match
    the ids the Markdown renderer assigns.
    """
    slugger = Slugger()
    toc: list[TocHeading] = []
    fence: str | None = None
    for line in body.splitlines():
        fence_match = FENCE_RE.match(line)
        if fence_match:
            marker = fence_match.group(1)
            if fence is None:
                fence = marker[0] * 3
            elif marker.startswith(fence):
                fence = None
            continue
        if fence is not None:
            continue
        heading = HEADING_RE.match(line)
        if not heading:
            continue
        value = heading_text(heading.group(2))
        toc.append(
            TocHeading(value=value, url=f"#{slugger.slug(value)}", depth=len(heading.group(1)))
        )
    return toc


def heading_text(raw: str) -> str:
    """Strip inline Markdown from a heading so it reads as plain text."""
    text = _LINK_RE.sub(r"\1", raw)
    return _INLINE_MARKUP_RE.sub("", text).strip()


def structured_data(entry: ContentEntry, site: SiteMetadata) -> dict[str, Any]:
    """schema.org BlogPosting data for a post page."""
    image = entry.images[0] if entry.images else site.social_banner
    if image and image.startswith("/"):
        image = f"{site.base_url}{image}"
    return {
        "@context": "https://schema.org",
        "@type": "BlogPosting",
        "headline": entry.title,
        "datePublished": entry.date.isoformat(),
        "dateModified": (entry.lastmod or entry.date).isoformat(),
        "description": entry.summary or "",
        "image": image,
        "url": f"{site.base_url}/{entry.path}",
        "author": {"@type": "Person", "name": site.author},
    }


def _as_tuple(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)):
        return tuple(str(item) for item in value)
    raise FrontMatterError(f"expected a list or string, got {type(value).__name__}")


def _as_date(value: Any, key: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip().strip("'\"")
        try:
            return date.fromisoformat(text[:10])
        except ValueError as exc:
            raise FrontMatterError(f"invalid {key} {value!r}") from exc
    raise FrontMatterError(f"invalid {key} {value!r}")


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"true", "yes", "1", "on"}
    return bool(value)
