"""
Loading and ordering of the post collection.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any, Sequence, TypeVar

from ..config import ContentConfig
from .entry import load_entry
from .types import ContentEntry


T = TypeVar("T")


def load_collection(cfg: ContentConfig) -> list[ContentEntry]:
    """Load every post under the content directory.

    Files are read in path order so builds are deterministic. A missing
    content directory yields an empty collection.
    """
    content_dir = Path(cfg.content_dir)
    if not content_dir.is_dir():
        return []

    suffixes = {ext.lower() for ext in cfg.extensions}
    paths = sorted(
        path
        for path in content_dir.rglob("*")
        if path.is_file() and path.suffix.lower() in suffixes
    )
    return [load_entry(path, content_dir, cfg) for path in paths]


def sort_posts(entries: Sequence[ContentEntry]) -> list[ContentEntry]:
    """Sort posts newest first; posts on the same day sort by title."""
    by_title = sorted(entries, key=lambda entry: entry.title.lower())
    return sorted(by_title, key=lambda entry: entry.date, reverse=True)


def is_published(entry: ContentEntry, include_drafts: bool = False) -> bool:
    return include_drafts or not entry.draft


def published(entries: Sequence[ContentEntry], include_drafts: bool = False) -> list[ContentEntry]:
    return [entry for entry in entries if is_published(entry, include_drafts)]


def core_content(entry: ContentEntry) -> dict[str, Any]:
    """Project an entry to JSON-friendly data without its body.

    Fields come from the typed attributes, so defaults (``draft``,
    ``authors``, ``layout``) are present even when the post omits them.
    """
    data: dict[str, Any] = {
        "title": entry.title,
        "date": entry.date.isoformat(),
        "tags": list(entry.tags),
        "draft": entry.draft,
        "summary": entry.summary,
        "images": list(entry.images),
        "authors": list(entry.authors),
        "layout": entry.layout,
    }
    if entry.lastmod is not None:
        data["lastmod"] = entry.lastmod.isoformat()
    if entry.canonical_url is not None:
        data["canonicalUrl"] = entry.canonical_url
    data.update(entry.extra)
    data["slug"] = entry.slug
    data["path"] = entry.path
    if entry.reading_time is not None:
        data["readingTime"] = {
            "text": entry.reading_time.text,
            "minutes": entry.reading_time.minutes,
            "time": entry.reading_time.time,
            "words": entry.reading_time.words,
        }
    data["toc"] = [
        {"value": heading.value, "url": heading.url, "depth": heading.depth}
        for heading in entry.toc
    ]
    return data


def all_core_content(
    entries: Sequence[ContentEntry], include_drafts: bool = False
) -> list[dict[str, Any]]:
    return [core_content(entry) for entry in published(entries, include_drafts)]


def adjacent(
    entries: Sequence[ContentEntry], entry: ContentEntry
) -> tuple[ContentEntry | None, ContentEntry | None]:
    """Return (previous, next) around ``entry`` in a newest-first list.

    ``previous`` is the older post and ``next`` the newer one.
    """
    slugs = [item.slug for item in entries]
    index = slugs.index(entry.slug)
    prev_entry = entries[index + 1] if index + 1 < len(entries) else None
    next_entry = entries[index - 1] if index > 0 else None
    return prev_entry, next_entry


def paginate(items: Sequence[T], per_page: int) -> list[list[T]]:
    """Split items into pages. There is always at least one (possibly empty) page."""
    if per_page <= 0:
        raise ValueError("per_page must be positive")
    total_pages = max(1, math.ceil(len(items) / per_page))
    return [list(items[i * per_page : (i + 1) * per_page]) for i in range(total_pages)]
