"""
Core data types for the content pipeline.

This module defines the structures produced when reading authored posts:
- ReadingTime: Estimated reading time of a post body
- TocHeading: One heading of a post's table of contents
- ContentEntry: A parsed post with its derived fields
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import date as date_type
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class ReadingTime:
    """Reading-time estimate for a block of text.

    Attributes:
        text: Human readable estimate, e.g. "3 min read"
        minutes: Exact minutes (words / words per minute)
        time: Milliseconds, rounded
        words: Number of counted words
    """
    text: str
    minutes: float
    time: int
    words: int


@dataclass(frozen=True)
class TocHeading:
    """A heading in a post's table of contents.

    Attributes:
        value: Heading text as written
        url: Fragment link to the heading anchor, e.g. "#introduction"
        depth: Heading level (1-6)
    """
    value: str
    url: str
    depth: int


@dataclass
class ContentEntry:
    """A single blog post parsed from a front-matter document.

    The entry's identity is its slug: the path of the source file relative
    to the content directory, without extension.

    Attributes:
        title: Post title (required front matter)
        date: Publication date (required front matter)
        tags: Tags in declared order
        lastmod: Optional last-modified date
        draft: Whether the post is a draft
        summary: Optional summary shown in listings and feeds
        images: Image paths or URLs, the first one is used for cards
        authors: Author identifiers
        layout: Layout name used to render the post
        canonical_url: Optional canonical URL overriding the site URL
        body: Markdown body after the front matter
        source_path: File the entry was read from
        slug: Identity of the post, e.g. "guides/my-post"
        path: Site path of the post, e.g. "blog/guides/my-post"
        reading_time: Reading-time estimate of the body
        toc: Headings of the body
        extra: Front-matter keys that are not modelled above
        declared: Front-matter mapping exactly as parsed, before defaults
        html: Rendered body, filled in by the build
    """
    title: str
    date: date_type
    slug: str
    path: str
    body: str = ""
    tags: tuple[str, ...] = ()
    lastmod: date_type | None = None
    draft: bool = False
    summary: str | None = None
    images: tuple[str, ...] = ()
    authors: tuple[str, ...] = ()
    layout: str | None = None
    canonical_url: str | None = None
    source_path: Path | None = None
    reading_time: ReadingTime | None = None
    toc: list[TocHeading] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)
    declared: dict[str, Any] = field(default_factory=dict)
    html: str = ""

    def front_matter(self) -> dict[str, Any]:
        """Return the front matter as the author declared it.

        Defaults filled in on the typed attributes (``authors``, ``layout``,
        ``draft``) are not part of the result.
        """
        return copy.deepcopy(self.declared)
