"""
Tag indexing across the post collection.

Tags are keyed by their slug, so "Go" and "go" are the same tag.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Sequence

from .collection import published, sort_posts
from .slugger import slug
from .types import ContentEntry


def tag_counts(entries: Sequence[ContentEntry], include_drafts: bool = False) -> dict[str, int]:
    """Count published posts per tag slug.

    A post that lists the same tag twice is counted once for it.

    Returns:
        Mapping of tag slug to count, most used first, then alphabetical
    """
    counts: dict[str, int] = defaultdict(int)
    for entry in published(entries, include_drafts):
        for tag in {slug(tag) for tag in entry.tags} - {""}:
            counts[tag] += 1
    return dict(sorted(counts.items(), key=lambda item: (-item[1], item[0])))


def entries_by_tag(
    entries: Sequence[ContentEntry], include_drafts: bool = False
) -> dict[str, list[ContentEntry]]:
    """Group published posts by tag slug, each group newest first."""
    grouped: dict[str, list[ContentEntry]] = defaultdict(list)
    for entry in published(entries, include_drafts):
        for tag in dict.fromkeys(slug(tag) for tag in entry.tags):
            if not tag:
                continue
            grouped[tag].append(entry)
    return {tag: sort_posts(items) for tag, items in sorted(grouped.items())}
