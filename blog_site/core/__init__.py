"""
Core content model and indexing.

This package contains the data types and the logic that turns authored
documents into entries: front matter, slugs, reading time, tags and
collection ordering. It has no knowledge of HTML output.
"""

from .types import ContentEntry, ReadingTime, TocHeading
from .frontmatter import FrontMatterError, parse_front_matter
from .slugger import Slugger, slug
from .reading_time import reading_time
from .entry import load_entry, structured_data
from .collection import all_core_content, load_collection, sort_posts
from .tags import entries_by_tag, tag_counts

__all__ = [
    "ContentEntry",
    "ReadingTime",
    "TocHeading",
    "FrontMatterError",
    "parse_front_matter",
    "Slugger",
    "slug",
    "reading_time",
    "load_entry",
    "structured_data",
    "all_core_content",
    "load_collection",
    "sort_posts",
    "entries_by_tag",
    "tag_counts",
]
