"""Output rendering: HTML pages, feeds and JSON indexes."""

from .feeds import write_robots, write_rss, write_sitemap, write_tag_feeds
from .renderer import PageRenderer
from .search_index import write_search_index, write_tag_data

__all__ = [
    "PageRenderer",
    "write_robots",
    "write_rss",
    "write_search_index",
    "write_sitemap",
    "write_tag_data",
    "write_tag_feeds",
]
