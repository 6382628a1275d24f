"""
Blog Site - static site builder for a Markdown/MDX blog.

This package turns posts with YAML front matter into a static website:
pages, tag indexes, a search index, RSS feeds and a sitemap, all
parametrised by one site metadata record.

Main entry point is the CLI via `blog-site build` command.

Example:
    $ blog-site build -c config.yaml -o public/
"""

__all__ = [
    "__version__",
    "SiteMetadata",
    "load_site_metadata",
    "load_collection",
    "run_build",
]
__version__ = "0.1.0"

from .config import SiteMetadata, load_site_metadata
from .core.collection import load_collection
from .runner import run_build
