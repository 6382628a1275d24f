"""Markdown rendering of post bodies."""

from .markdown import MarkdownRenderer, pygments_css

__all__ = ["MarkdownRenderer", "pygments_css"]
