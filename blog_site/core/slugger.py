"""
GitHub-style slugs for tags and heading anchors.

The rules match the anchors GitHub generates for Markdown headings:
lowercase, drop punctuation and symbols, turn each space into a hyphen.
Tags use the same rules so that tag URLs are stable across builds.
"""

from __future__ import annotations

import re


_REMOVE_RE = re.compile(r"[^\w\- ]", re.UNICODE)


def slug(value: str) -> str:
    """Convert text to a GitHub-style slug.

    Examples:
        >>> slug("Hello World!")
        'hello-world'
        >>> slug("Go's slice internals")
        'gos-slice-internals'
    """
    return _REMOVE_RE.sub("", value.lower()).replace(" ", "-")


class Slugger:
    """Generates unique slugs within one document.

    Repeated values get a numeric suffix: "intro", "intro-1", "intro-2".
    """

    def __init__(self) -> None:
        self._occurrences: dict[str, int] = {}

    def slug(self, value: str) -> str:
        result = slug(value)
        original = result
        while result in self._occurrences:
            self._occurrences[original] += 1
            result = f"{original}-{self._occurrences[original]}"
        self._occurrences[result] = 0
        return result

    def reset(self) -> None:
        self._occurrences = {}
