"""
Front matter parsing for authored documents.

A document starts with a YAML block fenced by ``---`` lines, followed by
the Markdown body:

    ---
    title: Hello
    date: 2023-08-01
    tags: [go, slices]
    ---
    Body text...
"""

from __future__ import annotations

from typing import Any

import yaml


DELIMITER = "---"


class FrontMatterError(ValueError):
    """Raised when a document's front matter cannot be parsed."""


def split_front_matter(text: str) -> tuple[str | None, str]:
    """Split a document into its raw front-matter block and body.

    Returns:
        (raw_yaml, body). raw_yaml is None when the document has no
        front matter, in which case body is the whole document.

    Raises:
        FrontMatterError: If the opening delimiter is never closed
    """
    text = text.lstrip("\ufeff").replace("\r\n", "\n").replace("\r", "\n")
    lines = text.split("\n")
    if not lines or lines[0].strip() != DELIMITER:
        return None, text

    for i in range(1, len(lines)):
        if lines[i].strip() == DELIMITER:
            raw = "\n".join(lines[1:i])
            body = "\n".join(lines[i + 1 :])
            return raw, body.lstrip("\n")

    raise FrontMatterError("Front matter opened with '---' but never closed")


def parse_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Parse a document into (front matter mapping, body)."""
    raw, body = split_front_matter(text)
    if raw is None:
        return {}, body

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise FrontMatterError(f"Invalid YAML in front matter: {exc}") from exc

    if data is None:
        return {}, body
    if not isinstance(data, dict):
        raise FrontMatterError(
            f"Front matter must be a mapping, got {type(data).__name__}"
        )
    return data, body
