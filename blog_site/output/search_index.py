"""
JSON indexes consumed by the front end.

- The search documents file (kbar provider) lists every published post
  without its body, newest first.
- The tag data file maps each tag slug to its post count.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Sequence

from ..config import SiteMetadata
from ..core.collection import all_core_content, sort_posts
from ..core.tags import tag_counts
from ..core.types import ContentEntry


def write_search_index(
    entries: Sequence[ContentEntry],
    site: SiteMetadata,
    output_dir: Path,
    include_drafts: bool = False,
) -> Path | None:
    """Write the search documents for the kbar provider.

    Returns:
        Path to the written file, or ``None`` when the search provider
        does not use a documents file.
    """
    if site.search.provider != "kbar":
        return None
    documents_path = site.search.kbar_config.search_documents_path
    if not documents_path:
        return None

    documents = all_core_content(sort_posts(entries), include_drafts)
    return _write_json(output_dir / documents_path.lstrip("/"), documents)


def write_tag_data(
    entries: Sequence[ContentEntry],
    output_dir: Path,
    filename: str = "tag-data.json",
    include_drafts: bool = False,
) -> Path:
    return _write_json(output_dir / filename, tag_counts(entries, include_drafts))


def _write_json(target: Path, payload: Any) -> Path:
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(f"{json.dumps(payload, ensure_ascii=False, indent=2, default=str)}\n", encoding="utf-8")
    return target
