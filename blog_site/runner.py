"""
Build orchestration for the static site.

This module coordinates the entire workflow:
1. Load the site metadata record (once per build)
2. Load and parse every post
3. Render post bodies from Markdown to HTML
4. Write HTML pages
5. Write tag data, search index, feeds, sitemap and robots.txt
6. Copy static assets

Supports both progress bar and quiet modes.
"""

from __future__ import annotations

import logging
import shutil
import uuid
from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TaskProgressColumn,
    TextColumn,
)

from .config import AppConfig, SiteMetadata, load_site_metadata
from .core.collection import load_collection, published
from .core.types import ContentEntry
from .logging_utils import close_logging, log_event, setup_logging
from .output.feeds import write_robots, write_rss, write_sitemap, write_tag_feeds
from .output.renderer import PageRenderer
from .output.search_index import write_search_index, write_tag_data
from .render.markdown import MarkdownRenderer


STAGES = 6


@dataclass
class BuildResult:
    """Summary of a finished build.

    Attributes:
        output_dir: Root directory of the generated site
        build_id: Id stamped on every log record of this build
        total: Number of posts found
        published: Number of posts rendered
        drafts_skipped: Number of draft posts left out
        files: Every file written by the build (static assets excluded)
    """
    output_dir: Path
    build_id: str = ""
    total: int = 0
    published: int = 0
    drafts_skipped: int = 0
    files: list[Path] = field(default_factory=list)


def run_build(
    cfg: AppConfig,
    output_dir: Path | None = None,
    show_progress: bool = True,
    console: Console | None = None,
) -> BuildResult:
    """Run the complete site build.

    Args:
        cfg: Build configuration
        output_dir: Override for ``cfg.output.output_dir``
        show_progress: Whether to display progress bars
        console: Rich console for output (creates default if None)

    Returns:
        BuildResult describing what was written
    """
    output_dir = output_dir or Path(cfg.output.output_dir)
    build_id = uuid.uuid4().hex[:12]
    logger = setup_logging(cfg.logging, Path(cfg.logging.directory), build_id)
    console = console or Console()
    try:
        if not show_progress:
            return _build(cfg, output_dir, build_id, logger)

        progress = Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
        )
        with progress:
            return _build(cfg, output_dir, build_id, logger, progress)
    finally:
        close_logging(logger)


def _build(
    cfg: AppConfig,
    output_dir: Path,
    build_id: str,
    logger: logging.Logger,
    progress: Progress | None = None,
) -> BuildResult:
    stage_task = progress.add_task("Stages", total=STAGES) if progress else None
    include_drafts = cfg.content.include_drafts

    log_event(
        logger,
        "Build start",
        event="build_start",
        content_dir=cfg.content.content_dir,
        output_dir=str(output_dir),
        include_drafts=include_drafts,
    )

    site = load_site_metadata(cfg.content.metadata_path)
    _advance(progress, stage_task)

    entries = load_collection(cfg.content)
    posts = published(entries, include_drafts)
    result = BuildResult(
        output_dir=output_dir,
        build_id=build_id,
        total=len(entries),
        published=len(posts),
        drafts_skipped=len(entries) - len(posts),
    )
    log_event(
        logger,
        "Entries loaded",
        event="entries_loaded",
        total=result.total,
        published=result.published,
        drafts_skipped=result.drafts_skipped,
    )
    _advance(progress, stage_task)

    render_task = progress.add_task("Render Markdown", total=len(posts)) if progress else None
    markdown = MarkdownRenderer(cfg.markdown)
    _render_bodies(posts, markdown, logger, progress, render_task)
    _advance(progress, stage_task)

    output_dir.mkdir(parents=True, exist_ok=True)
    pages = PageRenderer(site, output_dir, cfg.output, include_drafts)
    result.files.extend(pages.render_all(posts))
    _advance(progress, stage_task)

    result.files.extend(_write_indexes(posts, site, output_dir, cfg, markdown))
    _advance(progress, stage_task)

    _copy_static(Path(cfg.content.static_dir), output_dir, logger)
    _advance(progress, stage_task)

    log_event(
        logger,
        "Build complete",
        event="build_complete",
        output_dir=str(output_dir),
        files=len(result.files),
        published=result.published,
    )
    return result


def _render_bodies(
    posts: list[ContentEntry],
    markdown: MarkdownRenderer,
    logger: logging.Logger,
    progress: Progress | None = None,
    task_id: TaskID | None = None,
) -> None:
    for post in posts:
        post.html = markdown.render(post.body)
        logger.debug("Rendered %s", post.slug)
        _advance(progress, task_id)


def _write_indexes(
    posts: list[ContentEntry],
    site: SiteMetadata,
    output_dir: Path,
    cfg: AppConfig,
    markdown: MarkdownRenderer,
) -> list[Path]:
    """Write every non-HTML artifact derived from the collection."""
    include_drafts = cfg.content.include_drafts
    written = [write_tag_data(posts, output_dir, cfg.output.tag_data_path, include_drafts)]

    search_path = write_search_index(posts, site, output_dir, include_drafts)
    if search_path is not None:
        written.append(search_path)

    if cfg.output.rss:
        written.append(
            write_rss(posts, site, output_dir, cfg.output.rss_path, include_drafts=include_drafts)
        )
    if cfg.output.tag_feeds:
        written.extend(
            write_tag_feeds(posts, site, output_dir, cfg.output.rss_path, include_drafts)
        )
    if cfg.output.sitemap:
        written.append(write_sitemap(posts, site, output_dir, include_drafts))
    if cfg.output.robots:
        written.append(write_robots(site, output_dir))

    css_path = output_dir / "static" / "css" / "pygments.css"
    css_path.parent.mkdir(parents=True, exist_ok=True)
    css_path.write_text(markdown.stylesheet(), encoding="utf-8")
    written.append(css_path)
    return written


def _copy_static(static_dir: Path, output_dir: Path, logger: logging.Logger) -> None:
    if not static_dir.is_dir():
        logger.debug("No static directory at %s", static_dir)
        return
    shutil.copytree(static_dir, output_dir / "static", dirs_exist_ok=True)
    log_event(logger, "Static assets copied", event="static_copied", source=str(static_dir))


def _advance(progress: Progress | None, task_id: TaskID | None) -> None:
    if progress is not None and task_id is not None:
        progress.advance(task_id, 1)
