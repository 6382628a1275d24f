"""
Command-line interface for the blog site builder.

Uses Typer to provide commands to build the site and to inspect the
loaded configuration. Supports loading .env files for provider
identifiers (giscus repository and category ids).
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from .config import load_config, load_site_metadata
from .core.collection import load_collection
from .core.tags import tag_counts
from .runner import run_build

app = typer.Typer(add_completion=False)
console = Console()


@app.command()
def build(
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, dir_okay=False),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output directory."),
    metadata: Path | None = typer.Option(
        None, "--metadata", exists=True, dir_okay=False, help="Site metadata YAML file."
    ),
    drafts: bool | None = typer.Option(
        None, "--drafts/--no-drafts", help="Publish or skip draft posts."
    ),
    progress: bool = typer.Option(True, "--progress/--no-progress"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_format: str | None = typer.Option(
        None, "--log-format", help="Log file format: jsonl or plain."
    ),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Enable or disable file logging."
    ),
):
    """Build the static site.

    Reads posts from the content directory, renders every page, and writes
    feeds, sitemap, tag data and the search index.

    Args:
        config: Optional path to YAML build config file
        output: Directory for the generated site
        metadata: Site metadata file, overriding the config
        drafts: Whether to publish draft posts
        progress: Whether to show progress bar
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_format: Log file format (jsonl, plain)
        log_file: Enable/disable file logging
    """
    load_dotenv()

    cfg = load_config(str(config) if config else None)

    if output is not None:
        cfg.output.output_dir = str(output)
    if metadata is not None:
        cfg.content.metadata_path = str(metadata)
    if drafts is not None:
        cfg.content.include_drafts = drafts
    if log_level:
        cfg.logging.level = log_level
    if log_format:
        cfg.logging.format = log_format
    if log_file is not None:
        cfg.logging.file = log_file

    result = run_build(cfg, show_progress=progress, console=console)
    console.print(
        f"Site generated: {result.output_dir} "
        f"({result.published} posts, {result.drafts_skipped} drafts skipped)"
    )


@app.command("show-config")
def show_config(
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, dir_okay=False),
    metadata: Path | None = typer.Option(None, "--metadata", exists=True, dir_okay=False),
):
    """Print the site metadata as it will be used by the build."""
    load_dotenv()
    cfg = load_config(str(config) if config else None)
    path = str(metadata) if metadata else cfg.content.metadata_path
    site = load_site_metadata(path)
    typer.echo(json.dumps(site.to_dict(), indent=2, ensure_ascii=False))


@app.command()
def tags(
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, dir_okay=False),
    drafts: bool = typer.Option(False, "--drafts/--no-drafts"),
):
    """List tags with the number of posts using each."""
    cfg = load_config(str(config) if config else None)
    counts = tag_counts(load_collection(cfg.content), include_drafts=drafts)

    table = Table(title="Tags")
    table.add_column("Tag")
    table.add_column("Posts", justify="right")
    for tag, count in counts.items():
        table.add_row(tag, str(count))
    console.print(table)


if __name__ == "__main__":
    app()
