"""
Page rendering with Jinja2 templates.

Every page gets the site metadata record, which drives the shared header,
footer, analytics snippet, theme and (on post pages) the comments widget.
Pages are written as ``<route>/index.html`` so the output can be served
by any static file host.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..config import OutputConfig, SiteMetadata
from ..core.collection import adjacent, paginate, published, sort_posts
from ..core.entry import structured_data
from ..core.slugger import slug
from ..core.tags import entries_by_tag, tag_counts
from ..core.types import ContentEntry


TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


def build_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["tag_slug"] = slug
    env.filters["iso_date"] = lambda value: value.isoformat()
    env.filters["long_date"] = lambda value: f"{value:%B} {value.day}, {value.year}"
    return env


class PageRenderer:
    """Writes the HTML pages of the site.

    Attributes:
        site: Site metadata passed to every template
        output_dir: Root directory of the generated site
        cfg: Output configuration (pagination sizes)
        include_drafts: Whether draft posts are published
    """

    def __init__(
        self,
        site: SiteMetadata,
        output_dir: Path,
        cfg: OutputConfig,
        include_drafts: bool = False,
    ):
        self.site = site
        self.output_dir = output_dir
        self.cfg = cfg
        self.include_drafts = include_drafts
        self.env = build_environment()
        self.generated_at = datetime.now(timezone.utc)

    def render_all(self, entries: Sequence[ContentEntry]) -> list[Path]:
        """Render home, listing, post and tag pages for the collection."""
        posts = sort_posts(published(entries, self.include_drafts))
        written = [self.render_home(posts)]
        written.extend(self.render_blog_index(posts))
        for post in posts:
            written.append(self.render_post(post, posts))
        written.extend(self.render_tags(entries))
        return written

    def render_home(self, posts: Sequence[ContentEntry]) -> Path:
        return self._write(
            "",
            "index.html",
            page_title=self.site.title,
            posts=list(posts[: self.cfg.home_posts]),
            show_newsletter=bool(self.site.newsletter.provider),
        )

    def render_blog_index(self, posts: Sequence[ContentEntry]) -> list[Path]:
        pages = paginate(posts, self.cfg.posts_per_page)
        written = []
        for number, page_posts in enumerate(pages, start=1):
            route = "blog" if number == 1 else f"blog/page/{number}"
            written.append(
                self._write(
                    route,
                    "list.html",
                    page_title=f"Blog - {self.site.title}",
                    heading="All Posts",
                    posts=page_posts,
                    pagination=_pagination(number, len(pages), "blog"),
                )
            )
        return written

    def render_post(self, post: ContentEntry, posts: Sequence[ContentEntry]) -> Path:
        prev_post, next_post = adjacent(posts, post)
        return self._write(
            post.path,
            "post.html",
            page_title=f"{post.title} - {self.site.title}",
            post=post,
            prev_post=prev_post,
            next_post=next_post,
            canonical_url=post.canonical_url or f"{self.site.base_url}/{post.path}",
            json_ld=json.dumps(structured_data(post, self.site), ensure_ascii=False).replace("</", "<\\/"),
            giscus=self.site.comments.giscus_config if self.site.comments_enabled else None,
        )

    def render_tags(self, entries: Sequence[ContentEntry]) -> list[Path]:
        counts = tag_counts(entries, self.include_drafts)
        written = [
            self._write(
                "tags",
                "tags.html",
                page_title=f"Tags - {self.site.title}",
                tags=counts,
            )
        ]
        for tag, tag_posts in entries_by_tag(entries, self.include_drafts).items():
            written.append(
                self._write(
                    f"tags/{tag}",
                    "list.html",
                    page_title=f"{tag} - {self.site.title}",
                    heading=tag,
                    posts=tag_posts,
                    pagination=None,
                )
            )
        return written

    def _write(self, route: str, template_name: str, **context: Any) -> Path:
        template = self.env.get_template(template_name)
        html = template.render(
            site=self.site,
            route=route,
            generated_at=self.generated_at,
            **context,
        )
        target = self.output_dir / route / "index.html" if route else self.output_dir / "index.html"
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(html, encoding="utf-8")
        return target


def _pagination(current: int, total: int, base: str) -> dict[str, Any]:
    def page_url(number: int) -> str:
        return f"/{base}/" if number == 1 else f"/{base}/page/{number}/"

    return {
        "current": current,
        "total": total,
        "prev_url": page_url(current - 1) if current > 1 else None,
        "next_url": page_url(current + 1) if current < total else None,
    }

