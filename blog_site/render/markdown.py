"""
Markdown to HTML rendering for post bodies.

Python-Markdown does the heavy lifting. On top of it this module:
- assigns GitHub-style ids to headings, matching ContentEntry.toc
- passes $...$ / $$...$$ math through untouched for client-side KaTeX
- exposes the Pygments stylesheet for highlighted code blocks

Math is recognised by Markdown processors, so code spans and code blocks
(fenced or indented) never see it.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as etree

import markdown
from markdown.blockprocessors import BlockProcessor
from markdown.extensions import Extension
from markdown.inlinepatterns import InlineProcessor
from markdown.treeprocessors import Treeprocessor
from markdown.util import ETX, HTML_PLACEHOLDER_RE, STX, AtomicString
from pygments.formatters import HtmlFormatter

from ..config import MarkdownConfig
from ..core.entry import heading_text
from ..core.slugger import Slugger


_HEADING_TAGS = {"h1", "h2", "h3", "h4", "h5", "h6"}
_ESCAPED_CHAR_RE = re.compile(f"{STX}([0-9]+){ETX}")
MATH_PATTERN = (
    r"(?<!\\)\$\$(?P<display>.+?)\$\$"
    r"|(?<![\\$])\$(?![\s$])(?P<inline>[^$\n]+?)(?<!\s)\$(?!\d)"
)


def _math_element(tag: str, source: str, display: bool) -> etree.Element:
    el = etree.Element(tag)
    if display:
        el.set("class", "math math-display")
        el.text = AtomicString(f"\\[{source}\\]")
    else:
        el.set("class", "math math-inline")
        el.text = AtomicString(f"\\({source}\\)")
    return el


def _is_math(el: etree.Element) -> bool:
    return "math" in el.get("class", "").split()


class MathInlineProcessor(InlineProcessor):
    """``$...$`` and ``$$...$$`` inside a paragraph."""

    def handleMatch(self, m: re.Match[str], data: str):
        if m.group("display") is not None:
            el = _math_element("span", m.group("display").strip(), display=True)
        else:
            el = _math_element("span", m.group("inline"), display=False)
        return el, m.start(0), m.end(0)


class MathBlockProcessor(BlockProcessor):
    """A block opening with ``$$``, possibly spanning blank lines until the closing ``$$``."""

    def test(self, parent: etree.Element, block: str) -> bool:
        return block.startswith("$$")

    def run(self, parent: etree.Element, blocks: list[str]) -> bool:
        for index, block in enumerate(blocks):
            end = block.find("$$", 2 if index == 0 else 0)
            if end != -1:
                break
        else:
            return False

        source = "\n\n".join([*blocks[:index], blocks[index][:end]])[2:].strip()
        rest = blocks[index][end + 2 :].lstrip("\n")
        del blocks[: index + 1]
        if rest.strip():
            blocks.insert(0, rest)
        parent.append(_math_element("div", source, display=True))
        return True


class MathExtension(Extension):
    """Keep TeX math intact for KaTeX in the browser."""

    def extendMarkdown(self, md: markdown.Markdown) -> None:
        # after code spans (190), before backslash escapes (180)
        md.inlinePatterns.register(MathInlineProcessor(MATH_PATTERN, md), "math", 185)
        # after indented code (80), before headings (70)
        md.parser.blockprocessors.register(MathBlockProcessor(md.parser), "math_block", 75)


class HeadingAnchorTreeprocessor(Treeprocessor):
    def run(self, root: etree.Element) -> None:
        slugger = Slugger()
        for el in root.iter():
            if el.tag not in _HEADING_TAGS or "id" in el.attrib:
                continue
            el.set("id", slugger.slug(heading_text(self.source_text(el))))

    def source_text(self, el: etree.Element) -> str:
        """Text of ``el`` as written: math, raw HTML and escapes restored."""
        parts = [el.text or ""]
        for child in el:
            if _is_math(child):
                parts.append(f"${(child.text or '')[2:-2]}$")
            else:
                parts.append(self.source_text(child))
            parts.append(child.tail or "")
        text = HTML_PLACEHOLDER_RE.sub(self._stashed_html, "".join(parts))
        return _ESCAPED_CHAR_RE.sub(lambda m: chr(int(m.group(1))), text)

    def _stashed_html(self, match: re.Match[str]) -> str:
        raw = self.md.htmlStash.rawHtmlBlocks[int(match.group(1))]
        return raw if isinstance(raw, str) else ""


class HeadingAnchorExtension(Extension):
    """Give every heading a GitHub-style id before the toc extension runs."""

    def extendMarkdown(self, md: markdown.Markdown) -> None:
        # toc runs at priority 5 and keeps ids that already exist
        md.treeprocessors.register(HeadingAnchorTreeprocessor(md), "heading_anchor", 6)


class MarkdownRenderer:
    """Render Markdown post bodies to HTML.

    One renderer is reused across posts; its state is reset per document.
    """

    def __init__(self, cfg: MarkdownConfig):
        self.cfg = cfg
        extensions: list[str | Extension] = [*cfg.extensions, HeadingAnchorExtension()]
        if cfg.math:
            extensions.append(MathExtension())
        self._md = markdown.Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {"css_class": cfg.highlight_css_class, "guess_lang": False},
                "toc": {"toc_depth": cfg.toc_depth},
            },
            output_format="html",
        )

    def render(self, body: str) -> str:
        try:
            return self._md.convert(body)
        finally:
            self._md.reset()

    def stylesheet(self) -> str:
        """CSS rules for highlighted code blocks."""
        return pygments_css(self.cfg.highlight_css_class)


def pygments_css(css_class: str, style: str = "default") -> str:
    return HtmlFormatter(style=style).get_style_defs(f".{css_class}")
