"""Tests for Markdown rendering of post bodies."""

from blog_site.config import MarkdownConfig
from blog_site.core.entry import extract_toc
from blog_site.render.markdown import MarkdownRenderer


def test_heading_ids_match_entry_toc():
    body = (
        "## Intro\n\nText\n\n## Intro\n\n### Details `code`\n\n"
        "## Cost of $O(n)$ append\n\n"
        "## Generic Stack<T>\n\n"
        "## snake\\_case names\n"
    )
    html = MarkdownRenderer(MarkdownConfig()).render(body)

    for heading in extract_toc(body):
        assert f'id="{heading.url[1:]}"' in html

    assert 'id="cost-of-on-append"' in html
    assert 'id="generic-stackt"' in html
    assert "wzxhzdk" not in html


def test_renderer_is_reusable_across_documents():
    renderer = MarkdownRenderer(MarkdownConfig())

    first = renderer.render("## Intro\n")
    second = renderer.render("## Intro\n")

    assert 'id="intro"' in first
    assert 'id="intro"' in second
    assert 'id="intro-1"' not in second


def test_fenced_code_is_highlighted():
    html = MarkdownRenderer(MarkdownConfig()).render("```python\nprint('hi')\n```\n")

    assert 'class="highlight"' in html
    assert "print" in html


def test_inline_math_is_passed_through():
    html = MarkdownRenderer(MarkdownConfig()).render("Cost is $O(1)$ here.\n")

    assert '<span class="math math-inline">\\(O(1)\\)</span>' in html


def test_display_math_is_not_wrapped_in_paragraph():
    html = MarkdownRenderer(MarkdownConfig()).render("$$\na_1 + b_1\n$$\n")

    assert '<div class="math math-display">\\[a_1 + b_1\\]</div>' in html
    assert "<p><div" not in html


def test_math_is_html_escaped():
    html = MarkdownRenderer(MarkdownConfig()).render("Order: $a < b$\n")

    assert "\\(a &lt; b\\)" in html


def test_math_inside_code_is_left_alone():
    renderer = MarkdownRenderer(MarkdownConfig())

    inline = renderer.render("Use `$x$` literally.\n")
    fenced = renderer.render("```\n$x$\n```\n")

    assert "<code>$x$</code>" in inline
    assert "math-inline" not in inline
    assert "$x$" in fenced
    assert "math-inline" not in fenced


def test_currency_is_not_math():
    html = MarkdownRenderer(MarkdownConfig()).render("It costs $5 and $10.\n")

    assert "math" not in html
    assert "$5 and $10" in html


def test_math_can_be_disabled():
    html = MarkdownRenderer(MarkdownConfig(math=False)).render("Cost is $O(1)$ here.\n")

    assert "math-inline" not in html
    assert "$O(1)$" in html


def test_stylesheet_targets_highlight_class():
    css = MarkdownRenderer(MarkdownConfig()).stylesheet()

    assert ".highlight" in css


def test_math_in_indented_code_is_left_alone():
    html = MarkdownRenderer(MarkdownConfig()).render("Text\n\n    price := $a$ + 1\n")

    assert "$a$" in html
    assert "math-inline" not in html


def test_display_math_spanning_blank_lines():
    html = MarkdownRenderer(MarkdownConfig()).render("$$\na = 1\n\nb = 2\n$$\n\nAfter\n")

    assert '<div class="math math-display">\\[a = 1\n\nb = 2\\]</div>' in html
    assert "<p>After</p>" in html


def test_unclosed_display_math_stays_text():
    html = MarkdownRenderer(MarkdownConfig()).render("$$ not closed\n")

    assert "math-display" not in html
    assert "$$ not closed" in html
