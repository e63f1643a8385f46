"""Tests for converting rendered Docusaurus pages into Markdown.

Besides string assertions, several tests render the produced Markdown back to
HTML with Python-Markdown and inspect it with BeautifulSoup, so the checks
describe what a Markdown reader will actually see.
"""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup
from markdown import Markdown

from llm_docs.parsers.html_to_markdown import (
    admonition_type,
    cleanup_markdown,
    convert_html_to_markdown,
    extract_title,
)
from llm_docs.sanitize import strip_html_tags


def _render(markdown_text: str) -> BeautifulSoup:
    """Render Markdown to HTML the way a downstream reader would."""
    html = Markdown(extensions=["fenced_code", "tables"]).convert(markdown_text)
    return BeautifulSoup(html, "html.parser")


def _article(body: str, *, head: str = "") -> str:
    return f"<html><head>{head}</head><body><article>{body}</article></body></html>"


def test_title_heading_is_not_duplicated() -> None:
    """The article ``<h1>`` becomes the only top-level heading."""
    page = convert_html_to_markdown(_article("<h1>Setup</h1><p>Install it.</p>"))
    assert page.title == "Setup"
    assert page.content == "# Setup\n\nInstall it.\n"
    assert page.content.count("# Setup") == 1


@pytest.mark.parametrize(
    ("html", "expected"),
    [
        (_article("<h1>From H1</h1>"), "From H1"),
        (
            '<html><head><meta property="og:title" content="From OG"></head>'
            "<body><main><p>x</p></main></body></html>",
            "From OG",
        ),
        (
            "<html><head><title>From Title | Acme Docs</title></head>"
            "<body><main><p>x</p></main></body></html>",
            "From Title",
        ),
        ("<html><body><main><p>x</p></main></body></html>", "Untitled"),
    ],
)
def test_title_fallback_chain(html: str, expected: str) -> None:
    """Headings win over og:title, which wins over ``<title>``."""
    assert extract_title(BeautifulSoup(html, "html.parser")) == expected


def test_description_from_meta() -> None:
    """``meta[name=description]`` is preferred over og:description."""
    head = (
        '<meta property="og:description" content="og text">'
        '<meta name="description" content="meta text">'
    )
    page = convert_html_to_markdown(_article("<h1>T</h1><p>x</p>", head=head))
    assert page.description == "meta text"


def test_missing_description_is_none() -> None:
    """Pages without description metadata report ``None``."""
    assert convert_html_to_markdown(_article("<h1>T</h1>")).description is None


def test_page_without_content_region_has_empty_body() -> None:
    """No article, markdown container or main means no content."""
    page = convert_html_to_markdown("<html><head><title>Bare</title></head><body><p>x</p></body></html>")
    assert page.content == ""
    assert page.title == "Bare"


def test_site_chrome_is_removed() -> None:
    """Breadcrumbs, TOC, pagination and edit links never reach the Markdown."""
    body = (
        '<nav class="theme-doc-breadcrumbs"><a href="/">Home</a></nav>'
        "<h1>Guide</h1>"
        '<h2 id="usage">Usage<a class="hash-link" href="#usage">#</a></h2>'
        "<p>Body text.</p>"
        '<div class="theme-doc-toc-mobile">On this page</div>'
        '<nav class="pagination-nav"><a href="/next">Next</a></nav>'
        '<footer class="theme-doc-footer"><a class="theme-edit-this-page" href="#">Edit</a></footer>'
        "<script>window.x = 1;</script>"
    )
    content = convert_html_to_markdown(_article(body)).content
    assert content == "# Guide\n\n## Usage\n\nBody text.\n"


def test_fenced_code_block_keeps_language_and_lines() -> None:
    """Code blocks become fences tagged with their language."""
    html = _article(
        '<h1>Go</h1><pre><code class="language-go">if x {\n  y()\n}</code></pre>'
    )
    content = convert_html_to_markdown(html).content
    assert "```go\nif x {\n  y()\n}\n```" in content

    code = _render(content).find("code")
    assert code is not None, "expected a rendered code block"
    assert code.get_text() == "if x {\n  y()\n}\n"
    assert "language-go" in (code.get("class") or [])


def test_prism_code_block_lines_and_language_from_pre() -> None:
    """Docusaurus puts the language on ``<pre>`` and splits lines with ``<br>``."""
    html = _article(
        "<h1>Prism</h1>"
        '<div class="codeBlockContainer"><pre class="prism-code language-python">'
        '<code class="codeBlockLines"><span class="token-line">'
        '<span class="token keyword">if</span> a &lt; b:<br></span>'
        '<span class="token-line">    pass<br></span></code></pre></div>'
    )
    content = convert_html_to_markdown(html).content
    assert "```python\nif a < b:\n    pass\n```" in content


def test_code_block_contents_survive_html_stripping() -> None:
    """Tag-like text inside fences is preserved when stripping HTML."""
    html = _article(
        '<h1>HTML</h1><pre><code class="language-html">&lt;div&gt;hi&lt;/div&gt;</code></pre>'
    )
    content = convert_html_to_markdown(html, strip_html=True).content
    assert "```html\n<div>hi</div>\n```" in content


@pytest.mark.parametrize(
    ("inner", "expected"),
    [
        ("npm install", "`npm install`"),
        ("a`b", "``a`b``"),
        ("x``y", "```x``y```"),
    ],
)
def test_inline_code_fence_outgrows_backtick_runs(inner: str, expected: str) -> None:
    """Inline code is fenced by one more backtick than its longest run."""
    html = _article(f"<h1>T</h1><p>Run <code>{inner}</code> now.</p>")
    assert f"Run {expected} now." in convert_html_to_markdown(html).content


def test_table_has_single_separator_after_header() -> None:
    """A header row plus one data row yields exactly two rows and a separator."""
    html = _article(
        "<h1>Table</h1><table><thead><tr><th>Name</th><th>Value</th></tr></thead>"
        "<tbody><tr><td>a</td><td>1</td></tr></tbody></table>"
    )
    content = convert_html_to_markdown(html).content
    rows = [line for line in content.splitlines() if line.startswith("|")]
    assert rows == ["| Name | Value |", "| --- | --- |", "| a | 1 |"]

    table = _render(content).find("table")
    assert table is not None, "expected the Markdown table to render"
    assert [th.get_text() for th in table.find_all("th")] == ["Name", "Value"]
    assert len(table.find_all("tr")) == 2


def test_table_without_thead_uses_leading_th_row() -> None:
    """A first row of ``<th>`` cells is treated as the header."""
    html = _article(
        "<h1>Table</h1><table><tr><th>A</th><th>B</th></tr><tr><td>1</td><td>2</td></tr></table>"
    )
    rows = [
        line for line in convert_html_to_markdown(html).content.splitlines() if line.startswith("|")
    ]
    assert rows == ["| A | B |", "| --- | --- |", "| 1 | 2 |"]


def test_docusaurus_admonition_becomes_callout() -> None:
    """Admonitions turn into GitHub callouts without their heading text."""
    html = _article(
        "<h1>Notes</h1>"
        '<div class="theme-admonition theme-admonition-tip admonition_xJq3 alert alert--success">'
        '<div class="admonitionHeading_Gvgb"><span class="admonitionIcon_Rf37"></span>tip</div>'
        '<div class="admonitionContent_BuS1"><p>Use the cache.</p><p>It is fast.</p></div></div>'
    )
    content = convert_html_to_markdown(html).content
    assert "> [!TIP]\n> Use the cache.\n>\n> It is fast." in content
    assert "tip\n" not in content, "the admonition heading text should be dropped"


@pytest.mark.parametrize(
    ("class_name", "expected"),
    [
        ("theme-admonition theme-admonition-warning alert alert--warning", "WARNING"),
        ("theme-admonition theme-admonition-caution alert alert--warning", "WARNING"),
        ("theme-admonition theme-admonition-danger alert alert--danger", "CAUTION"),
        ("admonition admonition-error", "CAUTION"),
        ("theme-admonition theme-admonition-info alert alert--info", "NOTE"),
        ("theme-admonition theme-admonition-note alert alert--secondary", "NOTE"),
        ("admonition tip warning", "WARNING"),
    ],
)
def test_admonition_type_priority(class_name: str, expected: str) -> None:
    """Warning/caution is checked before tip, danger/error and info."""
    assert admonition_type(class_name) == expected


def test_links_are_kept_inline() -> None:
    """Anchors become inline links; rewriting happens later."""
    html = _article('<h1>T</h1><p>See <a href="/docs/intro">the intro</a>.</p>')
    assert "See [the intro](/docs/intro)." in convert_html_to_markdown(html).content


def test_strip_html_removes_leftover_tags() -> None:
    """Raw HTML outside code is removed only when ``strip_html`` is set."""
    html = _article("<h1>T</h1><p>Press <kbd>Ctrl</kbd> <u>now</u>.</p>")
    stripped = convert_html_to_markdown(html, strip_html=True).content
    assert "<" not in stripped


def test_output_ends_with_single_newline() -> None:
    """Content is trimmed and terminated by exactly one newline."""
    content = convert_html_to_markdown(_article("<h1>T</h1><p>a</p><p></p><div></div>")).content
    assert content.endswith("a\n")
    assert not content.endswith("\n\n")


def test_html_stripping_is_idempotent_on_output() -> None:
    """Re-running the strip pass over converted output is a no-op."""
    html = _article(
        "<h1>T</h1><p>Mixed <code>&lt;b&gt;</code> text</p>"
        '<pre><code class="language-xml">&lt;a&gt;&lt;/a&gt;</code></pre>'
    )
    content = convert_html_to_markdown(html).content
    assert strip_html_tags(content) == content


def test_cleanup_markdown_tightens_fences() -> None:
    """Blank lines hugging a fence's delimiters are removed."""
    raw = "Intro   \n\n\n\n```sh\n\nls\n\n```\n\n\n"
    assert cleanup_markdown(raw) == "Intro\n\n```sh\nls\n```\n"


def test_malformed_html_does_not_raise() -> None:
    """Unclosed tags still produce a result."""
    page = convert_html_to_markdown("<article><h1>Broken<p>text <b>bold")
    assert page.title.startswith("Broken")
    assert page.content.endswith("\n")
