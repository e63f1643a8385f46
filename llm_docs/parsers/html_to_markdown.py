r"""Convert rendered Docusaurus pages into clean Markdown.

BeautifulSoup selects the article body and strips site chrome (breadcrumbs,
table of contents, pagination, edit links); a :class:`markdownify.MarkdownConverter`
subclass then renders the remaining DOM with rules tuned for documentation
output: fenced code blocks with language tags, length-safe inline code,
GitHub-style callouts for admonitions, and pipe tables.

Example
-------
>>> from llm_docs.parsers.html_to_markdown import convert_html_to_markdown
>>> page = convert_html_to_markdown(
...     "<article><h1>Setup</h1><p>Run <code>make</code>.</p></article>"
... )
>>> page.title
'Setup'
>>> print(page.content, end="")
# Setup
<BLANKLINE>
Run `make`.
"""

from __future__ import annotations

import re
import typing as typ

from bs4 import BeautifulSoup, NavigableString, Tag
from markdownify import ATX, BACKSLASH, MarkdownConverter

from llm_docs._constants import UNTITLED
from llm_docs.models import ConvertedPage
from llm_docs.sanitize import clean_markdown, strip_html_tags

CONTENT_FALLBACK_SELECTORS = (".markdown", ".theme-doc-markdown", "main")
REMOVED_SELECTORS = (
    "nav",
    "footer",
    "aside",
    ".theme-doc-breadcrumbs",
    ".theme-doc-toc-mobile",
    ".theme-doc-toc-desktop",
    ".theme-doc-footer",
    ".pagination-nav",
    ".theme-edit-this-page",
    ".theme-last-updated",
    "script",
    "style",
    ".hash-link",
    ".anchor",
    '[aria-hidden="true"]',
    ".admonition-heading",
    '[class*="admonitionHeading"]',
)

LANGUAGE_PATTERN = re.compile(r"language-(\w+)")
BREAK_PATTERN = re.compile(r"<br\s*/?>", re.IGNORECASE)
TAG_PATTERN = re.compile(r"<[^>]*>")
ENTITY_PATTERN = re.compile(r"&(lt|gt|amp|quot|#x27|#39);")
ENTITIES = {"lt": "<", "gt": ">", "amp": "&", "quot": '"', "#x27": "'", "#39": "'"}
BACKTICK_RUN_PATTERN = re.compile(r"`+")

TRAILING_SPACE_PATTERN = re.compile(r"[ \t]+$", re.MULTILINE)
FENCED_BLOCK_PATTERN = re.compile(r"(```[^\n`]*\n)(.*?)(\n```)", re.DOTALL)

# Checked in order; the first keyword found in the class string wins.
ADMONITION_TYPES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("warning", "caution"), "WARNING"),
    (("tip",), "TIP"),
    (("danger", "error"), "CAUTION"),
    (("info",), "NOTE"),
)


def _class_string(el: Tag) -> str:
    """Return the element's class attribute as a single space-joined string."""
    classes = el.get("class") or []
    if isinstance(classes, str):
        return classes
    return " ".join(classes)


def _is_admonition(el: Tag) -> bool:
    """Return True for Docusaurus admonition/alert containers."""
    tokens = _class_string(el).split()
    return any(
        token in {"admonition", "alert"} or token.startswith("theme-admonition")
        for token in tokens
    )


def admonition_type(class_name: str) -> str:
    """Map an admonition class string onto a callout keyword.

    Examples
    --------
    >>> admonition_type("theme-admonition theme-admonition-tip alert alert--success")
    'TIP'
    >>> admonition_type("alert alert--secondary")
    'NOTE'
    """
    for keywords, kind in ADMONITION_TYPES:
        if any(keyword in class_name for keyword in keywords):
            return kind
    return "NOTE"


def _decode_entities(text: str) -> str:
    return ENTITY_PATTERN.sub(lambda match: ENTITIES[match.group(1)], text)


def _code_language(code: Tag, pre: Tag) -> str:
    """Read ``language-xxx`` from ``<code>``, falling back to ``<pre>``."""
    for element in (code, pre):
        match = LANGUAGE_PATTERN.search(_class_string(element))
        if match:
            return match.group(1)
    return ""


def _sole_code_child(pre: Tag) -> Tag | None:
    """Return the ``<code>`` child when it is the only meaningful child."""
    children = [
        child
        for child in pre.children
        if not (isinstance(child, NavigableString) and not child.strip())
    ]
    if len(children) == 1 and isinstance(children[0], Tag) and children[0].name == "code":
        return children[0]
    return None


def _is_header_row(row: Tag) -> bool:
    """Return True for rows inside ``<thead>`` or a leading all-``<th>`` row."""
    parent = row.parent
    if parent is not None and parent.name == "thead":
        return True
    table = row.find_parent("table")
    if table is None or table.find("thead") is not None:
        return False
    cells = row.find_all(["th", "td"], recursive=False)
    first_row = table.find("tr")
    return row is first_row and bool(cells) and all(cell.name == "th" for cell in cells)


class DocsMarkdownConverter(MarkdownConverter):
    """Markdownify converter with rules for Docusaurus article markup."""

    def __init__(self, **options: typ.Any) -> None:
        defaults: dict[str, typ.Any] = {
            "heading_style": ATX,
            "bullets": "-",
            "autolinks": False,
            "newline_style": BACKSLASH,
        }
        defaults.update(options)
        super().__init__(**defaults)

    def convert_pre(self, el: Tag, text: str, parent_tags: set[str]) -> str:
        code = _sole_code_child(el)
        if code is None:
            return super().convert_pre(el, text, parent_tags)
        language = _code_language(code, el)
        # Prism renders each line as a span terminated by <br>.
        source = BREAK_PATTERN.sub("\n", code.decode_contents())
        source = _decode_entities(TAG_PATTERN.sub("", source)).strip("\n").rstrip()
        return f"\n```{language}\n{source}\n```\n"

    def convert_code(self, el: Tag, text: str, parent_tags: set[str]) -> str:
        if "pre" in parent_tags:
            return text
        if not text.strip():
            return ""
        longest = max((len(run) for run in BACKTICK_RUN_PATTERN.findall(text)), default=0)
        fence = "`" * (longest + 1)
        return f"{fence}{text}{fence}"

    def convert_div(self, el: Tag, text: str, parent_tags: set[str]) -> str:
        if not _is_admonition(el):
            if "_inline" in parent_tags:
                return f" {text.strip()} "
            body = text.strip()
            return f"\n\n{body}\n\n" if body else ""
        kind = admonition_type(_class_string(el))
        quoted = "\n".join(f"> {line}" for line in text.strip().split("\n"))
        return f"\n\n> [!{kind}]\n{quoted}\n\n"

    def convert_th(self, el: Tag, text: str, parent_tags: set[str]) -> str:
        cell = text.replace("\n", " ").strip()
        return f" {cell} |"

    convert_td = convert_th

    def convert_tr(self, el: Tag, text: str, parent_tags: set[str]) -> str:
        cells_text = text.strip("\n")
        row = f"|{cells_text}\n"
        if _is_header_row(el):
            cells = el.find_all(["th", "td"], recursive=False)
            row += "|" + " --- |" * len(cells) + "\n"
        return row

    def convert_nav(self, el: Tag, text: str, parent_tags: set[str]) -> str:
        return ""

    convert_footer = convert_nav
    convert_aside = convert_nav


def extract_title(soup: BeautifulSoup) -> str:
    """Return the page title, trying headings before metadata.

    Order: first ``<h1>`` inside ``<article>``, first ``<h1>`` anywhere,
    ``og:title``, then the ``<title>`` text before any ``|`` separator.
    Falls back to ``"Untitled"``.
    """
    candidates: list[typ.Callable[[], str | None]] = [
        lambda: _element_text(soup.select_one("article h1")),
        lambda: _element_text(soup.find("h1")),
        lambda: _meta_content(soup, property="og:title"),
        lambda: (soup.title.get_text() if soup.title else "").split("|")[0],
    ]
    for candidate in candidates:
        title = (candidate() or "").strip()
        if title:
            return title
    return UNTITLED


def extract_description(soup: BeautifulSoup) -> str | None:
    """Return ``meta[name=description]`` or ``og:description`` content."""
    for value in (
        _meta_content(soup, name="description"),
        _meta_content(soup, property="og:description"),
    ):
        description = (value or "").strip()
        if description:
            return description
    return None


def _element_text(element: Tag | None) -> str | None:
    return element.get_text() if element is not None else None


def _meta_content(soup: BeautifulSoup, **attrs: str) -> str | None:
    meta = soup.find("meta", attrs=attrs)
    if not isinstance(meta, Tag):
        return None
    content = meta.get("content")
    return content if isinstance(content, str) else None


def _select_content(soup: BeautifulSoup) -> Tag | None:
    """Return ``<article>`` or the first fallback content container."""
    article = soup.find("article")
    if isinstance(article, Tag):
        return article
    for selector in CONTENT_FALLBACK_SELECTORS:
        element = soup.select_one(selector)
        if element is not None:
            return element
    return None


def _tighten_fence(match: re.Match[str]) -> str:
    """Drop blank lines directly inside a fenced block's delimiters."""
    opening, body, closing = match.groups()
    return opening + body.strip("\n") + closing


def cleanup_markdown(content: str) -> str:
    """Normalize blank lines and trailing whitespace in converted Markdown."""
    cleaned = clean_markdown(TRAILING_SPACE_PATTERN.sub("", content))
    return FENCED_BLOCK_PATTERN.sub(_tighten_fence, cleaned) + "\n"


def convert_html_to_markdown(html: str, strip_html: bool = True) -> ConvertedPage:  # noqa: FBT001, FBT002
    """Convert one rendered HTML document into Markdown plus metadata.

    Parameters
    ----------
    html : str
        Full HTML document as written by the static-site generator.
    strip_html : bool, optional
        Remove HTML tags left outside code spans after conversion. Defaults
        to ``True``.

    Returns
    -------
    ConvertedPage
        Markdown headed by ``# {title}``, the extracted title, and the meta
        description when present. Documents without a content container
        produce an empty body.
    """
    soup = BeautifulSoup(html or "", "html.parser")
    title = extract_title(soup)
    description = extract_description(soup)

    content_element = _select_content(soup)
    if content_element is None:
        return ConvertedPage(content="", title=title, description=description)

    for element in content_element.select(", ".join(REMOVED_SELECTORS)):
        element.extract()

    first_heading = content_element.find("h1")
    if isinstance(first_heading, Tag) and first_heading.get_text().strip() == title:
        first_heading.extract()

    body = DocsMarkdownConverter().convert(content_element.decode_contents())
    body = cleanup_markdown(body)
    if strip_html:
        body = strip_html_tags(body)

    content = f"# {title}\n\n{body}" if title else body
    content = content.strip()
    return ConvertedPage(
        content=f"{content}\n" if content else "",
        title=title,
        description=description,
    )


__all__ = [
    "DocsMarkdownConverter",
    "admonition_type",
    "cleanup_markdown",
    "convert_html_to_markdown",
    "extract_description",
    "extract_title",
]
