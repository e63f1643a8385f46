"""Render the ``llms.txt`` index document.

The index is a lightweight Markdown outline of the documentation: one heading
per section (``##`` for top-level sections, one level deeper per nesting
level, capped at ``######``) and one list item per page linking to its
Markdown file.

Example
-------
>>> from llm_docs.generators.llms_txt import generate_llms_txt
>>> text = generate_llms_txt(docs, config)  # doctest: +SKIP
>>> text.splitlines()[0]  # doctest: +SKIP
'# Acme Documentation'
"""

from __future__ import annotations

import typing as typ

from llm_docs._constants import DESCRIPTION_MAX_LENGTH
from llm_docs.sanitize import slugify

if typ.TYPE_CHECKING:
    from llm_docs.config import GeneratorConfig
    from llm_docs.models import Page, ProcessedDocs, Section

MAX_HEADING_LEVEL = 6
ELLIPSIS = "..."


def document_header(config: GeneratorConfig) -> list[str]:
    """Return the product heading and optional tagline shared by both documents."""
    lines = [f"# {config.product_name} Documentation", ""]
    if config.tagline:
        lines.extend([config.tagline, ""])
    return lines


def generate_llms_txt(docs: ProcessedDocs, config: GeneratorConfig) -> str:
    """Return the ``llms.txt`` document for ``docs``.

    Parameters
    ----------
    docs : ProcessedDocs
        Enriched section tree.
    config : GeneratorConfig
        Supplies the product name, tagline, base URL and whether page
        descriptions are appended.

    Returns
    -------
    str
        The index document, newline-joined.
    """
    lines = document_header(config)
    lines.extend(
        [
            "> [!TIP]",
            "> A complete archive of all documentation in Markdown format is "
            f"available at {config.base_url}/{config.archive_path.name}",
            "",
        ]
    )
    for section in docs.sections:
        lines.extend(_render_section(section, docs, config, 0))
    return "\n".join(lines)


def _render_section(
    section: Section, docs: ProcessedDocs, config: GeneratorConfig, depth: int
) -> list[str]:
    """Render ``section`` and its subsections as heading plus link lines."""
    indent = "  " * depth
    level = min(depth + 2, MAX_HEADING_LEVEL)
    lines = [f"{'#' * level} {section.label}", ""]

    lines.extend(
        format_page_link(page, config, indent) for page in listed_pages(section, docs)
    )
    for subsection in section.subsections:
        if lines[-1]:
            lines.append("")
        lines.extend(_render_section(subsection, docs, config, depth + 1))

    lines.append("")
    return lines


def listed_pages(section: Section, docs: ProcessedDocs) -> list[Page]:
    """Return the index page and own pages of ``section`` that were processed.

    Pages the build mapper skipped stay in the tree but are absent from
    ``docs.pages``; they are left out of every generated document.
    """
    candidates = [section.index_page, *section.pages] if section.index_page else section.pages
    return [page for page in candidates if page.id in docs.pages]


def truncate_description(description: str, limit: int = DESCRIPTION_MAX_LENGTH) -> str:
    """Shorten ``description`` to ``limit`` characters including the ellipsis.

    Examples
    --------
    >>> truncate_description("x" * 120)[-5:]
    'xx...'
    >>> len(truncate_description("x" * 120))
    100
    """
    if len(description) <= limit:
        return description
    return description[: limit - len(ELLIPSIS)] + ELLIPSIS


def format_page_link(page: Page, config: GeneratorConfig, indent: str = "") -> str:
    """Return the list item linking to ``page``'s Markdown file."""
    line = f"{indent}- [{page.title}]({config.base_url}/{page.file_path})"
    if config.include_descriptions and page.description:
        line += f": {truncate_description(page.description)}"
    return line


def generate_table_of_contents(docs: ProcessedDocs) -> list[str]:
    """Return a two-level table of contents linking to section anchors."""
    lines = ["## Table of Contents", ""]
    for section in docs.sections:
        lines.append(f"- [{section.label}](#{slugify(section.label)})")
        lines.extend(
            f"  - [{subsection.label}](#{slugify(subsection.label)})"
            for subsection in section.subsections
        )
    lines.append("")
    return lines


def generate_stats(docs: ProcessedDocs) -> list[str]:
    """Return a footer summarizing page and section counts."""
    return [
        "---",
        "",
        f"_This documentation contains {docs.total_pages} pages across "
        f"{len(docs.sections)} sections._",
        "",
    ]


__all__ = [
    "document_header",
    "format_page_link",
    "generate_llms_txt",
    "generate_stats",
    "generate_table_of_contents",
    "listed_pages",
    "truncate_description",
]
