"""Render ``llms-full.txt``: every page in one file, wrapped in ``<page>`` blocks."""

from __future__ import annotations

import typing as typ

from llm_docs._constants import LLMS_TXT

from .llms_txt import document_header, listed_pages

if typ.TYPE_CHECKING:
    from llm_docs.config import GeneratorConfig
    from llm_docs.models import Page, ProcessedDocs, Section


def generate_llms_full_txt(docs: ProcessedDocs, config: GeneratorConfig) -> str:
    """Return the full-text document for ``docs``.

    Pages follow the section traversal order (a section's index page, its own
    pages, then its subsections) and each is emitted as::

        <page>
        ---
        title: Setup
        description: Optional summary
        source_url:
          html: https://docs.example.com/guides/setup
          md: https://docs.example.com/guides/setup.md
        ---

        # Setup
        ...

        </page>
    """
    lines = document_header(config)
    lines.extend(
        [
            "> This file contains the complete documentation in a single file "
            "for LLM consumption.",
            f"> For a lightweight index, see {config.base_url}/{LLMS_TXT}",
            "> For individual markdown files, download "
            f"{config.base_url}/{config.archive_path.name}",
            "",
        ]
    )
    for section in docs.sections:
        _render_section(section, docs, lines, config)
    return "\n".join(lines)


def _render_section(
    section: Section, docs: ProcessedDocs, lines: list[str], config: GeneratorConfig
) -> None:
    for page in listed_pages(section, docs):
        lines.extend(page_block(page, config))
    for subsection in section.subsections:
        _render_section(subsection, docs, lines, config)


def page_block(page: Page, config: GeneratorConfig) -> list[str]:
    """Return the ``<page>`` block lines for a single page."""
    lines = ["<page>", "---", f"title: {page.title}"]
    if page.description:
        lines.append(f"description: {page.description}")
    lines.extend(
        [
            "source_url:",
            f"  html: {config.base_url}{page.url_path}",
            f"  md: {config.base_url}{page.url_path}.md",
            "---",
            "",
        ]
    )
    if page.content:
        lines.append(page.content.strip())
    lines.extend(["", "</page>", ""])
    return lines


__all__ = ["generate_llms_full_txt", "page_block"]
