"""Shared dataclasses used by the documentation conversion pipeline."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path  # noqa: TC003 - used for runtime type metadata


@dc.dataclass(slots=True)
class Page:
    """A single documentation unit.

    Attributes
    ----------
    id : str
        Slash-delimited logical identifier, unique across the tree.
    title : str
        Display title; derived from ``id`` until the HTML provides one.
    url_path : str
        Site-absolute URL path (leading slash, no extension).
    file_path : str
        Markdown file path relative to the ``markdown/`` output root.
    content : str
        Markdown body; empty until the build mapper enriches the page.
    section : str
        Name of the owning section.
    depth : int
        Nesting level, ``0`` for top-level sections.
    order : int
        Sibling-local position; ``-1`` marks a section index page.
    description : str or None
        Optional summary extracted from the page metadata.
    """

    id: str
    title: str
    url_path: str
    file_path: str
    content: str = ""
    section: str = ""
    depth: int = 0
    order: int = 0
    description: str | None = None


@dc.dataclass(slots=True)
class Section:
    """A named, ordered grouping of pages and nested subsections."""

    name: str
    label: str
    pages: list[Page] = dc.field(default_factory=list)
    subsections: list[Section] = dc.field(default_factory=list)
    depth: int = 0
    order: int = 0
    index_page: Page | None = None


@dc.dataclass(slots=True)
class ProcessedDocs:
    """Section tree plus the flat id → page map of enriched pages."""

    sections: list[Section]
    pages: dict[str, Page]
    total_pages: int


@dc.dataclass(slots=True)
class ConvertedPage:
    """Markdown and metadata extracted from one rendered HTML document."""

    content: str
    title: str
    description: str | None = None


@dc.dataclass(slots=True)
class LinkValidation:
    """Outcome of checking internal links against known output paths."""

    valid: bool
    broken_links: list[str]


@dc.dataclass(slots=True)
class GenerationResult:
    """Paths and counters reported at the end of a generation run."""

    llms_txt_path: Path
    llms_full_txt_path: Path
    markdown_archive_path: Path
    markdown_dir: Path
    files_generated: int
    sections_count: int
    pages_processed: int
    injected_files: int = 0


__all__ = [
    "ConvertedPage",
    "GenerationResult",
    "LinkValidation",
    "Page",
    "ProcessedDocs",
    "Section",
]
