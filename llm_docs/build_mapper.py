"""Map navigation pages onto rendered HTML and enrich them with Markdown.

This module is the pipeline's integration point. Given the rendered site
directory and the section tree from :mod:`llm_docs.parsers.navigation`, it
locates each page's HTML artifact (exact lookups first, then a filename
suffix scan), converts it with
:func:`~llm_docs.parsers.html_to_markdown.convert_html_to_markdown`, rewrites
its links with :func:`~llm_docs.parsers.link_rewriter.transform_links`, and
returns a :class:`~llm_docs.models.ProcessedDocs` whose tree and flat page
map agree.

Pages without a matching artifact, or whose artifact cannot be read or
converted, are logged and skipped; the run continues.

Example
-------
>>> from llm_docs.build_mapper import process_build
>>> from llm_docs.parsers.navigation import parse_navigation_file
>>> sections = parse_navigation_file(config.sidebar_path)  # doctest: +SKIP
>>> docs = process_build(config, sections)  # doctest: +SKIP
>>> docs.total_pages  # doctest: +SKIP
42

When no navigation description exists, :func:`discover_pages_from_build`
synthesizes one page per HTML artifact instead.
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

from llm_docs._constants import IGNORED_BUILD_DIRS, IGNORED_HTML_FILES, UNTITLED
from llm_docs.models import ConvertedPage, Page, ProcessedDocs, Section
from llm_docs.parsers.html_to_markdown import convert_html_to_markdown
from llm_docs.parsers.link_rewriter import transform_links
from llm_docs.parsers.navigation import flatten_sections

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from llm_docs.config import GeneratorConfig

logger = logging.getLogger(__name__)

DISCOVERED_SECTION_NAME = "docs"
DISCOVERED_SECTION_LABEL = "Documentation"


def find_html_files(build_dir: Path) -> list[Path]:
    """Return rendered HTML files under ``build_dir`` in a stable order.

    ``404.html`` pages and anything below a ``search/`` or ``assets/``
    directory are excluded.
    """
    files: list[Path] = []
    for path in sorted(build_dir.rglob("*.html")):
        if not path.is_file() or path.name in IGNORED_HTML_FILES:
            continue
        relative_dirs = path.relative_to(build_dir).parts[:-1]
        if IGNORED_BUILD_DIRS.intersection(relative_dirs):
            continue
        files.append(path)
    return files


def _relative_url_path(html_file: Path, build_dir: Path) -> str:
    """Return the POSIX path of ``html_file`` relative to the build root."""
    return html_file.relative_to(build_dir).as_posix()


def build_html_mapping(html_files: cabc.Iterable[Path], build_dir: Path) -> dict[str, Path]:
    """Index HTML files by normalized URL path.

    Each file is registered with and without its leading slash; ``index``
    files register under their directory path (``/`` for the site root).

    Examples
    --------
    >>> root = Path("/site")
    >>> mapping = build_html_mapping([root / "guides" / "index.html"], root)
    >>> sorted(mapping)
    ['/guides', 'guides']
    """
    mapping: dict[str, Path] = {}
    for html_file in html_files:
        url_path = _relative_url_path(html_file, build_dir).removesuffix(".html")
        if url_path.endswith("/index"):
            url_path = url_path.removesuffix("/index") or "/"
        elif url_path == "index":
            url_path = "/"
        if not url_path.startswith("/"):
            url_path = f"/{url_path}"
        mapping[url_path] = html_file
        mapping[url_path[1:]] = html_file
    return mapping


def find_html_for_page(page: Page, html_map: typ.Mapping[str, Path]) -> Path | None:
    """Return the HTML artifact for ``page`` or ``None`` when nothing matches.

    Exact candidates are tried first (URL path, URL path without the leading
    slash, the id, the id with a leading slash, the ``/index`` variants of
    both, then the URL path with a trailing ``/index`` collapsed the way
    :func:`build_html_mapping` collapses it). Failing that, the first mapped
    path ending with the id's last segment wins.
    """
    candidates = (
        page.url_path,
        page.url_path[1:],
        page.id,
        f"/{page.id}",
        f"{page.url_path}/index",
        f"{page.id}/index",
        page.url_path.removesuffix("/index") or "/",
    )
    for candidate in candidates:
        if candidate in html_map:
            return html_map[candidate]

    filename = page.id.split("/")[-1]
    if not filename:
        return None
    for url_path, html_file in html_map.items():
        if url_path.endswith(filename):
            return html_file
    return None


def update_sections_with_content(
    sections: cabc.Iterable[Section], pages: typ.Mapping[str, Page]
) -> None:
    """Replace tree page references with their enriched entries from ``pages``."""
    for section in sections:
        section.pages = [pages.get(page.id, page) for page in section.pages]
        if section.index_page is not None:
            section.index_page = pages.get(section.index_page.id, section.index_page)
        update_sections_with_content(section.subsections, pages)


def _convert_file(html_file: Path, url_path: str, config: GeneratorConfig) -> ConvertedPage:
    """Read, convert and link-rewrite a single HTML artifact."""
    html = html_file.read_text(encoding="utf-8")
    converted = convert_html_to_markdown(html, config.strip_html)
    converted.content = transform_links(converted.content, config.base_url, url_path)
    return converted


class BuildProcessor:
    """Enrich navigation pages with Markdown converted from the build output."""

    def __init__(self, config: GeneratorConfig) -> None:
        """Initialize the processor.

        Parameters
        ----------
        config : GeneratorConfig
            Resolved configuration; ``build_dir``, ``base_url`` and
            ``strip_html`` are used.
        """
        self.config = config

    def run(self, sections: list[Section]) -> ProcessedDocs:
        """Populate page content for ``sections`` and return the processed docs.

        Returns
        -------
        ProcessedDocs
            The (updated) section tree, the map of successfully enriched
            pages keyed by id, and their count.
        """
        all_pages = flatten_sections(sections)
        logger.info("Found %d pages in sidebar configuration", len(all_pages))

        html_files = find_html_files(self.config.build_dir)
        html_map = build_html_mapping(html_files, self.config.build_dir)
        logger.debug("Found %d HTML files in build directory", len(html_files))

        pages: dict[str, Page] = {}
        skipped = 0
        for page in all_pages:
            if self._enrich(page, html_map):
                pages[page.id] = page
            else:
                skipped += 1

        logger.info("Processed %d pages, skipped %d", len(pages), skipped)
        update_sections_with_content(sections, pages)
        return ProcessedDocs(sections=sections, pages=pages, total_pages=len(pages))

    def _enrich(self, page: Page, html_map: typ.Mapping[str, Path]) -> bool:
        """Convert the page's artifact into its content; False means skipped."""
        html_file = find_html_for_page(page, html_map)
        if html_file is None:
            logger.warning("Could not find HTML file for: %s", page.id)
            return False
        try:
            converted = _convert_file(html_file, page.url_path, self.config)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Failed to process %s: %s", page.id, exc)
            logger.debug("Conversion failure for %s", html_file, exc_info=True)
            return False

        untitled_heading = f"# {UNTITLED}\n"
        if converted.title and converted.title != UNTITLED:
            page.title = converted.title
        elif converted.content.startswith(untitled_heading):
            converted.content = f"# {page.title}\n" + converted.content.removeprefix(
                untitled_heading
            )
        page.content = converted.content
        page.description = converted.description or page.description
        logger.debug("Processed: %s -> %s", page.id, page.file_path)
        return True


def process_build(config: GeneratorConfig, sections: list[Section]) -> ProcessedDocs:
    """Enrich ``sections`` from ``config.build_dir``; see :class:`BuildProcessor`."""
    return BuildProcessor(config).run(sections)


def discover_pages_from_build(build_dir: Path, config: GeneratorConfig) -> list[Page]:
    """Create one page per HTML artifact when no navigation description exists.

    Ids, URL paths and file paths derive purely from each file's location
    relative to ``build_dir``; every page lands in the ``docs`` section.
    """
    pages: list[Page] = []
    for html_file in find_html_files(build_dir):
        url_path = "/" + _relative_url_path(html_file, build_dir).removesuffix(".html")
        try:
            converted = _convert_file(html_file, url_path, config)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Failed to process %s: %s", html_file, exc)
            logger.debug("Conversion failure for %s", html_file, exc_info=True)
            continue

        file_path = url_path.lstrip("/")
        if not file_path or file_path.endswith("/"):
            file_path += "index"
        pages.append(
            Page(
                id=url_path.lstrip("/") or "index",
                title=converted.title,
                description=converted.description,
                url_path=url_path,
                file_path=f"{file_path}.md",
                content=converted.content,
                section=DISCOVERED_SECTION_NAME,
                depth=0,
                order=len(pages),
            )
        )
    return pages


def build_discovered_docs(pages: list[Page]) -> ProcessedDocs:
    """Wrap discovered pages in a single flat ``docs`` section."""
    section = Section(
        name=DISCOVERED_SECTION_NAME,
        label=DISCOVERED_SECTION_LABEL,
        pages=pages,
        depth=0,
        order=0,
    )
    return ProcessedDocs(
        sections=[section],
        pages={page.id: page for page in pages},
        total_pages=len(pages),
    )


__all__ = [
    "BuildProcessor",
    "build_discovered_docs",
    "build_html_mapping",
    "discover_pages_from_build",
    "find_html_files",
    "find_html_for_page",
    "process_build",
    "update_sections_with_content",
]
