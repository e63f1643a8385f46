"""Write per-page Markdown files and optional directory listings."""

from __future__ import annotations

import logging
import posixpath
import typing as typ
from collections import defaultdict

from llm_docs.parsers.link_rewriter import relativize_links, validate_links

if typ.TYPE_CHECKING:
    from pathlib import Path

    from llm_docs.config import GeneratorConfig
    from llm_docs.models import Page, ProcessedDocs

logger = logging.getLogger(__name__)

INDEX_FILENAME = "index.md"


def _has_content(page: Page) -> bool:
    return bool(page.content and page.content.strip())


def generate_markdown_files(docs: ProcessedDocs, config: GeneratorConfig) -> int:
    """Write every non-empty page to ``{output_dir}/markdown/{file_path}``.

    Returns
    -------
    int
        Number of files written. Pages with blank content are skipped.
    """
    markdown_dir = config.markdown_dir
    markdown_dir.mkdir(parents=True, exist_ok=True)

    written = 0
    for page in docs.pages.values():
        if not _has_content(page):
            logger.debug("Skipping empty page: %s", page.id)
            continue
        output_path = markdown_dir / page.file_path
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(page.content, encoding="utf-8")
        written += 1
        logger.debug("Generated: %s", page.file_path)
    return written


def directory_title(dir_name: str) -> str:
    """Return a heading for a directory listing (``api-reference`` → ``Api reference``)."""
    if not dir_name:
        return dir_name
    return dir_name[0].upper() + dir_name[1:].replace("-", " ")


def render_directory_index(dir_path: str, pages: typ.Iterable[Page]) -> str:
    """Return the ``index.md`` listing for the pages stored under ``dir_path``."""
    lines = [
        f"# {directory_title(posixpath.basename(dir_path))}",
        "",
        "## Pages in this section",
        "",
    ]
    for page in pages:
        relative_path = posixpath.relpath(page.file_path, dir_path)
        lines.append(f"- [{page.title}]({relative_path})")
        if page.description:
            lines.append(f"  {page.description}")
    lines.append("")
    return "\n".join(lines)


def generate_directory_indexes(docs: ProcessedDocs, markdown_dir: Path) -> int:
    """Write ``index.md`` listings for sub-directories that lack one.

    Only pages with content are listed, and a directory whose own
    ``index.md`` is already a documentation page is left untouched.

    Returns
    -------
    int
        Number of listings written.
    """
    grouped: dict[str, list[Page]] = defaultdict(list)
    for page in docs.pages.values():
        parent = posixpath.dirname(page.file_path)
        if parent and _has_content(page):
            grouped[parent].append(page)

    existing = {page.file_path for page in docs.pages.values() if _has_content(page)}
    written = 0
    for dir_path, pages in sorted(grouped.items()):
        if posixpath.join(dir_path, INDEX_FILENAME) in existing:
            continue
        output_path = markdown_dir / dir_path / INDEX_FILENAME
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(render_directory_index(dir_path, pages), encoding="utf-8")
        written += 1
        logger.debug("Generated directory index: %s", output_path)
    return written


def check_markdown_links(markdown_dir: Path, base_url: str) -> dict[str, list[str]]:
    """Return broken internal links per Markdown file under ``markdown_dir``.

    Links are expected in the absolute ``{base_url}/...md`` form written by
    the generator; each one must resolve to a file in the same tree.

    Returns
    -------
    dict[str, list[str]]
        Relative file path mapped to its broken link targets; files whose
        links all resolve are omitted.
    """
    files = sorted(path for path in markdown_dir.rglob("*.md") if path.is_file())
    available = {path.relative_to(markdown_dir).as_posix() for path in files}
    broken: dict[str, list[str]] = {}
    for path in files:
        relative = path.relative_to(markdown_dir).as_posix()
        content = relativize_links(path.read_text(encoding="utf-8"), base_url)
        result = validate_links(content, available, "/" + relative.removesuffix(".md"))
        if not result.valid:
            broken[relative] = result.broken_links
    return broken


__all__ = [
    "check_markdown_links",
    "directory_title",
    "generate_directory_indexes",
    "generate_markdown_files",
    "render_directory_index",
]
