"""Parse a sidebar navigation description into an ordered section tree.

The navigation description is a declarative YAML (or JSON) document mapping
sidebar names to item lists, mirroring Docusaurus ``sidebars.js``:

.. code-block:: yaml

    docs:
      - intro
      - type: doc
        id: guides/setup
        label: Setting up
      - type: category
        label: Advanced
        link: {type: doc, id: advanced/index}
        items: [advanced/tuning]
      - type: link
        label: GitHub
        href: https://github.com/acme/widget

Bare strings and ``doc`` items become pages, ``category`` items become nested
sections, and ``link`` items are dropped. Anything else is dropped with a
warning so one bad entry never fails the whole parse.

Example
-------
>>> from llm_docs.parsers.navigation import flatten_sections, parse_navigation
>>> sections = parse_navigation({"docs": ["intro", "guides/setup"]})
>>> [page.url_path for page in flatten_sections(sections)]
['/intro', '/guides/setup']
"""

from __future__ import annotations

import json
import logging
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from llm_docs.errors import NavigationError
from llm_docs.models import Page, Section
from llm_docs.sanitize import doc_id_to_title, format_section_label

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

INDEX_PAGE_ORDER = -1


def load_navigation(path: Path) -> dict[str, typ.Any]:
    """Load the navigation description stored at ``path``.

    Raises
    ------
    NavigationError
        If the file is missing, cannot be parsed, or is not a mapping.
    """
    if not path.exists():
        msg = f"Navigation description '{path}' not found."
        raise NavigationError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle)
    except (OSError, YAMLError) as exc:
        msg = f"Failed to load navigation description at {path}: {exc}"
        raise NavigationError(msg) from exc
    if not isinstance(loaded, dict):
        msg = f"Navigation description at {path} must be a mapping of sidebars."
        raise NavigationError(msg)
    return dict(loaded)


def parse_navigation_file(path: Path) -> list[Section]:
    """Load and parse the navigation description at ``path``."""
    return parse_navigation(load_navigation(path))


def parse_navigation(description: typ.Mapping[str, typ.Any]) -> list[Section]:
    """Build top-level sections from a loaded navigation mapping.

    Parameters
    ----------
    description : Mapping[str, Any]
        Sidebar names mapped to item lists. Entries whose value is not a list
        are ignored.

    Returns
    -------
    list[Section]
        One section per sidebar, ordered as declared.
    """
    sections: list[Section] = []
    for name, items in description.items():
        if isinstance(items, list):
            sections.append(_parse_section(str(name), items, 0, len(sections)))
    return sections


def _parse_section(
    name: str, items: list[typ.Any], depth: int, order: int
) -> Section:
    """Parse ``items`` into a section; pages and subsections ordered apart."""
    section = Section(name=name, label=format_section_label(name), depth=depth, order=order)
    for item in items:
        match _parse_item(item, name, depth, len(section.pages), len(section.subsections)):
            case Page() as page:
                section.pages.append(page)
            case Section() as subsection:
                section.subsections.append(subsection)
            case _:
                continue
    return section


def _parse_item(
    item: object, section_name: str, depth: int, page_order: int, subsection_order: int
) -> Page | Section | None:
    """Dispatch one sidebar item on its kind; ``None`` means "skip"."""
    if isinstance(item, str):
        return create_page(item, None, section_name, depth, page_order)
    if not isinstance(item, dict):
        logger.warning("Unknown sidebar item type: %r", item)
        return None

    match item.get("type"):
        case "doc" if item.get("id"):
            return create_page(
                str(item["id"]), item.get("label"), section_name, depth, page_order
            )
        case "category" if isinstance(item.get("items"), list) and item.get("label"):
            return _parse_category(item, depth, subsection_order)
        case "link":
            logger.debug(
                "Skipping external link: %s -> %s", item.get("label"), item.get("href")
            )
            return None
        case _:
            logger.warning("Unknown sidebar item type: %s", _describe(item))
            return None


def _parse_category(
    item: typ.Mapping[str, typ.Any], depth: int, order: int
) -> Section:
    """Turn a category item into a subsection with an optional index page."""
    label = str(item["label"])
    section = _parse_section(label, item["items"], depth + 1, order)
    link = item.get("link")
    if isinstance(link, dict) and link.get("type") == "doc" and link.get("id"):
        section.index_page = create_page(
            str(link["id"]), label, label, depth + 1, INDEX_PAGE_ORDER
        )
    return section


def _describe(item: typ.Mapping[str, typ.Any]) -> str:
    """Render ``item`` compactly for log messages."""
    try:
        return json.dumps(item, sort_keys=True, default=str)
    except (TypeError, ValueError):
        return repr(item)


def create_page(
    doc_id: str, label: str | None, section: str, depth: int, order: int
) -> Page:
    """Create a page whose URL and file paths derive from ``doc_id``.

    Examples
    --------
    >>> page = create_page("a/b", None, "docs", 0, 0)
    >>> (page.title, page.url_path, page.file_path)
    ('B', '/a/b', 'a/b.md')
    """
    relative_id = doc_id.lstrip("/")
    return Page(
        id=doc_id,
        title=label or doc_id_to_title(doc_id),
        url_path=f"/{relative_id}",
        file_path=f"{relative_id}.md",
        section=section,
        depth=depth,
        order=order,
    )


def flatten_sections(sections: typ.Iterable[Section]) -> list[Page]:
    """Return every page in canonical pre-order.

    Each section contributes its index page, then its own pages, then the
    pages of its subsections recursively.
    """
    pages: list[Page] = []

    def _traverse(section: Section) -> None:
        if section.index_page is not None:
            pages.append(section.index_page)
        pages.extend(section.pages)
        for subsection in section.subsections:
            _traverse(subsection)

    for section in sections:
        _traverse(section)
    return pages


def count_pages(sections: typ.Iterable[Section]) -> int:
    """Return the number of pages reachable from ``sections``."""
    return len(flatten_sections(sections))


__all__ = [
    "count_pages",
    "create_page",
    "flatten_sections",
    "load_navigation",
    "parse_navigation",
    "parse_navigation_file",
]
