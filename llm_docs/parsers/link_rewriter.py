"""Helpers for rewriting Markdown links to absolute ``.md`` URLs.

Every internal inline link ``[text](target)`` is rewritten to
``{base_url}{absolute-site-path}.md[#fragment]`` so the Markdown corpus links
to itself regardless of where a reader opened a page. External links, bare
anchors, ``mailto:``/``tel:``/``data:`` targets and images are left alone.

Example
-------
>>> from llm_docs.parsers.link_rewriter import transform_links
>>> transform_links("[Intro](../intro)", "https://x.io", "/guides/setup")
'[Intro](https://x.io/intro.md)'
"""

from __future__ import annotations

import posixpath
import re
import typing as typ
from urllib.parse import urlsplit

from llm_docs.models import LinkValidation
from llm_docs.sanitize import CODE_SPAN_PATTERN

if typ.TYPE_CHECKING:
    import collections.abc as cabc

# Images (``![alt](src)``) are excluded by the negative lookbehind.
INLINE_LINK_PATTERN = re.compile(r"(?<!!)\[([^\]]*)\]\(([^)]+)\)")
# Code spans are tried first, so link syntax inside code is never a link.
LINK_OR_CODE_PATTERN = re.compile(f"{CODE_SPAN_PATTERN.pattern}|{INLINE_LINK_PATTERN.pattern}")
EXTERNAL_PREFIXES = ("http://", "https://", "//")
PASSTHROUGH_PREFIXES = ("#", "mailto:", "tel:", "data:")
HTML_SUFFIX = ".html"
MARKDOWN_SUFFIX = ".md"


def _is_external(href: str) -> bool:
    return href.startswith(EXTERNAL_PREFIXES)


def _split_target(target: str) -> tuple[str, str]:
    """Split ``href "title"`` link targets into the href and the remainder."""
    href, separator, rest = target.strip().partition(" ")
    return href, f"{separator}{rest}"


def _iter_links(content: str) -> cabc.Iterator[re.Match[str]]:
    """Yield inline-link matches, skipping fenced blocks and inline code.

    Group 2 of each match is the link text and group 3 its target.
    """
    for match in LINK_OR_CODE_PATTERN.finditer(content):
        if match.group(1) is None:
            yield match


def _sub_links(replace: cabc.Callable[[str, str], str], content: str) -> str:
    """Apply ``replace(text, target)`` to every inline link outside code."""

    def _dispatch(match: re.Match[str]) -> str:
        if match.group(1) is not None:
            return match.group(0)
        return replace(match.group(2), match.group(3))

    return LINK_OR_CODE_PATTERN.sub(_dispatch, content)


def transform_links(content: str, base_url: str, current_url_path: str) -> str:
    """Rewrite every internal inline link in ``content``.

    Parameters
    ----------
    content : str
        Markdown text.
    base_url : str
        Absolute site URL without a trailing slash.
    current_url_path : str
        Site-absolute URL path of the page the links were found on; relative
        targets resolve against its directory.

    Returns
    -------
    str
        Markdown with internal links pointing at ``.md`` siblings. Fenced
        blocks and inline code are left byte-for-byte intact.
    """

    def _replace(text: str, target: str) -> str:
        href, title = _split_target(target)
        rewritten = transform_single_link(href, base_url, current_url_path)
        return f"[{text}]({rewritten}{title})"

    return _sub_links(_replace, content)


def transform_single_link(href: str, base_url: str, current_url_path: str) -> str:
    """Rewrite one link target; non-internal targets are returned unchanged.

    Examples
    --------
    >>> transform_single_link("/docs/intro/", "https://x.io/docs", "/setup")
    'https://x.io/docs/intro.md'
    >>> transform_single_link("mailto:team@x.io", "https://x.io", "/setup")
    'mailto:team@x.io'
    """
    if _is_external(href) or href.startswith(PASSTHROUGH_PREFIXES):
        return href

    clean_href = _strip_base_path(href, urlsplit(base_url).path.rstrip("/"))
    absolute_path = resolve_relative_url(clean_href, current_url_path)
    return f"{base_url}{to_markdown_path(absolute_path)}"


def _strip_base_path(href: str, base_path: str) -> str:
    """Remove a deployment sub-path that reappears in rendered anchors."""
    if not base_path or not href.startswith(base_path):
        return href
    remainder = href[len(base_path) :]
    if remainder and remainder[0] not in "/#?":
        return href
    return remainder or "/"


def resolve_relative_url(href: str, current_url_path: str) -> str:
    """Resolve ``href`` against the directory of ``current_url_path``.

    ``.`` and ``..`` segments are applied, ``..`` never climbs above the
    site root, and any ``#fragment`` is preserved.

    Examples
    --------
    >>> resolve_relative_url("./deep/page#anchor", "/guides/setup")
    '/guides/deep/page#anchor'
    >>> resolve_relative_url("../../intro", "/guides/setup")
    '/intro'
    """
    if href.startswith("/"):
        return href

    path_part, _, anchor = href.partition("#")
    current_dir = posixpath.dirname(current_url_path)
    segments = [*current_dir.split("/"), *path_part.split("/")]
    resolved: list[str] = []
    for segment in segments:
        if not segment or segment == ".":
            continue
        if segment == "..":
            if resolved:
                resolved.pop()
        else:
            resolved.append(segment)

    result = "/" + "/".join(resolved)
    if anchor:
        result = f"{result}#{anchor}"
    return result


def to_markdown_path(url_path: str) -> str:
    """Map a site path onto its Markdown sibling.

    Examples
    --------
    >>> to_markdown_path("/guides/setup.html#install")
    '/guides/setup.md#install'
    >>> to_markdown_path("/")
    '/index.md'
    >>> to_markdown_path("/files/report.pdf")
    '/files/report.md'
    """
    path_part, _, anchor = url_path.partition("#")
    clean_path = path_part.rstrip("/").removesuffix(HTML_SUFFIX)
    if clean_path in ("", "/"):
        clean_path = "/index"

    stem, extension = posixpath.splitext(clean_path)
    if not extension:
        clean_path = f"{clean_path}{MARKDOWN_SUFFIX}"
    elif extension != MARKDOWN_SUFFIX:
        clean_path = f"{stem}{MARKDOWN_SUFFIX}"

    if anchor:
        clean_path = f"{clean_path}#{anchor}"
    return clean_path


def relativize_links(content: str, base_url: str) -> str:
    """Turn links under ``base_url`` back into site-absolute paths.

    Examples
    --------
    >>> relativize_links("[a](https://x.io/docs/a.md#b)", "https://x.io/docs")
    '[a](/a.md#b)'
    """
    prefix = f"{base_url}/"

    def _replace(text: str, target: str) -> str:
        href, title = _split_target(target)
        if href.startswith(prefix):
            href = href[len(base_url) :]
        return f"[{text}]({href}{title})"

    return _sub_links(_replace, content)


def extract_internal_links(content: str) -> list[str]:
    """Return the targets of inline links that point inside the site."""
    links: list[str] = []
    for match in _iter_links(content):
        href, _ = _split_target(match.group(3))
        if _is_external(href) or href.startswith(("#", "mailto:")):
            continue
        links.append(href)
    return links


def validate_links(
    content: str, available_paths: typ.AbstractSet[str], current_path: str
) -> LinkValidation:
    """Report internal links in ``content`` that resolve to no known path.

    Parameters
    ----------
    content : str
        Markdown whose links should be checked.
    available_paths : AbstractSet[str]
        Known output paths; entries may carry or omit the leading slash and
        the ``.md`` extension.
    current_path : str
        URL path of the page ``content`` belongs to.

    Returns
    -------
    LinkValidation
        ``valid`` is True when no link is broken; ``broken_links`` keeps the
        original targets of links that did not resolve.
    """
    broken: list[str] = []
    for href in extract_internal_links(content):
        path_part = href.partition("#")[0]
        md_path = to_markdown_path(resolve_relative_url(path_part, current_path))
        without_ext = md_path.removesuffix(MARKDOWN_SUFFIX)
        variants = (
            md_path,
            without_ext,
            f"{without_ext}/index.md",
            f"{without_ext}.md",
        )
        if not any(
            variant in available_paths or variant.lstrip("/") in available_paths
            for variant in variants
        ):
            broken.append(href)
    return LinkValidation(valid=not broken, broken_links=broken)


__all__ = [
    "extract_internal_links",
    "relativize_links",
    "resolve_relative_url",
    "to_markdown_path",
    "transform_links",
    "transform_single_link",
    "validate_links",
]
