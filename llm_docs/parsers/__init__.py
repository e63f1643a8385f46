"""Parsers turning navigation descriptions and rendered HTML into Markdown."""

from .html_to_markdown import DocsMarkdownConverter, convert_html_to_markdown
from .link_rewriter import transform_links, validate_links
from .navigation import count_pages, flatten_sections, parse_navigation_file

__all__ = [
    "DocsMarkdownConverter",
    "convert_html_to_markdown",
    "count_pages",
    "flatten_sections",
    "parse_navigation_file",
    "transform_links",
    "validate_links",
]
