"""Generators for the index, full-text, per-page Markdown and archive outputs."""

from .archive import calculate_directory_size, create_markdown_archive, create_markdown_tarball
from .llms_full import generate_llms_full_txt
from .llms_txt import generate_llms_txt, generate_stats, generate_table_of_contents
from .markdown_files import (
    check_markdown_links,
    generate_directory_indexes,
    generate_markdown_files,
)

__all__ = [
    "calculate_directory_size",
    "check_markdown_links",
    "create_markdown_archive",
    "create_markdown_tarball",
    "generate_directory_indexes",
    "generate_llms_full_txt",
    "generate_llms_txt",
    "generate_markdown_files",
    "generate_stats",
    "generate_table_of_contents",
]
